# ipc_core/common/openapi.py
from __future__ import annotations

from drf_spectacular.openapi import AutoSchema
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter


class IPCAutoSchema(AutoSchema):
    """
    Global OpenAPI tweaks:

    - Documents the optional X-Request-Id header (echoed in responses and error envelopes)
    - Tags operations by app when a view doesn't set tags explicitly
    """

    REQUEST_ID_HEADER = OpenApiParameter(
        name="X-Request-Id",
        type=OpenApiTypes.STR,
        location=OpenApiParameter.HEADER,
        required=False,
        description="Optional client correlation id. Generated server-side when absent.",
    )

    APP_TAGS = {
        "ipc_core.iam": "IAM",
        "ipc_core.surveillance": "Surveillance",
        "ipc_core.bundles": "CLABSI Bundle",
        "ipc_core.analytics": "Analytics",
        "ipc_core.audit": "Audit",
    }

    def get_tags(self):
        tags = super().get_tags()
        module = self.view.__class__.__module__ or ""
        for prefix, tag in self.APP_TAGS.items():
            if module.startswith(prefix):
                return [tag]
        return tags

    def get_override_parameters(self):
        params = list(super().get_override_parameters() or [])
        if not any(p.name.lower() == "x-request-id" for p in params):
            params.append(self.REQUEST_ID_HEADER)
        return params
