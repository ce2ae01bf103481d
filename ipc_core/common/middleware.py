from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

from ipc_core.common.api.exceptions import ensure_request_id


class RequestIdMiddleware(MiddlewareMixin):
    """
    Stamps every request with a request id and echoes it back.

    - Honors an incoming X-Request-Id header (proxies / frontend retries).
    - The same id shows up in error envelopes and log lines.
    """

    HEADER_META_KEY = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-Id"
    MAX_LENGTH = 64

    def process_request(self, request):
        incoming = (request.META.get(self.HEADER_META_KEY) or "").strip()
        if incoming and len(incoming) <= self.MAX_LENGTH:
            request.request_id = incoming
        else:
            ensure_request_id(request)
        return None

    def process_response(self, request, response):
        response[self.RESPONSE_HEADER] = ensure_request_id(request)
        return response
