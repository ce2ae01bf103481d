# ipc_core/iam/management/commands/ensure_form_permissions.py

from django.core.management.base import BaseCommand
from django.db import transaction

from ipc_core.iam.access import DEPARTMENT_FORMS, ROLE_FORMS
from ipc_core.iam.constants import REVIEWER_ROLES
from ipc_core.iam.models import DepartmentPermission, RolePermission


class Command(BaseCommand):
    help = "Sync RolePermission / DepartmentPermission rows with the form access matrix (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--prune",
            action="store_true",
            help="Delete rows for pairs no longer present in the matrix.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        role_rows = 0
        for role, forms in ROLE_FORMS.items():
            approver = str(role) in REVIEWER_ROLES
            for form in forms:
                _, created = RolePermission.objects.update_or_create(
                    role=str(role),
                    form_type=str(form),
                    defaults={
                        "can_create": True,
                        "can_read": True,
                        "can_update": True,
                        "can_delete": approver,
                        "can_approve": approver,
                        "can_export": approver,
                    },
                )
                role_rows += 1 if created else 0

        dept_rows = 0
        for department, forms in DEPARTMENT_FORMS.items():
            for form in forms:
                _, created = DepartmentPermission.objects.update_or_create(
                    department=str(department),
                    form_type=str(form),
                    defaults={"can_create": True, "can_read": True, "can_update": True, "can_delete": False},
                )
                dept_rows += 1 if created else 0

        pruned = 0
        if options["prune"]:
            keep_roles = {(str(r), str(f)) for r, forms in ROLE_FORMS.items() for f in forms}
            keep_depts = {(str(d), str(f)) for d, forms in DEPARTMENT_FORMS.items() for f in forms}
            for row in RolePermission.objects.all():
                if (row.role, row.form_type) not in keep_roles:
                    row.delete()
                    pruned += 1
            for row in DepartmentPermission.objects.all():
                if (row.department, row.form_type) not in keep_depts:
                    row.delete()
                    pruned += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Form permissions ensured. New role rows: {role_rows}, new department rows: {dept_rows}, pruned: {pruned}"
            )
        )
