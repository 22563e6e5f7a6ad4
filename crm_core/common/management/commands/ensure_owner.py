# backend/crm_core/common/management/commands/ensure_owner.py

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from crm_core.iam.models import AccountStatus, UserProfile, UserRole


class Command(BaseCommand):
    help = "Ensure the configured owner account has an active admin profile (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=None, help="Defaults to CRM_OWNER_USERNAME.")

    def handle(self, *args, **options):
        username = options["username"] or getattr(settings, "CRM_OWNER_USERNAME", "")
        if not username:
            raise CommandError("No owner username given and CRM_OWNER_USERNAME is not set.")

        User = get_user_model()
        user = User.objects.filter(**{User.USERNAME_FIELD: username}).first()
        if user is None:
            raise CommandError(f"User {username!r} does not exist.")

        profile, created = UserProfile.objects.get_or_create(user=user)
        changed = created
        if profile.role != UserRole.ADMIN or profile.status != AccountStatus.ACTIVE:
            profile.role = UserRole.ADMIN
            profile.status = AccountStatus.ACTIVE
            profile.save(update_fields=["role", "status", "updated_at"])
            changed = True

        msg = "promoted to admin" if changed else "already admin"
        self.stdout.write(self.style.SUCCESS(f"Owner {username}: {msg}"))
