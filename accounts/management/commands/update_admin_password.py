"""Reset the password of an existing account."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from accounts.provisioning import AdminProvisioningError, update_user_password

USAGE = "Usage: python manage.py update_admin_password <username> <password>"


class Command(BaseCommand):
    """Hash and store a new password for an existing user."""

    help = "Update the password of an existing user. " + USAGE

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("credentials", nargs="*", help="<username> <password>")

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        credentials: list[str] = options["credentials"]
        if len(credentials) != 2:
            raise CommandError(USAGE)

        username, password = credentials
        try:
            update_user_password(username, password)
        except AdminProvisioningError as exc:
            raise CommandError(f"Error: {exc}") from exc

        self.stdout.write(self.style.SUCCESS("Password updated successfully!"))
        self.stdout.write(f"Username: {username}")
        return None
