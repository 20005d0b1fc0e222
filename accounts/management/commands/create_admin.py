"""Create an approved admin account from the command line."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from accounts.provisioning import AdminProvisioningError, create_admin_user

USAGE = "Usage: python manage.py create_admin <username> <password>"


class Command(BaseCommand):
    """Validate, hash and insert a single admin user.

    Exits with status 1 (via CommandError) on a wrong argument count, invalid
    lengths, an existing username, or a database error.
    """

    help = "Create an approved admin user. " + USAGE

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        # Counted by hand so a wrong count exits 1 with usage text, not argparse's 2.
        parser.add_argument("credentials", nargs="*", help="<username> <password>")

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        credentials: list[str] = options["credentials"]
        if len(credentials) != 2:
            raise CommandError(f"{USAGE}\nExample: python manage.py create_admin admin SecurePass123!")

        username, password = credentials
        try:
            admin = create_admin_user(username, password)
        except AdminProvisioningError as exc:
            raise CommandError(f"Error: {exc}") from exc

        self.stdout.write(self.style.SUCCESS("Admin user created successfully!"))
        self.stdout.write(f"Username: {admin.username}")
        self.stdout.write(f"Role: {admin.role}")
        self.stdout.write(f"Verification Status: {admin.verification_status}")
        return None
