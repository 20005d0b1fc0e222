#!/usr/bin/env python3
"""Create an approved admin account.

Usage: scripts/create_admin.py <username> <password>

Exits 0 on success and 1 on a wrong argument count, invalid input, an
existing username, or a database error.
"""

from __future__ import annotations

import os
import sys

import django


def main(argv: list[str] | None = None) -> int:
    """Validate arguments, then hash and insert the admin user."""

    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: scripts/create_admin.py <username> <password>", file=sys.stderr)
        print("Example: scripts/create_admin.py admin SecurePass123!", file=sys.stderr)
        return 1

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "numora.settings")
    django.setup()

    from accounts.provisioning import AdminProvisioningError, create_admin_user

    username, password = args
    try:
        admin = create_admin_user(username, password)
    except AdminProvisioningError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Admin user created successfully!")
    print(f"Username: {admin.username}")
    print(f"Role: {admin.role}")
    print(f"Verification Status: {admin.verification_status}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
