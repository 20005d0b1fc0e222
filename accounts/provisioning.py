"""Admin account provisioning.

These helpers back the `create_admin` and `update_admin_password` management
commands and `scripts/create_admin.py`. Each operation validates its inputs,
checks the current state of the user table, and writes in one transaction.
Failures are reported through `AdminProvisioningError`; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from accounts.models import OnboardingStep, Role, TraderProfile, VerificationStatus

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH: Final[int] = 3
USERNAME_MAX_LENGTH: Final[int] = 50
PASSWORD_MIN_LENGTH: Final[int] = 6
PASSWORD_MAX_LENGTH: Final[int] = 100


class AdminProvisioningError(Exception):
    """Raised when an admin account cannot be created or updated."""


@dataclass(frozen=True, slots=True)
class ProvisionedAdmin:
    """Summary of a provisioned admin account."""

    username: str
    role: str
    verification_status: str


def validate_username(username: str) -> None:
    """Reject usernames outside the allowed length bounds."""

    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise AdminProvisioningError(
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )


def validate_password(password: str) -> None:
    """Reject passwords outside the allowed length bounds."""

    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise AdminProvisioningError(
            f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters"
        )


def create_admin_user(username: str, password: str) -> ProvisionedAdmin:
    """Create an approved admin account.

    Args:
        username: New account username (3-50 characters).
        password: Plain-text password (6-100 characters); stored hashed.

    Returns:
        ProvisionedAdmin summary for console output.

    Raises:
        AdminProvisioningError: On validation failure, an existing username,
            or a database error. Storage is left unchanged in every case.
    """

    validate_username(username)
    validate_password(password)

    UserModel = get_user_model()
    try:
        if UserModel.objects.filter(username=username).exists():
            raise AdminProvisioningError(f"User '{username}' already exists")

        with transaction.atomic():
            user = UserModel(username=username, email="", is_staff=True, is_superuser=True)
            user.set_password(password)
            user.save()

            profile, _ = TraderProfile.objects.get_or_create(user=user)
            profile.role = Role.ADMIN
            profile.verification_status = VerificationStatus.APPROVED
            profile.verified_at = timezone.now()
            profile.onboarding_step = OnboardingStep.COMPLETE
            profile.save()
    except DatabaseError as exc:
        logger.exception("Failed to create admin user %s", username)
        raise AdminProvisioningError(f"Database error while creating admin user: {exc}") from exc

    logger.info("Created admin user %s", username)
    return ProvisionedAdmin(
        username=user.get_username(),
        role=profile.role,
        verification_status=profile.verification_status,
    )


def update_user_password(username: str, password: str) -> None:
    """Replace the password of an existing account.

    Args:
        username: Existing account username.
        password: New plain-text password (6-100 characters); stored hashed.

    Raises:
        AdminProvisioningError: On validation failure, a missing user, or a
            database error.
    """

    validate_password(password)

    UserModel = get_user_model()
    try:
        with transaction.atomic():
            user = UserModel.objects.select_for_update().filter(username=username).first()
            if user is None:
                raise AdminProvisioningError(f"User '{username}' does not exist")
            user.set_password(password)
            user.save(update_fields=["password"])
    except DatabaseError as exc:
        logger.exception("Failed to update password for %s", username)
        raise AdminProvisioningError(f"Database error while updating password: {exc}") from exc

    logger.info("Updated password for %s", username)
