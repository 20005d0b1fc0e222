"""Database models for trader accounts."""

from __future__ import annotations

from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    """Application role stored on the trader profile."""

    USER = "user", "User"
    ADMIN = "admin", "Admin"


class VerificationStatus(models.TextChoices):
    """Wallet/identity verification status reviewed by an admin."""

    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


class OnboardingStep(models.TextChoices):
    """Onboarding progress for a new account."""

    AUTH = "auth", "Authentication"
    AI_PROVIDER = "ai_provider", "AI provider"
    TRADING_ACCOUNTS = "trading_accounts", "Trading accounts"
    COMPLETE = "complete", "Complete"


class TraderProfile(models.Model):
    """Per-user dashboard profile (role, verification and onboarding state)."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="trader_profile",
    )
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.USER)
    verification_status = models.CharField(
        max_length=16,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    onboarding_step = models.CharField(
        max_length=32,
        choices=OnboardingStep.choices,
        default=OnboardingStep.AUTH,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        """Return the username and role for display contexts."""

        return f"{self.user.get_username()} ({self.role})"

    @property
    def is_admin(self) -> bool:
        """Return True when the profile carries the admin role."""

        return self.role == Role.ADMIN
