"""Signals for trader profile lifecycle."""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.models import TraderProfile

UserModel = get_user_model()


@receiver(post_save, sender=UserModel)
def ensure_profile_for_user(sender, instance, created: bool, **kwargs) -> None:
    """Create a TraderProfile whenever a new User is created.

    Fixture loading (`raw=True`) is skipped so loaddata stays deterministic.
    """

    if kwargs.get("raw", False):
        return
    if not created:
        return
    TraderProfile.objects.get_or_create(user=instance)
