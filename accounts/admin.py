"""Admin registrations for accounts."""

from __future__ import annotations

from django.contrib import admin

from accounts.models import TraderProfile


@admin.register(TraderProfile)
class TraderProfileAdmin(admin.ModelAdmin):
    """Admin configuration for TraderProfile."""

    list_display = ("user", "role", "verification_status", "onboarding_step", "verified_at")
    list_filter = ("role", "verification_status", "onboarding_step")
    search_fields = ("user__username",)
