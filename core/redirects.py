"""Redirect helpers for dashboard form posts.

Widget and symbol controls post back and return the user to the page they
came from. The return target is user-supplied (`next` or the referer), so it
is validated with `url_has_allowed_host_and_scheme` before use.
"""

from __future__ import annotations

from collections.abc import Iterable

from django.conf import settings
from django.core.exceptions import DisallowedHost
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme


def is_safe_target(request: HttpRequest, url: str) -> bool:
    """Return True when `url` stays on an allowed host and scheme."""

    allowed_hosts = set(settings.ALLOWED_HOSTS)
    try:
        allowed_hosts.add(request.get_host())
    except DisallowedHost:
        pass
    return url_has_allowed_host_and_scheme(
        url=url,
        allowed_hosts=allowed_hosts,
        require_https=request.is_secure(),
    )


def safe_redirect(
    request: HttpRequest,
    *,
    candidates: Iterable[str | None],
    fallback: str,
) -> HttpResponseRedirect:
    """Redirect to the first safe URL from a candidate list, else `fallback`."""

    for candidate in candidates:
        value = (candidate or "").strip()
        if value and is_safe_target(request, value):
            return redirect(value)
    return redirect(fallback)


def redirect_back(request: HttpRequest) -> HttpResponseRedirect:
    """Redirect to the posted `next` value or the referer, defaulting to the dashboard."""

    return safe_redirect(
        request,
        candidates=[request.POST.get("next"), request.META.get("HTTP_REFERER")],
        fallback=reverse("core:dashboard"),
    )
