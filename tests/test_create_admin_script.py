"""Integration tests for `scripts/create_admin.py`."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model

from scripts.create_admin import main

pytestmark = pytest.mark.integration


def test_script_prints_usage_for_wrong_argument_count(capsys) -> None:
    """A single argument prints usage to stderr and exits 1."""

    assert main(["admin"]) == 1
    captured = capsys.readouterr()
    assert "Usage: scripts/create_admin.py <username> <password>" in captured.err
    assert captured.out == ""


@pytest.mark.django_db
def test_script_creates_admin(capsys) -> None:
    """Valid credentials create the admin and exit 0."""

    assert main(["admin", "SecurePass123!"]) == 0
    assert "Admin user created successfully!" in capsys.readouterr().out
    assert get_user_model().objects.get(username="admin").is_superuser


@pytest.mark.django_db
def test_script_reports_duplicate(user, capsys) -> None:
    """An existing username is reported on stderr with exit 1 and nothing changes."""

    original_hash = user.password
    assert main(["alice", "SecurePass123!"]) == 1
    assert "Error: User 'alice' already exists" in capsys.readouterr().err

    user.refresh_from_db()
    assert user.password == original_hash
    assert user.is_superuser is False
    assert user.is_staff is False
    assert get_user_model().objects.count() == 1
    assert user.trader_profile.role == "user"
