"""WSGI entry point for the Numora dashboard (used by gunicorn and runserver)."""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "numora.settings")

application = get_wsgi_application()
