# servicekit_django/apps.py
"""
servicekit_django.apps
======================

AppConfig for the `servicekit_django` integration.

Responsibilities
----------------
- Overlay ``SERVICEKIT_*`` project settings on the core settings.
- Register the Celery queue backend.
- Register system checks.
"""

import logging
import os

from django.apps import AppConfig

from servicekit.tracing import service_span_sync

logger = logging.getLogger(__name__)


class ServicekitDjangoConfig(AppConfig):
    """Django AppConfig for servicekit_django."""

    name = "servicekit_django"
    label = "servicekit_django"
    verbose_name = "Servicekit"

    def ready(self) -> None:
        # backends and checks register on import
        from . import checks  # noqa: F401
        from .queues import celery  # noqa: F401

        if os.environ.get("DJANGO_SKIP_READY") == "1":
            return

        from .settings import apply_to_core

        with service_span_sync("servicekit.django_app.ready"):
            overlay = apply_to_core()
            logger.debug(
                "servicekit settings applied (environment=%s, queue_backend=%s)",
                overlay.get("ENVIRONMENT"),
                overlay.get("QUEUE_BACKEND"),
            )
