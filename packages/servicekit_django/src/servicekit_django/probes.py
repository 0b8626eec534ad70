# servicekit_django/probes.py
from __future__ import annotations

import logging

from celery import current_app

from servicekit.conf import settings

logger = logging.getLogger(__name__)


class CeleryWorkerProbe:
    """Report whether any Celery worker answers a broadcast ping."""

    def __init__(self, timeout: float | None = None, app=None) -> None:
        self.timeout = float(settings.get("WORKER_PROBE_TIMEOUT") if timeout is None else timeout)
        self.app = app

    def is_alive(self) -> bool:
        app = self.app or current_app
        replies = app.control.inspect(timeout=self.timeout).ping()
        alive = bool(replies)
        logger.debug("celery worker ping: %s", sorted(replies) if replies else "no replies")
        return alive


__all__ = ["CeleryWorkerProbe"]
