# servicekit/queues/inline.py
"""Inline queue runs the job in the current process and returns a synthetic id."""

from __future__ import annotations

from servicekit.tracing import service_span_sync

from .base import BaseServiceQueue, ServiceJob
from .decorators import queue_backend

BACKEND_NAME = "inline"


@queue_backend(BACKEND_NAME)
class InlineQueue(BaseServiceQueue):
    def enqueue(self, job: ServiceJob, *, queue: str | None = None) -> str:
        from servicekit.worker import perform_service_job

        with service_span_sync(
            "servicekit.queue.enqueue",
            attributes={"backend": BACKEND_NAME, "servicekit.service": job.service},
        ):
            perform_service_job(job)
            return BACKEND_NAME
