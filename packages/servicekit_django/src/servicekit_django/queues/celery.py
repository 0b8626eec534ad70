# servicekit_django/queues/celery.py
"""
Celery queue backend.

Sends the job to the ``servicekit.run_service_job`` task. The Celery queue
name comes from the per-type ``queue_name`` when set, else from the
CELERY_QUEUE setting, else Celery's default routing.
"""

from __future__ import annotations

from servicekit.conf import settings
from servicekit.queues import BaseServiceQueue, ServiceJob, queue_backend
from servicekit.tracing import service_span_sync

BACKEND_NAME = "celery"


@queue_backend(BACKEND_NAME)
class CeleryQueue(BaseServiceQueue):
    """Enqueue deferred services as Celery tasks."""

    def enqueue(self, job: ServiceJob, *, queue: str | None = None) -> str:
        from servicekit_django.tasks import run_service_job

        queue = queue or settings.get("CELERY_QUEUE")
        with service_span_sync(
            "servicekit.queue.enqueue",
            attributes={"backend": BACKEND_NAME, "queue": queue, "servicekit.service": job.service},
        ):
            result = run_service_job.apply_async(
                kwargs=self._prepare_job_for_transport(job),
                queue=queue,
            )
            return result.id


__all__ = ["CeleryQueue"]
