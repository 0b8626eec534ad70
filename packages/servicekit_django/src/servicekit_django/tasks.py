# servicekit_django/tasks.py
"""
Celery entry point for deferred services.

``CeleryQueue`` sends a plain-dict :class:`~servicekit.queues.ServiceJob`;
the task validates it and hands it to :func:`servicekit.worker.perform_service_job`.
"""

from __future__ import annotations

from typing import Any

from celery import shared_task

from servicekit.queues import ServiceJob
from servicekit.worker import perform_service_job

TASK_NAME = "servicekit.run_service_job"


@shared_task(name=TASK_NAME)
def run_service_job(service: str, params: dict[str, Any] | None = None, traceparent: str | None = None) -> Any:
    job = ServiceJob(service=service, params=params or {}, traceparent=traceparent)
    return perform_service_job(job)


__all__ = ["run_service_job", "TASK_NAME"]
