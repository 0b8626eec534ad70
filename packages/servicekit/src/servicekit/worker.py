# servicekit/worker.py
"""
Worker-side entry for deferred services.

Transport backends (inline queue, the Celery task in ``servicekit_django``)
deliver a :class:`~servicekit.queues.ServiceJob`; this module resolves the
service type, rebuilds the unit from the serialized parameters and runs its
deferred entry point via ``call_async`` (hooks skipped, no second dispatch).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from servicekit.queues.base import ServiceJob
from servicekit.services.registry import resolve_service
from servicekit.tracing import extract_trace, service_span_sync

logger = logging.getLogger(__name__)


def perform_service_job(job: ServiceJob | Mapping[str, Any]) -> Any:
    if not isinstance(job, ServiceJob):
        job = ServiceJob.model_validate(job)

    with service_span_sync(
        "servicekit.worker.perform",
        attributes={"servicekit.service": job.service},
        context=extract_trace(job.traceparent),
    ):
        service_cls = resolve_service(job.service)
        logger.debug("performing %s", job.service)
        return service_cls.call_async(**job.params)


__all__ = ["perform_service_job"]
