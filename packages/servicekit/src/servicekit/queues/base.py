# servicekit/queues/base.py
"""
Queue backend contract.

Backends are responsible for *where* deferred work runs once the dispatch
decision chose to enqueue it:
  - `enqueue(job)` hands a :class:`ServiceJob` to the transport and returns a
    transport-specific job id `str`. It MUST NOT run hooks; the worker side
    rebuilds the service and calls its deferred entry point via
    `Service.call_async(**params)`.

Concrete backends: InlineQueue (this package), CeleryQueue (servicekit_django).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceJob(BaseModel):
    """Transport payload for one deferred service run."""

    model_config = ConfigDict(frozen=True)

    service: str
    params: dict[str, Any] = Field(default_factory=dict)
    traceparent: str | None = None


class BaseServiceQueue(ABC):
    """Abstract base for queue backends."""

    name: str = "base"

    @abstractmethod
    def enqueue(self, job: ServiceJob, *, queue: str | None = None) -> str:
        """Schedule the job and return a job id string."""
        ...

    def _prepare_job_for_transport(self, job: ServiceJob) -> dict[str, Any]:
        """
        Plain-dict form of the job. Transport backends send this mapping and
        should not rely on the original model being preserved.
        """
        return job.model_dump(mode="json")


__all__ = ["ServiceJob", "BaseServiceQueue"]
