from __future__ import annotations

"""
Inline-vs-queued decision for deferred entry points.

Resolution order
----------------
1) `asynchronous=False`                         -> inline
2) interactive environment and no live worker   -> inline
3) otherwise                                    -> enqueue

"Interactive" means the configured ENVIRONMENT is listed in
INTERACTIVE_ENVIRONMENTS, or the process is an interactive Python shell.
The worker probe is only consulted when step 2 could apply, so deployed
processes never pay for a liveness round-trip.
"""

import enum
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

from servicekit.conf import settings
from servicekit.utils import import_string

logger = logging.getLogger(__name__)


class DispatchMode(str, enum.Enum):
    INLINE = "inline"
    ENQUEUE = "enqueue"


@runtime_checkable
class WorkerProbe(Protocol):
    def is_alive(self) -> bool:
        """Return True when at least one background worker answers."""
        ...


class NoWorkerProbe:
    """Probe used when none is configured: never reports a live worker."""

    def is_alive(self) -> bool:
        return False


def get_worker_probe() -> WorkerProbe:
    probe = settings.get("WORKER_PROBE")
    if probe is None:
        return NoWorkerProbe()
    if isinstance(probe, str):
        probe = import_string(probe)
    if isinstance(probe, type):
        probe = probe()
    if not isinstance(probe, WorkerProbe):
        raise TypeError(f"WORKER_PROBE {probe!r} does not implement is_alive()")
    return probe


def in_interactive_shell() -> bool:
    return hasattr(sys, "ps1") or bool(getattr(sys.flags, "interactive", 0))


def is_interactive_environment(environment: str | None = None) -> bool:
    env = (environment if environment is not None else str(settings.get("ENVIRONMENT") or "")).strip().lower()
    interactive = {str(e).strip().lower() for e in settings.get("INTERACTIVE_ENVIRONMENTS") or ()}
    return env in interactive or in_interactive_shell()


@dataclass
class AsyncDispatchDecision:
    """Decide whether deferred work runs now or is handed to the queue.

    `worker_alive` may be a bool or a zero-argument callable; callables are
    evaluated lazily. `interactive` defaults to the configured environment.
    """

    asynchronous: bool = True
    worker_alive: bool | Callable[[], bool] | None = None
    interactive: bool | None = None

    def _interactive(self) -> bool:
        return is_interactive_environment() if self.interactive is None else bool(self.interactive)

    def _worker_alive(self) -> bool:
        probe = self.worker_alive
        if probe is None:
            probe = get_worker_probe().is_alive
        if not callable(probe):
            return bool(probe)
        try:
            return bool(probe())
        except Exception:
            logger.warning("worker probe failed; assuming no live worker", exc_info=True)
            return False

    def decide(self) -> DispatchMode:
        if not self.asynchronous:
            return DispatchMode.INLINE
        if self._interactive() and not self._worker_alive():
            logger.debug("interactive environment without a live worker; running deferred work inline")
            return DispatchMode.INLINE
        return DispatchMode.ENQUEUE

    def run_inline(self) -> bool:
        return self.decide() is DispatchMode.INLINE


__all__ = [
    "AsyncDispatchDecision",
    "DispatchMode",
    "WorkerProbe",
    "NoWorkerProbe",
    "get_worker_probe",
    "is_interactive_environment",
]
