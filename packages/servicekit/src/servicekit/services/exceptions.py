from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from servicekit.exceptions.base import ServiceKitError

if TYPE_CHECKING:  # pragma: no cover
    from .notices import NoticeEntry

__all__ = [
    "ServiceError",
    "DefinitionError",
    "AmbiguousProcessError",
    "AsyncProcessArgumentError",
    "ExecutionError",
    "ServiceAborted",
    "ServiceDispatchError",
]


class ServiceError(ServiceKitError):
    """Base class for service-related errors."""


class DefinitionError(ServiceError):
    """A service type is declared incorrectly. Raised eagerly and never rescued."""


class AmbiguousProcessError(DefinitionError):
    """Raised when a service type exposes both `process` and `deferred_process`."""

    def __init__(self, service: str) -> None:
        super().__init__(
            f"{service} defines both `process` and `deferred_process`; "
            "a service must expose exactly one entry point"
        )
        self.service = service


class AsyncProcessArgumentError(DefinitionError, TypeError):
    """Raised when a deferred service is built with parameters that cannot be queued."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"Cannot serialize parameters for deferred service {service}: {reason}")
        self.service = service
        self.reason = reason


class ExecutionError(ServiceError):
    """Raised when an entry point finishes with errors (and `force` is unset).

    Carries the accumulated error entries so callers can inspect them without
    holding on to the service instance.
    """

    def __init__(self, message: str | None = None, *, errors: Iterable[NoticeEntry] = ()) -> None:
        self.errors: tuple[NoticeEntry, ...] = tuple(errors)
        if message is None:
            message = "\n".join(e.message for e in self.errors) or "Service execution failed"
        super().__init__(message)
        self.message = message

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


class ServiceAborted(ExecutionError):
    """Raised by `BaseService.abort()` to stop an entry point mid-way.

    `service` is the unit that aborted; only that unit absorbs the abort under
    `force`.
    """

    def __init__(self, message: str | None = None, *, errors: Iterable[NoticeEntry] = (), service: Any = None) -> None:
        super().__init__(message, errors=errors)
        self.service = service


class ServiceDispatchError(ServiceError):
    """Raised when deferred work cannot be handed to a queue backend."""
