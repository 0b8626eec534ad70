# servicekit/services/transaction.py
"""
Transactional boundary around a service entry point.

The persistence layer is an external collaborator described by
:class:`TransactionProvider`. ``servicekit_django`` ships one backed by
``django.db.transaction.atomic``; the core default runs the callable directly.

Failure contract
----------------
An :class:`~servicekit.services.exceptions.ExecutionError` produced inside the
boundary does **not** unwind through the provider. The scope captures it, asks
the provider to roll back the current unit, and hands it back in a
:class:`TransactionResult` so the invoker can raise it once the boundary is
released. Any other exception unwinds through the provider (which rolls back)
and propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from servicekit.conf import settings
from servicekit.utils import import_string

from .exceptions import ExecutionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class TransactionProvider(Protocol):
    def run_in_transaction(self, fn: Callable[[], T]) -> T:
        """Run `fn` inside one atomic unit (joining an enclosing one if present)."""
        ...

    def rollback_current(self) -> None:
        """Mark the current atomic unit for rollback."""
        ...


class NullTransactionProvider:
    """Provider used when no persistence layer is configured."""

    def run_in_transaction(self, fn: Callable[[], T]) -> T:
        return fn()

    def rollback_current(self) -> None:
        logger.debug("rollback requested but no transaction provider is configured")


@dataclass(slots=True)
class TransactionResult(Generic[T]):
    value: T | None = None
    error: ExecutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_transaction_provider() -> TransactionProvider:
    provider = settings.get("TRANSACTION_PROVIDER")
    if provider is None:
        return NullTransactionProvider()
    if isinstance(provider, str):
        provider = import_string(provider)
    if isinstance(provider, type):
        provider = provider()
    if not isinstance(provider, TransactionProvider):
        raise TypeError(f"TRANSACTION_PROVIDER {provider!r} does not implement the transaction provider protocol")
    return provider


class TransactionScope:
    """Run a callable inside the configured transactional boundary."""

    def __init__(self, provider: TransactionProvider | None = None, *, enabled: bool | None = None) -> None:
        self.enabled = settings.get_bool("WRAP_IN_TRANSACTION") if enabled is None else enabled
        self._provider = provider

    @property
    def provider(self) -> TransactionProvider:
        if self._provider is None:
            self._provider = get_transaction_provider()
        return self._provider

    def run(self, fn: Callable[[], Any]) -> TransactionResult:
        if not self.enabled:
            try:
                return TransactionResult(value=fn())
            except ExecutionError as exc:
                return TransactionResult(error=exc)

        provider = self.provider

        def _unit() -> TransactionResult:
            try:
                return TransactionResult(value=fn())
            except ExecutionError as exc:
                provider.rollback_current()
                return TransactionResult(error=exc)

        return provider.run_in_transaction(_unit)


__all__ = [
    "TransactionProvider",
    "NullTransactionProvider",
    "TransactionResult",
    "TransactionScope",
    "get_transaction_provider",
]
