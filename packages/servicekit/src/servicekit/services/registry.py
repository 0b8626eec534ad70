from __future__ import annotations

"""
Service class registry.

- Stores **service classes** keyed by their identifier ``"module:qualname"``.
- Every `BaseService` subclass registers itself at class creation.
- Workers resolve identifiers back to classes; unknown identifiers fall back to
  importing the module once before giving up.

Public API:
    ServiceRegistry.register(cls)
    ServiceRegistry.get(identifier)
    ServiceRegistry.require(identifier)
    ServiceRegistry.all()
    ServiceRegistry.identifiers()
    ServiceRegistry.clear()
"""

import logging
import threading
from typing import ClassVar

from servicekit.exceptions import RegistryLookupError
from servicekit.utils import import_string

__all__ = ["ServiceRegistry", "service_identifier", "resolve_service"]

logger = logging.getLogger(__name__)


def service_identifier(service_cls: type) -> str:
    return f"{service_cls.__module__}:{service_cls.__qualname__}"


class ServiceRegistry:
    """Global registry for service **classes** keyed by identifier."""

    _store: ClassVar[dict[str, type]] = {}
    _lock: ClassVar[threading.RLock] = threading.RLock()

    @classmethod
    def register(cls, candidate: type) -> str:
        """Register a service class and return its identifier.

        Re-registering the same class is a no-op. A different class at the same
        identifier (a module reload, or a class redefined inside a function)
        replaces the previous one with a warning.
        """
        if not isinstance(candidate, type):
            raise TypeError(f"{candidate!r} is not a class")
        key = service_identifier(candidate)
        with cls._lock:
            existing = cls._store.get(key)
            if existing is candidate:
                return key
            if existing is not None:
                logger.warning("service.register.replace %s", key)
            cls._store[key] = candidate
        logger.debug("service.register %s", key)
        return key

    @classmethod
    def get(cls, identifier: str) -> type | None:
        with cls._lock:
            return cls._store.get(identifier)

    @classmethod
    def require(cls, identifier: str) -> type:
        """Return the class for `identifier`, importing its module if needed."""
        found = cls.get(identifier)
        if found is not None:
            return found

        # `<locals>` classes cannot be imported; only try real module paths.
        if "<locals>" not in identifier:
            try:
                found = import_string(identifier)
            except ImportError as exc:
                raise RegistryLookupError(f"Service not registered: {identifier}") from exc
            if isinstance(found, type) and callable(getattr(found, "call_async", None)):
                cls.register(found)
                return found

        raise RegistryLookupError(f"Service not registered: {identifier}")

    @classmethod
    def all(cls) -> tuple[type, ...]:
        with cls._lock:
            return tuple(cls._store.values())

    @classmethod
    def identifiers(cls) -> tuple[str, ...]:
        with cls._lock:
            return tuple(sorted(cls._store))

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._store.clear()


def resolve_service(identifier: str) -> type:
    return ServiceRegistry.require(identifier)
