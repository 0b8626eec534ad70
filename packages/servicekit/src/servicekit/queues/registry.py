# servicekit/queues/registry.py
from __future__ import annotations

"""
Registry & singleton factory for queue backends.

Design:
- Registry stores backend CLASSES keyed by normalized name.
- Singletons cache INSTANCES keyed by the same name.
- Names are normalized to lowercase; `None` means "inline".
- Unknown names raise `ServiceDispatchError`; there is no silent fallback, so a
  misconfigured deployment never runs background work inline by accident.
"""

import logging
from threading import RLock
from typing import Dict, Optional, Type

from servicekit.services.exceptions import ServiceDispatchError

from .base import BaseServiceQueue

logger = logging.getLogger(__name__)


def _normalize_name(name: str | None) -> str:
    return (name or "inline").strip().lower()


__all__ = [
    "register_queue",
    "get_queue_class",
    "get_queue_instance",
    "list_queues",
    "list_queue_names",
]

# Registered backend classes by normalized name
_QUEUE_REGISTRY: Dict[str, Type[BaseServiceQueue]] = {}
# Singleton instances by normalized name
_QUEUE_SINGLETONS: Dict[str, BaseServiceQueue] = {}
_LOCK = RLock()


def register_queue(name: str, queue_cls: Type[BaseServiceQueue]) -> None:
    """Register a queue backend class under a normalized name.

    Example:
        register_queue("inline", InlineQueue)
        register_queue("celery", CeleryQueue)
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("queue backend name must be a non-empty string")
    if not isinstance(queue_cls, type) or not issubclass(queue_cls, BaseServiceQueue):
        raise TypeError("queue_cls must be a BaseServiceQueue subclass")

    key = _normalize_name(name)
    with _LOCK:
        _QUEUE_REGISTRY[key] = queue_cls
        # a re-registration replaces the class; drop the stale instance
        _QUEUE_SINGLETONS.pop(key, None)
    logger.debug("registered queue backend '%s' -> %s", key, queue_cls.__name__)


def get_queue_class(name: str | None) -> Optional[Type[BaseServiceQueue]]:
    key = _normalize_name(name)
    with _LOCK:
        cls = _QUEUE_REGISTRY.get(key)
    if cls is None and key == "inline":
        _ensure_inline_registered()
        with _LOCK:
            cls = _QUEUE_REGISTRY.get(key)
    return cls


def get_queue_instance(name: str | None) -> BaseServiceQueue:
    key = _normalize_name(name)
    with _LOCK:
        inst = _QUEUE_SINGLETONS.get(key)
        if inst is not None:
            return inst

    cls = get_queue_class(key)
    if cls is None:
        raise ServiceDispatchError(
            f"Queue backend '{key}' is not registered (known: {', '.join(list_queue_names()) or 'none'})"
        )

    instance = cls()
    with _LOCK:
        existing = _QUEUE_SINGLETONS.get(key)
        if existing is not None:
            return existing
        _QUEUE_SINGLETONS[key] = instance
        return instance


def list_queues() -> Dict[str, str]:
    """Return a snapshot mapping of name -> class __name__ for diagnostics."""
    with _LOCK:
        return {k: v.__name__ for k, v in _QUEUE_REGISTRY.items()}


def list_queue_names() -> list[str]:
    with _LOCK:
        return list(_QUEUE_REGISTRY.keys())


def _ensure_inline_registered() -> None:
    from .inline import InlineQueue

    with _LOCK:
        _QUEUE_REGISTRY.setdefault("inline", InlineQueue)
