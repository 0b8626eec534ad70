import logging
from typing import Type, TypeVar

from .base import BaseServiceQueue
from .registry import register_queue

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Type[BaseServiceQueue])


def queue_backend(name: str):
    """
    Class decorator to register a queue backend under a stable name.

    Usage
    -----
        @queue_backend("celery")
        class CeleryQueue(BaseServiceQueue):
            ...

    The decorator registers at *import time*, so the backend module must be
    imported during startup (``servicekit_django`` does this in ``AppConfig.ready``).
    Programmatic registration is also available via `register_queue(name, cls)`.
    """

    def _wrap(cls: T) -> T:
        if not issubclass(cls, BaseServiceQueue):
            raise TypeError("@queue_backend can only decorate BaseServiceQueue subclasses")
        cls.name = name
        register_queue(name, cls)
        return cls

    return _wrap


__all__ = ["queue_backend"]
