# servicekit/queues/__init__.py
from .base import BaseServiceQueue, ServiceJob
from .decorators import queue_backend
from .registry import get_queue_class, get_queue_instance, list_queue_names, list_queues, register_queue
from . import inline as _inline  # noqa: F401  (registers the "inline" backend)

__all__ = [
    "BaseServiceQueue",
    "ServiceJob",
    "queue_backend",
    "register_queue",
    "get_queue_class",
    "get_queue_instance",
    "list_queues",
    "list_queue_names",
]
