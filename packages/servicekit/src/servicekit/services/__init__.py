# servicekit/services/__init__.py
from .callbacks import CallbackRegistry
from .dispatch import AsyncDispatchDecision, DispatchMode, NoWorkerProbe, WorkerProbe
from .exceptions import (
    AmbiguousProcessError,
    AsyncProcessArgumentError,
    DefinitionError,
    ExecutionError,
    ServiceAborted,
    ServiceDispatchError,
    ServiceError,
)
from .invoker import Outcome, ServiceInvoker
from .mixins import service
from .notices import NoticableMixin, NoticeCollection, NoticeCollector, NoticeEntry
from .registry import ServiceRegistry, resolve_service
from .resolver import EntryPoint, ProcessResolver
from .base import BaseService
from .transaction import NullTransactionProvider, TransactionProvider, TransactionResult, TransactionScope

__all__ = [
    "BaseService",
    "service",
    "Outcome",
    "ServiceInvoker",
    "CallbackRegistry",
    "NoticableMixin",
    "NoticeCollection",
    "NoticeCollector",
    "NoticeEntry",
    "EntryPoint",
    "ProcessResolver",
    "TransactionProvider",
    "NullTransactionProvider",
    "TransactionResult",
    "TransactionScope",
    "AsyncDispatchDecision",
    "DispatchMode",
    "WorkerProbe",
    "NoWorkerProbe",
    "ServiceRegistry",
    "resolve_service",
    "ServiceError",
    "DefinitionError",
    "AmbiguousProcessError",
    "AsyncProcessArgumentError",
    "ExecutionError",
    "ServiceAborted",
    "ServiceDispatchError",
]
