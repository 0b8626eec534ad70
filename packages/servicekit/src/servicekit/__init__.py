# servicekit/__init__.py
"""
servicekit: a uniform call lifecycle for business-logic services.

    from servicekit import BaseService

    class Greet(BaseService):
        def __init__(self, name: str):
            self.name = name

        def process(self):
            return f"Hello {self.name}"

    Greet.call(name="Ada")
"""

from .conf import settings
from .exceptions import RegistryError, RegistryLookupError, ServiceKitError
from .services import (
    AmbiguousProcessError,
    AsyncDispatchDecision,
    AsyncProcessArgumentError,
    BaseService,
    CallbackRegistry,
    DefinitionError,
    ExecutionError,
    NoticeCollector,
    Outcome,
    ProcessResolver,
    ServiceAborted,
    ServiceDispatchError,
    ServiceError,
    ServiceInvoker,
    TransactionScope,
    service,
)
from .queues import BaseServiceQueue, ServiceJob, queue_backend

__version__ = "0.1.0"

__all__ = [
    "settings",
    "BaseService",
    "service",
    "Outcome",
    "ServiceInvoker",
    "NoticeCollector",
    "CallbackRegistry",
    "ProcessResolver",
    "TransactionScope",
    "AsyncDispatchDecision",
    "BaseServiceQueue",
    "ServiceJob",
    "queue_backend",
    "ServiceKitError",
    "ServiceError",
    "DefinitionError",
    "AmbiguousProcessError",
    "AsyncProcessArgumentError",
    "ExecutionError",
    "ServiceAborted",
    "ServiceDispatchError",
    "RegistryError",
    "RegistryLookupError",
]
