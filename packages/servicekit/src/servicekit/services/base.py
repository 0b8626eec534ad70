from __future__ import annotations

import functools
import logging
import types
from typing import Any, Callable, ClassVar

from asgiref.sync import sync_to_async

from servicekit.utils import serialize_params

from .callbacks import CallbackRegistry
from .exceptions import AsyncProcessArgumentError, ServiceAborted
from .invoker import Handler, ServiceInvoker
from .notices import NoticableMixin
from .registry import ServiceRegistry, service_identifier
from .resolver import ProcessResolver

logger = logging.getLogger(__name__)

# Keywords consumed by the class-level `Service.call(...)`; everything else
# goes to the constructor.
INVOCATION_OPTIONS = ("force", "skip_callbacks", "asynchronous", "handler")


class hybridmethod:
    """Method with one implementation on the instance and another on the class.

    Usage:
        @hybridmethod
        def call(self, ...): ...

        @call.classlevel
        def call(cls, ...): ...
    """

    def __init__(self, finstance: Callable[..., Any], fclass: Callable[..., Any] | None = None) -> None:
        self.finstance = finstance
        self.fclass = fclass
        functools.update_wrapper(self, finstance)

    def classlevel(self, fclass: Callable[..., Any]) -> hybridmethod:
        return type(self)(self.finstance, fclass)

    def __get__(self, instance: Any, owner: type | None = None):
        if instance is None:
            if self.fclass is None:
                raise AttributeError(f"{self.finstance.__name__} is only available on instances")
            return types.MethodType(self.fclass, owner)
        return types.MethodType(self.finstance, instance)


def _split_options(params: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    options = {k: params.pop(k) for k in INVOCATION_OPTIONS if k in params}
    return params, options


class BaseService(NoticableMixin):
    """
    Base class for services.

    Subclasses define exactly one entry point:

    * ``process(self)`` runs synchronously inside ``call``.
    * ``deferred_process(self)`` runs in a background worker (or inline, see
      :class:`~servicekit.services.dispatch.AsyncDispatchDecision`). Units must
      be built from JSON-friendly keyword arguments only.

    Optional members: ``before_process``, ``after_process``, ``ensure``,
    ``rescue(error)``; class attributes ``before_callbacks``,
    ``after_callbacks``, ``success_notice``, ``queue_backend`` and
    ``queue_name``.

    Example:
        class CreateInvoice(BaseService):
            before_callbacks = ("load_customer",)

            def __init__(self, customer_id: int):
                self.customer_id = customer_id

            def load_customer(self): ...

            def process(self):
                ...
                return invoice

        CreateInvoice.call(customer_id=1)
        CreateInvoice(customer_id=1).call(force=True)
    """

    before_callbacks: ClassVar[tuple[str, ...]] = ()
    after_callbacks: ClassVar[tuple[str, ...]] = ()
    queue_backend: ClassVar[str | None] = None
    queue_name: ClassVar[str | None] = None

    _callbacks: ClassVar[CallbackRegistry] = CallbackRegistry("BaseService")
    _serialized_params: dict[str, Any] | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parent = next(
            (base.__dict__["_callbacks"] for base in cls.__mro__[1:] if "_callbacks" in base.__dict__),
            None,
        )
        registry = parent.derive(cls.__qualname__) if parent is not None else CallbackRegistry(cls.__qualname__)
        for name in _names(cls.__dict__.get("before_callbacks", ())):
            registry.register_before(name)
        for name in _names(cls.__dict__.get("after_callbacks", ())):
            registry.register_after(name)
        cls._callbacks = registry
        ServiceRegistry.register(cls)

    def __new__(cls, *args: Any, **kwargs: Any):
        entry = ProcessResolver.resolve(cls)
        instance = super().__new__(cls)
        if entry is not None and entry.deferred:
            if args:
                raise AsyncProcessArgumentError(
                    cls.__qualname__, "deferred services accept keyword arguments only"
                )
            try:
                instance._serialized_params = serialize_params(kwargs)
            except (TypeError, ValueError) as exc:
                raise AsyncProcessArgumentError(cls.__qualname__, str(exc)) from exc
        return instance

    # ------------------------------------------------------------------
    # definition surface
    # ------------------------------------------------------------------
    @classmethod
    def register_before(cls, name: str) -> None:
        cls._callbacks.register_before(name)

    @classmethod
    def register_after(cls, name: str) -> None:
        cls._callbacks.register_after(name)

    @classmethod
    def identifier(cls) -> str:
        return service_identifier(cls)

    # ------------------------------------------------------------------
    # invocation
    # ------------------------------------------------------------------
    @hybridmethod
    def call(
        self,
        *args: Any,
        force: bool | None = None,
        skip_callbacks: bool | None = None,
        asynchronous: bool = True,
        handler: Handler | None = None,
        **kwargs: Any,
    ) -> Any:
        return ServiceInvoker(self).invoke(
            args,
            kwargs,
            force=force,
            skip_callbacks=skip_callbacks,
            asynchronous=asynchronous,
            handler=handler,
        )

    @call.classlevel
    def call(cls, *args: Any, **params: Any) -> Any:
        params, options = _split_options(params)
        return cls(*args, **params).call(**options)

    @hybridmethod
    def call_async(self) -> Any:
        """Run the deferred entry point here and now, without hooks or dispatch."""
        entry = ProcessResolver.resolve(type(self))
        if entry is None or not entry.deferred:
            logger.debug("%s has no deferred entry point; call_async is a no-op", type(self).__qualname__)
            return None
        return ServiceInvoker(self).invoke(skip_callbacks=True, dispatch=False)

    @call_async.classlevel
    def call_async(cls, **params: Any) -> Any:
        return cls(**params).call_async()

    @hybridmethod
    async def acall(self, *args: Any, **kwargs: Any) -> Any:
        return await sync_to_async(self.call, thread_sensitive=True)(*args, **kwargs)

    @acall.classlevel
    async def acall(cls, *args: Any, **params: Any) -> Any:
        return await sync_to_async(cls.call, thread_sensitive=True)(*args, **params)

    # ------------------------------------------------------------------
    # flow control
    # ------------------------------------------------------------------
    def abort(self, message: str | None = None) -> None:
        """Stop the entry point here; `message` is recorded as an error."""
        if message:
            self.errors.add(message)
        raise ServiceAborted(
            message or self.errors.full_messages() or f"{type(self).__qualname__} aborted",
            errors=self.errors.to_list(),
            service=self,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} errors={len(self.errors)} notices={len(self.notices)}>"


def _names(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


__all__ = ["BaseService", "hybridmethod", "INVOCATION_OPTIONS"]
