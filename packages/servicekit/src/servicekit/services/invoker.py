# servicekit/services/invoker.py
"""
The call lifecycle of one service unit.

Order of operations for ``unit.call(...)``:

1) entry point (resolved once per type); none -> return ``None``
2) deferred entry point: dispatch decision; enqueue -> return the job id
3) before-hooks (registered ones, then ``before_process``) unless skipped
4) entry point inside the transaction scope; accumulated errors fail the call
   unless ``force``
5) after-hooks (``after_process``, then registered ones) unless skipped or failed
6) ``ensure()`` when defined, whatever happened
7) failure: ``rescue(error)``; a non-None result stands in for the value.
   Otherwise a non-None ``handler(None, outcome)`` result does, else re-raise.
8) ``handler(value, outcome)`` when given (its non-None result wins), else the value

`DefinitionError` always propagates.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

from servicekit.conf import settings
from servicekit.tracing import inject_trace, service_attrs, service_span_sync

from .dispatch import AsyncDispatchDecision, DispatchMode
from .exceptions import DefinitionError, ExecutionError, ServiceAborted, ServiceDispatchError, ServiceError
from .notices import NoticeCollector
from .registry import service_identifier
from .resolver import EntryPoint, ProcessResolver
from .transaction import TransactionScope

if TYPE_CHECKING:  # pragma: no cover
    from .base import BaseService

logger = logging.getLogger(__name__)

Handler = Callable[[Any, "Outcome"], Any]


@dataclass(frozen=True)
class Outcome:
    """Entry-point value plus the collector as it stood when the call finished."""

    value: Any
    noticable: NoticeCollector

    @property
    def success(self) -> bool:
        return self.noticable.success()

    @property
    def errors(self) -> list[str]:
        return self.noticable.errors.messages

    @property
    def notices(self) -> list[str]:
        return self.noticable.notices.messages

    @property
    def notice(self) -> str:
        return self.noticable.notice()


def apply_accepted(fn: Callable[..., Any], args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> Any:
    """Call `fn` with as much of ``args``/``kwargs`` as its signature accepts."""
    kwargs = dict(kwargs or {})
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return fn(*args, **kwargs)

    params = list(sig.parameters.values())
    if not params:
        return fn()

    if any(p.kind is p.VAR_POSITIONAL for p in params):
        pos = list(args)
    else:
        n = sum(1 for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD))
        pos = list(args)[:n]

    if any(p.kind is p.VAR_KEYWORD for p in params):
        kw = kwargs
    else:
        named = {p.name for p in params if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)}
        taken = {p.name for p in params[: len(pos)]}
        kw = {k: v for k, v in kwargs.items() if k in named and k not in taken}
    return fn(*pos, **kw)


class ServiceInvoker:
    """Drive one call of a service unit through the lifecycle."""

    def __init__(self, service: BaseService) -> None:
        self.service = service
        self.service_cls = type(service)

    # ------------------------------------------------------------------
    # entry
    # ------------------------------------------------------------------
    def invoke(
        self,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
        *,
        force: bool | None = None,
        skip_callbacks: bool | None = None,
        asynchronous: bool = True,
        handler: Handler | None = None,
        dispatch: bool = True,
    ) -> Any:
        force = settings.get_bool("FORCE") if force is None else bool(force)
        skip_callbacks = settings.get_bool("SKIP_CALLBACKS") if skip_callbacks is None else bool(skip_callbacks)
        kwargs = dict(kwargs or {})

        self.service.reset_noticable()
        entry = ProcessResolver.resolve(self.service_cls)
        if entry is None:
            logger.debug("%s exposes no entry point; nothing to run", self.service_cls.__qualname__)
            return None

        if entry.deferred and dispatch:
            mode = AsyncDispatchDecision(asynchronous=asynchronous).decide()
            logger.debug("dispatch decision for %s: %s", self.service_cls.__qualname__, mode.value)
            if mode is DispatchMode.ENQUEUE:
                return self.enqueue()

        attrs = service_attrs(self.service_cls, entry=entry.name, force=force, skip_callbacks=skip_callbacks)
        with service_span_sync("servicekit.service.call", attributes=attrs):
            return self._run(entry, args, kwargs, force=force, skip_callbacks=skip_callbacks, handler=handler)

    # ------------------------------------------------------------------
    # deferred hand-off
    # ------------------------------------------------------------------
    def enqueue(self) -> str:
        from servicekit.queues import ServiceJob, get_queue_instance

        backend = getattr(self.service_cls, "queue_backend", None) or settings.get("QUEUE_BACKEND")
        queue_name = getattr(self.service_cls, "queue_name", None)
        identifier = service_identifier(self.service_cls)

        with service_span_sync(
            "servicekit.service.enqueue",
            attributes=service_attrs(self.service_cls, backend=backend, queue=queue_name),
        ):
            job = ServiceJob(
                service=identifier,
                params=dict(getattr(self.service, "_serialized_params", None) or {}),
                traceparent=inject_trace(),
            )
            queue = get_queue_instance(backend)
            try:
                job_id = queue.enqueue(job, queue=queue_name)
            except ServiceError:
                raise
            except Exception as exc:
                raise ServiceDispatchError(f"Could not enqueue {identifier} on '{backend}': {exc}") from exc

        logger.info("enqueued %s on '%s' (job %s)", identifier, backend, job_id)
        return job_id

    # ------------------------------------------------------------------
    # inline run
    # ------------------------------------------------------------------
    def _run(
        self,
        entry: EntryPoint,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        *,
        force: bool,
        skip_callbacks: bool,
        handler: Handler | None,
    ) -> Any:
        try:
            try:
                if not skip_callbacks:
                    self.run_before_hooks(args, kwargs)

                result = TransactionScope().run(lambda: self._run_entry(entry, args, kwargs, force=force))
                if result.error is not None:
                    raise result.error

                if not skip_callbacks:
                    self.run_after_hooks(result.value)
            finally:
                self._run_ensure()
        except DefinitionError:
            raise
        except Exception as exc:
            return self._handle_failure(exc, handler)

        return self._finish(result.value, handler)

    def _finish(self, value: Any, handler: Handler | None) -> Any:
        if handler is None:
            return value
        out = handler(value, Outcome(value, self.service.noticable))
        return value if out is None else out

    def _run_entry(self, entry: EntryPoint, args: Sequence[Any], kwargs: Mapping[str, Any], *, force: bool) -> Any:
        try:
            value = apply_accepted(entry.bind(self.service), args, kwargs)
        except ServiceAborted as exc:
            # a nested unit's abort is not ours to absorb
            if not force or exc.service is not self.service:
                raise
            logger.debug("%s aborted under force; continuing", self.service_cls.__qualname__)
            value = None

        if self.service.has_errors() and not force:
            raise ExecutionError(errors=self.service.errors.to_list())
        return value

    # ------------------------------------------------------------------
    # hooks
    # ------------------------------------------------------------------
    def _hook(self, name: str) -> Callable[..., Any]:
        fn = getattr(self.service, name, None)
        if not callable(fn):
            raise DefinitionError(f"{self.service_cls.__qualname__} has no callable hook {name!r}")
        return fn

    def run_before_hooks(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> None:
        for name in self.service_cls._callbacks.before:
            apply_accepted(self._hook(name), args, kwargs)
        own = getattr(self.service, "before_process", None)
        if callable(own):
            apply_accepted(own, args, kwargs)

    def run_after_hooks(self, value: Any) -> None:
        own = getattr(self.service, "after_process", None)
        if callable(own):
            apply_accepted(own, (value,))
        for name in self.service_cls._callbacks.after:
            apply_accepted(self._hook(name), (value,))

    def _run_ensure(self) -> None:
        ensure = getattr(self.service, "ensure", None)
        if callable(ensure):
            ensure()

    # ------------------------------------------------------------------
    # failure reconciliation
    # ------------------------------------------------------------------
    def _handle_failure(self, exc: Exception, handler: Handler | None) -> Any:
        if not isinstance(exc, ExecutionError) or not self.service.has_errors():
            self.service.errors.add(str(exc).strip() or type(exc).__name__, exc)

        rescue = getattr(self.service, "rescue", None)
        if callable(rescue):
            rescued = apply_accepted(rescue, (exc,))
            if rescued is not None:
                logger.warning("%s failed and was rescued", self.service_cls.__qualname__, exc_info=exc)
                return self._finish(rescued, handler)

        if handler is not None:
            handled = handler(None, Outcome(None, self.service.noticable))
            if handled is not None:
                logger.warning("%s failed; the caller handled it", self.service_cls.__qualname__, exc_info=exc)
                return handled

        raise exc


__all__ = ["Outcome", "ServiceInvoker", "apply_accepted"]
