from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .notices import NoticableMixin


class service:
    """Declare a child service callable from a host object.

    Calling the attribute builds the child from the host's ``context`` mapping
    (when it has one), the declared options and the call's keywords (later
    sources win), runs it, and merges the child's errors and notices
    into the host's collector. Pass ``handler=`` to replace the merge.

        class Checkout(BaseService):
            charge = service(ChargeCard, currency="EUR")

            def process(self):
                receipt = self.charge(amount=10)
                ...

    A failed child's errors are merged into the host and its exception then
    propagates into the host's entry point. A handler that returns a value
    consumes the failure instead.
    """

    def __init__(self, service_cls: type, **options: Any) -> None:
        self.service_cls = service_cls
        self.options = options
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None):
        if instance is None:
            return self

        def _call(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(instance, *args, **kwargs)

        _call.__name__ = self.name or self.service_cls.__name__
        return _call

    def context_for(self, host: Any, params: dict[str, Any]) -> dict[str, Any]:
        context = getattr(host, "context", None)
        merged: dict[str, Any] = dict(context) if isinstance(context, Mapping) else {}
        merged.update(self.options)
        merged.update(params)
        return merged

    def invoke(self, host: Any, *args: Any, handler=None, **params: Any) -> Any:
        if handler is None:
            handler = _merge_into(host)
        return self.service_cls.call(*args, handler=handler, **self.context_for(host, params))

    def __repr__(self) -> str:
        return f"service({self.service_cls.__qualname__})"


def _merge_into(host: Any):
    def _merge(value: Any, outcome: Any) -> None:
        if isinstance(host, NoticableMixin):
            host.noticable.merge(outcome.noticable)
        return None

    return _merge


__all__ = ["service"]
