from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import AmbiguousProcessError

SYNC_ENTRY = "process"
DEFERRED_ENTRY = "deferred_process"


@dataclass(frozen=True, slots=True)
class EntryPoint:
    """The single executable entry point a service type exposes."""

    name: str
    deferred: bool

    def bind(self, service: Any):
        return getattr(service, self.name)


class ProcessResolver:
    """Resolve (and cache) the entry point of a service type.

    Resolution happens once per type; the result is stored on the class so
    instances never probe for capabilities during a call.
    """

    _CACHE_ATTR = "_servicekit_entry_point"

    @classmethod
    def resolve(cls, service_cls: type) -> EntryPoint | None:
        cached = service_cls.__dict__.get(cls._CACHE_ATTR, _UNRESOLVED)
        if cached is not _UNRESOLVED:
            return cached

        has_sync = callable(getattr(service_cls, SYNC_ENTRY, None))
        has_deferred = callable(getattr(service_cls, DEFERRED_ENTRY, None))

        if has_sync and has_deferred:
            raise AmbiguousProcessError(service_cls.__qualname__)
        if has_sync:
            entry: EntryPoint | None = EntryPoint(SYNC_ENTRY, deferred=False)
        elif has_deferred:
            entry = EntryPoint(DEFERRED_ENTRY, deferred=True)
        else:
            entry = None

        setattr(service_cls, cls._CACHE_ATTR, entry)
        return entry


_UNRESOLVED = object()

__all__ = ["EntryPoint", "ProcessResolver", "SYNC_ENTRY", "DEFERRED_ENTRY"]
