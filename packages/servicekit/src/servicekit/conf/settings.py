"""Mapping-like configuration inspired by Celery settings handling.

A single process-wide :data:`settings` instance is read by the service
lifecycle. Integrations (e.g. ``servicekit_django``) overlay their own values
at startup; tests use :meth:`Settings.override`.
"""


import importlib
import os
from collections import ChainMap
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(MutableMapping[str, Any]):
    """Layered settings with defaults and optional overlays."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._storage = ChainMap({}, *(dict(layer) for layer in layers), dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0][key] = value

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    # Helpers ----------------------------------------------------------
    def update_from_object(self, obj: str, *, namespace: str | None = None) -> None:
        module = importlib.import_module(obj)
        self.update_from_mapping(vars(module), namespace=namespace)

    def update_from_envvar(self, envvar: str = "SERVICEKIT_CONFIG_MODULE", *, namespace: str | None = None) -> None:
        module_name = os.environ.get(envvar)
        if not module_name:
            return
        self.update_from_object(module_name, namespace=namespace)

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._storage.maps[0].update(_filter_by_namespace(mapping, namespace))

    def get_bool(self, key: str) -> bool:
        val = self.get(key)
        if isinstance(val, str):
            return val.strip().lower() in _TRUTHY
        return bool(val)

    def reset(self) -> None:
        """Drop every overlay value, falling back to :data:`DEFAULTS`."""
        self._storage.maps[0].clear()

    @contextmanager
    def override(self, **values: Any) -> Iterator["Settings"]:
        """Temporarily set values on the top layer; restores the previous state on exit."""
        top = self._storage.maps[0]
        saved = dict(top)
        top.update(values)
        try:
            yield self
        finally:
            top.clear()
            top.update(saved)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def _filter_by_namespace(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    if namespace is None:
        return {k: v for k, v in mapping.items() if k.isupper()}

    prefix = f"{namespace}_"
    output: dict[str, Any] = {}
    for key, value in mapping.items():
        if not key.startswith(prefix):
            continue
        short_key = key[len(prefix) :]
        output[short_key] = value
    return output


settings = Settings()

__all__ = ["Settings", "settings"]
