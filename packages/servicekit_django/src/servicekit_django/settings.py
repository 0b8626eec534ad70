# servicekit_django/settings.py
"""
Package-level configuration helpers for `servicekit_django`.

This is **not** your project's Django `settings.py`. Project settings use the
``SERVICEKIT_`` prefix for every core key (``SERVICEKIT_WRAP_IN_TRANSACTION``,
``SERVICEKIT_QUEUE_BACKEND``, ...). At startup :func:`apply_to_core` overlays
them on :data:`servicekit.conf.settings`.

Defaults that differ from the framework-agnostic core:
- ENVIRONMENT: "development" when ``DEBUG`` else "production"
- TRANSACTION_PROVIDER: the ``transaction.atomic`` provider
- WORKER_PROBE: the Celery ``inspect().ping()`` probe
"""

from typing import Any

from django.conf import settings as dj_settings

from servicekit.conf import settings as core_settings
from servicekit.conf.defaults import DEFAULTS as CORE_DEFAULTS

PREFIX = "SERVICEKIT_"

DEFAULTS = {
    "TRANSACTION_PROVIDER": "servicekit_django.transaction:DjangoTransactionProvider",
    "WORKER_PROBE": "servicekit_django.probes:CeleryWorkerProbe",
}


def get_setting(key: str, default: Any | None = None) -> Any:
    """Return ``SERVICEKIT_<key>`` from the Django project or fall back.

    The lookup order is: project settings -> provided default -> Django-layer
    DEFAULTS -> core DEFAULTS.
    """
    name = f"{PREFIX}{key}"
    if hasattr(dj_settings, name):
        return getattr(dj_settings, name)
    if default is not None:
        return default
    if key == "ENVIRONMENT":
        return "development" if getattr(dj_settings, "DEBUG", False) else "production"
    if key in DEFAULTS:
        return DEFAULTS[key]
    return CORE_DEFAULTS.get(key)


def get_bool(key: str, default: bool | None = None) -> bool:
    """Coerce a setting to boolean with a sensible fallback."""
    val = get_setting(key, default)
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() in {"1", "true", "yes", "on"}
    return bool(val)


def core_overlay() -> dict[str, Any]:
    """Every core key resolved through the Django layer."""
    return {key: get_setting(key) for key in CORE_DEFAULTS}


def apply_to_core() -> dict[str, Any]:
    overlay = core_overlay()
    core_settings.update_from_mapping(overlay)
    return overlay


__all__ = ["get_setting", "get_bool", "core_overlay", "apply_to_core", "PREFIX"]
