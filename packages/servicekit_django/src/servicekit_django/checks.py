# servicekit_django/checks.py
"""
Django system checks for servicekit configuration.

- ``SERVICEKIT-E001``: TRANSACTION_PROVIDER cannot be imported or does not
  implement ``run_in_transaction``/``rollback_current``.
- ``SERVICEKIT-E002``: QUEUE_BACKEND is not a registered queue backend.
- ``SERVICEKIT-W001``: WORKER_PROBE cannot be imported.

These checks run at startup and can be invoked with `python manage.py check`.
"""

from typing import Iterable, List, Optional

from django.core import checks

from servicekit.conf import settings
from servicekit.queues import get_queue_class, list_queue_names
from servicekit.services.dispatch import get_worker_probe
from servicekit.services.transaction import get_transaction_provider

TAG = "servicekit"


@checks.register(TAG)
def check_servicekit_settings(app_configs: Optional[Iterable] = None, **kwargs) -> List[checks.CheckMessage]:
    messages: List[checks.CheckMessage] = []

    try:
        get_transaction_provider()
    except (ImportError, TypeError) as exc:
        messages.append(
            checks.Error(
                f"SERVICEKIT_TRANSACTION_PROVIDER is invalid: {exc}",
                hint="Point it at a class with run_in_transaction(fn) and rollback_current().",
                id="SERVICEKIT-E001",
            )
        )

    backend = settings.get("QUEUE_BACKEND")
    if get_queue_class(backend) is None:
        messages.append(
            checks.Error(
                f"SERVICEKIT_QUEUE_BACKEND {backend!r} is not registered.",
                hint=f"Known backends: {', '.join(list_queue_names()) or 'none'}.",
                id="SERVICEKIT-E002",
            )
        )

    try:
        get_worker_probe()
    except (ImportError, TypeError) as exc:
        messages.append(
            checks.Warning(
                f"SERVICEKIT_WORKER_PROBE is invalid: {exc}",
                hint="Deferred services will be enqueued without a liveness check in interactive environments.",
                id="SERVICEKIT-W001",
            )
        )

    return messages
