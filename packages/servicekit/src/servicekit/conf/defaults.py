"""Default configuration values for servicekit."""

import os

DEFAULTS: dict[str, object] = {
    # Transaction boundary around the entry point
    "WRAP_IN_TRANSACTION": True,
    "TRANSACTION_PROVIDER": "servicekit.services.transaction:NullTransactionProvider",
    "TRANSACTION_SAVEPOINT": False,
    # Process-wide defaults for per-call options (an explicit call option always wins)
    "FORCE": False,
    "SKIP_CALLBACKS": False,
    # Deferred dispatch
    "ENVIRONMENT": os.getenv("SERVICEKIT_ENV", "production"),
    "INTERACTIVE_ENVIRONMENTS": ("development", "test"),
    "QUEUE_BACKEND": "inline",
    "CELERY_QUEUE": None,
    "WORKER_PROBE": None,
    "WORKER_PROBE_TIMEOUT": 1.0,
}
