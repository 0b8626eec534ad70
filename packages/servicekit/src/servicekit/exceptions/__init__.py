"""
Exception classes shared across servicekit.

Service lifecycle errors (definition, execution, dispatch) live in
:mod:`servicekit.services.exceptions` and are re-exported from the package root.
"""

from .base import RegistryError, RegistryLookupError, ServiceKitError

__all__ = [
    "ServiceKitError",
    "RegistryError",
    "RegistryLookupError",
]
