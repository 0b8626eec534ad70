# servicekit_django/transaction.py
"""`transaction.atomic` boundary for service entry points."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from django.db import DEFAULT_DB_ALIAS, transaction

from servicekit.conf import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DjangoTransactionProvider:
    """
    Runs the entry point in ``transaction.atomic``.

    ``savepoint`` defaults to the TRANSACTION_SAVEPOINT setting (False), so a
    service called from inside another service's entry point joins the outer
    transaction instead of opening a savepoint.
    """

    def __init__(self, using: str | None = None, *, savepoint: bool | None = None) -> None:
        self.using = using or DEFAULT_DB_ALIAS
        self.savepoint = settings.get_bool("TRANSACTION_SAVEPOINT") if savepoint is None else savepoint

    def run_in_transaction(self, fn: Callable[[], T]) -> T:
        with transaction.atomic(using=self.using, savepoint=self.savepoint):
            return fn()

    def rollback_current(self) -> None:
        if not transaction.get_connection(self.using).in_atomic_block:
            logger.debug("rollback requested outside an atomic block on %s", self.using)
            return
        transaction.set_rollback(True, using=self.using)


__all__ = ["DjangoTransactionProvider"]
