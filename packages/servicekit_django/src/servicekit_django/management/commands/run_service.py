# run_service.py
import json
import logging
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from servicekit.exceptions import RegistryLookupError
from servicekit.services import ProcessResolver, ServiceError, ServiceRegistry, resolve_service
from servicekit.services.base import INVOCATION_OPTIONS


class Command(BaseCommand):
    help = "Run a servicekit service by identifier ('module:QualName') with JSON parameters."

    def add_arguments(self, parser):
        parser.add_argument(
            "identifier",
            nargs="?",
            type=str,
            help="Service identifier (e.g. 'billing.services:CreateInvoice').",
        )
        parser.add_argument(
            "-p",
            "--params",
            dest="params",
            type=str,
            default="{}",
            help="JSON-encoded constructor parameters (e.g. '{\"customer_id\": 1}').",
        )
        parser.add_argument(
            "--force",
            dest="force",
            action="store_true",
            help="Complete the call even when the service records errors.",
        )
        parser.add_argument(
            "--sync",
            dest="sync",
            action="store_true",
            help="Run a deferred service inline instead of enqueuing it.",
        )
        parser.add_argument(
            "--list",
            dest="list",
            action="store_true",
            help="List registered service identifiers and exit.",
        )
        parser.add_argument(
            "--log-level",
            dest="log_level",
            type=str,
            default="INFO",
            help="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
        )

    def handle(self, *args, **options):
        raw_level = options.get("log_level", "INFO").upper()
        logging.basicConfig(level=getattr(logging, raw_level, logging.INFO))

        if options.get("list"):
            for ident in ServiceRegistry.identifiers():
                self.stdout.write(ident)
            return

        identifier: str | None = options.get("identifier")
        if not identifier:
            raise CommandError("A service identifier is required (or use --list).")
        try:
            Svc = resolve_service(identifier)
        except RegistryLookupError as e:
            raise CommandError(str(e)) from e

        try:
            params: dict[str, Any] = json.loads(options["params"] or "{}")
            if not isinstance(params, dict):
                raise TypeError(f"params must be a JSON object, got {type(params).__name__}")
        except (TypeError, ValueError) as e:
            raise CommandError(f"Invalid --params JSON: {e}") from e
        reserved = sorted(set(params) & set(INVOCATION_OPTIONS))
        if reserved:
            raise CommandError(
                f"--params may not set invocation options ({', '.join(reserved)}); use the command flags instead."
            )

        outcomes: list = []

        def _keep(value, outcome):
            outcomes.append(outcome)

        try:
            value = Svc.call(
                force=options.get("force") or None,
                asynchronous=not options.get("sync"),
                handler=_keep,
                **params,
            )
        except ServiceError as e:
            raise CommandError(f"{identifier} failed: {e}") from e

        entry = ProcessResolver.resolve(Svc)
        if entry is None:
            self.stdout.write(self.style.WARNING(f"{identifier} has no entry point; nothing ran"))
            return
        if entry.deferred and not outcomes:
            self.stdout.write(self.style.SUCCESS(f"Enqueued {identifier}: job {value}"))
            return

        if outcomes:
            outcome = outcomes[0]
            style = self.style.SUCCESS if outcome.success else self.style.ERROR
            self.stdout.write(style(outcome.notice))
        try:
            rendered = json.dumps(value, indent=2, default=str)
        except TypeError:
            rendered = repr(value)
        self.stdout.write(f"Return value:\n{rendered}\n")
