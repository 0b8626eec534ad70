# servicekit/tracing/propagation.py
from opentelemetry.context import Context
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator


def inject_trace() -> str | None:
    """Return the W3C traceparent of the current span, if any."""
    carrier: dict[str, str] = {}
    try:
        TraceContextTextMapPropagator().inject(carrier)
        return carrier.get("traceparent")
    except Exception:
        return None


def extract_trace(traceparent: str | None) -> Context | None:
    if not traceparent:
        return None
    try:
        return TraceContextTextMapPropagator().extract({"traceparent": traceparent})
    except Exception:
        return None
