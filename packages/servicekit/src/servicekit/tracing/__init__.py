# servicekit/tracing/__init__.py
from .propagation import inject_trace, extract_trace
from .tracing import get_tracer, service_span_sync, service_attrs

__all__ = [
    "inject_trace",
    "extract_trace",
    "get_tracer",
    "service_span_sync",
    "service_attrs",
]
