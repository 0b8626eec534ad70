from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from servicekit.tracing import extract_trace, inject_trace, service_attrs, service_span_sync

TRACE_ID = 0x4BF92F3577B34DA6A3CE929D0E0E4736
SPAN_ID = 0x00F067AA0BA902B7


def _span():
    return NonRecordingSpan(
        SpanContext(trace_id=TRACE_ID, span_id=SPAN_ID, is_remote=False, trace_flags=TraceFlags(TraceFlags.SAMPLED))
    )


def test_inject_returns_w3c_traceparent_of_current_span():
    with trace.use_span(_span()):
        traceparent = inject_trace()
    assert traceparent == "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"


def test_inject_without_active_span_returns_none():
    assert inject_trace() is None


def test_extract_round_trips_the_span_context():
    ctx = extract_trace("00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01")
    span_ctx = trace.get_current_span(ctx).get_span_context()
    assert span_ctx.trace_id == TRACE_ID
    assert span_ctx.is_remote is True


def test_extract_of_nothing_is_none():
    assert extract_trace(None) is None
    assert extract_trace("") is None


def test_service_attrs_names_the_type():
    class Svc:
        pass

    attrs = service_attrs(Svc, backend="inline")
    assert attrs["servicekit.service"] == f"{Svc.__module__}:{Svc.__qualname__}"
    assert attrs["servicekit.backend"] == "inline"


def test_span_context_manager_reraises():
    try:
        with service_span_sync("servicekit.test", attributes={"k": "v", "skip": None}):
            raise RuntimeError("inside")
    except RuntimeError as exc:
        assert str(exc) == "inside"
    else:
        raise AssertionError("expected RuntimeError")
