"""Tests for the observability module."""

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from src.infrastructure.observability.structlog_processor import add_trace_context
from src.infrastructure.observability.tracing import (
    add_span_attributes,
    get_tracer,
    traced,
)

# Module-level setup: configure TracerProvider once before any tests run
_exporter = InMemorySpanExporter()
_provider = TracerProvider()
_provider.add_span_processor(SimpleSpanProcessor(_exporter))
trace.set_tracer_provider(_provider)


@pytest.fixture(autouse=True)
def clear_spans():
    """Clear spans before each test."""
    _exporter.clear()
    yield
    _exporter.clear()


def get_finished_spans():
    return _exporter.get_finished_spans()


class TestTracedDecorator:
    """Tests for @traced decorator."""

    def test_sync_function(self):
        @traced("sync.op", attributes={"component": "test"})
        def add(a, b):
            return a + b

        assert add(1, 2) == 3

        spans = get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name == "sync.op"
        assert spans[0].attributes["component"] == "test"

    async def test_async_function(self):
        @traced("async.op")
        async def fetch():
            return "result"

        assert await fetch() == "result"

        spans = get_finished_spans()
        assert [span.name for span in spans] == ["async.op"]

    def test_default_span_name(self):
        @traced()
        def named_operation():
            return None

        named_operation()

        assert get_finished_spans()[0].name.endswith("named_operation")

    async def test_exception_recorded(self):
        @traced("failing.op")
        async def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await fail()

        span = get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert [event.name for event in span.events] == ["exception"]

    def test_preserves_metadata(self):
        @traced("meta.op")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestAddSpanAttributes:
    def test_adds_to_current_span(self):
        with get_tracer("test").start_as_current_span("outer"):
            add_span_attributes({"user.id": 7})

        assert get_finished_spans()[0].attributes["user.id"] == 7

    def test_no_span_is_noop(self):
        add_span_attributes({"user.id": 7})

        assert get_finished_spans() == ()


class TestTraceContextProcessor:
    def test_adds_ids_inside_span(self):
        with get_tracer("test").start_as_current_span("op") as span:
            event = add_trace_context(None, "info", {"event": "hello"})
            context = span.get_span_context()

        assert event["trace_id"] == format(context.trace_id, "032x")
        assert event["span_id"] == format(context.span_id, "016x")

    def test_unchanged_outside_span(self):
        event = add_trace_context(None, "info", {"event": "hello"})

        assert event == {"event": "hello"}
