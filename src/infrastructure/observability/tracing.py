"""Tracing helpers for wrapping service operations in OpenTelemetry spans."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode, Tracer

P = ParamSpec("P")
R = TypeVar("R")

SpanAttributes = dict[str, str | int | float | bool]


def get_tracer(name: str) -> Tracer:
    """Get a tracer for the given module name."""
    return trace.get_tracer(name)


def add_span_attributes(attributes: SpanAttributes) -> None:
    """Add attributes to the current span, if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def traced(
    span_name: str | None = None,
    *,
    attributes: SpanAttributes | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that runs a sync or async function inside a span.

    The tracer is looked up on every call so spans go to whichever
    tracer provider is installed at call time.

    Args:
        span_name: Name for the span (defaults to the function's qualified name).
        attributes: Static attributes to add to the span.

    Examples:
        @traced("auth.login")
        async def login(...):
            ...
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        name = span_name or fn.__qualname__

        def start_span() -> Any:
            tracer = get_tracer(fn.__module__)
            return tracer.start_as_current_span(
                name,
                attributes=attributes,
                record_exception=False,
                set_status_on_exception=False,
            )

        def record_failure(span: trace.Span, exc: Exception) -> None:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))

        if inspect.iscoroutinefunction(fn):

            @wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                with start_span() as span:
                    try:
                        return await fn(*args, **kwargs)  # type: ignore[misc]
                    except Exception as e:
                        record_failure(span, e)
                        raise

            return async_wrapper  # type: ignore[return-value]

        @wraps(fn)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with start_span() as span:
                try:
                    return fn(*args, **kwargs)
                except Exception as e:
                    record_failure(span, e)
                    raise

        return sync_wrapper

    return decorator
