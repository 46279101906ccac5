"""Tracing helpers for cache engine operations (OpenTelemetry API).

Spans are no-ops unless the host process configures an OpenTelemetry SDK.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from vapic.domain.exceptions import VapicException

# Only these kwarg names are recorded as span attributes (values may be payloads).
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "resource_path", "cache_key", "version", "match_type", "max_versions", "prefix",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict) -> None:
    """Set span attributes from kwargs; only allowlisted keys are recorded."""
    for key, value in kwargs.items():
        if value is not None and key in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def traced(operation_name: str | None = None) -> Callable:
    """Decorator to run an async function inside a span.

    VapicException sets the error_code attribute; any exception marks the
    span as error and is re-raised.

    Args:
        operation_name: Span name (defaults to module.funcname).

    Returns:
        Decorated coroutine function.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                _set_safe_span_attrs(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    if isinstance(e, VapicException):
                        span.set_attribute("vapic.error_code", e.error_code)
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
