"""Span helpers for account operations.

@traced wraps an async service method in a span named after the operation.
Arguments are bound against the method signature, so account_id and paging
parameters land on the span whether they were passed by position or by
keyword. Anything outside SPAN_ARGUMENTS (passwords, emails, payloads) is
never recorded.
"""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

P = ParamSpec("P")
R = TypeVar("R")

SPAN_ARGUMENTS = frozenset({"account_id", "active", "page", "per_page", "order_by", "sort"})

_tracer = trace.get_tracer("flowerrate.accounts")


def _span_value(value: Any) -> str | int | float | bool:
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(getattr(value, "value", value))


def traced(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Run the decorated coroutine inside a span called operation."""

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _tracer.start_as_current_span(operation) as span:
                try:
                    bound = signature.bind_partial(*args, **kwargs)
                except TypeError:
                    bound = None
                if bound is not None:
                    for name, value in bound.arguments.items():
                        if name in SPAN_ARGUMENTS and value is not None:
                            span.set_attribute(f"account.{name}", _span_value(value))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    raise
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, **attributes: str | int | float | bool) -> None:
    """Record a point-in-time event on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes)
