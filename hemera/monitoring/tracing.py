"""OpenTelemetry span scope around instrumented calls.

Plain functions and coroutines run inside one ``start_as_current_span``
scope. Generators suspend between items, so their span is started
detached and only made current while the inner generator is resumed;
between resumptions the caller's own current span is untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import Any

from opentelemetry import context, trace
from opentelemetry.trace import Span, Status, StatusCode

from hemera.config.defaults import SPAN_NAME, TRACER_NAME

# A proxy tracer: it follows whichever provider the application installs.
_tracer = trace.get_tracer(TRACER_NAME)


def span_scope(label: str, enabled: bool) -> AbstractContextManager[Any]:
    """Return a context manager covering one timed call.

    Args:
        label: Function label, recorded as the ``function`` span attribute.
        enabled: Whether tracing is switched on for this function.

    Returns:
        An entered-on-``with`` span when enabled, else a no-op context.
    """
    if not enabled:
        return nullcontext()
    return _tracer.start_as_current_span(SPAN_NAME, attributes={"function": label})


def start_detached_span(label: str, enabled: bool) -> Span | None:
    """Start a span for a generator call without making it current."""
    if not enabled:
        return None
    return _tracer.start_span(SPAN_NAME, attributes={"function": label})


@contextmanager
def _ending(span: Span) -> Iterator[Span]:
    try:
        yield span
    except Exception as exc:
        span.record_exception(exc)
        span.set_status(Status(StatusCode.ERROR, f"{type(exc).__name__}: {exc}"))
        raise
    finally:
        span.end()


def ending_scope(span: Span | None) -> AbstractContextManager[Any]:
    """Return a context manager that ends a detached span on exit.

    Entering it changes no context; exceptions passing through are
    recorded on the span before it ends.
    """
    if span is None:
        return nullcontext()
    return _ending(span)


def activate(span: Span | None) -> object | None:
    """Make ``span`` current; returns the token for ``deactivate``."""
    if span is None:
        return None
    return context.attach(trace.set_span_in_context(span))


def deactivate(token: object | None) -> None:
    if token is not None:
        context.detach(token)  # type: ignore[arg-type]
