"""Wrapper synthesis: build the timed replacement for a classified function.

Every execution model shares one ``Measurement``; the per-model wrappers
only differ in how they drive the original body (call, ``await``, or
forwarding next/send/throw/close to a generator). Wrappers never add
suspension points of their own and never alter the body's result or
exceptions. Generator spans are current only while the inner generator
runs.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from contextlib import AbstractContextManager
from time import perf_counter_ns
from types import TracebackType
from typing import Any

from opentelemetry.trace import Span

from hemera.models.domain import (
    Duration,
    ExecutionModel,
    FunctionShape,
    InstrumentationConfig,
    LevelKind,
)
from hemera.monitoring.reporting import emit_report
from hemera.monitoring.tracing import (
    activate,
    deactivate,
    ending_scope,
    span_scope,
    start_detached_span,
)


class Measurement:
    """Times one call activation and reports it through the threshold gate.

    The report is skipped when the body exits with a BaseException that
    is not an Exception (cancellation, generator close, interpreter exit):
    the call never completed, so no "after" sample is taken.

    Args:
        label: Label shown in the report and on the span.
        level: Report channel.
        threshold_ns: Minimum elapsed nanoseconds to report, or None.
        span: Span scope entered before the start sample.
    """

    __slots__ = ("_label", "_level", "_threshold_ns", "_span", "_start")

    def __init__(
        self,
        label: str,
        level: LevelKind,
        threshold_ns: int | None,
        span: AbstractContextManager[Any],
    ) -> None:
        self._label = label
        self._level = level
        self._threshold_ns = threshold_ns
        self._span = span
        self._start = 0

    def __enter__(self) -> Measurement:
        self._span.__enter__()
        self._start = perf_counter_ns()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        try:
            if exc_type is None or issubclass(exc_type, Exception):
                elapsed = perf_counter_ns() - self._start
                if self._threshold_ns is None or elapsed >= self._threshold_ns:
                    emit_report(self._label, Duration(nanos=elapsed), self._level)
        finally:
            self._span.__exit__(exc_type, exc, tb)
        return False


def _wrap_immediate(
    func: Callable[..., Any], measure: Callable[[], Measurement]
) -> Callable[..., Any]:
    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        with measure():
            return func(*args, **kwargs)

    return sync_wrapper


def _wrap_suspending(
    func: Callable[..., Any], measure: Callable[[], Measurement]
) -> Callable[..., Any]:
    @functools.wraps(func)
    async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
        with measure():
            return await func(*args, **kwargs)

    return async_wrapper


def _resume(span: Span | None, advance: Callable[..., Any], *args: Any) -> Any:
    token = activate(span)
    try:
        return advance(*args)
    finally:
        deactivate(token)


async def _aresume(span: Span | None, advance: Callable[..., Any], *args: Any) -> Any:
    token = activate(span)
    try:
        return await advance(*args)
    finally:
        deactivate(token)


def _wrap_generator(
    func: Callable[..., Any], measure_detached: Callable[[], tuple[Measurement, Span | None]]
) -> Callable[..., Any]:
    @functools.wraps(func)
    def generator_wrapper(*args: Any, **kwargs: Any) -> Any:
        measurement, span = measure_detached()
        with measurement:
            gen = func(*args, **kwargs)
            try:
                item = _resume(span, next, gen)
                while True:
                    try:
                        sent = yield item
                    except GeneratorExit:
                        _resume(span, gen.close)
                        raise
                    except BaseException as exc:
                        item = _resume(span, gen.throw, exc)
                    else:
                        item = _resume(span, gen.send, sent)
            except StopIteration as stop:
                return stop.value

    return generator_wrapper


def _wrap_async_generator(
    func: Callable[..., Any], measure_detached: Callable[[], tuple[Measurement, Span | None]]
) -> Callable[..., Any]:
    @functools.wraps(func)
    async def async_generator_wrapper(*args: Any, **kwargs: Any) -> Any:
        measurement, span = measure_detached()
        with measurement:
            agen = func(*args, **kwargs)
            try:
                item = await _aresume(span, agen.__anext__)
                while True:
                    try:
                        sent = yield item
                    except GeneratorExit:
                        await _aresume(span, agen.aclose)
                        raise
                    except BaseException as exc:
                        item = await _aresume(span, agen.athrow, exc)
                    else:
                        item = await _aresume(span, agen.asend, sent)
            except StopAsyncIteration:
                return

    return async_generator_wrapper


def synthesize(
    config: InstrumentationConfig,
    shape: FunctionShape,
    *,
    tracing: bool = False,
) -> Any:
    """Build the instrumented replacement for a classified function.

    The result has the original's name, qualname, module, docstring,
    annotations and type parameters, exposes the original through
    ``__wrapped__`` and keeps its execution model and descriptor binding.

    Args:
        config: Validated decorator configuration.
        shape: Classified target function.
        tracing: Whether each call opens an OpenTelemetry span.

    Returns:
        The wrapper function, or a classmethod/staticmethod around it when
        the target was one.
    """
    label = config.resolve_label(shape.name)
    level = config.level
    threshold_ns = config.threshold.nanos if config.threshold is not None else None

    def measure() -> Measurement:
        return Measurement(label, level, threshold_ns, span_scope(label, tracing))

    def measure_detached() -> tuple[Measurement, Span | None]:
        span = start_detached_span(label, tracing)
        return Measurement(label, level, threshold_ns, ending_scope(span)), span

    if shape.model is ExecutionModel.GENERATOR:
        wrapper = _wrap_generator(shape.body, measure_detached)
    elif shape.model is ExecutionModel.ASYNC_GENERATOR:
        wrapper = _wrap_async_generator(shape.body, measure_detached)
    elif shape.model is ExecutionModel.SUSPENDING:
        wrapper = _wrap_suspending(shape.body, measure)
    else:
        wrapper = _wrap_immediate(shape.body, measure)

    if shape.binding == "classmethod":
        return classmethod(wrapper)
    if shape.binding == "staticmethod":
        return staticmethod(wrapper)
    return wrapper
