"""Shared test fixtures for the Hemera test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from hemera.instrumentation import synthesizer
from hemera.monitoring import tracing

# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep HEMERA_ variables and stray .env files out of every test."""
    monkeypatch.delenv("HEMERA_TRACING_ENABLED", raising=False)
    monkeypatch.delenv("HEMERA_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HEMERA_LOG_FORMAT", raising=False)
    monkeypatch.delenv("HEMERA_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Clock control
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Replace the synthesizer's monotonic clock with scripted readings.

    Call the fixture with nanosecond readings; each ``perf_counter_ns()``
    call consumes the next one.
    """

    def install(*readings: int) -> None:
        values = iter(readings)
        monkeypatch.setattr(synthesizer, "perf_counter_ns", lambda: next(values))

    return install


# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------


@pytest.fixture()
def span_exporter(monkeypatch: pytest.MonkeyPatch) -> Iterator[InMemorySpanExporter]:
    """Route Hemera spans into an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(tracing, "_tracer", provider.get_tracer("hemera"))
    yield exporter
    provider.shutdown()
