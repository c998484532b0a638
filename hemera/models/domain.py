"""Pydantic domain models and enums for Hemera.

These models are the values passed between the parsing, classification
and synthesis stages. All of them are immutable once built.
"""

from __future__ import annotations

import enum
import functools
import inspect
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class LevelKind(enum.StrEnum):
    """Report channel: info goes to stdout, debug goes to stderr."""

    INFO = "info"
    DEBUG = "debug"


class ExecutionModel(enum.StrEnum):
    """How a function produces its result."""

    IMMEDIATE = "immediate"
    SUSPENDING = "suspending"
    GENERATOR = "generator"
    ASYNC_GENERATOR = "async_generator"

    @property
    def is_async(self) -> bool:
        """Whether the function is declared with ``async def``."""
        return self in (ExecutionModel.SUSPENDING, ExecutionModel.ASYNC_GENERATOR)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SEC = 1_000_000_000


@functools.total_ordering
class Duration(BaseModel):
    """A non-negative elapsed time with nanosecond resolution."""

    model_config = ConfigDict(frozen=True)

    nanos: int = Field(ge=0)

    @classmethod
    def from_nanos(cls, nanos: int) -> Duration:
        return cls(nanos=nanos)

    @classmethod
    def from_micros(cls, micros: int) -> Duration:
        return cls(nanos=micros * NANOS_PER_MICRO)

    @classmethod
    def from_millis(cls, millis: int) -> Duration:
        return cls(nanos=millis * NANOS_PER_MILLI)

    @classmethod
    def from_secs(cls, secs: int) -> Duration:
        return cls(nanos=secs * NANOS_PER_SEC)

    def as_secs_f64(self) -> float:
        return self.nanos / NANOS_PER_SEC

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanos < other.nanos


class InstrumentationConfig(BaseModel):
    """Validated decorator arguments for a single function."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    level: LevelKind = LevelKind.INFO
    threshold: Duration | None = None

    def resolve_label(self, default: str) -> str:
        """Return the custom label, falling back to the function's name."""
        return self.label if self.label is not None else default


class FunctionShape(BaseModel):
    """Structural read of a function, consumed by the wrapper synthesizer.

    ``body`` is the original callable; it is only ever invoked, never
    inspected further or modified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    qualname: str
    module: str | None = None
    type_params: tuple[Any, ...] = ()
    parameters: tuple[inspect.Parameter, ...] = ()
    returns: Any = None
    model: ExecutionModel
    body: Callable[..., Any]
    binding: Literal["function", "classmethod", "staticmethod"] = "function"

    @property
    def is_async(self) -> bool:
        return self.model.is_async
