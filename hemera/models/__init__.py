"""Models module for Hemera: domain values and enums."""

from hemera.models.domain import (
    Duration,
    ExecutionModel,
    FunctionShape,
    InstrumentationConfig,
    LevelKind,
)

__all__ = [
    "Duration",
    "ExecutionModel",
    "FunctionShape",
    "InstrumentationConfig",
    "LevelKind",
]
