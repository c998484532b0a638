"""Hemera: measure function execution time with a decorator.

    from hemera import hemera

    @hemera(name="DatabaseQuery", threshold="10ms")
    async def fetch_rows(query: str) -> list[dict]:
        ...
"""

from hemera.exceptions import (
    ConfigError,
    DuplicateConfigKey,
    HemeraError,
    InvalidAttributeSyntax,
    InvalidDurationFormat,
    InvalidLevelValue,
    UnknownConfigKey,
)
from hemera.instrumentation import (
    format_duration,
    hemera,
    measure_time,
    parse_config,
    parse_duration,
)
from hemera.models.domain import Duration, InstrumentationConfig, LevelKind

__all__ = [
    "ConfigError",
    "Duration",
    "DuplicateConfigKey",
    "HemeraError",
    "InstrumentationConfig",
    "InvalidAttributeSyntax",
    "InvalidDurationFormat",
    "InvalidLevelValue",
    "LevelKind",
    "UnknownConfigKey",
    "format_duration",
    "hemera",
    "measure_time",
    "parse_config",
    "parse_duration",
]
