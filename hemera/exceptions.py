"""Custom exception hierarchy for Hemera.

All Hemera exceptions inherit from HemeraError, enabling catch-all
handling while allowing specific catches. Every ``ConfigError`` is raised
at decoration time, never while an instrumented function runs.
"""

from __future__ import annotations


class HemeraError(Exception):
    """Base exception for all Hemera errors."""


class ConfigError(HemeraError):
    """Invalid decorator configuration.

    Args:
        message: Human-readable description including the expected form.
        key: The offending attribute key, if known.
        value: The offending attribute value, if known.
    """

    def __init__(self, message: str, key: str | None = None, value: object = None) -> None:
        super().__init__(message)
        self.key = key
        self.value = value


class InvalidDurationFormat(ConfigError):
    """Threshold is not a non-negative number followed by s, ms, us, µs or ns."""


class UnknownConfigKey(ConfigError):
    """Attribute key is not one of name, level or threshold."""


class DuplicateConfigKey(ConfigError):
    """Attribute key was supplied more than once."""


class InvalidLevelValue(ConfigError):
    """Level is neither "info" nor "debug"."""


class InvalidAttributeSyntax(ConfigError):
    """Attribute list is malformed or a value is not a string."""
