"""Decorator argument parsing.

Arguments arrive either as keyword arguments (``@hemera(name="Query")``)
or as attribute text (``@hemera('name = "Query", threshold = "10ms"')``).
Both forms are reduced to ``(key, value)`` pairs and validated here into
an ``InstrumentationConfig``. The first problem found is raised; there is
no partially-valid configuration.
"""

from __future__ import annotations

import ast
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from hemera.exceptions import (
    DuplicateConfigKey,
    InvalidAttributeSyntax,
    InvalidLevelValue,
    UnknownConfigKey,
)
from hemera.instrumentation.duration import parse_duration
from hemera.models.domain import InstrumentationConfig, LevelKind

ConfigArguments = Mapping[str, Any] | Iterable[tuple[str, Any]] | str | None

_PAIR_RE = re.compile(
    r"""\s*(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*"""
    r"""(?P<value>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')\s*(?P<sep>,|$)""",
    re.DOTALL,
)


def parse_attribute_text(text: str) -> list[tuple[str, str]]:
    """Split attribute text into ``(key, value)`` pairs.

    Keys are not checked here, only the ``key = "value"`` syntax.

    Args:
        text: Comma-separated ``key = "value"`` list, possibly empty.

    Returns:
        The pairs in source order, string escapes already decoded.

    Raises:
        InvalidAttributeSyntax: If the text is not such a list.
    """
    pairs: list[tuple[str, str]] = []
    pos = 0
    while text[pos:].strip():
        match = _PAIR_RE.match(text, pos)
        if match is None:
            msg = f'malformed attribute list at {text[pos:].strip()!r}: expected key = "value"'
            raise InvalidAttributeSyntax(msg, value=text)
        try:
            value = ast.literal_eval(match["value"])
        except (SyntaxError, ValueError):
            msg = f"attribute {match['key']!r} has an invalid string literal {match['value']}"
            raise InvalidAttributeSyntax(msg, key=match["key"], value=match["value"]) from None
        pairs.append((match["key"], value))
        pos = match.end()
        if not match["sep"]:
            break
    return pairs


def _parse_name(value: str) -> dict[str, Any]:
    return {"label": value}


def _parse_level(value: str) -> dict[str, Any]:
    try:
        return {"level": LevelKind(value)}
    except ValueError:
        msg = f'level must be either "debug" or "info", got {value!r}'
        raise InvalidLevelValue(msg, key="level", value=value) from None


def _parse_threshold(value: str) -> dict[str, Any]:
    return {"threshold": parse_duration(value)}


_KEY_PARSERS: dict[str, Callable[[str], dict[str, Any]]] = {
    "name": _parse_name,
    "level": _parse_level,
    "threshold": _parse_threshold,
}


def _as_pairs(arguments: ConfigArguments) -> list[tuple[str, Any]]:
    if arguments is None:
        return []
    if isinstance(arguments, str):
        return list(parse_attribute_text(arguments))
    if isinstance(arguments, Mapping):
        return list(arguments.items())
    return list(arguments)


def parse_config(arguments: ConfigArguments = None) -> InstrumentationConfig:
    """Validate decorator arguments into an InstrumentationConfig.

    Args:
        arguments: A mapping, ``(key, value)`` pairs, attribute text, or
            None for all defaults.

    Returns:
        The validated configuration.

    Raises:
        UnknownConfigKey: A key other than name, level or threshold.
        DuplicateConfigKey: The same key given twice.
        InvalidLevelValue: A level other than "info" or "debug".
        InvalidDurationFormat: A threshold that does not parse.
        InvalidAttributeSyntax: Malformed text or a non-string value.
    """
    fields: dict[str, Any] = {}
    seen: set[str] = set()

    for key, value in _as_pairs(arguments):
        parser = _KEY_PARSERS.get(key)
        if parser is None:
            msg = f"unknown attribute {key!r}: expected one of {', '.join(_KEY_PARSERS)}"
            raise UnknownConfigKey(msg, key=key, value=value)
        if key in seen:
            msg = f"attribute {key!r} given more than once"
            raise DuplicateConfigKey(msg, key=key, value=value)
        seen.add(key)

        if not isinstance(value, str):
            kind = type(value).__name__
            msg = f"attribute {key!r} expects a string literal, got {kind}: {value!r}"
            raise InvalidAttributeSyntax(msg, key=key, value=value)
        fields.update(parser(value))

    return InstrumentationConfig(**fields)
