"""Threshold parsing and human-readable duration formatting.

Thresholds are written as a number immediately followed by a unit:
``"10ms"``, ``"1.5s"``, ``"500us"``, ``"250µs"``, ``"1000ns"``.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from hemera.exceptions import InvalidDurationFormat
from hemera.models.domain import (
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_SEC,
    Duration,
)

# Longest suffixes first so "ms" is never read as "m" + "s".
_UNIT_SCALES: tuple[tuple[str, int], ...] = (
    ("ms", NANOS_PER_MILLI),
    ("us", NANOS_PER_MICRO),
    ("µs", NANOS_PER_MICRO),  # micro sign
    ("μs", NANOS_PER_MICRO),  # greek small letter mu
    ("ns", 1),
    ("s", NANOS_PER_SEC),
)

_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")

# Largest unit first; formatting picks the first one the value reaches.
_DISPLAY_UNITS: tuple[tuple[int, str], ...] = (
    (NANOS_PER_SEC, "s"),
    (NANOS_PER_MILLI, "ms"),
    (NANOS_PER_MICRO, "µs"),
    (1, "ns"),
)

_EXPECTED_FORM = (
    "expected a non-negative number followed by 's', 'ms', 'us', 'µs' or 'ns' (e.g. \"10ms\")"
)


def parse_duration(text: str) -> Duration:
    """Parse a threshold string into a Duration.

    Fractional values are rounded to the nearest nanosecond, ties away
    from zero.

    Args:
        text: Threshold such as ``"10ms"`` or ``"1.5s"``.

    Returns:
        The parsed Duration.

    Raises:
        InvalidDurationFormat: If the text is empty, negative, has an
            unknown unit or a malformed number.
    """
    if not isinstance(text, str):
        msg = f"threshold must be a string, got {type(text).__name__}: {_EXPECTED_FORM}"
        raise InvalidDurationFormat(msg, key="threshold", value=text)

    stripped = text.strip()
    if not stripped:
        msg = f"threshold is empty: {_EXPECTED_FORM}"
        raise InvalidDurationFormat(msg, key="threshold", value=text)

    if stripped.startswith("-"):
        msg = f"threshold {text!r} is negative: {_EXPECTED_FORM}"
        raise InvalidDurationFormat(msg, key="threshold", value=text)

    for suffix, scale in _UNIT_SCALES:
        if stripped.endswith(suffix):
            number = stripped[: -len(suffix)]
            break
    else:
        msg = f"threshold {text!r} has no recognised unit: {_EXPECTED_FORM}"
        raise InvalidDurationFormat(msg, key="threshold", value=text)

    if not _NUMBER_RE.fullmatch(number):
        msg = f"threshold {text!r} has an invalid numeric part {number!r}: {_EXPECTED_FORM}"
        raise InvalidDurationFormat(msg, key="threshold", value=text)

    nanos = (Decimal(number) * scale).to_integral_value(rounding=ROUND_HALF_UP)
    return Duration(nanos=int(nanos))


def _thousandths(nanos: int, scale: int) -> int:
    """Express ``nanos`` in thousandths of ``scale``, rounding half up."""
    return (nanos * 1000 + scale // 2) // scale


def format_duration(duration: Duration) -> str:
    """Render a Duration with an auto-selected unit and three decimals.

    The unit is the largest of s, ms, µs and ns in which the value is at
    least 1; zero renders as ``"0.000ns"``. If rounding lifts the value to
    1000 of a unit, the next larger unit is used instead.

    Args:
        duration: The elapsed time to render.

    Returns:
        A string such as ``"23.456µs"`` or ``"1.234ms"``.
    """
    nanos = duration.nanos
    index = next(i for i, (scale, _) in enumerate(_DISPLAY_UNITS) if nanos >= scale or scale == 1)
    scale, unit = _DISPLAY_UNITS[index]
    value = _thousandths(nanos, scale)

    if value >= 1000 * 1000 and index > 0:
        scale, unit = _DISPLAY_UNITS[index - 1]
        value = _thousandths(nanos, scale)

    whole, frac = divmod(value, 1000)
    return f"{whole}.{frac:03d}{unit}"
