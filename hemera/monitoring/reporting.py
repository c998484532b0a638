"""Report line emission.

The report line format is fixed::

    [TIMING] Function '<label>' executed in <value><unit>

Info reports go to standard output, debug reports to standard error.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from hemera.instrumentation.duration import format_duration
from hemera.models.domain import Duration, LevelKind

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = "[TIMING] Function '{label}' executed in {elapsed}"


def render_report(label: str, elapsed: Duration) -> str:
    """Build the report line for one call."""
    return REPORT_TEMPLATE.format(label=label, elapsed=format_duration(elapsed))


def _stream_for(level: LevelKind) -> TextIO:
    # Looked up per call so redirected streams are honoured.
    return sys.stderr if level is LevelKind.DEBUG else sys.stdout


def emit_report(label: str, elapsed: Duration, level: LevelKind) -> None:
    """Write the report line to the channel selected by ``level``.

    Args:
        label: Function label shown in the report.
        elapsed: Measured duration of the call.
        level: INFO for stdout, DEBUG for stderr.
    """
    print(render_report(label, elapsed), file=_stream_for(level))
    logger.debug(
        "function_timing",
        extra={
            "extra": {
                "function": label,
                "elapsed_ns": elapsed.nanos,
                "level": str(level),
            }
        },
    )
