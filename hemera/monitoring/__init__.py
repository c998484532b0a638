"""Monitoring module for Hemera.

Provides report emission, the OpenTelemetry span scope and structured
logging setup.
"""

from hemera.monitoring.logging import JSONFormatter, configure_logging
from hemera.monitoring.reporting import emit_report, render_report
from hemera.monitoring.tracing import span_scope

__all__ = [
    "JSONFormatter",
    "configure_logging",
    "emit_report",
    "render_report",
    "span_scope",
]
