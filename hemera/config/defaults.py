"""Default values for Hemera settings."""

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "text"
DEFAULT_TRACING_ENABLED = False
DEFAULT_LOG_FILE_MAX_BYTES = 10_485_760  # 10 MB
DEFAULT_LOG_FILE_BACKUP_COUNT = 5

TRACER_NAME = "hemera"
SPAN_NAME = "hemera"
