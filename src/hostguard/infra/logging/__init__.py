from __future__ import annotations

from .config import LoggingConfig
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_logger,
    get_recent_logs,
    shutdown_logging,
)
from .handlers import _HANDLER_TAG_ATTR, ErrorLogHandler
from .secondary import (
    CallableSink,
    LoggerSink,
    QueueSink,
    SecondarySink,
    StreamSink,
)
from .sink import ErrorLog
from .window import get_log_file_name

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "get_recent_logs",
    "get_log_file_name",
    "ErrorLog",
    "ErrorLogHandler",
    "SecondarySink",
    "StreamSink",
    "QueueSink",
    "LoggerSink",
    "CallableSink",
]
