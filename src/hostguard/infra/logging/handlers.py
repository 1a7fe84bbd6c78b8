from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the handler that routes stdlib log records into the hour-partitioned
error log, plus internal tagging helpers so HostGuard can tell its own
handlers apart from handlers injected by the host application.
"""

import logging
from typing import Optional

from hostguard.infra.logging.secondary import MIRRORED_RECORD_ATTR
from hostguard.infra.logging.sink import ErrorLog

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_hostguard_handler"

# Records from the sink's own package are never routed back into it
_SINK_LOGGER_PREFIX: str = "hostguard.infra.logging"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed HostGuard handler.

    Args:
        handler: The logging handler instance to tag.
    """
    try:
        setattr(handler, _HANDLER_TAG_ATTR, True)
    except Exception:
        pass


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was initialized by this diagnostic module.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# ERROR LOG ROUTING
# ==============================================================================

class _SkipSinkRecords(logging.Filter):
    """Drop records produced by the sink itself or mirrored out of it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, MIRRORED_RECORD_ATTR, False):
            return False
        return not record.name.startswith(_SINK_LOGGER_PREFIX)


class ErrorLogHandler(logging.Handler):
    """
    Forward formatted records to an ErrorLog.

    The error log stamps its own timestamp, so the formatter only needs to
    render the logger name and the message (plus exception text, if any).
    """

    def __init__(self, error_log: ErrorLog, level: int = logging.ERROR):
        super().__init__(level)
        self._error_log = error_log
        self.addFilter(_SkipSinkRecords())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self._error_log.log_error(msg)


def _create_error_log_handler(
        error_log: Optional[ErrorLog],
        formatter: logging.Formatter,
) -> Optional[ErrorLogHandler]:
    """
    Initialize an ErrorLogHandler bound to `error_log`.

    Returns:
        Optional[ErrorLogHandler]: Configured handler, or None without a target log.
    """
    if error_log is None:
        return None
    handler = ErrorLogHandler(error_log)
    handler.setFormatter(formatter)
    _tag_handler(handler)
    return handler
