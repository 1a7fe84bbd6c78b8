from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of HostGuard's ambient (stdlib)
logging. Handlers sit behind a QueueHandler/QueueListener pair so that
emitting a diagnostic record never blocks the calling thread on console
or file I/O. The error log write path (ErrorLog.log_error) stays
synchronous and does not go through this queue.
"""

import atexit
import logging
import os
import queue
import sys
from collections import deque
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from hostguard.infra.logging.config import _LEVEL_MAP, LoggingConfig
from hostguard.infra.logging.handlers import (
    _create_error_log_handler,
    _is_our_handler,
    _tag_handler,
)
from hostguard.infra.logging.sink import ErrorLog

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_hostguard_configured"
_QUEUE_LISTENER_ATTR: str = "_hostguard_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(
        cfg: LoggingConfig,
        error_log: Optional[ErrorLog] = None,
        *,
        force: bool = False,
) -> logging.Logger:
    """
    Execute idempotent configuration of the root logger using non-blocking I/O.

    Args:
        cfg: Structural configuration for the logging system.
        error_log: Target for ERROR+ records when `cfg.route_errors` is set.
        force: If True, bypass idempotency checks and re-initialize handlers.

    Returns:
        logging.Logger: The initialized root logger instance.
    """
    root = logging.getLogger()

    try:
        # 1. Idempotency Check
        already_configured = bool(getattr(root, _CONFIGURED_FLAG_ATTR, False))
        if already_configured and not force:
            return root

        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        # Cleanup existing infrastructure to prevent handler leakage
        _remove_our_handlers(root)
        _stop_existing_listener(root)

        # 2. Handler Definition
        handlers_list: List[logging.Handler] = []

        if cfg.console:
            sh = logging.StreamHandler(sys.stderr)
            sh.setLevel(level_int)
            sh.setFormatter(logging.Formatter(cfg.console_fmt))
            _tag_handler(sh)
            handlers_list.append(sh)

        if cfg.route_errors:
            eh = _create_error_log_handler(error_log, logging.Formatter(cfg.route_fmt))
            if eh:
                handlers_list.append(eh)

        if not handlers_list:
            return root

        # 3. Queue-Based Orchestration (Non-blocking I/O)
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        # Flush pending records on interpreter shutdown
        atexit.register(_safe_stop_listener, listener)

        return root

    # Fallback to emergency console logging if the infrastructure fails
    except Exception:
        try:
            fallback = logging.getLogger()
            fallback.setLevel(logging.INFO)
            _remove_our_handlers(fallback)
            _stop_existing_listener(fallback)

            sh = logging.StreamHandler(sys.stderr)
            sh.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
            _tag_handler(sh)
            fallback.addHandler(sh)

            fallback.warning("Diagnostic infrastructure failed. Switched to emergency console.")
            return fallback
        except Exception:
            return root


def shutdown_logging() -> None:
    """Detach HostGuard handlers and flush the queue listener."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance compliant with the global configuration.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


def get_recent_logs(error_log: ErrorLog, n_lines: int = 100) -> str:
    """
    Extract the tail of the current hour-window file for diagnostics.

    Args:
        error_log: Log whose current file is read.
        n_lines: Maximum number of lines to retrieve from the file end.

    Returns:
        str: Consolidated log tail content.
    """
    log_path = error_log.current_log_path()
    if not os.path.exists(log_path):
        return "Log file not found."

    # Use errors='replace' to avoid crashes on partially corrupted log files
    try:
        with open(log_path, "r", encoding="utf-8", errors="replace") as f:
            return "".join(deque(f, maxlen=max(0, n_lines)))
    except OSError as e:
        return f"Error retrieving logs: {e}"


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    """Identify and detach all internally-managed handlers from the root."""
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            try:
                h.close()
            except Exception:
                pass


def _stop_existing_listener(root: logging.Logger) -> None:
    """Terminate and release the existing QueueListener to reset state."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Safely stop a QueueListener preventing crashes on double-stop calls.

    Handles cases where the internal thread has already been joined or
    set to None (atexit after an explicit shutdown, test resets).
    """
    if not listener:
        return

    try:
        if getattr(listener, "_thread", None) is not None:
            listener.stop()
    except Exception:
        pass
