from __future__ import annotations

"""
Hour-Partitioned Error Log.

Durable sink for error and diagnostic messages. Every entry is appended
to the file of the wall-clock hour in which it is written, under a lock
shared by all writers of the process, and can optionally be mirrored to a
secondary sink (host console / UI).

Logging is fail-safe: a broken filesystem path is reported to the
secondary sink and never surfaces to the caller of `log_error`.
"""

import logging
import os
import sys
import threading
from datetime import datetime
from typing import Callable, Optional

from hostguard.domain.constants import HINT_ERROR, LOGGING_FAILURE_MESSAGE
from hostguard.domain.settings import LoggingSettings
from hostguard.infra.fs import LOG_SUBDIR, ensure_dir, get_log_dir
from hostguard.infra.logging.secondary import SecondarySink, StreamSink, as_sink
from hostguard.infra.logging.window import format_line, get_log_file_name

logger = logging.getLogger(__name__)

# Serialises every append of the process, whatever ErrorLog instance issues it
_WRITE_LOCK = threading.Lock()


class ErrorLog:
    """
    Thread-safe, hour-bucketed error log.

    Files are named "<YYYY-MM-DD> <HH>-<HH+1>.log" and live in
    `<base_dir>/<subdir>`. The directory is created lazily by the first
    write.
    """

    def __init__(
            self,
            base_dir: Optional[str] = None,
            subdir: str = LOG_SUBDIR,
            settings: Optional[LoggingSettings] = None,
            secondary_sink: Optional[object] = None,
            clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            base_dir: Application base directory. Resolved automatically if None.
            subdir: Name of the log folder under `base_dir`.
            settings: Initial destination switches. Defaults to file-only logging.
            secondary_sink: Sink object or `(text, hint)` callable. Defaults to stderr.
            clock: Source of local time, injectable for tests.
        """
        self._log_dir = get_log_dir(base_dir, subdir)
        self._settings = settings or LoggingSettings()
        self._settings_lock = threading.Lock()
        self._sink: SecondarySink = (
            as_sink(secondary_sink) if secondary_sink is not None else StreamSink()
        )
        self._clock = clock or datetime.now

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> LoggingSettings:
        return self._settings

    @property
    def log_dir(self) -> str:
        return self._log_dir

    @property
    def secondary_sink(self) -> SecondarySink:
        return self._sink

    def configure(self, log_to_secondary: bool, log_to_file: bool = True) -> None:
        """
        Replace the destination switches.

        Takes effect for every later `log_error` call, including calls from
        other threads. A call already in flight keeps the snapshot it read.
        """
        new_settings = LoggingSettings(
            log_to_secondary=bool(log_to_secondary),
            log_to_file=bool(log_to_file),
        )
        with self._settings_lock:
            self._settings = new_settings

    def set_secondary_sink(self, sink: object) -> None:
        self._sink = as_sink(sink)

    # -------------------------------------------------------------------------
    # FILE NAMING
    # -------------------------------------------------------------------------

    def get_log_file_name(self) -> str:
        """File name of the current hour window."""
        return get_log_file_name(self._clock())

    def current_log_path(self) -> str:
        return os.path.join(self._log_dir, self.get_log_file_name())

    # -------------------------------------------------------------------------
    # WRITE PATH
    # -------------------------------------------------------------------------

    def log_error(self, message: str) -> None:
        """
        Record a message as "<YYYY-MM-DD HH:MM:SS.fff> <message>".

        Never raises.
        """
        settings = self._settings

        try:
            now = self._clock()
            line = format_line(message if isinstance(message, str) else str(message), now)
        except Exception as e:
            self._report_failure(e)
            return

        if settings.log_to_file:
            try:
                self._append(line, now)
            except Exception as e:
                self._report_failure(e)

        if settings.log_to_secondary:
            self._emit_secondary(line, HINT_ERROR)

    def _append(self, line: str, now: datetime) -> None:
        path = os.path.join(self._log_dir, get_log_file_name(now))
        created = False
        with _WRITE_LOCK:
            if not os.path.isdir(self._log_dir):
                ensure_dir(self._log_dir)
                created = True
            with open(path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

        if created:
            logger.debug(f"ErrorLog: Created log directory at {self._log_dir}")

    # -------------------------------------------------------------------------
    # FALLBACK REPORTING
    # -------------------------------------------------------------------------

    def _report_failure(self, error: Exception) -> None:
        """Surface a broken file path on the secondary sink only."""
        self._emit_secondary(LOGGING_FAILURE_MESSAGE, HINT_ERROR)
        self._emit_secondary(str(error) or type(error).__name__, HINT_ERROR)

    def _emit_secondary(self, text: str, hint: str) -> None:
        try:
            self._sink.print_message(text, hint)
        except Exception as e:
            # Last resort: the console itself is broken
            try:
                sys.stderr.write(f"WARNING: Secondary sink failure: {e} | {text}\n")
            except Exception:
                pass
