from __future__ import annotations

"""
Secondary Sinks.

Destinations that mirror error-log lines to a host console or UI and that
receive reports about failures of the file logging path itself. A sink
receives the formatted text and a colour/severity hint.

Sinks are called synchronously from the logging thread. Implementations
should be quick and must tolerate being called from any thread.
"""

import logging
import queue
import sys
from typing import Callable, List, Optional, Protocol, TextIO, Tuple

from hostguard.domain.constants import HINT_ERROR, HINT_WARNING

# Set on records emitted by LoggerSink so they are never routed back into an ErrorLog
MIRRORED_RECORD_ATTR = "_hostguard_mirrored"


class SecondarySink(Protocol):
    """Abstract secondary destination for log messages."""

    def print_message(self, text: str, hint: str) -> None:
        """Display or forward a single message."""


class StreamSink:
    """Write messages to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def print_message(self, text: str, hint: str) -> None:
        stream = self._stream or sys.stderr
        stream.write(text + "\n")
        stream.flush()


class QueueSink:
    """
    Forward messages to a UI through a thread-safe queue.

    Performs no UI operations itself. The consumer (e.g. LogsConsole) drains
    the queue from its own event loop. When the queue is full the message is
    dropped rather than blocking the producer.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: "queue.Queue[Tuple[str, str]]" = queue.Queue(maxsize)

    def print_message(self, text: str, hint: str) -> None:
        try:
            self._queue.put_nowait((text, hint))
        except queue.Full:
            pass

    def drain(self, limit: Optional[int] = None) -> List[Tuple[str, str]]:
        """Pop pending (text, hint) pairs without blocking."""
        items: List[Tuple[str, str]] = []
        while limit is None or len(items) < limit:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return items


class LoggerSink:
    """Bridge secondary messages into a stdlib logger."""

    _HINT_LEVELS = {
        HINT_ERROR: logging.ERROR,
        HINT_WARNING: logging.WARNING,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("hostguard.console")

    def print_message(self, text: str, hint: str) -> None:
        self._logger.log(
            self._HINT_LEVELS.get(hint, logging.INFO),
            text,
            extra={MIRRORED_RECORD_ATTR: True},
        )


class CallableSink:
    """Adapt a plain `(text, hint)` callable, e.g. a host PrintMessage binding."""

    def __init__(self, func: Callable[[str, str], None]):
        self._func = func

    def print_message(self, text: str, hint: str) -> None:
        self._func(text, hint)


def as_sink(target: object) -> SecondarySink:
    """Accept either a sink object or a bare callable."""
    if hasattr(target, "print_message"):
        return target  # type: ignore[return-value]
    if callable(target):
        return CallableSink(target)  # type: ignore[arg-type]
    raise TypeError(f"Not a secondary sink: {target!r}")
