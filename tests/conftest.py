from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for clocks, secondary sinks and error logs rooted in
   a temporary directory.
"""

import os
import sys
from datetime import datetime
from typing import Callable, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from hostguard.infra.logging.sink import ErrorLog  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Helpers
# -----------------------------------------------------------------------------
class RecordingSink:
    """Secondary sink that keeps every (text, hint) pair it receives."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def print_message(self, text: str, hint: str) -> None:
        self.messages.append((text, hint))

    @property
    def texts(self) -> List[str]:
        return [t for t, _ in self.messages]


class FakeClock:
    """Mutable local clock for hour-window tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 17, 14, 5, 9, 123456)


@pytest.fixture
def clock(fixed_now: datetime) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def error_log(tmp_path, recording_sink: RecordingSink, clock: FakeClock) -> ErrorLog:
    """
    Provide an ErrorLog writing under a temporary base directory.

    Prevents tests from writing next to the interpreter's entry script.
    """
    return ErrorLog(base_dir=str(tmp_path), secondary_sink=recording_sink, clock=clock)


@pytest.fixture
def read_log() -> Callable[[ErrorLog], str]:
    """Return the content of the error log's current hour file."""
    def _read(log: ErrorLog) -> str:
        with open(log.current_log_path(), "r", encoding="utf-8") as f:
            return f.read()
    return _read
