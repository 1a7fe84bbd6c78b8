from __future__ import annotations

"""
Hour-Window Naming.

Maps a wall-clock instant to the log file that owns it. The mapping is a
pure function of local time: there is no rotation state, a new file simply
starts being used when the hour changes.
"""

from datetime import datetime
from typing import Optional, Tuple

LOG_FILE_EXTENSION = ".log"
FILE_DATE_FMT = "%Y-%m-%d"
LINE_TIME_FMT = "%Y-%m-%d %H:%M:%S"


def hour_window(now: datetime) -> Tuple[int, int]:
    """Return the (start, end) hours of the window containing `now`."""
    start = now.hour
    return start, (start + 1) % 24


def get_log_file_name(now: Optional[datetime] = None) -> str:
    """
    Build the file name for the 1-hour window containing `now`.

    Args:
        now: Local instant to resolve. Defaults to the current local time.

    Returns:
        str: Name in the format "YYYY-MM-DD HH-HH.log".
    """
    now = now or datetime.now()
    start, end = hour_window(now)
    return f"{now.strftime(FILE_DATE_FMT)} {start:02d}-{end:02d}{LOG_FILE_EXTENSION}"


def format_timestamp(now: datetime) -> str:
    """Local timestamp with millisecond precision: YYYY-MM-DD HH:MM:SS.fff"""
    return f"{now.strftime(LINE_TIME_FMT)}.{now.microsecond // 1000:03d}"


def format_line(message: str, now: datetime) -> str:
    return f"{format_timestamp(now)} {message}"
