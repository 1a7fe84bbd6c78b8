from __future__ import annotations

"""
Logging Configuration Models.

Defines the data structures and constants required to initialize the
ambient (stdlib) logging used for HostGuard's own diagnostics. The error
log destinations themselves are configured through ErrorLog.configure.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable configuration for the logging subsystem initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        route_errors: Forward ERROR+ records into the hour-partitioned error log.
        console_fmt: Structural format for terminal output.
        route_fmt: Structural format for records routed to the error log.
    """
    level: str = "INFO"
    console: bool = True
    route_errors: bool = False

    console_fmt: str = "%(levelname)s | %(message)s"
    route_fmt: str = "%(name)s | %(message)s"
