from __future__ import annotations

"""
Global Domain Constants.

Colour hints understood by secondary sinks and fixed diagnostic messages
emitted by the logging and invocation layers.
"""

from typing import Dict, Final

# -----------------------------------------------------------------------------
# SECONDARY SINK HINTS
# -----------------------------------------------------------------------------
HINT_ERROR: Final[str] = "IndianRed"
HINT_WARNING: Final[str] = "Orange"
HINT_INFO: Final[str] = "White"

# Hex values used by widgets that cannot resolve named colours
HINT_COLORS: Final[Dict[str, str]] = {
    HINT_ERROR: "#CD5C5C",
    HINT_WARNING: "#FFA500",
    HINT_INFO: "#FFFFFF",
}

# -----------------------------------------------------------------------------
# FIXED MESSAGES
# -----------------------------------------------------------------------------
LOGGING_FAILURE_MESSAGE: Final[str] = "HostGuard logging failure!"
INVALID_SELECTOR_TEMPLATE: Final[str] = "Invalid {label} number."
DEFAULT_CALL_CONTEXT_TEMPLATE: Final[str] = "Failed to call '{name}'."

# -----------------------------------------------------------------------------
# SETTINGS SCHEMA
# -----------------------------------------------------------------------------
CURRENT_SETTINGS_VERSION: Final[str] = "1.0.0"
