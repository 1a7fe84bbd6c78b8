from __future__ import annotations

"""
Settings Validation and Normalization.

Turns a raw settings document (parsed JSON, CLI input) into GuardSettings.
Never touches the filesystem.

strict=False:
  - corrects invalid values to defaults and records a warning.
  - a non-dict document falls back to defaults.

strict=True:
  - raises TypeError/ValueError on the first invalid value.
"""

import logging
import math
from typing import Any, Dict, List, Tuple

from hostguard.domain.settings import DefaultValues, GuardSettings, LoggingSettings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def validate_settings(
        doc: Any,
        *,
        strict: bool = False,
) -> Tuple[GuardSettings, List[str]]:
    """
    Validate and normalize a settings document.

    Args:
        doc: Raw document with optional "logging" and "defaults" sections.
        strict: Raise instead of correcting.

    Returns:
        Tuple[GuardSettings, List[str]]: (normalized settings, warnings)
    """
    warnings: List[str] = []
    base = GuardSettings()

    if not isinstance(doc, dict):
        msg = f"Invalid settings: expected dict, got {type(doc).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(msg + " Using defaults.")
        logger.warning(msg)
        return base, warnings

    log_section = _as_section(doc.get("logging"), "logging", warnings, strict)
    def_section = _as_section(doc.get("defaults"), "defaults", warnings, strict)

    logging_settings = LoggingSettings(
        log_to_secondary=_as_bool(
            log_section.get("log_to_secondary"), base.logging.log_to_secondary,
            "logging.log_to_secondary", warnings, strict,
        ),
        log_to_file=_as_bool(
            log_section.get("log_to_file"), base.logging.log_to_file,
            "logging.log_to_file", warnings, strict,
        ),
    )

    defaults = DefaultValues(
        default_int=_as_int(
            def_section.get("default_int"), base.defaults.default_int,
            "defaults.default_int", warnings, strict,
        ),
        default_float=_as_float(
            def_section.get("default_float"), base.defaults.default_float,
            "defaults.default_float", warnings, strict,
        ),
        default_bool=_as_bool(
            def_section.get("default_bool"), base.defaults.default_bool,
            "defaults.default_bool", warnings, strict,
        ),
    )

    return GuardSettings(logging=logging_settings, defaults=defaults), warnings


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------
def _as_section(value: Any, field: str, warnings: List[str], strict: bool) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    msg = f"'{field}' must be an object, got {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(msg + " Using defaults.")
    return {}


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    msg = f"'{field}' must be bool, got {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(msg + f" Using {fallback}.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    msg = f"'{field}' must be int, got {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(msg + f" Using {fallback}.")
    return fallback


def _as_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    if value is None:
        return fallback
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            parsed = float(value.strip() if isinstance(value, str) else value)
            if math.isfinite(parsed):
                return parsed
        except (OverflowError, ValueError):
            pass
    msg = f"'{field}' must be a finite float, got {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(msg + f" Using {fallback}.")
    return fallback
