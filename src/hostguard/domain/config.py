from __future__ import annotations

"""
Settings Persistence.

Stores both configuration surfaces (error-log destinations and fallback
defaults) in a JSON file next to the logs. Missing or corrupted files are
never fatal: the loader logs a warning and falls back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from hostguard.domain.constants import CURRENT_SETTINGS_VERSION
from hostguard.domain.settings import GuardSettings
from hostguard.domain.validator import validate_settings
from hostguard.infra.fs import ensure_dir, get_default_settings_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default settings document.

    Returns:
        Dict[str, Any]: The full JSON structure for settings.json.
    """
    doc = GuardSettings().to_dict()
    doc["version"] = CURRENT_SETTINGS_VERSION
    return doc


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_settings_document(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the raw settings document from disk, merged over defaults.

    Args:
        path: Settings file. Defaults to <app-base>/HostGuard/settings.json.

    Returns:
        Dict[str, Any]: The loaded document or defaults on failure.
    """
    settings_path = path or get_default_settings_path()
    doc = get_default_settings()

    if not os.path.exists(settings_path):
        logger.debug("Settings file not found. Returning defaults.")
        return doc

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("Corrupted settings file. Resetting to defaults.")
            return doc

        # Merge with defaults to ensure new keys exist
        for section in ("logging", "defaults"):
            if isinstance(data.get(section), dict):
                doc[section].update(data[section])

        doc["version"] = CURRENT_SETTINGS_VERSION
        return doc

    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings: {e}. Using defaults.")
        return doc


def load_settings(path: Optional[str] = None) -> Tuple[GuardSettings, List[str]]:
    """
    Load and normalize settings.

    Returns:
        Tuple[GuardSettings, List[str]]: Settings and normalization warnings.
    """
    settings, warnings = validate_settings(load_settings_document(path), strict=False)
    for w in warnings:
        logger.warning(f"Settings constraint: {w}")
    return settings, warnings


def save_settings(settings: GuardSettings, path: Optional[str] = None) -> bool:
    """
    Persist settings to disk.

    Args:
        settings: The settings to save.
        path: Target file. Defaults to <app-base>/HostGuard/settings.json.

    Returns:
        bool: True if the file was written.
    """
    settings_path = path or get_default_settings_path()
    doc = settings.to_dict()
    doc["version"] = CURRENT_SETTINGS_VERSION
    try:
        ensure_dir(os.path.dirname(os.path.abspath(settings_path)))
        with open(settings_path, "w", encoding="utf-8") as f:
            json.dump(doc, f, ensure_ascii=False, indent=4)
        logger.debug(f"Settings saved to {settings_path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
        return False
