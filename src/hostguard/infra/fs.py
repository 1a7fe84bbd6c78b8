from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the application base directory that hosts the diagnostic log
folder and provides directory helpers used by the log sink and the
settings store. Acts as the only place where HostGuard inspects the
interpreter/executable location.
"""

import os
import sys
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

LOG_SUBDIR = "HostGuard"
SETTINGS_FILE_NAME = "settings.json"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_app_base_dir() -> str:
    """
    Resolve the base directory of the running application.

    Resolution order:
    - Frozen executables (PyInstaller & co.): directory of the executable.
    - Script launches: directory of the entry script (sys.argv[0]).
    - Interactive sessions / embedded interpreters: current working directory.

    Returns:
        str: Absolute path to the application base directory.
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(os.path.abspath(sys.executable))

    entry = sys.argv[0] if sys.argv else ""
    if entry and entry != "-c" and os.path.exists(entry):
        return os.path.dirname(os.path.abspath(entry))

    return os.path.abspath(os.getcwd())


def get_log_dir(base_dir: Optional[str] = None, subdir: str = LOG_SUBDIR) -> str:
    """
    Compute the dedicated log directory without touching the filesystem.

    Args:
        base_dir: Application base directory. Resolved automatically if None.
        subdir: Name of the log folder under the base directory.

    Returns:
        str: Absolute path to the log directory.
    """
    base = base_dir if base_dir else get_app_base_dir()
    return os.path.abspath(os.path.join(base, subdir))


def get_default_settings_path(base_dir: Optional[str] = None) -> str:
    """Location of the persisted settings file next to the logs."""
    return os.path.join(get_log_dir(base_dir), SETTINGS_FILE_NAME)

# -----------------------------------------------------------------------------
# FILESYSTEM HELPERS
# -----------------------------------------------------------------------------

def ensure_dir(path: str) -> None:
    """
    Create a directory hierarchy if it is absent.

    Raises:
        OSError: If the path exists as a file or cannot be created.
    """
    if not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)

