from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the log inspection tool and translates
raw argparse namespaces into settings-document overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the HostGuard CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="hostguard",
        description="Inspect HostGuard hour-partitioned error logs and settings.",
    )

    # --- Global Options ---
    p.add_argument(
        "--base-dir",
        dest="base_dir",
        default=None,
        help="Application base directory containing the HostGuard log folder.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit machine-readable JSON.",
    )

    commands = p.add_subparsers(dest="command", required=True)

    # --- path ---
    commands.add_parser("path", help="Print the log file of the current hour window.")

    # --- tail ---
    tail = commands.add_parser("tail", help="Print the latest entries of the current hour window.")
    tail.add_argument(
        "-n", "--lines",
        dest="lines",
        type=int,
        default=20,
        help="Number of lines to print (default: 20).",
    )

    # --- settings ---
    settings = commands.add_parser("settings", help="Validate, override and dump settings.")
    settings.add_argument(
        "--file",
        dest="settings_file",
        default=None,
        help="Settings JSON file (default: <base-dir>/HostGuard/settings.json).",
    )
    settings.add_argument(
        "--strict",
        action="store_true",
        help="Fail on invalid values instead of correcting them.",
    )
    settings.add_argument(
        "--secondary",
        dest="log_to_secondary",
        action="store_const",
        const=True,
        default=None,
        help="Mirror error entries to the secondary sink.",
    )
    settings.add_argument(
        "--no-secondary",
        dest="log_to_secondary",
        action="store_const",
        const=False,
        help="Do not mirror error entries to the secondary sink.",
    )
    settings.add_argument(
        "--no-file",
        dest="log_to_file",
        action="store_const",
        const=False,
        default=None,
        help="Disable the hour-partitioned log files.",
    )
    settings.add_argument("--default-int", dest="default_int", default=None, help="Fallback for integer results.")
    settings.add_argument("--default-float", dest="default_float", default=None, help="Fallback for float results.")
    settings.add_argument("--default-bool", dest="default_bool", default=None, help="Fallback for boolean results.")
    settings.add_argument(
        "--save",
        action="store_true",
        help="Persist the normalized settings back to the settings file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    """
    Translate the settings sub-command options into a partial document.

    Only explicitly provided options appear in the result; values stay raw
    and are normalized later by validate_settings.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Dict[str, Any]]: {"logging": {...}, "defaults": {...}}
    """
    overrides: Dict[str, Dict[str, Any]] = {"logging": {}, "defaults": {}}

    for key in ("log_to_secondary", "log_to_file"):
        value = getattr(args, key, None)
        if value is not None:
            overrides["logging"][key] = value

    for key in ("default_int", "default_float", "default_bool"):
        value = getattr(args, key, None)
        if value is not None:
            overrides["defaults"][key] = value

    return overrides
