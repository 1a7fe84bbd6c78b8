from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the inspection tool: logging bootstrap, resolution of the log
folder, and the `path`, `tail` and `settings` commands.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from hostguard.domain.config import load_settings_document, save_settings
from hostguard.domain.validator import validate_settings
from hostguard.infra.fs import get_default_settings_path
from hostguard.infra.logging import (
    ErrorLog,
    LoggingConfig,
    configure_logging,
    get_logger,
    get_recent_logs,
)
from hostguard.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True))

    error_log = ErrorLog(base_dir=args.base_dir)
    logger.debug(f"CLI execution initiated. Log directory: {error_log.log_dir}")

    if args.command == "path":
        return _cmd_path(error_log, args.json_output)
    if args.command == "tail":
        return _cmd_tail(error_log, args.lines, args.json_output)
    if args.command == "settings":
        return _cmd_settings(args)

    parser.error(f"Unknown command: {args.command}")
    return 2

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_path(error_log: ErrorLog, json_output: bool) -> int:
    path = error_log.current_log_path()
    if json_output:
        print(json.dumps({"log_dir": error_log.log_dir, "log_file": path}, ensure_ascii=False))
    else:
        print(path)
    return 0


def _cmd_tail(error_log: ErrorLog, lines: int, json_output: bool) -> int:
    if lines < 0:
        print("ERROR: --lines must be non-negative.", file=sys.stderr)
        return 2

    content = get_recent_logs(error_log, lines)
    if json_output:
        print(json.dumps({"log_file": error_log.current_log_path(), "content": content}, ensure_ascii=False))
    else:
        sys.stdout.write(content if content.endswith("\n") else content + "\n")
    return 0


def _cmd_settings(args: Any) -> int:
    settings_path = args.settings_file or get_default_settings_path(args.base_dir)

    doc = load_settings_document(settings_path)
    doc = _merge_overrides(doc, cli_args.args_to_overrides(args))

    try:
        settings, warnings = validate_settings(doc, strict=bool(args.strict))
    except (TypeError, ValueError) as e:
        logger.error(f"Settings validation failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for w in warnings:
        logger.warning(f"Settings constraint: {w}")

    if args.save and not save_settings(settings, settings_path):
        print(f"ERROR: Could not write {settings_path}", file=sys.stderr)
        return 1

    print(json.dumps(settings.to_dict(), ensure_ascii=False, indent=2))
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_overrides(base: Dict[str, Any], overrides: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge CLI overrides section by section into a settings document.

    Args:
        base: The loaded document.
        overrides: Partial sections built from CLI flags.

    Returns:
        Dict[str, Any]: The merged document.
    """
    out = dict(base)
    for section, values in overrides.items():
        merged = dict(out.get(section) or {})
        merged.update(values)
        out[section] = merged
    return out
