from __future__ import annotations

"""
Process-Wide Facade.

"Configure once, read everywhere" entry points for host scripts. The state
lives in an explicitly constructed runtime (an ErrorLog plus the
SafeInvoker bound to it); these functions only delegate to the current
runtime, which can be rebuilt with `reset_runtime`.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from hostguard.core.invoker import SafeInvoker
from hostguard.domain.settings import GuardSettings
from hostguard.infra.logging.sink import ErrorLog

T = TypeVar("T")


@dataclass(frozen=True)
class GuardRuntime:
    """Pair of collaborating components shared by a process."""
    error_log: ErrorLog
    invoker: SafeInvoker


_runtime: Optional[GuardRuntime] = None
_runtime_lock = threading.Lock()


# -----------------------------------------------------------------------------
# RUNTIME LIFECYCLE
# -----------------------------------------------------------------------------

def reset_runtime(
        base_dir: Optional[str] = None,
        secondary_sink: Optional[object] = None,
        settings: Optional[GuardSettings] = None,
) -> GuardRuntime:
    """
    Build a fresh runtime and make it the process default.

    Args:
        base_dir: Application base directory hosting the log folder.
        secondary_sink: Console sink or `(text, hint)` callable.
        settings: Initial settings for both surfaces.

    Returns:
        GuardRuntime: The new default runtime.
    """
    global _runtime
    settings = settings or GuardSettings()
    error_log = ErrorLog(
        base_dir=base_dir,
        settings=settings.logging,
        secondary_sink=secondary_sink,
    )
    runtime = GuardRuntime(error_log=error_log, invoker=SafeInvoker(error_log, settings.defaults))
    with _runtime_lock:
        _runtime = runtime
    return runtime


def get_runtime() -> GuardRuntime:
    """Return the default runtime, building it lazily on first use."""
    global _runtime
    runtime = _runtime
    if runtime is not None:
        return runtime
    with _runtime_lock:
        if _runtime is None:
            error_log = ErrorLog()
            _runtime = GuardRuntime(error_log=error_log, invoker=SafeInvoker(error_log))
        return _runtime


def get_error_log() -> ErrorLog:
    return get_runtime().error_log


def get_invoker() -> SafeInvoker:
    return get_runtime().invoker


# -----------------------------------------------------------------------------
# CONFIGURATION SURFACE
# -----------------------------------------------------------------------------

def configure(log_to_secondary: bool, log_to_file: bool = True) -> None:
    """Select the error-log destinations for the whole process."""
    get_error_log().configure(log_to_secondary, log_to_file)


def configure_defaults(
        default_int: int = -1,
        default_float: float = -1.0,
        default_bool: bool = False,
) -> None:
    """Select the fallbacks returned by failed int/float/bool calls."""
    get_invoker().configure_defaults(default_int, default_float, default_bool)


def apply_settings(settings: GuardSettings) -> None:
    """Apply a loaded settings file to the default runtime."""
    configure(settings.logging.log_to_secondary, settings.logging.log_to_file)
    configure_defaults(
        settings.defaults.default_int,
        settings.defaults.default_float,
        settings.defaults.default_bool,
    )


def set_secondary_sink(sink: object) -> None:
    get_error_log().set_secondary_sink(sink)


# -----------------------------------------------------------------------------
# LOGGING AND INVOCATION
# -----------------------------------------------------------------------------

def log_error(message: str) -> None:
    get_error_log().log_error(message)


def get_log_file_name() -> str:
    return get_error_log().get_log_file_name()


def execute_with_recovery(
        operation: Callable[[], T],
        error_context: str,
        fallback: Any = None,
) -> T:
    return get_invoker().execute(operation, error_context, fallback)


def execute_action(operation: Callable[[], Any], error_context: str) -> None:
    get_invoker().execute_action(operation, error_context)
