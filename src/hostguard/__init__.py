from __future__ import annotations

from hostguard.api import (
    apply_settings,
    configure,
    configure_defaults,
    execute_action,
    execute_with_recovery,
    get_error_log,
    get_invoker,
    get_log_file_name,
    log_error,
    reset_runtime,
    set_secondary_sink,
)
from hostguard.core.host import GuardedHost
from hostguard.core.invoker import SafeInvoker
from hostguard.domain.result import CallResult
from hostguard.domain.settings import DefaultValues, GuardSettings, LoggingSettings, ReturnKind
from hostguard.infra.logging.sink import ErrorLog

__version__ = "1.0.0"

__all__ = [
    "ErrorLog",
    "SafeInvoker",
    "GuardedHost",
    "CallResult",
    "DefaultValues",
    "GuardSettings",
    "LoggingSettings",
    "ReturnKind",
    "configure",
    "configure_defaults",
    "apply_settings",
    "set_secondary_sink",
    "log_error",
    "get_log_file_name",
    "execute_with_recovery",
    "execute_action",
    "get_error_log",
    "get_invoker",
    "reset_runtime",
]
