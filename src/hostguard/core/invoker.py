from __future__ import annotations

"""
Safe Invocation Engine.

Runs operations against the external host API and guarantees that the
caller never observes an exception from them. A failure is recorded as
two consecutive error-log entries (the caller's context message, then the
exception's full traceback) and replaced by a fallback value, so a
per-tick automation loop keeps running on a degraded value instead of
stopping on the first transient error.

Each operation is invoked exactly once per call: no retry, no timeout.
"""

import functools
import inspect
import logging
import threading
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, TypeVar

from hostguard.domain.constants import INVALID_SELECTOR_TEMPLATE
from hostguard.domain.result import CallResult
from hostguard.domain.settings import DefaultValues, ReturnKind
from hostguard.infra.logging.sink import ErrorLog

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marker for "no explicit fallback, derive it from the return kind"
_UNSET: Any = object()


class SafeInvoker:
    """
    Exception-containment boundary between callers and host operations.

    Holds the fallback defaults explicitly; they can be replaced at any time
    with `configure_defaults` and are read at call time.
    """

    def __init__(self, error_log: ErrorLog, defaults: Optional[DefaultValues] = None):
        self._error_log = error_log
        self._defaults = defaults or DefaultValues()
        self._defaults_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    @property
    def error_log(self) -> ErrorLog:
        return self._error_log

    @property
    def defaults(self) -> DefaultValues:
        return self._defaults

    def configure_defaults(
            self,
            default_int: int = -1,
            default_float: float = -1.0,
            default_bool: bool = False,
    ) -> None:
        """
        Replace the fallbacks of the integer, float and boolean kinds.

        Raises:
            TypeError: If a value does not match its kind.
        """
        new_defaults = DefaultValues(
            default_int=default_int,
            default_float=default_float,
            default_bool=default_bool,
        )
        with self._defaults_lock:
            self._defaults = new_defaults
        logger.debug(f"SafeInvoker: Defaults updated to {new_defaults}")

    # -------------------------------------------------------------------------
    # ERROR CHANNEL
    # -------------------------------------------------------------------------

    def attempt(self, operation: Callable[[], T]) -> CallResult[T]:
        """Run `operation` once and capture its outcome without logging."""
        try:
            return CallResult.success(operation())
        except Exception as e:
            return CallResult.failure(e)

    def recover(self, result: CallResult[T], error_context: str, fallback: Any = None) -> T:
        """
        Convert a CallResult into a plain value.

        A failed result is logged as two entries (context, then traceback)
        and replaced by `fallback`.
        """
        if result.ok:
            return result.value  # type: ignore[return-value]
        self._log_failure(result, error_context)
        return fallback

    def _log_failure(self, result: CallResult[Any], error_context: str) -> None:
        try:
            detail = result.describe()
        except Exception:
            detail = repr(result.error)
        self._error_log.log_error(error_context)
        self._error_log.log_error(detail)

    # -------------------------------------------------------------------------
    # PUBLIC BOUNDARY
    # -------------------------------------------------------------------------

    def execute(self, operation: Callable[[], T], error_context: str, fallback: Any = None) -> T:
        """
        Execute an operation with exception handling.

        Args:
            operation: Zero-argument callable performing the host call.
            error_context: Message logged before the traceback on failure.
            fallback: Value returned if the operation raises.

        Returns:
            The operation's result unchanged, or `fallback` on failure.
        """
        return self.recover(self.attempt(operation), error_context, fallback)

    def execute_action(self, operation: Callable[[], Any], error_context: str) -> None:
        """Execute an operation whose result is discarded."""
        self.recover(self.attempt(operation), error_context, None)

    def execute_kind(self, operation: Callable[[], Any], error_context: str, kind: ReturnKind) -> Any:
        """Execute with the configured fallback of `kind`, resolved lazily."""
        result = self.attempt(operation)
        if result.ok:
            return result.value
        return self.recover(result, error_context, self._defaults.for_kind(kind))

    def execute_int(self, operation: Callable[[], int], error_context: str) -> int:
        return self.execute_kind(operation, error_context, ReturnKind.INT)

    def execute_float(self, operation: Callable[[], float], error_context: str) -> float:
        return self.execute_kind(operation, error_context, ReturnKind.FLOAT)

    def execute_bool(self, operation: Callable[[], bool], error_context: str) -> bool:
        return self.execute_kind(operation, error_context, ReturnKind.BOOL)

    def execute_str(self, operation: Callable[[], str], error_context: str) -> str:
        return self.execute_kind(operation, error_context, ReturnKind.STR)

    def execute_list(self, operation: Callable[[], List[Any]], error_context: str) -> List[Any]:
        return self.execute_kind(operation, error_context, ReturnKind.LIST)

    def execute_dict(self, operation: Callable[[], Dict[Any, Any]], error_context: str) -> Dict[Any, Any]:
        return self.execute_kind(operation, error_context, ReturnKind.DICT)

    # -------------------------------------------------------------------------
    # HELPERS FOR WRAPPER LAYERS
    # -------------------------------------------------------------------------

    def guard(
            self,
            error_context: str,
            kind: ReturnKind = ReturnKind.NONE,
            fallback: Any = _UNSET,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator form of `execute`.

        `error_context` may reference the decorated function's parameters as
        str.format fields ("Failed to cast '{name}'."); it is rendered only
        when the call fails. An explicit `fallback` wins over `kind`.

        Usage:
            @invoker.guard("Failed to get cooldown for spell: '{spell}'.", ReturnKind.INT)
            def spell_cooldown(spell):
                return api.SpellCooldown(spell)
        """
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            signature = _safe_signature(func)

            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                result = self.attempt(lambda: func(*args, **kwargs))
                if result.ok:
                    return result.value
                message = render_context(error_context, signature, args, kwargs)
                value = self._defaults.for_kind(kind) if fallback is _UNSET else fallback
                return self.recover(result, message, value)

            return wrapper

        return decorator

    def execute_selected(
            self,
            selector: Hashable,
            handlers: Mapping[Hashable, Callable[[], Any]],
            error_context: str,
            label: str,
    ) -> None:
        """
        Dispatch a fixed enumeration of actions (party slot 1-4, boss 1-4...).

        An unknown selector is logged as "Invalid <label> number." and treated
        as a no-op. A handler that raises is contained like any operation.
        """
        def run() -> None:
            handler = handlers.get(selector)
            if handler is None:
                self._error_log.log_error(INVALID_SELECTOR_TEMPLATE.format(label=label))
                return
            handler()

        self.execute_action(run, error_context)


# -----------------------------------------------------------------------------
# CONTEXT RENDERING
# -----------------------------------------------------------------------------

def _safe_signature(func: Callable[..., Any]) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def render_context(
        template: str,
        signature: Optional[inspect.Signature],
        args: tuple,
        kwargs: Dict[str, Any],
) -> str:
    """
    Fill a context template with the arguments of a failed call.

    Positional fields ({0}) and keyword fields ({name}) are both available.
    Falls back to the raw template when the fields cannot be resolved or
    an argument fails to format.
    """
    fields: Dict[str, Any] = dict(kwargs)
    if signature is not None:
        try:
            bound = signature.bind_partial(*args, **kwargs)
            bound.apply_defaults()
            fields.update(bound.arguments)
        except TypeError:
            pass
    try:
        return template.format(*args, **fields)
    except Exception:
        return template
