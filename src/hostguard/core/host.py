from __future__ import annotations

"""
Guarded Host Proxy.

Applies the invocation engine to every public method of a host API object
without hand-writing one wrapper per method. The proxy only needs to know
each method's result kind (to pick its fallback) and, optionally, a
context template for its error message.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from hostguard.core.invoker import SafeInvoker, render_context
from hostguard.domain.constants import DEFAULT_CALL_CONTEXT_TEMPLATE
from hostguard.domain.settings import ReturnKind


class GuardedHost:
    """
    Exception-safe view over a host API object.

    Example:
        api = GuardedHost(
            host_module,
            invoker,
            returns={"SpellCooldown": ReturnKind.INT, "CanCast": ReturnKind.BOOL},
            contexts={"SpellCooldown": "Failed to get cooldown for spell: '{0}'."},
        )
        api.SpellCooldown("Fireball")   # -1 if the host raises
    """

    def __init__(
            self,
            host: Any,
            invoker: SafeInvoker,
            returns: Optional[Mapping[str, ReturnKind]] = None,
            contexts: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._host = host
        self._invoker = invoker
        self._returns: Dict[str, ReturnKind] = dict(returns or {})
        self._contexts: Dict[str, str] = dict(contexts or {})

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached for names not found on the proxy itself
        if name.startswith("_"):
            raise AttributeError(name)
        return self._bind(name)

    def _bind(self, name: str) -> Callable[..., Any]:
        kind = self._returns.get(name, ReturnKind.NONE)
        template = self._contexts.get(name, DEFAULT_CALL_CONTEXT_TEMPLATE.format(name=name))
        host = self._host
        invoker = self._invoker

        def call(*args: Any, **kwargs: Any) -> Any:
            # Attribute lookup happens inside the guarded operation
            result = invoker.attempt(lambda: getattr(host, name)(*args, **kwargs))
            if result.ok:
                return result.value
            message = render_context(template, None, args, kwargs)
            return invoker.recover(result, message, invoker.defaults.for_kind(kind))

        call.__name__ = name
        call.__qualname__ = f"{type(self).__name__}.{name}"
        return call

    def __repr__(self) -> str:
        return f"GuardedHost({self._host!r})"
