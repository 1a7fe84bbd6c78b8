from __future__ import annotations

"""
Runtime Settings Models.

Immutable configuration values shared by the log sink and the invocation
engine. Updates never mutate an instance: owners swap in a new object, so
readers always observe a consistent pair of flags.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict


class ReturnKind(Enum):
    """Shape of a wrapped operation's result, used to pick its fallback."""
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    LIST = "list"
    DICT = "dict"
    NONE = "none"


@dataclass(frozen=True)
class LoggingSettings:
    """
    Destination switches for the error log.

    Attributes:
        log_to_secondary: Mirror each entry to the secondary sink (host console).
        log_to_file: Append each entry to the hour-window log file.
    """
    log_to_secondary: bool = False
    log_to_file: bool = True


@dataclass(frozen=True)
class DefaultValues:
    """
    Fallback values returned when a wrapped operation fails.

    Only the primitive kinds are configurable. Text and container results
    always fall back to an empty value.

    Attributes:
        default_int: Sentinel for counts, levels and timers.
        default_float: Sentinel for percentages and rates.
        default_bool: Result of failed predicates.
    """
    default_int: int = -1
    default_float: float = -1.0
    default_bool: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.default_int, bool) or not isinstance(self.default_int, int):
            raise TypeError(f"default_int must be int, got {type(self.default_int).__name__}")
        if isinstance(self.default_float, bool) or not isinstance(self.default_float, (int, float)):
            raise TypeError(f"default_float must be float, got {type(self.default_float).__name__}")
        if not isinstance(self.default_bool, bool):
            raise TypeError(f"default_bool must be bool, got {type(self.default_bool).__name__}")
        object.__setattr__(self, "default_float", float(self.default_float))

    def for_kind(self, kind: ReturnKind) -> Any:
        """
        Resolve the fallback for a result kind.

        Containers are built fresh on every call so callers can mutate them.
        """
        if kind is ReturnKind.INT:
            return self.default_int
        if kind is ReturnKind.FLOAT:
            return self.default_float
        if kind is ReturnKind.BOOL:
            return self.default_bool
        if kind is ReturnKind.STR:
            return ""
        if kind is ReturnKind.LIST:
            return []
        if kind is ReturnKind.DICT:
            return {}
        return None


@dataclass(frozen=True)
class GuardSettings:
    """Both configuration surfaces, as persisted in the settings file."""
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    defaults: DefaultValues = field(default_factory=DefaultValues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logging": asdict(self.logging),
            "defaults": asdict(self.defaults),
        }
