from __future__ import annotations

"""
Call Result Model.

Explicit error channel between the invocation engine and its callers.
A CallResult carries either the value produced by an operation or the
exception it raised; it is converted into a plain value only at the
public boundary (see SafeInvoker.recover).
"""

import traceback
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """
    Outcome of a single attempt to run an operation.

    Attributes:
        value: Result of the operation when it returned normally.
        error: Exception raised by the operation, if any.
    """
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "CallResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "CallResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: T) -> T:
        """Return the value, or `fallback` when the attempt failed."""
        if self.error is not None:
            return fallback
        return self.value  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "CallResult[U]":
        """
        Transform a successful value.

        Exceptions raised by `fn` become the error of the returned result.
        Failures pass through untouched.
        """
        if self.error is not None:
            return CallResult.failure(self.error)
        try:
            return CallResult.success(fn(self.value))  # type: ignore[arg-type]
        except Exception as e:
            return CallResult.failure(e)

    def and_then(self, fn: Callable[[T], "CallResult[U]"]) -> "CallResult[U]":
        """Chain another fallible step that already returns a CallResult."""
        if self.error is not None:
            return CallResult.failure(self.error)
        try:
            return fn(self.value)  # type: ignore[arg-type]
        except Exception as e:
            return CallResult.failure(e)

    def describe(self) -> str:
        """
        Full diagnostic text of the failure: type, message and traceback.

        Returns an empty string for successful results.
        """
        if self.error is None:
            return ""
        err = self.error
        return "".join(traceback.format_exception(type(err), err, err.__traceback__)).rstrip()
