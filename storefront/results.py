"""
Result type for read paths.

Recipe lookups return a FetchResult instead of swallowing failures into an
empty list, so a caller can tell "no results" apart from "request failed".
Call sites that still want the empty-list fallback use unwrap_or([]).
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Either a value (ok) or an error.

    Attributes:
        value: The fetched value when ok
        error: The exception that caused the failure, None when ok
    """
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "FetchResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value, or `default` on failure."""
        if self.error is not None:
            return default
        return self.value
