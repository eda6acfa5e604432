"""Typed success-or-failure value returned by every decode operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from dialog_sdk.decoding.errors import DecodeError, DialogDecodeError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a decoded ``value`` or a :class:`DecodeError`, never both."""

    value: T | None = None
    error: DecodeError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DecodeError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Return True when no error is present."""
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        if self.error is not None:
            return Result.failure(self.error)
        return Result.success(fn(self.value))

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        if self.error is not None:
            return Result.failure(self.error)
        return fn(self.value)

    def unwrap(self) -> T:
        """Return the value or raise :class:`DialogDecodeError` with the carried error."""
        if self.error is not None:
            raise DialogDecodeError(self.error)
        return self.value
