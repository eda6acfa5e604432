"""Two-case value: a redirection to follow (left) or the decoded value (right)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar


L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Either(Generic[L, R]):
    _value: Any
    _is_left: bool

    @classmethod
    def as_left(cls, value: L) -> Either[L, R]:
        return cls(_value=value, _is_left=True)

    @classmethod
    def as_right(cls, value: R) -> Either[L, R]:
        return cls(_value=value, _is_left=False)

    @property
    def is_left(self) -> bool:
        return self._is_left

    @property
    def is_right(self) -> bool:
        return not self._is_left

    @property
    def left(self) -> L:
        if not self._is_left:
            raise ValueError("Either holds a right value")
        return self._value

    @property
    def right(self) -> R:
        if self._is_left:
            raise ValueError("Either holds a left value")
        return self._value

    def fold(self, on_left: Callable[[L], T], on_right: Callable[[R], T]) -> T:
        return on_left(self._value) if self._is_left else on_right(self._value)

    def __repr__(self) -> str:
        side = "Left" if self._is_left else "Right"
        return f"{side}({self._value!r})"
