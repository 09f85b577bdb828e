"""Result[T, E] — Ok and Err variants.

Used where a store fault must not escape to the caller: the fault is
captured as ``Err`` and the caller picks a fallback with ``unwrap_or``.
"""

from __future__ import annotations

from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Failed result variant carrying the captured exception."""

    __slots__ = ("_error",)

    def __init__(self, error: E) -> None:
        self._error = error

    def unwrap_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


Result: TypeAlias = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
