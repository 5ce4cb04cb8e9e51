"""Tagged results shared by the non-raising maparray operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying a value.

    Always truthy, so ``if result:`` distinguishes it from ``ERROR``.
    """

    value: T

    def __bool__(self) -> bool:
        return True


class _Error:
    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ERROR"

    def __reduce__(self) -> str:
        return "ERROR"


class _Pop:
    __slots__ = ()

    def __repr__(self) -> str:
        return "POP"

    def __reduce__(self) -> str:
        return "POP"


# Failure tag
ERROR: Final = _Error()

# Removal directive for update transforms
POP: Final = _Pop()
