from __future__ import annotations

from typing import Any


class MapArrayError(Exception):
    """Base class for errors raised by the fail-fast maparray operations."""

    def __init__(self, index: Any = None, message: str | None = None) -> None:
        super().__init__(message)
        self._index = index
        self._message = message

    @property
    def index(self) -> Any:
        return self._index

    @property
    def message(self) -> str | None:
        return self._message


class IndexNotAnIntegerError(MapArrayError, ValueError):
    """The index token does not parse as a base-10 integer."""

    def __init__(self, index: Any) -> None:
        super().__init__(index, f"cannot cast index {index!r} to integer")


class IndexNotFoundError(MapArrayError, IndexError):
    """The index parses but does not resolve to a live element."""

    def __init__(self, index: Any) -> None:
        super().__init__(index, f"maparray index {index!r} out of range")


class IndexOutOfInsertionRangeError(MapArrayError, IndexError):
    """The normalized insertion index is negative or past the end."""

    def __init__(self, index: Any, length: int) -> None:
        super().__init__(index, f"insertion index {index!r} out of bounds for maparray of size {length}")
        self._length = length

    @property
    def length(self) -> int:
        return self._length
