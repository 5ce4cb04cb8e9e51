"""Index normalization for maparray.

An index may be given as an integer, a :class:`Symbol`, or a string. All three
are reduced to one canonical integer key. Negative values are resolved against
a caller supplied ``shift``: the current length for lookups and removals, one
past the end for insertions.
"""

from __future__ import annotations

import logging
import re
import sys
from operator import index as op_index
from typing import TYPE_CHECKING, Final, SupportsIndex, Union

from maparray.exceptions import IndexNotAnIntegerError
from maparray.results import ERROR, Ok

if TYPE_CHECKING:
    from maparray.results import _Error

logger = logging.getLogger(__name__)

# Same grammar as a whole-string integer parse: optional sign, ASCII digits only
_INTEGER_PATTERN: Final = re.compile(r"[+-]?[0-9]+", re.ASCII)


class Symbol:
    """A symbolic index token, e.g. ``Symbol("2")``.

    Symbols are immutable and compare equal by name. They are never equal to
    the plain string with the same text, only interchangeable with it as an
    index.
    """

    __slots__ = ("_name",)

    _name: str

    def __init__(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError(f"symbol name must be a str, not {type(name).__name__!r}")
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError("Symbol is immutable")

    def __reduce__(self) -> tuple[type[Symbol], tuple[str]]:
        return (Symbol, (self._name,))

    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Symbol({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Symbol, self._name))


Index = Union[SupportsIndex, Symbol, str]


def _parse(token: str) -> int | None:
    if _INTEGER_PATTERN.fullmatch(token) is None:
        return None
    sign = "-" if token[0] == "-" else ""
    digits = token.lstrip("+-").lstrip("0") or "0"
    try:
        return int(sign + digits)
    except ValueError:
        # Past the interpreter's digit limit; no live position is that large
        return -sys.maxsize if sign else sys.maxsize


def _to_integer(index: Index) -> int | None:
    """Reduce any index form to a plain int, or None if the token is not an integer.

    Raises:
        TypeError: If index is not an integer, Symbol, or str
    """
    if isinstance(index, str):
        return _parse(index)
    if isinstance(index, Symbol):
        return _parse(index.name)
    try:
        return op_index(index)
    except TypeError:
        raise TypeError(f"maparray indices must be integers, symbols or strings, not {type(index).__name__}") from None


def to_key(index: Index, shift: int) -> Ok[int] | _Error:
    """Normalize ``index`` into a canonical key.

    Args:
        index: Integer, Symbol, or decimal string
        shift: Value added to a negative index

    Returns:
        ``Ok(key)`` when the index parses as an integer, else ``ERROR``.
        The key is not bounds checked and may still be negative.

    Raises:
        TypeError: If index is of an unsupported type
    """
    integer = _to_integer(index)
    if integer is None:
        return ERROR
    if integer < 0:
        integer += shift
    return Ok(integer)


def to_key_or_fail(index: Index, shift: int = 0) -> int:
    """Normalize ``index`` like :func:`to_key`, raising on a non-integer token.

    Raises:
        IndexNotAnIntegerError: If index does not parse as an integer
        TypeError: If index is of an unsupported type
    """
    result = to_key(index, shift)
    if not result:
        logger.debug("rejecting non-integer index %r", index)
        raise IndexNotAnIntegerError(index)
    return result.value


def canonical(key: int) -> str:
    """Return the decimal string form of a canonical key."""
    return str(key)
