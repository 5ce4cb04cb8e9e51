from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Generic, TypeVar, overload

from maparray.exceptions import IndexNotFoundError, IndexOutOfInsertionRangeError
from maparray.index import to_key, to_key_or_fail
from maparray.results import ERROR, POP, Ok

if TYPE_CHECKING:
    import sys
    from collections.abc import Callable, Iterable, Iterator
    from typing import Any

    from maparray.index import Index
    from maparray.results import _Error, _Pop

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self

T = TypeVar("T")

logger = logging.getLogger(__name__)


class maparray(Sequence[T], Generic[T]):  # noqa: N801
    """An immutable array stored as a mapping from position to value.

    Positions are always the dense range ``0 .. size - 1``. Every operation
    that changes the array returns a new maparray and leaves the receiver
    untouched.
    """

    __slots__ = ("_array", "_length")

    _array: dict[int, T]
    _length: int

    def __init__(self, data: Iterable[T] | None = None) -> None:
        """Initialize a maparray from data.

        Args:
            data: Initial elements (optional, defaults to empty).
                  Elements populate positions 0, 1, 2, etc.
        """
        self._array = {}
        self._length = 0

        if data is None:
            return

        # Appending at the tail never shifts, so fill the mapping directly
        for i, value in enumerate(data):
            self._array[i] = value
            self._length = i + 1

    @classmethod
    def _new(cls, array: dict[int, T], length: int) -> Self:
        """Wrap an already dense mapping without copying it."""
        new = cls.__new__(cls)
        new._array = array
        new._length = length
        return new

    @classmethod
    def from_sequence(cls, data: Iterable[T]) -> Self:
        """Build a maparray holding the elements of data in order."""
        return cls(data)

    from_list = from_sequence

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def to_sequence(self) -> list[T]:
        """Return the elements as a list, in position order."""
        return [self._array[i] for i in range(self._length)]

    to_list = to_sequence

    def __iter__(self) -> Iterator[T]:
        i = 0
        while i < self._length:
            yield self._array[i]
            i += 1

    def __reduce__(self) -> tuple[type[Self], tuple[list[T]]]:
        return (self.__class__, (self.to_sequence(),))

    def __copy__(self) -> Self:
        return self._new(self._array.copy(), self._length)

    def copy(self) -> Self:
        """Return a shallow copy of the maparray."""
        return self.__copy__()

    # ---------------------
    # Read access
    # ---------------------
    def fetch(self, index: Index) -> Ok[T] | _Error:
        """Fetch the value at index.

        Args:
            index: Integer, Symbol, or decimal string; negative values count from the end

        Returns:
            ``Ok(value)`` if index resolves to an element, else ``ERROR``

        Raises:
            TypeError: If index is of an unsupported type
        """
        result = to_key(index, self._length)
        if result and result.value in self._array:
            return Ok(self._array[result.value])
        return ERROR

    def fetch_or_fail(self, index: Index) -> T:
        """Fetch the value at index, raising if there is none.

        Raises:
            IndexNotAnIntegerError: If index does not parse as an integer
            IndexNotFoundError: If index does not resolve to an element
        """
        to_key_or_fail(index)
        result = self.fetch(index)
        if not result:
            logger.debug("index %r not found in maparray of size %d", index, self._length)
            raise IndexNotFoundError(index)
        return result.value

    def get(self, index: Index, default: Any = None) -> T | Any:
        """Return the value at index, or default if there is none."""
        result = self.fetch(index)
        return result.value if result else default

    @overload
    def __getitem__(self, key: Index) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> maparray[T]: ...

    def __getitem__(self, key: Index | slice) -> T | maparray[T]:
        """Get item(s) by index or slice.

        Args:
            key: Integer, Symbol, decimal string, or slice

        Returns:
            Single value for an index, new maparray for a slice

        Raises:
            TypeError: If key is of an unsupported type
            IndexNotAnIntegerError: If a string or Symbol key is not an integer
            IndexNotFoundError: If index is out of range
            ValueError: If slice step is zero
        """
        if isinstance(key, slice):
            start, stop, step = key.indices(self._length)
            return maparray(self._array[i] for i in range(start, stop, step))
        return self.fetch_or_fail(key)

    def __contains__(self, item: object) -> bool:
        """Check if item is in the maparray.

        An ``(index, value)`` pair is found only when position ``index`` holds
        ``value``; any other item is compared against the stored values.
        """
        if isinstance(item, tuple) and len(item) == 2:
            index, value = item
            try:
                result = self.fetch(index)
            except TypeError:
                # First element is not an index, so this is a plain value
                pass
            else:
                return bool(result) and bool(result.value == value)

        return any(v is item or v == item for v in self._array.values())

    # ---------------------
    # Fetch and update
    # ---------------------
    def _apply(
        self,
        index: Index,
        value: T,
        function: Callable[[T | None], tuple[Any, T] | _Pop],
    ) -> tuple[Any, maparray[T]]:
        """Run function on a present value and commit its outcome."""
        outcome = function(value)
        if outcome is POP:
            return self.remove(index)

        current, new_value = _unpack(outcome)
        array = self._array.copy()
        array[to_key_or_fail(index, self._length)] = new_value
        return current, self._new(array, self._length)

    def update(
        self,
        index: Index,
        function: Callable[[T | None], tuple[Any, T] | _Pop],
    ) -> tuple[Any, maparray[T]]:
        """Get the value at index and update it, all in one pass.

        ``function`` receives the current value, or None if index is not
        present, and returns either ``(current_value, new_value)`` or ``POP``.
        ``POP`` removes the element as :meth:`remove` does.

        The function is called even when index is not present, but nothing is
        stored or removed in that case.

        Args:
            index: Integer, Symbol, or decimal string
            function: Transform of the current value

        Returns:
            ``(current_value, new_maparray)``. If index is absent the
            receiver is returned unchanged, with None as the value for ``POP``.

        Examples:
            >>> value, ma = maparray([0, 1, 2]).update(1, lambda v: (v, v * 10))
            >>> value, ma
            (1, <maparray [0, 10, 2]>)
        """
        result = self.fetch(index)
        if result:
            return self._apply(index, result.value, function)

        outcome = function(None)
        if outcome is POP:
            return None, self
        current, _new_value = _unpack(outcome)
        return current, self

    get_and_update = update

    def update_or_fail(
        self,
        index: Index,
        function: Callable[[T | None], tuple[Any, T] | _Pop],
    ) -> tuple[Any, maparray[T]]:
        """Same as :meth:`update`, but raises before calling function if index is absent.

        Raises:
            IndexNotAnIntegerError: If index does not parse as an integer
            IndexNotFoundError: If index does not resolve to an element
        """
        value = self.fetch_or_fail(index)
        return self._apply(index, value, function)

    get_and_update_or_fail = update_or_fail

    # ---------------------
    # Structural changes
    # ---------------------
    def remove(self, index: Index = -1) -> tuple[T | None, maparray[T]]:
        """Remove the value at index, closing the gap.

        Args:
            index: Position to remove (default -1, last item)

        Returns:
            ``(value, new_maparray)``, or ``(None, self)`` if index is absent

        Examples:
            >>> maparray([0, 1, 2]).remove(1)
            (1, <maparray [0, 2]>)
        """
        result = to_key(index, self._length)
        if not result or result.value not in self._array:
            return None, self

        key = result.value
        array = self._array.copy()
        value = array[key]

        # Ascending so each slot is read before it is overwritten
        logger.debug("shifting %d elements left from position %d", self._length - key - 1, key)
        for i in range(key + 1, self._length):
            array[i - 1] = array[i]
        del array[self._length - 1]

        return value, self._new(array, self._length - 1)

    pop = remove

    def insert(self, index: Index, value: T) -> Ok[maparray[T]] | _Error:
        """Insert value before index, shifting index and later positions right.

        ``-1`` and ``size`` both mean the end of the maparray.

        Args:
            index: Insertion point in ``0 .. size``
            value: Value to insert

        Returns:
            ``Ok(new_maparray)``, or ``ERROR`` if index does not parse or is
            outside ``0 .. size``

        Examples:
            >>> maparray([0, 1, 2]).insert(2, 3)
            Ok(value=<maparray [0, 1, 3, 2]>)
        """
        result = to_key(index, self._length + 1)
        if not result or not 0 <= result.value <= self._length:
            return ERROR

        key = result.value
        array = self._array.copy()

        # Descending so no element is overwritten before it moves
        logger.debug("shifting %d elements right from position %d", self._length - key, key)
        for i in range(self._length, key, -1):
            array[i] = array[i - 1]
        array[key] = value

        return Ok(self._new(array, self._length + 1))

    push = insert

    def insert_or_fail(self, index: Index, value: T) -> maparray[T]:
        """Same as :meth:`insert`, but raises instead of returning ``ERROR``.

        Raises:
            IndexNotAnIntegerError: If index does not parse as an integer
            IndexOutOfInsertionRangeError: If index is outside ``0 .. size``
        """
        to_key_or_fail(index)
        result = self.insert(index, value)
        if not result:
            logger.debug("insertion index %r out of bounds for maparray of size %d", index, self._length)
            raise IndexOutOfInsertionRangeError(index, self._length)
        return result.value

    push_or_fail = insert_or_fail

    def append(self, value: T) -> maparray[T]:
        """Return a new maparray with value added to the end."""
        return self.insert_or_fail(self._length, value)

    def prepend(self, value: T) -> maparray[T]:
        """Return a new maparray with value added to the beginning."""
        return self.insert_or_fail(0, value)

    def extend(self, iterable: Iterable[T]) -> maparray[T]:
        """Return a new maparray with the elements of iterable appended in order."""
        array = self._array.copy()
        length = self._length
        for value in iterable:
            array[length] = value
            length += 1
        return self._new(array, length)

    def __add__(self, other: Iterable[T]) -> maparray[T]:
        if isinstance(other, (str, bytes)) or not hasattr(other, "__iter__"):
            return NotImplemented
        return self.extend(other)

    def replace(self, index: Index, value: T) -> Ok[maparray[T]] | _Error:
        """Put value under index only if index already exists.

        Returns:
            ``Ok(new_maparray)``, or ``ERROR`` if index is absent

        Examples:
            >>> maparray([0, 1, 2]).replace(0, 3)
            Ok(value=<maparray [3, 1, 2]>)
        """
        result = to_key(index, self._length)
        if not result or result.value not in self._array:
            return ERROR

        array = self._array.copy()
        array[result.value] = value
        return Ok(self._new(array, self._length))

    def replace_or_fail(self, index: Index, value: T) -> maparray[T]:
        """Same as :meth:`replace`, but raises instead of returning ``ERROR``.

        Raises:
            IndexNotAnIntegerError: If index does not parse as an integer
            IndexNotFoundError: If index does not resolve to an element
        """
        to_key_or_fail(index)
        result = self.replace(index, value)
        if not result:
            logger.debug("cannot replace missing index %r in maparray of size %d", index, self._length)
            raise IndexNotFoundError(index)
        return result.value

    # ---------------------
    # Comparison
    # ---------------------
    def __eq__(self, other: object) -> bool:
        """Return True if other holds the same elements in the same order.

        Compares with other maparrays, lists and tuples.
        """
        if self is other:
            return True
        if isinstance(other, maparray):
            return self._length == other._length and self._array == other._array
        if isinstance(other, (list, tuple)):
            return self._length == len(other) and all(self._array[i] == v for i, v in enumerate(other))
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __hash__(self) -> int:
        """Hash like the tuple of elements; raises TypeError for unhashable elements."""
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"<maparray {self.to_sequence()!r}>"


def _unpack(outcome: Any) -> tuple[Any, Any]:
    """Split an update outcome into ``(current_value, new_value)``."""
    if not isinstance(outcome, tuple) or len(outcome) != 2:
        raise TypeError(f"update function must return a 2-tuple or POP, got {outcome!r}")
    return outcome
