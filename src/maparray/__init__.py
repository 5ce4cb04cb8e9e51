"""An immutable array stored as a mapping from position to value.

See README.md for complete documentation and usage examples.
"""

import logging

from maparray.exceptions import (
    IndexNotAnIntegerError,
    IndexNotFoundError,
    IndexOutOfInsertionRangeError,
    MapArrayError,
)
from maparray.index import Symbol
from maparray.maparray import maparray
from maparray.results import ERROR, POP, Ok

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ERROR",
    "POP",
    "IndexNotAnIntegerError",
    "IndexNotFoundError",
    "IndexOutOfInsertionRangeError",
    "MapArrayError",
    "Ok",
    "Symbol",
    "maparray",
]
