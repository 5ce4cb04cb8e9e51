# tests/test_index.py
import copy
import pickle

import pytest

from maparray import ERROR, POP, IndexNotAnIntegerError, MapArrayError, Ok, Symbol
from maparray.index import canonical, to_key, to_key_or_fail


# ---------------------
# Normalization tests
# ---------------------
@pytest.mark.parametrize(
    "index, shift, expected_key",
    [
        (0, 3, 0),
        (2, 3, 2),
        (7, 3, 7),
        (-1, 3, 2),
        (-3, 3, 0),
        (-4, 3, -1),
        (-10, 3, -7),
        (-1, 4, 3),
        (True, 3, 1),
        ("0", 3, 0),
        ("12", 3, 12),
        ("+2", 3, 2),
        ("-1", 3, 2),
        ("-1", 4, 3),
        ("007", 3, 7),
        (Symbol("1"), 3, 1),
        (Symbol("-2"), 3, 1),
    ],
    ids=[
        "int_zero",
        "int_last",
        "int_past_end",
        "int_negative",
        "int_negative_first",
        "int_still_negative",
        "int_far_negative",
        "int_negative_insertion_shift",
        "bool",
        "str_zero",
        "str_multi_digit",
        "str_plus_sign",
        "str_negative",
        "str_negative_insertion_shift",
        "str_leading_zeros",
        "symbol",
        "symbol_negative",
    ],
)
def test_to_key_valid(index, shift, expected_key):
    """Test that every index form reduces to the same integer key."""
    assert to_key(index, shift) == Ok(expected_key)
    assert to_key_or_fail(index, shift) == expected_key


@pytest.mark.parametrize(
    "index",
    ["", "a", "1.5", "1a", "a1", " 1", "1 ", "1_000", "--1", "+", "0x1", "١", Symbol("x"), Symbol("")],
    ids=[
        "empty",
        "letters",
        "fraction",
        "trailing_garbage",
        "leading_garbage",
        "leading_space",
        "trailing_space",
        "underscore",
        "double_sign",
        "sign_only",
        "hex",
        "non_ascii_digit",
        "symbol_letters",
        "symbol_empty",
    ],
)
def test_to_key_not_an_integer(index):
    """Test that tokens which are not base-10 integers are rejected."""
    assert to_key(index, 3) is ERROR

    with pytest.raises(IndexNotAnIntegerError) as excinfo:
        to_key_or_fail(index, 3)
    assert excinfo.value.index == index
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, MapArrayError)


@pytest.mark.parametrize("index", [1.0, None, [1], (1,), b"1", object()], ids=repr)
def test_to_key_unsupported_type(index):
    """Test that unsupported index types raise TypeError like built-in sequences."""
    with pytest.raises(TypeError):
        to_key(index, 3)
    with pytest.raises(TypeError):
        to_key_or_fail(index)


def test_to_key_or_fail_default_shift():
    """Test that the raising variant resolves negatives against zero by default."""
    assert to_key_or_fail(-1) == -1
    assert to_key_or_fail("5") == 5


def test_canonical():
    assert canonical(0) == "0"
    assert canonical(42) == "42"
    assert canonical(to_key("-1", 10).value) == "9"


# ---------------------
# Symbol tests
# ---------------------
def test_symbol_equality_and_hash():
    """Test that symbols are values compared by name and distinct from strings."""
    assert Symbol("1") == Symbol("1")
    assert Symbol("1") != Symbol("2")
    assert Symbol("1") != "1"
    assert hash(Symbol("1")) == hash(Symbol("1"))
    assert len({Symbol("1"), Symbol("1"), Symbol("2")}) == 2


def test_symbol_text():
    sym = Symbol("2")
    assert sym.name == "2"
    assert str(sym) == "2"
    assert repr(sym) == "Symbol('2')"


def test_symbol_immutable():
    sym = Symbol("2")
    with pytest.raises(AttributeError):
        sym.name = "3"
    with pytest.raises(AttributeError):
        sym._name = "3"


def test_symbol_requires_str():
    with pytest.raises(TypeError):
        Symbol(2)


@pytest.mark.parametrize("protocol", range(pickle.HIGHEST_PROTOCOL + 1))
def test_symbol_pickle_roundtrip(protocol):
    sym = Symbol("7")
    restored = pickle.loads(pickle.dumps(sym, protocol=protocol))
    assert restored == sym
    assert copy.copy(sym) == sym
    assert copy.deepcopy(sym) == sym


# ---------------------
# Result tag tests
# ---------------------
def test_result_truthiness():
    """Test that Ok is truthy even for falsy payloads and ERROR is falsy."""
    assert Ok(0)
    assert Ok(None)
    assert not ERROR
    assert repr(ERROR) == "ERROR"
    assert repr(POP) == "POP"
    assert Ok(1) == Ok(1)
    assert Ok(1) != Ok(2)


def test_result_singletons_survive_pickle():
    assert pickle.loads(pickle.dumps(ERROR)) is ERROR
    assert pickle.loads(pickle.dumps(POP)) is POP
    assert copy.deepcopy(ERROR) is ERROR


def test_ok_is_frozen():
    result = Ok(1)
    with pytest.raises(AttributeError):
        result.value = 2


# ---------------------
# Oversized token tests
# ---------------------
_HUGE = "9" * 5000


@pytest.mark.parametrize("index", [_HUGE, "+" + _HUGE, Symbol(_HUGE)], ids=["str", "str_plus", "symbol"])
def test_to_key_oversized_positive(index):
    """Test that integers past the conversion digit limit still parse, far past any live position."""
    result = to_key(index, 3)
    assert result
    assert result.value > 3
    assert to_key_or_fail(index, 3) == result.value


@pytest.mark.parametrize("index", ["-" + _HUGE, Symbol("-" + _HUGE)], ids=["str", "symbol"])
def test_to_key_oversized_negative(index):
    result = to_key(index, 3)
    assert result
    assert result.value < 0
    assert to_key(index, 10**6).value < 0


def test_to_key_leading_zeros_do_not_count_as_digits():
    assert to_key("0" * 5000 + "1", 3) == Ok(1)
    assert to_key("-" + "0" * 5000 + "1", 3) == Ok(2)
    assert to_key("0" * 5000, 3) == Ok(0)
    assert to_key("-" + "0" * 5000, 3) == Ok(0)
