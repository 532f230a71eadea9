"""Tests for the layout model and its mutations."""

import random
from collections import Counter

import pytest

from layout_search.errors import KeyNotFoundError, LayoutError
from layout_search.layout import (
    Layout, LETTERS, REFERENCE_LAYOUTS, find_key, get_reference_layout,
    parse_layout, random_swap, reference_layouts,
)


QWERTY = "qwertyuiopasdfghjkl;zxcvbnm,./"


class FixedRandom:
    """Stand-in random source returning a fixed sequence from randrange."""

    def __init__(self, values):
        self.values = iter(values)

    def randrange(self, stop):
        return next(self.values)


def assert_valid(layout):
    symbols = layout.symbols()
    assert len(symbols) == 30
    letters = [s for s in symbols if s in LETTERS]
    assert sorted(letters) == list(LETTERS)
    assert len(symbols) - len(letters) == 4


def test_random_layout_symbol_multiset(rng):
    for _ in range(20):
        layout = Layout.random(rng)
        assert Counter(layout.symbols()) == Counter(LETTERS + '____')


def test_random_swap_preserves_invariant(rng):
    layout = Layout.random(rng)
    for _ in range(1000):
        random_swap(layout, rng)
        assert_valid(layout)
        layout.validate()


def test_random_swap_exchanges_cells():
    layout = Layout.from_string(QWERTY)
    first, second = random_swap(layout, FixedRandom([0, 0, 1, 0]))
    assert (first, second) == ((0, 0), (1, 0))
    assert layout.flatten().startswith("awerty")
    assert layout.rows[1][0] == 'q'


def test_random_swap_same_cell_is_noop():
    layout = Layout.from_string(QWERTY)
    first, second = random_swap(layout, FixedRandom([1, 2, 1, 2]))
    assert first == second
    assert layout.flatten() == QWERTY


def test_find_key():
    layout = Layout.from_string(QWERTY)
    assert find_key(layout, 'q') == (0, 0)
    assert layout.find_key('h') == (1, 5)
    assert layout.find_key('/') == (2, 9)


def test_find_key_missing_symbol():
    layout = Layout.from_string(QWERTY)
    with pytest.raises(KeyNotFoundError):
        layout.find_key('#')


def test_clone_is_independent():
    layout = Layout.from_string(QWERTY, "qwerty")
    copy = layout.clone()
    copy.swap((0, 0), (0, 1))
    assert layout.flatten() == QWERTY
    assert copy.flatten().startswith("wq")
    assert copy.name == "qwerty"


def test_from_string_ignores_separators():
    layout = Layout.from_string("qwertyuiop|asdfghjkl;|zxcvbnm,./")
    assert str(layout) == QWERTY
    assert layout == Layout.from_string(QWERTY)


@pytest.mark.parametrize("symbols", [
    QWERTY[:-1],                          # too short
    QWERTY + "x",                         # too long
    "qqertyuiopasdfghjkl;zxcvbnm,./",     # duplicate q, missing w
])
def test_invalid_layouts_rejected(symbols):
    with pytest.raises(LayoutError):
        Layout.from_string(symbols)


def test_layout_error_is_value_error():
    with pytest.raises(ValueError):
        Layout([["a"] * 10] * 3)


def test_reference_layouts_are_valid():
    layouts = reference_layouts()
    assert [layout.name for layout in layouts] == ['qwerty', 'dvorak', 'colemak', 'workman']
    for layout in layouts:
        assert_valid(layout)
        assert layout.flatten() == REFERENCE_LAYOUTS[layout.name]


def test_parse_layout_by_name_or_symbols():
    assert parse_layout("Dvorak") == get_reference_layout("dvorak")
    assert parse_layout(QWERTY).flatten() == QWERTY
    with pytest.raises(ValueError):
        get_reference_layout("azerty")


def test_key_positions_cover_all_letters():
    layout = Layout.random(random.Random(5))
    positions = layout.key_positions()
    for letter in LETTERS:
        assert layout.rows[positions[letter][0]][positions[letter][1]] == letter
