#!/usr/bin/env python3
"""
Layout model for keyboard layout search.

A layout is a 3-row by 10-column grid holding each of the 26 lowercase letters
exactly once plus 4 non-letter filler symbols ("blanks").
"""

import random
import string
from typing import Dict, List, Tuple, Optional

from layout_search.errors import KeyNotFoundError, LayoutError


ROWS = 3
COLUMNS = 10
LETTERS = string.ascii_lowercase
BLANK = '_'
RANDOM_SYMBOLS = LETTERS + BLANK * (ROWS * COLUMNS - len(LETTERS))

Position = Tuple[int, int]


class Layout:
    """3x10 assignment of letters and blanks to key positions."""

    def __init__(self, rows: List[List[str]], name: str = "custom"):
        """
        Initialize a layout from its rows.

        Args:
            rows: Three rows of ten single-character symbols
            name: Display name (e.g., 'qwerty')

        Raises:
            LayoutError: If the grid shape or symbol multiset is wrong
        """
        self.name = name
        self.rows = [list(row) for row in rows]
        self.validate()

    @classmethod
    def from_string(cls, symbols: str, name: str = "custom") -> 'Layout':
        """
        Create a layout from its 30 symbols in row-major order.

        Whitespace and '|' separators are ignored, so "qwertyuiop|asdf..." works.
        """
        flat = ''.join(ch for ch in symbols if not ch.isspace() and ch != '|')
        if len(flat) != ROWS * COLUMNS:
            raise LayoutError(f"Layout needs {ROWS * COLUMNS} symbols, got {len(flat)}: '{flat}'")
        rows = [list(flat[r * COLUMNS:(r + 1) * COLUMNS]) for r in range(ROWS)]
        return cls(rows, name)

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> 'Layout':
        """Uniformly shuffle the 26 letters and 4 blanks onto the grid."""
        rng = rng or random.Random()
        keys = list(RANDOM_SYMBOLS)
        rng.shuffle(keys)
        rows = [keys[r * COLUMNS:(r + 1) * COLUMNS] for r in range(ROWS)]
        return cls(rows, "random")

    def validate(self) -> None:
        """
        Check the grid shape and the letter/blank invariant.

        Raises:
            LayoutError: If the layout is malformed
        """
        if len(self.rows) != ROWS or any(len(row) != COLUMNS for row in self.rows):
            raise LayoutError(f"Layout must be {ROWS}x{COLUMNS}")

        symbols = [symbol for row in self.rows for symbol in row]
        for symbol in symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise LayoutError(f"Layout cells must be single characters, got {symbol!r}")

        letters = [s for s in symbols if s in LETTERS]
        missing = sorted(set(LETTERS) - set(letters))
        if missing:
            raise LayoutError(f"Missing letters: {''.join(missing)}")
        if len(letters) != len(LETTERS):
            duplicates = sorted({s for s in letters if letters.count(s) > 1})
            raise LayoutError(f"Duplicate letters: {''.join(duplicates)}")

    def clone(self) -> 'Layout':
        copy = Layout.__new__(Layout)
        copy.name = self.name
        copy.rows = [row[:] for row in self.rows]
        return copy

    def swap(self, first: Position, second: Position) -> None:
        """Exchange the contents of two cells in place."""
        (r1, c1), (r2, c2) = first, second
        self.rows[r1][c1], self.rows[r2][c2] = self.rows[r2][c2], self.rows[r1][c1]

    def find_key(self, symbol: str) -> Position:
        """
        Locate a symbol on the grid.

        Returns:
            (row, column) of the symbol

        Raises:
            KeyNotFoundError: If the symbol is not on the layout
        """
        for row in range(ROWS):
            for col in range(COLUMNS):
                if self.rows[row][col] == symbol:
                    return row, col
        raise KeyNotFoundError(f"Key not on keyboard: {symbol!r}")

    def key_positions(self) -> Dict[str, Position]:
        """Map every symbol to its (row, column); blanks collapse to one entry."""
        return {symbol: (r, c)
                for r, row in enumerate(self.rows)
                for c, symbol in enumerate(row)}

    def flatten(self) -> str:
        """All 30 symbols concatenated row-major."""
        return ''.join(''.join(row) for row in self.rows)

    def symbols(self) -> List[str]:
        return [symbol for row in self.rows for symbol in row]

    def __str__(self) -> str:
        return self.flatten()

    def __repr__(self) -> str:
        return f"Layout({self.flatten()!r}, name={self.name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self.rows == other.rows

    def __hash__(self) -> int:
        return hash(self.flatten())


def random_swap(layout: Layout, rng: Optional[random.Random] = None) -> Tuple[Position, Position]:
    """
    Swap two uniformly chosen cells of ``layout`` in place.

    Both cells are drawn independently, so they can coincide; that no-op swap
    is a valid mutation.

    Returns:
        The two positions that were exchanged
    """
    rng = rng or random.Random()
    first = (rng.randrange(ROWS), rng.randrange(COLUMNS))
    second = (rng.randrange(ROWS), rng.randrange(COLUMNS))
    layout.swap(first, second)
    return first, second


def find_key(layout: Layout, symbol: str) -> Position:
    """Locate ``symbol`` on ``layout`` (see ``Layout.find_key``)."""
    return layout.find_key(symbol)


# Reference layouts; the last row ends in the usual punctuation keys
REFERENCE_LAYOUTS = {
    'qwerty': "qwertyuiop" "asdfghjkl;" "zxcvbnm,./",
    'dvorak': "',.pyfgcrl" "aoeuidhtns" ";qjkxbmwvz",
    'colemak': "qwfpgjluy;" "arstdhneio" "zxcvbkm,./",
    'workman': "qdrwbjfup;" "ashtgyneoi" "zxmcvkl,./",
}


def reference_layouts() -> List[Layout]:
    """Fresh copies of the built-in reference layouts."""
    return [Layout.from_string(symbols, name) for name, symbols in REFERENCE_LAYOUTS.items()]


def get_reference_layout(name: str) -> Layout:
    """
    Look up a reference layout by name.

    Raises:
        ValueError: If the name is unknown
    """
    key = name.lower()
    if key not in REFERENCE_LAYOUTS:
        raise ValueError(f"Unknown layout '{name}'. Available: {list(REFERENCE_LAYOUTS)}")
    return Layout.from_string(REFERENCE_LAYOUTS[key], key)


def parse_layout(text: str) -> Layout:
    """Accept either a reference layout name or 30 row-major symbols."""
    if text.lower() in REFERENCE_LAYOUTS:
        return get_reference_layout(text)
    return Layout.from_string(text)
