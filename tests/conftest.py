"""Shared fixtures for layout search tests."""

import random

import pytest

from layout_search.corpus_analyzer import build_frequency_tables
from layout_search.layout import Layout, LETTERS, BLANK, ROWS, COLUMNS
from layout_search.roll_scorer import RollScorer


def make_layout(placements=None, name="test"):
    """
    Build a valid layout with chosen letters at chosen cells.

    Unplaced letters fill the remaining cells in row-major order and the four
    blanks take the last free cells.
    """
    placements = placements or {}
    grid = [[None] * COLUMNS for _ in range(ROWS)]
    for letter, (row, col) in placements.items():
        grid[row][col] = letter

    free = [(r, c) for r in range(ROWS) for c in range(COLUMNS) if grid[r][c] is None]
    rest = [letter for letter in LETTERS if letter not in placements] + [BLANK] * 4
    for (row, col), symbol in zip(free, rest):
        grid[row][col] = symbol
    return Layout(grid, name)


def scorer_for(corpus: bytes, weights=None):
    return RollScorer(build_frequency_tables(corpus), weights)


@pytest.fixture
def th_tables():
    """Tables for a corpus of "th" repeated 100 times."""
    return build_frequency_tables(b"th" * 100)


@pytest.fixture
def th_scorer(th_tables):
    return RollScorer(th_tables)


@pytest.fixture
def pangram_scorer():
    return scorer_for(b"the quick brown fox jumps over the lazy dog")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def corpus_file(tmp_path):
    """Write a corpus file and return its path."""
    def _write(content: bytes, name: str = "corpus.txt"):
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _write
