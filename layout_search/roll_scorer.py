#!/usr/bin/env python3
"""
Roll Layout Scorer for scoring keyboard layouts.

Scores a 3x10 layout against corpus n-gram frequencies:

  - **Singles**: each letter earns its count times the weight of its row
  - **Rolls**: 2-, 3- and (optionally) 4-letter sequences typed as a run of
    adjacent keys within one hand's half of the top or middle row earn a bonus,
    larger when the run moves inward (toward the index finger)
  - **J-rolls**: a middle-row pair or triple finishing on a bottom-row key
  - **Penalties**: center columns, pinkie and curled-finger keys, top/bottom
    row jumps, same-column finger movements, and a prohibitive penalty for the
    three bottom-right keys

Each n-gram earns at most one roll bonus. Patterns are checked in a fixed
order (left middle, right middle, left top, right top, then J-rolls) and the
first match wins.
"""

from typing import Dict, List, Tuple, Optional

from layout_search.base_scorer import BaseLayoutScorer
from layout_search.corpus_analyzer import FrequencyTables
from layout_search.errors import KeyNotFoundError
from layout_search.layout import Layout, Position, ROWS, COLUMNS
from layout_search.settings import ScoringWeights


TOP, MIDDLE, BOTTOM = 0, 1, 2

# Columns each hand rolls across; the index finger sits at 3 (left) and 6 (right)
HAND_COLUMNS = (
    ('left', range(0, 4)),
    ('right', range(6, 10)),
)

ROLL_ROWS = (MIDDLE, TOP)

JROLL_PATTERNS = (
    # Left hand
    (((1, 0), (1, 1), (2, 2)), 'inward'),
    (((1, 1), (1, 2), (2, 2)), 'inward'),
    (((2, 2), (1, 2), (1, 1)), 'outward'),
    # Right hand
    (((1, 9), (1, 8), (2, 6)), 'inward'),
    (((1, 8), (1, 7), (2, 6)), 'inward'),
    (((2, 6), (1, 7), (1, 8)), 'outward'),
)

LONG_JROLL_PATTERNS = (
    ((1, 1), (1, 2), (1, 3), (2, 3)),
    ((1, 9), (1, 8), (1, 7), (2, 6)),
)

Cells = Tuple[Position, ...]


def roll_patterns(arity: int, weights: ScoringWeights) -> Dict[Cells, int]:
    """
    Map every same-row roll of ``arity`` keys to its bonus.

    Keys are the cells an n-gram's letters occupy, in typing order. Patterns
    are inserted in scan order and never overwritten, so the first match wins.
    """
    patterns: Dict[Cells, int] = {}
    for row in ROLL_ROWS:
        for hand, columns in HAND_COLUMNS:
            for start in range(columns.start, columns.stop - arity + 1):
                window = tuple((row, col) for col in range(start, start + arity))
                inward = window if hand == 'left' else window[::-1]
                patterns.setdefault(inward, weights.roll_bonus(arity, row, inward=True))
                patterns.setdefault(inward[::-1], weights.roll_bonus(arity, row, inward=False))
    return patterns


def build_pattern_tables(weights: ScoringWeights) -> Dict[int, Dict[Cells, int]]:
    """Roll and J-roll bonuses for triples, doubles and quadruples."""
    doubles = roll_patterns(2, weights)

    triples = roll_patterns(3, weights)
    for cells, direction in JROLL_PATTERNS:
        bonus = weights.jroll_inward if direction == 'inward' else weights.jroll_outward
        triples.setdefault(cells, bonus)

    quadruples = roll_patterns(4, weights)
    for cells in LONG_JROLL_PATTERNS:
        quadruples.setdefault(cells, weights.long_jroll_inward)

    return {2: doubles, 3: triples, 4: quadruples}


def build_cell_penalties(weights: ScoringWeights) -> List[List[int]]:
    """Per-count penalty of each cell for single letters (center, pinkie, curl)."""
    grid = [[0] * COLUMNS for _ in range(ROWS)]
    for row in range(ROWS):
        for col in range(COLUMNS):
            if col in weights.center_columns:
                grid[row][col] += weights.center_penalty(row)
            if (row, col) in weights.pinkie_cells:
                grid[row][col] += weights.pinkie_penalty
            if (row, col) in weights.curl_cells:
                grid[row][col] += weights.minor_finger_curl_penalty
    return grid


def locate(positions: Dict[str, Position], ngram: str) -> Cells:
    """
    Cells occupied by the letters of ``ngram``.

    Raises:
        KeyNotFoundError: If a letter is not on the layout
    """
    try:
        return tuple(positions[letter] for letter in ngram)
    except KeyError as e:
        raise KeyNotFoundError(f"Key not on keyboard: {e.args[0]!r}") from None


class RollScorer(BaseLayoutScorer):
    """
    Roll-based keyboard layout scorer.

    Rewards home-row letters and same-hand inward rolls, penalises awkward
    reaches. All magnitudes come from ``ScoringWeights``.
    """

    def __init__(self, tables: FrequencyTables, weights: Optional[ScoringWeights] = None):
        super().__init__(tables, weights)
        self.patterns = build_pattern_tables(self.weights)
        self.cell_penalties = build_cell_penalties(self.weights)
        self.protected_cells = frozenset(self.weights.protected_cells)

    def score_singles(self, positions: Dict[str, Position]) -> int:
        row_weights = [self.weights.single_weight(row) for row in range(ROWS)]
        total = 0
        for letter, count in self.tables.singles:
            (row, _), = locate(positions, letter)
            total += count * row_weights[row]
        return total

    def score_rolls(self, positions: Dict[str, Position], arity: int) -> int:
        """Roll and J-roll bonuses for every n-gram of length ``arity``."""
        patterns = self.patterns[arity]
        total = 0
        for ngram, count in self.tables.table(arity):
            bonus = patterns.get(locate(positions, ngram))
            if bonus is not None:
                total += count * bonus
        return total

    def score_penalties(self, positions: Dict[str, Position]) -> int:
        total = 0

        for letter, count in self.tables.singles:
            cell, = locate(positions, letter)
            row, col = cell
            total += count * self.cell_penalties[row][col]

            # Protect the bottom-right keys so they keep their usual symbols
            if cell in self.protected_cells:
                total += self.weights.bottom_right_penalty

        for pair, count in self.tables.doubles:
            (from_row, from_col), (to_row, to_col) = locate(positions, pair)

            if {from_row, to_row} == {TOP, BOTTOM}:
                total += count * self.weights.two_row_move_penalty

            if from_col == to_col and from_row != to_row:
                total += count * self.weights.same_finger_penalty

        return total

    def calculate_components(self, layout: Layout) -> Dict[str, int]:
        positions = layout.key_positions()
        return {
            'singles': self.score_singles(positions),
            'doubles': self.score_rolls(positions, 2),
            'triples': self.score_rolls(positions, 3),
            'quadruples': (self.score_rolls(positions, 4)
                           if self.weights.use_quadruple_roll else 0),
            'penalties': self.score_penalties(positions),
        }


def score_reference_layouts(scorer: BaseLayoutScorer,
                            layouts: List[Layout]) -> List[Tuple[str, int]]:
    """Score named layouts, lowest score first."""
    scores = [(layout.name, scorer.score(layout)) for layout in layouts]
    return sorted(scores, key=lambda item: item[1])
