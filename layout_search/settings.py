#!/usr/bin/env python3
"""
Settings structures for keyboard layout search.

All tunable constants live here as immutable dataclasses. The defaults are the
reference ergonomic model; alternate models are loaded from YAML through
``config_loader`` without touching the scoring logic.
"""

from dataclasses import dataclass, field, fields
from typing import Tuple


ALGORITHM_VERSION = 4.419

ROW_NAMES = ('top', 'middle', 'bottom')


@dataclass(frozen=True)
class ScoringWeights:
    """
    Ergonomic model used by the roll scorer.

    Bonuses are positive, penalties negative. Every single, double, triple and
    quadruple contribution is multiplied by the n-gram count, except
    ``bottom_right_penalty`` which is applied once per letter.
    """

    # Per-row weight for single letters
    single_top: int = 0
    single_middle: int = 3
    single_bottom: int = 0

    # Two-key rolls
    double_top_inward: int = 5
    double_top_outward: int = 3
    double_middle_inward: int = 10
    double_middle_outward: int = 5

    # Three-key rolls
    triple_top_inward: int = 35
    triple_top_outward: int = 25
    triple_middle_inward: int = 35
    triple_middle_outward: int = 25

    jroll_inward: int = 25
    jroll_outward: int = 10

    # Four-key rolls (only used when use_quadruple_roll is set)
    quadruple_top_inward: int = 20
    quadruple_top_outward: int = 20
    quadruple_middle_inward: int = 20
    quadruple_middle_outward: int = 20

    long_jroll_inward: int = 20

    # Penalties
    center_top_penalty: int = -10
    center_middle_penalty: int = -10
    center_bottom_penalty: int = -10
    minor_finger_curl_penalty: int = -5
    pinkie_penalty: int = -5
    two_row_move_penalty: int = -10
    same_finger_penalty: int = -5

    # Keeps ",./" free by making the three bottom-right keys unusable
    bottom_right_penalty: int = -10000000

    use_quadruple_roll: bool = False

    # Penalised cells
    center_columns: Tuple[int, ...] = (4, 5)
    pinkie_cells: Tuple[Tuple[int, int], ...] = ((0, 0), (2, 0), (2, 9), (0, 9))
    curl_cells: Tuple[Tuple[int, int], ...] = ((2, 0), (2, 1), (2, 9), (2, 8))
    protected_cells: Tuple[Tuple[int, int], ...] = ((2, 7), (2, 8), (2, 9))

    def single_weight(self, row: int) -> int:
        """Weight of a single letter sitting on ``row``."""
        return getattr(self, f'single_{ROW_NAMES[row]}')

    def roll_bonus(self, arity: int, row: int, inward: bool) -> int:
        """Bonus for a same-row roll of ``arity`` keys on ``row`` (0 or 1)."""
        prefix = {2: 'double', 3: 'triple', 4: 'quadruple'}[arity]
        direction = 'inward' if inward else 'outward'
        return getattr(self, f'{prefix}_{ROW_NAMES[row]}_{direction}')

    def center_penalty(self, row: int) -> int:
        return getattr(self, f'center_{ROW_NAMES[row]}_penalty')


@dataclass(frozen=True)
class CorpusSettings:
    """Limits applied while building frequency tables."""

    max_bytes_per_source: int = 100 * 1024 * 1024
    max_entries_per_table: int = 1000


@dataclass(frozen=True)
class SearchSettings:
    """Hill-climbing and worker pool settings."""

    stagnation_limit: int = 1000
    workers: int = 9


@dataclass(frozen=True)
class OutputSettings:
    log_file: str = 'output.log'


@dataclass(frozen=True)
class Settings:
    """Bundle of every settings section."""

    algorithm_version: float = ALGORITHM_VERSION
    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    corpus: CorpusSettings = field(default_factory=CorpusSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    output: OutputSettings = field(default_factory=OutputSettings)


SECTION_TYPES = {
    'scoring': ScoringWeights,
    'corpus': CorpusSettings,
    'search': SearchSettings,
    'output': OutputSettings,
}


def field_names(section_type) -> Tuple[str, ...]:
    """Names of the fields a settings section accepts."""
    return tuple(f.name for f in fields(section_type))
