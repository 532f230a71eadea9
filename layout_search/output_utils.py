#!/usr/bin/env python3
"""
Output utilities for keyboard layout search.

Formatting for the debug n-gram dump, reference layout scores, search
progress lines and the append-only result log.
"""

from typing import List, Optional, Tuple, TextIO, Union
import sys

from layout_search.base_scorer import ScoreResult
from layout_search.corpus_analyzer import FrequencyTables
from layout_search.layout import Layout


LayoutLike = Union[Layout, str]


def _flat(layout: LayoutLike) -> str:
    return layout.flatten() if isinstance(layout, Layout) else str(layout)


def format_log_line(version: float, score: int, layout: LayoutLike) -> str:
    """Log line: ``<version>|<score>|<flattened-layout>``."""
    return f"{version}|{score}|{_flat(layout)}"


def format_new_best(version: float, score: int, layout: LayoutLike) -> str:
    return f"New best: {format_log_line(version, score, layout)}"


def format_ngram_line(ngram: str, count: int) -> str:
    return f"{ngram}: {count}"


def format_frequency_tables(tables: FrequencyTables) -> List[str]:
    """One ``<symbols>: <count>`` line per retained n-gram, singles first."""
    return [format_ngram_line(ngram, count) for ngram, count in tables.iter_entries()]


def format_reference_scores(version: float, scores: List[Tuple[str, int]]) -> List[str]:
    """
    Format the algorithm version followed by ``name: score`` lines.

    Args:
        version: Algorithm version identifier
        scores: (name, score) pairs, already sorted
    """
    lines = [f"algorithm: {version}"]
    lines.extend(f"{name}: {score}" for name, score in scores)
    return lines


def format_layout_grid(layout: LayoutLike) -> str:
    """Three-line grid rendering with a gap between the hands."""
    flat = _flat(layout)
    rows = [flat[i:i + 10] for i in range(0, len(flat), 10)]
    return '\n'.join(f"{' '.join(row[:5])}   {' '.join(row[5:])}" for row in rows)


def format_detailed_output(result: ScoreResult) -> str:
    """
    Format a scored layout as detailed human-readable output.

    Args:
        result: ScoreResult from ``BaseLayoutScorer.score_layout``

    Returns:
        Formatted detailed output string
    """
    lines = []
    title = f"{result.layout_name} layout" if result.layout_name else "Layout"
    lines.append(title)
    lines.append("=" * 50)
    lines.append(format_layout_grid(result.layout))
    lines.append("")

    lines.append("Scores:")
    for component, score in result.components.items():
        lines.append(f"  {component.capitalize():<12}: {score:>14,}")
    lines.append(f"  {'Total':<12}: {result.primary_score:>14,}")

    if result.metadata:
        lines.append("")
        lines.append("Table sizes:")
        for key in ('singles', 'doubles', 'triples', 'quadruples'):
            if key in result.metadata:
                lines.append(f"  {key:<12}: {result.metadata[key]}")
        if 'use_quadruple_roll' in result.metadata:
            lines.append(f"  Quadruple rolls: {'on' if result.metadata['use_quadruple_roll'] else 'off'}")

    return '\n'.join(lines)


def print_lines(lines: List[str], file: Optional[TextIO] = None) -> None:
    """Print each line to ``file`` (stdout by default)."""
    if file is None:
        file = sys.stdout
    for line in lines:
        print(line, file=file)
