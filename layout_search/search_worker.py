#!/usr/bin/env python3
"""
Random-restart hill climbing over keyboard layouts.

A climb starts from a random layout and repeatedly tries a single random swap,
keeping it only when the score strictly improves. After ``stagnation_limit``
consecutive failed attempts the climb ends and its layout is reported; the
worker then restarts from a fresh random layout.
"""

import random
from dataclasses import dataclass
from typing import Callable, Optional

from layout_search.base_scorer import BaseLayoutScorer
from layout_search.layout import Layout, random_swap


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one hill-climbing run."""

    score: int
    layout: Layout
    worker_id: int = 0
    run_index: int = 0

    def flatten(self) -> str:
        return self.layout.flatten()


def hill_climb(scorer: BaseLayoutScorer,
               rng: random.Random,
               stagnation_limit: int = 1000,
               start: Optional[Layout] = None,
               on_adopt: Optional[Callable[[int, Layout], None]] = None) -> SearchResult:
    """
    Climb from ``start`` (or a random layout) until progress stalls.

    Args:
        scorer: Scorer used to evaluate candidates
        rng: Random source for the start layout and every swap
        stagnation_limit: Consecutive non-improving swaps that end the climb
        start: Starting layout; not modified
        on_adopt: Called with (score, layout) each time a candidate is adopted

    Returns:
        SearchResult with the final score and layout
    """
    if stagnation_limit < 1:
        raise ValueError(f"stagnation_limit must be positive, got {stagnation_limit}")

    layout = start.clone() if start is not None else Layout.random(rng)
    current_score = scorer.score(layout)
    failures = 0

    while failures < stagnation_limit:
        candidate = layout.clone()
        random_swap(candidate, rng)
        candidate_score = scorer.score(candidate)

        # Strict improvement only; equal scores would wander across plateaus
        if candidate_score > current_score:
            layout = candidate
            current_score = candidate_score
            failures = 0
            if on_adopt is not None:
                on_adopt(current_score, layout)
        else:
            failures += 1

    return SearchResult(current_score, layout)


class SearchWorker:
    """
    Runs hill climbs back to back and emits each result.

    Without ``max_runs`` and a stop event the worker never returns.
    """

    def __init__(self,
                 scorer: BaseLayoutScorer,
                 stagnation_limit: int = 1000,
                 seed: Optional[int] = None,
                 worker_id: int = 0):
        """
        Initialize the worker.

        Args:
            scorer: Shared read-only scorer
            stagnation_limit: Failed swaps that end one climb
            seed: Seed for this worker's private random source (fresh if None)
            worker_id: Identifier attached to every result
        """
        self.scorer = scorer
        self.stagnation_limit = stagnation_limit
        self.worker_id = worker_id
        self.rng = random.Random(seed)
        self.runs_completed = 0

    def run_once(self) -> SearchResult:
        """Perform one climb from a fresh random layout."""
        result = hill_climb(self.scorer, self.rng, self.stagnation_limit)
        result = SearchResult(result.score, result.layout, self.worker_id, self.runs_completed)
        self.runs_completed += 1
        return result

    def run(self,
            emit: Callable[[SearchResult], None],
            stop_event=None,
            max_runs: Optional[int] = None) -> int:
        """
        Climb repeatedly, passing every result to ``emit``.

        Args:
            emit: Receives each SearchResult
            stop_event: Object with ``is_set()``; checked before every climb
            max_runs: Stop after this many climbs (run forever if None)

        Returns:
            Number of climbs completed by this call
        """
        completed = 0
        while max_runs is None or completed < max_runs:
            if stop_event is not None and stop_event.is_set():
                break
            emit(self.run_once())
            completed += 1
        return completed
