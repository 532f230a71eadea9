"""Tests for hill climbing and the search worker."""

import random
import threading

import pytest

from layout_search.base_scorer import BaseLayoutScorer
from layout_search.corpus_analyzer import FrequencyTables
from layout_search.layout import Layout
from layout_search.search_worker import SearchResult, SearchWorker, hill_climb

from conftest import make_layout


class ConstantScorer(BaseLayoutScorer):
    """Scores every layout the same and counts evaluations."""

    def __init__(self):
        super().__init__(FrequencyTables())
        self.calls = 0

    def calculate_components(self, layout):
        self.calls += 1
        return {'constant': 7}


def test_adopted_scores_strictly_increase(th_scorer, rng):
    # h starts on a protected key, so almost any swap that moves it improves
    start = make_layout({'t': (0, 0), 'h': (2, 9)})
    adopted = []
    result = hill_climb(th_scorer, rng, stagnation_limit=200, start=start,
                        on_adopt=lambda score, layout: adopted.append(score))

    assert adopted, "the start layout should improve at least once"
    assert all(later > earlier for earlier, later in zip(adopted, adopted[1:]))
    assert result.score == adopted[-1]
    assert th_scorer.score(result.layout) == result.score


def test_equal_scores_never_adopted():
    scorer = ConstantScorer()
    start = Layout.random(random.Random(3))
    adopted = []

    result = hill_climb(scorer, random.Random(3), stagnation_limit=25, start=start,
                        on_adopt=lambda score, layout: adopted.append(score))

    assert adopted == []
    assert result.layout == start
    assert result.score == 7
    # One evaluation of the start plus one per failed attempt
    assert scorer.calls == 26


def test_start_layout_not_modified(th_scorer, rng):
    start = Layout.random(rng)
    snapshot = start.flatten()
    hill_climb(th_scorer, rng, stagnation_limit=50, start=start)
    assert start.flatten() == snapshot


def test_invalid_stagnation_limit(th_scorer, rng):
    with pytest.raises(ValueError):
        hill_climb(th_scorer, rng, stagnation_limit=0)


def test_worker_emits_bounded_runs(th_scorer):
    results = []
    worker = SearchWorker(th_scorer, stagnation_limit=30, seed=9, worker_id=4)

    completed = worker.run(results.append, max_runs=3)

    assert completed == 3
    assert [r.run_index for r in results] == [0, 1, 2]
    assert all(r.worker_id == 4 for r in results)
    assert all(isinstance(r, SearchResult) for r in results)
    for result in results:
        result.layout.validate()


def test_worker_is_reproducible_with_seed(th_scorer):
    def run(seed):
        results = []
        SearchWorker(th_scorer, stagnation_limit=40, seed=seed).run(results.append, max_runs=3)
        return [(r.score, r.flatten()) for r in results]

    assert run(21) == run(21)


def test_stop_event_checked_before_each_climb(th_scorer):
    stop = threading.Event()
    results = []
    worker = SearchWorker(th_scorer, stagnation_limit=20, seed=1)

    def emit(result):
        results.append(result)
        stop.set()

    completed = worker.run(emit, stop_event=stop)

    assert completed == 1
    assert len(results) == 1


def test_stopped_worker_emits_nothing(th_scorer):
    stop = threading.Event()
    stop.set()
    results = []
    assert SearchWorker(th_scorer, seed=1).run(results.append, stop_event=stop) == 0
    assert results == []
