#!/usr/bin/env python3
"""
Parallel search pool for keyboard layout search.

Each worker runs in its own process with a private random source and a
read-only copy of the scorer. Results flow through one unbounded queue to the
single consumer (a ``ResultAggregator``) in arrival order. A shared stop event
lets the consumer end the search; workers check it between climbs.
"""

import multiprocessing
from typing import List, Optional

from layout_search.base_scorer import BaseLayoutScorer
from layout_search.result_aggregator import ResultAggregator
from layout_search.search_worker import SearchWorker, SearchResult


def worker_seed(base_seed: Optional[int], worker_id: int) -> Optional[int]:
    """Seed for ``worker_id``; None keeps a fresh random source."""
    if base_seed is None:
        return None
    return base_seed + worker_id


def _worker_main(worker_id: int,
                 scorer: BaseLayoutScorer,
                 stagnation_limit: int,
                 seed: Optional[int],
                 result_queue,
                 stop_event,
                 max_runs: Optional[int]) -> None:
    """Process entry point: climb, publish results, then signal completion."""
    worker = SearchWorker(scorer, stagnation_limit, seed, worker_id)
    try:
        worker.run(result_queue.put, stop_event, max_runs)
    finally:
        # Sentinel so the consumer knows this worker is done
        result_queue.put(worker_id)


class SearchPool:
    """Fixed pool of hill-climbing worker processes feeding one aggregator."""

    def __init__(self,
                 scorer: BaseLayoutScorer,
                 workers: int = 9,
                 stagnation_limit: int = 1000,
                 seed: Optional[int] = None):
        """
        Initialize the pool.

        Args:
            scorer: Scorer shared (read-only) by every worker
            workers: Number of worker processes
            stagnation_limit: Failed swaps that end one climb
            seed: Base seed; worker i uses seed + i (fresh randomness if None)
        """
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.scorer = scorer
        self.workers = workers
        self.stagnation_limit = stagnation_limit
        self.seed = seed
        self.context = multiprocessing.get_context()
        self.stop_event = self.context.Event()
        self._processes: List[multiprocessing.Process] = []

    def stop(self) -> None:
        """Ask every worker to stop after its current climb."""
        self.stop_event.set()

    def run(self,
            aggregator: ResultAggregator,
            max_runs: Optional[int] = None) -> List[SearchResult]:
        """
        Start the workers and feed their results to ``aggregator``.

        Blocks until every worker has finished (bounded ``max_runs``, or after
        ``stop``) or forever for unbounded runs. On KeyboardInterrupt the
        workers are stopped and the interrupt is re-raised.

        Args:
            aggregator: Consumer of every result
            max_runs: Climbs per worker (unbounded if None)

        Returns:
            All results in the order they were consumed
        """
        result_queue = self.context.Queue()
        self._processes = [
            self.context.Process(
                target=_worker_main,
                args=(worker_id, self.scorer, self.stagnation_limit,
                      worker_seed(self.seed, worker_id), result_queue,
                      self.stop_event, max_runs),
                daemon=True,
            )
            for worker_id in range(self.workers)
        ]
        for process in self._processes:
            process.start()

        consumed = []
        finished = 0
        try:
            while finished < self.workers:
                item = result_queue.get()
                if isinstance(item, SearchResult):
                    aggregator.handle(item)
                    consumed.append(item)
                else:
                    finished += 1
        except KeyboardInterrupt:
            self.stop()
            raise
        finally:
            self._shutdown()

        return consumed

    def _shutdown(self) -> None:
        self.stop_event.set()
        for process in self._processes:
            process.join(timeout=5)
            if process.is_alive():
                process.terminate()
                process.join()
        self._processes = []
