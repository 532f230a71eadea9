#!/usr/bin/env python3
"""
Result aggregation for keyboard layout search.

The aggregator is the single consumer of worker results. It owns the running
best score and forwards every result, exactly once, to the append-only log.
"""

import sys
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

from layout_search.output_utils import format_log_line, format_new_best
from layout_search.search_worker import SearchResult
from layout_search.settings import ALGORITHM_VERSION


class ResultLog:
    """
    Append-only text log, one ``version|score|layout`` line per result.

    The file is reopened for every line so a crash loses at most the line in
    flight.
    """

    def __init__(self, path: Union[str, Path], algorithm_version: float = ALGORITHM_VERSION,
                 error_stream: Optional[TextIO] = None):
        self.path = Path(path)
        self.algorithm_version = algorithm_version
        self.error_stream = error_stream
        self.failures = 0

    def write(self, result: SearchResult) -> bool:
        """
        Append one result.

        Returns:
            True if the line was written; write errors are reported and ignored
        """
        line = format_log_line(self.algorithm_version, result.score, result.layout)
        try:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(line + '\n')
        except OSError as e:
            self.failures += 1
            print(f"Couldn't write to file: {e}", file=self.error_stream or sys.stderr)
            return False
        return True


class ResultAggregator:
    """Tracks the global best result and forwards every result to a sink."""

    def __init__(self,
                 sink: Optional[Callable[[SearchResult], object]] = None,
                 algorithm_version: float = ALGORITHM_VERSION,
                 quiet: bool = False,
                 stream: Optional[TextIO] = None):
        """
        Initialize the aggregator.

        Args:
            sink: Receives every result (e.g., ``ResultLog.write``)
            algorithm_version: Version tag shown in "New best" lines
            quiet: If True, print nothing
            stream: Output stream for progress (defaults to stdout)
        """
        self.sink = sink
        self.algorithm_version = algorithm_version
        self.quiet = quiet
        self.stream = stream
        self.best: Optional[SearchResult] = None
        self.received = 0

    @property
    def best_score(self) -> Optional[int]:
        return self.best.score if self.best is not None else None

    def offer(self, result: SearchResult) -> bool:
        """
        Compare ``result`` with the running best and keep it if strictly better.

        Returns:
            True if the result is a new best
        """
        if self.best is None or result.score > self.best.score:
            self.best = result
            return True
        return False

    def handle(self, result: SearchResult) -> bool:
        """
        Process one incoming result: update the best, report, forward to the sink.

        Returns:
            True if the result is a new best
        """
        self.received += 1
        is_best = self.offer(result)

        out = self.stream or sys.stdout
        if is_best and not self.quiet:
            print(format_new_best(self.algorithm_version, result.score, result.layout), file=out)

        if self.sink is not None:
            self.sink(result)

        if not self.quiet:
            print('.', end='', file=out, flush=True)

        return is_best
