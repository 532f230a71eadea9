#!/usr/bin/env python3
"""
Keyboard layout search.

(c) Arno Klein (arnoklein.info), MIT License (see LICENSE)

Builds 1- to 4-letter frequency tables from corpus files, scores the reference
layouts (qwerty, dvorak, colemak, workman), then runs parallel random-restart
hill climbing for better 3x10 layouts. Every finished climb is appended to the
result log as "version|score|layout"; a line is printed whenever the best
score improves. The search runs until interrupted (Ctrl-C) unless --max-runs
is given.

Usage:

  # Search (runs until interrupted)
  python optimize_layout.py corpus/*.txt

  # Print the retained n-grams and exit
  python optimize_layout.py corpus/*.txt --debug

  # Score breakdown for one layout
  python optimize_layout.py corpus/*.txt --score "qwertyuiopasdfghjkl;zxcvbnm,./"

  # Bounded, reproducible search
  python optimize_layout.py corpus/*.txt --workers 2 --seed 7 --max-runs 5 --log-file run.log
"""

import sys
from typing import List, Optional

from layout_search.cli_utils import parse_args, settings_from_args, handle_common_errors
from layout_search.config_loader import load_settings
from layout_search.corpus_analyzer import load_frequency_tables
from layout_search.layout import parse_layout, reference_layouts
from layout_search.output_utils import (
    format_detailed_output, format_frequency_tables, format_reference_scores, print_lines
)
from layout_search.result_aggregator import ResultAggregator, ResultLog
from layout_search.roll_scorer import RollScorer, score_reference_layouts
from layout_search.search_pool import SearchPool


@handle_common_errors
def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    settings = settings_from_args(load_settings(args.config), args)
    quiet = args.quiet

    tables = load_frequency_tables(
        args.corpus,
        max_bytes=settings.corpus.max_bytes_per_source,
        max_entries=settings.corpus.max_entries_per_table,
        quiet=quiet,
    )

    if args.debug:
        print_lines(format_frequency_tables(tables))
        return 0

    scorer = RollScorer(tables, settings.scoring)

    if args.score:
        layout = parse_layout(args.score)
        print(format_detailed_output(scorer.score_layout(layout)))
        return 0

    scores = score_reference_layouts(scorer, reference_layouts())
    print_lines(format_reference_scores(settings.algorithm_version, scores))

    log = ResultLog(settings.output.log_file, settings.algorithm_version)
    aggregator = ResultAggregator(log.write, settings.algorithm_version, quiet=quiet)
    pool = SearchPool(
        scorer,
        workers=settings.search.workers,
        stagnation_limit=settings.search.stagnation_limit,
        seed=args.seed,
    )
    pool.run(aggregator, max_runs=args.max_runs)

    if not quiet:
        print()
    if aggregator.best is not None:
        print(f"Best: {aggregator.best.score}|{aggregator.best.flatten()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
