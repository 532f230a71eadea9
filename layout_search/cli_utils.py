#!/usr/bin/env python3
"""
CLI utilities for keyboard layout search.

Argument parsing and the common error-handling wrapper for ``main()``.
"""

import argparse
import functools
import sys
import traceback
from typing import List, Optional

from layout_search.config_loader import apply_overrides
from layout_search.errors import CorpusError, KeyNotFoundError
from layout_search.settings import Settings


EPILOG = """
Examples:

  # Print the retained n-grams and exit
  python optimize_layout.py corpus/*.txt --debug

  # Score one layout (name or 30 row-major symbols) and exit
  python optimize_layout.py corpus/*.txt --score colemak

  # Search forever with 9 workers, appending results to output.log
  python optimize_layout.py corpus/*.txt

  # Reproducible bounded search
  python optimize_layout.py corpus/*.txt --workers 2 --seed 7 --max-runs 5
"""


def create_cli_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser for the layout search."""
    parser = argparse.ArgumentParser(
        description="Search for efficient keyboard layouts with parallel hill climbing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        'corpus',
        nargs='+',
        help="Corpus text files (each read up to the per-source byte limit)"
    )

    mode_group = parser.add_argument_group('Modes')
    mode_group.add_argument(
        '--debug',
        action='store_true',
        help="Print every retained n-gram with its count, then exit"
    )
    mode_group.add_argument(
        '--score',
        metavar='LAYOUT',
        help="Print a score breakdown for a layout name or 30-symbol layout, then exit"
    )

    search_group = parser.add_argument_group('Search Options')
    search_group.add_argument(
        '--workers',
        type=int,
        help="Number of worker processes (default from config: 9)"
    )
    search_group.add_argument(
        '--stagnation-limit',
        dest='stagnation_limit',
        type=int,
        help="Non-improving swaps that end a climb (default from config: 1000)"
    )
    search_group.add_argument(
        '--seed',
        type=int,
        help="Base random seed; worker i uses seed + i"
    )
    search_group.add_argument(
        '--max-runs',
        dest='max_runs',
        type=int,
        help="Climbs per worker before stopping (default: run until interrupted)"
    )
    search_group.add_argument(
        '--quadruples',
        action='store_true',
        default=None,
        help="Enable quadruple roll scoring"
    )

    io_group = parser.add_argument_group('Input/Output Options')
    io_group.add_argument(
        '--config',
        help="Path to configuration file (default: config.yaml if present)"
    )
    io_group.add_argument(
        '--log-file',
        dest='log_file',
        help="Append-only result log (default from config: output.log)"
    )
    io_group.add_argument(
        '--quiet',
        action='store_true',
        help="Suppress progress output"
    )

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments with validation.

    Args:
        args: List of arguments (uses sys.argv if None)
    """
    parser = create_cli_parser()
    parsed_args = parser.parse_args(args)

    for name in ('workers', 'stagnation_limit', 'max_runs'):
        value = getattr(parsed_args, name)
        if value is not None and value < 1:
            parser.error(f"--{name.replace('_', '-')} must be positive")

    if parsed_args.debug and parsed_args.score:
        parser.error("Cannot combine --debug and --score")

    return parsed_args


def settings_from_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of configured settings."""
    settings = apply_overrides(settings, 'search',
                               workers=args.workers,
                               stagnation_limit=args.stagnation_limit)
    settings = apply_overrides(settings, 'scoring', use_quadruple_roll=args.quadruples)
    settings = apply_overrides(settings, 'output', log_file=args.log_file)
    return settings


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function returning a process exit code
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.", file=sys.stderr)
            return 130
        except CorpusError as e:
            print(f"Corpus error: {e}", file=sys.stderr)
            return 1
        except KeyNotFoundError:
            # Broken layout invariant: not recoverable, keep the traceback
            raise
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            traceback.print_exc()
            return 1

    return wrapper
