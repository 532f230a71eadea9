#!/usr/bin/env python3
"""
Corpus analysis for keyboard layout search.

Builds the n-gram frequency tables (1 to 4 letters) the scorer consumes.
Only windows made entirely of lowercase ASCII letters with no letter repeated
inside the window are counted, so doubled letters ("ll") never appear.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple, Union

import numpy as np

from layout_search.errors import CorpusError


MAX_ARITY = 4
ARITY_NAMES = {1: 'singles', 2: 'doubles', 3: 'triples', 4: 'quadruples'}
DEFAULT_MAX_BYTES = 100 * 1024 * 1024
DEFAULT_MAX_ENTRIES = 1000
DEFAULT_CHUNK_BYTES = 1024 * 1024

FrequencyTable = Tuple[Tuple[str, int], ...]

_A = ord('a')
_Z = ord('z')
_RADIX = 26


@dataclass(frozen=True)
class FrequencyTables:
    """
    Immutable n-gram tables, each ordered by descending count.

    Tables are tuples of (ngram, count) pairs so they can be shared read-only
    across worker processes.
    """

    singles: FrequencyTable = ()
    doubles: FrequencyTable = ()
    triples: FrequencyTable = ()
    quadruples: FrequencyTable = ()

    def table(self, arity: int) -> FrequencyTable:
        """Return the table for n-grams of length ``arity`` (1-4)."""
        if arity not in ARITY_NAMES:
            raise ValueError(f"Arity must be between 1 and {MAX_ARITY}, got {arity}")
        return getattr(self, ARITY_NAMES[arity])

    def as_dict(self, arity: int) -> Dict[str, int]:
        return dict(self.table(arity))

    def iter_entries(self) -> Iterator[Tuple[str, int]]:
        """Every retained n-gram, singles first, each table in rank order."""
        for arity in range(1, MAX_ARITY + 1):
            yield from self.table(arity)

    def __len__(self) -> int:
        return sum(len(self.table(arity)) for arity in range(1, MAX_ARITY + 1))


def read_corpus(paths: Iterable[Union[str, Path]],
                max_bytes: int = DEFAULT_MAX_BYTES) -> bytes:
    """
    Read and concatenate corpus files in the order given.

    Args:
        paths: Corpus file paths
        max_bytes: Maximum number of bytes ingested from each file

    Returns:
        Concatenated corpus bytes

    Raises:
        CorpusError: If any file cannot be opened or read
    """
    chunks = []
    for path in paths:
        try:
            with open(path, 'rb') as f:
                chunks.append(f.read(max_bytes))
        except OSError as e:
            raise CorpusError(f"Could not read corpus file {path}: {e}") from e
    return b''.join(chunks)


def _window_codes(data: np.ndarray, arity: int) -> np.ndarray:
    """
    Encode every valid window of ``arity`` letters as a base-26 integer.

    The first letter is the most significant digit, so sorting codes sorts the
    n-grams lexicographically.
    """
    n_windows = len(data) - arity + 1
    if n_windows <= 0:
        return np.empty(0, dtype=np.int64)

    columns = [data[offset:offset + n_windows] for offset in range(arity)]

    valid = np.ones(n_windows, dtype=bool)
    for column in columns:
        valid &= (column >= _A) & (column <= _Z)
    for i in range(arity):
        for j in range(i + 1, arity):
            valid &= columns[i] != columns[j]

    codes = np.zeros(int(valid.sum()), dtype=np.int64)
    for column in columns:
        codes = codes * _RADIX + (column[valid].astype(np.int64) - _A)
    return codes


def _count_codes(data: np.ndarray, arity: int, chunk_bytes: int) -> np.ndarray:
    """
    Tally window codes into one bin per possible n-gram.

    Windows are encoded a chunk at a time; consecutive chunks overlap by
    ``arity - 1`` bytes so windows straddling a boundary are counted once.
    """
    bins = np.zeros(_RADIX ** arity, dtype=np.int64)
    n_windows = len(data) - arity + 1
    for start in range(0, max(n_windows, 0), chunk_bytes):
        stop = min(start + chunk_bytes, n_windows)
        codes = _window_codes(data[start:stop + arity - 1], arity)
        bins += np.bincount(codes, minlength=bins.size)
    return bins


def _decode(code: int, arity: int) -> str:
    letters = []
    for _ in range(arity):
        code, digit = divmod(code, _RADIX)
        letters.append(chr(_A + digit))
    return ''.join(reversed(letters))


def count_ngrams(data: bytes, arity: int, chunk_bytes: int = DEFAULT_CHUNK_BYTES) -> Dict[str, int]:
    """
    Count n-grams of length ``arity`` in ``data``.

    Memory stays bounded by ``chunk_bytes`` plus one bin per possible n-gram
    (26 ** arity), whatever the corpus size.

    Args:
        data: Raw corpus bytes
        arity: Window length (1-4)
        chunk_bytes: Number of windows encoded at once

    Returns:
        Dictionary mapping each n-gram to its count, in lexicographic order
    """
    if arity < 1 or arity > MAX_ARITY:
        raise ValueError(f"Arity must be between 1 and {MAX_ARITY}, got {arity}")
    if chunk_bytes < 1:
        raise ValueError(f"chunk_bytes must be positive, got {chunk_bytes}")

    if not data:
        return {}

    bins = _count_codes(np.frombuffer(data, dtype=np.uint8), arity, chunk_bytes)
    return {_decode(int(code), arity): int(bins[code]) for code in np.flatnonzero(bins)}


def top_entries(counts: Dict[str, int], limit: int = DEFAULT_MAX_ENTRIES) -> FrequencyTable:
    """
    Keep the ``limit`` most frequent n-grams.

    Ties are broken lexicographically so the result doesn't depend on the
    counting order.
    """
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return tuple(ranked[:limit])


def build_frequency_tables(data: bytes,
                           max_entries: int = DEFAULT_MAX_ENTRIES,
                           quiet: bool = True) -> FrequencyTables:
    """
    Build the 1- to 4-gram frequency tables for a corpus.

    Args:
        data: Raw corpus bytes
        max_entries: Number of entries kept per table
        quiet: If False, print a progress line per table

    Returns:
        FrequencyTables with every table truncated to ``max_entries``
    """
    tables = {}
    for arity in range(1, MAX_ARITY + 1):
        name = ARITY_NAMES[arity]
        if not quiet:
            print(f"Counting {name}...")
        tables[name] = top_entries(count_ngrams(data, arity), max_entries)
    return FrequencyTables(**tables)


def load_frequency_tables(paths: List[Union[str, Path]],
                          max_bytes: int = DEFAULT_MAX_BYTES,
                          max_entries: int = DEFAULT_MAX_ENTRIES,
                          quiet: bool = True) -> FrequencyTables:
    """Read corpus files and build their frequency tables."""
    if not quiet:
        print("Loading in corpus...")
    data = read_corpus(paths, max_bytes)
    if not quiet and not data:
        print("Warning: corpus is empty", file=sys.stderr)
    return build_frequency_tables(data, max_entries, quiet)
