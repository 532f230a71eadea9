#!/usr/bin/env python3
"""
Base classes for keyboard layout scorers.

Provides the common scoring interface used by the search workers and the
result structure used for detailed (per-component) reports.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import time

from layout_search.corpus_analyzer import FrequencyTables
from layout_search.layout import Layout
from layout_search.settings import ScoringWeights


@dataclass
class ScoreResult:
    """
    Detailed result of scoring one layout.

    Only built on the inspection path; the search itself works with the bare
    integer from ``BaseLayoutScorer.score``.
    """

    primary_score: int
    """Sum of all components (higher = better)"""

    components: Dict[str, int] = field(default_factory=dict)
    """Individual contributions (singles, doubles, triples, quadruples, penalties)"""

    scorer_name: str = ""

    layout: str = ""
    """Flattened layout (30 symbols, row-major)"""

    layout_name: str = ""

    metadata: Dict[str, Any] = field(default_factory=dict)

    execution_time: float = 0.0
    """Time taken to calculate scores (seconds)"""

    def get_score(self, component_name: Optional[str] = None) -> int:
        """
        Get a specific score component or the primary score.

        Raises:
            KeyError: If component_name not found in components
        """
        if component_name is None:
            return self.primary_score

        if component_name not in self.components:
            available = list(self.components.keys())
            raise KeyError(f"Component '{component_name}' not found. Available: {available}")

        return self.components[component_name]

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary representation."""
        result = {
            'primary_score': self.primary_score,
            'scorer_name': self.scorer_name,
            'layout': self.layout,
            'layout_name': self.layout_name,
            'execution_time': self.execution_time,
        }

        for component, score in self.components.items():
            result[f'component_{component}'] = score

        for key, value in self.metadata.items():
            if isinstance(value, (str, int, float, bool)):
                result[f'meta_{key}'] = value

        return result


class BaseLayoutScorer(ABC):
    """
    Abstract base class for layout scorers.

    A scorer is built once from the frequency tables and an ergonomic model,
    then evaluates any number of layouts. It holds no per-layout state, so
    scoring is deterministic and safe to share read-only.
    """

    def __init__(self, tables: FrequencyTables, weights: Optional[ScoringWeights] = None):
        """
        Initialize the base scorer.

        Args:
            tables: Corpus n-gram frequency tables
            weights: Ergonomic model (reference weights if None)
        """
        self.tables = tables
        self.weights = weights or ScoringWeights()
        self.scorer_name = self.__class__.__name__.lower().replace('scorer', '_scorer')

    @abstractmethod
    def calculate_components(self, layout: Layout) -> Dict[str, int]:
        """
        Calculate every score component for ``layout``.

        Returns:
            Mapping of component name to its signed integer contribution
        """

    def score(self, layout: Layout) -> int:
        """Total score of ``layout`` (higher = better)."""
        return sum(self.calculate_components(layout).values())

    def score_layout(self, layout: Layout) -> ScoreResult:
        """
        Score a layout with its per-component breakdown and timing.

        Returns:
            ScoreResult with primary score, components and metadata
        """
        start_time = time.time()
        components = self.calculate_components(layout)

        return ScoreResult(
            primary_score=sum(components.values()),
            components=components,
            scorer_name=self.scorer_name,
            layout=layout.flatten(),
            layout_name=layout.name,
            metadata={
                'use_quadruple_roll': self.weights.use_quadruple_roll,
                'singles': len(self.tables.singles),
                'doubles': len(self.tables.doubles),
                'triples': len(self.tables.triples),
                'quadruples': len(self.tables.quadruples),
            },
            execution_time=time.time() - start_time,
        )
