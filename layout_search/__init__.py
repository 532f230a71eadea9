# layout_search/__init__.py
"""
Keyboard Layout Search

Corpus n-gram analysis, roll-based layout scoring and parallel random-restart
hill climbing for 3x10 keyboard layouts.
"""

__version__ = "4.419.0"

# Import main classes for easy access
from .base_scorer import BaseLayoutScorer, ScoreResult
from .config_loader import ConfigLoader, load_settings
from .corpus_analyzer import FrequencyTables, build_frequency_tables, load_frequency_tables
from .layout import Layout, random_swap, find_key, reference_layouts
from .result_aggregator import ResultAggregator, ResultLog
from .roll_scorer import RollScorer
from .search_pool import SearchPool
from .search_worker import SearchResult, SearchWorker, hill_climb
from .settings import ALGORITHM_VERSION, ScoringWeights, Settings

__all__ = [
    'ALGORITHM_VERSION',
    'BaseLayoutScorer',
    'ConfigLoader',
    'FrequencyTables',
    'Layout',
    'ResultAggregator',
    'ResultLog',
    'RollScorer',
    'ScoreResult',
    'ScoringWeights',
    'SearchPool',
    'SearchResult',
    'SearchWorker',
    'Settings',
    'build_frequency_tables',
    'find_key',
    'hill_climb',
    'load_frequency_tables',
    'load_settings',
    'random_swap',
    'reference_layouts',
]
