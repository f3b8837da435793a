"""
Museum collection report.

Loads museum collection datasets, summarizes each one (counts, distinct
artists, date ranges, category and time distributions) and compares them
side by side.
"""

from .aggregator import build_comparison_table
from .errors import (
    AggregationError,
    EmptyAggregateWarning,
    LoadError,
    MissingColumnError,
    MuseumEDAError,
)
from .loader import CollectionLoader, load_collection
from .models import (
    Collection,
    CollectionSpec,
    CollectionSummary,
    ComparisonTable,
    Distribution,
    DistributionSpec,
    SummaryRow,
)
from .summarizer import Summarizer

__version__ = '0.1.0'

__all__ = [
    'build_comparison_table',
    'AggregationError',
    'EmptyAggregateWarning',
    'LoadError',
    'MissingColumnError',
    'MuseumEDAError',
    'CollectionLoader',
    'load_collection',
    'Collection',
    'CollectionSpec',
    'CollectionSummary',
    'ComparisonTable',
    'Distribution',
    'DistributionSpec',
    'SummaryRow',
    'Summarizer',
]
