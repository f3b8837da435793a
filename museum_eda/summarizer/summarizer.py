"""
Per-Collection Summarizer

Turns one Collection into:
- A SummaryRow (record count, distinct artists, earliest/latest date)
- Categorical distributions (top-N category counts)
- Temporal distributions (year counts binned by century or a fixed width)
- Normalized distributions (category counts with fractions of the non-null total)

The same Summarizer serves every museum; a CollectionSpec tells it which of
the collection's own columns play each role.
"""

import warnings
from typing import Any, Dict, Optional

import pandas as pd

from ..errors import EmptyAggregateWarning
from ..models import (
    Collection,
    CollectionSpec,
    CollectionSummary,
    Distribution,
    DistributionSpec,
    SummaryRow,
)
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import (
    bin_values,
    count_categories,
    distinct_count,
    parse_date_values,
    to_python_scalar,
    to_year,
)

logger = get_logger(__name__)


class Summarizer:
    """
    Computes scalar aggregates and distributions for a single Collection.

    Attributes:
        config: Configuration dictionary with settings

    Example:
        >>> summarizer = Summarizer(config={"top_n": 10})
        >>> summary = summarizer.summarize(collection, spec)
        >>> print(summary.row.total_count)
        448203
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Summarizer.

        Args:
            config: Configuration dict (``summarizer`` block of pipeline_config.yaml)
        """
        self.config = {
            'top_n': None,  # default truncation for categorical distributions
            'century_width': 100,  # default bin width for temporal distributions
            'numeric_threshold': 0.95,
        }

        if config:
            self.config.update(config)

    def summarize(self, collection: Collection, spec: CollectionSpec) -> CollectionSummary:
        """
        Compute the SummaryRow and every configured distribution.

        Args:
            collection: Loaded collection
            spec: Role mapping and distribution list for this collection

        Returns:
            CollectionSummary for the collection

        Raises:
            MissingColumnError: If the CollectionSpec names a column the collection lacks
        """
        logger.info(f"Summarizing collection: {collection.name}")

        row = self.summarize_row(
            collection,
            identity_column=spec.identity_column,
            date_start_column=spec.date_start_column,
            date_end_column=spec.date_end_column
        )

        distributions = {}
        for dist_spec in spec.distributions:
            distributions[dist_spec.name] = self.distribution(collection, dist_spec)

        logger.info(
            f"  {row.total_count} records, {row.distinct_count} distinct "
            f"'{row.identity_column}', {len(distributions)} distributions"
        )

        return CollectionSummary(row=row, distributions=distributions)

    def summarize_row(
        self,
        collection: Collection,
        identity_column: Optional[str] = None,
        date_start_column: Optional[str] = None,
        date_end_column: Optional[str] = None
    ) -> SummaryRow:
        """
        Compute scalar aggregates for a collection.

        The record count includes rows with nulls anywhere. The distinct
        count covers non-null values of ``identity_column`` only. Earliest
        is the minimum of ``date_start_column`` and latest the maximum of
        ``date_end_column`` (same column if no end column is given); both
        are None when the column holds no values.

        Args:
            collection: Loaded collection
            identity_column: Column identifying the artist of each record
            date_start_column: Column to take the earliest date from
            date_end_column: Column to take the latest date from

        Returns:
            SummaryRow for the collection
        """
        total = len(collection)

        distinct = 0
        if identity_column is not None:
            distinct = distinct_count(collection.column(identity_column))

        date_end_column = date_end_column or date_start_column
        earliest = latest = None

        if date_start_column is not None:
            earliest = self._date_extreme(collection, date_start_column, 'min')
        if date_end_column is not None:
            latest = self._date_extreme(collection, date_end_column, 'max')

        return SummaryRow(
            collection=collection.name,
            total_count=total,
            distinct_count=distinct,
            earliest=earliest,
            latest=latest,
            identity_column=identity_column
        )

    def distribution(self, collection: Collection, spec: DistributionSpec) -> Distribution:
        """Compute the distribution described by a DistributionSpec."""
        if spec.kind == 'categorical':
            return self.categorical_distribution(
                collection, spec.column, top_n=spec.top_n, name=spec.name
            )
        if spec.kind == 'temporal':
            return self.temporal_distribution(
                collection, spec.column, bin_width=spec.bin_width, name=spec.name
            )
        if spec.kind == 'normalized':
            return self.normalized_distribution(
                collection, spec.column, top_n=spec.top_n, name=spec.name
            )

        raise ValueError(f"Unknown distribution kind: {spec.kind}")

    def categorical_distribution(
        self,
        collection: Collection,
        column: str,
        top_n: Optional[int] = None,
        name: Optional[str] = None
    ) -> Distribution:
        """
        Count records per category, largest first.

        Null values are excluded rather than counted as a category. Ties
        keep first-encountered order, so the result is the same on every run.

        Args:
            collection: Loaded collection
            column: Category column
            top_n: Keep only the N largest categories (None = config default)
            name: Key for the distribution (defaults to the column name)

        Returns:
            Distribution sorted by count descending

        Example:
            >>> dist = summarizer.categorical_distribution(met, "Department", top_n=5)
            >>> dist.entries[0]
            ('Drawings and Prints', 172630)
        """
        entries = count_categories(collection.column(column))

        dist = Distribution(
            name=name or column,
            column=column,
            kind='categorical',
            entries=entries
        )

        return dist.top(self._resolve_top_n(top_n))

    def temporal_distribution(
        self,
        collection: Collection,
        column: str,
        bin_width: Optional[int] = None,
        name: Optional[str] = None
    ) -> Distribution:
        """
        Count records per fixed-width year bucket.

        Calendar dates are reduced to their year first. Records with no
        date are left out entirely.

        Args:
            collection: Loaded collection
            column: Year or date column
            bin_width: Bucket width in years (None = century)
            name: Key for the distribution (defaults to the column name)

        Returns:
            Distribution of (bucket lower edge, count), oldest bucket first
        """
        width = bin_width if bin_width is not None else self.config['century_width']
        if width <= 0:
            raise ValueError(f"Bin width must be positive, got {width}")

        years = to_year(collection.column(column), self.config['numeric_threshold'])
        bins = bin_values(years, width)

        counts = bins.value_counts().sort_index()
        entries = [(int(label), int(count)) for label, count in counts.items()]

        return Distribution(
            name=name or column,
            column=column,
            kind='temporal',
            entries=entries,
            bin_width=int(width)
        )

    def normalized_distribution(
        self,
        collection: Collection,
        column: str,
        top_n: Optional[int] = None,
        name: Optional[str] = None
    ) -> Distribution:
        """
        Categorical distribution with each count as a share of non-null rows.

        Fractions are taken over the whole non-null total, so they sum to 1.0
        before truncation to ``top_n``.
        """
        entries = count_categories(collection.column(column))
        total = sum(count for _, count in entries)
        fractions = [count / total for _, count in entries] if total else []

        dist = Distribution(
            name=name or column,
            column=column,
            kind='normalized',
            entries=entries,
            fractions=fractions
        )

        return dist.top(self._resolve_top_n(top_n))

    def _resolve_top_n(self, top_n: Optional[int]) -> Optional[int]:
        return top_n if top_n is not None else self.config['top_n']

    def _date_extreme(self, collection: Collection, column: str, how: str) -> Optional[Any]:
        values = parse_date_values(
            collection.column(column),
            self.config['numeric_threshold']
        )

        if len(values) == 0:
            message = (
                f"Column '{column}' of collection '{collection.name}' has no date "
                f"values; {'earliest' if how == 'min' else 'latest'} date is undefined"
            )
            logger.warning(message)
            warnings.warn(message, EmptyAggregateWarning, stacklevel=3)
            return None

        value = values.min() if how == 'min' else values.max()

        if isinstance(value, pd.Timestamp):
            return value
        return to_python_scalar(value)
