"""
Data model for the collection report.

Collections are loaded once and only read afterwards; every other type here
is derived from a Collection and rebuilt on each run.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple, Union

import pandas as pd
from pydantic import BaseModel, Field, field_validator, model_validator

from .errors import MissingColumnError

DateValue = Union[int, float, pd.Timestamp]
DistributionKind = Literal['categorical', 'temporal', 'normalized']


@dataclass(frozen=True, eq=False)
class Collection:
    """
    One museum dataset: an ordered sequence of records sharing one schema.

    Absent values are kept as pandas nulls and reported as ``None`` by
    ``records()``.

    Example:
        >>> collection = Collection(name="Met", frame=df)
        >>> len(collection)
        448203
    """

    name: str
    frame: pd.DataFrame
    source_path: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def columns(self) -> List[str]:
        return list(self.frame.columns)

    def has_column(self, column: str) -> bool:
        return column in self.frame.columns

    def column(self, column: str) -> pd.Series:
        """
        Get one column by its exact name.

        Raises:
            MissingColumnError: If the column is not in this collection's schema
        """
        if column not in self.frame.columns:
            raise MissingColumnError(self.name, column, self.columns)
        return self.frame[column]

    def records(self) -> Iterator[Dict[str, Any]]:
        """Yield each row as a dict, with absent values as None."""
        cleaned = self.frame.astype(object).where(self.frame.notna(), None)
        for record in cleaned.to_dict(orient='records'):
            yield record


@dataclass
class Distribution:
    """
    Ordered (label, count) pairs derived from grouping one column.

    Categorical and normalized distributions are sorted by count descending;
    temporal distributions are ordered by bin key. ``fractions`` is only set
    for normalized distributions and follows the order of ``entries``.
    """

    name: str
    column: str
    kind: DistributionKind
    entries: List[Tuple[Any, int]] = field(default_factory=list)
    fractions: Optional[List[float]] = None
    bin_width: Optional[int] = None

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def labels(self) -> List[Any]:
        return [label for label, _ in self.entries]

    @property
    def counts(self) -> List[int]:
        return [count for _, count in self.entries]

    @property
    def total(self) -> int:
        return sum(self.counts)

    def top(self, n: Optional[int]) -> 'Distribution':
        """
        Return the first ``n`` entries, keeping their order.

        Args:
            n: Number of entries to keep (None = keep all)
        """
        if n is None:
            return Distribution(**asdict(self))
        if n < 0:
            raise ValueError(f"top_n must be non-negative, got {n}")

        fractions = self.fractions[:n] if self.fractions is not None else None
        return Distribution(
            name=self.name,
            column=self.column,
            kind=self.kind,
            entries=list(self.entries[:n]),
            fractions=fractions,
            bin_width=self.bin_width
        )

    def to_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(self.entries, columns=['label', 'count'])
        if self.fractions is not None:
            frame['fraction'] = self.fractions
        return frame

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'column': self.column,
            'kind': self.kind,
            'entries': [[label, count] for label, count in self.entries],
        }
        if self.fractions is not None:
            data['fractions'] = list(self.fractions)
        if self.bin_width is not None:
            data['bin_width'] = self.bin_width
        return data


@dataclass
class SummaryRow:
    """
    Scalar aggregates for one collection.

    ``earliest`` and ``latest`` are None when the collection has no
    designated date column or that column holds no values.
    """

    collection: str
    total_count: int
    distinct_count: int
    earliest: Optional[DateValue] = None
    latest: Optional[DateValue] = None
    identity_column: Optional[str] = None

    def date_range(self) -> Optional[Any]:
        """Span between latest and earliest, or None if either is undefined."""
        if self.earliest is None or self.latest is None:
            return None
        return self.latest - self.earliest

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('earliest', 'latest'):
            if isinstance(data[key], pd.Timestamp):
                data[key] = data[key].isoformat()
        return data


@dataclass
class CollectionSummary:
    """SummaryRow plus the named distributions computed for one collection."""

    row: SummaryRow
    distributions: Dict[str, Distribution] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.row.collection

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.row.to_dict(),
            'distributions': {
                name: dist.to_dict() for name, dist in self.distributions.items()
            }
        }


COMPARISON_COLUMNS = ['collection', 'total_count', 'distinct_count', 'earliest', 'latest']


@dataclass
class ComparisonTable:
    """
    One SummaryRow per collection, in the order the collections were supplied.

    Counts are per collection: an artist held by two museums is counted once
    in each.
    """

    rows: List[SummaryRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[SummaryRow]:
        return iter(self.rows)

    def names(self) -> List[str]:
        return [row.collection for row in self.rows]

    def row(self, name: str) -> SummaryRow:
        for summary_row in self.rows:
            if summary_row.collection == name:
                return summary_row
        raise KeyError(name)

    def to_frame(self) -> pd.DataFrame:
        records = [
            {key: getattr(row, key) for key in COMPARISON_COLUMNS}
            for row in self.rows
        ]
        return pd.DataFrame(records, columns=COMPARISON_COLUMNS)

    def to_dict(self) -> Dict[str, Any]:
        return {'rows': [row.to_dict() for row in self.rows]}


#### Configuration models ####

class DistributionSpec(BaseModel):
    """One distribution to compute for a collection."""

    name: str = Field(..., description="Key the distribution is stored under")
    kind: DistributionKind = Field(
        default='categorical',
        description="categorical, temporal (binned years) or normalized (with fractions)"
    )
    column: str = Field(..., description="Column to group or bin")
    top_n: Optional[int] = Field(
        default=None,
        description="Keep only the N largest categories (None = all)"
    )
    bin_width: Optional[int] = Field(
        default=None,
        description="Bucket width in years for temporal distributions"
    )

    @field_validator('top_n')
    @classmethod
    def _check_top_n(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("top_n must be non-negative")
        return value

    @field_validator('bin_width')
    @classmethod
    def _check_bin_width(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("bin_width must be positive")
        return value


class CollectionSpec(BaseModel):
    """
    Maps the semantic roles of one collection onto its own column names.

    Example:
        >>> spec = CollectionSpec(
        ...     name="MoMA Artworks",
        ...     path="data/raw/moma_artworks.csv",
        ...     identity_column="ConstituentID",
        ...     date_start_column="DateAcquired",
        ... )
    """

    name: str
    path: Path
    identity_column: str = Field(
        ...,
        description="Column whose distinct non-null values are counted as artists"
    )
    date_start_column: Optional[str] = Field(
        default=None,
        description="Column the earliest date is taken from"
    )
    date_end_column: Optional[str] = Field(
        default=None,
        description="Column the latest date is taken from (defaults to date_start_column)"
    )
    expected_columns: List[str] = Field(default_factory=list)
    delimiter: Optional[str] = None
    encoding: str = 'utf-8'
    distributions: List[DistributionSpec] = Field(default_factory=list)

    @model_validator(mode='after')
    def _default_end_column(self) -> 'CollectionSpec':
        if self.date_end_column is None and self.date_start_column is not None:
            self.date_end_column = self.date_start_column
        return self

    @field_validator('distributions')
    @classmethod
    def _unique_distribution_names(cls, value: List[DistributionSpec]) -> List[DistributionSpec]:
        names = [spec.name for spec in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate distribution names: {', '.join(duplicates)}")
        return value

    def role_columns(self) -> List[str]:
        """All columns the roles and distributions refer to, in first-mention order."""
        columns = [self.identity_column, self.date_start_column, self.date_end_column]
        columns += [spec.column for spec in self.distributions]
        seen = []
        for column in columns:
            if column is not None and column not in seen:
                seen.append(column)
        return seen
