"""
Exceptions and warnings raised by the collection report.

LoadError and MissingColumnError are isolated per collection by the
pipeline; AggregationError only affects the comparison step.
"""

from pathlib import Path
from typing import Iterable, Optional, Union


class MuseumEDAError(Exception):
    """Base class for all report errors."""


class LoadError(MuseumEDAError):
    """
    A dataset file is missing, unreadable, or not parsable as a table.

    Attributes:
        path: Path of the file that failed to load
        reason: Short description of the underlying failure
    """

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load {self.path}: {reason}")


class MissingColumnError(MuseumEDAError, KeyError):
    """
    A requested aggregate or grouping column is not in a collection's schema.

    Attributes:
        collection: Name of the collection that was queried
        column: The column that was requested
        available: Columns the collection actually has
    """

    def __init__(
        self,
        collection: str,
        column: str,
        available: Optional[Iterable[str]] = None
    ):
        self.collection = collection
        self.column = column
        self.available = list(available) if available is not None else []
        super().__init__(collection, column)

    def __str__(self) -> str:
        message = f"Column '{self.column}' not found in collection '{self.collection}'"
        if self.available:
            message += f" (available: {', '.join(map(str, self.available))})"
        return message


class AggregationError(MuseumEDAError):
    """The cross-collection comparison table could not be built."""


class EmptyAggregateWarning(UserWarning):
    """An aggregate was taken over a column with no non-null values."""
