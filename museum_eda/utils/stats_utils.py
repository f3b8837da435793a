"""
Statistical utilities for the collection report.
Provides null-aware counting, date parsing and year binning on pandas Series.
"""

import math
from typing import Any, List, Tuple, Union

import numpy as np
import pandas as pd
from .logging_utils import get_logger

logger = get_logger(__name__)


def to_python_scalar(value: Any) -> Any:
    """Unwrap numpy scalars so results serialize and compare as plain Python."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def is_numeric_column(series: pd.Series, numeric_threshold: float = 0.95) -> bool:
    """
    Check whether the non-null values of a Series are (mostly) numbers.

    Args:
        series: Pandas Series to analyze
        numeric_threshold: Fraction of non-null values that must parse as numeric

    Returns:
        True if the column should be treated as numeric

    Example:
        >>> is_numeric_column(pd.Series(['1500', '1620', None]))
        True
    """
    if pd.api.types.is_bool_dtype(series) or pd.api.types.is_datetime64_any_dtype(series):
        return False
    if pd.api.types.is_numeric_dtype(series):
        return True

    non_null = series.dropna()
    if len(non_null) == 0:
        return False

    parsed = pd.to_numeric(non_null, errors='coerce')
    numeric_ratio = parsed.notna().sum() / len(non_null)

    return numeric_ratio >= numeric_threshold


def parse_date_values(series: pd.Series, numeric_threshold: float = 0.95) -> pd.Series:
    """
    Parse the non-null values of a date column.

    Columns that hold numbers (e.g. ``Object Begin Date`` = 1500) stay
    numeric; other columns are parsed as calendar dates. Values that do not
    parse are dropped along with the nulls.

    Args:
        series: Raw date column
        numeric_threshold: Fraction of values that must be numeric to keep
            the column numeric

    Returns:
        Series of parsed values, nulls removed (may be empty)
    """
    non_null = series.dropna()
    if len(non_null) == 0:
        return non_null

    if pd.api.types.is_datetime64_any_dtype(non_null):
        return non_null

    if is_numeric_column(non_null, numeric_threshold):
        return pd.to_numeric(non_null, errors='coerce').dropna()

    parsed = pd.to_datetime(non_null.astype(str), errors='coerce', format='mixed')
    parsed = parsed.dropna()

    if len(parsed) == 0:
        # Neither mostly numeric nor dates: fall back to whatever is numeric
        return pd.to_numeric(non_null, errors='coerce').dropna()

    dropped = len(non_null) - len(parsed)
    if dropped:
        logger.debug(f"Dropped {dropped} unparsable date values from '{series.name}'")

    return parsed


def to_year(series: pd.Series, numeric_threshold: float = 0.95) -> pd.Series:
    """
    Reduce a date column to numeric years, nulls removed.

    Example:
        >>> to_year(pd.Series(['1996-04-09', None, '2001-12-01'])).tolist()
        [1996.0, 2001.0]
    """
    parsed = parse_date_values(series, numeric_threshold)

    if pd.api.types.is_datetime64_any_dtype(parsed):
        return parsed.dt.year.astype(float)

    return parsed.astype(float)


def bin_year(value: Union[int, float], width: int = 100) -> int:
    """
    Floor a year into a fixed-width bucket.

    ``bin_year(bin_year(x, w), w) == bin_year(x, w)`` for any year x.

    Args:
        value: Year to bin
        width: Bucket width in years (100 = century)

    Returns:
        Lower edge of the bucket

    Example:
        >>> bin_year(1987, 5)
        1985
        >>> bin_year(-350, 100)
        -400
    """
    if width <= 0:
        raise ValueError(f"Bin width must be positive, got {width}")

    return int(math.floor(value / width) * width)


def century(value: Union[int, float]) -> int:
    """Century bucket of a year, e.g. 1987 -> 1900."""
    return bin_year(value, 100)


def bin_values(years: pd.Series, width: int) -> pd.Series:
    """
    Vectorized ``bin_year`` over a Series of years; nulls are dropped.

    Args:
        years: Numeric years
        width: Bucket width in years

    Returns:
        Integer Series of bucket lower edges
    """
    if width <= 0:
        raise ValueError(f"Bin width must be positive, got {width}")

    years = pd.to_numeric(years, errors='coerce').dropna()

    return (np.floor(years / width) * width).astype('int64')


def count_categories(series: pd.Series) -> List[Tuple[Any, int]]:
    """
    Count occurrences of each non-null value.

    Sorted by count descending; equal counts keep the order in which their
    value first appears in the column.

    Args:
        series: Category column

    Returns:
        List of (label, count) pairs

    Example:
        >>> count_categories(pd.Series(['A', 'B', 'A', None]))
        [('A', 2), ('B', 1)]
    """
    non_null = series.dropna()
    if len(non_null) == 0:
        return []

    counts = non_null.groupby(non_null, sort=False).size()
    counts = counts.sort_values(ascending=False, kind='stable')

    return [(to_python_scalar(label), int(count)) for label, count in counts.items()]


def distinct_count(series: pd.Series) -> int:
    """Number of distinct non-null values in a Series."""
    return int(series.nunique(dropna=True))
