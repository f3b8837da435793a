"""Tests for the null-aware counting and year binning helpers."""

from __future__ import annotations

import pandas as pd
import pytest

from museum_eda.utils.stats_utils import (
    bin_values,
    bin_year,
    century,
    count_categories,
    distinct_count,
    is_numeric_column,
    parse_date_values,
    to_year,
)


# ---------------------------------------------------------------------------
# Binning


@pytest.mark.parametrize(
    "value, width, expected",
    [
        (1987, 5, 1985),
        (1985, 5, 1985),
        (1987, 100, 1900),
        (1900, 100, 1900),
        (-350, 100, -400),
        (1999.9, 10, 1990),
    ],
)
def test_bin_year(value: float, width: int, expected: int) -> None:
    assert bin_year(value, width) == expected


@pytest.mark.parametrize("value", [-1350, -1, 0, 7, 1500, 1987.5, 2024])
@pytest.mark.parametrize("width", [1, 5, 10, 100])
def test_bin_year_is_idempotent(value: float, width: int) -> None:
    once = bin_year(value, width)
    assert bin_year(once, width) == once


def test_century_is_hundred_year_bin() -> None:
    assert century(1503) == 1500
    assert century(1600) == 1600


def test_bin_year_rejects_non_positive_width() -> None:
    with pytest.raises(ValueError):
        bin_year(1900, 0)
    with pytest.raises(ValueError):
        bin_values(pd.Series([1900]), -5)


def test_bin_values_drops_nulls() -> None:
    bins = bin_values(pd.Series([1996.0, None, 2001.0, 1995.0]), 5)
    assert bins.tolist() == [1995, 2000, 1995]


# ---------------------------------------------------------------------------
# Counting


def test_count_categories_excludes_nulls_and_sorts_by_count() -> None:
    series = pd.Series(["A", "B", "A", None])
    assert count_categories(series) == [("A", 2), ("B", 1)]


def test_count_categories_breaks_ties_by_first_appearance() -> None:
    series = pd.Series(["B", "A", "C", "A", "B", "D"])
    assert count_categories(series) == [("B", 2), ("A", 2), ("C", 1), ("D", 1)]


def test_count_categories_all_null_is_empty() -> None:
    assert count_categories(pd.Series([None, None], dtype=object)) == []
    assert count_categories(pd.Series([], dtype=object)) == []


def test_count_categories_returns_plain_python_values() -> None:
    entries = count_categories(pd.Series([1.0, 2.0, 1.0]))
    assert entries == [(1, 2), (2, 1)]
    assert all(type(count) is int for _, count in entries)


def test_distinct_count_ignores_nulls() -> None:
    assert distinct_count(pd.Series(["x", "y", "x", None])) == 2
    assert distinct_count(pd.Series([], dtype=object)) == 0


# ---------------------------------------------------------------------------
# Dates


def test_is_numeric_column() -> None:
    assert is_numeric_column(pd.Series([1500, 1600]))
    assert is_numeric_column(pd.Series(["1500", "1620", None]))
    assert not is_numeric_column(pd.Series(["1996-04-09", "2001-01-01"]))
    assert not is_numeric_column(pd.Series([None, None], dtype=object))
    assert not is_numeric_column(pd.Series(pd.to_datetime(["1996-04-09", "2001-01-01"])))


def test_parse_date_values_keeps_numeric_years() -> None:
    values = parse_date_values(pd.Series([1500, None, 1700]))
    assert values.tolist() == [1500.0, 1700.0]


def test_parse_date_values_parses_calendar_dates() -> None:
    values = parse_date_values(pd.Series(["1996-04-09", None, "1995-01-17"]))
    assert pd.api.types.is_datetime64_any_dtype(values)
    assert values.min() == pd.Timestamp("1995-01-17")


def test_to_year_from_dates_and_numbers() -> None:
    assert to_year(pd.Series(["1996-04-09", None, "2001-12-01"])).tolist() == [1996.0, 2001.0]
    assert to_year(pd.Series([1889, 1830, None])).tolist() == [1889.0, 1830.0]
