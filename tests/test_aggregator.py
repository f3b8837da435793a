"""Tests for the cross-collection comparison table."""

from __future__ import annotations

import pytest

from museum_eda.aggregator import build_comparison_table
from museum_eda.errors import AggregationError
from museum_eda.models import COMPARISON_COLUMNS, CollectionSummary, ComparisonTable, SummaryRow


def _rows() -> list[SummaryRow]:
    return [
        SummaryRow(collection="Met", total_count=100, distinct_count=40, earliest=-1350, latest=1889),
        SummaryRow(collection="Cleveland", total_count=50, distinct_count=30),
        SummaryRow(collection="MoMA Artworks", total_count=20, distinct_count=20),
    ]


def test_rows_keep_supplied_order_and_values() -> None:
    rows = _rows()
    table = build_comparison_table(rows)

    assert isinstance(table, ComparisonTable)
    assert len(table) == 3
    assert table.names() == ["Met", "Cleveland", "MoMA Artworks"]
    assert [row.total_count for row in table] == [100, 50, 20]
    assert table.row("Cleveland") is rows[1]


def test_order_is_not_sorted_by_count() -> None:
    rows = list(reversed(_rows()))
    table = build_comparison_table(rows)
    assert [row.total_count for row in table] == [20, 50, 100]


def test_accepts_collection_summaries() -> None:
    summaries = [CollectionSummary(row=row) for row in _rows()]
    assert build_comparison_table(summaries).names() == ["Met", "Cleveland", "MoMA Artworks"]


def test_empty_input_gives_empty_table() -> None:
    table = build_comparison_table([])
    assert len(table) == 0
    assert list(table.to_frame().columns) == COMPARISON_COLUMNS


def test_duplicate_collection_is_rejected() -> None:
    rows = _rows() + [SummaryRow(collection="Met", total_count=1, distinct_count=1)]
    with pytest.raises(AggregationError):
        build_comparison_table(rows)


def test_non_summary_row_is_rejected() -> None:
    with pytest.raises(AggregationError):
        build_comparison_table([{"collection": "Met", "total_count": 1}])


def test_to_frame_uses_stable_keys() -> None:
    frame = build_comparison_table(_rows()).to_frame()

    assert list(frame.columns) == COMPARISON_COLUMNS
    assert frame["collection"].tolist() == ["Met", "Cleveland", "MoMA Artworks"]
    assert frame["total_count"].tolist() == [100, 50, 20]
    assert frame["distinct_count"].tolist() == [40, 30, 20]


def test_unknown_row_lookup_raises_key_error() -> None:
    with pytest.raises(KeyError):
        build_comparison_table(_rows()).row("Louvre")
