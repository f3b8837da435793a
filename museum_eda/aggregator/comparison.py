"""
Cross-Collection Aggregator

Combines per-collection SummaryRows into one ComparisonTable keyed by
collection name. Rows keep the order the caller supplied them in; no
sorting and no cross-collection de-duplication of artists is done.
"""

from typing import Iterable, List

from ..errors import AggregationError
from ..models import CollectionSummary, ComparisonTable, SummaryRow
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def build_comparison_table(rows: Iterable[SummaryRow]) -> ComparisonTable:
    """
    Build the comparison table from one SummaryRow per collection.

    Args:
        rows: SummaryRows in the order the collections should appear

    Returns:
        ComparisonTable with the rows unchanged and in input order

    Raises:
        AggregationError: If a row is not a SummaryRow or a collection
            name appears twice

    Example:
        >>> table = build_comparison_table([cleveland.row, met.row, moma.row])
        >>> table.names()
        ['Cleveland', 'Met', 'MoMA Artworks']
    """
    table_rows: List[SummaryRow] = []
    seen = set()

    for row in rows:
        if isinstance(row, CollectionSummary):
            row = row.row
        if not isinstance(row, SummaryRow):
            raise AggregationError(
                f"Expected a SummaryRow, got {type(row).__name__}"
            )
        if row.collection in seen:
            raise AggregationError(
                f"Duplicate collection in comparison: '{row.collection}'"
            )

        seen.add(row.collection)
        table_rows.append(row)

    logger.info(f"Built comparison table over {len(table_rows)} collections")

    return ComparisonTable(rows=table_rows)
