"""
Cross-Collection Aggregator

Puts the per-collection artwork and artist counts side by side.
"""

from .comparison import build_comparison_table

__all__ = ['build_comparison_table']
