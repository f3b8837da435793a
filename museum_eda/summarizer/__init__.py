"""
Per-Collection Summarizer

Computes counts, distinct artists, date ranges and category/time
distributions for one collection at a time.
"""

from .summarizer import Summarizer

__all__ = ['Summarizer']
