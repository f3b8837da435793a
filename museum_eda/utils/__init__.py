"""
Utility modules for the collection report.
Provides common functionality for logging, file I/O, and statistics.
"""

from .logging_utils import setup_logger, get_logger
from .file_utils import load_config, load_csv, load_json_table, save_json, save_csv
from .stats_utils import (
    bin_values,
    bin_year,
    century,
    count_categories,
    distinct_count,
    parse_date_values,
    to_year,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'load_config',
    'load_csv',
    'load_json_table',
    'save_json',
    'save_csv',
    'bin_values',
    'bin_year',
    'century',
    'count_categories',
    'distinct_count',
    'parse_date_values',
    'to_year',
]
