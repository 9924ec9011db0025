"""
Utility modules for the dataset reducer.
Provides common functionality for logging, file I/O, and column statistics.
"""

from .logging_utils import setup_logger, get_logger
from .file_utils import load_config, load_csv_records, load_json, save_json, get_file_list
from .stats_utils import infer_column_type, classify, calculate_numeric_stats

__all__ = [
    'setup_logger',
    'get_logger',
    'load_config',
    'load_csv_records',
    'load_json',
    'save_json',
    'get_file_list',
    'infer_column_type',
    'classify',
    'calculate_numeric_stats',
]
