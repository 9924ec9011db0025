"""
Dataset Reducer

Shrinks large tables of string-valued records into a bounded representative
sample plus a structural summary of the full table, and projects simple
trends from short numeric series.

Example:
    >>> from dataset_reducer import reduce, forecast, is_forecasting_intent
    >>> result = reduce(records, "What will revenue be next quarter?")
    >>> result.sample_size, result.total_records
    (2020, 50000)
"""

from .exceptions import ConfigError, DatasetReducerError, InvalidInputError
from .models import (
    ColumnType,
    Confidence,
    ForecastResult,
    NumericStats,
    SampleResult,
    Summary,
)
from .records import Cell, parse_cell, rows_to_records, validate_dataset
from .utils.stats_utils import classify
from .summarizer import Summarizer, summarize
from .sampler import Sampler, reduce
from .forecasting import Forecaster, forecast, is_forecasting_intent
from .stores import ConversationMemory, RateLimiter, RateLimitStatus

__version__ = '0.1.0'

__all__ = [
    'reduce',
    'summarize',
    'classify',
    'forecast',
    'is_forecasting_intent',
    'Sampler',
    'Summarizer',
    'Forecaster',
    'ColumnType',
    'Confidence',
    'ForecastResult',
    'NumericStats',
    'SampleResult',
    'Summary',
    'Cell',
    'parse_cell',
    'rows_to_records',
    'validate_dataset',
    'RateLimiter',
    'RateLimitStatus',
    'ConversationMemory',
    'DatasetReducerError',
    'InvalidInputError',
    'ConfigError',
]
