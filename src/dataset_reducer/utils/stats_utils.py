"""
Statistical utilities for the dataset reducer.
Provides column type inference from raw text samples and numeric aggregates.
"""

import numpy as np
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..models import ColumnType, NumericStats
from ..records import is_date_text, parse_number


def is_date_value(value: Any) -> bool:
    """True if the value matches one of the supported date layouts."""
    return is_date_text(value)


def is_numeric_value(value: Any) -> bool:
    """True if a number can be read from the value (empty and None never are)."""
    if value is None or value == '':
        return False
    return parse_number(value) is not None


# Checked in order; the first rule with a hit on any sampled value wins.
# Columns with no hit at all are categorical.
COLUMN_TYPE_RULES: Tuple[Tuple[ColumnType, Callable[[Any], bool]], ...] = (
    (ColumnType.DATE, is_date_value),
    (ColumnType.NUMERIC, is_numeric_value),
)


def infer_column_type(values: Sequence[Any]) -> ColumnType:
    """
    Infer the type of a column from a small sample of its values.

    A single matching value is enough: noisy columns with one clean date
    still classify as dates.

    Args:
        values: Sample of raw values, usually the first 10 of the column

    Returns:
        ColumnType.DATE, ColumnType.NUMERIC or ColumnType.CATEGORICAL

    Example:
        >>> infer_column_type(["5", "10.5", "abc"])
        <ColumnType.NUMERIC: 'numeric'>
    """
    for column_type, matches in COLUMN_TYPE_RULES:
        if any(matches(value) for value in values):
            return column_type

    return ColumnType.CATEGORICAL


classify = infer_column_type


def calculate_numeric_stats(values: Iterable[Any]) -> Optional[NumericStats]:
    """
    Calculate min, max, mean and count over the parseable values.

    Args:
        values: Raw column values; unparseable ones are skipped

    Returns:
        NumericStats, or None when no value parses

    Example:
        >>> calculate_numeric_stats(["10", "20", "n/a", "30"]).avg
        20.0
    """
    numbers: List[float] = []
    for value in values:
        number = parse_number(value)
        if number is not None:
            numbers.append(number)

    if not numbers:
        return None

    array = np.asarray(numbers, dtype=float)

    return NumericStats(
        min=float(array.min()),
        max=float(array.max()),
        avg=float(array.mean()),
        count=len(numbers)
    )
