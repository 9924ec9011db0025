"""
Record boundary for the dataset reducer.

Records arrive as flat mappings of column name to text. This module validates
the Dataset shape once at the entry point and turns each raw value into a
``Cell`` carrying its numeric and timestamp readings, so the summarizer,
sampler and forecaster all agree on how a piece of text is interpreted.
"""

import math
import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any, Dict, List, NamedTuple, Optional

import pandas as pd

from .exceptions import InvalidInputError

Dataset = Sequence

_MONTHS = (
    r'(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?'
    r'|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)'
)

# YYYY-MM-DD, MM/DD/YYYY, M/D/YY[YY], Month D[,] YYYY
DATE_PATTERNS = (
    re.compile(r'^\d{4}-\d{2}-\d{2}$'),
    re.compile(r'^\d{2}/\d{2}/\d{4}$'),
    re.compile(r'^\d{1,2}/\d{1,2}/\d{2,4}$'),
    re.compile(r'^' + _MONTHS + r' \d{1,2},? \d{4}$', re.IGNORECASE),
)

# Leading float literal; trailing text such as units or '%' is ignored
_NUMBER_PREFIX = re.compile(r'^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)')


class Cell(NamedTuple):
    """A raw value together with its parsed readings."""
    raw: Any
    number: Optional[float]
    timestamp: Optional[float]


def is_date_text(value: Any) -> bool:
    """True when the value looks like a date in one of the supported layouts."""
    if not isinstance(value, str):
        return False
    text = value.strip()
    return any(pattern.match(text) for pattern in DATE_PATTERNS)


def _number_from_text(text: str) -> Optional[float]:
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def _timestamp_from_text(text: str) -> Optional[float]:
    if not is_date_text(text):
        return None
    parsed = pd.to_datetime(text.strip(), errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.timestamp()


@lru_cache(maxsize=65536)
def _parse_text(text: str) -> Cell:
    return Cell(text, _number_from_text(text), _timestamp_from_text(text))


def parse_cell(value: Any) -> Cell:
    """
    Parse a raw record value.

    Strings are parsed once per distinct text and cached. Native numbers
    pass through; ``None`` and booleans carry no readings.

    Example:
        >>> parse_cell("12.5 kg").number
        12.5
        >>> parse_cell("2024-03-01").timestamp
        1709251200.0
    """
    if value is None or isinstance(value, bool):
        return Cell(value, None, None)
    if isinstance(value, (int, float)):
        number = float(value)
        return Cell(value, number if math.isfinite(number) else None, None)
    if isinstance(value, str):
        return _parse_text(value)
    return _parse_text(str(value))


def parse_number(value: Any) -> Optional[float]:
    """Numeric reading of a value, or None when it has none."""
    return parse_cell(value).number


def parse_timestamp(value: Any) -> Optional[float]:
    """POSIX timestamp of a date-looking value, or None."""
    return parse_cell(value).timestamp


def is_dataset(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def validate_dataset(dataset: Any) -> List[Mapping]:
    """
    Check that ``dataset`` is an ordered sequence of mappings.

    Returns:
        The records as a new list (the input is never modified)

    Raises:
        InvalidInputError: If the argument is not a list/tuple of mappings
    """
    if not is_dataset(dataset):
        raise InvalidInputError(
            f"Dataset must be a sequence of records, got {type(dataset).__name__}"
        )

    records = list(dataset)
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidInputError(
                f"Record {index} must be a mapping, got {type(record).__name__}"
            )

    return records


def rows_to_records(rows: Sequence) -> List[Dict[str, str]]:
    """
    Convert spreadsheet rows (header row first) into records.

    Missing trailing cells become empty strings.

    Example:
        >>> rows_to_records([["month", "sales"], ["Jan", "100"], ["Feb"]])
        [{'month': 'Jan', 'sales': '100'}, {'month': 'Feb', 'sales': ''}]
    """
    if not is_dataset(rows):
        raise InvalidInputError(f"Rows must be a sequence, got {type(rows).__name__}")
    if len(rows) == 0:
        return []

    headers = [str(h) for h in rows[0]]
    records = []
    for row in rows[1:]:
        records.append({
            header: (row[i] if i < len(row) and row[i] is not None else '')
            for i, header in enumerate(headers)
        })

    return records
