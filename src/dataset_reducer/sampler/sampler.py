"""
Sampler

Reduces a large dataset to a bounded, representative subset:
- Small datasets pass through untouched
- Datasets with a date column are sampled at a fixed stride over rows
  ordered by their first parseable date (time-ordered sampling)
- Other datasets are sampled at a fixed stride in original order
  (stratified sampling)
- The last rows of the original dataset are always appended (recency tail)
- Exact duplicate rows are dropped, first occurrence wins

The summary attached to the result always covers the full dataset.
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from ..config import require_int
from ..models import SampleResult
from ..records import Dataset, parse_timestamp, validate_dataset
from ..summarizer import Summarizer
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def record_timestamp(record: Mapping) -> float:
    """Timestamp of the first date-valued field, or 0 when the record has none."""
    for value in record.values():
        timestamp = parse_timestamp(value)
        if timestamp is not None:
            return timestamp
    return 0.0


def _record_key(record: Mapping) -> str:
    items = sorted(record.items(), key=lambda item: str(item[0]))
    return json.dumps(items, default=str)


def remove_duplicates(records: List[Mapping]) -> List[Mapping]:
    """
    Drop records identical field-for-field to an earlier one.

    Two records collide when they hold the same fields with the same values,
    regardless of key order.
    """
    seen = set()
    unique = []

    for record in records:
        key = _record_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    return unique


class Sampler:
    """
    Reduces datasets to at most ``max_sample_size`` rows plus a recency tail.

    Attributes:
        config: Configuration dictionary with settings
        summarizer: Summarizer used for the full-dataset summary

    Example:
        >>> sampler = Sampler(config={'max_sample_size': 500})
        >>> result = sampler.reduce(records, "How did revenue move?")
        >>> result.sample_size, result.total_records
        (520, 48000)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        summarizer: Optional[Summarizer] = None
    ):
        """
        Initialize the Sampler.

        Args:
            config: Configuration dict (the 'sampler' section of engine_config.yaml)
            summarizer: Summarizer instance (default settings if omitted)
        """
        self.config = {
            'small_dataset_threshold': 100,
            'max_sample_size': 2000,
            'recency_tail': 20,
            'exact_fill': False,  # stride truncation may under-fill the cap
        }

        if config:
            self.config.update(config)

        require_int('sampler', self.config, 'max_sample_size', 1)
        require_int('sampler', self.config, 'recency_tail', 0)
        require_int('sampler', self.config, 'small_dataset_threshold', 0)

        self.summarizer = summarizer or Summarizer()

    def reduce(self, dataset: Dataset, question: Optional[str] = None) -> SampleResult:
        """
        Reduce a dataset for a downstream consumer.

        Args:
            dataset: Sequence of records
            question: The question the consumer will answer (logged only)

        Returns:
            SampleResult with the sampled records and the full-dataset summary

        Raises:
            InvalidInputError: If the dataset is not a sequence of mappings
        """
        records = validate_dataset(dataset)
        total = len(records)
        summary = self.summarizer.summarize(records)

        logger.debug(f"Reducing {total} records for question: {question!r}")

        if total <= self.config['small_dataset_threshold']:
            return SampleResult(
                sampled_records=records,
                summary=summary,
                sample_size=total,
                total_records=total
            )

        cap = min(self.config['max_sample_size'], total)

        if summary.date_columns:
            logger.info(
                f"Time-ordered sampling of {total} records "
                f"(date columns: {', '.join(map(str, summary.date_columns))})"
            )
            ordered = sorted(records, key=record_timestamp)
        else:
            logger.info(f"Stratified sampling of {total} records")
            ordered = records

        sampled = self._take_stride(ordered, cap)

        tail = self.config['recency_tail']
        if tail > 0:
            sampled.extend(records[-tail:])

        sampled = remove_duplicates(sampled)

        logger.info(f"Reduced {total} records to {len(sampled)} (cap {cap})")

        return SampleResult(
            sampled_records=sampled,
            summary=summary,
            sample_size=len(sampled),
            total_records=total
        )

    def _take_stride(self, records: List[Mapping], cap: int) -> List[Mapping]:
        """Pick up to ``cap`` records at a fixed stride."""
        total = len(records)

        if self.config['exact_fill']:
            return [records[i * total // cap] for i in range(cap)]

        step = total // cap or 1
        return records[::step][:cap]


_default_sampler = Sampler()


def reduce(dataset: Dataset, question: Optional[str] = None) -> SampleResult:
    """
    Reduce a dataset with default settings.

    Example:
        >>> result = reduce(records, "What were total sales?")
        >>> result.to_dict().keys()
        dict_keys(['sampledRecords', 'summary', 'sampleSize', 'totalRecords'])
    """
    return _default_sampler.reduce(dataset, question)
