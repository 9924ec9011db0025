"""
Summary Builder

Produces the structural summary of a full dataset:
- Column names in schema order
- Column types (date, numeric, categorical) inferred from the head rows
- min / max / avg / count for every numeric column, over all rows

The summary is what a downstream consumer sees of rows that were sampled away.
"""

from typing import Any, Dict, List, Optional

from ..models import ColumnType, Summary
from ..records import Dataset, validate_dataset
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import calculate_numeric_stats, infer_column_type

logger = get_logger(__name__)


class Summarizer:
    """
    Builds a Summary for a dataset.

    Attributes:
        config: Configuration dictionary with settings

    Example:
        >>> summarizer = Summarizer(config={'sample_rows': 10})
        >>> summary = summarizer.summarize(records)
        >>> summary.numeric_columns
        ['revenue', 'units']
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Summarizer.

        Args:
            config: Configuration dict (the 'summarizer' section of engine_config.yaml)
        """
        self.config = {
            'sample_rows': 10,  # head rows used for type inference
        }

        if config:
            self.config.update(config)

    def summarize(self, dataset: Dataset) -> Summary:
        """
        Summarize a dataset.

        Args:
            dataset: Sequence of records

        Returns:
            Summary; an empty dataset gives a default Summary

        Raises:
            InvalidInputError: If the dataset is not a sequence of mappings
        """
        records = validate_dataset(dataset)

        if not records:
            logger.debug("Empty dataset, returning default summary")
            return Summary()

        columns = list(records[0].keys())
        head = records[:self.config['sample_rows']]

        summary = Summary(total_records=len(records), columns=columns)

        for column in columns:
            column_type = self._classify_column(head, column)
            summary.columns_of(column_type).append(column)

        for column in summary.numeric_columns:
            stats = calculate_numeric_stats(record.get(column) for record in records)
            if stats is not None:
                summary.numeric_stats[column] = stats

        logger.debug(
            f"Summarized {summary.total_records} records: "
            f"{len(summary.date_columns)} date, "
            f"{len(summary.numeric_columns)} numeric, "
            f"{len(summary.categorical_columns)} categorical columns"
        )

        return summary

    def _classify_column(self, head: List[Any], column: str) -> ColumnType:
        """Infer a column's type from its values in the head rows."""
        return infer_column_type([record.get(column) for record in head])


_default_summarizer = Summarizer()


def summarize(dataset: Dataset) -> Summary:
    """
    Summarize a dataset with default settings.

    Example:
        >>> summarize([{"day": "2024-01-01", "sales": "10"}]).date_columns
        ['day']
    """
    return _default_summarizer.summarize(dataset)
