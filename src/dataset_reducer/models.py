"""Result models returned by the dataset reducer."""

from enum import Enum
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ColumnType(str, Enum):
    """Inferred type of a column."""
    DATE = "date"
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class Confidence(str, Enum):
    """Heuristic confidence tier of a forecast."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class _ResultModel(BaseModel):
    """Snake_case attributes, camelCase when serialized."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class NumericStats(_ResultModel):
    """Aggregates over the parseable values of a numeric column."""
    min: float
    max: float
    avg: float
    count: int


class Summary(_ResultModel):
    """Structural metadata of a full dataset."""
    total_records: int = 0
    columns: List[str] = Field(default_factory=list)
    date_columns: List[str] = Field(default_factory=list)
    numeric_columns: List[str] = Field(default_factory=list)
    categorical_columns: List[str] = Field(default_factory=list)
    numeric_stats: Dict[str, NumericStats] = Field(default_factory=dict)

    def columns_of(self, column_type: ColumnType) -> List[str]:
        """Bucket list for a column type."""
        return {
            ColumnType.DATE: self.date_columns,
            ColumnType.NUMERIC: self.numeric_columns,
            ColumnType.CATEGORICAL: self.categorical_columns,
        }[ColumnType(column_type)]


class SampleResult(_ResultModel):
    """Bounded subset of a dataset plus the summary of the full dataset."""
    sampled_records: List[Dict[str, Any]]
    summary: Summary
    sample_size: int
    total_records: int


class ForecastResult(_ResultModel):
    """Linear trend projection of a numeric series."""
    forecast: List[float]
    trend: float
    confidence: Confidence
    last_value: float
    periods: int
