"""
Forecaster

Projects a short, noisy, strictly positive series forward:
- trend = mean of the second half minus mean of the first half
- each future point = last value + trend * steps ahead, floored at zero
- confidence tier from the number of usable points
"""

import math
import numpy as np
import pandas as pd
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from ..config import require_int
from ..exceptions import InvalidInputError
from ..models import Confidence, ForecastResult
from ..records import is_dataset, parse_number
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def series_value(item: Any) -> Optional[float]:
    """
    Numeric reading of one series element.

    A record contributes its first field that parses as a number, or 0 when
    none does. A scalar contributes its own numeric reading, if any.
    """
    if isinstance(item, Mapping):
        for value in item.values():
            number = parse_number(value)
            if number is not None:
                return number
        return 0.0

    return parse_number(item)


class Forecaster:
    """
    Linear trend forecaster with a heuristic confidence label.

    Example:
        >>> forecaster = Forecaster()
        >>> result = forecaster.forecast([100, 120, 110, 130, 140, 150, 160, 170])
        >>> result.forecast
        [210.0, 250.0, 290.0]
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Forecaster.

        Args:
            config: Configuration dict (the 'forecaster' section of engine_config.yaml)
        """
        self.config = {
            'periods': 3,
            'medium_min_points': 6,
            'high_min_points': 12,
        }

        if config:
            self.config.update(config)

        require_int('forecaster', self.config, 'periods', 1)
        require_int('forecaster', self.config, 'medium_min_points', 2)
        require_int('forecaster', self.config, 'high_min_points', 2)

    def usable_values(self, series: Sequence) -> List[float]:
        """Strictly positive numeric readings of the series, in order."""
        values = []
        for item in series:
            number = series_value(item)
            if number is None or math.isnan(number) or number <= 0:
                continue
            values.append(number)
        return values

    def forecast(self, series: Any, periods: Optional[int] = None) -> Optional[ForecastResult]:
        """
        Forecast the next ``periods`` values of a series.

        Args:
            series: Records or raw numbers, oldest first (a list, tuple,
                pandas Series or 1-D numpy array)
            periods: Number of future points (config default if omitted)

        Returns:
            ForecastResult, or None when fewer than 2 usable values exist

        Raises:
            InvalidInputError: If the series is not a sequence or 1-D array, or periods < 1
        """
        if periods is None:
            periods = self.config['periods']
        if isinstance(periods, bool) or not isinstance(periods, int) or periods < 1:
            raise InvalidInputError(f"periods must be a positive integer, got {periods!r}")

        if series is None:
            return None
        if isinstance(series, (pd.Series, np.ndarray)):
            if series.ndim != 1:
                raise InvalidInputError(f"Series must be one-dimensional, got {series.ndim} dimensions")
            series = series.tolist()
        if not is_dataset(series):
            raise InvalidInputError(f"Series must be a sequence, got {type(series).__name__}")
        if len(series) < 2:
            return None

        values = self.usable_values(series)
        if len(values) < 2:
            logger.debug(f"Only {len(values)} usable values, no forecast")
            return None

        half = len(values) // 2
        trend = float(np.mean(values[half:]) - np.mean(values[:half]))
        last_value = values[-1]

        projected = [max(0.0, last_value + trend * step) for step in range(1, periods + 1)]

        return ForecastResult(
            forecast=projected,
            trend=trend,
            confidence=self._confidence(len(values), trend),
            last_value=last_value,
            periods=periods
        )

    def _confidence(self, count: int, trend: float) -> Confidence:
        # A flat series carries no signal, so it never reaches HIGH
        if count >= self.config['high_min_points'] and trend != 0:
            return Confidence.HIGH
        if count >= self.config['medium_min_points']:
            return Confidence.MEDIUM
        return Confidence.LOW


_default_forecaster = Forecaster()


def forecast(series: Any, periods: int = 3) -> Optional[ForecastResult]:
    """
    Forecast with default settings.

    Example:
        >>> forecast([5], 3) is None
        True
    """
    return _default_forecaster.forecast(series, periods)
