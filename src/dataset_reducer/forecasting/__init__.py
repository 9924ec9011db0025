"""
Forecasting

Trend projection for short numeric series and forecasting-intent detection
for questions.
"""

from .forecaster import Forecaster, forecast
from .intent import FORECASTING_KEYWORDS, is_forecasting_intent

__all__ = ['Forecaster', 'forecast', 'FORECASTING_KEYWORDS', 'is_forecasting_intent']
