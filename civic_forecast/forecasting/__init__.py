"""
Forecasting module for civic_forecast library.

This module contains the trend forecasting engine and the forecaster that
labels its output with calendar periods.
"""

from .engine import (
    ForecastPoint,
    moving_average_forecast,
    calculate_trend,
    calculate_std_dev,
    effective_window_size,
    simple_moving_average
)
from .granularity import Granularity, DAILY, WEEKLY, MONTHLY, get_granularity
from .report import ForecastReport
from .forecaster import CivicTrendForecaster, forecast_series

__all__ = [
    'ForecastPoint',
    'moving_average_forecast',
    'calculate_trend',
    'calculate_std_dev',
    'effective_window_size',
    'simple_moving_average',
    'Granularity',
    'DAILY',
    'WEEKLY',
    'MONTHLY',
    'get_granularity',
    'ForecastReport',
    'CivicTrendForecaster',
    'forecast_series'
]
