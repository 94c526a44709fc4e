"""
Utilities module for civic_forecast library.

This module contains utility functions and error handling.
"""

from .exceptions import (
    CivicForecastError,
    SeriesError,
    GranularityError,
    ForecastError,
    SerializationError,
    VisualizationError
)

__all__ = [
    'CivicForecastError',
    'SeriesError',
    'GranularityError',
    'ForecastError',
    'SerializationError',
    'VisualizationError'
]
