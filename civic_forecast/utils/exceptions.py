"""
Exception classes for civic_forecast library.

This module defines custom exceptions for different components of the library.
"""


class CivicForecastError(Exception):
    """Base exception class for all civic_forecast errors."""
    pass


class SeriesError(CivicForecastError):
    """Exception raised for time-series validation errors."""
    pass


class GranularityError(CivicForecastError):
    """Exception raised for unknown or invalid reporting granularities."""
    pass


class ForecastError(CivicForecastError):
    """Exception raised when a forecast report cannot be produced."""
    pass


class SerializationError(CivicForecastError):
    """Exception raised for serialization-related errors."""
    pass


class VisualizationError(CivicForecastError):
    """Exception raised for visualization-related errors."""
    pass
