"""
Dataset module for civic_forecast library.

This module contains time-series management and serialization functionality.
"""

from .series import CivicSeries
from .serializer import CivicSeriesSerializer, ForecastReportSerializer

__all__ = ["CivicSeries", "CivicSeriesSerializer", "ForecastReportSerializer"]
