"""
Visualization module for civic_forecast library.

This module provides visualization capabilities for forecast reports.
"""

from .renderers import (
    ForecastReportRenderer,
    ASCIIRenderer,
    MatplotlibRenderer
)
from .helpers import create_visualization

__all__ = [
    'ForecastReportRenderer',
    'ASCIIRenderer',
    'MatplotlibRenderer',
    'create_visualization'
]
