"""
Renderers for civic_forecast visualization.

This module contains various renderers for visualizing forecast reports.
"""

from .base import ForecastReportRenderer
from .ascii_renderer import ASCIIRenderer
from .matplotlib_renderer import MatplotlibRenderer

__all__ = [
    'ForecastReportRenderer',
    'ASCIIRenderer',
    'MatplotlibRenderer'
]
