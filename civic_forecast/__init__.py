"""
civic_forecast - Trend forecasting for municipal open-data count series.

This library provides a modular framework for:
- Holding per-period count series (trips per day, week or month)
- Projecting them forward with a windowed linear trend and widening bounds
- Labelling forecasts with calendar periods per reporting granularity
- Serializing and rendering forecast reports
"""

__version__ = "0.1.0"
__author__ = "civic_forecast"

# Core interfaces
from .forecasting import (
    ForecastPoint,
    ForecastReport,
    CivicTrendForecaster,
    Granularity,
    get_granularity,
    forecast_series,
    moving_average_forecast,
    simple_moving_average
)
from .datasets import CivicSeries, CivicSeriesSerializer, ForecastReportSerializer
from .visualization import (
    ForecastReportRenderer,
    ASCIIRenderer,
    MatplotlibRenderer,
    create_visualization
)

# Error handling
from .utils.exceptions import (
    CivicForecastError,
    SeriesError,
    GranularityError,
    ForecastError,
    SerializationError,
    VisualizationError
)

__all__ = [
    # Core interfaces
    "ForecastPoint",
    "ForecastReport",
    "CivicTrendForecaster",
    "Granularity",
    "get_granularity",
    "forecast_series",
    "moving_average_forecast",
    "simple_moving_average",
    "CivicSeries",
    "CivicSeriesSerializer",
    "ForecastReportSerializer",

    # Visualization
    "ForecastReportRenderer",
    "ASCIIRenderer",
    "MatplotlibRenderer",
    "create_visualization",

    # Exceptions
    "CivicForecastError",
    "SeriesError",
    "GranularityError",
    "ForecastError",
    "SerializationError",
    "VisualizationError",

    # Metadata
    "__version__"
]
