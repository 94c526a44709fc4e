"""
Forecast reports for civic_forecast library.

This module contains the ForecastReport class holding the labelled historical
and projected points produced for one series.
"""

from typing import Any, Dict, List, Optional
import pandas as pd

from .engine import ForecastPoint


class ForecastReport:
    """
    Labelled forecast for a single series at one reporting granularity.

    Historical points echo the observed counts; forecast points carry the
    projected value and its bounds.
    """

    COLUMNS = ['period', 'predicted', 'lower_bound', 'upper_bound', 'historical']

    def __init__(self, series_name: Optional[str], period: str,
                 historical: List[ForecastPoint], forecast: List[ForecastPoint],
                 metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize a report.

        Args:
            series_name: Name of the forecasted series (e.g. a zip code)
            period: Granularity code ('d', 'w' or 'm')
            historical: Points with the historical flag set
            forecast: Projected points
            metadata: Optional metadata (trend, dispersion, window, ...)

        Raises:
            ValueError: If points are placed in the wrong list
        """
        if any(not point.historical for point in historical):
            raise ValueError("Historical list contains projected points")
        if any(point.historical for point in forecast):
            raise ValueError("Forecast list contains historical points")

        self._series_name = series_name
        self._period = period
        self._historical = list(historical)
        self._forecast = list(forecast)
        self._metadata = metadata or {}

    @property
    def series_name(self) -> Optional[str]:
        """Get the series name."""
        return self._series_name

    @property
    def period(self) -> str:
        """Get the granularity code."""
        return self._period

    @property
    def historical(self) -> List[ForecastPoint]:
        """Get the historical points."""
        return list(self._historical)

    @property
    def forecast(self) -> List[ForecastPoint]:
        """Get the projected points."""
        return list(self._forecast)

    @property
    def points(self) -> List[ForecastPoint]:
        """Get historical points followed by projected points."""
        return self._historical + self._forecast

    @property
    def metadata(self) -> Dict[str, Any]:
        """Get the metadata."""
        return self._metadata.copy()

    @property
    def is_empty(self) -> bool:
        """True when the source series had no data."""
        return not self._historical and not self._forecast

    def summary(self) -> Dict[str, Any]:
        """
        Summarize the report.

        Returns:
            Dictionary with the last observed value, final projected value and
            bounds, horizon, and trend direction ('up', 'down' or 'flat')
        """
        last_observed = self._historical[-1].predicted if self._historical else None
        final = self._forecast[-1] if self._forecast else None

        direction = 'flat'
        trend = self._metadata.get('trend')
        if trend is not None:
            if trend > 0:
                direction = 'up'
            elif trend < 0:
                direction = 'down'

        return {
            'series_name': self._series_name,
            'period': self._period,
            'observations': len(self._historical),
            'horizon': len(self._forecast),
            'last_observed': last_observed,
            'last_observed_period': self._historical[-1].period if self._historical else None,
            'final_predicted': final.predicted if final else None,
            'final_lower_bound': final.lower_bound if final else None,
            'final_upper_bound': final.upper_bound if final else None,
            'final_period': final.period if final else None,
            'trend_direction': direction
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'series_name': self._series_name,
            'period': self._period,
            'historical': [point.to_dict() for point in self._historical],
            'forecast': [point.to_dict() for point in self._forecast]
        }

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the report to a pandas DataFrame.

        Returns:
            DataFrame with one row per point and columns
            period, predicted, lower_bound, upper_bound, historical
        """
        rows = [point.to_dict() for point in self.points]
        return pd.DataFrame(rows, columns=self.COLUMNS)

    def __len__(self) -> int:
        """Return the total number of points."""
        return len(self._historical) + len(self._forecast)

    def __repr__(self) -> str:
        """Return string representation of the report."""
        return (f"ForecastReport(series_name={self._series_name!r}, period='{self._period}', "
                f"historical={len(self._historical)}, forecast={len(self._forecast)})")
