"""
Trend forecaster for civic_forecast library.

This module contains the CivicTrendForecaster class, which runs the
moving-average trend engine over a CivicSeries at a reporting granularity and
labels every point with its calendar period.
"""

from typing import Optional, Union
from datetime import datetime
import logging
import pandas as pd

from .engine import (
    calculate_std_dev,
    calculate_trend,
    effective_window_size,
    moving_average_forecast,
    simple_moving_average
)
from .granularity import Granularity, get_granularity
from .report import ForecastReport
from ..utils.exceptions import ForecastError

logger = logging.getLogger(__name__)

PERIOD_LABEL_FORMAT = '%Y-%m-%d'


class CivicTrendForecaster:
    """
    Forecaster for per-period count series.

    The forecast horizon and trend window default to the granularity presets
    (daily: 30 ahead / 14 window, weekly: 12 / 8, monthly: 6 / 6) and can be
    overridden per forecaster.
    """

    def __init__(self, series, granularity: Union[str, Granularity, None] = 'd',
                 periods_ahead: Optional[int] = None, window_size: Optional[int] = None,
                 fill_gaps: bool = False):
        """
        Initialize the forecaster with a CivicSeries.

        Args:
            series: CivicSeries containing the historical counts
            granularity: Reporting granularity code, name or instance
            periods_ahead: Override for the number of periods to forecast
            window_size: Override for the trend window size
            fill_gaps: Fill missing periods with zero counts before forecasting

        Raises:
            ForecastError: If series is not a CivicSeries
            GranularityError: If the granularity or overrides are invalid
        """
        # Import here to avoid circular imports
        from ..datasets.series import CivicSeries

        if not isinstance(series, CivicSeries):
            raise ForecastError("Series must be a CivicSeries instance")

        self._series = series
        self._granularity = get_granularity(granularity).with_overrides(
            periods_ahead=periods_ahead,
            window_size=window_size
        )
        self._fill_gaps = fill_gaps

    @property
    def series(self):
        """Get the underlying series."""
        return self._series

    @property
    def granularity(self) -> Granularity:
        """Get the effective granularity, including overrides."""
        return self._granularity

    @property
    def fill_gaps(self) -> bool:
        """Whether missing periods are filled before forecasting."""
        return self._fill_gaps

    def forecast(self) -> ForecastReport:
        """
        Generate a labelled forecast report.

        Returns:
            ForecastReport with historical points labelled by their own period
            and projected points labelled by stepping forward from the last
            observed period. Both lists are empty for an empty series.
        """
        unit = self._granularity
        series = self._prepare_series()

        if len(series) == 0:
            logger.info(f"No data available for series {series.name!r}, returning empty report")
            return ForecastReport(
                series_name=series.name,
                period=unit.code,
                historical=[],
                forecast=[],
                metadata=self._build_metadata(series, trend=None, std_dev=None, effective_window=None)
            )

        values = series.values
        effective_window = effective_window_size(len(values), unit.window_size)
        results = moving_average_forecast(values, unit.periods_ahead, effective_window)

        trend = calculate_trend(values, effective_window)
        std_dev = calculate_std_dev(values, effective_window)
        logger.debug(f"Series {series.name!r}: trend={trend:.4f}, dispersion={std_dev:.4f}, "
                     f"window={effective_window}")

        timestamps = series.timestamps
        last_period = series.last_period

        historical = []
        forecast = []
        for i, point in enumerate(results):
            if point.historical:
                point.period = self._format_period(timestamps[i])
                historical.append(point)
            else:
                future_index = i - len(values) + 1
                point.period = self._format_period(unit.future_period(last_period, future_index))
                forecast.append(point)

        logger.info(f"Generated {len(forecast)} {unit.name} forecast periods for series "
                    f"{series.name!r} from {len(historical)} observations")

        return ForecastReport(
            series_name=series.name,
            period=unit.code,
            historical=historical,
            forecast=forecast,
            metadata=self._build_metadata(series, trend=trend, std_dev=std_dev,
                                         effective_window=effective_window)
        )

    def moving_average(self, window_size: Optional[int] = None) -> float:
        """
        Get the trailing simple moving average of the series.

        Args:
            window_size: Window size (default: the granularity window)

        Returns:
            Trailing mean, or 0.0 for an empty series
        """
        window = window_size if window_size is not None else self._granularity.window_size
        return simple_moving_average(self._prepare_series().values, window)

    def _prepare_series(self):
        """Return the series to forecast, densified if requested."""
        series = self._series
        if len(series) < 2:
            return series

        if self._fill_gaps:
            return series.densify(self._granularity)

        if not series.is_dense(self._granularity):
            logger.warning(f"Series {series.name!r} has missing {self._granularity.name} periods; "
                           f"trend assumes evenly spaced observations")
        return series

    def _build_metadata(self, series, trend: Optional[float], std_dev: Optional[float],
                        effective_window: Optional[int]) -> dict:
        return {
            'granularity': self._granularity.name,
            'periods_ahead': self._granularity.periods_ahead,
            'window_size': self._granularity.window_size,
            'effective_window': effective_window,
            'trend': trend,
            'dispersion': std_dev,
            'observations': len(series),
            'filled_periods': series.metadata.get('filled_periods', 0),
            'forecast_timestamp': datetime.now().isoformat()
        }

    @staticmethod
    def _format_period(timestamp) -> str:
        return pd.Timestamp(timestamp).strftime(PERIOD_LABEL_FORMAT)

    def __repr__(self) -> str:
        """Return string representation of the forecaster."""
        return (f"CivicTrendForecaster(series_length={len(self._series)}, "
                f"name={self._series.name!r}, granularity='{self._granularity.name}')")


def forecast_series(series, granularity: Union[str, Granularity, None] = 'd',
                    periods_ahead: Optional[int] = None, window_size: Optional[int] = None,
                    fill_gaps: bool = False) -> ForecastReport:
    """
    Convenience function to forecast a series in one call.

    Example:
        >>> from civic_forecast import CivicSeries, forecast_series
        >>> series = CivicSeries(['2024-01-01', '2024-01-02'], [10, 12], name='60601')
        >>> report = forecast_series(series, 'd', periods_ahead=3)
        >>> [point.period for point in report.forecast]
        ['2024-01-03', '2024-01-04', '2024-01-05']
    """
    forecaster = CivicTrendForecaster(
        series,
        granularity=granularity,
        periods_ahead=periods_ahead,
        window_size=window_size,
        fill_gaps=fill_gaps
    )
    return forecaster.forecast()
