"""
Reporting granularities for civic_forecast library.

This module defines the daily, weekly and monthly reporting granularities,
their forecast horizon and trend window presets, and the period arithmetic
used to label forecast points with calendar dates.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Union
from datetime import datetime
import numpy as np
import pandas as pd

from ..utils.exceptions import GranularityError


@dataclass(frozen=True)
class Granularity:
    """A reporting period unit with its forecasting presets."""
    code: str
    name: str
    periods_ahead: int
    window_size: int

    def with_overrides(self, periods_ahead: Optional[int] = None,
                       window_size: Optional[int] = None) -> 'Granularity':
        """
        Return a copy with caller-supplied horizon or window.

        Args:
            periods_ahead: Number of periods to forecast (default: preset)
            window_size: Trend window size (default: preset)

        Returns:
            New Granularity instance

        Raises:
            GranularityError: If an override is not a positive integer
        """
        if periods_ahead is not None and periods_ahead <= 0:
            raise GranularityError(f"periods_ahead must be positive, got {periods_ahead}")
        if window_size is not None and window_size <= 0:
            raise GranularityError(f"window_size must be positive, got {window_size}")

        return replace(
            self,
            periods_ahead=self.periods_ahead if periods_ahead is None else int(periods_ahead),
            window_size=self.window_size if window_size is None else int(window_size)
        )

    def offset(self, steps: int) -> pd.DateOffset:
        """Get the calendar offset covering ``steps`` periods."""
        if self.code == 'd':
            return pd.DateOffset(days=steps)
        elif self.code == 'w':
            return pd.DateOffset(days=7 * steps)
        else:
            return pd.DateOffset(months=steps)

    def future_period(self, last_period: Union[datetime, np.datetime64, pd.Timestamp],
                      steps: int) -> pd.Timestamp:
        """
        Get the period ``steps`` periods after ``last_period``.

        Monthly steps follow calendar months; a day of month past the end of
        the target month is clamped to that month's last day.
        """
        return pd.Timestamp(last_period) + self.offset(steps)

    def truncate(self, timestamp: Union[datetime, np.datetime64, pd.Timestamp]) -> pd.Timestamp:
        """
        Floor a timestamp to the start of its period.

        Days start at midnight, weeks on Monday and months on the first.
        """
        ts = pd.Timestamp(timestamp).normalize()
        if self.code == 'w':
            return ts - pd.Timedelta(days=ts.weekday())
        elif self.code == 'm':
            return ts.replace(day=1)
        return ts

    def expected_index(self, start: Union[datetime, np.datetime64, pd.Timestamp],
                       end: Union[datetime, np.datetime64, pd.Timestamp]) -> pd.DatetimeIndex:
        """
        Get every period start between ``start`` and ``end`` inclusive.

        Args:
            start: First period start
            end: Last period start

        Returns:
            Dense DatetimeIndex stepping one period at a time
        """
        start_ts = pd.Timestamp(start)
        end_ts = pd.Timestamp(end)

        periods = []
        steps = 0
        current = start_ts
        while current <= end_ts:
            periods.append(current)
            steps += 1
            current = self.future_period(start_ts, steps)

        return pd.DatetimeIndex(periods)


DAILY = Granularity(code='d', name='daily', periods_ahead=30, window_size=14)
WEEKLY = Granularity(code='w', name='weekly', periods_ahead=12, window_size=8)
MONTHLY = Granularity(code='m', name='monthly', periods_ahead=6, window_size=6)

GRANULARITIES: Dict[str, Granularity] = {
    'd': DAILY,
    'daily': DAILY,
    'w': WEEKLY,
    'weekly': WEEKLY,
    'm': MONTHLY,
    'monthly': MONTHLY
}


def get_granularity(period: Optional[Union[str, Granularity]] = None) -> Granularity:
    """
    Resolve a period code or name to a Granularity.

    Args:
        period: 'd'/'daily', 'w'/'weekly' or 'm'/'monthly'. None or an empty
                string selects daily.

    Returns:
        The matching Granularity preset

    Raises:
        GranularityError: If the period is not recognised
    """
    if isinstance(period, Granularity):
        return period

    if period is None or not str(period).strip():
        return DAILY

    key = str(period).strip().lower()
    if key not in GRANULARITIES:
        raise GranularityError("period must be 'd', 'w', or 'm'")

    return GRANULARITIES[key]
