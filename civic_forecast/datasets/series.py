"""
Time-series management for civic_forecast library.

This module contains the CivicSeries class for per-period count series such
as daily trip counts for one zip code.
"""

from typing import Any, Dict, Iterable, List, Optional, Union
from datetime import datetime
import logging
import numpy as np
import pandas as pd

from ..forecasting.granularity import Granularity, get_granularity
from ..utils.exceptions import SeriesError

logger = logging.getLogger(__name__)


class CivicSeries:
    """
    A chronologically ordered series of non-negative per-period counts.

    Timestamps mark the start of each period. The series does not require
    periods to be evenly spaced, but forecasting assumes it; see
    is_dense() and densify().
    """

    def __init__(self, timestamps: Union[np.ndarray, List[Any]],
                 values: Union[np.ndarray, List[float]],
                 name: Optional[str] = None,
                 metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize series with period timestamps and counts.

        Args:
            timestamps: Period start timestamps (datetime64 or datetime objects)
            values: Count for each period
            name: Optional series name (e.g. the zip code it describes)
            metadata: Optional metadata dictionary

        Raises:
            SeriesError: If lengths differ, values are negative or not finite,
                         or timestamps are null or not strictly increasing
        """
        if len(timestamps) != len(values):
            raise SeriesError(f"Values length ({len(values)}) doesn't match timestamps length ({len(timestamps)})")

        try:
            self._values = np.array(values, dtype=np.float64)
            self._timestamps = np.array(pd.to_datetime(np.asarray(timestamps)), dtype='datetime64[ns]')
        except (TypeError, ValueError) as e:
            raise SeriesError(f"Invalid series data: {e}") from e

        if np.any(np.isnat(self._timestamps)):
            raise SeriesError("Timestamps must not be null")

        if self._values.ndim != 1:
            raise SeriesError(f"Values must be one-dimensional, got {self._values.ndim}D")

        if not np.all(np.isfinite(self._values)):
            raise SeriesError("Values must be finite")

        if np.any(self._values < 0):
            raise SeriesError("Values must be non-negative counts")

        if len(self._timestamps) > 1 and np.any(np.diff(self._timestamps) <= np.timedelta64(0, 'ns')):
            raise SeriesError("Timestamps must be strictly increasing")

        self._name = name
        self._metadata = metadata or {}

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, period_column: str = 'period',
                       value_column: str = 'count', name: Optional[str] = None) -> 'CivicSeries':
        """
        Create a series from a DataFrame.

        The period may be a column or the index. Rows are sorted by period.

        Args:
            df: DataFrame with period and count data
            period_column: Name of the period column (or index)
            value_column: Name of the count column
            name: Optional series name

        Returns:
            New CivicSeries

        Raises:
            SeriesError: If required columns are missing or data is invalid
        """
        frame = df
        if period_column not in frame.columns:
            if frame.index.name == period_column or isinstance(frame.index, pd.DatetimeIndex):
                frame = frame.reset_index().rename(columns={frame.index.name or 'index': period_column})
            else:
                raise SeriesError(f"Missing period column '{period_column}'")

        if value_column not in frame.columns:
            raise SeriesError(f"Missing value column '{value_column}'")

        try:
            periods = pd.to_datetime(frame[period_column])
        except (TypeError, ValueError) as e:
            raise SeriesError(f"Invalid period values: {e}") from e

        ordered = pd.DataFrame({'period': periods, 'count': frame[value_column].to_numpy()})
        ordered = ordered.sort_values('period', kind='mergesort')

        return cls(
            timestamps=ordered['period'].to_numpy(),
            values=ordered['count'].to_numpy(),
            name=name
        )

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]], period_key: str = 'period',
                     value_key: str = 'count', name: Optional[str] = None) -> 'CivicSeries':
        """Create a series from an iterable of ``{period, count}`` mappings."""
        rows = list(records)
        if not rows:
            return cls([], [], name=name)

        df = pd.DataFrame(rows)
        return cls.from_dataframe(df, period_column=period_key, value_column=value_key, name=name)

    @classmethod
    def from_events(cls, event_timestamps: Iterable[Any],
                    granularity: Union[str, Granularity] = 'd',
                    name: Optional[str] = None) -> 'CivicSeries':
        """
        Aggregate raw event timestamps into per-period counts.

        Each event (for example a trip start time) is floored to its period
        and counted. Null timestamps are dropped. Only periods containing at
        least one event appear in the result.

        Args:
            event_timestamps: Event timestamps
            granularity: Period unit to group by
            name: Optional series name

        Returns:
            New CivicSeries ordered by period

        Raises:
            SeriesError: If an event timestamp cannot be parsed
        """
        unit = get_granularity(granularity)

        try:
            events = pd.to_datetime(pd.Series(list(event_timestamps), dtype=object)).dropna()
        except (TypeError, ValueError) as e:
            raise SeriesError(f"Invalid event timestamps: {e}") from e
        if events.empty:
            return cls([], [], name=name, metadata={'granularity': unit.code})

        periods = events.map(unit.truncate)
        counts = periods.value_counts().sort_index()

        logger.info(f"Aggregated {len(events)} events into {len(counts)} {unit.name} periods")

        return cls(
            timestamps=counts.index.to_numpy(),
            values=counts.to_numpy(dtype=np.float64),
            name=name,
            metadata={'granularity': unit.code}
        )

    @property
    def timestamps(self) -> np.ndarray:
        """Get the period timestamps."""
        return self._timestamps.copy()

    @property
    def values(self) -> np.ndarray:
        """Get the counts."""
        return self._values.copy()

    @property
    def name(self) -> Optional[str]:
        """Get the series name."""
        return self._name

    @property
    def metadata(self) -> Dict[str, Any]:
        """Get the metadata."""
        return self._metadata.copy()

    @property
    def last_period(self) -> Optional[pd.Timestamp]:
        """Get the last period timestamp, or None for an empty series."""
        if len(self._timestamps) == 0:
            return None
        return pd.Timestamp(self._timestamps[-1])

    def is_dense(self, granularity: Union[str, Granularity] = 'd') -> bool:
        """
        Check whether every period between the first and last is present.

        Args:
            granularity: Period unit the series is expected to follow

        Returns:
            True if the series has no gaps
        """
        if len(self._timestamps) < 2:
            return True

        unit = get_granularity(granularity)
        expected = unit.expected_index(self._timestamps[0], self._timestamps[-1])
        actual = pd.DatetimeIndex(self._timestamps)
        return len(expected) == len(actual) and bool(np.all(expected.values == actual.values))

    def densify(self, granularity: Union[str, Granularity] = 'd',
                fill_value: float = 0.0) -> 'CivicSeries':
        """
        Fill missing periods between the first and last period.

        Periods with no observations are assumed to have ``fill_value`` counts.
        Existing timestamps that do not fall on the expected period grid are
        kept and the grid periods are added around them.

        Args:
            granularity: Period unit to fill
            fill_value: Count for inserted periods

        Returns:
            New CivicSeries with a dense period index

        Raises:
            SeriesError: If fill_value is negative
        """
        if fill_value < 0:
            raise SeriesError("fill_value must be non-negative")

        metadata = self.metadata
        metadata['densified'] = True

        if len(self._timestamps) < 2:
            metadata['filled_periods'] = 0
            return CivicSeries(self._timestamps, self._values, name=self._name, metadata=metadata)

        unit = get_granularity(granularity)
        expected = unit.expected_index(self._timestamps[0], self._timestamps[-1])
        current = pd.Series(self._values, index=pd.DatetimeIndex(self._timestamps))
        full_index = expected.union(current.index)
        filled = current.reindex(full_index, fill_value=fill_value)

        added = len(filled) - len(current)
        if added:
            logger.info(f"Filled {added} missing {unit.name} periods in series {self._name!r}")

        metadata['filled_periods'] = int(added)

        return CivicSeries(
            timestamps=filled.index.to_numpy(),
            values=filled.to_numpy(dtype=np.float64),
            name=self._name,
            metadata=metadata
        )

    def get_slice(self, start_date: datetime, end_date: datetime) -> 'CivicSeries':
        """
        Get a slice of the series for a specific date range (inclusive).

        Args:
            start_date: Start date for the slice
            end_date: End date for the slice

        Returns:
            New CivicSeries containing only periods within the date range

        Raises:
            SeriesError: If the date range is invalid
        """
        if start_date > end_date:
            raise SeriesError("Start date must be before end date")

        start_dt64 = np.datetime64(pd.Timestamp(start_date))
        end_dt64 = np.datetime64(pd.Timestamp(end_date))
        mask = (self._timestamps >= start_dt64) & (self._timestamps <= end_dt64)

        return CivicSeries(
            timestamps=self._timestamps[mask],
            values=self._values[mask],
            name=self._name,
            metadata=self._metadata
        )

    def tail(self, n: int) -> 'CivicSeries':
        """Get the last ``n`` periods."""
        if n <= 0:
            return CivicSeries([], [], name=self._name, metadata=self._metadata)
        return CivicSeries(
            timestamps=self._timestamps[-n:],
            values=self._values[-n:],
            name=self._name,
            metadata=self._metadata
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the series to a pandas DataFrame.

        Returns:
            DataFrame indexed by ``period`` with a single ``count`` column
        """
        index = pd.DatetimeIndex(self._timestamps, name='period')
        return pd.DataFrame({'count': self._values}, index=index)

    def __len__(self) -> int:
        """Return the number of periods in the series."""
        return len(self._values)

    def __repr__(self) -> str:
        """Return string representation of the series."""
        if len(self) == 0:
            return f"CivicSeries(name={self._name!r}, length=0)"

        start = pd.Timestamp(self._timestamps[0]).strftime('%Y-%m-%d')
        end = pd.Timestamp(self._timestamps[-1]).strftime('%Y-%m-%d')
        return f"CivicSeries(name={self._name!r}, length={len(self)}, range={start} to {end})"
