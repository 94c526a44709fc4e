"""
Trend forecasting engine for civic_forecast library.

This module contains the moving-average trend projector used for trip count
forecasts. Given an ordered series of per-period counts it fits a least
squares trend over a trailing window, measures the dispersion of the same
window and projects future values with bounds that widen with the horizon.

The engine is a pure numeric transform: it knows nothing about dates,
geographies or storage. Period labels are attached by the caller.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence
import numpy as np


# Bound widening per step ahead: multiplier = 1 + CONFIDENCE_STEP * i.
# Flat heuristic, not a statistical prediction interval.
CONFIDENCE_BASE = 1.0
CONFIDENCE_STEP = 0.2

MIN_WINDOW_SIZE = 2


@dataclass
class ForecastPoint:
    """A single historical or projected forecast point."""
    predicted: float
    lower_bound: float
    upper_bound: float
    historical: bool
    period: str = ""

    @property
    def width(self) -> float:
        """Width of the bound interval."""
        return self.upper_bound - self.lower_bound

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)


def _trailing_window(data: Sequence[float], window_size: int) -> np.ndarray:
    values = np.asarray(data, dtype=np.float64)
    if window_size > len(values):
        window_size = len(values)
    return values[len(values) - window_size:]


def effective_window_size(length: int, window_size: int) -> int:
    """
    Get the window actually used for a series of ``length`` observations.

    The requested size is clamped to the data length and then raised to
    MIN_WINDOW_SIZE, so very short series still fit over two points.
    """
    if window_size > length:
        window_size = length
    if window_size < MIN_WINDOW_SIZE:
        window_size = MIN_WINDOW_SIZE
    return window_size


def calculate_trend(data: Sequence[float], window_size: int) -> float:
    """
    Calculate the linear trend over the last ``window_size`` points.

    The window is re-indexed from zero, so the slope reflects the spacing
    between consecutive observations only. Callers must supply an evenly
    spaced series.

    Args:
        data: Ordered observations
        window_size: Number of trailing points to fit

    Returns:
        Ordinary least squares slope, or 0.0 when fewer than two points are
        available or the fit is degenerate
    """
    if len(data) < window_size:
        window_size = len(data)

    if window_size < MIN_WINDOW_SIZE:
        return 0.0

    window = _trailing_window(data, window_size)

    n = float(len(window))
    x = np.arange(len(window), dtype=np.float64)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(window))
    sum_xy = float(np.sum(x * window))
    sum_x2 = float(np.sum(x * x))

    numerator = (n * sum_xy) - (sum_x * sum_y)
    denominator = (n * sum_x2) - (sum_x * sum_x)

    if denominator == 0:
        return 0.0

    return numerator / denominator


def calculate_std_dev(data: Sequence[float], window_size: int) -> float:
    """
    Calculate the population standard deviation of the last ``window_size`` points.

    Args:
        data: Ordered observations
        window_size: Number of trailing points to include

    Returns:
        Standard deviation with divisor ``n``, or 0.0 for fewer than two points
    """
    if len(data) < window_size:
        window_size = len(data)

    if window_size < MIN_WINDOW_SIZE:
        return 0.0

    window = _trailing_window(data, window_size)
    mean = float(np.mean(window))
    variance = float(np.mean((window - mean) ** 2))
    return float(np.sqrt(variance))


def simple_moving_average(data: Sequence[float], window_size: int) -> float:
    """
    Calculate the unweighted average of the last ``window_size`` points.

    Args:
        data: Ordered observations
        window_size: Number of trailing points to average

    Returns:
        The trailing mean, or 0.0 for an empty series
    """
    if len(data) == 0:
        return 0.0

    if window_size > len(data) or window_size <= 0:
        window_size = len(data)

    window = _trailing_window(data, window_size)
    return float(np.sum(window)) / window_size


def moving_average_forecast(historical: Sequence[float], periods_ahead: int,
                            window_size: int) -> List[ForecastPoint]:
    """
    Project a series of counts forward using a windowed linear trend.

    Historical observations are echoed first as zero-width points, followed by
    ``periods_ahead`` projected points. Projected values and lower bounds are
    clamped at zero since counts cannot be negative; upper bounds are not.

    Args:
        historical: Chronologically ordered, evenly spaced non-negative counts
        periods_ahead: Number of future periods to project
        window_size: Trailing window used for trend and dispersion

    Returns:
        List of ForecastPoint, historical points first. Empty for empty input.
    """
    if len(historical) == 0:
        return []

    values = np.asarray(historical, dtype=np.float64)
    window_size = effective_window_size(len(values), window_size)

    results: List[ForecastPoint] = []

    for value in values:
        value = float(value)
        results.append(ForecastPoint(
            predicted=value,
            lower_bound=value,
            upper_bound=value,
            historical=True
        ))

    trend = calculate_trend(values, window_size)
    std_dev = calculate_std_dev(values, window_size)

    last_value = float(values[-1])

    for i in range(1, periods_ahead + 1):
        predicted = last_value + (trend * i)

        confidence_multiplier = CONFIDENCE_BASE + (i * CONFIDENCE_STEP)
        lower_bound = predicted - (std_dev * confidence_multiplier)
        upper_bound = predicted + (std_dev * confidence_multiplier)

        if lower_bound < 0:
            lower_bound = 0.0
        if predicted < 0:
            predicted = 0.0

        results.append(ForecastPoint(
            predicted=predicted,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            historical=False
        ))

    return results
