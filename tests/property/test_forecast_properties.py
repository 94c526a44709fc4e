"""
Property-based tests for the trend forecasting engine.

These tests verify universal properties that should hold across all valid inputs
for the moving-average trend projector in the civic_forecast library.
"""

import pytest
import numpy as np
from hypothesis import given, strategies as st, settings

from civic_forecast.forecasting.engine import (
    CONFIDENCE_BASE,
    CONFIDENCE_STEP,
    MIN_WINDOW_SIZE,
    effective_window_size,
    moving_average_forecast,
    calculate_trend,
    calculate_std_dev
)


# Hypothesis strategies for generating test data
@st.composite
def count_series(draw, min_size=1, max_size=60):
    """Generate non-negative count series."""
    return draw(st.lists(
        st.floats(min_value=0.0, max_value=10000.0, allow_nan=False, allow_infinity=False),
        min_size=min_size,
        max_size=max_size
    ))


@st.composite
def integer_count_series(draw, min_size=1, max_size=60):
    """Generate whole-number count series, like daily trip totals."""
    values = draw(st.lists(st.integers(min_value=0, max_value=5000), min_size=min_size, max_size=max_size))
    return [float(v) for v in values]


horizons = st.integers(min_value=-5, max_value=40)
windows = st.integers(min_value=1, max_value=80)


class TestForecastShapeProperties:
    """Properties of the forecast output layout."""

    @given(historical=count_series(), periods_ahead=horizons, window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_output_length(self, historical, periods_ahead, window_size):
        """Output has one point per observation plus one per positive step ahead."""
        results = moving_average_forecast(historical, periods_ahead, window_size)

        assert len(results) == len(historical) + max(periods_ahead, 0)

    @given(periods_ahead=horizons, window_size=windows)
    @settings(max_examples=30, deadline=None)
    def test_empty_input(self, periods_ahead, window_size):
        """Empty input always gives an empty forecast."""
        assert moving_average_forecast([], periods_ahead, window_size) == []

    @given(historical=count_series(), periods_ahead=horizons, window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_historical_points_echo_input(self, historical, periods_ahead, window_size):
        """Historical points come first and repeat the inputs exactly."""
        results = moving_average_forecast(historical, periods_ahead, window_size)

        for value, point in zip(historical, results):
            assert point.historical is True
            assert point.predicted == value
            assert point.lower_bound == value
            assert point.upper_bound == value

        assert all(not point.historical for point in results[len(historical):])

    @given(historical=count_series(), periods_ahead=horizons, window_size=windows)
    @settings(max_examples=50, deadline=None)
    def test_input_not_modified(self, historical, periods_ahead, window_size):
        """Forecasting never changes the caller's data."""
        original = list(historical)
        moving_average_forecast(historical, periods_ahead, window_size)

        assert historical == original


class TestProjectionProperties:
    """Properties of projected values and bounds."""

    @given(historical=count_series(), periods_ahead=st.integers(1, 40), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_projection_non_negative(self, historical, periods_ahead, window_size):
        """Projected values and lower bounds are never negative."""
        results = moving_average_forecast(historical, periods_ahead, window_size)

        for point in results[len(historical):]:
            assert point.predicted >= 0.0
            assert point.lower_bound >= 0.0
            assert point.lower_bound <= point.predicted

    @given(historical=count_series(), periods_ahead=st.integers(1, 40), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_projection_follows_trend(self, historical, periods_ahead, window_size):
        """Each step adds the window trend to the last observation, floored at zero."""
        results = moving_average_forecast(historical, periods_ahead, window_size)
        window = effective_window_size(len(historical), window_size)
        trend = calculate_trend(historical, window)

        for i, point in enumerate(results[len(historical):], start=1):
            expected = max(0.0, historical[-1] + trend * i)
            assert point.predicted == pytest.approx(expected, rel=1e-9, abs=1e-6)

    @given(historical=count_series(), periods_ahead=st.integers(1, 40), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_upper_bound_uses_unclamped_prediction(self, historical, periods_ahead, window_size):
        """Upper bounds widen from the raw projection and are never clamped."""
        results = moving_average_forecast(historical, periods_ahead, window_size)
        window = effective_window_size(len(historical), window_size)
        trend = calculate_trend(historical, window)
        std_dev = calculate_std_dev(historical, window)

        for i, point in enumerate(results[len(historical):], start=1):
            multiplier = CONFIDENCE_BASE + CONFIDENCE_STEP * i
            expected = historical[-1] + trend * i + std_dev * multiplier
            assert point.upper_bound == pytest.approx(expected, rel=1e-9, abs=1e-6)

    @given(
        value=st.integers(min_value=0, max_value=10000),
        length=st.integers(min_value=1, max_value=50),
        periods_ahead=st.integers(1, 40),
        window_size=windows
    )
    @settings(max_examples=50, deadline=None)
    def test_constant_series_projects_flat(self, value, length, periods_ahead, window_size):
        """A constant series projects its value with zero-width bounds."""
        historical = [float(value)] * length
        results = moving_average_forecast(historical, periods_ahead, window_size)

        for point in results[length:]:
            assert point.predicted == float(value)
            assert point.lower_bound == float(value)
            assert point.upper_bound == float(value)

    @given(historical=integer_count_series(min_size=2), periods_ahead=st.integers(2, 40), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_unclamped_width_grows_with_horizon(self, historical, periods_ahead, window_size):
        """Where no bound is clamped, the interval widens with each step."""
        results = moving_average_forecast(historical, periods_ahead, window_size)
        projected = results[len(historical):]

        unclamped = [p for p in projected if p.lower_bound > 0.0]
        for earlier, later in zip(unclamped, unclamped[1:]):
            assert later.width >= earlier.width - 1e-9


class TestHelperProperties:
    """Properties of the trend and dispersion helpers."""

    @given(
        intercept=st.integers(min_value=0, max_value=1000),
        slope=st.integers(min_value=-20, max_value=20),
        length=st.integers(min_value=2, max_value=40)
    )
    @settings(max_examples=50, deadline=None)
    def test_trend_recovers_exact_slope(self, intercept, slope, length):
        """An exact line has a trend equal to its slope."""
        data = [float(intercept + slope * k) for k in range(length)]

        assert calculate_trend(data, length) == pytest.approx(float(slope), abs=1e-9)

    @given(historical=count_series(), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_std_dev_matches_population_formula(self, historical, window_size):
        """Dispersion equals numpy's population standard deviation of the window."""
        window = min(window_size, len(historical))
        result = calculate_std_dev(historical, window_size)

        if window < MIN_WINDOW_SIZE:
            assert result == 0.0
        else:
            expected = float(np.std(np.array(historical[-window:]), ddof=0))
            assert result == pytest.approx(expected, rel=1e-9, abs=1e-6)
            assert result >= 0.0

    @given(length=st.integers(min_value=0, max_value=100), window_size=windows)
    @settings(max_examples=100, deadline=None)
    def test_effective_window_is_clamped(self, length, window_size):
        """The effective window never exceeds the data or drops below two points."""
        window = effective_window_size(length, window_size)

        assert window >= MIN_WINDOW_SIZE
        assert window <= max(MIN_WINDOW_SIZE, window_size)
        if MIN_WINDOW_SIZE <= window_size <= length:
            assert window == window_size
        if length >= MIN_WINDOW_SIZE:
            assert window <= length
