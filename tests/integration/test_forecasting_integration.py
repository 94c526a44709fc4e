"""
Forecasting integration tests for civic_forecast library.

These tests verify complete workflows: aggregating raw events into a series,
forecasting it, serializing and rendering the report, and driving the CLI.
"""

import json
import logging
import pytest
from datetime import datetime, timedelta
import pandas as pd

from civic_forecast import (
    CivicSeries,
    CivicSeriesSerializer,
    CivicTrendForecaster,
    ForecastReportSerializer,
    create_visualization,
    forecast_series
)
from civic_forecast.cli.main import main
from civic_forecast.utils.exceptions import CivicForecastError, SerializationError


def trip_start_times(days=21, base=5):
    """Build trip start times with one more trip each day."""
    start = datetime(2024, 3, 1, 6, 0)
    events = []
    for day in range(days):
        for trip in range(base + day):
            events.append(start + timedelta(days=day, minutes=17 * trip))
    return events


class TestForecastingWorkflow:
    """Test forecasting from raw events to rendered output."""

    def setup_method(self):
        """Aggregate a steadily growing daily trip series."""
        self.series = CivicSeries.from_events(trip_start_times(), 'd', name='60601')

    def test_events_to_forecast(self):
        """Test the daily presets on an aggregated series."""
        report = CivicTrendForecaster(self.series, 'd').forecast()

        assert len(report.historical) == 21
        assert len(report.forecast) == 30
        assert report.historical[0].period == '2024-03-01'
        assert report.forecast[0].period == '2024-03-22'
        assert report.forecast[-1].period == '2024-04-20'

        # One extra trip per day: the projection keeps climbing by one
        predictions = [p.predicted for p in report.forecast]
        assert predictions[0] == pytest.approx(26.0)
        assert predictions[-1] == pytest.approx(55.0)

    def test_weekly_rollup(self):
        """Test the same events forecast at weekly granularity."""
        weekly = CivicSeries.from_events(trip_start_times(days=70), 'w', name='60601')
        report = forecast_series(weekly, 'w', fill_gaps=True)

        assert len(report.forecast) == 12
        assert report.summary()['trend_direction'] == 'up'
        for earlier, later in zip(report.forecast, report.forecast[1:]):
            assert pd.Timestamp(later.period) - pd.Timestamp(earlier.period) == pd.Timedelta(days=7)

    def test_series_file_round_trip(self, tmp_path):
        """Test a saved series forecasts the same as the original."""
        path = tmp_path / 'series.json'
        CivicSeriesSerializer.save(self.series, str(path))
        loaded = CivicSeriesSerializer.load(str(path))

        original = CivicTrendForecaster(self.series, 'd', periods_ahead=5).forecast()
        restored = CivicTrendForecaster(loaded, 'd', periods_ahead=5).forecast()

        assert loaded.name == '60601'
        assert restored.to_dict() == original.to_dict()

    def test_report_outputs(self, tmp_path):
        """Test a report can be written and rendered in every format."""
        report = CivicTrendForecaster(self.series, 'd', periods_ahead=7).forecast()

        ForecastReportSerializer.save(report, str(tmp_path / 'report.json'))
        ForecastReportSerializer.save(report, str(tmp_path / 'report.csv'))

        parsed = json.loads((tmp_path / 'report.json').read_text())
        assert len(parsed['forecast']) == 7
        assert parsed['summary']['final_period'] == '2024-03-28'

        frame = pd.read_csv(tmp_path / 'report.csv')
        assert len(frame) == 28

        text = create_visualization(report, 'ascii', chart_type='summary')
        assert 'Final forecast' in text

    def test_gappy_series_logs_warning(self, caplog):
        """Test forecasting an uneven series warns but still projects."""
        gappy = CivicSeries.from_events(
            [datetime(2024, 1, 1), datetime(2024, 1, 2), datetime(2024, 1, 9)], 'd', name='60614'
        )

        with caplog.at_level(logging.WARNING):
            report = CivicTrendForecaster(gappy, 'd', periods_ahead=2).forecast()

        assert 'missing daily periods' in caplog.text
        assert [p.period for p in report.forecast] == ['2024-01-10', '2024-01-11']

    def test_errors_share_a_base_class(self, tmp_path):
        """Test library errors can be caught with the base exception."""
        with pytest.raises(CivicForecastError):
            CivicTrendForecaster(self.series, 'quarterly')

        with pytest.raises(SerializationError):
            CivicSeriesSerializer.load(str(tmp_path / 'absent.csv'))


class TestCLIWorkflow:
    """Test the command line workflow end to end."""

    def test_cli_forecast_from_saved_series(self, tmp_path, capsys):
        """Test the CLI reads a saved series and writes a report."""
        series = CivicSeries.from_events(trip_start_times(days=8), 'd', name='60601')
        input_path = tmp_path / 'trips.csv'
        output_path = tmp_path / 'out' / 'forecast.json'
        CivicSeriesSerializer.save(series, str(input_path))

        with pytest.raises(SystemExit) as exc_info:
            main([str(input_path), '--periods-ahead', '4', '--name', '60601',
                  '--format', 'json', '--output', str(output_path)])

        assert exc_info.value.code == 0
        assert 'Wrote 4 forecast periods' in capsys.readouterr().out

        report = json.loads(output_path.read_text())
        assert report['series_name'] == '60601'
        assert [p['period'] for p in report['forecast']] == [
            '2024-03-09', '2024-03-10', '2024-03-11', '2024-03-12'
        ]

    def test_cli_table_output(self, tmp_path, capsys):
        """Test the default table output."""
        input_path = tmp_path / 'trips.csv'
        input_path.write_text("period,count\n2024-01-01,3\n2024-01-02,4\n2024-01-03,5\n")

        with pytest.raises(SystemExit) as exc_info:
            main([str(input_path), '-p', 'daily', '--periods-ahead', '2'])

        assert exc_info.value.code == 0
        output = capsys.readouterr().out
        assert 'Forecast: series (daily)' in output
        assert '2024-01-05' in output
