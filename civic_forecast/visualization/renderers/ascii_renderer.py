"""
ASCII renderer for civic_forecast visualization.

This module provides console visualization for forecast reports.
"""

from typing import Any, Dict
import numpy as np

from .base import ForecastReportRenderer


class ASCIIRenderer(ForecastReportRenderer):
    """
    ASCII-based renderer for console visualization of ForecastReport.

    This renderer creates text-based charts and tables suitable for console
    output or text-based interfaces.
    """

    DEFAULT_STYLE = {
        'width': 80,
        'height': 20,
        'chart_chars': {
            'horizontal': '─',
            'vertical': '│',
            'corner_bl': '└',
            'corner_br': '┘',
            'historical_char': '*',
            'forecast_char': 'o',
            'bound_char': '·'
        },
        'show_legend': True,
        'precision': 2
    }
    SUPPORTED_FORMATS = ['txt']

    def render(self, **kwargs) -> str:
        """
        Render the report as ASCII text.

        Args:
            **kwargs: Rendering options including:
                - chart_type: 'table', 'chart' or 'summary'
                - width, height: Chart dimensions in characters
                - precision: Decimal places for values

        Returns:
            ASCII text representation of the report
        """
        options = self._options(**kwargs)
        chart_type = options.get('chart_type', 'table')

        if chart_type not in ('table', 'chart', 'summary'):
            raise ValueError(f"Unsupported chart type: {chart_type}")

        if not self.has_points:
            return f"No data available for series {self._report.series_name!r}"

        if chart_type == 'chart':
            return self._render_chart(options)
        elif chart_type == 'summary':
            return self._render_summary(options)
        return self._render_table(options)

    def _heading(self) -> str:
        return f"Forecast: {self._title()}"

    def _render_table(self, options: Dict[str, Any]) -> str:
        """Render a table of all points."""
        precision = options.get('precision', 2)
        lines = [self._heading(), "=" * len(self._heading()), ""]

        header = f"{'Period':<12} {'Kind':<10} {'Predicted':>14} {'Lower':>14} {'Upper':>14}"
        lines.append(header)
        lines.append("-" * len(header))

        for point in self._report.points:
            kind = 'observed' if point.historical else 'forecast'
            lines.append(f"{point.period:<12} {kind:<10} {point.predicted:>14.{precision}f} "
                         f"{point.lower_bound:>14.{precision}f} {point.upper_bound:>14.{precision}f}")

        return "\n".join(lines)

    def _render_summary(self, options: Dict[str, Any]) -> str:
        """Render the report summary."""
        precision = options.get('precision', 2)
        summary = self._report.summary()
        metadata = self._report.metadata

        lines = [self._heading(), "=" * len(self._heading()), ""]
        lines.append(f"Observations:     {summary['observations']}")
        lines.append(f"Horizon:          {summary['horizon']} periods")
        if metadata.get('window_size') is not None:
            lines.append(f"Trend window:     {metadata['window_size']}")
        if metadata.get('trend') is not None:
            lines.append(f"Trend per period: {metadata['trend']:.{precision}f} ({summary['trend_direction']})")
        if metadata.get('dispersion') is not None:
            lines.append(f"Dispersion:       {metadata['dispersion']:.{precision}f}")
        lines.append(f"Last observed:    {summary['last_observed']:.{precision}f} "
                     f"({summary['last_observed_period']})")
        if summary['final_predicted'] is not None:
            lines.append(f"Final forecast:   {summary['final_predicted']:.{precision}f} "
                         f"[{summary['final_lower_bound']:.{precision}f}, "
                         f"{summary['final_upper_bound']:.{precision}f}] ({summary['final_period']})")

        return "\n".join(lines)

    def _render_chart(self, options: Dict[str, Any]) -> str:
        """Render a text plot of observed values and the projected band."""
        width = options.get('width', 80)
        height = options.get('height', 20)
        chars = options['chart_chars']
        precision = options.get('precision', 2)

        points = self._report.points
        chart_width = max(10, width - 15)
        chart_height = max(3, height - 5)

        predicted = np.array([p.predicted for p in points])
        lower = np.array([p.lower_bound for p in points])
        upper = np.array([p.upper_bound for p in points])
        is_historical = np.array([p.historical for p in points])

        min_value = float(np.min(lower))
        max_value = float(np.max(upper))
        value_range = max_value - min_value
        if value_range == 0:
            value_range = 1

        if len(points) > chart_width:
            indices = np.linspace(0, len(points) - 1, chart_width, dtype=int)
        else:
            indices = np.arange(len(points))

        def row_for(value: float) -> int:
            y_pos = int((max_value - value) / value_range * (chart_height - 1))
            return max(0, min(chart_height - 1, y_pos))

        grid = [[' ' for _ in range(chart_width)] for _ in range(chart_height)]
        for column, idx in enumerate(indices):
            if not is_historical[idx]:
                grid[row_for(upper[idx])][column] = chars['bound_char']
                grid[row_for(lower[idx])][column] = chars['bound_char']
                grid[row_for(predicted[idx])][column] = chars['forecast_char']
            else:
                grid[row_for(predicted[idx])][column] = chars['historical_char']

        lines = [self._heading(), "=" * len(self._heading()), ""]
        for i, row in enumerate(grid):
            row_value = max_value - (i / (chart_height - 1)) * value_range
            label = f"{row_value:10.{precision}f}"
            lines.append(f"{label} {chars['vertical']}" + "".join(row) + chars['vertical'])

        lines.append(" " * 11 + chars['corner_bl'] + chars['horizontal'] * chart_width + chars['corner_br'])

        start_label = points[0].period
        end_label = points[-1].period
        gap = max(1, chart_width - len(start_label) - len(end_label))
        lines.append(" " * 12 + start_label + " " * gap + end_label)

        if options.get('show_legend', True):
            lines.append("")
            lines.append("Legend:")
            lines.append(f"  {chars['historical_char']} Observed")
            lines.append(f"  {chars['forecast_char']} Forecast")
            lines.append(f"  {chars['bound_char']} Bounds")

        return "\n".join(lines)

    def _save_output(self, rendered_output: str, filepath: str, **kwargs) -> None:
        """Save ASCII output to a text file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(rendered_output)
