"""
Matplotlib renderer for civic_forecast visualization.

This module provides matplotlib-based charts of forecast reports: the
observed series, the projected series and the shaded bound band.
"""

from typing import Any, Dict
from datetime import datetime
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .base import ForecastReportRenderer


class MatplotlibRenderer(ForecastReportRenderer):
    """
    Matplotlib-based renderer for ForecastReport visualization.
    """

    DEFAULT_STYLE = {
        'figsize': (12, 6),
        'dpi': 100,
        'color_scheme': 'default',
        'show_grid': True,
        'show_legend': True,
        'show_bounds': True,
        'title': None,
        'date_format': '%Y-%m-%d',
        'line_width': 1.5,
        'band_alpha': 0.25
    }
    SUPPORTED_FORMATS = ['png', 'pdf', 'svg', 'jpg']

    COLOR_SCHEMES = {
        'default': {
            'observed': '#1f77b4',
            'forecast': '#ff7f0e',
            'band': '#ff7f0e'
        },
        'minimal': {
            'observed': '#333333',
            'forecast': '#666666',
            'band': '#999999'
        },
        'high_contrast': {
            'observed': '#000000',
            'forecast': '#d62728',
            'band': '#d62728'
        }
    }

    def render(self, **kwargs) -> Figure:
        """
        Render the report as a matplotlib figure.

        Args:
            **kwargs: Rendering options including:
                - title: Figure title (default: series name and granularity)
                - show_bounds: Whether to shade the projected bounds
                - color_scheme: 'default', 'minimal' or 'high_contrast'

        Returns:
            matplotlib Figure object
        """
        if not self.has_points:
            raise ValueError("Report has no points to render")

        options = self._options(**kwargs)
        colors = self.COLOR_SCHEMES.get(options['color_scheme'], self.COLOR_SCHEMES['default'])

        fig = plt.figure(figsize=options['figsize'], dpi=options['dpi'])
        ax = fig.add_subplot(1, 1, 1)

        historical = self._report.historical
        forecast = self._report.forecast

        observed_dates = pd.to_datetime([p.period for p in historical])
        ax.plot(observed_dates, [p.predicted for p in historical],
                label='Observed',
                color=colors['observed'],
                linewidth=options['line_width'])

        if forecast:
            # Start the projected line at the last observation so the two connect
            anchor = historical[-1]
            forecast_dates = pd.to_datetime([anchor.period] + [p.period for p in forecast])
            ax.plot(forecast_dates, [anchor.predicted] + [p.predicted for p in forecast],
                    label='Forecast',
                    color=colors['forecast'],
                    linewidth=options['line_width'],
                    linestyle='--')

            if options.get('show_bounds', True):
                ax.fill_between(forecast_dates,
                                [anchor.lower_bound] + [p.lower_bound for p in forecast],
                                [anchor.upper_bound] + [p.upper_bound for p in forecast],
                                color=colors['band'],
                                alpha=options['band_alpha'],
                                label='Bounds')

        self._apply_formatting(fig, ax, options)
        return fig

    def _apply_formatting(self, fig: Figure, ax: Axes, options: Dict[str, Any]) -> None:
        """Apply axis and figure formatting."""
        title = options.get('title')
        if title is None:
            title = f"{self._title()} forecast"
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_ylabel('Count')

        if options.get('show_grid', True):
            ax.grid(True, alpha=0.3)

        if options.get('show_legend', True):
            handles, labels = ax.get_legend_handles_labels()
            if handles and labels:
                ax.legend(loc='upper left', fontsize=9)

        ax.xaxis.set_major_formatter(mdates.DateFormatter(options.get('date_format', '%Y-%m-%d')))
        plt.setp(ax.xaxis.get_majorticklabels(), rotation=45, ha='right')

        fig.tight_layout()
        fig.text(0.99, 0.01, f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                 ha='right', va='bottom', fontsize=8, alpha=0.7)

    def _save_output(self, rendered_output: Figure, filepath: str, **kwargs) -> None:
        """Save matplotlib figure to file."""
        format_ext = filepath.split('.')[-1].lower()
        if format_ext not in self.SUPPORTED_FORMATS:
            format_ext = 'png'

        rendered_output.savefig(filepath, format=format_ext,
                                dpi=self._options(**kwargs)['dpi'],
                                bbox_inches='tight',
                                facecolor='white',
                                edgecolor='none')
        plt.close(rendered_output)
