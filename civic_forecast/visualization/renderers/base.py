"""
Base renderer class for civic_forecast visualization.

This module contains the abstract base class shared by the forecast report
renderers.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import os

from ...utils.exceptions import VisualizationError


class ForecastReportRenderer(ABC):
    """
    Abstract base class for forecast report renderers.

    Subclasses declare their DEFAULT_STYLE and SUPPORTED_FORMATS, and
    implement render() and _save_output().
    """

    DEFAULT_STYLE: Dict[str, Any] = {}
    SUPPORTED_FORMATS: List[str] = []

    def __init__(self, report, **style_options):
        """
        Initialize renderer with a report.

        Args:
            report: ForecastReport instance to render
            **style_options: Overrides for the renderer's default style

        Raises:
            ValueError: If report is not a ForecastReport
        """
        # Import here to avoid circular imports
        from ...forecasting.report import ForecastReport

        if not isinstance(report, ForecastReport):
            raise ValueError("Report must be a ForecastReport instance")

        self._report = report
        self._style_options = {**self.DEFAULT_STYLE, **style_options}

    @property
    def report(self):
        """Get the report being rendered."""
        return self._report

    @property
    def style_options(self) -> Dict[str, Any]:
        """Get current style options."""
        return self._style_options.copy()

    @property
    def has_points(self) -> bool:
        """True when the report has observed or projected points to draw."""
        return not self._report.is_empty

    def set_style_options(self, **kwargs) -> None:
        """Update style options for subsequent renders."""
        self._style_options.update(kwargs)

    def _options(self, **kwargs) -> Dict[str, Any]:
        """Merge per-call options over the style options."""
        return {**self._style_options, **kwargs}

    def _title(self) -> str:
        name = self._report.series_name or 'series'
        granularity = self._report.metadata.get('granularity', self._report.period)
        return f"{name} ({granularity})"

    @abstractmethod
    def render(self, **kwargs) -> Any:
        """Render the report; the output type depends on the renderer."""
        pass

    def save(self, filepath: str, **kwargs) -> None:
        """
        Render the report and write it to a file.

        Args:
            filepath: Destination path; missing directories are created
            **kwargs: Render options

        Raises:
            ValueError: If filepath is empty
            VisualizationError: If rendering or writing fails
        """
        if not filepath:
            raise ValueError("Filepath cannot be empty")

        directory = os.path.dirname(filepath)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        try:
            rendered_output = self.render(**kwargs)
            self._save_output(rendered_output, filepath, **kwargs)
        except (OSError, ValueError) as e:
            raise VisualizationError(f"Failed to save {filepath}: {e}") from e

    @abstractmethod
    def _save_output(self, rendered_output: Any, filepath: str, **kwargs) -> None:
        """Write rendered output to filepath."""
        pass
