"""
Helper functions for visualization operations.

This module provides a single entry point for rendering or saving a forecast
report with any of the available renderers.
"""

from typing import Any, Dict, Optional

from .renderers import ASCIIRenderer, MatplotlibRenderer
from ..utils.exceptions import VisualizationError

RENDERERS = {
    'ascii': ASCIIRenderer,
    'matplotlib': MatplotlibRenderer
}


def create_visualization(report, renderer_type: str = 'ascii', output_path: Optional[str] = None,
                         style: Optional[Dict[str, Any]] = None, **render_options) -> Any:
    """
    Render a forecast report, or save it when output_path is given.

    Args:
        report: ForecastReport to visualize
        renderer_type: 'ascii' or 'matplotlib'
        output_path: Optional file to write instead of returning the output
        style: Style overrides passed to the renderer
        **render_options: Options for render() (e.g. chart_type='summary')

    Returns:
        The rendered text or Figure, or output_path after saving

    Raises:
        VisualizationError: If the renderer is unknown or rendering fails

    Example:
        >>> text = create_visualization(report, 'ascii', chart_type='summary')
    """
    renderer_class = RENDERERS.get(renderer_type)
    if renderer_class is None:
        raise VisualizationError(f"Unknown renderer type: {renderer_type}. Available: {sorted(RENDERERS)}")

    try:
        renderer = renderer_class(report, **(style or {}))
        if output_path:
            renderer.save(output_path, **render_options)
            return output_path
        return renderer.render(**render_options)
    except VisualizationError:
        raise
    except ValueError as e:
        raise VisualizationError(f"Failed to create visualization: {e}") from e


__all__ = ['create_visualization', 'RENDERERS']
