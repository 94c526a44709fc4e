"""
Command line interface for civic_forecast library.

This module provides CLI functionality for forecasting series stored in files.
"""

from .main import main, create_argument_parser

__all__ = ['main', 'create_argument_parser']
