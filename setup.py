"""
Setup script for civic-forecast library.

This file provides backward compatibility for older pip versions.
The main configuration is in pyproject.toml.
"""

from setuptools import setup

# Configuration is in pyproject.toml
setup()
