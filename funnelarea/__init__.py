"""Funnel-area chart layout: trapezoid geometry, SVG rendering, hit-testing."""

__version__ = "0.1.0"
