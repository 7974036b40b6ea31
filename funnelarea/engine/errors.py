"""Layout error taxonomy. Errors are local to one chart."""

from __future__ import annotations


class FunnelLayoutError(ValueError):
    """Base class for funnel layout failures."""


class InvalidParameter(FunnelLayoutError):
    """Shape or sizing parameter outside its accepted range.

    Raised before any geometry is computed, so no partial output exists.
    """


class DegenerateChart(FunnelLayoutError):
    """Nothing to draw: no visible slices or a zero total."""
