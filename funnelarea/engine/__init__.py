"""Funnel-area layout engine."""

from funnelarea.engine.context import Corners, FunnelContext, SliceData
from funnelarea.engine.errors import DegenerateChart, FunnelLayoutError, InvalidParameter
from funnelarea.engine.geometry import compute_boundary_points, compute_slice_geometry
from funnelarea.engine.pipeline import LayoutPipeline, layout_funnel
from funnelarea.engine.shape import ConeShape, RatioShape, ShapeParameters

__all__ = [
    "Corners",
    "FunnelContext",
    "SliceData",
    "DegenerateChart",
    "FunnelLayoutError",
    "InvalidParameter",
    "compute_boundary_points",
    "compute_slice_geometry",
    "LayoutPipeline",
    "layout_funnel",
    "ConeShape",
    "RatioShape",
    "ShapeParameters",
]
