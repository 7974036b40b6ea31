"""Geometry engine: trapezoid corners for every visible slice.

The funnel is the frustum of a virtual cone. Boundary i sits at
q = sqrt(cumulative fraction), so the area between two boundaries grows
linearly with the weight between them:

    area ∝ (q1 + q0)(q1 - q0) = s1 - s0

The cumulative fraction starts at v0/v1 = h²/(1 - h²) (the hidden cone tip
below the visible stack) and is accumulated over the visible slices in
reverse source order, so the last slice touches the apex.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from funnelarea.engine.config import LayoutConfig
from funnelarea.engine.context import Corners, SliceData
from funnelarea.engine.errors import DegenerateChart
from funnelarea.engine.shape import ShapeParameters, validate_radius, validate_shape
from funnelarea.utils.geometry import midpoint

logger = logging.getLogger(__name__)


def _drawable_weight(weight: float) -> bool:
    try:
        return math.isfinite(weight) and weight >= 0
    except TypeError:
        return False


def compute_boundary_points(
    weights: Sequence[float],
    shape: ShapeParameters,
    radius: float,
    v_total: float | None = None,
) -> NDArray[np.float64]:
    """Centered, scaled boundary points: (n + 1) x 2, virtual apex first.

    ``weights`` are the visible weights in source order. Shape parameters
    are assumed valid. Raises DegenerateChart when there is nothing to draw.
    """
    if len(weights) == 0:
        raise DegenerateChart("No visible slices")

    v1 = float(sum(weights)) if v_total is None else float(v_total)
    if not v1 > 0:
        raise DegenerateChart(f"Total of visible weights is {v1!r}")

    h2 = shape.base_ratio**2
    v0 = v1 * h2 / (1 - h2)

    # Running sum, apex first, then the visible slices from last to first
    steps = np.concatenate([[v0 / v1], np.asarray(weights, dtype=np.float64)[::-1] / v1])
    q = np.sqrt(np.cumsum(steps))

    points = np.column_stack([q * shape.aspect, -q])

    min_y = float(np.min(points[:, 1]))
    max_y = float(np.max(points[:, 1]))
    y_span = max_y - min_y
    if not y_span > 0:
        raise DegenerateChart("Funnel has zero height")

    # Center the shape
    points[:, 1] -= (max_y + min_y) / 2

    last_x = float(points[-1, 0])
    scale_x = radius / last_x
    scale_y = shape.vertical_scale(radius, y_span, scale_x)

    points[:, 0] *= scale_x
    points[:, 1] *= scale_y
    return points


def compute_slice_geometry(
    slices: Sequence[SliceData],
    shape: ShapeParameters,
    radius: float,
    v_total: float | None = None,
    config: LayoutConfig | None = None,
) -> list[SliceData]:
    """Populate corners, mid_right and stack_index on the visible slices.

    Hidden slices and slices whose weight is negative or not finite get no
    geometry.

    Returns the visible slices in source order. An empty list means the chart
    is degenerate (no visible slice or a zero total) and nothing is drawn.
    Raises InvalidParameter before touching any slice.
    """
    validate_shape(shape, config)
    validate_radius(radius)

    for s in slices:
        s.corners = None
        s.mid_right = None
        s.stack_index = None

    visible = []
    for s in slices:
        if s.hidden:
            continue
        if not _drawable_weight(s.weight):
            logger.warning("Slice %d has weight %r; excluded from geometry", s.index, s.weight)
            continue
        visible.append(s)

    try:
        points = compute_boundary_points([s.weight for s in visible], shape, radius, v_total)
    except DegenerateChart as e:
        logger.info("Degenerate funnel, nothing to draw: %s", e)
        return []

    x0, y0 = float(points[0, 0]), float(points[0, 1])
    prev_left = (-x0, y0)
    prev_right = (x0, y0)

    # points[0] is the apex, skip it
    for n, s in enumerate(reversed(visible), start=1):
        x, y = float(points[n, 0]), float(points[n, 1])
        top_left = (-x, y)
        top_right = (x, y)

        s.corners = Corners(tl=top_left, tr=top_right, bl=prev_left, br=prev_right)
        s.mid_right = midpoint(top_right, prev_right)
        s.stack_index = n - 1

        prev_left = top_left
        prev_right = top_right

    logger.debug(
        "Funnel geometry: %d slices, %s shape, radius %.1f", len(visible), shape.kind, radius
    )
    return visible
