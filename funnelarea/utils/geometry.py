"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


def _closed(points: NDArray[np.float64]) -> NDArray[np.float64]:
    if len(points) and not np.array_equal(points[0], points[-1]):
        return np.vstack([points, points[:1]])
    return points


def signed_area(points: NDArray[np.float64] | Sequence[Point]) -> float:
    """Shoelace formula for signed area. Positive = CCW, Negative = CW.

    Accepts open or closed rings.
    """
    pts = _closed(np.asarray(points, dtype=np.float64).reshape(-1, 2))
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


def polygon_area(points: NDArray[np.float64] | Sequence[Point]) -> float:
    return abs(signed_area(points))


def bbox(points: NDArray[np.float64] | Sequence[Point]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(pts[:, 0])),
        float(np.min(pts[:, 1])),
        float(np.max(pts[:, 0])),
        float(np.max(pts[:, 1])),
    )


def midpoint(a: Point, b: Point) -> Point:
    return (0.5 * (a[0] + b[0]), 0.5 * (a[1] + b[1]))


def quadrant(point: Point) -> tuple[int, int]:
    """(row, col): row 0 when y < 0, col 0 when x < 0."""
    return (0 if point[1] < 0 else 1, 0 if point[0] < 0 else 1)


def translate(point: Point, offset: Point) -> Point:
    return (point[0] + offset[0], point[1] + offset[1])
