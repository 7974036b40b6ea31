"""FunnelContext: the single mutable state object flowing through a layout pass.

Per-slice results → SliceData
Chart-level results → FunnelContext.* (v_total, boundary_points, quadrants, etc.)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from funnelarea.engine.shape import ConeShape, ShapeParameters
from funnelarea.utils.geometry import Point, polygon_area


@dataclass(frozen=True)
class Corners:
    """Trapezoid corners in local chart coordinates.

    tl/tr is the edge farther from the virtual apex, bl/br the nearer one.
    """

    tl: Point
    tr: Point
    bl: Point
    br: Point

    def ring(self) -> list[Point]:
        """Corners in drawing order: TR → BR → BL → TL."""
        return [self.tr, self.br, self.bl, self.tl]

    @property
    def top_half_width(self) -> float:
        return self.tr[0]

    @property
    def bottom_half_width(self) -> float:
        return self.br[0]


@dataclass
class SliceData:
    """One entry of the trace, visible or not."""

    index: int
    weight: float
    label: str = ""
    hidden: bool = False
    text: str | None = None
    color: str | None = None
    # Position among visible slices counted outward from the apex
    stack_index: int | None = None
    corners: Corners | None = None
    mid_right: Point | None = None
    percent_initial: float = 0.0
    percent_previous: float = 0.0
    percent_total: float = 0.0

    @property
    def visible(self) -> bool:
        return not self.hidden

    @property
    def area(self) -> float:
        if self.corners is None:
            return 0.0
        return polygon_area(self.corners.ring())


@dataclass
class FunnelContext:
    """Shared state for one chart's layout pass."""

    # --- Raw trace input ---
    values: list[Any] = field(default_factory=list)
    labels: list[str] | None = None
    text: list[str] | None = None
    colors: list[str] | None = None
    hidden_labels: list[str] = field(default_factory=list)
    label0: float = 0
    dlabel: float = 1

    # --- Sizing (from the external chart-sizing step) ---
    shape: ShapeParameters = field(default_factory=ConeShape)
    radius: float = 100.0
    center: Point = (0.0, 0.0)
    curve_number: int = 0
    name: str = ""

    # --- Computed ---
    slices: list[SliceData] = field(default_factory=list)
    v_total: float = 0.0
    # Boundary points, (n_visible + 1) x 2, apex first
    boundary_points: NDArray[np.float64] | None = None
    # quadrants[row][col] -> slice indices; row 0: y < 0, col 0: x < 0
    quadrants: list[list[list[int]]] = field(default_factory=lambda: [[[], []], [[], []]])
    degenerate: bool = False

    # --- Pass metadata ---
    warnings: list[str] = field(default_factory=list)
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def visible_slices(self) -> list[SliceData]:
        return [s for s in self.slices if s.visible]

    def reset(self) -> None:
        """Drop computed results and pass metadata so the context can be laid out again."""
        self.slices = []
        self.v_total = 0.0
        self.boundary_points = None
        self.quadrants = [[[], []], [[], []]]
        self.degenerate = False
        self.warnings = []
        self.completed_stages = set()
        self.errors = {}
