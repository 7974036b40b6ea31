"""Interaction prep: quadrant buckets, hit-testing, hover/unhover dedup.

Hover state is an explicit per-chart record passed in and returned; nothing
is stored on shared objects.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon

from funnelarea.engine.context import SliceData
from funnelarea.utils.geometry import Point, quadrant, translate

logger = logging.getLogger(__name__)


def assign_quadrants(slices: Sequence[SliceData]) -> list[list[list[int]]]:
    """Bucket visible slices by the quadrant of their mid_right anchor.

    Result is indexed [row][col] with row 0 for y < 0 and col 0 for x < 0.
    """
    buckets: list[list[list[int]]] = [[[], []], [[], []]]
    for s in slices:
        if s.hidden or s.mid_right is None:
            continue
        row, col = quadrant(s.mid_right)
        buckets[row][col].append(s.index)
    return buckets


def slice_polygon(s: SliceData, center: Point = (0.0, 0.0)) -> Polygon | None:
    """Slice trapezoid in absolute coordinates."""
    if s.corners is None:
        return None
    return Polygon([translate(p, center) for p in s.corners.ring()])


def hit_test(
    slices: Sequence[SliceData],
    center: Point,
    x: float,
    y: float,
) -> SliceData | None:
    """Return the visible slice covering the absolute point (x, y), if any."""
    pt = ShapelyPoint(x, y)
    for s in slices:
        if s.hidden:
            continue
        poly = slice_polygon(s, center)
        if poly is not None and poly.covers(pt):
            return s
    return None


@dataclass(frozen=True)
class InteractionState:
    """Per-chart hover state. Index of the hovered slice, or None."""

    hovered: int | None = None


@dataclass
class HoverEvent:
    type: str  # "hover" or "unhover"
    point_number: int
    curve_number: int
    label: str = ""
    value: float = 0.0
    anchor: Point = (0.0, 0.0)
    extra: dict[str, float] = field(default_factory=dict)


def _event(kind: str, s: SliceData, center: Point, curve_number: int) -> HoverEvent:
    anchor = translate(s.mid_right, center) if s.mid_right is not None else center
    return HoverEvent(
        type=kind,
        point_number=s.index,
        curve_number=curve_number,
        label=s.label,
        value=s.weight,
        anchor=anchor,
        extra={
            "percent_initial": s.percent_initial,
            "percent_previous": s.percent_previous,
            "percent_total": s.percent_total,
        },
    )


def hover(
    state: InteractionState,
    slices: Sequence[SliceData],
    index: int | None,
    center: Point = (0.0, 0.0),
    curve_number: int = 0,
) -> tuple[InteractionState, list[HoverEvent]]:
    """Move hover to slice ``index`` (None clears it).

    Events are emitted only when the hovered slice changes: an unhover for
    the old slice, then a hover for the new one.
    """
    if index == state.hovered:
        return state, []

    by_index = {s.index: s for s in slices}
    events: list[HoverEvent] = []

    if state.hovered is not None and state.hovered in by_index:
        events.append(_event("unhover", by_index[state.hovered], center, curve_number))

    target = by_index.get(index) if index is not None else None
    if target is not None and target.hidden:
        target = None
    if target is not None:
        events.append(_event("hover", target, center, curve_number))

    new_state = InteractionState(hovered=target.index if target is not None else None)
    logger.debug("Hover %s → %s (%d events)", state.hovered, new_state.hovered, len(events))
    return new_state, events
