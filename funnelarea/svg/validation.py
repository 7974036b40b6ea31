"""Validate a rendered funnel SVG by reading the slice paths back."""

from __future__ import annotations

import logging
import re

from shapely.geometry import Polygon
from svgpathtools import Line, parse_path

from funnelarea.engine.context import FunnelContext

logger = logging.getLogger(__name__)

_PATH_TAG_RE = re.compile(r"<path[^>]*/?\s*>", re.IGNORECASE)
_D_RE = re.compile(r'\sd\s*=\s*"([^"]+)"')
_INDEX_RE = re.compile(r'data-index\s*=\s*"(\d+)"')


def parse_slice_polygons(svg: str) -> dict[int, Polygon]:
    """Map data-index → polygon for every slice path in the document."""
    polygons: dict[int, Polygon] = {}
    for match in _PATH_TAG_RE.finditer(svg):
        tag = match.group(0)
        d_match = _D_RE.search(tag)
        idx_match = _INDEX_RE.search(tag)
        if not d_match or not idx_match:
            continue

        try:
            path = parse_path(d_match.group(1))
        except Exception as e:
            logger.warning("Failed to parse slice path: %s", e)
            continue

        vertices = [(seg.start.real, seg.start.imag) for seg in path if isinstance(seg, Line)]
        if len(vertices) < 3:
            continue
        polygons[int(idx_match.group(1))] = Polygon(vertices)
    return polygons


def validate_rendered_svg(svg: str, ctx: FunnelContext, tolerance: float = 1e-3) -> dict:
    """Compare rendered slice area shares against weight shares.

    Returns a dict with:
    - valid: bool
    - slice_count: int
    - area_shares / weight_shares: dict[int, float]
    - max_error: float
    - issues: list[str]
    """
    polygons = parse_slice_polygons(svg)
    visible = ctx.visible_slices
    issues: list[str] = []

    expected = {s.index for s in visible} if not ctx.degenerate else set()
    missing = expected - set(polygons)
    extra = set(polygons) - expected
    if missing:
        issues.append(f"Missing slice paths: {sorted(missing)}")
    if extra:
        issues.append(f"Unexpected slice paths: {sorted(extra)}")

    total_area = sum(p.area for p in polygons.values())
    area_shares = {i: (p.area / total_area if total_area else 0.0) for i, p in polygons.items()}
    weight_shares = {
        s.index: (s.weight / ctx.v_total if ctx.v_total else 0.0)
        for s in visible
        if s.index in polygons
    }

    max_error = 0.0
    for i, share in weight_shares.items():
        err = abs(area_shares[i] - share)
        max_error = max(max_error, err)
        if err > tolerance:
            issues.append(f"Slice {i}: area share {area_shares[i]:.4f} != weight share {share:.4f}")

    return {
        "valid": len(issues) == 0,
        "slice_count": len(polygons),
        "area_shares": area_shares,
        "weight_shares": weight_shares,
        "max_error": max_error,
        "issues": issues,
    }
