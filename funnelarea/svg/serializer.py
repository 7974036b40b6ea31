"""Write SVG output for a laid-out funnel."""

from __future__ import annotations

from html import escape
from typing import Any

from funnelarea.engine.config import LayoutConfig
from funnelarea.engine.context import FunnelContext, SliceData
from funnelarea.utils.geometry import Point


def _num(value: float, precision: int = 4) -> str:
    s = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


def _move(a: Point, precision: int) -> str:
    return f"m{_num(a[0], precision)},{_num(a[1], precision)}"


def _line(a: Point, b: Point, precision: int) -> str:
    return f"l{_num(b[0] - a[0], precision)},{_num(b[1] - a[1], precision)}"


def slice_path(s: SliceData, center: Point = (0.0, 0.0), precision: int = 4) -> str:
    """Closed path for one slice: move to the center, hop to TR, then TR→BR→BL→TL."""
    if s.corners is None:
        return ""
    c = s.corners
    cx, cy = center
    return (
        f"M{_num(cx, precision)},{_num(cy, precision)}"
        + _move(c.tr, precision)
        + _line(c.tr, c.br, precision)
        + _line(c.br, c.bl, precision)
        + _line(c.bl, c.tl, precision)
        + "Z"
    )


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 400.0,
    canvas_h: float = 400.0,
    title: str = "",
    origin: Point = (0.0, 0.0),
    group_attrs: dict[str, str] | None = None,
) -> str:
    """Generate SVG markup from element definitions."""
    ox, oy = origin
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="{_num(ox)} {_num(oy)} {_num(canvas_w)} {_num(canvas_h)}"'
        f' width="{_num(canvas_w)}" height="{_num(canvas_h)}" xmlns="http://www.w3.org/2000/svg">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    indent = "  "
    if group_attrs is not None:
        attr_str = " ".join(f'{k}="{escape(str(v))}"' for k, v in group_attrs.items())
        lines.append(f"  <g {attr_str}>" if attr_str else "  <g>")
        indent = "    "

    for elem in elements:
        tag = elem.get("tag", "path")
        attrs = {k: v for k, v in elem.items() if k not in ("tag", "children")}
        attr_str = " ".join(f'{k}="{escape(str(v))}"' for k, v in attrs.items())
        lines.append(f"{indent}<{tag} {attr_str} />")

    if group_attrs is not None:
        lines.append("  </g>")

    lines.append("</svg>")
    return "\n".join(lines)


def render_funnel_svg(
    ctx: FunnelContext,
    width: float | None = None,
    height: float | None = None,
    title: str = "",
    config: LayoutConfig | None = None,
) -> str:
    """Render every visible slice as a <path class="surface"> element.

    An explicit width or height keeps that axis of the viewBox anchored at 0.
    An omitted one spans from the canvas origin (or the chart's near edge,
    when that lies past the origin) to the chart's far edge.
    """
    config = config or LayoutConfig()
    cx, cy = ctx.center

    ox = oy = 0.0
    if width is None:
        ox = min(0.0, cx - ctx.radius)
        width = max(cx + ctx.radius, 0.0) - ox
    if height is None:
        extent = ctx.radius
        if ctx.boundary_points is not None and len(ctx.boundary_points):
            extent = float(abs(ctx.boundary_points[:, 1]).max())
        oy = min(0.0, cy - extent)
        height = max(cy + extent, 0.0) - oy

    elements: list[dict[str, Any]] = []
    colorway = config.colorway
    for n, s in enumerate(ctx.slices):
        if s.hidden or s.corners is None:
            continue
        elements.append({
            "tag": "path",
            "class": "surface",
            "data-index": s.index,
            "data-label": s.label,
            "d": slice_path(s, ctx.center, config.svg_precision),
            "fill": s.color or colorway[n % len(colorway)],
        })

    return serialize_svg(
        elements,
        canvas_w=width,
        canvas_h=height,
        title=title or ctx.name,
        origin=(ox, oy),
        group_attrs={"class": "trace funnelarea", "stroke-linejoin": "round"},
    )
