"""Layout configuration: parameter bounds and output precision."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Bounds enforced on shape parameters before any geometry runs."""

    # Cone half angle, degrees
    min_half_angle: float = 15.0
    max_half_angle: float = 120.0

    # Base ratio must stay below 1: v0/v1 = h²/(1-h²) diverges at h → 1
    max_base_ratio: float = 1.0  # exclusive
    max_base_ratio_ratio_shape: float = 0.999  # inclusive

    # Height ratio for ratio shapes, (0, 1]
    max_height_ratio: float = 1.0

    # Decimal places for path coordinates in rendered SVG
    svg_precision: int = 4

    # Colorway used when a slice has no explicit color
    colorway: tuple[str, ...] = (
        "#636efa",
        "#EF553B",
        "#00cc96",
        "#ab63fa",
        "#FFA15A",
        "#19d3f3",
        "#FF6692",
        "#B6E880",
    )
