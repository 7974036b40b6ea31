"""Shape families: the funnel is a frustum of a virtual cone.

Two families share one coordinate pipeline and differ only in how the
horizontal aspect and the vertical scale are derived:

    cone:  width grows by tan(half_angle / 2) per unit of sqrt(cumulative
           fraction); one uniform scale for both axes.
    ratio: unit aspect; height fixed by height_ratio, x and y scaled
           independently.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from funnelarea.engine.config import LayoutConfig
from funnelarea.engine.errors import InvalidParameter


@dataclass(frozen=True)
class ConeShape:
    base_ratio: float = 0.2
    half_angle: float = 60.0
    kind: Literal["cone"] = "cone"

    @property
    def aspect(self) -> float:
        return math.tan(math.pi * self.half_angle / 360)

    def vertical_scale(self, radius: float, y_span: float, scale_x: float) -> float:
        return scale_x


@dataclass(frozen=True)
class RatioShape:
    base_ratio: float = 0.2
    height_ratio: float = 0.65
    kind: Literal["ratio"] = "ratio"

    @property
    def aspect(self) -> float:
        return 1.0

    def vertical_scale(self, radius: float, y_span: float, scale_x: float) -> float:
        return radius * self.height_ratio * 2 / y_span


ShapeParameters = ConeShape | RatioShape


def validate_shape(shape: ShapeParameters, config: LayoutConfig | None = None) -> None:
    """Reject out-of-range shape parameters. Raises InvalidParameter."""
    config = config or LayoutConfig()
    if not isinstance(shape, (ConeShape, RatioShape)):
        raise InvalidParameter(f"Unknown shape kind: {getattr(shape, 'kind', type(shape).__name__)}")

    h = shape.base_ratio
    if isinstance(shape, ConeShape):
        if not (0 <= h < config.max_base_ratio):
            raise InvalidParameter(
                f"base_ratio must be in [0, {config.max_base_ratio:g}), got {h!r}"
            )
        if not (config.min_half_angle <= shape.half_angle <= config.max_half_angle):
            raise InvalidParameter(
                f"half_angle must be in [{config.min_half_angle:g}, "
                f"{config.max_half_angle:g}] degrees, got {shape.half_angle!r}"
            )
    else:
        if not (0 <= h <= config.max_base_ratio_ratio_shape):
            raise InvalidParameter(
                f"base_ratio must be in [0, {config.max_base_ratio_ratio_shape:g}], got {h!r}"
            )
        if not (0 < shape.height_ratio <= config.max_height_ratio):
            raise InvalidParameter(
                f"height_ratio must be in (0, {config.max_height_ratio:g}], "
                f"got {shape.height_ratio!r}"
            )


def validate_radius(radius: float) -> None:
    if not (math.isfinite(radius) and radius > 0):
        raise InvalidParameter(f"radius must be a positive finite number, got {radius!r}")
