"""Trace and shape models shared by requests."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from funnelarea.config import Settings
from funnelarea.engine.shape import ConeShape, RatioShape, ShapeParameters


class ConeShapeSpec(BaseModel):
    kind: Literal["cone"] = "cone"
    base_ratio: float | None = None
    half_angle: float | None = Field(default=None, description="Cone half angle in degrees [15, 120]")

    def to_shape(self, settings: Settings) -> ShapeParameters:
        return ConeShape(
            base_ratio=settings.default_base_ratio if self.base_ratio is None else self.base_ratio,
            half_angle=settings.default_half_angle if self.half_angle is None else self.half_angle,
        )


class RatioShapeSpec(BaseModel):
    kind: Literal["ratio"] = "ratio"
    base_ratio: float | None = None
    height_ratio: float | None = Field(default=None, description="Height / width ratio (0, 1]")

    def to_shape(self, settings: Settings) -> ShapeParameters:
        return RatioShape(
            base_ratio=settings.default_base_ratio if self.base_ratio is None else self.base_ratio,
            height_ratio=(
                settings.default_height_ratio if self.height_ratio is None else self.height_ratio
            ),
        )


ShapeSpec = Annotated[ConeShapeSpec | RatioShapeSpec, Field(discriminator="kind")]


class TraceSpec(BaseModel):
    """One funnelarea trace plus the size assigned to it."""

    values: list[Any] = Field(..., description="Slice values in source order")
    labels: list[str] | None = None
    text: list[str] | None = None
    colors: list[str] | None = None
    hidden_labels: list[str] = Field(default_factory=list)
    label0: float = 0
    dlabel: float = 1
    name: str = ""
    shape: ShapeSpec | None = None
    radius: float | None = None
    center: tuple[float, float] = (0.0, 0.0)
    text_info: str = Field(default="label+value", description="'+'-joined text info flags")
