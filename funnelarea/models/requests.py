"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from funnelarea.models.chart import TraceSpec


class FigureLayoutRequest(BaseModel):
    charts: list[TraceSpec] = Field(..., description="Independent funnelarea traces")


class RenderRequest(BaseModel):
    trace: TraceSpec
    width: float | None = Field(default=None, description="Canvas width")
    height: float | None = Field(default=None, description="Canvas height")
    title: str = ""


class InteractionStateModel(BaseModel):
    hovered: int | None = None


class HoverRequest(BaseModel):
    trace: TraceSpec
    x: float = Field(..., description="Pointer x in canvas coordinates")
    y: float = Field(..., description="Pointer y in canvas coordinates")
    curve_number: int = 0
    state: InteractionStateModel = Field(default_factory=InteractionStateModel)
