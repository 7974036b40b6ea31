"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from funnelarea.models.requests import InteractionStateModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class CornersModel(BaseModel):
    tl: tuple[float, float]
    tr: tuple[float, float]
    bl: tuple[float, float]
    br: tuple[float, float]


class SliceResult(BaseModel):
    index: int
    label: str = ""
    weight: float = 0.0
    hidden: bool = False
    stack_index: int | None = None
    corners: CornersModel | None = None
    mid_right: tuple[float, float] | None = None
    percent_initial: float = 0.0
    percent_previous: float = 0.0
    percent_total: float = 0.0
    text_info: str = ""


class LayoutResponse(BaseModel):
    name: str = ""
    center: tuple[float, float] = (0.0, 0.0)
    radius: float = 0.0
    v_total: float = 0.0
    degenerate: bool = False
    slices: list[SliceResult] = Field(default_factory=list)
    quadrants: list[list[list[int]]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    processing_time_ms: float = 0.0


class FigureLayoutResponse(BaseModel):
    charts: list[LayoutResponse] = Field(default_factory=list)
    charts_failed: int = 0


class HoverEventModel(BaseModel):
    type: str
    point_number: int
    curve_number: int
    label: str = ""
    value: float = 0.0
    anchor: tuple[float, float] = (0.0, 0.0)
    extra: dict[str, float] = Field(default_factory=dict)


class HoverResponse(BaseModel):
    state: InteractionStateModel
    slice_index: int | None = None
    events: list[HoverEventModel] = Field(default_factory=list)
