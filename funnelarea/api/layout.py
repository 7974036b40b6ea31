"""POST /api/layout, /api/layout/figure, /api/render: funnel layout and rendering."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from funnelarea.config import Settings
from funnelarea.dependencies import get_settings
from funnelarea.engine.context import FunnelContext
from funnelarea.engine.errors import InvalidParameter
from funnelarea.engine.pipeline import create_pipeline
from funnelarea.engine.shape import ConeShape
from funnelarea.engine.text_info import format_text_info, parse_flags
from funnelarea.models.chart import TraceSpec
from funnelarea.models.requests import FigureLayoutRequest, RenderRequest
from funnelarea.models.responses import (
    CornersModel,
    FigureLayoutResponse,
    LayoutResponse,
    SliceResult,
)
from funnelarea.svg.serializer import render_funnel_svg

logger = logging.getLogger(__name__)

router = APIRouter()


def context_from_trace(trace: TraceSpec, settings: Settings, curve_number: int = 0) -> FunnelContext:
    """Build a fresh FunnelContext, filling shape and radius defaults from settings."""
    if trace.shape is not None:
        shape = trace.shape.to_shape(settings)
    else:
        shape = ConeShape(
            base_ratio=settings.default_base_ratio,
            half_angle=settings.default_half_angle,
        )
    return FunnelContext(
        values=list(trace.values),
        labels=trace.labels,
        text=trace.text,
        colors=trace.colors,
        hidden_labels=list(trace.hidden_labels),
        label0=trace.label0,
        dlabel=trace.dlabel,
        shape=shape,
        radius=settings.default_radius if trace.radius is None else trace.radius,
        center=trace.center,
        curve_number=curve_number,
        name=trace.name,
    )


def layout_response(ctx: FunnelContext, text_info: str = "", elapsed_ms: float = 0.0) -> LayoutResponse:
    slices = []
    for s in ctx.slices:
        corners = None
        if s.corners is not None:
            corners = CornersModel(tl=s.corners.tl, tr=s.corners.tr, bl=s.corners.bl, br=s.corners.br)
        slices.append(SliceResult(
            index=s.index,
            label=s.label,
            weight=s.weight,
            hidden=s.hidden,
            stack_index=s.stack_index,
            corners=corners,
            mid_right=s.mid_right,
            percent_initial=s.percent_initial,
            percent_previous=s.percent_previous,
            percent_total=s.percent_total,
            text_info=format_text_info(s, text_info) if text_info and not s.hidden else "",
        ))

    return LayoutResponse(
        name=ctx.name,
        center=ctx.center,
        radius=ctx.radius,
        v_total=ctx.v_total,
        degenerate=ctx.degenerate,
        slices=slices,
        quadrants=ctx.quadrants,
        warnings=ctx.warnings,
        errors=ctx.errors,
        processing_time_ms=round(elapsed_ms, 3),
    )


def _check_text_info(text_info: str) -> None:
    try:
        parse_flags(text_info)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/layout", response_model=LayoutResponse)
async def layout(trace: TraceSpec, settings: Settings = Depends(get_settings)) -> LayoutResponse:
    _check_text_info(trace.text_info)
    start = time.perf_counter()
    ctx = context_from_trace(trace, settings)
    try:
        create_pipeline().run(ctx)
    except InvalidParameter as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    elapsed = (time.perf_counter() - start) * 1000
    return layout_response(ctx, trace.text_info, elapsed)


@router.post("/layout/figure", response_model=FigureLayoutResponse)
async def layout_figure(
    req: FigureLayoutRequest, settings: Settings = Depends(get_settings)
) -> FigureLayoutResponse:
    for trace in req.charts:
        _check_text_info(trace.text_info)
    start = time.perf_counter()
    contexts = [context_from_trace(t, settings, curve_number=i) for i, t in enumerate(req.charts)]
    create_pipeline().run_figure(contexts)
    elapsed = (time.perf_counter() - start) * 1000

    charts = [layout_response(ctx, t.text_info) for ctx, t in zip(contexts, req.charts)]
    failed = sum(1 for ctx in contexts if ctx.errors)
    logger.info("Figure layout: %d charts, %d failed in %.1fms", len(charts), failed, elapsed)
    return FigureLayoutResponse(charts=charts, charts_failed=failed)


@router.post("/render")
async def render(req: RenderRequest, settings: Settings = Depends(get_settings)) -> Response:
    ctx = context_from_trace(req.trace, settings)
    try:
        create_pipeline().run(ctx)
    except InvalidParameter as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    svg = render_funnel_svg(ctx, width=req.width, height=req.height, title=req.title)
    return Response(content=svg, media_type="image/svg+xml")
