"""POST /api/hover: hit-test a pointer position and update hover state."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from funnelarea.api.layout import context_from_trace
from funnelarea.config import Settings
from funnelarea.dependencies import get_settings
from funnelarea.engine.errors import InvalidParameter
from funnelarea.engine.interaction import InteractionState, hit_test, hover
from funnelarea.engine.pipeline import create_pipeline
from funnelarea.models.requests import HoverRequest, InteractionStateModel
from funnelarea.models.responses import HoverEventModel, HoverResponse

router = APIRouter()


@router.post("/hover", response_model=HoverResponse)
async def handle_hover(req: HoverRequest, settings: Settings = Depends(get_settings)) -> HoverResponse:
    ctx = context_from_trace(req.trace, settings, curve_number=req.curve_number)
    try:
        create_pipeline().run(ctx)
    except InvalidParameter as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    hit = hit_test(ctx.slices, ctx.center, req.x, req.y)
    state = InteractionState(hovered=req.state.hovered)
    new_state, events = hover(
        state,
        ctx.slices,
        hit.index if hit is not None else None,
        center=ctx.center,
        curve_number=req.curve_number,
    )

    return HoverResponse(
        state=InteractionStateModel(hovered=new_state.hovered),
        slice_index=hit.index if hit is not None else None,
        events=[
            HoverEventModel(
                type=e.type,
                point_number=e.point_number,
                curve_number=e.curve_number,
                label=e.label,
                value=e.value,
                anchor=e.anchor,
                extra=e.extra,
            )
            for e in events
        ],
    )
