"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from funnelarea.api import health, interaction, layout

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(layout.router)
api_router.include_router(interaction.router)
