"""Shared test fixtures."""

from __future__ import annotations

import pytest

from funnelarea.engine.context import FunnelContext
from funnelarea.engine.pipeline import create_pipeline
from funnelarea.engine.shape import ConeShape, RatioShape

# Sample traces

THREE_STAGE_VALUES = [1, 2, 1]
SALES_VALUES = [120, 60, 30, 20, 10]
SALES_LABELS = ["Visits", "Signups", "Trials", "Paid", "Renewed"]

RATIO_SHAPE = RatioShape(base_ratio=0.333, height_ratio=1.0)
CONE_SHAPE = ConeShape(base_ratio=0.2, half_angle=60.0)

# Relative tolerance for area shares
AREA_TOL = 1e-9


@pytest.fixture
def ratio_shape() -> RatioShape:
    return RATIO_SHAPE


@pytest.fixture
def cone_shape() -> ConeShape:
    return CONE_SHAPE


@pytest.fixture
def sales_ctx() -> FunnelContext:
    """Five-stage sales funnel laid out with a cone shape around (200, 150)."""
    ctx = FunnelContext(
        values=list(SALES_VALUES),
        labels=list(SALES_LABELS),
        shape=CONE_SHAPE,
        radius=100.0,
        center=(200.0, 150.0),
        name="sales",
    )
    return create_pipeline().run(ctx)
