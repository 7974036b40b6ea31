"""Layout pipeline: runs the layout stages for one chart, or many independent ones."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import numpy as np

from funnelarea.engine.config import LayoutConfig
from funnelarea.engine.context import FunnelContext
from funnelarea.engine.geometry import compute_slice_geometry
from funnelarea.engine.interaction import assign_quadrants
from funnelarea.engine.shape import validate_radius, validate_shape
from funnelarea.engine.slice_model import build_slices

logger = logging.getLogger(__name__)


@dataclass
class StageSpec:
    name: str
    fn: Callable[[FunnelContext, LayoutConfig], None]
    description: str = ""


def validate_parameters(ctx: FunnelContext, config: LayoutConfig) -> None:
    validate_shape(ctx.shape, config)
    validate_radius(ctx.radius)


def build_slice_model(ctx: FunnelContext, config: LayoutConfig) -> None:
    model = build_slices(
        ctx.values,
        labels=ctx.labels,
        text=ctx.text,
        colors=ctx.colors,
        hidden_labels=ctx.hidden_labels,
        label0=ctx.label0,
        dlabel=ctx.dlabel,
    )
    ctx.slices = model.slices
    ctx.v_total = model.v_total
    ctx.warnings.extend(model.warnings)


def set_coords(ctx: FunnelContext, config: LayoutConfig) -> None:
    visible = compute_slice_geometry(ctx.slices, ctx.shape, ctx.radius, ctx.v_total, config)
    if not visible:
        ctx.degenerate = True
        ctx.boundary_points = None
        ctx.warnings.append("No visible slices with a positive total; nothing to draw")
        return

    ctx.degenerate = False
    stacked = sorted(visible, key=lambda s: s.stack_index)
    points = [stacked[0].corners.br] + [s.corners.tr for s in stacked]
    ctx.boundary_points = np.array(points, dtype=np.float64)


def bucket_quadrants(ctx: FunnelContext, config: LayoutConfig) -> None:
    ctx.quadrants = assign_quadrants(ctx.slices)


DEFAULT_STAGES = [
    StageSpec("validate", validate_parameters, "Reject out-of-range shape and radius"),
    StageSpec("build_slices", build_slice_model, "Filter records, totals, percentages"),
    StageSpec("set_coords", set_coords, "Trapezoid corners for every visible slice"),
    StageSpec("quadrants", bucket_quadrants, "Bucket slices by anchor quadrant"),
]


class LayoutPipeline:
    """Runs the layout stages in order on a FunnelContext."""

    def __init__(
        self,
        stages: list[StageSpec] | None = None,
        config: LayoutConfig | None = None,
    ) -> None:
        self.stages = stages if stages is not None else list(DEFAULT_STAGES)
        self.config = config or LayoutConfig()

    def run(self, ctx: FunnelContext) -> FunnelContext:
        """Run every stage. A failing stage is recorded in ctx.errors and re-raised.

        Results of any earlier pass on ``ctx`` are discarded first.
        """
        ctx.reset()
        start = time.perf_counter()

        for stage in self.stages:
            t0 = time.perf_counter()
            try:
                stage.fn(ctx, self.config)
            except Exception as e:
                ctx.errors[stage.name] = str(e)
                logger.warning("  %s FAILED: %s", stage.name, e)
                raise
            ctx.completed_stages.add(stage.name)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.2fms", stage.name, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Funnel layout complete: %d slices (%d visible) in %.1fms",
            len(ctx.slices),
            len(ctx.visible_slices),
            total,
        )
        return ctx

    def run_figure(self, charts: Iterable[FunnelContext]) -> list[FunnelContext]:
        """Lay out independent charts. One chart failing never stops the others."""
        results: list[FunnelContext] = []
        for ctx in charts:
            try:
                self.run(ctx)
            except Exception as e:
                logger.warning("Chart %r (curve %d) skipped: %s", ctx.name, ctx.curve_number, e)
            results.append(ctx)
        return results


def create_pipeline(config: LayoutConfig | None = None) -> LayoutPipeline:
    """Factory function for creating a pipeline instance."""
    return LayoutPipeline(config=config)


def layout_funnel(values, config: LayoutConfig | None = None, **kwargs) -> FunnelContext:
    """One-call layout: build a context from trace fields and run the pipeline."""
    ctx = FunnelContext(values=list(values), **kwargs)
    return create_pipeline(config).run(ctx)
