"""Tests for the funnel geometry engine."""

from __future__ import annotations

import math

import numpy as np
import pytest

from funnelarea.engine.context import SliceData
from funnelarea.engine.errors import DegenerateChart, InvalidParameter
from funnelarea.engine.geometry import compute_boundary_points, compute_slice_geometry
from funnelarea.engine.shape import ConeShape, RatioShape
from tests.conftest import AREA_TOL, CONE_SHAPE, RATIO_SHAPE, SALES_VALUES, THREE_STAGE_VALUES


def _slices(weights, hidden=()):
    return [SliceData(index=i, weight=w, hidden=i in hidden) for i, w in enumerate(weights)]


def _by_stack(slices):
    return sorted((s for s in slices if s.corners is not None), key=lambda s: s.stack_index)


def _area_shares(slices):
    areas = [s.area for s in slices]
    total = sum(areas)
    return [a / total for a in areas]


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------

class TestThreeStage:
    def test_three_slices_produced(self):
        out = compute_slice_geometry(_slices(THREE_STAGE_VALUES), RATIO_SHAPE, 100.0)
        assert len(out) == 3
        assert all(s.corners is not None for s in out)

    def test_widths_increase_outward(self):
        out = compute_slice_geometry(_slices(THREE_STAGE_VALUES), RATIO_SHAPE, 100.0)
        stacked = _by_stack(out)
        widths = [s.corners.top_half_width for s in stacked]
        assert widths == sorted(widths)
        assert len(set(widths)) == 3
        for s in stacked:
            assert s.corners.bottom_half_width < s.corners.top_half_width

    def test_area_ratios(self):
        out = compute_slice_geometry(_slices(THREE_STAGE_VALUES), RATIO_SHAPE, 100.0)
        assert _area_shares(out) == pytest.approx([0.25, 0.5, 0.25], abs=AREA_TOL)

    def test_outermost_edge_matches_radius(self):
        out = compute_slice_geometry(_slices(THREE_STAGE_VALUES), RATIO_SHAPE, 100.0)
        outer = _by_stack(out)[-1]
        assert outer.corners.tr[0] == pytest.approx(100.0)
        # Source order: the first slice is the outermost one
        assert outer.index == 0

    def test_ratio_shape_height(self):
        points = compute_boundary_points(THREE_STAGE_VALUES, RATIO_SHAPE, 100.0)
        height = points[:, 1].max() - points[:, 1].min()
        assert height == pytest.approx(2 * 100.0 * RATIO_SHAPE.height_ratio)


class TestSingleSlice:
    def test_one_trapezoid(self):
        shape = ConeShape(base_ratio=0.2)
        out = compute_slice_geometry(_slices([5]), shape, 100.0)
        assert len(out) == 1
        c = out[0].corners
        # Apex-side edge narrower than the outer edge
        assert c.bottom_half_width < c.top_half_width
        assert c.top_half_width == pytest.approx(100.0)

    def test_base_ratio_sets_apex_width(self):
        shape = RatioShape(base_ratio=0.2, height_ratio=0.5)
        out = compute_slice_geometry(_slices([5]), shape, 100.0)
        c = out[0].corners
        assert c.bottom_half_width / c.top_half_width == pytest.approx(0.2)

    def test_zero_base_ratio_gives_triangle(self):
        out = compute_slice_geometry(_slices([5]), ConeShape(base_ratio=0.0), 100.0)
        c = out[0].corners
        assert c.bl == c.br
        assert c.br[0] == 0.0


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("shape", [CONE_SHAPE, RATIO_SHAPE], ids=["cone", "ratio"])
class TestInvariants:
    def test_area_proportionality(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        total = sum(SALES_VALUES)
        assert _area_shares(out) == pytest.approx([v / total for v in SALES_VALUES], abs=AREA_TOL)

    def test_stack_continuity_is_exact(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        stacked = _by_stack(out)
        for inner, outer in zip(stacked, stacked[1:]):
            assert outer.corners.bl == inner.corners.tl
            assert outer.corners.br == inner.corners.tr

    def test_symmetry_is_exact(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        for s in out:
            c = s.corners
            assert c.tl[0] == -c.tr[0]
            assert c.bl[0] == -c.br[0]
            assert c.tl[1] == c.tr[1]
            assert c.bl[1] == c.br[1]

    def test_vertically_centered(self, shape):
        points = compute_boundary_points(SALES_VALUES, shape, 80.0)
        assert (points[:, 1].max() + points[:, 1].min()) / 2 == pytest.approx(0.0, abs=1e-9)

    def test_scale_invariance(self, shape):
        small = compute_slice_geometry(_slices(SALES_VALUES), shape, 50.0)
        big = compute_slice_geometry(_slices(SALES_VALUES), shape, 100.0)
        for a, b in zip(small, big):
            for p, q in zip(a.corners.ring(), b.corners.ring()):
                assert q[0] == pytest.approx(2 * p[0])
                assert q[1] == pytest.approx(2 * p[1])

    def test_mid_right_is_right_edge_midpoint(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        for s in out:
            tr, br = s.corners.tr, s.corners.br
            assert s.mid_right == pytest.approx(((tr[0] + br[0]) / 2, (tr[1] + br[1]) / 2))

    def test_last_slice_touches_apex(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        assert out[-1].stack_index == 0
        assert out[0].stack_index == len(SALES_VALUES) - 1
        points = compute_boundary_points(SALES_VALUES, shape, 80.0)
        assert out[-1].corners.br == (float(points[0, 0]), float(points[0, 1]))

    def test_outer_edge_is_up(self, shape):
        out = compute_slice_geometry(_slices(SALES_VALUES), shape, 80.0)
        for s in out:
            assert s.corners.tr[1] < s.corners.br[1]


def test_cone_preserves_side_slope():
    shape = ConeShape(base_ratio=0.3, half_angle=40.0)
    out = compute_slice_geometry(_slices(SALES_VALUES), shape, 120.0)
    expected = math.tan(math.pi * 40.0 / 360)
    for s in out:
        c = s.corners
        slope = (c.tr[0] - c.br[0]) / (c.br[1] - c.tr[1])
        assert slope == pytest.approx(expected)


def test_boundary_points_shape():
    points = compute_boundary_points(SALES_VALUES, CONE_SHAPE, 100.0)
    assert points.shape == (len(SALES_VALUES) + 1, 2)
    assert np.all(np.diff(points[:, 0]) > 0)


# ---------------------------------------------------------------------------
# Hidden slices, degenerate input, rejection
# ---------------------------------------------------------------------------

def test_hidden_slices_skipped():
    slices = _slices([3, 5, 2], hidden={1})
    out = compute_slice_geometry(slices, RATIO_SHAPE, 100.0)
    assert [s.index for s in out] == [0, 2]
    assert slices[1].corners is None
    assert slices[1].mid_right is None
    assert _area_shares(out) == pytest.approx([0.6, 0.4], abs=AREA_TOL)


def test_hidden_slices_match_dense_sequence():
    with_hidden = compute_slice_geometry(_slices([3, 5, 2], hidden={1}), CONE_SHAPE, 100.0)
    dense = compute_slice_geometry(_slices([3, 2]), CONE_SHAPE, 100.0)
    assert [s.corners for s in with_hidden] == [s.corners for s in dense]


@pytest.mark.parametrize("bad", [-4.0, -0.5, float("nan"), float("inf")])
def test_bad_weight_excluded_others_laid_out(bad):
    slices = _slices([5.0, bad, 1.0])
    out = compute_slice_geometry(slices, CONE_SHAPE, 100.0)
    assert [s.index for s in out] == [0, 2]
    assert slices[1].corners is None
    assert _area_shares(out) == pytest.approx([5 / 6, 1 / 6], abs=AREA_TOL)
    dense = compute_slice_geometry(_slices([5.0, 1.0]), CONE_SHAPE, 100.0)
    assert [s.corners for s in out] == [s.corners for s in dense]


def test_empty_input_is_degenerate():
    assert compute_slice_geometry([], CONE_SHAPE, 100.0) == []


def test_all_hidden_is_degenerate():
    slices = _slices([1, 2], hidden={0, 1})
    assert compute_slice_geometry(slices, CONE_SHAPE, 100.0) == []


def test_zero_total_is_degenerate_not_nan():
    slices = _slices([0.0, 0.0])
    assert compute_slice_geometry(slices, RATIO_SHAPE, 100.0) == []
    assert all(s.corners is None for s in slices)


def test_boundary_points_raise_on_degenerate():
    with pytest.raises(DegenerateChart):
        compute_boundary_points([], CONE_SHAPE, 100.0)
    with pytest.raises(DegenerateChart):
        compute_boundary_points([0.0], CONE_SHAPE, 100.0)


@pytest.mark.parametrize(
    "shape",
    [
        ConeShape(base_ratio=1.0),
        ConeShape(base_ratio=-0.1),
        ConeShape(base_ratio=0.2, half_angle=10.0),
        ConeShape(base_ratio=0.2, half_angle=121.0),
        RatioShape(base_ratio=0.9995),
        RatioShape(base_ratio=0.2, height_ratio=0.0),
        RatioShape(base_ratio=0.2, height_ratio=1.5),
        RatioShape(base_ratio=float("nan")),
    ],
)
def test_invalid_shape_rejected_before_geometry(shape):
    slices = _slices(THREE_STAGE_VALUES)
    with pytest.raises(InvalidParameter):
        compute_slice_geometry(slices, shape, 100.0)
    assert all(s.corners is None for s in slices)


def test_cone_accepts_base_ratio_just_below_one():
    out = compute_slice_geometry(_slices([1, 1]), ConeShape(base_ratio=0.9995), 100.0)
    assert len(out) == 2
    assert all(math.isfinite(v) for s in out for p in s.corners.ring() for v in p)


@pytest.mark.parametrize("radius", [0.0, -5.0, float("inf")])
def test_invalid_radius_rejected(radius):
    with pytest.raises(InvalidParameter):
        compute_slice_geometry(_slices([1]), CONE_SHAPE, radius)


def test_relayout_clears_stale_corners():
    slices = _slices([1, 2, 3])
    compute_slice_geometry(slices, CONE_SHAPE, 100.0)
    slices[1].hidden = True
    compute_slice_geometry(slices, CONE_SHAPE, 100.0)
    assert slices[1].corners is None
    assert slices[1].stack_index is None
