import math

import pytest

from ruleta.wheel.geometry import POINTER_ANGLE, Slice, WheelGeometry, arc_width, font_divisor


@pytest.fixture
def geometry():
    # The proportions were tuned on this size: outer radius 240
    return WheelGeometry.for_size(500, 500)


def test_measures_scale_from_outer_radius(geometry):
    assert geometry.center == (250, 250)
    assert geometry.outer_radius == pytest.approx(240)
    assert geometry.inner_radius == pytest.approx(50)
    assert geometry.label_radius == pytest.approx(65)
    assert geometry.label_max_width == pytest.approx(160)
    assert geometry.hub_ring_radius == pytest.approx(45)
    assert geometry.center_dot_radius == pytest.approx(15)


def test_non_square_surface_uses_smaller_side():
    geometry = WheelGeometry.for_size(800, 500)
    assert geometry.center == (400, 250)
    assert geometry.outer_radius == pytest.approx(240)


def test_pointer_triangle(geometry):
    left, right, tip = geometry.pointer_polygon()
    assert left == pytest.approx((240, 0))
    assert right == pytest.approx((260, 0))
    assert tip == pytest.approx((250, 15))


@pytest.mark.parametrize(
    "count, size",
    [(2, 24), (12, 24), (13, 17), (20, 17), (21, 13), (60, 13)],
)
def test_font_tiers(geometry, count, size):
    assert geometry.font_size(count) == size


def test_font_divisor_breakpoints():
    assert font_divisor(12) == 10
    assert font_divisor(13) == 14
    assert font_divisor(20) == 14
    assert font_divisor(21) == 18


def test_font_size_never_below_one():
    tiny = WheelGeometry.for_size(4, 4)
    assert tiny.font_size(50) == 1


@pytest.mark.parametrize("count", [2, 3, 7, 8, 25])
def test_slices_cover_full_turn(geometry, count):
    slices = geometry.slices(0.4, count)

    assert [s.index for s in slices] == list(range(count))
    assert sum(s.end - s.start for s in slices) == pytest.approx(2 * math.pi)
    assert slices[0].start == pytest.approx(0.4)
    assert slices[-1].end == pytest.approx(0.4 + 2 * math.pi)


def test_slice_contains_wraps_around():
    arc = arc_width(4)
    slice_ = Slice(0, 10 * math.pi, 10 * math.pi + arc)

    assert slice_.contains(0.1)
    assert slice_.contains(2 * math.pi + 0.1)
    assert not slice_.contains(-0.1)
    assert slice_.mid == pytest.approx(10 * math.pi + arc / 2)


def test_exactly_one_slice_under_pointer(geometry):
    for step in range(100):
        slices = geometry.slices(step * 0.173, 7)
        assert sum(s.contains(POINTER_ANGLE) for s in slices) == 1


def test_label_anchor_on_radius(geometry):
    x, y = geometry.label_anchor(0.0)
    assert (x, y) == pytest.approx((250 + 65, 250))

    x, y = geometry.label_anchor(math.pi / 2)
    assert (x, y) == pytest.approx((250, 250 + 65))
