import math

import pytest

from ruleta.graphics.surface import RecordingSurface
from ruleta.wheel.prizes import PrizeSet
from ruleta.wheel.renderer import WheelRenderer, WheelStyle, segment_under_pointer
from ruleta.wheel.resolver import resolve_winner


@pytest.fixture
def renderer():
    return WheelRenderer()


def test_draw_order(renderer, surface, prizes):
    renderer.render(surface, prizes, 0.0)
    ops = [c.op for c in surface.commands]

    assert ops[0] == "clear"
    assert ops[-3:] == ["fill_circle", "fill_circle", "fill_polygon"]
    per_slice = ops[1:-3]
    assert per_slice == ["fill_sector", "save", "draw_text", "restore"] * len(prizes)


def test_sectors_use_prize_colors_and_cover_full_turn(renderer, surface, prizes):
    geometry = renderer.render(surface, prizes, 1.1)
    sectors = surface.ops("fill_sector")

    assert [s.args["color"] for s in sectors] == [p.color for p in prizes]
    assert sum(s.args["end"] - s.args["start"] for s in sectors) == pytest.approx(2 * math.pi)
    assert sectors[0].args["start"] == pytest.approx(1.1)
    for s in sectors:
        assert s.args["outer_radius"] == pytest.approx(geometry.outer_radius)
        assert s.args["inner_radius"] == pytest.approx(geometry.inner_radius)


def test_labels_are_radial_and_clamped(renderer, surface, prizes):
    geometry = renderer.render(surface, prizes, 0.25)
    labels = surface.ops("draw_text")
    sectors = surface.ops("fill_sector")

    assert [t.args["text"] for t in labels] == prizes.texts
    for text, sector in zip(labels, sectors):
        mid = (sector.args["start"] + sector.args["end"]) / 2
        assert text.args["max_width"] == pytest.approx(geometry.label_max_width)
        assert text.args["font_size"] == geometry.font_size(len(prizes))
        assert text.args["shadow"] == WheelStyle().label_shadow
        assert text.args["origin"] == pytest.approx(geometry.label_anchor(mid))
        assert math.cos(text.args["angle"]) == pytest.approx(math.cos(mid))
        assert math.sin(text.args["angle"]) == pytest.approx(math.sin(mid))


def test_transform_balanced_after_render(renderer, surface, prizes):
    renderer.render(surface, prizes, 2.0)
    assert surface.transform.depth == 0
    assert surface.transform.angle == pytest.approx(0.0)


def test_pointer_and_hub_do_not_rotate(renderer, prizes):
    first, second = RecordingSurface(500, 500), RecordingSurface(500, 500)
    renderer.render(first, prizes, 0.0)
    renderer.render(second, prizes, 4.321)

    assert first.ops("fill_polygon")[0].args == second.ops("fill_polygon")[0].args
    assert first.ops("fill_circle")[0].args == second.ops("fill_circle")[0].args

    style = WheelStyle()
    ring, dot = first.ops("fill_circle")
    assert ring.args["color"] == style.hub_color
    assert dot.args["color"] == style.center_dot_color
    assert ring.args["radius"] > dot.args["radius"]


def test_render_is_deterministic(renderer, prizes):
    surface = RecordingSurface(300, 300)
    renderer.render(surface, prizes, 0.77)
    first = list(surface.commands)
    renderer.render(surface, prizes, 0.77)

    assert surface.commands == first
    assert surface.frames == 2


def test_font_shrinks_with_many_segments(renderer, surface):
    many = PrizeSet.from_labels([str(i) for i in range(21)])
    few = PrizeSet.from_labels([str(i) for i in range(12)])

    renderer.render(surface, many, 0.0)
    small = surface.ops("draw_text")[0].args["font_size"]
    renderer.render(surface, few, 0.0)
    large = surface.ops("draw_text")[0].args["font_size"]

    assert small < large


@pytest.mark.parametrize("count", [2, 3, 7, 8, 12, 21])
def test_drawn_slice_under_pointer_matches_winner(renderer, surface, count):
    prize_set = PrizeSet.from_labels([f"P{i}" for i in range(count)])

    for step in range(60):
        rotation = step * 0.417 + 0.01
        geometry = renderer.render(surface, prize_set, rotation)
        assert segment_under_pointer(geometry, rotation, count) == resolve_winner(rotation, count)
