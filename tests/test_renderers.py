import math

import pytest

from core.economics import AffineCurve
from diagrams.base import DiagramModel
from formatting.renderers import (
    DASH_PATTERN,
    format_value,
    polygon_area,
    round_label,
)


def test_curve_is_truncated_not_clamped(ctx) -> None:
    pieces = ctx.curves.segments(AffineCurve(250, -1.5))
    assert len(pieces) == 1
    # Last in-range sample is q = 166 (price 1); q = 168 goes negative
    last_x, last_y = pieces[0][-1]
    assert last_x == pytest.approx(ctx.mapper.to_pixel_x(166))
    assert last_y == pytest.approx(ctx.mapper.to_pixel_y(1))


def test_curve_entering_from_above_starts_at_edge(ctx) -> None:
    pieces = ctx.curves.segments(AffineCurve(400, -2))
    assert len(pieces) == 1
    assert pieces[0][0] == ctx.mapper.to_pixel(50, 300)


def test_out_of_range_run_splits_curve(ctx, surface) -> None:
    def spike(quantity: float) -> float:
        return 500 if 50 <= quantity <= 100 else 100

    pieces = ctx.curves.segments(spike)
    assert [len(piece) for piece in pieces] == [25, 50]

    ctx.curves.draw_curve(spike, "#000000")
    assert len(surface.of_kind("stroke")) == 2


def test_non_finite_curve_draws_nothing(ctx, surface) -> None:
    ctx.curves.draw_curve(lambda q: math.nan, "#000000")
    assert surface.ops == []


def test_region_with_two_vertices_is_a_no_op(ctx, surface) -> None:
    ctx.regions.fill_region([(0, 0), (10, 10)], "#f39c124d")
    assert surface.ops == []


def test_region_maps_vertices(ctx, surface) -> None:
    ctx.regions.fill_region([(0, 0), (100, 0), (100, 150)], "#f39c124d", "#f39c12")
    (op,) = surface.of_kind("fill")
    assert op.points[2] == ctx.mapper.to_pixel(100, 150)
    assert op.style["border"] == "#f39c12"


def test_dashed_guides_span_plot_area(ctx, surface) -> None:
    ctx.annotations.draw_dashed_hline(130, "#000000")
    ctx.annotations.draw_dashed_vline(80, "#000000")
    hline, vline = surface.of_kind("stroke")
    assert [x for x, _ in hline.points] == [40, 760]
    assert [y for _, y in vline.points] == [40, 460]
    assert hline.style["dash"] == DASH_PATTERN


def test_label_offset_from_anchor(ctx, surface) -> None:
    ctx.annotations.label_at(80, 130, "E", "#000000")
    (op,) = surface.of_kind("text")
    assert op.points[0] == pytest.approx((338, 268))
    assert op.style["align"] == "left"


def test_price_line_label_sits_at_left_edge(ctx, surface) -> None:
    DiagramModel.label_price_line(ctx, 150, "Price: 150", "#000000")
    (op,) = surface.of_kind("text")
    assert op.points[0] == pytest.approx((40, ctx.mapper.to_pixel_y(150) - 10))


def test_axes_draw_ticks_and_titles(ctx, surface) -> None:
    ctx.begin("Quantity", "Price/Cost")
    texts = surface.texts()
    assert surface.ops[0].kind == "clear"
    assert "Price/Cost" in texts
    assert ["0", "60", "120", "180", "240", "300"] == texts[2:8]
    assert ["0", "40", "80", "120", "160", "200"] == texts[8:14]


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, "3"), (-2.5, "-2"), (129.996, "130"), (math.nan, "NaN"), (-math.inf, "-Infinity")],
)
def test_round_label(value: float, expected: str) -> None:
    assert round_label(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(130.0, "130"), (80.5, "80.5"), (-1.5, "-1.5"), (math.inf, "Infinity"), (math.nan, "NaN")],
)
def test_format_value(value: float, expected: str) -> None:
    assert format_value(value) == expected


def test_polygon_area() -> None:
    assert polygon_area([(0, 250), (80, 250), (80, 130)]) == pytest.approx(4800)
    assert polygon_area([(0, 0), (1, 1)]) == 0.0
