"""HUD composition: axes, ticks, titles, canvas and legend around chart data.

A `Hud` threads a `ChartDims` snapshot and the chart list through one layout
step. Steps compose left to right with `+`; each one reads the dimensions
left by the previous steps, adds its own drawables and widens `chart_dim` to
cover them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
import logging
import operator
from typing import Callable, Iterable, Sequence

from chart_hud.adjust import adjust_tick
from chart_hud.boxes import add_chart_box, add_chart_boxes, data_boxes, style_boxes
from chart_hud.chart import BlankA, Chart, GlyphA, LineA, PathA, RectA, TextA, move_chart, scale_chart
from chart_hud.geometry import UNIT_RECT, Point, Rect, fix_rect, project_xy
from chart_hud.layout import legend_chart
from chart_hud.measure import TextMeasure, glyph_count
from chart_hud.options import AxisBar, AxisOptions, HudOptions, LegendOptions, Tick, Title
from chart_hud.paths import project_path_info
from chart_hud.styles import (
    Anchor,
    GlyphStyle,
    LineStyle,
    Place,
    Placement,
    RectStyle,
    TextStyle,
    is_horizontal,
)
from chart_hud.ticks import TickStyle, freeze_ticks, tick_extended, ticks_placed


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartDims:
    """Outer extent so far, plotting area, and data-value extent.

    `measure` sizes text labels for every step run with these dimensions.
    """

    chart_dim: Rect
    canvas_dim: Rect
    data_dim: Rect
    measure: TextMeasure = glyph_count


HudStep = Callable[[ChartDims, list[Chart]], tuple[ChartDims, list[Chart]]]


def _identity_step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
    return dims, cs


@dataclass(frozen=True)
class Hud:
    step: HudStep

    @classmethod
    def identity(cls) -> "Hud":
        return cls(_identity_step)

    def __call__(self, dims: ChartDims, cs: Sequence[Chart]) -> tuple[ChartDims, list[Chart]]:
        return self.step(dims, list(cs))

    def __add__(self, other: "Hud") -> "Hud":
        first = self.step
        second = other.step

        def composed(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
            d1, c1 = first(dims, cs)
            return second(d1, c1)

        return Hud(composed)


def compose(huds: Iterable[Hud]) -> Hud:
    return reduce(operator.add, huds, Hud.identity())


def canvas(style: RectStyle) -> Hud:
    """Background rectangle over the current canvas."""

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        c = Chart(RectA(style), (dims.canvas_dim,))
        new_dims = replace(
            dims,
            canvas_dim=add_chart_box(c, dims.canvas_dim, measure=dims.measure),
            chart_dim=add_chart_box(c, dims.chart_dim, measure=dims.measure),
        )
        return new_dims, [c] + cs

    return Hud(step)


def bar_rect(pl: Placement, b: AxisBar, canvas_dim: Rect, chart_dim: Rect) -> Rect:
    if pl == Place.TOP:
        return Rect.of(canvas_dim.x0, canvas_dim.x1, chart_dim.y1 + b.buff, chart_dim.y1 + b.buff + b.wid)
    if pl == Place.BOTTOM:
        return Rect.of(canvas_dim.x0, canvas_dim.x1, chart_dim.y0 - b.wid - b.buff, chart_dim.y0 - b.buff)
    if pl == Place.LEFT:
        return Rect.of(chart_dim.x0 - b.wid - b.buff, chart_dim.x0 - b.buff, canvas_dim.y0, canvas_dim.y1)
    if pl == Place.RIGHT:
        return Rect.of(chart_dim.x1 + b.buff, chart_dim.x1 + b.buff + b.wid, canvas_dim.y0, canvas_dim.y1)
    x = pl.point.x  # type: ignore[union-attr]
    return Rect.of(x + b.buff, x + b.buff + b.wid, canvas_dim.y0, canvas_dim.y1)


def bar(pl: Placement, b: AxisBar) -> Hud:
    """Axis bar along the canvas, just outside everything drawn so far."""

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        c = Chart(RectA(b.rstyle), (bar_rect(pl, b, dims.canvas_dim, dims.chart_dim),))
        return replace(dims, chart_dim=add_chart_box(c, dims.chart_dim, measure=dims.measure)), [c] + cs

    return Hud(step)


def title_chart(t: Title, r: Rect) -> Chart:
    style = t.style
    if t.anchor in (Anchor.START, Anchor.END):
        style = replace(style, anchor=t.anchor)

    if t.place == Place.RIGHT:
        rot = 90.0
    elif t.place == Place.LEFT:
        rot = -90.0
    else:
        rot = 0.0

    if t.place == Place.TOP:
        pos = Point(r.center.x, r.y1 + t.buff)
    elif t.place == Place.BOTTOM:
        pos = Point(r.center.x, r.y0 - t.buff - 0.5 * t.style.vsize * t.style.size)
    elif t.place == Place.LEFT:
        pos = Point(r.x0 - t.buff, r.center.y)
    elif t.place == Place.RIGHT:
        pos = Point(r.x1 + t.buff, r.center.y)
    else:
        pos = t.place.point  # type: ignore[union-attr]

    half_w = r.width / 2.0
    half_h = r.height / 2.0
    align = Point(0.0, 0.0)
    if t.anchor == Anchor.START:
        if t.place in (Place.TOP, Place.BOTTOM):
            align = Point(-half_w, 0.0)
        elif t.place == Place.LEFT:
            align = Point(0.0, -half_h)
        elif t.place == Place.RIGHT:
            align = Point(0.0, half_h)
    elif t.anchor == Anchor.END:
        if t.place in (Place.TOP, Place.BOTTOM):
            align = Point(half_w, 0.0)
        elif t.place == Place.LEFT:
            align = Point(0.0, half_h)
        elif t.place == Place.RIGHT:
            align = Point(0.0, -half_h)

    style = replace(style, translate=pos + align, rotation=rot)
    return Chart(TextA(style, (t.text,)), (Point(0.0, 0.0),))


def title(t: Title) -> Hud:
    """Title text on one side of everything drawn so far.

    Placement assumes the stock rotations (0 for top/bottom, -90 left, 90
    right); other rotations are not compensated for.
    """

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        c = title_chart(t, dims.chart_dim)
        return replace(dims, chart_dim=add_chart_box(c, dims.chart_dim, measure=dims.measure)), [c] + cs

    return Hud(step)


def place_pos(pl: Placement, b: float, r: Rect) -> Point:
    if pl == Place.TOP:
        return Point(0.0, r.y1 + b)
    if pl == Place.BOTTOM:
        return Point(0.0, r.y0 - b)
    if pl == Place.LEFT:
        return Point(r.x0 - b, 0.0)
    if pl == Place.RIGHT:
        return Point(r.x1 + b, 0.0)
    return pl.point  # type: ignore[union-attr]


def place_rot(pl: Placement) -> float | None:
    return -90.0 if pl in (Place.LEFT, Place.RIGHT) else None


def text_pos(pl: Placement, tt: TextStyle, b: float) -> Point:
    if pl == Place.TOP:
        return Point(0.0, b)
    if pl == Place.BOTTOM:
        return Point(0.0, -b - 0.5 * tt.vsize * tt.size)
    if pl == Place.LEFT:
        return Point(-b, tt.nudge1 * tt.vsize * tt.size)
    if pl == Place.RIGHT:
        return Point(b, tt.nudge1 * tt.vsize * tt.size)
    return pl.point  # type: ignore[union-attr]


def place_origin(pl: Placement, v: float) -> Point:
    return Point(v, 0.0) if is_horizontal(pl) else Point(0.0, v)


def place_text_anchor(pl: Placement, tt: TextStyle) -> TextStyle:
    if pl == Place.LEFT:
        return replace(tt, anchor=Anchor.END)
    if pl == Place.RIGHT:
        return replace(tt, anchor=Anchor.START)
    return tt


def place_grid_lines(pl: Placement, r: Rect, v: float, b: float) -> tuple[Point, Point]:
    if is_horizontal(pl):
        return (Point(v, r.y0 - b), Point(v, r.y1 + b))
    return (Point(r.x0 - b, v), Point(r.x1 + b, v))


def tick_glyph(pl: Placement, gtick: tuple[GlyphStyle, float], ts: TickStyle) -> Hud:
    """Tick marks."""

    g, b = gtick

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        base = place_pos(pl, b, dims.chart_dim)
        positions = ticks_placed(ts, pl, dims.canvas_dim, dims.data_dim).positions
        c = Chart(GlyphA(replace(g, rotation=place_rot(pl))), tuple(base + place_origin(pl, p) for p in positions))
        return replace(dims, chart_dim=add_chart_box(c, dims.chart_dim, measure=dims.measure)), [c] + cs

    return Hud(step)


def tick_text(pl: Placement, ttick: tuple[TextStyle, float], ts: TickStyle) -> Hud:
    """Tick labels."""

    txts, b = ttick

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        tc = ticks_placed(ts, pl, dims.canvas_dim, dims.data_dim)
        base = place_pos(pl, b, dims.chart_dim) + text_pos(pl, txts, b)
        style = place_text_anchor(pl, txts)
        new = [Chart(TextA(style, (lbl,)), (base + place_origin(pl, p),)) for lbl, p in zip(tc.labels, tc.positions)]
        return replace(dims, chart_dim=add_chart_boxes(new, dims.chart_dim, measure=dims.measure)), new + cs

    return Hud(step)


def tick_line(pl: Placement, ltick: tuple[LineStyle, float], ts: TickStyle) -> Hud:
    """Grid lines across the canvas."""

    ls, b = ltick

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        positions = ticks_placed(ts, pl, dims.canvas_dim, dims.data_dim).positions
        new = [Chart(LineA(ls), place_grid_lines(pl, dims.canvas_dim, p, b)) for p in positions]
        return replace(dims, chart_dim=add_chart_boxes(new, dims.chart_dim, measure=dims.measure)), new + cs

    return Hud(step)


def extend_data(pl: Placement, t: Tick) -> Hud:
    """Widen the data dimension to cover the tick values; draws nothing."""

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        extended = tick_extended(pl, t.tstyle, dims.data_dim)
        if extended != dims.data_dim:
            LOGGER.debug("data dimension extended by %s ticks: %s -> %s", pl.value, dims.data_dim, extended)
        return replace(dims, data_dim=extended), cs

    return Hud(step)


def tick(pl: Placement, t: Tick) -> Hud:
    """Tick marks, labels and grid lines (each optional), then the data extension."""

    parts = [
        tick_glyph(pl, t.gtick, t.tstyle) if t.gtick is not None else Hud.identity(),
        tick_text(pl, t.ttick, t.tstyle) if t.ttick is not None else Hud.identity(),
        tick_line(pl, t.ltick, t.tstyle) if t.ltick is not None else Hud.identity(),
        extend_data(pl, t),
    ]
    return compose(parts)


def adjusted_tick_hud(ac: AxisOptions) -> Hud:
    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        t = ac.atick
        if ac.adjust is not None:
            t = adjust_tick(ac.adjust, dims.chart_dim, dims.data_dim, ac.place, t, measure=dims.measure)
        return tick(ac.place, t).step(dims, cs)

    return Hud(step)


def legend_offset(pl: Placement, r: Rect, legend_box: Rect) -> Point:
    if pl == Place.TOP:
        return Point(r.center.x - legend_box.center.x, r.y1 - legend_box.y0)
    if pl == Place.BOTTOM:
        return Point(r.center.x - legend_box.center.x, r.y0 - legend_box.y1)
    if pl == Place.LEFT:
        return Point(r.x0 - legend_box.x1, r.center.y - legend_box.center.y)
    if pl == Place.RIGHT:
        return Point(r.x1 - legend_box.x0, r.center.y - legend_box.center.y)
    return pl.point - legend_box.center  # type: ignore[union-attr]


def legend_hud(lo: LegendOptions, legend: Sequence[Chart]) -> Hud:
    """Scale a ready-made legend and attach it beside the chart."""

    def step(dims: ChartDims, cs: list[Chart]) -> tuple[ChartDims, list[Chart]]:
        scaled = [scale_chart(lo.lscale, c) for c in legend]
        box = style_boxes(scaled, measure=dims.measure)
        moved = scaled if box is None else move_chart(legend_offset(lo.lplace, dims.chart_dim, box), scaled)
        out = cs + moved
        return replace(dims, chart_dim=style_boxes(out, measure=dims.measure) or UNIT_RECT), out

    return Hud(step)


def project_xys_with(new: Rect, old: Rect, cs: Sequence[Chart]) -> list[Chart]:
    """Carry chart coordinates from the `old` space into the `new` one."""

    out: list[Chart] = []
    for c in cs:
        ann = c.annotation
        if isinstance(ann, PathA) and ann.style.path_info and new != old:
            info = tuple(project_path_info(i, old, new) for i in ann.style.path_info)
            ann = PathA(replace(ann.style, path_info=info))
        out.append(Chart(ann, tuple(project_xy(xy, old, new) for xy in c.xys)))
    return out


def project_xys(new: Rect, cs: Sequence[Chart]) -> list[Chart]:
    if not cs:
        return []
    return project_xys_with(new, data_boxes(cs) or UNIT_RECT, cs)


def run_hud_with(
    canvas_rect: Rect,
    data_rect: Rect,
    huds: Sequence[Hud],
    cs: Sequence[Chart],
    *,
    measure: TextMeasure = glyph_count,
) -> list[Chart]:
    """Project charts from `data_rect` onto `canvas_rect` and run the huds over them.

    `measure` gives the width of label text in glyph units; pass
    `pillow_measure()` for real font metrics.
    """

    projected = project_xys_with(canvas_rect, data_rect, cs)
    box = style_boxes(projected, measure=measure) or UNIT_RECT
    dims = ChartDims(chart_dim=box, canvas_dim=box, data_dim=data_rect, measure=measure)
    final, out = compose(huds)(dims, projected)
    LOGGER.debug("hud run: %d huds, %d -> %d charts, chart_dim %s", len(huds), len(cs), len(out), final.chart_dim)
    return out


def run_hud(
    canvas_rect: Rect, huds: Sequence[Hud], cs: Sequence[Chart], *, measure: TextMeasure = glyph_count
) -> list[Chart]:
    return run_hud_with(canvas_rect, fix_rect(data_boxes(cs)), huds, cs, measure=measure)


def make_hud(
    data_rect: Rect, cfg: HudOptions, *, measure: TextMeasure = glyph_count
) -> tuple[list[Hud], list[Chart]]:
    """Build huds from options.

    Rounded ticks are frozen against `data_rect` first. The returned blank
    chart carries any data extension they imply, so it should be run along
    with the charts.
    """

    frozen = [freeze_ticks(a.place, data_rect, a.atick.tstyle) for a in cfg.axes]
    axes = [replace(a, atick=replace(a.atick, tstyle=ts)) for a, (ts, _) in zip(cfg.axes, frozen)]
    extension = Chart(BlankA(), tuple(r for _, r in frozen if r is not None))

    axis_huds = [(bar(a.place, a.abar) if a.abar is not None else Hud.identity()) + adjusted_tick_hud(a) for a in axes]
    can = canvas(cfg.canvas) if cfg.canvas is not None else Hud.identity()
    titles = [title(t) for t in cfg.titles]
    if cfg.legend is not None:
        lo, entries = cfg.legend
        leg = legend_hud(lo, legend_chart(entries, lo, measure=measure))
    else:
        leg = Hud.identity()
    return axis_huds + [can] + titles + [leg], [extension]


def hud_charts(
    canvas_rect: Rect, cfg: HudOptions, cs: Sequence[Chart], *, measure: TextMeasure = glyph_count
) -> list[Chart]:
    """Decorate charts with the huds described by `cfg`, in one call."""

    huds, extension = make_hud(fix_rect(data_boxes(cs)), cfg, measure=measure)
    return run_hud(canvas_rect, huds, extension + list(cs), measure=measure)
