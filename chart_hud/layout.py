from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from chart_hud.boxes import style_box, style_boxes
from chart_hud.chart import Annotation, BlankA, Chart, GlyphA, LineA, PathA, RectA, TextA, move_chart
from chart_hud.geometry import Point, Rect, pad_rect
from chart_hud.measure import TextMeasure, glyph_count
from chart_hud.options import LegendOptions
from chart_hud.paths import LineI, StartI
from chart_hud.styles import Anchor, RectStyle


def pad_chart(p: float, cs: Sequence[Chart], *, measure: TextMeasure = glyph_count) -> list[Chart]:
    """Append an invisible chart that pads the style box by `p`."""

    box = style_boxes(cs, measure=measure)
    return list(cs) + [Chart(BlankA(), () if box is None else (pad_rect(box, p),))]


def frame_chart(rs: RectStyle, p: float, cs: Sequence[Chart], *, measure: TextMeasure = glyph_count) -> list[Chart]:
    """Put a rectangle behind the charts, `p` outside their style box."""

    box = style_boxes(cs, measure=measure)
    return [Chart(RectA(rs), () if box is None else (pad_rect(box, p),))] + list(cs)


def hori(gap: float, groups: Sequence[Sequence[Chart]], *, measure: TextMeasure = glyph_count) -> list[Chart]:
    """Lay groups out left to right, `gap` apart, keeping their vertical positions."""

    out: list[Chart] = []
    for group in groups:
        acc = style_boxes(out, measure=measure)
        box = style_boxes(group, measure=measure)
        if acc is None or box is None:
            out.extend(group)
            continue
        out.extend(move_chart(Point(acc.x1 + gap - box.x0, 0.0), group))
    return out


def vert(gap: float, groups: Sequence[Sequence[Chart]], *, measure: TextMeasure = glyph_count) -> list[Chart]:
    """Stack groups upwards, `gap` apart, aligned on a common left edge."""

    out: list[Chart] = []
    for group in groups:
        acc = style_boxes(out, measure=measure)
        box = style_boxes(group, measure=measure)
        if acc is None or box is None:
            out.extend(group)
            continue
        out.extend(move_chart(Point(acc.x0 - box.x0, acc.y1 + gap - box.y0), group))
    return out


def stack(
    n: int, gap: float, groups: Sequence[Sequence[Chart]], *, measure: TextMeasure = glyph_count
) -> list[Chart]:
    """Rows of `n` groups packed horizontally, rows then stacked vertically."""

    size = max(1, n)
    rows = [groups[i : i + size] for i in range(0, len(groups), size)]
    return vert(gap, [hori(gap, row, measure=measure) for row in rows], measure=measure)


def legend_entry(lo: LegendOptions, ann: Annotation, text: str) -> tuple[Chart, Chart]:
    """A miniature of the annotation's style plus its label."""

    s = lo.lsize
    line_xys = (Point(0.0, 0.33 * s), Point(2 * s, 0.33 * s))
    if isinstance(ann, RectA):
        sample = Chart(ann, (Rect.of(0.0, s, 0.0, s),))
    elif isinstance(ann, TextA):
        sample = Chart(TextA(replace(ann.style, size=s), ann.texts[:1]), (Point(0.0, 0.0),))
    elif isinstance(ann, GlyphA):
        sample = Chart(GlyphA(replace(ann.style, size=s)), (Point(0.5 * s, 0.33 * s),))
    elif isinstance(ann, LineA):
        sample = Chart(LineA(replace(ann.style, width=ann.style.width / lo.lscale)), line_xys)
    elif isinstance(ann, PathA):
        style = replace(ann.style, border_size=ann.style.border_size / lo.lscale, path_info=(StartI(), LineI()))
        sample = Chart(PathA(style), line_xys)
    else:
        sample = Chart(BlankA(), (Point(0.0, 0.0),))
    label = Chart(TextA(replace(lo.ltext, anchor=Anchor.START), (text,)), (Point(0.0, 0.0),))
    return sample, label


def legend_chart(
    entries: Sequence[tuple[Annotation, str]], lo: LegendOptions, *, measure: TextMeasure = glyph_count
) -> list[Chart]:
    """Assemble a legend: one row per entry, rows stacked upwards from the last entry.

    At most `lo.lmax` entries are kept; `lmax=0` gives an empty legend.
    """

    kept = list(entries[: lo.lmax])
    es = [legend_entry(lo, a, t) for a, t in reversed(kept)]
    text_box = style_boxes((label for _, label in es), measure=measure)
    twidth = 0.0 if text_box is None else text_box.x1

    def gap_width(label: Chart) -> float:
        box = style_box(label, measure=measure)
        return 0.0 if box is None else box.x1

    rows = [hori(lo.vgap + twidth - gap_width(label), [[label], [sample]], measure=measure) for sample, label in es]
    legend = vert(lo.hgap, rows, measure=measure)
    if lo.legend_frame is not None:
        legend = frame_chart(lo.legend_frame, lo.inner_pad, legend, measure=measure)
    return pad_chart(lo.outer_pad, legend, measure=measure)
