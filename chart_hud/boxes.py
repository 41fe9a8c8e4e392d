from __future__ import annotations

from typing import Iterable

from chart_hud.chart import BlankA, Chart, GlyphA, LineA, PathA, RectA, TextA
from chart_hud.geometry import (
    UNIT_RECT,
    Point,
    Rect,
    add_to_rect,
    fold_rects,
    move_rect,
    pad_rect,
    rotate_rect,
    scale_rect,
    to_point,
    to_rect,
)
from chart_hud.measure import TextMeasure, glyph_count
from chart_hud.paths import path_boxes
from chart_hud.styles import (
    Anchor,
    CircleGlyph,
    EllipseGlyph,
    GlyphStyle,
    HLineGlyph,
    PathGlyph,
    RectRoundedGlyph,
    RectSharpGlyph,
    SquareGlyph,
    TextStyle,
    TriangleGlyph,
    VLineGlyph,
)


def data_box(c: Chart) -> Rect | None:
    """Extent of a chart's coordinates, ignoring style."""

    if isinstance(c.annotation, PathA) and c.annotation.style.path_info:
        return path_boxes(list(zip(c.annotation.style.path_info, (to_point(xy) for xy in c.xys))))
    return fold_rects(to_rect(xy) for xy in c.xys)


def data_boxes(cs: Iterable[Chart]) -> Rect | None:
    return fold_rects(r for r in (data_box(c) for c in cs) if r is not None)


def style_box_text(style: TextStyle, text: str, p: Point, *, measure: TextMeasure = glyph_count) -> Rect:
    """Extent of a text label anchored at `p`."""

    s = style.size
    w = s * style.hsize * measure(text)
    h = s * style.vsize
    n1 = s * style.nudge1
    if style.anchor == Anchor.START:
        bias = 0.5
    elif style.anchor == Anchor.END:
        bias = -0.5
    else:
        bias = 0.0
    flat = Rect.of(-w / 2.0 + w * bias, w / 2.0 + w * bias, -h / 2.0 - n1, h / 2.0 - n1)
    if style.rotation is not None:
        flat = rotate_rect(style.rotation, flat)
    offset = p if style.translate is None else p + style.translate
    return move_rect(flat, offset)


def style_box_glyph(style: GlyphStyle) -> Rect:
    """Extent of a glyph centred on the origin."""

    sz = style.size
    shape = style.shape
    if isinstance(shape, (CircleGlyph, SquareGlyph)):
        box = scale_rect(UNIT_RECT, sz)
    elif isinstance(shape, (EllipseGlyph, RectSharpGlyph, RectRoundedGlyph)):
        box = scale_rect(UNIT_RECT, sz, shape.ratio * sz)
    elif isinstance(shape, VLineGlyph):
        box = scale_rect(UNIT_RECT, style.border_size * sz, sz)
    elif isinstance(shape, HLineGlyph):
        box = scale_rect(UNIT_RECT, sz, style.border_size * sz)
    elif isinstance(shape, TriangleGlyph):
        box = scale_rect(fold_rects(Rect.from_point(p) for p in (shape.a, shape.b, shape.c)), sz)  # type: ignore[arg-type]
    elif isinstance(shape, PathGlyph):
        box = scale_rect(shape.box, sz)
    else:
        raise TypeError(f"unsupported glyph shape: {shape!r}")
    box = pad_rect(box, 0.5 * style.border_size)
    if style.rotation is not None:
        box = rotate_rect(style.rotation, box)
    return box if style.translate is None else move_rect(box, style.translate)


def style_box(c: Chart, *, measure: TextMeasure = glyph_count) -> Rect | None:
    """Extent of a chart including stroke widths, glyph sizes and text."""

    ann = c.annotation
    if isinstance(ann, TextA):
        return fold_rects(
            style_box_text(ann.style, t, to_point(xy), measure=measure) for t, xy in zip(ann.texts, c.xys)
        )
    if isinstance(ann, GlyphA):
        g = style_box_glyph(ann.style)
        return fold_rects(move_rect(g, to_point(xy)) for xy in c.xys)
    if isinstance(ann, RectA):
        return fold_rects(pad_rect(to_rect(xy), 0.5 * ann.style.border_size) for xy in c.xys)
    if isinstance(ann, LineA):
        return fold_rects(pad_rect(to_rect(xy), 0.5 * ann.style.width) for xy in c.xys)
    if isinstance(ann, PathA):
        box = data_box(c)
        return None if box is None else pad_rect(box, 0.5 * ann.style.border_size)
    if isinstance(ann, BlankA):
        return fold_rects(to_rect(xy) for xy in c.xys)
    raise TypeError(f"unsupported annotation: {ann!r}")


def style_boxes(cs: Iterable[Chart], *, measure: TextMeasure = glyph_count) -> Rect | None:
    return fold_rects(r for r in (style_box(c, measure=measure) for c in cs) if r is not None)


def add_chart_box(c: Chart, r: Rect, *, measure: TextMeasure = glyph_count) -> Rect:
    return add_to_rect(r, style_box(c, measure=measure))


def add_chart_boxes(cs: Iterable[Chart], r: Rect, *, measure: TextMeasure = glyph_count) -> Rect:
    return add_to_rect(r, style_boxes(cs, measure=measure))
