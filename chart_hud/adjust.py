from __future__ import annotations

from dataclasses import replace
import logging

from chart_hud.boxes import style_box_text
from chart_hud.geometry import Point, Rect
from chart_hud.measure import TextMeasure, glyph_count
from chart_hud.options import Adjustments, Tick
from chart_hud.styles import Anchor, Place, Placement, TextStyle, is_horizontal
from chart_hud.ticks import make_ticks, place_range


LOGGER = logging.getLogger(__name__)

DIAGONAL_ROTATION = -45.0


def _max_or_one(values: list[float]) -> float:
    return max(values) if values else 1.0


def adjust_tick(
    adj: Adjustments,
    view_box: Rect,
    data: Rect,
    pl: Placement,
    t: Tick,
    *,
    measure: TextMeasure = glyph_count,
) -> Tick:
    """Shrink (and for x axes possibly rotate) tick labels that would crowd the axis.

    Label extents are measured at the origin and compared with the span of the
    view box along the axis. Tick positions are untouched.
    """

    if t.ttick is None:
        return t
    style, buff = t.ttick
    span = place_range(pl, view_box).width
    if span <= 0:
        return t
    labels = make_ticks(t.tstyle, place_range(pl, data)).labels
    boxes = [style_box_text(style, lbl, Point(0.0, 0.0), measure=measure) for lbl in labels]
    max_width = _max_or_one([b.width for b in boxes])
    max_height = _max_or_one([b.height for b in boxes])

    if not is_horizontal(pl):
        shrink = max(max_height / span / adj.max_y_ratio, 1.0)
        return _with_text(t, replace(style, size=style.size / shrink), buff)

    shrink_x = max(max_width / span / adj.max_x_ratio, 1.0)
    if adj.allow_diagonal and shrink_x > 1.0:
        shrink_a = max(max_height / span / adj.angled_ratio, 1.0)
        anchor = Anchor.START if pl == Place.TOP else Anchor.END
        LOGGER.debug("rotating %s tick labels; widest %.4f over span %.4f", pl.value, max_width, span)
        new_style = replace(style, size=style.size / shrink_a, rotation=DIAGONAL_ROTATION, anchor=anchor)
        return _with_text(t, new_style, buff)
    return _with_text(t, replace(style, size=style.size / shrink_x), buff)


def _with_text(t: Tick, style: TextStyle, buff: float) -> Tick:
    return replace(t, ttick=(style, buff))
