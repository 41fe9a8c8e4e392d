from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from chart_hud.geometry import XY, Point, Rect, move_xy, scale_xy
from chart_hud.paths import move_path_info, scale_path_info
from chart_hud.styles import GlyphStyle, LineStyle, PathStyle, RectStyle, TextStyle


@dataclass(frozen=True)
class RectA:
    style: RectStyle


@dataclass(frozen=True)
class TextA:
    style: TextStyle
    texts: tuple[str, ...]


@dataclass(frozen=True)
class GlyphA:
    style: GlyphStyle


@dataclass(frozen=True)
class LineA:
    style: LineStyle


@dataclass(frozen=True)
class PathA:
    style: PathStyle


@dataclass(frozen=True)
class BlankA:
    pass


Annotation = RectA | TextA | GlyphA | LineA | PathA | BlankA


@dataclass(frozen=True)
class Chart:
    """Styled annotation over an ordered run of points and/or rects."""

    annotation: Annotation
    xys: tuple[XY, ...] = ()

    @classmethod
    def of(cls, annotation: Annotation, xys: Iterable[XY]) -> "Chart":
        return cls(annotation, tuple(xys))


def annotation_text(a: Annotation) -> str:
    if isinstance(a, RectA):
        return "RectA"
    if isinstance(a, TextA):
        return "TextA"
    if isinstance(a, GlyphA):
        return "GlyphA"
    if isinstance(a, LineA):
        return "LineA"
    if isinstance(a, PathA):
        return "PathA"
    return "BlankA"


def scale_annotation(k: float, a: Annotation) -> Annotation:
    """Scale the size-like style fields of an annotation by `k`."""

    if isinstance(a, LineA):
        return LineA(replace(a.style, width=a.style.width * k))
    if isinstance(a, RectA):
        return RectA(replace(a.style, border_size=a.style.border_size * k))
    if isinstance(a, TextA):
        return TextA(replace(a.style, size=a.style.size * k), a.texts)
    if isinstance(a, GlyphA):
        return GlyphA(replace(a.style, size=a.style.size * k))
    if isinstance(a, PathA):
        return PathA(replace(a.style, border_size=a.style.border_size * k))
    return a


def move_chart(offset: Point, charts: Sequence[Chart]) -> list[Chart]:
    return [_move_one(offset, c) for c in charts]


def _move_one(offset: Point, c: Chart) -> Chart:
    ann = c.annotation
    if isinstance(ann, PathA) and ann.style.path_info:
        info = tuple(move_path_info(i, offset) for i in ann.style.path_info)
        ann = PathA(replace(ann.style, path_info=info))
    return Chart(ann, tuple(move_xy(xy, offset) for xy in c.xys))


def scale_chart(k: float, c: Chart) -> Chart:
    """Scale both the coordinates and the style of a chart about the origin."""

    ann = scale_annotation(k, c.annotation)
    if isinstance(ann, PathA) and ann.style.path_info:
        info = tuple(scale_path_info(i, k) for i in ann.style.path_info)
        ann = PathA(replace(ann.style, path_info=info))
    return Chart(ann, tuple(scale_xy(xy, k) for xy in c.xys))


def rect_chart(style: RectStyle, rects: Iterable[Rect]) -> Chart:
    return Chart(RectA(style), tuple(rects))
