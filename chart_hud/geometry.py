from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)


@dataclass(frozen=True)
class Range:
    lower: float
    upper: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def mid(self) -> float:
        return (self.lower + self.upper) / 2.0

    def union(self, other: "Range") -> "Range":
        return Range(min(self.lower, other.lower), max(self.upper, other.upper))

    def contains(self, value: float, *, eps: float = 0.0) -> bool:
        return (self.lower - eps) <= value <= (self.upper + eps)


@dataclass(frozen=True)
class Rect:
    x: Range
    y: Range

    @classmethod
    def of(cls, x0: float, x1: float, y0: float, y1: float) -> "Rect":
        return cls(Range(x0, x1), Range(y0, y1))

    @classmethod
    def from_point(cls, p: Point) -> "Rect":
        return cls(Range(p.x, p.x), Range(p.y, p.y))

    @property
    def x0(self) -> float:
        return self.x.lower

    @property
    def x1(self) -> float:
        return self.x.upper

    @property
    def y0(self) -> float:
        return self.y.lower

    @property
    def y1(self) -> float:
        return self.y.upper

    @property
    def width(self) -> float:
        return self.x.width

    @property
    def height(self) -> float:
        return self.y.width

    @property
    def center(self) -> Point:
        return Point(self.x.mid, self.y.mid)

    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (
            Point(self.x0, self.y0),
            Point(self.x1, self.y0),
            Point(self.x1, self.y1),
            Point(self.x0, self.y1),
        )


XY = Point | Rect

UNIT_RANGE = Range(-0.5, 0.5)
UNIT_RECT = Rect(UNIT_RANGE, UNIT_RANGE)


def project(value: float, source: Range, target: Range) -> float:
    """Affine map of `value` from `source` onto `target`.

    A zero-width source collapses every value onto the target midpoint.
    """

    if source == target:
        return value
    if source.width == 0:
        return target.mid
    return target.lower + (value - source.lower) / source.width * target.width


def project_point(p: Point, source: Rect, target: Rect) -> Point:
    return Point(project(p.x, source.x, target.x), project(p.y, source.y, target.y))


def project_rect(r: Rect, source: Rect, target: Rect) -> Rect:
    return Rect(
        Range(project(r.x0, source.x, target.x), project(r.x1, source.x, target.x)),
        Range(project(r.y0, source.y, target.y), project(r.y1, source.y, target.y)),
    )


def project_xy(xy: XY, source: Rect, target: Rect) -> XY:
    if isinstance(xy, Rect):
        return project_rect(xy, source, target)
    return project_point(xy, source, target)


def union(a: Rect, b: Rect) -> Rect:
    return Rect(a.x.union(b.x), a.y.union(b.y))


def fold_rects(rects: Iterable[Rect]) -> Rect | None:
    out: Rect | None = None
    for r in rects:
        out = r if out is None else union(out, r)
    return out


def add_to_rect(r: Rect, extra: Rect | None) -> Rect:
    return r if extra is None else union(r, extra)


def pad_rect(r: Rect, amount: float) -> Rect:
    return Rect.of(r.x0 - amount, r.x1 + amount, r.y0 - amount, r.y1 + amount)


def move_rect(r: Rect, p: Point) -> Rect:
    return Rect.of(r.x0 + p.x, r.x1 + p.x, r.y0 + p.y, r.y1 + p.y)


def move_xy(xy: XY, p: Point) -> XY:
    if isinstance(xy, Rect):
        return move_rect(xy, p)
    return xy + p


def scale_rect(r: Rect, sx: float, sy: float | None = None) -> Rect:
    sy = sx if sy is None else sy
    return Rect.of(r.x0 * sx, r.x1 * sx, r.y0 * sy, r.y1 * sy)


def scale_xy(xy: XY, k: float) -> XY:
    if isinstance(xy, Rect):
        return scale_rect(xy, k)
    return xy.scale(k)


def rotate_point(degrees: float, p: Point) -> Point:
    rad = math.radians(degrees)
    c = math.cos(rad)
    s = math.sin(rad)
    return Point(p.x * c - p.y * s, p.x * s + p.y * c)


def rotate_rect(degrees: float, r: Rect) -> Rect:
    pts = [rotate_point(degrees, p) for p in r.corners()]
    return Rect.of(
        min(p.x for p in pts),
        max(p.x for p in pts),
        min(p.y for p in pts),
        max(p.y for p in pts),
    )


def to_rect(xy: XY) -> Rect:
    if isinstance(xy, Rect):
        return xy
    return Rect.from_point(xy)


def to_point(xy: XY) -> Point:
    if isinstance(xy, Rect):
        return xy.center
    return xy


def space1(values: Iterable[float]) -> Range | None:
    vals = list(values)
    if not vals:
        return None
    return Range(min(vals), max(vals))


def fix_rect(r: Rect | None) -> Rect:
    if r is None:
        return UNIT_RECT
    x = r.x if r.x.width > 0 else Range(r.x.lower - 0.5, r.x.upper + 0.5)
    y = r.y if r.y.width > 0 else Range(r.y.lower - 0.5, r.y.upper + 0.5)
    return Rect(x, y)
