"""SVG-style path segments and their bounding boxes.

A path chart pairs each coordinate with one segment descriptor: the coordinate
is the segment's end point and the previous coordinate is its start point.
Control points and arc radii live in the same space as the coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Sequence

import numpy as np

from chart_hud.geometry import Point, Range, Rect, fold_rects, project_point


@dataclass(frozen=True)
class StartI:
    pass


@dataclass(frozen=True)
class LineI:
    pass


@dataclass(frozen=True)
class CubicI:
    control1: Point
    control2: Point


@dataclass(frozen=True)
class QuadI:
    control: Point


@dataclass(frozen=True)
class ArcI:
    radii: Point
    # x-axis rotation of the ellipse, in degrees
    phi: float = 0.0
    large: bool = False
    sweep: bool = False


PathInfo = StartI | LineI | CubicI | QuadI | ArcI


def _bounds(points: Iterable[Point]) -> Rect:
    pts = list(points)
    return Rect.of(min(p.x for p in pts), max(p.x for p in pts), min(p.y for p in pts), max(p.y for p in pts))


def _unit_roots(a: float, b: float, c: float) -> list[float]:
    roots = np.roots([a, b, c]) if (a, b) != (0.0, 0.0) else np.asarray([])
    return [float(r.real) for r in np.atleast_1d(roots) if abs(r.imag) < 1e-12 and 0.0 < r.real < 1.0]


def cubic_box(p0: Point, c1: Point, c2: Point, p1: Point) -> Rect:
    def at(t: float) -> Point:
        mt = 1.0 - t
        return Point(
            mt**3 * p0.x + 3 * mt**2 * t * c1.x + 3 * mt * t**2 * c2.x + t**3 * p1.x,
            mt**3 * p0.y + 3 * mt**2 * t * c1.y + 3 * mt * t**2 * c2.y + t**3 * p1.y,
        )

    ts: list[float] = []
    for a0, a1, a2, a3 in ((p0.x, c1.x, c2.x, p1.x), (p0.y, c1.y, c2.y, p1.y)):
        d0 = a1 - a0
        d1 = a2 - a1
        d2 = a3 - a2
        ts.extend(_unit_roots(d0 - 2 * d1 + d2, 2 * (d1 - d0), d0))
    return _bounds([p0, p1] + [at(t) for t in ts])


def quad_box(p0: Point, c: Point, p1: Point) -> Rect:
    def at(t: float) -> Point:
        mt = 1.0 - t
        return Point(
            mt**2 * p0.x + 2 * mt * t * c.x + t**2 * p1.x,
            mt**2 * p0.y + 2 * mt * t * c.y + t**2 * p1.y,
        )

    ts: list[float] = []
    for a0, a1, a2 in ((p0.x, c.x, p1.x), (p0.y, c.y, p1.y)):
        denom = a0 - 2 * a1 + a2
        if denom != 0:
            t = (a0 - a1) / denom
            if 0.0 < t < 1.0:
                ts.append(t)
    return _bounds([p0, p1] + [at(t) for t in ts])


def arc_center(p0: Point, p1: Point, info: ArcI) -> tuple[Point, Point, float, float]:
    """Endpoint to centre parameterisation of an elliptical arc.

    Returns (centre, corrected radii, start angle, sweep angle) with angles in
    radians.
    """

    rx = abs(info.radii.x)
    ry = abs(info.radii.y)
    phi = math.radians(info.phi)
    cos_p = math.cos(phi)
    sin_p = math.sin(phi)
    dx = (p0.x - p1.x) / 2.0
    dy = (p0.y - p1.y) / 2.0
    x1p = cos_p * dx + sin_p * dy
    y1p = -sin_p * dx + cos_p * dy
    lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lam > 1.0:
        rx *= math.sqrt(lam)
        ry *= math.sqrt(lam)
    num = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    den = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coef = math.sqrt(max(0.0, num / den)) if den > 0 else 0.0
    if info.large == info.sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx
    cx = cos_p * cxp - sin_p * cyp + (p0.x + p1.x) / 2.0
    cy = sin_p * cxp + cos_p * cyp + (p0.y + p1.y) / 2.0
    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    dtheta = theta2 - theta1
    if info.sweep and dtheta < 0:
        dtheta += 2 * math.pi
    elif not info.sweep and dtheta > 0:
        dtheta -= 2 * math.pi
    return Point(cx, cy), Point(rx, ry), theta1, dtheta


def arc_box(p0: Point, p1: Point, info: ArcI) -> Rect:
    if info.radii.x == 0 or info.radii.y == 0 or p0 == p1:
        return _bounds([p0, p1])
    c, radii, theta1, dtheta = arc_center(p0, p1, info)
    phi = math.radians(info.phi)
    cos_p = math.cos(phi)
    sin_p = math.sin(phi)

    def at(theta: float) -> Point:
        return Point(
            c.x + radii.x * cos_p * math.cos(theta) - radii.y * sin_p * math.sin(theta),
            c.y + radii.x * sin_p * math.cos(theta) + radii.y * cos_p * math.sin(theta),
        )

    tx = math.atan2(-radii.y * sin_p, radii.x * cos_p)
    ty = math.atan2(radii.y * cos_p, radii.x * sin_p)
    lo = min(theta1, theta1 + dtheta)
    hi = max(theta1, theta1 + dtheta)
    extremes: list[Point] = []
    for base in (tx, tx + math.pi, ty, ty + math.pi):
        for k in range(-2, 3):
            theta = base + 2 * math.pi * k
            if lo <= theta <= hi:
                extremes.append(at(theta))
    return _bounds([p0, p1] + extremes)


def path_boxes(segments: Sequence[tuple[PathInfo, Point]]) -> Rect | None:
    boxes: list[Rect] = []
    prev: Point | None = None
    for info, p in segments:
        if prev is None or isinstance(info, (StartI, LineI)):
            boxes.append(_bounds([p] if prev is None or isinstance(info, StartI) else [prev, p]))
        elif isinstance(info, CubicI):
            boxes.append(cubic_box(prev, info.control1, info.control2, p))
        elif isinstance(info, QuadI):
            boxes.append(quad_box(prev, info.control, p))
        elif isinstance(info, ArcI):
            boxes.append(arc_box(prev, p, info))
        prev = p
    return fold_rects(boxes)


def project_path_info(info: PathInfo, source: Rect, target: Rect) -> PathInfo:
    """Carry control points and arc radii into a new coordinate space."""

    if isinstance(info, CubicI):
        return CubicI(project_point(info.control1, source, target), project_point(info.control2, source, target))
    if isinstance(info, QuadI):
        return QuadI(project_point(info.control, source, target))
    if isinstance(info, ArcI):
        return ArcI(
            Point(_scale_len(info.radii.x, source.x, target.x), _scale_len(info.radii.y, source.y, target.y)),
            info.phi,
            info.large,
            info.sweep,
        )
    return info


def move_path_info(info: PathInfo, offset: Point) -> PathInfo:
    if isinstance(info, CubicI):
        return CubicI(info.control1 + offset, info.control2 + offset)
    if isinstance(info, QuadI):
        return QuadI(info.control + offset)
    return info


def scale_path_info(info: PathInfo, k: float) -> PathInfo:
    if isinstance(info, CubicI):
        return CubicI(info.control1.scale(k), info.control2.scale(k))
    if isinstance(info, QuadI):
        return QuadI(info.control.scale(k))
    if isinstance(info, ArcI):
        return ArcI(info.radii.scale(k), info.phi, info.large, info.sweep)
    return info


def _scale_len(length: float, source: Range, target: Range) -> float:
    if source.width == 0:
        return length
    return length * target.width / source.width
