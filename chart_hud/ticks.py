"""Tick styles and the values, labels and domain extensions they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import numpy as np

from chart_hud.errors import HudConfigError
from chart_hud.geometry import Range, Rect, project, space1
from chart_hud.scales import TickFormat, format_ticks, generate_nice_ticks, grid_exact, ticks_within_range
from chart_hud.styles import Placement, is_horizontal


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickNone:
    pass


@dataclass(frozen=True)
class TickLabels:
    """Evenly spaced labels, one per equal-width bucket."""

    labels: tuple[str, ...]


@dataclass(frozen=True)
class TickRound:
    """Rounded ticks, roughly `count` of them, optionally extending the data range."""

    fmt: TickFormat = field(default_factory=TickFormat)
    count: int = 8
    extend: bool = True

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise HudConfigError("TickRound.count must be > 0")


@dataclass(frozen=True)
class TickExact:
    fmt: TickFormat = field(default_factory=TickFormat)
    count: int = 5

    def __post_init__(self) -> None:
        if self.count < 0:
            raise HudConfigError("TickExact.count must be >= 0")


@dataclass(frozen=True)
class TickPlaced:
    placed: tuple[tuple[float, str], ...]


TickStyle = TickNone | TickLabels | TickRound | TickExact | TickPlaced


def default_tick_style() -> TickStyle:
    return TickRound(TickFormat("comma", 2), 8, True)


def tick_style_text(ts: TickStyle) -> str:
    return type(ts).__name__


@dataclass(frozen=True)
class TickComponents:
    positions: tuple[float, ...] = ()
    labels: tuple[str, ...] = ()
    extension: Range | None = None


def _round_values(ts: TickRound, r: Range) -> np.ndarray:
    ticks = generate_nice_ticks(r.lower, r.upper, ts.count)
    if not ts.extend:
        ticks = ticks_within_range(ticks, vmin=r.lower, vmax=r.upper)
    return ticks


def make_ticks(ts: TickStyle, r: Range) -> TickComponents:
    """Tick values (in the value space of `r`), labels and any range extension."""

    if isinstance(ts, TickNone):
        return TickComponents()
    if isinstance(ts, TickLabels):
        n = len(ts.labels)
        bucketed = Range(0.0, float(n))
        positions = tuple(project(i - 0.5, bucketed, r) for i in range(1, n + 1))
        return TickComponents(positions, tuple(ts.labels), None)
    if isinstance(ts, TickRound):
        ticks = _round_values(ts, r)
        values = tuple(float(v) for v in ticks)
        span = space1(values)
        ext = r.union(span) if ts.extend and span is not None else None
        return TickComponents(values, tuple(format_ticks(ts.fmt, ticks)), ext)
    if isinstance(ts, TickExact):
        ticks = grid_exact(r.lower, r.upper, ts.count)
        return TickComponents(tuple(float(v) for v in ticks), tuple(format_ticks(ts.fmt, ticks)), None)
    if isinstance(ts, TickPlaced):
        values = tuple(p for p, _ in ts.placed)
        span = space1(values)
        return TickComponents(values, tuple(lbl for _, lbl in ts.placed), None if span is None else r.union(span))
    raise TypeError(f"unsupported tick style: {ts!r}")


def place_range(pl: Placement, r: Rect) -> Range:
    return r.x if is_horizontal(pl) else r.y


def replace_range(pl: Placement, rng: Range, r: Rect) -> Rect:
    return Rect(rng, r.y) if is_horizontal(pl) else Rect(r.x, rng)


def ticks_placed(ts: TickStyle, pl: Placement, canvas: Rect, data: Rect) -> TickComponents:
    """Ticks for one axis, with positions carried from data space onto the canvas."""

    src = place_range(pl, data)
    dst = place_range(pl, canvas)
    tc = make_ticks(ts, src)
    return TickComponents(tuple(project(p, src, dst) for p in tc.positions), tc.labels, tc.extension)


def compute_tick_extension(ts: TickStyle, r: Range) -> Range | None:
    if isinstance(ts, TickRound):
        if not ts.extend:
            return None
        span = space1(float(v) for v in _round_values(ts, r))
        return r if span is None else span.union(r)
    if isinstance(ts, TickPlaced):
        span = space1(p for p, _ in ts.placed)
        return r if span is None else r.union(span)
    return None


def tick_extended(pl: Placement, ts: TickStyle, data: Rect) -> Rect:
    """Data rect widened along the axis of `pl` to cover the tick values."""

    ext = compute_tick_extension(ts, place_range(pl, data))
    return data if ext is None else replace_range(pl, ext, data)


def freeze_ticks(pl: Placement, data: Rect, ts: TickStyle) -> tuple[TickStyle, Rect | None]:
    """Pin rounded ticks computed against `data` as explicit placements.

    Rounding is not idempotent: rerunning it against the extended range could
    pick different values, so the first result is kept and only computed once.
    """

    if not isinstance(ts, TickRound):
        return ts, None
    tc = make_ticks(ts, place_range(pl, data))
    if tc.extension is None:
        return ts, None
    frozen = TickPlaced(tuple(zip(tc.positions, tc.labels)))
    extended = replace_range(pl, tc.extension, data)
    LOGGER.debug("froze %d %s ticks; data range %s -> %s", len(tc.positions), pl.value, place_range(pl, data), tc.extension)
    return frozen, extended
