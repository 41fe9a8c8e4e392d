from __future__ import annotations

from dataclasses import dataclass, field, replace

from chart_hud.chart import Annotation
from chart_hud.errors import HudConfigError
from chart_hud.styles import (
    WHITE,
    Anchor,
    GlyphStyle,
    LineStyle,
    Place,
    Placement,
    RectStyle,
    TextStyle,
    VLineGlyph,
    blob,
    grayscale,
)
from chart_hud.ticks import TickStyle, default_tick_style


DEFAULT_CANVAS = blob(grayscale(0.5, 0.025))
DEFAULT_GLYPH_TICK = GlyphStyle(
    size=0.03,
    color=grayscale(0.5, 1.0),
    border_color=grayscale(0.5, 1.0),
    border_size=0.005,
    shape=VLineGlyph(0.005),
)
DEFAULT_TEXT_TICK = TextStyle(size=0.05, color=grayscale(0.5, 1.0))
DEFAULT_LINE_TICK = LineStyle(width=0.005, color=grayscale(0.5, 0.05))


@dataclass(frozen=True)
class AxisBar:
    rstyle: RectStyle = RectStyle(border_size=0.0, border_color=grayscale(0.5, 1.0), color=grayscale(0.5, 1.0))
    wid: float = 0.005
    buff: float = 0.01

    def __post_init__(self) -> None:
        if self.wid < 0:
            raise HudConfigError("AxisBar.wid must be >= 0")


@dataclass(frozen=True)
class Title:
    text: str
    style: TextStyle = TextStyle(size=0.12)
    place: Placement = Place.TOP
    anchor: Anchor = Anchor.MIDDLE
    buff: float = 0.04


@dataclass(frozen=True)
class Tick:
    """Tick marks (glyphs), labels (text) and grid lines, each with a buffer."""

    tstyle: TickStyle = field(default_factory=default_tick_style)
    gtick: tuple[GlyphStyle, float] | None = (DEFAULT_GLYPH_TICK, 0.0125)
    ttick: tuple[TextStyle, float] | None = (DEFAULT_TEXT_TICK, 0.015)
    ltick: tuple[LineStyle, float] | None = (DEFAULT_LINE_TICK, 0.0)


@dataclass(frozen=True)
class Adjustments:
    max_x_ratio: float = 0.08
    max_y_ratio: float = 0.06
    angled_ratio: float = 0.12
    allow_diagonal: bool = True

    def __post_init__(self) -> None:
        if min(self.max_x_ratio, self.max_y_ratio, self.angled_ratio) <= 0:
            raise HudConfigError("Adjustments ratios must be > 0")


@dataclass(frozen=True)
class LegendOptions:
    lsize: float = 0.1
    vgap: float = 0.2
    hgap: float = 0.1
    ltext: TextStyle = TextStyle(size=0.08)
    # maximum entries shown; 0 hides every entry
    lmax: int = 10
    inner_pad: float = 0.1
    outer_pad: float = 0.1
    legend_frame: RectStyle | None = RectStyle(border_size=0.02, border_color=grayscale(0.5, 1.0), color=WHITE)
    lplace: Placement = Place.BOTTOM
    lscale: float = 0.2

    def __post_init__(self) -> None:
        if self.lscale <= 0:
            raise HudConfigError("LegendOptions.lscale must be > 0")
        if self.lmax < 0:
            raise HudConfigError("LegendOptions.lmax must be >= 0")


@dataclass(frozen=True)
class AxisOptions:
    abar: AxisBar | None = field(default_factory=AxisBar)
    adjust: Adjustments | None = field(default_factory=Adjustments)
    atick: Tick = field(default_factory=Tick)
    place: Placement = Place.BOTTOM


@dataclass(frozen=True)
class HudOptions:
    """Typical configurable HUD pieces; merging keeps the first canvas and legend."""

    canvas: RectStyle | None = None
    titles: tuple[Title, ...] = ()
    axes: tuple[AxisOptions, ...] = ()
    legend: tuple[LegendOptions, tuple[tuple[Annotation, str], ...]] | None = None

    def merge(self, other: "HudOptions") -> "HudOptions":
        return HudOptions(
            canvas=self.canvas if self.canvas is not None else other.canvas,
            titles=self.titles + other.titles,
            axes=self.axes + other.axes,
            legend=self.legend if self.legend is not None else other.legend,
        )

    def __add__(self, other: "HudOptions") -> "HudOptions":
        return self.merge(other)


def default_hud_options() -> HudOptions:
    return HudOptions(
        canvas=DEFAULT_CANVAS,
        axes=(AxisOptions(), AxisOptions(place=Place.LEFT)),
    )


_FLIPPED: dict[Placement, Placement] = {
    Place.BOTTOM: Place.LEFT,
    Place.TOP: Place.RIGHT,
    Place.LEFT: Place.BOTTOM,
    Place.RIGHT: Place.TOP,
}


def flip_axis(ac: AxisOptions) -> AxisOptions:
    """Swap an axis between the x and y dimensions."""

    return replace(ac, place=_FLIPPED.get(ac.place, ac.place))
