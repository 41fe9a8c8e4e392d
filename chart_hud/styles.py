from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging

from chart_hud.errors import HudConfigError
from chart_hud.geometry import Point, Rect


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

PALETTE: tuple[tuple[int, int, int], ...] = (
    (166, 206, 227),
    (31, 120, 180),
    (178, 223, 138),
    (51, 160, 44),
    (251, 154, 153),
    (227, 26, 28),
    (253, 191, 111),
    (255, 127, 0),
)
TRANSPARENT: RGBA = (0, 0, 0, 0)
BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
COLOR_TEXT: RGBA = (51, 51, 51, 255)


def with_alpha(rgb: tuple[int, int, int] | RGBA, alpha: float) -> RGBA:
    r, g, b = rgb[0], rgb[1], rgb[2]
    return (r, g, b, int(round(max(0.0, min(1.0, alpha)) * 255)))


def grayscale(level: float, alpha: float = 1.0) -> RGBA:
    v = int(round(max(0.0, min(1.0, level)) * 255))
    return with_alpha((v, v, v), alpha)


class Anchor(str, Enum):
    MIDDLE = "Middle"
    START = "Start"
    END = "End"


class Orientation(str, Enum):
    HORI = "Hori"
    VERT = "Vert"


class Place(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"
    TOP = "Top"
    BOTTOM = "Bottom"


@dataclass(frozen=True)
class PlaceAbsolute:
    point: Point

    @property
    def value(self) -> str:
        return "Absolute"


Placement = Place | PlaceAbsolute


class SvgAspect(str, Enum):
    MANUAL = "ManualAspect"
    CHART = "ChartAspect"
    DATA = "DataAspect"


def _decode(enum_cls: type[Enum], text: str, default: Enum) -> Enum:
    for member in enum_cls:
        if member.value == text:
            return member
    LOGGER.warning("unknown %s text %r; using %s", enum_cls.__name__, text, default.value)
    return default


def from_anchor(a: Anchor) -> str:
    return a.value


def to_anchor(text: str) -> Anchor:
    return _decode(Anchor, text, Anchor.MIDDLE)  # type: ignore[return-value]


def from_orientation(o: Orientation) -> str:
    return o.value


def to_orientation(text: str) -> Orientation:
    return _decode(Orientation, text, Orientation.HORI)  # type: ignore[return-value]


def place_text(p: Placement) -> str:
    return p.value


def to_place(text: str, point: Point | None = None) -> Placement:
    """Decode placement text.

    "Absolute" carries no coordinates, so `place_text` loses the point of a
    `PlaceAbsolute`; pass it back as `point` (the origin otherwise).
    """

    if text == "Absolute":
        return PlaceAbsolute(point if point is not None else Point(0.0, 0.0))
    return _decode(Place, text, Place.BOTTOM)  # type: ignore[return-value]


def from_svg_aspect(a: SvgAspect) -> str:
    return a.value


def to_svg_aspect(text: str) -> SvgAspect:
    return _decode(SvgAspect, text, SvgAspect.CHART)  # type: ignore[return-value]


def is_horizontal(p: Placement) -> bool:
    """Top, bottom and absolute placements annotate the x axis."""

    return p not in (Place.LEFT, Place.RIGHT)


@dataclass(frozen=True)
class RectStyle:
    border_size: float = 0.01
    border_color: RGBA = with_alpha(PALETTE[1], 0.8)
    color: RGBA = with_alpha(PALETTE[1], 0.3)

    def __post_init__(self) -> None:
        if self.border_size < 0:
            raise HudConfigError("RectStyle.border_size must be >= 0")


def blob(color: RGBA) -> RectStyle:
    """Solid rectangle, no border."""

    return RectStyle(border_size=0.0, border_color=TRANSPARENT, color=color)


def clear() -> RectStyle:
    return RectStyle(border_size=0.0, border_color=TRANSPARENT, color=TRANSPARENT)


def border(size: float, color: RGBA) -> RectStyle:
    """Transparent rectangle with a border."""

    return RectStyle(border_size=size, border_color=color, color=TRANSPARENT)


@dataclass(frozen=True)
class TextStyle:
    size: float = 0.08
    color: RGBA = COLOR_TEXT
    anchor: Anchor = Anchor.MIDDLE
    hsize: float = 0.5
    vsize: float = 1.45
    nudge1: float = -0.2
    rotation: float | None = None
    translate: Point | None = None


@dataclass(frozen=True)
class CircleGlyph:
    pass


@dataclass(frozen=True)
class SquareGlyph:
    pass


@dataclass(frozen=True)
class EllipseGlyph:
    ratio: float


@dataclass(frozen=True)
class RectSharpGlyph:
    ratio: float


@dataclass(frozen=True)
class RectRoundedGlyph:
    ratio: float
    rx: float
    ry: float


@dataclass(frozen=True)
class TriangleGlyph:
    a: Point
    b: Point
    c: Point


@dataclass(frozen=True)
class VLineGlyph:
    width: float


@dataclass(frozen=True)
class HLineGlyph:
    width: float


@dataclass(frozen=True)
class PathGlyph:
    path: str
    box: Rect


GlyphShape = (
    CircleGlyph
    | SquareGlyph
    | EllipseGlyph
    | RectSharpGlyph
    | RectRoundedGlyph
    | TriangleGlyph
    | VLineGlyph
    | HLineGlyph
    | PathGlyph
)

_GLYPH_NAMES: dict[type, str] = {
    CircleGlyph: "Circle",
    SquareGlyph: "Square",
    TriangleGlyph: "Triangle",
    EllipseGlyph: "Ellipse",
    RectSharpGlyph: "RectSharp",
    RectRoundedGlyph: "RectRounded",
    VLineGlyph: "VLine",
    HLineGlyph: "HLine",
    PathGlyph: "Path",
}


def glyph_text(shape: GlyphShape) -> str:
    return _GLYPH_NAMES[type(shape)]


@dataclass(frozen=True)
class GlyphStyle:
    size: float = 0.03
    color: RGBA = with_alpha(PALETTE[0], 0.3)
    border_color: RGBA = with_alpha(PALETTE[1], 0.8)
    border_size: float = 0.003
    shape: GlyphShape = field(default_factory=SquareGlyph)
    rotation: float | None = None
    translate: Point | None = None


@dataclass(frozen=True)
class LineStyle:
    width: float = 0.012
    color: RGBA = with_alpha(PALETTE[0], 0.3)


class MarkerPos(str, Enum):
    START = "Start"
    END = "End"
    MID = "Mid"


@dataclass(frozen=True)
class PathStyle:
    border_size: float = 0.01
    border_color: RGBA = with_alpha(PALETTE[1], 0.8)
    color: RGBA = with_alpha(PALETTE[1], 0.3)
    # one segment descriptor per coordinate of the chart, see chart_hud.paths
    path_info: tuple = ()
    markers: tuple[tuple[MarkerPos, str], ...] = ()
