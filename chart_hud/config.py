"""Read `HudOptions` from JSON-style mappings.

Missing keys take the dataclass defaults. Unknown enumeration text (places,
anchors) falls back to the default variant; structurally wrong payloads raise
`HudConfigError`.
"""

from __future__ import annotations

from dataclasses import fields, replace
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from chart_hud.chart import Annotation, BlankA, GlyphA, LineA, RectA, TextA
from chart_hud.errors import HudConfigError
from chart_hud.geometry import Point
from chart_hud.options import (
    Adjustments,
    AxisBar,
    AxisOptions,
    HudOptions,
    LegendOptions,
    Tick,
    Title,
)
from chart_hud.scales import TickFormat
from chart_hud.styles import (
    RGBA,
    CircleGlyph,
    GlyphStyle,
    HLineGlyph,
    LineStyle,
    Placement,
    RectStyle,
    SquareGlyph,
    TextStyle,
    VLineGlyph,
    to_anchor,
    to_place,
)
from chart_hud.ticks import TickExact, TickLabels, TickNone, TickPlaced, TickRound, TickStyle


LOGGER = logging.getLogger(__name__)


def parse_color(raw: Any, *, label: str) -> RGBA:
    if isinstance(raw, str):
        text = raw.strip().lstrip("#")
        if len(text) not in (6, 8):
            raise HudConfigError(f"{label} must be #RRGGBB or #RRGGBBAA")
        try:
            parts = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
        except ValueError as exc:
            raise HudConfigError(f"{label} is not a hex colour: {raw!r}") from exc
    elif isinstance(raw, (list, tuple)) and len(raw) in (3, 4):
        parts = [int(v) for v in raw]
    else:
        raise HudConfigError(f"{label} must be a hex string or [r, g, b(, a)]")
    if len(parts) == 3:
        parts.append(255)
    if any(v < 0 or v > 255 for v in parts):
        raise HudConfigError(f"{label} channels must be within 0..255")
    return (parts[0], parts[1], parts[2], parts[3])


def _expect_obj(raw: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise HudConfigError(f"{label} must be an object")
    return raw


def _expect_list(raw: Any, label: str) -> list[Any]:
    if not isinstance(raw, list):
        raise HudConfigError(f"{label} must be a list")
    return raw


def _number(raw: Any, label: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise HudConfigError(f"{label} must be a number")
    return float(raw)


def _optional_number(raw: Any, label: str) -> float | None:
    return None if raw is None else _number(raw, label)


def _integer(raw: Any, label: str) -> int:
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise HudConfigError(f"{label} must be an integer")
    return raw


def _boolean(raw: Any, label: str) -> bool:
    if not isinstance(raw, bool):
        raise HudConfigError(f"{label} must be true or false")
    return raw


def _point(raw: Any, label: str) -> Point:
    items = _expect_list(raw, label)
    if len(items) != 2:
        raise HudConfigError(f"{label} must be [x, y]")
    return Point(_number(items[0], f"{label}[0]"), _number(items[1], f"{label}[1]"))


def _placement(raw: Mapping[str, Any], key: str, default: str, label: str) -> Placement:
    point = _point(raw["point"], f"{label}.point") if "point" in raw else None
    return to_place(str(raw.get(key, default)), point)


# field annotation -> parser, for the plain scalar fields of option records
_SCALAR_PARSERS = {
    "float": _number,
    "float | None": _optional_number,
    "int": _integer,
    "bool": _boolean,
}


def _scalars(cls: type, raw: Mapping[str, Any], label: str, *, colors: tuple[str, ...] = ()) -> dict[str, Any]:
    """Parse the scalar and colour fields of `cls` present in `raw`.

    Other fields (nested styles, anchors, placements) are left to the caller.
    """
    kinds = {f.name: f.type for f in fields(cls)}
    out: dict[str, Any] = {}
    for key, value in raw.items():
        if key in colors:
            out[key] = parse_color(value, label=f"{label}.{key}")
            continue
        parse = _SCALAR_PARSERS.get(kinds.get(key))
        if parse is not None:
            out[key] = parse(value, f"{label}.{key}")
    return out


def rect_style_from_dict(raw: Any, label: str = "rect_style") -> RectStyle:
    obj = _expect_obj(raw, label)
    return RectStyle(**_scalars(RectStyle, obj, label, colors=("border_color", "color")))


def text_style_from_dict(raw: Any, label: str = "text_style", base: TextStyle | None = None) -> TextStyle:
    obj = _expect_obj(raw, label)
    kwargs = _scalars(TextStyle, obj, label, colors=("color",))
    if "anchor" in obj:
        kwargs["anchor"] = to_anchor(str(obj["anchor"]))
    if "translate" in obj:
        kwargs["translate"] = _point(obj["translate"], f"{label}.translate")
    start = base if base is not None else TextStyle()
    return replace(start, **kwargs)


_SHAPES = {
    "Circle": CircleGlyph,
    "Square": SquareGlyph,
}


def glyph_style_from_dict(raw: Any, label: str = "glyph_style", base: GlyphStyle | None = None) -> GlyphStyle:
    obj = _expect_obj(raw, label)
    kwargs = _scalars(GlyphStyle, obj, label, colors=("color", "border_color"))
    shape = obj.get("shape")
    if shape in _SHAPES:
        kwargs["shape"] = _SHAPES[shape]()
    elif shape == "VLine":
        kwargs["shape"] = VLineGlyph(_number(obj.get("shape_width", 0.005), f"{label}.shape_width"))
    elif shape == "HLine":
        kwargs["shape"] = HLineGlyph(_number(obj.get("shape_width", 0.005), f"{label}.shape_width"))
    elif shape is not None:
        LOGGER.warning("unsupported glyph shape %r in %s; keeping default", shape, label)
    start = base if base is not None else GlyphStyle()
    return replace(start, **kwargs)


def line_style_from_dict(raw: Any, label: str = "line_style", base: LineStyle | None = None) -> LineStyle:
    obj = _expect_obj(raw, label)
    start = base if base is not None else LineStyle()
    kwargs = _scalars(LineStyle, obj, label, colors=("color",))
    return replace(start, **kwargs)


def tick_format_from_dict(raw: Any, label: str = "format") -> TickFormat:
    obj = _expect_obj(raw, label)
    precision = obj.get("precision", 2)
    kind = str(obj.get("kind", "comma"))
    return TickFormat(
        kind=kind,  # type: ignore[arg-type]
        precision=None if precision is None else _integer(precision, f"{label}.precision"),
    )


def tick_style_from_dict(raw: Any, label: str = "tick_style") -> TickStyle:
    obj = _expect_obj(raw, label)
    kind = str(obj.get("kind", "round")).lower()
    fmt = tick_format_from_dict(obj.get("format", {}), f"{label}.format")
    if kind == "none":
        return TickNone()
    if kind == "labels":
        return TickLabels(tuple(str(v) for v in _expect_list(obj.get("labels", []), f"{label}.labels")))
    if kind == "round":
        count = _integer(obj.get("count", 8), f"{label}.count")
        return TickRound(fmt, count, _boolean(obj.get("extend", True), f"{label}.extend"))
    if kind == "exact":
        return TickExact(fmt, _integer(obj.get("count", 5), f"{label}.count"))
    if kind == "placed":
        placed = []
        for i, item in enumerate(_expect_list(obj.get("placed", []), f"{label}.placed")):
            pair = _expect_list(item, f"{label}.placed[{i}]")
            if len(pair) != 2:
                raise HudConfigError(f"{label}.placed[{i}] must be [value, label]")
            placed.append((_number(pair[0], f"{label}.placed[{i}][0]"), str(pair[1])))
        return TickPlaced(tuple(placed))
    raise HudConfigError(f"unsupported tick style kind: {kind}")


def _optional_pair(obj: Mapping[str, Any], key: str, default: tuple[Any, float] | None, parse, label: str):
    if key not in obj:
        return default
    raw = obj[key]
    if raw is None:
        return None
    item = _expect_obj(raw, f"{label}.{key}")
    base_style = default[0] if default is not None else None
    style = parse(item.get("style", {}), f"{label}.{key}.style", base_style)
    buff = _number(item.get("buff", default[1] if default is not None else 0.0), f"{label}.{key}.buff")
    return (style, buff)


def tick_from_dict(raw: Any, label: str = "tick") -> Tick:
    obj = _expect_obj(raw, label)
    base = Tick()
    tstyle = tick_style_from_dict(obj["style"], f"{label}.style") if "style" in obj else base.tstyle
    return Tick(
        tstyle=tstyle,
        gtick=_optional_pair(obj, "glyph", base.gtick, glyph_style_from_dict, label),
        ttick=_optional_pair(obj, "text", base.ttick, text_style_from_dict, label),
        ltick=_optional_pair(obj, "line", base.ltick, line_style_from_dict, label),
    )


def axis_options_from_dict(raw: Any, label: str = "axis") -> AxisOptions:
    obj = _expect_obj(raw, label)
    base = AxisOptions()
    abar = base.abar
    if "bar" in obj:
        abar = None
        if obj["bar"] is not None:
            bar_obj = _expect_obj(obj["bar"], f"{label}.bar")
            bar_kwargs = _scalars(AxisBar, bar_obj, f"{label}.bar")
            if "rstyle" in bar_obj:
                bar_kwargs["rstyle"] = rect_style_from_dict(bar_obj["rstyle"], f"{label}.bar.rstyle")
            abar = AxisBar(**bar_kwargs)
    adjust = base.adjust
    if "adjust" in obj:
        adjust = None
        if obj["adjust"] is not None:
            adj_obj = _expect_obj(obj["adjust"], f"{label}.adjust")
            adjust = Adjustments(**_scalars(Adjustments, adj_obj, f"{label}.adjust"))
    atick = tick_from_dict(obj["tick"], f"{label}.tick") if "tick" in obj else base.atick
    return AxisOptions(abar=abar, adjust=adjust, atick=atick, place=_placement(obj, "place", "Bottom", label))


def title_from_dict(raw: Any, label: str = "title") -> Title:
    obj = _expect_obj(raw, label)
    if "text" not in obj:
        raise HudConfigError(f"{label}.text is required")
    base = Title(text=str(obj["text"]))
    style = text_style_from_dict(obj["style"], f"{label}.style", base.style) if "style" in obj else base.style
    return Title(
        text=base.text,
        style=style,
        place=_placement(obj, "place", "Top", label),
        anchor=to_anchor(str(obj.get("anchor", "Middle"))),
        buff=_number(obj.get("buff", base.buff), f"{label}.buff"),
    )


def annotation_from_dict(raw: Any, label: str = "annotation") -> Annotation:
    obj = _expect_obj(raw, label)
    kind = str(obj.get("kind", "rect")).lower()
    style = obj.get("style", {})
    if kind == "rect":
        return RectA(rect_style_from_dict(style, f"{label}.style"))
    if kind == "text":
        texts = tuple(str(t) for t in _expect_list(obj.get("texts", []), f"{label}.texts"))
        return TextA(text_style_from_dict(style, f"{label}.style"), texts)
    if kind == "glyph":
        return GlyphA(glyph_style_from_dict(style, f"{label}.style"))
    if kind == "line":
        return LineA(line_style_from_dict(style, f"{label}.style"))
    if kind == "blank":
        return BlankA()
    raise HudConfigError(f"unsupported annotation kind: {kind}")


def legend_options_from_dict(raw: Any, label: str = "legend.options") -> LegendOptions:
    obj = _expect_obj(raw, label)
    base = LegendOptions()
    kwargs = _scalars(LegendOptions, obj, label)
    if "ltext" in obj:
        kwargs["ltext"] = text_style_from_dict(obj["ltext"], f"{label}.ltext", base.ltext)
    if "legend_frame" in obj:
        frame = obj["legend_frame"]
        kwargs["legend_frame"] = None if frame is None else rect_style_from_dict(frame, f"{label}.legend_frame")
    kwargs["lplace"] = _placement(obj, "lplace", "Bottom", label)
    return LegendOptions(**kwargs)


def hud_options_from_dict(payload: Mapping[str, Any]) -> HudOptions:
    obj = _expect_obj(payload, "hud")
    canvas = None
    if obj.get("canvas") is not None:
        canvas = rect_style_from_dict(obj["canvas"], "canvas")
    titles = tuple(title_from_dict(t, f"titles[{i}]") for i, t in enumerate(_expect_list(obj.get("titles", []), "titles")))
    axes = tuple(axis_options_from_dict(a, f"axes[{i}]") for i, a in enumerate(_expect_list(obj.get("axes", []), "axes")))
    legend = None
    if obj.get("legend") is not None:
        leg = _expect_obj(obj["legend"], "legend")
        entries = []
        for i, item in enumerate(_expect_list(leg.get("entries", []), "legend.entries")):
            entry = _expect_obj(item, f"legend.entries[{i}]")
            annotation = annotation_from_dict(entry.get("annotation", {}), f"legend.entries[{i}].annotation")
            entries.append((annotation, str(entry.get("label", ""))))
        legend = (legend_options_from_dict(leg.get("options", {})), tuple(entries))
    return HudOptions(canvas=canvas, titles=titles, axes=axes, legend=legend)


def load_hud_options(path: str | Path) -> HudOptions:
    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise HudConfigError(f"{source} is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise HudConfigError("HUD options payload must be a JSON object")
    return hud_options_from_dict(payload)
