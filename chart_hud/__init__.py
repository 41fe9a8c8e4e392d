from chart_hud.boxes import data_box, data_boxes, style_box, style_boxes
from chart_hud.chart import BlankA, Chart, GlyphA, LineA, PathA, RectA, TextA
from chart_hud.config import hud_options_from_dict, load_hud_options
from chart_hud.errors import HudConfigError
from chart_hud.geometry import Point, Range, Rect
from chart_hud.hud import ChartDims, Hud, hud_charts, make_hud, run_hud, run_hud_with
from chart_hud.measure import TextMeasure, glyph_count, pillow_measure
from chart_hud.options import AxisOptions, HudOptions, LegendOptions, Tick, Title, default_hud_options
from chart_hud.ticks import TickExact, TickLabels, TickNone, TickPlaced, TickRound, freeze_ticks

__all__ = [
    "AxisOptions",
    "BlankA",
    "Chart",
    "ChartDims",
    "GlyphA",
    "Hud",
    "HudConfigError",
    "HudOptions",
    "LegendOptions",
    "LineA",
    "PathA",
    "Point",
    "Range",
    "Rect",
    "RectA",
    "TextA",
    "TextMeasure",
    "Tick",
    "TickExact",
    "TickLabels",
    "TickNone",
    "TickPlaced",
    "TickRound",
    "Title",
    "data_box",
    "data_boxes",
    "default_hud_options",
    "freeze_ticks",
    "glyph_count",
    "hud_charts",
    "hud_options_from_dict",
    "load_hud_options",
    "make_hud",
    "pillow_measure",
    "run_hud",
    "run_hud_with",
    "style_box",
    "style_boxes",
]
