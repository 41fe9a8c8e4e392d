from __future__ import annotations

import unittest

from chart_hud.boxes import data_box, style_box, style_box_glyph, style_box_text, style_boxes
from chart_hud.chart import (
    BlankA,
    Chart,
    GlyphA,
    LineA,
    PathA,
    RectA,
    TextA,
    annotation_text,
    move_chart,
    rect_chart,
    scale_annotation,
    scale_chart,
)
from chart_hud.errors import HudConfigError
from chart_hud.geometry import UNIT_RECT, Point, Rect
from chart_hud.measure import glyph_count, pillow_measure, strip_markup
from chart_hud.paths import ArcI, CubicI, LineI, QuadI, StartI, path_boxes
from chart_hud.styles import (
    Anchor,
    CircleGlyph,
    GlyphStyle,
    LineStyle,
    Orientation,
    PathStyle,
    Place,
    PlaceAbsolute,
    RectStyle,
    SvgAspect,
    TextStyle,
    TriangleGlyph,
    VLineGlyph,
    border,
    clear,
    from_anchor,
    from_orientation,
    from_svg_aspect,
    glyph_text,
    place_text,
    to_anchor,
    to_orientation,
    to_place,
    to_svg_aspect,
)


class StyleBoxTests(unittest.TestCase):
    def assertRectAlmostEqual(self, a: Rect, b: Rect, places: int = 9) -> None:
        for got, want in zip((a.x0, a.x1, a.y0, a.y1), (b.x0, b.x1, b.y0, b.y1)):
            self.assertAlmostEqual(got, want, places=places)

    def test_rect_style_box_adds_half_border(self) -> None:
        c = Chart(RectA(RectStyle()), (UNIT_RECT,))
        self.assertRectAlmostEqual(style_box(c), Rect.of(-0.505, 0.505, -0.505, 0.505))
        self.assertEqual(data_box(c), UNIT_RECT)

    def test_text_box_depends_on_anchor(self) -> None:
        origin = Point(0.0, 0.0)
        middle = style_box_text(TextStyle(size=0.1), "abcd", origin)
        start = style_box_text(TextStyle(size=0.1, anchor=Anchor.START), "abcd", origin)
        end = style_box_text(TextStyle(size=0.1, anchor=Anchor.END), "abcd", origin)
        self.assertAlmostEqual(middle.x0, -0.1)
        self.assertAlmostEqual(middle.x1, 0.1)
        self.assertAlmostEqual(start.x0, 0.0)
        self.assertAlmostEqual(start.x1, 0.2)
        self.assertAlmostEqual(end.x0, -0.2)
        self.assertAlmostEqual(end.x1, 0.0)
        # baseline nudge lifts the box
        self.assertAlmostEqual(middle.y0, -0.0525)
        self.assertAlmostEqual(middle.y1, 0.0925)

    def test_text_box_ignores_markup(self) -> None:
        plain = style_box_text(TextStyle(), "ab", Point(0.0, 0.0))
        marked = style_box_text(TextStyle(), "<b>ab</b>", Point(0.0, 0.0))
        self.assertEqual(plain, marked)
        self.assertEqual(strip_markup("x&lt;y"), "x<y")
        self.assertEqual(glyph_count("<tspan>a&amp;b</tspan>"), 3.0)

    def test_text_box_is_moved_to_point_and_translation(self) -> None:
        style = TextStyle(size=0.1, translate=Point(1.0, 0.0))
        box = style_box_text(style, "ab", Point(0.0, 2.0))
        self.assertAlmostEqual(box.center.x, 1.0)
        self.assertGreater(box.y0, 1.9)

    def test_glyph_boxes_by_shape(self) -> None:
        circle = style_box_glyph(GlyphStyle(size=0.1, border_size=0.0, shape=CircleGlyph()))
        self.assertRectAlmostEqual(circle, Rect.of(-0.05, 0.05, -0.05, 0.05))
        tri = style_box_glyph(
            GlyphStyle(size=1.0, border_size=0.0, shape=TriangleGlyph(Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 2.0)))
        )
        self.assertRectAlmostEqual(tri, Rect.of(0.0, 1.0, 0.0, 2.0))

    def test_rotated_line_glyph_box_is_turned(self) -> None:
        style = GlyphStyle(size=0.1, border_size=0.01, shape=VLineGlyph(0.01))
        upright = style_box_glyph(style)
        self.assertRectAlmostEqual(upright, Rect.of(-0.0055, 0.0055, -0.055, 0.055))
        turned = style_box_glyph(GlyphStyle(size=0.1, border_size=0.01, shape=VLineGlyph(0.01), rotation=-90.0))
        self.assertRectAlmostEqual(turned, Rect.of(-0.055, 0.055, -0.0055, 0.0055))

    def test_glyph_and_line_charts(self) -> None:
        glyphs = Chart(GlyphA(GlyphStyle(size=0.1, border_size=0.0, shape=CircleGlyph())), (Point(0.0, 0.0), Point(1.0, 1.0)))
        self.assertRectAlmostEqual(style_box(glyphs), Rect.of(-0.05, 1.05, -0.05, 1.05))
        line = Chart(LineA(LineStyle(width=0.02)), (Point(0.0, 0.0), Point(1.0, 0.0)))
        self.assertRectAlmostEqual(style_box(line), Rect.of(-0.01, 1.01, -0.01, 0.01))

    def test_empty_charts_have_no_box(self) -> None:
        self.assertIsNone(style_box(Chart(BlankA(), ())))
        self.assertIsNone(style_boxes([]))

    def test_unknown_annotation_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            style_box(Chart(object(), (Point(0.0, 0.0),)))  # type: ignore[arg-type]

    def test_scaling_scales_style_box(self) -> None:
        c = Chart(RectA(RectStyle(border_size=0.02)), (Rect.of(0.0, 1.0, 0.0, 1.0),))
        self.assertRectAlmostEqual(style_box(scale_chart(2.0, c)), Rect.of(-0.02, 2.02, -0.02, 2.02))

    def test_scale_by_one_and_inverse(self) -> None:
        anns = [
            RectA(RectStyle()),
            TextA(TextStyle(), ("x",)),
            GlyphA(GlyphStyle()),
            LineA(LineStyle()),
            PathA(PathStyle()),
            BlankA(),
        ]
        for a in anns:
            self.assertEqual(scale_annotation(1.0, a), a)
        text = scale_annotation(1.0 / 3.0, scale_annotation(3.0, TextA(TextStyle(size=0.08), ("x",))))
        self.assertAlmostEqual(text.style.size, 0.08)
        line = scale_annotation(0.25, scale_annotation(4.0, LineA(LineStyle(width=0.012))))
        self.assertAlmostEqual(line.style.width, 0.012)

    def test_moving_text_moves_style_box(self) -> None:
        c = Chart(TextA(TextStyle(), ("label",)), (Point(0.0, 0.0),))
        before = style_box(c)
        after = style_boxes(move_chart(Point(1.0, -2.0), [c]))
        self.assertAlmostEqual(after.x0, before.x0 + 1.0)
        self.assertAlmostEqual(after.y1, before.y1 - 2.0)

    def test_pillow_measure_grows_with_text(self) -> None:
        measure = pillow_measure()
        self.assertEqual(measure(""), 0.0)
        self.assertGreater(measure("w"), 0.0)
        self.assertGreater(measure("wwww"), measure("w"))

    def test_measure_reaches_chart_boxes(self) -> None:
        c = Chart(TextA(TextStyle(size=0.1), ("ab",)), (Point(0.0, 0.0),))

        def wide(text: str) -> float:
            return 2.0 * glyph_count(text)

        self.assertAlmostEqual(style_box(c).width, 0.1)
        self.assertAlmostEqual(style_box(c, measure=wide).width, 0.2)
        self.assertAlmostEqual(style_boxes([c], measure=wide).width, 0.2)
        self.assertAlmostEqual(style_box(c, measure=pillow_measure()).width, 0.05 * pillow_measure()("ab"))


class PathBoxTests(unittest.TestCase):
    def test_quad_box_reaches_curve_extreme(self) -> None:
        box = path_boxes([(StartI(), Point(0.0, 0.0)), (QuadI(Point(1.0, 2.0)), Point(2.0, 0.0))])
        self.assertAlmostEqual(box.y1, 1.0)
        self.assertAlmostEqual(box.x1, 2.0)

    def test_cubic_box_reaches_curve_extreme(self) -> None:
        box = path_boxes([(StartI(), Point(0.0, 0.0)), (CubicI(Point(0.0, 1.0), Point(1.0, 1.0)), Point(1.0, 0.0))])
        self.assertAlmostEqual(box.y1, 0.75)
        self.assertAlmostEqual(box.x0, 0.0)
        self.assertAlmostEqual(box.x1, 1.0)

    def test_half_circle_arc_box(self) -> None:
        box = path_boxes([(StartI(), Point(-1.0, 0.0)), (ArcI(Point(1.0, 1.0), 0.0, False, True), Point(1.0, 0.0))])
        self.assertAlmostEqual(box.x0, -1.0)
        self.assertAlmostEqual(box.x1, 1.0)
        self.assertAlmostEqual(box.y0, -1.0)
        self.assertAlmostEqual(box.y1, 0.0)

    def test_path_chart_box_uses_segments(self) -> None:
        style = PathStyle(border_size=0.0, path_info=(StartI(), QuadI(Point(1.0, 2.0))))
        c = Chart(PathA(style), (Point(0.0, 0.0), Point(2.0, 0.0)))
        self.assertAlmostEqual(data_box(c).y1, 1.0)
        moved = move_chart(Point(0.0, 1.0), [c])[0]
        self.assertAlmostEqual(data_box(moved).y1, 2.0)

    def test_line_segments_bound_their_points(self) -> None:
        box = path_boxes([(StartI(), Point(0.0, 0.0)), (LineI(), Point(1.0, -1.0))])
        self.assertEqual(box, Rect.of(0.0, 1.0, -1.0, 0.0))
        self.assertIsNone(path_boxes([]))


class StyleCodecTests(unittest.TestCase):
    def test_enum_text_round_trips(self) -> None:
        for a in Anchor:
            self.assertEqual(to_anchor(from_anchor(a)), a)
        for o in Orientation:
            self.assertEqual(to_orientation(from_orientation(o)), o)
        for p in Place:
            self.assertEqual(to_place(place_text(p)), p)
        for s in SvgAspect:
            self.assertEqual(to_svg_aspect(from_svg_aspect(s)), s)

    def test_absolute_placement_text(self) -> None:
        p = to_place("Absolute", Point(0.2, 0.3))
        self.assertEqual(p, PlaceAbsolute(Point(0.2, 0.3)))
        self.assertEqual(place_text(p), "Absolute")

    def test_absolute_placement_text_drops_the_point(self) -> None:
        p = PlaceAbsolute(Point(0.2, 0.3))
        self.assertEqual(to_place(place_text(p)), PlaceAbsolute(Point(0.0, 0.0)))
        self.assertEqual(to_place(place_text(p), p.point), p)

    def test_unknown_text_falls_back_with_warning(self) -> None:
        with self.assertLogs("chart_hud.styles", level="WARNING"):
            self.assertEqual(to_anchor("Sideways"), Anchor.MIDDLE)
        with self.assertLogs("chart_hud.styles", level="WARNING"):
            self.assertEqual(to_place("Nowhere"), Place.BOTTOM)

    def test_negative_border_is_rejected(self) -> None:
        with self.assertRaises(HudConfigError):
            RectStyle(border_size=-0.1)

    def test_variant_text_labels(self) -> None:
        self.assertEqual(glyph_text(CircleGlyph()), "Circle")
        self.assertEqual(glyph_text(VLineGlyph(0.01)), "VLine")
        self.assertEqual(annotation_text(RectA(RectStyle())), "RectA")
        self.assertEqual(annotation_text(BlankA()), "BlankA")

    def test_rect_style_helpers(self) -> None:
        self.assertEqual(clear().border_size, 0.0)
        self.assertEqual(border(0.02, (1, 2, 3, 255)).border_color, (1, 2, 3, 255))
        c = rect_chart(clear(), [UNIT_RECT, Rect.of(1.0, 2.0, 1.0, 2.0)])
        self.assertEqual(style_box(c), Rect.of(-0.5, 2.0, -0.5, 2.0))


if __name__ == "__main__":
    unittest.main()
