from __future__ import annotations

import unittest

from chart_hud.geometry import (
    UNIT_RECT,
    Point,
    Range,
    Rect,
    fix_rect,
    fold_rects,
    pad_rect,
    project,
    project_point,
    project_rect,
    rotate_rect,
    space1,
    union,
)


def _assert_rect_close(case: unittest.TestCase, a: Rect, b: Rect, places: int = 9) -> None:
    for got, want in zip((a.x0, a.x1, a.y0, a.y1), (b.x0, b.x1, b.y0, b.y1)):
        case.assertAlmostEqual(got, want, places=places)


class GeometryTests(unittest.TestCase):
    def test_projection_onto_same_range_is_identity(self) -> None:
        r = Range(3.0, 7.0)
        for v in (-1.0, 3.0, 5.5, 9.0):
            self.assertEqual(project(v, r, r), v)

    def test_projection_round_trips(self) -> None:
        a = Rect.of(0.0, 97.0, -3.0, 12.0)
        b = Rect.of(-0.75, 0.75, -0.5, 0.5)
        r = Rect.of(10.0, 20.0, 0.0, 4.0)
        _assert_rect_close(self, project_rect(project_rect(r, a, b), b, a), r)

    def test_projection_maps_endpoints(self) -> None:
        p = project_point(Point(100.0, 0.0), Rect.of(0.0, 100.0, 0.0, 1.0), UNIT_RECT)
        self.assertAlmostEqual(p.x, 0.5)
        self.assertAlmostEqual(p.y, -0.5)

    def test_zero_width_source_collapses_onto_target_midpoint(self) -> None:
        self.assertEqual(project(5.0, Range(5.0, 5.0), Range(0.0, 10.0)), 5.0)
        self.assertEqual(project(2.0, Range(2.0, 2.0), Range(-1.0, 3.0)), 1.0)

    def test_padding_then_negative_padding_is_identity(self) -> None:
        r = Rect.of(-0.5, 0.5, -0.25, 1.0)
        _assert_rect_close(self, pad_rect(pad_rect(r, 0.2), -0.2), r)

    def test_union_is_commutative_and_idempotent(self) -> None:
        a = Rect.of(0.0, 1.0, 0.0, 1.0)
        b = Rect.of(-2.0, 0.5, 0.5, 3.0)
        self.assertEqual(union(a, b), union(b, a))
        self.assertEqual(union(a, a), a)
        self.assertEqual(union(a, b), Rect.of(-2.0, 1.0, 0.0, 3.0))

    def test_union_is_associative(self) -> None:
        a = Rect.of(0.0, 1.0, 0.0, 1.0)
        b = Rect.of(-2.0, 0.5, 0.5, 3.0)
        c = Rect.of(0.25, 4.0, -1.5, 0.75)
        self.assertEqual(union(union(a, b), c), union(a, union(b, c)))
        self.assertEqual(fold_rects([a, b, c]), Rect.of(-2.0, 4.0, -1.5, 3.0))

    def test_fold_of_nothing_is_none(self) -> None:
        self.assertIsNone(fold_rects([]))
        self.assertIsNone(space1([]))
        self.assertEqual(space1([3.0, -1.0, 2.0]), Range(-1.0, 3.0))

    def test_rotating_a_rect_by_quarter_turn_swaps_extents(self) -> None:
        r = rotate_rect(90.0, Rect.of(-1.0, 1.0, -0.25, 0.25))
        _assert_rect_close(self, r, Rect.of(-0.25, 0.25, -1.0, 1.0))

    def test_fix_rect_widens_degenerate_dimensions(self) -> None:
        self.assertEqual(fix_rect(None), UNIT_RECT)
        self.assertEqual(fix_rect(Rect.of(2.0, 2.0, 0.0, 4.0)), Rect.of(1.5, 2.5, 0.0, 4.0))
        self.assertEqual(fix_rect(Rect.of(0.0, 1.0, 0.0, 1.0)), Rect.of(0.0, 1.0, 0.0, 1.0))


if __name__ == "__main__":
    unittest.main()
