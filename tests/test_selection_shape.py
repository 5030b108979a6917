"""
Unit tests for selection shapes.

Tests path command flattening, polygon construction, add/subtract
stroke orientation and validation.
"""

import pytest

from IE_Libs.GeometryLib.geometry_models import Point, Rect
from IE_Libs.MaskLib.selection_shape import (
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    SelectionShape,
    SelectionStroke,
    signed_area,
)

SQUARE = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]


class TestSignedArea:
    """Tests for signed_area function."""

    def test_clockwise_is_positive(self):
        assert signed_area(SQUARE) == 16

    def test_counter_clockwise_is_negative(self):
        assert signed_area(list(reversed(SQUARE))) == -16


class TestFromPolygons:
    """Tests for SelectionShape.from_polygons."""

    def test_closed_polygon_commands(self):
        shape = SelectionShape.from_polygons([SQUARE])
        assert shape.commands == (
            MoveTo(Point(0, 0)),
            LineTo(Point(4, 0)),
            LineTo(Point(4, 4)),
            LineTo(Point(0, 4)),
            ClosePath(),
        )

    def test_short_polygons(self):
        """Single points are dropped and 2-point polygons stay open."""
        shape = SelectionShape.from_polygons([[Point(1, 1)], [(0, 0), (5, 5)]])
        assert shape.commands == (MoveTo(Point(0, 0)), LineTo(Point(5, 5)))

    def test_from_rect(self):
        shape = SelectionShape.from_rect(Rect(1, 2, 3, 4))
        assert shape.flatten() == [[Point(1, 2), Point(4, 2), Point(4, 6), Point(1, 6)]]

    def test_fill_rule_kept(self):
        assert SelectionShape.from_polygons([SQUARE], "evenodd").fill_rule == "evenodd"


class TestFlatten:
    """Tests for SelectionShape.flatten."""

    def test_curve_is_subdivided(self):
        shape = SelectionShape((
            MoveTo(Point(0, 0)),
            CurveTo(Point(0, 10), Point(10, 10), Point(10, 0)),
            ClosePath(),
        ))
        polygons = shape.flatten(steps=4)
        assert len(polygons) == 1
        assert len(polygons[0]) == 5
        assert polygons[0][0] == Point(0, 0)
        assert polygons[0][-1] == Point(10, 0)

    def test_subpath_restarts_after_close(self):
        """A LineTo after ClosePath continues from the closed subpath's start."""
        shape = SelectionShape((
            MoveTo(Point(0, 0)),
            LineTo(Point(4, 0)),
            LineTo(Point(4, 4)),
            ClosePath(),
            LineTo(Point(-4, 0)),
            LineTo(Point(-4, -4)),
        ))
        assert shape.flatten() == [
            [Point(0, 0), Point(4, 0), Point(4, 4)],
            [Point(0, 0), Point(-4, 0), Point(-4, -4)],
        ]

    def test_line_without_move_starts_subpath(self):
        shape = SelectionShape((LineTo(Point(1, 1)), LineTo(Point(2, 0)), LineTo(Point(0, 0))))
        assert shape.flatten() == [[Point(1, 1), Point(2, 0), Point(0, 0)]]

    def test_unknown_command(self):
        shape = SelectionShape(("bogus",))
        with pytest.raises(TypeError):
            shape.flatten()


class TestEmptyAndTranslate:
    """Tests for is_empty and translated."""

    def test_empty_shape(self):
        assert SelectionShape().is_empty

    def test_open_line_is_empty(self):
        assert SelectionShape.from_polygons([[(0, 0), (5, 5)]]).is_empty

    def test_polygon_not_empty(self):
        assert not SelectionShape.from_polygons([SQUARE]).is_empty

    def test_translated(self):
        shape = SelectionShape((
            MoveTo(Point(0, 0)),
            CurveTo(Point(1, 1), Point(2, 2), Point(3, 3)),
            ClosePath(),
        ), "evenodd")
        moved = shape.translated(10, -1)
        assert moved.commands == (
            MoveTo(Point(10, -1)),
            CurveTo(Point(11, 0), Point(12, 1), Point(13, 2)),
            ClosePath(),
        )
        assert moved.fill_rule == "evenodd"
        assert shape.commands[0] == MoveTo(Point(0, 0))


class TestFromStrokes:
    """Tests for SelectionShape.from_strokes."""

    def test_add_stroke_is_clockwise(self):
        stroke = SelectionStroke(tuple(reversed(SQUARE)))
        polygon = SelectionShape.from_strokes([stroke]).flatten()[0]
        assert signed_area(polygon) > 0

    def test_subtract_stroke_is_counter_clockwise(self):
        stroke = SelectionStroke(tuple(SQUARE), op="subtract")
        polygon = SelectionShape.from_strokes([stroke]).flatten()[0]
        assert signed_area(polygon) < 0

    def test_inverted_flips_orientation(self):
        stroke = SelectionStroke(tuple(SQUARE))
        polygons = SelectionShape.from_strokes([stroke], inverted=True, bounds=(10, 10)).flatten()
        assert len(polygons) == 2
        assert polygons[0] == [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        assert signed_area(polygons[1]) < 0

    def test_inverted_requires_bounds(self):
        with pytest.raises(ValueError):
            SelectionShape.from_strokes([], inverted=True)

    def test_always_nonzero(self):
        stroke = SelectionStroke(tuple(SQUARE))
        assert SelectionShape.from_strokes([stroke]).fill_rule == "nonzero"

    def test_stroke_points_normalized(self):
        stroke = SelectionStroke(((0, 0), (1, 2)))
        assert stroke.points == (Point(0, 0), Point(1, 2))


class TestValidation:
    """Tests for fill rule and stroke op validation."""

    def test_invalid_fill_rule(self):
        with pytest.raises(ValueError, match="Unknown fill rule"):
            SelectionShape((), "winding")

    def test_invalid_stroke_op(self):
        with pytest.raises(ValueError, match="Unknown stroke op"):
            SelectionStroke(tuple(SQUARE), op="intersect")
