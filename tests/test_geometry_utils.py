"""
Unit tests for geometry models and geometry_utils.

Tests point containment, resize-handle classification, cursor lookup
and cubic Bezier flattening.
"""

import pytest

from IE_Libs.GeometryLib.geometry_models import (
    BezierSegment,
    CropResizeHandle,
    Point,
    Rect,
    as_point,
)
from IE_Libs.GeometryLib.geometry_utils import (
    approximate_cubic_bezier,
    flatten_segment,
    get_cursor_for_handle,
    get_handle_at_point,
    is_point_in_rect,
)


@pytest.fixture
def crop_rect():
    return Rect(10, 10, 100, 50)


class TestGeometryModels:
    """Tests for Point and Rect."""

    def test_rect_rejects_negative_size(self):
        with pytest.raises(ValueError):
            Rect(0, 0, -1, 5)

    def test_rect_edges(self, crop_rect):
        assert crop_rect.right == 110
        assert crop_rect.bottom == 60
        assert crop_rect.center == Point(60, 35)

    def test_rect_from_corners_normalizes(self):
        assert Rect.from_corners(Point(10, 10), Point(4, 2)) == Rect(4, 2, 6, 8)

    def test_as_point_accepts_pairs(self):
        assert as_point((3, 4)) == Point(3.0, 4.0)
        point = Point(1, 2)
        assert as_point(point) is point

    def test_handle_edge_flags(self):
        assert CropResizeHandle.TOP_LEFT.is_corner
        assert not CropResizeHandle.TOP.is_corner
        assert CropResizeHandle.BOTTOM_RIGHT.moves_right
        assert CropResizeHandle.BOTTOM_RIGHT.moves_bottom
        assert not CropResizeHandle.BOTTOM_RIGHT.moves_left


class TestIsPointInRect:
    """Tests for is_point_in_rect function."""

    def test_interior_point(self, crop_rect):
        assert is_point_in_rect(Point(50, 30), crop_rect)

    def test_edges_are_inclusive(self, crop_rect):
        """All four boundaries count as inside."""
        assert is_point_in_rect(Point(10, 10), crop_rect)
        assert is_point_in_rect(Point(110, 60), crop_rect)
        assert is_point_in_rect(Point(10, 60), crop_rect)
        assert is_point_in_rect(Point(110, 10), crop_rect)

    def test_outside_points(self, crop_rect):
        assert not is_point_in_rect(Point(110.01, 60), crop_rect)
        assert not is_point_in_rect(Point(9.99, 30), crop_rect)
        assert not is_point_in_rect(Point(50, 60.5), crop_rect)

    def test_zero_size_rect(self):
        assert is_point_in_rect(Point(5, 5), Rect(5, 5, 0, 0))


class TestGetHandleAtPoint:
    """Tests for get_handle_at_point function."""

    def test_corner_takes_priority_over_edges(self, crop_rect):
        """A point near top and left edges is topLeft, never top or left."""
        assert get_handle_at_point(Point(12, 12), crop_rect) == CropResizeHandle.TOP_LEFT

    @pytest.mark.parametrize("point, expected", [
        (Point(113, 10), CropResizeHandle.TOP_RIGHT),
        (Point(8, 58), CropResizeHandle.BOTTOM_LEFT),
        (Point(108, 62), CropResizeHandle.BOTTOM_RIGHT),
        (Point(60, 10), CropResizeHandle.TOP),
        (Point(60, 63), CropResizeHandle.BOTTOM),
        (Point(10, 35), CropResizeHandle.LEFT),
        (Point(110, 35), CropResizeHandle.RIGHT),
    ])
    def test_each_handle(self, crop_rect, point, expected):
        assert get_handle_at_point(point, crop_rect) == expected

    def test_interior_point_has_no_handle(self, crop_rect):
        assert get_handle_at_point(Point(60, 35), crop_rect) is None

    def test_tolerance_is_strict(self, crop_rect):
        """Exactly tolerance away from the edge is not on it."""
        assert get_handle_at_point(Point(60, 15), crop_rect) is None
        assert get_handle_at_point(Point(60, 14.9), crop_rect) == CropResizeHandle.TOP

    def test_outside_edge_span(self, crop_rect):
        """On the top edge's line but beyond its extended span."""
        assert get_handle_at_point(Point(120, 10), crop_rect) is None

    def test_custom_tolerance(self, crop_rect):
        assert get_handle_at_point(Point(60, 18), crop_rect) is None
        assert get_handle_at_point(Point(60, 18), crop_rect, tolerance=10) == CropResizeHandle.TOP


class TestGetCursorForHandle:
    """Tests for get_cursor_for_handle function."""

    @pytest.mark.parametrize("handle, cursor", [
        (CropResizeHandle.TOP_LEFT, "nwse-resize"),
        (CropResizeHandle.BOTTOM_RIGHT, "nwse-resize"),
        (CropResizeHandle.TOP_RIGHT, "nesw-resize"),
        (CropResizeHandle.BOTTOM_LEFT, "nesw-resize"),
        (CropResizeHandle.TOP, "ns-resize"),
        (CropResizeHandle.BOTTOM, "ns-resize"),
        (CropResizeHandle.LEFT, "ew-resize"),
        (CropResizeHandle.RIGHT, "ew-resize"),
    ])
    def test_cursor_lookup(self, handle, cursor):
        assert get_cursor_for_handle(handle) == cursor

    def test_no_handle(self):
        assert get_cursor_for_handle(None) == ""

    def test_accepts_handle_names(self):
        assert get_cursor_for_handle("top") == "ns-resize"


class TestApproximateCubicBezier:
    """Tests for approximate_cubic_bezier function."""

    def test_default_step_count(self):
        points = approximate_cubic_bezier(Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0))
        assert len(points) == 21

    def test_includes_both_endpoints(self):
        points = approximate_cubic_bezier(Point(1, 2), Point(5, 9), Point(7, -3), Point(11, 4), steps=7)
        assert len(points) == 8
        assert points[0] == Point(1, 2)
        assert points[-1] == Point(11, 4)

    def test_degenerate_controls_collapse_to_line(self):
        points = approximate_cubic_bezier(Point(0, 0), Point(0, 0), Point(10, 10), Point(10, 10), 1)
        assert points == [Point(0, 0), Point(10, 10)]

    def test_midpoint_value(self):
        points = approximate_cubic_bezier(Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0), steps=2)
        assert points[1].x == pytest.approx(5)
        assert points[1].y == pytest.approx(7.5)

    def test_straight_controls_stay_on_line(self):
        points = approximate_cubic_bezier(Point(0, 0), Point(3, 3), Point(6, 6), Point(9, 9), steps=10)
        for point in points:
            assert point.x == pytest.approx(point.y)

    def test_rejects_zero_steps(self):
        with pytest.raises(ValueError):
            approximate_cubic_bezier(Point(0, 0), Point(1, 1), Point(2, 2), Point(3, 3), steps=0)

    def test_flatten_segment(self):
        segment = BezierSegment(Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0))
        assert flatten_segment(segment, 4) == approximate_cubic_bezier(
            segment.p0, segment.p1, segment.p2, segment.p3, 4
        )
