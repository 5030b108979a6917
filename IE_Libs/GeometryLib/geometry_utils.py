"""
Core geometry helpers driving the interactive tools.

Functions:
    is_point_in_rect: Inclusive point/rectangle containment
    get_handle_at_point: Classify a point against a rectangle's resize handles
    get_cursor_for_handle: Resize cursor for a handle
    approximate_cubic_bezier: Flatten a cubic Bezier into a polyline
    flatten_segment: approximate_cubic_bezier for a BezierSegment
"""

from typing import List, Optional

from IE_Libs.GeometryLib.geometry_models import BezierSegment, CropResizeHandle, Point, Rect
from IE_Libs.constants import (
    CURSOR_DEFAULT,
    CURSOR_EW,
    CURSOR_NESW,
    CURSOR_NS,
    CURSOR_NWSE,
    DEFAULT_BEZIER_STEPS,
    HANDLE_TOLERANCE,
)

_HANDLE_CURSORS = {
    CropResizeHandle.TOP_LEFT: CURSOR_NWSE,
    CropResizeHandle.BOTTOM_RIGHT: CURSOR_NWSE,
    CropResizeHandle.TOP_RIGHT: CURSOR_NESW,
    CropResizeHandle.BOTTOM_LEFT: CURSOR_NESW,
    CropResizeHandle.TOP: CURSOR_NS,
    CropResizeHandle.BOTTOM: CURSOR_NS,
    CropResizeHandle.LEFT: CURSOR_EW,
    CropResizeHandle.RIGHT: CURSOR_EW,
}


def is_point_in_rect(point: Point, rect: Rect) -> bool:
    """Return True if point lies inside rect; all four edges count as inside."""
    return rect.x <= point.x <= rect.right and rect.y <= point.y <= rect.bottom


def get_handle_at_point(
    point: Point,
    rect: Rect,
    tolerance: float = HANDLE_TOLERANCE,
) -> Optional[CropResizeHandle]:
    """
    Find the resize handle of rect under point.

    A point closer than ``tolerance`` to an edge line is on that edge.
    Corners are checked before single edges, so a point near both the
    top and left edges is TOP_LEFT. Single edges additionally require the
    point to be within the edge's span extended by ``tolerance``.

    Args:
        point: Pointer position in image space
        rect: Current crop rectangle
        tolerance: Hit distance, half of HANDLE_SIZE by default

    Returns:
        The handle under the point, or None
    """
    on_top = abs(point.y - rect.y) < tolerance
    on_bottom = abs(point.y - rect.bottom) < tolerance
    on_left = abs(point.x - rect.x) < tolerance
    on_right = abs(point.x - rect.right) < tolerance
    within_y = rect.y - tolerance < point.y < rect.bottom + tolerance
    within_x = rect.x - tolerance < point.x < rect.right + tolerance

    if on_top and on_left:
        return CropResizeHandle.TOP_LEFT
    if on_top and on_right:
        return CropResizeHandle.TOP_RIGHT
    if on_bottom and on_left:
        return CropResizeHandle.BOTTOM_LEFT
    if on_bottom and on_right:
        return CropResizeHandle.BOTTOM_RIGHT
    if on_top and within_x:
        return CropResizeHandle.TOP
    if on_bottom and within_x:
        return CropResizeHandle.BOTTOM
    if on_left and within_y:
        return CropResizeHandle.LEFT
    if on_right and within_y:
        return CropResizeHandle.RIGHT
    return None


def get_cursor_for_handle(handle: Optional[CropResizeHandle]) -> str:
    """Map a handle to its resize cursor name ('' for no handle)."""
    if handle is None:
        return CURSOR_DEFAULT
    return _HANDLE_CURSORS.get(CropResizeHandle(handle), CURSOR_DEFAULT)


def approximate_cubic_bezier(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    steps: int = DEFAULT_BEZIER_STEPS,
) -> List[Point]:
    """
    Sample a cubic Bezier at ``steps + 1`` uniform parameter values.

    The result is an open polyline that always starts at p0 (t=0) and
    ends at p3 (t=1).

    Raises:
        ValueError: If steps < 1
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    points: List[Point] = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        uu = u * u
        tt = t * t
        w0 = uu * u
        w1 = 3 * uu * t
        w2 = 3 * u * tt
        w3 = tt * t
        points.append(Point(
            w0 * p0.x + w1 * p1.x + w2 * p2.x + w3 * p3.x,
            w0 * p0.y + w1 * p1.y + w2 * p2.y + w3 * p3.y,
        ))
    return points


def flatten_segment(segment: BezierSegment, steps: int = DEFAULT_BEZIER_STEPS) -> List[Point]:
    return approximate_cubic_bezier(segment.p0, segment.p1, segment.p2, segment.p3, steps)
