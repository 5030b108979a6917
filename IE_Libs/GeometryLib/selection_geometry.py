"""
Polygon builders for the marquee, ellipse and pen selection tools.
"""

import math
from typing import List, Optional, Sequence, Tuple

from IE_Libs.GeometryLib.geometry_models import PenNode, Point, Rect
from IE_Libs.GeometryLib.geometry_utils import approximate_cubic_bezier
from IE_Libs.constants import (
    DEFAULT_BEZIER_STEPS,
    MIN_ELLIPSE_STEPS,
    PEN_CLOSE_THRESHOLD,
    PEN_DRAG_THRESHOLD,
)


def rect_polygon(rect: Rect) -> List[Point]:
    """Corners of rect, clockwise from the top-left."""
    return [
        Point(rect.x, rect.y),
        Point(rect.right, rect.y),
        Point(rect.right, rect.bottom),
        Point(rect.x, rect.bottom),
    ]


def ellipse_polygon(rect: Rect, steps: Optional[int] = None) -> List[Point]:
    """
    Polygon approximating the ellipse inscribed in rect.

    Args:
        rect: Bounding box of the ellipse
        steps: Vertex count; defaults to max(MIN_ELLIPSE_STEPS, (w + h) // 4)
    """
    if steps is None:
        steps = max(MIN_ELLIPSE_STEPS, int((rect.width + rect.height) // 4))
    center = rect.center
    rx = rect.width / 2
    ry = rect.height / 2
    points = []
    for i in range(steps):
        angle = (i / steps) * 2 * math.pi
        points.append(Point(center.x + rx * math.cos(angle), center.y + ry * math.sin(angle)))
    return points


def pen_node_from_drag(start: Point, current: Point) -> PenNode:
    """
    Pen node for a click (corner node) or click-and-drag (smooth node).

    Dragging sets the out handle at the pointer and mirrors the in handle
    through the anchor.
    """
    if start.distance_to(current) < PEN_DRAG_THRESHOLD:
        return PenNode.corner(start)
    mirrored = Point(start.x - (current.x - start.x), start.y - (current.y - start.y))
    return PenNode(anchor=start, in_handle=mirrored, out_handle=current)


def should_close_pen_path(nodes: Sequence[PenNode], point: Point) -> bool:
    """True when a click at point closes the pen path on its first anchor."""
    return len(nodes) > 2 and point.distance_to(nodes[0].anchor) < PEN_CLOSE_THRESHOLD


def flatten_pen_path(
    nodes: Sequence[PenNode],
    steps: int = DEFAULT_BEZIER_STEPS,
    bounds: Optional[Tuple[float, float]] = None,
) -> List[Point]:
    """
    Flatten a closed pen path into one polyline.

    Each node is joined to the next (the last wraps to the first) by a
    cubic through the node's out handle and the next node's in handle.

    Args:
        nodes: Pen nodes in drawing order
        steps: Subdivisions per segment
        bounds: Optional (width, height); points are clamped into it
    """
    points: List[Point] = []
    count = len(nodes)
    for i, node in enumerate(nodes):
        following = nodes[(i + 1) % count]
        points.extend(approximate_cubic_bezier(
            node.anchor, node.out_handle, following.in_handle, following.anchor, steps
        ))

    if bounds is not None:
        width, height = bounds
        points = [Point(max(0, min(p.x, width)), max(0, min(p.y, height))) for p in points]
    return points
