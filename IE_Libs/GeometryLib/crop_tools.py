"""
Crop and perspective-crop tool geometry.

Pure helpers the crop tools call while the user drags: aspect-ratio
parsing, drawing/moving/resizing the crop rectangle, hit-testing the four
perspective corners, and sizing the perspective crop output.
"""

from typing import Optional, Sequence, Tuple

from IE_Libs.GeometryLib.geometry_models import CropResizeHandle, Point, Rect
from IE_Libs.constants import HANDLE_SIZE, RATIO_FREE, RATIO_ORIGINAL


def get_ratio_value(
    ratio: str,
    image_size: Optional[Tuple[float, float]] = None,
) -> Optional[float]:
    """
    Parse an aspect-ratio option into width / height.

    Args:
        ratio: 'Free', 'Original' or 'W:H' (e.g. '16:9')
        image_size: (width, height) of the image, needed for 'Original'

    Returns:
        The ratio as a float, or None for free-form / unparseable input
    """
    if ratio == RATIO_FREE:
        return None
    if ratio == RATIO_ORIGINAL:
        if image_size is None or not image_size[1]:
            return None
        return image_size[0] / image_size[1]

    parts = ratio.split(":")
    if len(parts) != 2:
        return None
    try:
        w, h = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if h == 0:
        return None
    return w / h


def rect_from_drag(start: Point, current: Point, ratio: Optional[float] = None) -> Rect:
    """
    Rectangle drawn by dragging from start to current.

    With a ratio the longer side (relative to the ratio) drives the other.
    """
    width = current.x - start.x
    height = current.y - start.y
    if ratio:
        if abs(width) > abs(height) * ratio:
            height = width / ratio
        else:
            width = height * ratio
    return Rect(
        start.x if width > 0 else start.x + width,
        start.y if height > 0 else start.y + height,
        abs(width),
        abs(height),
    )


def move_rect_within(
    rect: Rect,
    dx: float,
    dy: float,
    bounds_width: float,
    bounds_height: float,
) -> Rect:
    """Translate rect by (dx, dy), keeping it inside the bounds."""
    x = max(0, min(rect.x + dx, bounds_width - rect.width))
    y = max(0, min(rect.y + dy, bounds_height - rect.height))
    return Rect(x, y, rect.width, rect.height)


def resize_rect(
    rect: Rect,
    handle: CropResizeHandle,
    point: Point,
    ratio: Optional[float] = None,
) -> Rect:
    """
    Resize rect by dragging one of its handles to point.

    The edges opposite the dragged handle stay fixed and sizes never go
    negative. With a ratio, edge handles rescale the other axis around the
    original center, and corner handles derive height from width while
    keeping the opposite corner anchored.

    Args:
        rect: Rectangle at the start of the drag
        handle: Handle being dragged
        point: Current pointer position
        ratio: Optional width / height constraint

    Returns:
        The resized rectangle
    """
    handle = CropResizeHandle(handle)
    right = rect.right
    bottom = rect.bottom
    x, y, width, height = rect.x, rect.y, rect.width, rect.height

    if handle.moves_right:
        width = max(0, point.x - rect.x)
    if handle.moves_bottom:
        height = max(0, point.y - rect.y)
    if handle.moves_left:
        width = max(0, right - point.x)
        x = right - width
    if handle.moves_top:
        height = max(0, bottom - point.y)
        y = bottom - height

    if ratio:
        if not handle.is_corner:
            center = rect.center
            if handle in (CropResizeHandle.TOP, CropResizeHandle.BOTTOM):
                width = height * ratio
                x = center.x - width / 2
            else:
                height = width / ratio
                y = center.y - height / 2
        else:
            height = width / ratio
            if handle.moves_top:
                y = bottom - height

    return Rect(x, y, width, height)


def find_point_handle(
    point: Point,
    points: Sequence[Point],
    radius: float = HANDLE_SIZE,
) -> Optional[int]:
    """Index of the first point closer than radius to point, or None."""
    for index, candidate in enumerate(points):
        if point.distance_to(candidate) < radius:
            return index
    return None


def perspective_output_size(quad: Sequence[Point]) -> Tuple[float, float]:
    """
    Output size for rectifying a quadrilateral.

    Args:
        quad: Corners ordered top-left, top-right, bottom-right, bottom-left

    Returns:
        (width, height): the longer of each pair of opposite edges

    Raises:
        ValueError: If quad does not have exactly 4 points
    """
    if len(quad) != 4:
        raise ValueError(f"Perspective crop needs 4 corner points, got {len(quad)}")
    tl, tr, br, bl = quad
    width = max(br.distance_to(bl), tr.distance_to(tl))
    height = max(tr.distance_to(br), tl.distance_to(bl))
    return width, height
