"""
GeometryLib - Computational geometry for the interactive tools

Point/rectangle models, resize-handle hit testing, Bezier flattening,
crop rectangle manipulation and selection polygon builders.
"""

from IE_Libs.GeometryLib.geometry_models import (
    Point,
    Rect,
    CropResizeHandle,
    BezierSegment,
    PenNode,
    as_point,
)
from IE_Libs.GeometryLib.geometry_utils import (
    is_point_in_rect,
    get_handle_at_point,
    get_cursor_for_handle,
    approximate_cubic_bezier,
    flatten_segment,
)
from IE_Libs.GeometryLib.crop_tools import (
    get_ratio_value,
    rect_from_drag,
    move_rect_within,
    resize_rect,
    find_point_handle,
    perspective_output_size,
)
from IE_Libs.GeometryLib.selection_geometry import (
    rect_polygon,
    ellipse_polygon,
    pen_node_from_drag,
    should_close_pen_path,
    flatten_pen_path,
)

__all__ = [
    "Point",
    "Rect",
    "CropResizeHandle",
    "BezierSegment",
    "PenNode",
    "as_point",
    "is_point_in_rect",
    "get_handle_at_point",
    "get_cursor_for_handle",
    "approximate_cubic_bezier",
    "flatten_segment",
    "get_ratio_value",
    "rect_from_drag",
    "move_rect_within",
    "resize_rect",
    "find_point_handle",
    "perspective_output_size",
    "rect_polygon",
    "ellipse_polygon",
    "pen_node_from_drag",
    "should_close_pen_path",
    "flatten_pen_path",
]
