"""
Scanline rasterizer for selection shapes.

Produces hard-edged coverage masks without depending on any host
path-filling implementation. A pixel is covered when its center
``(x + 0.5, y + 0.5)`` is inside the shape under the shape's fill rule.
Edges cover the half-open row span ``[y_min, y_max)`` so shared vertices
are counted once.
"""

from typing import List, Tuple

import numpy as np

from IE_Libs.MaskLib.selection_shape import SelectionShape
from IE_Libs.constants import DEFAULT_BEZIER_STEPS, FILL_RULE_EVENODD

COVERED = 255


def _collect_edges(polygons: List[list], offset: Tuple[float, float]) -> np.ndarray:
    """All closing edges as an (n, 4) array of x0, y0, x1, y1."""
    edges = []
    ox, oy = offset
    for polygon in polygons:
        pts = np.array([(p.x + ox, p.y + oy) for p in polygon], dtype=np.float64)
        edges.append(np.hstack([pts, np.roll(pts, -1, axis=0)]))
    if not edges:
        return np.empty((0, 4), dtype=np.float64)
    return np.vstack(edges)


def rasterize(
    shape: SelectionShape,
    width: int,
    height: int,
    offset: Tuple[float, float] = (0.0, 0.0),
    steps: int = DEFAULT_BEZIER_STEPS,
) -> np.ndarray:
    """
    Rasterize shape into a hard 0/255 mask.

    Args:
        shape: Selection to fill (not modified)
        width: Mask width in pixels
        height: Mask height in pixels
        offset: (dx, dy) added to every shape coordinate
        steps: Curve flattening subdivisions

    Returns:
        uint8 array of shape (height, width) holding only 0 and 255

    Raises:
        ValueError: If width or height is negative
    """
    if width < 0 or height < 0:
        raise ValueError(f"Mask size must be non-negative, got {width}x{height}")

    mask = np.zeros((height, width), dtype=np.uint8)
    edges = _collect_edges(shape.flatten(steps), offset)
    if width == 0 or height == 0 or len(edges) == 0:
        return mask

    x0, y0, x1, y1 = edges.T
    sloped = y0 != y1
    x0, y0, x1, y1 = x0[sloped], y0[sloped], x1[sloped], y1[sloped]

    top = np.minimum(y0, y1)
    bottom = np.maximum(y0, y1)
    row_start = np.clip(np.ceil(top - 0.5), 0, height).astype(np.intp)
    row_end = np.clip(np.ceil(bottom - 0.5), 0, height).astype(np.intp)
    counts = np.maximum(row_end - row_start, 0)
    total = int(counts.sum())
    if total == 0:
        return mask

    # One entry per (edge, scanline) pair.
    edge_index = np.repeat(np.arange(len(counts)), counts)
    first_entry = np.repeat(np.cumsum(counts) - counts, counts)
    rows = row_start[edge_index] + (np.arange(total) - first_entry)

    center_y = rows + 0.5
    crossing_x = x0[edge_index] + (center_y - y0[edge_index]) * (
        (x1[edge_index] - x0[edge_index]) / (y1[edge_index] - y0[edge_index])
    )
    # Pixels whose centers lie strictly left of the crossing see it on their +x ray.
    limit = np.clip(np.ceil(crossing_x - 0.5), 0, width).astype(np.intp)
    direction = np.where(y1 > y0, 1, -1)[edge_index].astype(np.int32)

    if shape.fill_rule == FILL_RULE_EVENODD:
        weights = np.ones_like(direction)
    else:
        weights = direction

    accumulator = np.zeros((height, width + 1), dtype=np.int32)
    np.add.at(accumulator, (rows, np.zeros_like(rows)), weights)
    np.add.at(accumulator, (rows, limit), -weights)
    totals = np.cumsum(accumulator, axis=1)[:, :width]

    if shape.fill_rule == FILL_RULE_EVENODD:
        inside = (totals % 2) == 1
    else:
        inside = totals != 0
    mask[inside] = COVERED
    return mask
