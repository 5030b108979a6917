"""
Perspective (projective) transform engine.

Solves the homography mapping four source points onto four destination
points and resamples a PixelBuffer through it with bilinear interpolation.

Functions:
    compute_transform: Homography from 4 point correspondences
    apply_transform: Forward-map a single point
    warp: Inverse-mapped bilinear resampling into a new buffer
    perspective_crop: Rectify a user-picked quadrilateral of an image

Example:
    >>> quad = [Point(12, 8), Point(410, 30), Point(395, 300), Point(20, 280)]
    >>> flat = perspective_crop(PixelBuffer.from_image(img), quad)
    >>> flat.to_image().save("document.png")
"""

import logging
import math
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from IE_Libs.GeometryLib.crop_tools import perspective_output_size
from IE_Libs.GeometryLib.geometry_models import Point, as_point
from IE_Libs.ImageEditingLib.image_models import PixelBuffer
from IE_Libs.TransformLib.linear_solver import Matrix3x3, invert_3x3, solve
from IE_Libs.constants import SAMPLE_EPSILON

logger = logging.getLogger(__name__)

CORRESPONDENCE_COUNT = 4


class PerspectiveCropError(ValueError):
    """The selected corners do not form a usable quadrilateral."""


def compute_transform(src: Sequence[Any], dst: Sequence[Any]) -> Optional[Matrix3x3]:
    """
    Solve the projective transform taking each src point to its dst point.

    Each correspondence contributes two rows to an 8x8 system in the
    unknowns a..h of ``[[a, b, c], [d, e, f], [g, h, 1]]``. The two point
    lists must use the same corner order; a mismatched order still solves
    but yields the wrong mapping.

    Args:
        src: 4 source points (Point or (x, y))
        dst: 4 destination points (Point or (x, y))

    Returns:
        Row-major 9-tuple with the last entry 1, or None when the points
        are degenerate (collinear or repeated)

    Raises:
        ValueError: If either list does not hold exactly 4 points
    """
    if len(src) != CORRESPONDENCE_COUNT or len(dst) != CORRESPONDENCE_COUNT:
        raise ValueError(
            f"Perspective transform needs {CORRESPONDENCE_COUNT} point pairs, "
            f"got {len(src)} source and {len(dst)} destination points"
        )

    rows = []
    rhs = []
    for s, d in zip(map(as_point, src), map(as_point, dst)):
        rows.append([s.x, s.y, 1, 0, 0, 0, -s.x * d.x, -s.y * d.x])
        rhs.append(d.x)
        rows.append([0, 0, 0, s.x, s.y, 1, -s.x * d.y, -s.y * d.y])
        rhs.append(d.y)

    h = solve(rows, rhs)
    if h is None:
        logger.warning("Degenerate point correspondences, no perspective transform")
        return None

    matrix = tuple(float(v) for v in h) + (1.0,)
    logger.debug(f"Solved perspective transform {matrix}")
    return matrix


def apply_transform(matrix: Sequence[float], point: Any) -> Optional[Point]:
    """Map a point through matrix; None if it lands on the line at infinity."""
    p = as_point(point)
    denominator = matrix[6] * p.x + matrix[7] * p.y + matrix[8]
    if denominator == 0:
        return None
    return Point(
        (matrix[0] * p.x + matrix[1] * p.y + matrix[2]) / denominator,
        (matrix[3] * p.x + matrix[4] * p.y + matrix[5]) / denominator,
    )


def warp(
    source: PixelBuffer,
    dest_width: int,
    dest_height: int,
    transform: Sequence[float],
) -> Optional[PixelBuffer]:
    """
    Resample source into a new dest_width x dest_height buffer.

    Every destination pixel is mapped back through the inverse transform.
    Source coordinates inside the sampleable area are bilinearly blended
    from their four neighbouring texels, each of R, G, B, A independently
    (straight alpha) and rounded half up. Everything else stays transparent
    black, so the output is a hard cutout of the source's footprint.

    The sampleable area is ``[0, w-1] x [0, h-1]``; the +1 neighbour index
    is clamped on the last row/column so the source is never read out of
    bounds and identity warps reproduce every pixel.

    Args:
        source: Buffer to sample from (not modified)
        dest_width: Output width in pixels
        dest_height: Output height in pixels
        transform: Forward source -> destination matrix (9 floats)

    Returns:
        New PixelBuffer, or None if the transform is not invertible

    Raises:
        TypeError: If source is not a PixelBuffer
        ValueError: If the destination size is negative
    """
    if not isinstance(source, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(source)}")
    if dest_width < 0 or dest_height < 0:
        raise ValueError(f"Destination size must be non-negative, got {dest_width}x{dest_height}")

    inv = invert_3x3(transform)
    if inv is None:
        logger.warning("Perspective transform is singular, nothing warped")
        return None

    dest = PixelBuffer.blank(dest_width, dest_height)
    src_w, src_h = source.width, source.height
    if src_w == 0 or src_h == 0 or dest_width == 0 or dest_height == 0:
        return dest

    ys, xs = np.mgrid[0:dest_height, 0:dest_width].astype(np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        denominator = inv[6] * xs + inv[7] * ys + inv[8]
        src_x = (inv[0] * xs + inv[1] * ys + inv[2]) / denominator
        src_y = (inv[3] * xs + inv[4] * ys + inv[5]) / denominator

    max_x = src_w - 1
    max_y = src_h - 1
    inside = (
        (src_x >= -SAMPLE_EPSILON) & (src_x <= max_x + SAMPLE_EPSILON)
        & (src_y >= -SAMPLE_EPSILON) & (src_y <= max_y + SAMPLE_EPSILON)
    )
    if not inside.any():
        return dest

    sx = np.clip(src_x[inside], 0, max_x)
    sy = np.clip(src_y[inside], 0, max_y)
    x0 = np.floor(sx).astype(np.intp)
    y0 = np.floor(sy).astype(np.intp)
    x1 = np.minimum(x0 + 1, max_x)
    y1 = np.minimum(y0 + 1, max_y)
    frac_x = (sx - x0)[:, None]
    frac_y = (sy - y0)[:, None]

    texels = source.data.astype(np.float64)
    top = texels[y0, x0] * (1 - frac_x) + texels[y0, x1] * frac_x
    bottom = texels[y1, x0] * (1 - frac_x) + texels[y1, x1] * frac_x
    blended = top * (1 - frac_y) + bottom * frac_y

    dest.data[inside] = np.clip(np.floor(blended + 0.5), 0, 255).astype(np.uint8)
    logger.debug(f"Warped {src_w}x{src_h} -> {dest_width}x{dest_height}, {int(inside.sum())} pixels sampled")
    return dest


def perspective_crop(
    source: PixelBuffer,
    quad: Sequence[Any],
    scale: Optional[Tuple[float, float]] = None,
) -> PixelBuffer:
    """
    Rectify the quadrilateral quad of source into an upright image.

    Args:
        source: Full-resolution image buffer
        quad: Corners ordered top-left, top-right, bottom-right, bottom-left
        scale: Optional (sx, sy) from preview to source coordinates

    Returns:
        New buffer sized by the longer of each pair of opposite quad edges

    Raises:
        PerspectiveCropError: If the corners are degenerate
    """
    corners = [as_point(p) for p in quad]
    if scale is not None:
        corners = [p.scaled(scale[0], scale[1]) for p in corners]

    width, height = perspective_output_size(corners)
    targets = [Point(0, 0), Point(width, 0), Point(width, height), Point(0, height)]

    transform = compute_transform(corners, targets)
    if transform is None:
        raise PerspectiveCropError(
            "Could not apply perspective crop: the points do not form a valid quadrilateral"
        )

    result = warp(source, int(math.floor(width + 0.5)), int(math.floor(height + 0.5)), transform)
    if result is None:
        raise PerspectiveCropError("Perspective transform could not be inverted")
    return result
