"""
TransformLib - Linear algebra and perspective resampling

Gaussian elimination with partial pivoting, 3x3 inversion, homography
solving from four point pairs and bilinear perspective warping.
"""

from IE_Libs.TransformLib.linear_solver import (
    Matrix3x3,
    solve,
    invert_3x3,
)
from IE_Libs.TransformLib.perspective import (
    PerspectiveCropError,
    compute_transform,
    apply_transform,
    warp,
    perspective_crop,
)

__all__ = [
    "Matrix3x3",
    "solve",
    "invert_3x3",
    "PerspectiveCropError",
    "compute_transform",
    "apply_transform",
    "warp",
    "perspective_crop",
]
