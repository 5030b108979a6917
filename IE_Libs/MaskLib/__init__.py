"""
MaskLib - Selection shapes and feathered masks

Vector selection paths with explicit fill rules, a scanline rasterizer
and the padded Gaussian feathering used to composite edits.
"""

from IE_Libs.MaskLib.selection_shape import (
    MoveTo,
    LineTo,
    CurveTo,
    ClosePath,
    PathCommand,
    SelectionStroke,
    SelectionShape,
    signed_area,
)
from IE_Libs.MaskLib.rasterizer import rasterize
from IE_Libs.MaskLib.mask_compositor import (
    FeatherSpec,
    feather_padding,
    build_feathered_mask,
    mask_to_array,
)

__all__ = [
    "MoveTo",
    "LineTo",
    "CurveTo",
    "ClosePath",
    "PathCommand",
    "SelectionStroke",
    "SelectionShape",
    "signed_area",
    "rasterize",
    "FeatherSpec",
    "feather_padding",
    "build_feathered_mask",
    "mask_to_array",
]
