"""
ImageEditingLib - Pixel buffers and adjustments

This module provides the owned RGBA pixel buffer shared by the engine
and the non-destructive color adjustment pipeline.
"""

from IE_Libs.ImageEditingLib.image_models import PixelBuffer, RgbaColor
from IE_Libs.ImageEditingLib.adjustments import (
    HslAdjustment,
    AdjustmentSettings,
    apply_adjustments,
    composite_with_mask,
)

__all__ = [
    "PixelBuffer",
    "RgbaColor",
    "HslAdjustment",
    "AdjustmentSettings",
    "apply_adjustments",
    "composite_with_mask",
]
