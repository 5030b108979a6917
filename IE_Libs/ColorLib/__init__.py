"""
ColorLib - Color model conversions

RGB <-> HSL conversion (scalar and vectorized) and hex/opacity
color formatting used by the adjustment previews.
"""

from IE_Libs.ColorLib.color_model import (
    Hsl,
    Rgb,
    rgb_to_hsl,
    hsl_to_rgb,
    rgb_to_hsl_array,
    hsl_to_rgb_array,
    hue_distance,
    hex_to_rgba,
)

__all__ = [
    "Hsl",
    "Rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsl_array",
    "hsl_to_rgb_array",
    "hue_distance",
    "hex_to_rgba",
]
