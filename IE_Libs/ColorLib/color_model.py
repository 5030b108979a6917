"""
Color model conversions for the image editor core.

RGB values are 0-255, HSL values are hue in degrees [0, 360) and
saturation/lightness in percent [0, 100].

Functions:
    rgb_to_hsl: Convert one RGB triple to HSL
    hsl_to_rgb: Convert one HSL triple back to integer RGB
    rgb_to_hsl_array: Vectorized rgb_to_hsl over an (..., 3) array
    hsl_to_rgb_array: Vectorized hsl_to_rgb over an (..., 3) array
    hue_distance: Shortest distance between two hues on the color wheel
    hex_to_rgba: Format a hex color with an opacity as a CSS rgba() string

Example:
    >>> rgb_to_hsl(255, 0, 0)
    (0.0, 100.0, 50.0)
    >>> hsl_to_rgb(0, 100, 50)
    (255, 0, 0)
"""

import math
import string
from typing import Any, Tuple

import numpy as np

Hsl = Tuple[float, float, float]
Rgb = Tuple[int, int, int]

_HEX_DIGITS = set(string.hexdigits)


def rgb_to_hsl(r: float, g: float, b: float) -> Hsl:
    """
    Convert an RGB color to HSL.

    Args:
        r, g, b: Channel values in 0-255 (floats allowed)

    Returns:
        (h, s, l) with h in [0, 360) and s, l in [0, 100].
        Achromatic colors (max == min) have h == s == 0.
    """
    r /= 255.0
    g /= 255.0
    b /= 255.0
    high = max(r, g, b)
    low = min(r, g, b)
    h = 0.0
    s = 0.0
    l = (high + low) / 2

    if high != low:
        d = high - low
        s = d / (2 - high - low) if l > 0.5 else d / (high + low)
        if high == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif high == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return h * 360, s * 100, l * 100


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _to_byte(value: float) -> int:
    return int(max(0, min(255, math.floor(value + 0.5))))


def hsl_to_rgb(h: float, s: float, l: float) -> Rgb:
    """
    Convert an HSL color to RGB.

    Inverse of rgb_to_hsl up to rounding: for every RGB triple,
    ``hsl_to_rgb(*rgb_to_hsl(r, g, b))`` is within 1 of ``(r, g, b)``.

    Args:
        h: Hue in degrees (wrapped into [0, 360))
        s: Saturation in percent (0-100)
        l: Lightness in percent (0-100)

    Returns:
        (r, g, b) integers in 0-255, rounded half up
    """
    h = (h % 360) / 360.0
    s /= 100.0
    l /= 100.0

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)

    return _to_byte(r * 255), _to_byte(g * 255), _to_byte(b * 255)


def rgb_to_hsl_array(rgb: Any) -> np.ndarray:
    """
    Vectorized rgb_to_hsl.

    Args:
        rgb: Array-like of shape (..., 3) with channel values in 0-255

    Returns:
        Float64 array of shape (..., 3) holding (h, s, l)
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    high = rgb.max(axis=-1)
    low = rgb.min(axis=-1)
    d = high - low
    l = (high + low) / 2

    chromatic = d != 0
    safe_d = np.where(chromatic, d, 1.0)
    denominator = np.where(l > 0.5, 2 - high - low, high + low)
    s = np.where(chromatic, d / np.where(chromatic, denominator, 1.0), 0.0)

    # Same precedence as the scalar branch: red, then green, then blue.
    h_r = (g - b) / safe_d + np.where(g < b, 6.0, 0.0)
    h_g = (b - r) / safe_d + 2
    h_b = (r - g) / safe_d + 4
    h = np.where(high == r, h_r, np.where(high == g, h_g, h_b))
    h = np.where(chromatic, h / 6, 0.0)

    return np.stack([h * 360, s * 100, l * 100], axis=-1)


def _hue_to_rgb_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1, t)
    t = np.where(t > 1, t - 1, t)
    return np.select(
        [t < 1 / 6, t < 1 / 2, t < 2 / 3],
        [p + (q - p) * 6 * t, q, p + (q - p) * (2 / 3 - t) * 6],
        default=p,
    )


def hsl_to_rgb_array(hsl: Any) -> np.ndarray:
    """
    Vectorized hsl_to_rgb.

    Returns unrounded float channel values (0-255) so callers can keep
    blending before quantizing.
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h = np.mod(hsl[..., 0], 360) / 360.0
    s = hsl[..., 1] / 100.0
    l = hsl[..., 2] / 100.0

    q = np.where(l < 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q
    r = _hue_to_rgb_array(p, q, h + 1 / 3)
    g = _hue_to_rgb_array(p, q, h)
    b = _hue_to_rgb_array(p, q, h - 1 / 3)

    gray = s == 0
    rgb = np.stack([
        np.where(gray, l, r),
        np.where(gray, l, g),
        np.where(gray, l, b),
    ], axis=-1)
    return rgb * 255


def hue_distance(a: Any, b: Any) -> Any:
    """Shortest distance between hues on the 360 degree wheel (scalar or array)."""
    diff = np.abs(np.asarray(a, dtype=np.float64) - b) % 360
    result = np.minimum(diff, 360 - diff)
    return float(result) if np.ndim(result) == 0 else result


def hex_to_rgba(hex_color: str, opacity: float) -> str:
    """
    Format a hex color plus opacity as a CSS ``rgba()`` expression.

    Args:
        hex_color: '#rgb' or '#rrggbb'. Anything else is treated as an
                   already-valid color expression and returned unchanged.
        opacity: Opacity in percent (0-100)

    Returns:
        'rgba(r,g,b,a)' with a = opacity / 100, or hex_color unchanged
    """
    if not isinstance(hex_color, str) or not hex_color.startswith("#"):
        return hex_color

    digits = hex_color[1:]
    if len(hex_color) not in (4, 7) or not set(digits) <= _HEX_DIGITS:
        return hex_color

    if len(hex_color) == 4:
        r, g, b = (int(ch * 2, 16) for ch in digits)
    else:
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))

    return f"rgba({r},{g},{b},{_format_alpha(opacity / 100)})"


def _format_alpha(value: float) -> str:
    # Whole numbers without a trailing '.0', everything else at full precision.
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
