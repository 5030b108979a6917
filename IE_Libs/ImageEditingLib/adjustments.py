"""
Non-destructive color adjustments.

Applies the editor's slider adjustments (contrast, temperature, HSL,
clarity, dehaze, per-hue channel tweaks, grain) to a PixelBuffer, limited
to a feathered selection mask when one is given.

Example:
    >>> settings = AdjustmentSettings(contrast=20, saturation=-10)
    >>> settings.color_adjustments["blues"] = HslAdjustment(h=15, s=10, l=0)
    >>> mask = build_feathered_mask(shape, buf.width, buf.height, FeatherSpec(6))
    >>> result = apply_adjustments(buf, settings, mask=mask)
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

import numpy as np

from IE_Libs.ColorLib.color_model import hsl_to_rgb_array, hue_distance, rgb_to_hsl_array
from IE_Libs.ImageEditingLib.image_models import PixelBuffer
from IE_Libs.MaskLib.mask_compositor import mask_to_array
from IE_Libs.constants import COLOR_CHANNEL_IDS, COLOR_CHANNELS, HUE_RANGE_WIDTH, MIN_BLEND_FACTOR

logger = logging.getLogger(__name__)


@dataclass
class HslAdjustment:
    """Hue/saturation/lightness offsets for one color channel."""
    h: float = 0.0
    s: float = 0.0
    l: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"h": self.h, "s": self.s, "l": self.l}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HslAdjustment":
        filtered = {k: float(v) for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def _default_color_adjustments() -> Dict[str, HslAdjustment]:
    return {channel_id: HslAdjustment() for channel_id in COLOR_CHANNEL_IDS}


@dataclass
class AdjustmentSettings:
    """Slider values of the adjustment panel.

    Attributes:
        luminance: Lightness offset (-100..100, applied at half strength)
        contrast: Contrast in percent (-100..100)
        temp: Warm/cool shift of red vs. blue (-100..100)
        tint: Green shift (-100..100)
        saturation: Saturation offset in HSL percent
        vibrance: Saturation boost weighted towards muted colors (-100..100)
        hue: Global hue rotation in degrees
        clarity: Midtone lightness contrast (-100..100)
        dehaze: Haze removal (-100..100)
        grain: Noise amount (0..100)
        invert: Invert RGB before adjusting
        color_adjustments: Per-channel HSL offsets keyed by channel id
    """
    luminance: float = 0.0
    contrast: float = 0.0
    temp: float = 0.0
    tint: float = 0.0
    saturation: float = 0.0
    vibrance: float = 0.0
    hue: float = 0.0
    clarity: float = 0.0
    dehaze: float = 0.0
    grain: float = 0.0
    invert: bool = False
    color_adjustments: Dict[str, HslAdjustment] = field(default_factory=_default_color_adjustments)

    @property
    def is_identity(self) -> bool:
        """True when applying the settings cannot change any pixel."""
        scalars = [getattr(self, f.name) for f in fields(self)
                   if f.name not in ("invert", "color_adjustments")]
        channels_idle = all(
            adj.h == 0 and adj.s == 0 and adj.l == 0
            for adj in self.color_adjustments.values()
        )
        return not self.invert and not any(scalars) and channels_idle

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "color_adjustments"}
        data["color_adjustments"] = {
            channel_id: adj.to_dict() for channel_id, adj in self.color_adjustments.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdjustmentSettings":
        """Create from dictionary, ignoring unknown keys and channels."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__ and k != "color_adjustments"}
        settings = cls(**filtered)
        for channel_id, values in data.get("color_adjustments", {}).items():
            if channel_id in settings.color_adjustments:
                settings.color_adjustments[channel_id] = HslAdjustment.from_dict(values)
        return settings


def _blend_factors(mask: Any, width: int, height: int) -> np.ndarray:
    coverage = mask_to_array(mask)
    if coverage.shape != (height, width):
        raise ValueError(
            f"Mask size {coverage.shape[1]}x{coverage.shape[0]} does not match image {width}x{height}"
        )
    return coverage.astype(np.float64)


def _adjust_rgb(
    rgb: np.ndarray,
    settings: AdjustmentSettings,
    rng: np.random.Generator,
) -> np.ndarray:
    if settings.invert:
        rgb = 255 - rgb

    contrast_factor = (100 + settings.contrast) / 100
    rgb = (rgb - 127.5) * contrast_factor + 127.5
    rgb[..., 0] += settings.temp / 2.5
    rgb[..., 1] += settings.tint / 2.5
    rgb[..., 2] -= settings.temp / 2.5

    hsl = rgb_to_hsl_array(rgb)
    h, s, l = hsl[..., 0], hsl[..., 1], hsl[..., 2]

    if settings.vibrance != 0:
        # max - mean is a saturation proxy (~0..170); muted colors get the most boost
        sat_delta = rgb.max(axis=-1) - rgb.mean(axis=-1)
        s = s + settings.vibrance * (1 - sat_delta / 200)

    h = (h + settings.hue) % 360
    l = l + settings.luminance / 2
    s = s + settings.saturation

    if settings.clarity != 0:
        l = l + (l - 50) * (settings.clarity / 200)
    if settings.dehaze != 0:
        dehaze = settings.dehaze / 100
        l = l - (50 - l) * dehaze
        s = s + s * (1 - s / 100) * dehaze * 0.5

    hue_shift = np.zeros_like(h)
    sat_shift = np.zeros_like(s)
    lum_shift = np.zeros_like(l)
    for channel_id, _, center, _ in COLOR_CHANNELS:
        adj = settings.color_adjustments.get(channel_id)
        if adj is None or (adj.h == 0 and adj.s == 0 and adj.l == 0):
            continue
        distance = hue_distance(h, center)
        influence = np.where(distance < HUE_RANGE_WIDTH, 1 - distance / HUE_RANGE_WIDTH, 0.0)
        hue_shift += adj.h * influence
        sat_shift += adj.s * influence
        lum_shift += adj.l * influence

    h = np.mod(h + hue_shift, 360)
    s = np.clip(s + sat_shift, 0, 100)
    l = np.clip(l + lum_shift, 0, 100)
    rgb = hsl_to_rgb_array(np.stack([h, s, l], axis=-1))

    if settings.grain > 0:
        noise = (rng.random(rgb.shape[:-1]) - 0.5) * (settings.grain * 2.55)
        rgb = rgb + noise[..., None]
    return rgb


def apply_adjustments(
    buffer: PixelBuffer,
    settings: AdjustmentSettings,
    mask: Any = None,
    rng: Optional[np.random.Generator] = None,
) -> PixelBuffer:
    """
    Apply adjustment settings to a buffer.

    Args:
        buffer: Source pixels (not modified)
        settings: Slider values
        mask: Optional selection mask of the buffer's size: a PIL image
              (alpha channel used when it has one) or a uint8 array.
              Edits blend in by mask alpha; pixels with alpha below
              0.1% keep their original value.
        rng: Random generator for grain (a fresh default_rng if omitted)

    Returns:
        New PixelBuffer; the alpha channel is copied unchanged

    Raises:
        TypeError: If buffer is not a PixelBuffer
        ValueError: If the mask size does not match the buffer
    """
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")

    result = buffer.copy()
    if settings.is_identity or buffer.width == 0 or buffer.height == 0:
        return result

    original = buffer.data[..., :3].astype(np.float64)
    adjusted = _adjust_rgb(original.copy(), settings, rng or np.random.default_rng())

    if mask is None:
        blended = adjusted
        touched = np.ones((buffer.height, buffer.width), dtype=bool)
    else:
        blend = _blend_factors(mask, buffer.width, buffer.height)
        touched = blend >= MIN_BLEND_FACTOR
        factor = blend[..., None]
        blended = original * (1 - factor) + adjusted * factor

    quantized = np.clip(np.floor(blended + 0.5), 0, 255).astype(np.uint8)
    result.data[..., :3][touched] = quantized[touched]
    logger.debug(f"Adjusted {int(touched.sum())} of {buffer.width * buffer.height} pixels")
    return result


def composite_with_mask(original: PixelBuffer, edited: PixelBuffer, mask: Any) -> PixelBuffer:
    """
    Blend edited over original by mask coverage, all four channels.

    Raises:
        ValueError: If the buffers or the mask differ in size
    """
    if original.size != edited.size:
        raise ValueError(f"Buffer sizes differ: {original.size} vs {edited.size}")
    blend = _blend_factors(mask, original.width, original.height)[..., None]
    mixed = original.data.astype(np.float64) * (1 - blend) + edited.data.astype(np.float64) * blend
    return PixelBuffer(np.clip(np.floor(mixed + 0.5), 0, 255).astype(np.uint8))
