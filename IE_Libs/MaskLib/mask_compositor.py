"""
Feathered selection masks.

Turns a vector selection into a soft alpha mask: the shape is rasterized
hard, blurred with a Gaussian of the feather radius, and cropped back to
the requested size. The blur runs on a surface padded by
``ceil(radius * padding_factor)`` pixels on every side so the blur can
spread past the image edge instead of piling up against it.

Backends:
    - 'pil': PIL ImageFilter.GaussianBlur (radius is the standard deviation)
    - 'scipy': scipy.ndimage.gaussian_filter with sigma = radius

Example:
    >>> shape = SelectionShape.from_rect(Rect(40, 40, 200, 120))
    >>> mask = build_feathered_mask(shape, 320, 200, FeatherSpec(radius=8))
    >>> mask.mode, mask.size
    ('L', (320, 200))
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Union

import numpy as np
from PIL import Image, ImageFilter
from scipy import ndimage

from IE_Libs.MaskLib.rasterizer import rasterize
from IE_Libs.MaskLib.selection_shape import SelectionShape
from IE_Libs.constants import DEFAULT_MASK_BACKEND, FEATHER_PADDING_FACTOR, MASK_BACKENDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatherSpec:
    """Feather configuration.

    Attributes:
        radius: Blur radius in pixels (>= 0); 0 gives a hard-edged mask
    """
    radius: float = 0.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Feather radius must be >= 0, got {self.radius}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"radius": self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatherSpec":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def feather_padding(radius: float, padding_factor: float = FEATHER_PADDING_FACTOR) -> int:
    """Pixels of padding added on each side before blurring."""
    if radius <= 0:
        return 0
    return int(math.ceil(radius * padding_factor))


def _blur_pil(coverage: np.ndarray, radius: float) -> np.ndarray:
    blurred = Image.fromarray(coverage).filter(ImageFilter.GaussianBlur(radius=radius))
    return np.array(blurred, dtype=np.uint8)


def _blur_scipy(coverage: np.ndarray, radius: float) -> np.ndarray:
    blurred = ndimage.gaussian_filter(coverage.astype(np.float32), sigma=radius, mode="constant", cval=0.0)
    return np.clip(np.floor(blurred + 0.5), 0, 255).astype(np.uint8)


_BLURS = {
    "pil": _blur_pil,
    "scipy": _blur_scipy,
}


def build_feathered_mask(
    shape: SelectionShape,
    width: int,
    height: int,
    feather: Union[FeatherSpec, float],
    padding_factor: float = FEATHER_PADDING_FACTOR,
    backend: str = DEFAULT_MASK_BACKEND,
) -> Any:
    """
    Build a soft-edged alpha mask for a selection.

    Args:
        shape: Selection in image coordinates (not modified)
        width: Mask width in pixels
        height: Mask height in pixels
        feather: FeatherSpec or a plain radius; radius <= 0 skips the blur
        padding_factor: Padding as a multiple of the radius (2.0 default, 3.0
                        keeps more of the Gaussian tail at higher memory cost)
        backend: Blur backend, 'pil' or 'scipy'

    Returns:
        PIL Image in mode 'L' of size (width, height); 255 = fully selected

    Raises:
        ValueError: If sizes are negative, radius is negative,
                    padding_factor < 0 or backend unknown
    """
    if not isinstance(feather, FeatherSpec):
        feather = FeatherSpec(radius=float(feather))
    if width < 0 or height < 0:
        raise ValueError(f"Mask size must be non-negative, got {width}x{height}")
    if padding_factor < 0:
        raise ValueError(f"padding_factor must be >= 0, got {padding_factor}")
    if backend not in MASK_BACKENDS:
        raise ValueError(f"Invalid backend: {backend}. Use {', '.join(MASK_BACKENDS)}.")

    if width == 0 or height == 0:
        return Image.new("L", (width, height), 0)

    if feather.radius <= 0:
        return Image.fromarray(rasterize(shape, width, height))

    padding = feather_padding(feather.radius, padding_factor)
    logger.debug(
        f"Feathering {width}x{height} mask: radius={feather.radius}, "
        f"padding={padding}, backend={backend}"
    )
    sharp = rasterize(shape, width + padding * 2, height + padding * 2, offset=(padding, padding))
    blurred = _BLURS[backend](sharp, feather.radius)
    cropped = blurred[padding:padding + height, padding:padding + width]
    return Image.fromarray(np.ascontiguousarray(cropped))


def mask_to_array(mask: Any) -> np.ndarray:
    """
    Normalized coverage of a mask.

    Images with an alpha band ('RGBA', 'LA', 'PA') are read from their
    alpha channel, like a canvas selection mask; other images are
    converted to 'L'.

    Args:
        mask: PIL Image or a uint8 array

    Returns:
        float32 array of shape (height, width) with values in [0, 1]
    """
    if hasattr(mask, "convert"):
        if "A" in mask.getbands():
            mask = mask.getchannel("A")
        elif mask.mode != "L":
            mask = mask.convert("L")
    return np.asarray(mask, dtype=np.float32) / 255.0
