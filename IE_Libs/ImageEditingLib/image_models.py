"""
Image editing data models for the image editor core.

This module defines the owned pixel buffer used throughout the editing system.

Classes:
    PixelBuffer: Width x height grid of 8-bit RGBA samples backed by numpy

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

RgbaColor = Tuple[int, int, int, int]

CHANNELS = 4


@dataclass
class PixelBuffer:
    """
    RGBA pixel grid owned by the caller.

    ``data`` has shape ``(height, width, 4)`` and dtype ``uint8``; channel
    order is R, G, B, A and row ``y`` starts at byte ``y * stride`` of the
    flattened array.
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.data, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(self.data)}")
        if self.data.ndim != 3 or self.data.shape[2] != CHANNELS:
            raise ValueError(f"PixelBuffer data must have shape (h, w, 4), got {self.data.shape}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"PixelBuffer data must be uint8, got {self.data.dtype}")

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * CHANNELS

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        """Create a fully transparent buffer."""
        if width < 0 or height < 0:
            raise ValueError(f"Buffer size must be non-negative, got {width}x{height}")
        return cls(np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """
        Copy a PIL Image into a new buffer.

        Args:
            image: PIL Image in any mode (converted to RGBA)

        Raises:
            TypeError: If image not PIL Image
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        rgba = image.convert("RGBA") if image.mode != "RGBA" else image
        return cls(np.array(rgba, dtype=np.uint8))

    @classmethod
    def from_bytes(cls, raw: bytes, width: int, height: int) -> "PixelBuffer":
        """Wrap a flat row-major RGBA byte string."""
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height}, got {len(raw)}")
        array = np.frombuffer(raw, dtype=np.uint8).reshape((height, width, CHANNELS))
        return cls(array.copy())

    def to_image(self) -> Any:
        """Return a new RGBA PIL Image with the buffer contents."""
        return Image.fromarray(np.ascontiguousarray(self.data))

    def to_bytes(self) -> bytes:
        return self.data.tobytes()

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.data.copy())

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = self.data[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: RgbaColor) -> None:
        self.data[y, x] = color
