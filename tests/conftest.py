"""
Pytest configuration and shared fixtures for the image editor core tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from IE_Libs.GeometryLib.geometry_models import Point
from IE_Libs.ImageEditingLib.image_models import PixelBuffer


@pytest.fixture
def sample_rgb_colors():
    """
    Provide a list of sample RGB color tuples for testing.

    Returns:
        List of (R, G, B) tuples with common test colors
    """
    return [
        (255, 0, 0),      # Red
        (0, 255, 0),      # Green
        (0, 0, 255),      # Blue
        (255, 255, 0),    # Yellow
        (0, 255, 255),    # Cyan
        (255, 0, 255),    # Magenta
        (255, 255, 255),  # White
        (0, 0, 0),        # Black
        (128, 128, 128),  # Gray
        (12, 200, 97),
        (250, 128, 114),
    ]


@pytest.fixture
def unit_square():
    """Unit square corners ordered top-left, top-right, bottom-left, bottom-right."""
    return [Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)]


@pytest.fixture
def quad_points():
    """A skewed, non-degenerate quadrilateral."""
    return [Point(10, 20), Point(200, 15), Point(220, 180), Point(5, 170)]


@pytest.fixture
def tiny_buffer():
    """2x2 buffer with four distinct opaque-ish pixels."""
    buffer = PixelBuffer.blank(2, 2)
    buffer.set_pixel(0, 0, (255, 0, 0, 255))
    buffer.set_pixel(1, 0, (0, 255, 0, 200))
    buffer.set_pixel(0, 1, (0, 0, 255, 150))
    buffer.set_pixel(1, 1, (10, 20, 30, 40))
    return buffer


@pytest.fixture
def noise_buffer():
    """Deterministic 12x9 buffer of random RGBA noise."""
    rng = np.random.default_rng(1234)
    return PixelBuffer(rng.integers(0, 256, size=(9, 12, 4), dtype=np.uint8))
