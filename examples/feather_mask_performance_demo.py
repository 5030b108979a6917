"""
Performance demonstration for feathered selection masks.

Compares the PIL and SciPy blur backends and shows how the padding
factor trades memory for how much of the Gaussian tail survives at
the image border.

Install dependencies:
    pip install numpy scipy pillow
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

import numpy as np

from IE_Libs.GeometryLib.geometry_models import Rect
from IE_Libs.MaskLib.mask_compositor import FeatherSpec, build_feathered_mask, feather_padding
from IE_Libs.MaskLib.selection_shape import SelectionShape
from IE_Libs.constants import MASK_BACKENDS


def benchmark_feather(size, radius, backend, iterations=3):
    """Time build_feathered_mask for one backend, excluding the warmup run."""
    shape = SelectionShape.from_rect(Rect(size * 0.2, size * 0.2, size * 0.6, size * 0.6))
    times = []
    for i in range(iterations):
        start = time.time()
        build_feathered_mask(shape, size, size, FeatherSpec(radius=radius), backend=backend)
        elapsed = time.time() - start
        times.append(elapsed)
        suffix = " (warmup)" if i == 0 else ""
        print(f"  {backend} run {i+1}: {elapsed:.3f}s{suffix}")
    return sum(times[1:]) / len(times[1:])


def show_border_falloff(size=200, radius=12):
    """Print the corner value of a full-image selection for several padding factors."""
    print("\nBorder falloff for a full-image selection")
    print("-" * 60)
    shape = SelectionShape.from_rect(Rect(0, 0, size, size))
    for factor in (0.0, 1.0, 2.0, 3.0):
        mask = build_feathered_mask(shape, size, size, FeatherSpec(radius=radius), padding_factor=factor)
        values = np.array(mask)
        print(f"  padding_factor={factor:.1f}  padding={feather_padding(radius, factor):3d}px  "
              f"corner={values[0, 0]:3d}  edge={values[0, size // 2]:3d}")


def main():
    """Run feathering benchmarks."""
    print("=" * 60)
    print("Feathered Mask Performance Demonstration")
    print("=" * 60)

    test_cases = [
        (256, 4),
        (512, 8),
        (1024, 16),
    ]

    results = []
    for size, radius in test_cases:
        print(f"\nBenchmarking {size}x{size} mask with radius={radius}")
        print("-" * 60)
        try:
            timings = {backend: benchmark_feather(size, radius, backend) for backend in MASK_BACKENDS}
        except KeyboardInterrupt:
            print("\n\nBenchmark interrupted by user")
            break
        results.append((size, radius, timings))

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print("\nSize       Radius  PIL       SciPy")
    print("-" * 60)
    for size, radius, timings in results:
        print(f"{size:4d}x{size:<4d}  {radius:3d}     {timings['pil']:6.3f}s  {timings['scipy']:6.3f}s")

    show_border_falloff()
    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
