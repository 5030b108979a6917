"""
Perspective Crop Examples

Rectifies a skewed quadrilateral of an image and shows how degenerate
corner picks are reported.

Usage:
    python examples/perspective_crop_demo.py [input_image] [output_image]
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image, ImageDraw

from IE_Libs.GeometryLib.geometry_models import Point
from IE_Libs.ImageEditingLib.image_models import PixelBuffer
from IE_Libs.TransformLib.perspective import PerspectiveCropError, perspective_crop


def make_sample_image():
    """Draw a tilted checkerboard 'document' on a gray background."""
    image = Image.new("RGBA", (400, 300), (90, 90, 90, 255))
    draw = ImageDraw.Draw(image)
    draw.polygon([(60, 40), (340, 70), (320, 260), (40, 230)], fill=(240, 240, 230, 255))
    for i in range(1, 6):
        draw.line([(60 + i * 47, 40 + i * 5), (40 + i * 47, 230 + i * 5)], fill=(30, 30, 30, 255), width=2)
    return image


def example_rectify(image, output_path):
    """Example: Flatten the document quad."""
    print("=" * 60)
    print("Example 1: Rectify a quadrilateral")
    print("=" * 60)

    quad = [Point(60, 40), Point(340, 70), Point(320, 260), Point(40, 230)]
    result = perspective_crop(PixelBuffer.from_image(image), quad)
    print(f"✓ Output size: {result.width}x{result.height}")
    result.to_image().save(output_path)
    print(f"  Saved to {output_path}")


def example_degenerate(image):
    """Example: Collinear corners are rejected."""
    print("\n" + "=" * 60)
    print("Example 2: Degenerate corners")
    print("=" * 60)

    line = [Point(0, 0), Point(50, 50), Point(100, 100), Point(150, 150)]
    try:
        perspective_crop(PixelBuffer.from_image(image), line)
        print("❌ FAILED: Degenerate quad was accepted!")
    except PerspectiveCropError as e:
        print("✓ Degenerate quad rejected:")
        print(f"  Error: {e}")


def main():
    image = Image.open(sys.argv[1]) if len(sys.argv) > 1 else make_sample_image()
    output_path = sys.argv[2] if len(sys.argv) > 2 else "perspective_crop_output.png"
    example_rectify(image, output_path)
    example_degenerate(image)


if __name__ == "__main__":
    main()
