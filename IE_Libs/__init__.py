"""
IE_Libs - Image Editor core library

This package contains the computation engine behind the editor's crop,
perspective, selection and adjustment tools, organized into specialized
sub-packages:

- ColorLib: RGB/HSL conversion and color formatting
- GeometryLib: Hit testing, crop rectangle geometry, Bezier flattening
- TransformLib: Linear solver and perspective warping
- MaskLib: Selection shapes, rasterization and feathered masks
- ImageEditingLib: Pixel buffers and color adjustments
"""

__version__ = "0.1.0"
