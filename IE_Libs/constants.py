"""
Constants and configuration values for the image editor core.

This module centralizes all constant values, magic numbers, and
tunable defaults used by the geometry, transform, mask and color modules.
"""

# Numeric tolerances
SINGULAR_EPSILON = 1e-10
SAMPLE_EPSILON = 1e-6

# Interactive handles (image-space pixels)
HANDLE_SIZE = 10
HANDLE_TOLERANCE = HANDLE_SIZE / 2

# Path flattening
DEFAULT_BEZIER_STEPS = 20
MIN_ELLIPSE_STEPS = 30

# Pen tool
PEN_CLOSE_THRESHOLD = 10
PEN_DRAG_THRESHOLD = 5

# Feathering: padding = ceil(radius * factor) on every side.
# A Gaussian's effective support is about 3 sigma; 3.0 trades memory for fidelity.
FEATHER_PADDING_FACTOR = 2.0
DEFAULT_MASK_BACKEND = "pil"
MASK_BACKENDS = ("pil", "scipy")

# Fill rules
FILL_RULE_NONZERO = "nonzero"
FILL_RULE_EVENODD = "evenodd"

# Selection stroke operations
STROKE_OP_ADD = "add"
STROKE_OP_SUBTRACT = "subtract"

# Adjustment blending: mask alpha below this leaves the pixel untouched
MIN_BLEND_FACTOR = 0.001

# Influence of a color channel extends this many degrees either side of its center
HUE_RANGE_WIDTH = 60

# Color channels for hue-targeted HSL adjustments (id, display name, hue center, swatch)
COLOR_CHANNELS = (
    ("reds", "Reds", 0, "#ef4444"),
    ("yellows", "Yellows", 60, "#f59e0b"),
    ("greens", "Greens", 120, "#22c55e"),
    ("aquas", "Aquas", 180, "#22d3ee"),
    ("blues", "Blues", 240, "#3b82f6"),
    ("magentas", "Magentas", 300, "#d946ef"),
)
COLOR_CHANNEL_IDS = tuple(channel[0] for channel in COLOR_CHANNELS)

# Crop aspect ratio keywords; any other option is "W:H"
RATIO_FREE = "Free"
RATIO_ORIGINAL = "Original"

# Resize cursors (CSS cursor names)
CURSOR_NWSE = "nwse-resize"
CURSOR_NESW = "nesw-resize"
CURSOR_NS = "ns-resize"
CURSOR_EW = "ew-resize"
CURSOR_DEFAULT = ""
