"""
Geometry data models for the image editor core.

Classes:
    Point: Immutable 2D image-space coordinate
    Rect: Axis-aligned rectangle with non-negative size
    CropResizeHandle: The 8 resize handles of a rectangle
    BezierSegment: Cubic Bezier control points
    PenNode: Pen tool anchor with its in/out control handles

Functions:
    as_point: Coerce an (x, y) pair into a Point
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def scaled(self, sx: float, sy: float) -> "Point":
        return Point(self.x * sx, self.y * sy)

    def distance_to(self, other: "Point") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rect":
        """Normalized rectangle spanning two arbitrary corner points."""
        return cls(min(a.x, b.x), min(a.y, b.y), abs(b.x - a.x), abs(b.y - a.y))


class CropResizeHandle(str, Enum):
    TOP_LEFT = "topLeft"
    TOP = "top"
    TOP_RIGHT = "topRight"
    RIGHT = "right"
    BOTTOM_RIGHT = "bottomRight"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottomLeft"
    LEFT = "left"

    @property
    def moves_top(self) -> bool:
        return self in (CropResizeHandle.TOP_LEFT, CropResizeHandle.TOP, CropResizeHandle.TOP_RIGHT)

    @property
    def moves_bottom(self) -> bool:
        return self in (CropResizeHandle.BOTTOM_LEFT, CropResizeHandle.BOTTOM, CropResizeHandle.BOTTOM_RIGHT)

    @property
    def moves_left(self) -> bool:
        return self in (CropResizeHandle.TOP_LEFT, CropResizeHandle.LEFT, CropResizeHandle.BOTTOM_LEFT)

    @property
    def moves_right(self) -> bool:
        return self in (CropResizeHandle.TOP_RIGHT, CropResizeHandle.RIGHT, CropResizeHandle.BOTTOM_RIGHT)

    @property
    def is_corner(self) -> bool:
        return (self.moves_top or self.moves_bottom) and (self.moves_left or self.moves_right)


@dataclass(frozen=True)
class BezierSegment:
    p0: Point
    p1: Point
    p2: Point
    p3: Point


@dataclass(frozen=True)
class PenNode:
    anchor: Point
    in_handle: Point
    out_handle: Point

    @classmethod
    def corner(cls, anchor: Point) -> "PenNode":
        """Node whose handles sit on the anchor (straight segments)."""
        return cls(anchor, anchor, anchor)


def as_point(value) -> Point:
    """Coerce a Point or an (x, y) pair into a Point."""
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))
