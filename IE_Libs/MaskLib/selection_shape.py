"""
Vector selection shapes.

A SelectionShape is an ordered list of path commands (move, line, cubic
curve, close) plus an explicit fill rule. The mask rasterizer only ever
reads shapes; every operation here returns a new shape.

Classes:
    MoveTo, LineTo, CurveTo, ClosePath: Path commands
    SelectionStroke: One freehand/marquee/ellipse/pen polygon and its operation
    SelectionShape: The combined selection path
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from IE_Libs.GeometryLib.geometry_models import Point, Rect, as_point
from IE_Libs.GeometryLib.geometry_utils import approximate_cubic_bezier
from IE_Libs.GeometryLib.selection_geometry import rect_polygon
from IE_Libs.constants import (
    DEFAULT_BEZIER_STEPS,
    FILL_RULE_EVENODD,
    FILL_RULE_NONZERO,
    STROKE_OP_ADD,
    STROKE_OP_SUBTRACT,
)

logger = logging.getLogger(__name__)

FILL_RULES = (FILL_RULE_NONZERO, FILL_RULE_EVENODD)
STROKE_OPS = (STROKE_OP_ADD, STROKE_OP_SUBTRACT)


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CurveTo:
    control1: Point
    control2: Point
    point: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CurveTo, ClosePath]


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area; positive for clockwise polygons in y-down image space."""
    area = 0.0
    count = len(points)
    for i in range(count):
        a = points[i]
        b = points[(i + 1) % count]
        area += a.x * b.y - b.x * a.y
    return area / 2


@dataclass(frozen=True)
class SelectionStroke:
    """A closed polygon that adds to or subtracts from the selection."""

    points: Tuple[Point, ...]
    op: str = STROKE_OP_ADD

    def __post_init__(self) -> None:
        if self.op not in STROKE_OPS:
            raise ValueError(f"Unknown stroke op: {self.op}. Valid ops: {', '.join(STROKE_OPS)}")
        object.__setattr__(self, "points", tuple(as_point(p) for p in self.points))


@dataclass(frozen=True)
class SelectionShape:
    """
    Vector selection region.

    Subpaths are implicitly closed when filled. ``fill_rule`` decides how
    overlapping subpaths combine: 'nonzero' uses the winding number (so
    orientation matters), 'evenodd' toggles on every crossing.
    """

    commands: Tuple[PathCommand, ...] = field(default_factory=tuple)
    fill_rule: str = FILL_RULE_NONZERO

    def __post_init__(self) -> None:
        if self.fill_rule not in FILL_RULES:
            raise ValueError(f"Unknown fill rule: {self.fill_rule}. Valid rules: {', '.join(FILL_RULES)}")
        object.__setattr__(self, "commands", tuple(self.commands))

    @property
    def is_empty(self) -> bool:
        return not any(len(polygon) > 2 for polygon in self.flatten())

    @classmethod
    def from_polygons(
        cls,
        polygons: Iterable[Sequence[Point]],
        fill_rule: str = FILL_RULE_NONZERO,
    ) -> "SelectionShape":
        """
        Shape made of closed polygons.

        Polygons with fewer than 2 points are skipped; 2-point polygons are
        kept open, the way a canvas path treats them.
        """
        commands: List[PathCommand] = []
        for polygon in polygons:
            points = [as_point(p) for p in polygon]
            if len(points) < 2:
                continue
            commands.append(MoveTo(points[0]))
            commands.extend(LineTo(p) for p in points[1:])
            if len(points) > 2:
                commands.append(ClosePath())
        return cls(tuple(commands), fill_rule)

    @classmethod
    def from_rect(cls, rect: Rect) -> "SelectionShape":
        return cls.from_polygons([rect_polygon(rect)])

    @classmethod
    def from_strokes(
        cls,
        strokes: Sequence[SelectionStroke],
        inverted: bool = False,
        bounds: Optional[Tuple[float, float]] = None,
    ) -> "SelectionShape":
        """
        Combine add/subtract strokes into one nonzero-winding shape.

        Add strokes are oriented clockwise and subtract strokes
        counter-clockwise, so a subtract cancels an add where they overlap.
        An inverted selection starts from a clockwise rectangle covering
        ``bounds`` with both orientations flipped.

        Raises:
            ValueError: If inverted is set without bounds
        """
        polygons: List[List[Point]] = []
        if inverted:
            if bounds is None:
                raise ValueError("Inverted selection requires bounds (width, height)")
            polygons.append(rect_polygon(Rect(0, 0, bounds[0], bounds[1])))

        for stroke in strokes:
            points = list(stroke.points)
            if len(points) < 2:
                continue
            clockwise = (stroke.op == STROKE_OP_ADD) != inverted
            area = signed_area(points)
            if (area < 0 and clockwise) or (area > 0 and not clockwise):
                points.reverse()
            polygons.append(points)

        shape = cls.from_polygons(polygons, FILL_RULE_NONZERO)
        logger.debug(f"Selection built from {len(strokes)} strokes (inverted={inverted})")
        return shape

    def translated(self, dx: float, dy: float) -> "SelectionShape":
        moved: List[PathCommand] = []
        for command in self.commands:
            if isinstance(command, MoveTo):
                moved.append(MoveTo(command.point.offset(dx, dy)))
            elif isinstance(command, LineTo):
                moved.append(LineTo(command.point.offset(dx, dy)))
            elif isinstance(command, CurveTo):
                moved.append(CurveTo(
                    command.control1.offset(dx, dy),
                    command.control2.offset(dx, dy),
                    command.point.offset(dx, dy),
                ))
            else:
                moved.append(command)
        return SelectionShape(tuple(moved), self.fill_rule)

    def flatten(self, steps: int = DEFAULT_BEZIER_STEPS) -> List[List[Point]]:
        """
        Flatten into polygons, one per subpath.

        Curves become ``steps`` line segments. After a ClosePath the next
        subpath starts at the closed subpath's first point, and a LineTo or
        CurveTo with no current point starts a subpath, as canvas paths do.
        """
        polygons: List[List[Point]] = []
        current: List[Point] = []

        def finish() -> None:
            if current:
                polygons.append(list(current))

        for command in self.commands:
            if isinstance(command, MoveTo):
                finish()
                current = [command.point]
            elif isinstance(command, LineTo):
                current.append(command.point)
            elif isinstance(command, CurveTo):
                start = current[-1] if current else command.control1
                if not current:
                    current = [start]
                curve = approximate_cubic_bezier(start, command.control1, command.control2, command.point, steps)
                current.extend(curve[1:])
            elif isinstance(command, ClosePath):
                if current:
                    first = current[0]
                    finish()
                    current = [first]
            else:
                raise TypeError(f"Unknown path command: {command!r}")
        finish()
        # A subpath that is only the restart point after a close adds nothing.
        return [polygon for polygon in polygons if len(polygon) > 1]
