"""Core geometric types for outline representation.

This module defines the fundamental geometric types produced by the tracer:
- IntPoint: A point on the integer pixel grid
- Point: A 2D point in unit space
- Direction: Enum for the four cardinal segment directions
- Segment: A maximal straight run of boundary edges
- Polygon: A closed outline in pixel space
- UnitPolygon: A closed outline in unit space
- WindingDirection: Enum for polygon winding direction
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Polygon winding direction.

    With y pointing up, traced outlines follow this convention:
    - Outlines of solid regions wind clockwise
    - Outlines of holes wind counter-clockwise
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


class Direction(Enum):
    """Direction of a boundary segment.

    The solid side of a segment is always on its right when walking from
    start to end, so outlines are clockwise around solid pixels.
    """

    RIGHT = auto()
    LEFT = auto()
    UP = auto()
    DOWN = auto()

    @property
    def is_horizontal(self) -> bool:
        """True for segments lying on a horizontal grid line."""
        return self in (Direction.RIGHT, Direction.LEFT)


@dataclass(frozen=True, slots=True)
class IntPoint:
    """A point on the pixel grid.

    Grid point (x, y) is the lower-left corner of pixel (x, y).

    Attributes:
        x: Column of the grid line
        y: Row of the grid line
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Point:
    """A point in unit space.

    Attributes:
        x: X coordinate in units
        y: Y coordinate in units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Segment:
    """A maximal run of collinear, same-direction boundary edges.

    Attributes:
        start: First grid point of the run
        end: Last grid point of the run
        direction: Direction of travel from start to end
    """

    start: IntPoint
    end: IntPoint
    direction: Direction

    @property
    def length(self) -> int:
        """Number of unit edges merged into this segment."""
        return abs(self.end.x - self.start.x) + abs(self.end.y - self.start.y)


def _signed_area(coords: list[tuple[float, float]]) -> float:
    n = len(coords)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += coords[i][0] * coords[j][1]
        area -= coords[j][0] * coords[i][1]

    return area / 2.0


def _perimeter(coords: list[tuple[float, float]]) -> float:
    n = len(coords)
    if n < 2:
        return 0.0

    total = 0.0
    for i in range(n):
        j = (i + 1) % n
        total += abs(coords[j][0] - coords[i][0]) + abs(coords[j][1] - coords[i][1])
    return total


@dataclass
class Polygon:
    """A closed, axis-aligned outline on the pixel grid.

    The closing point is not repeated: the last point connects back to the
    first. Consecutive points differ in exactly one coordinate.

    Attributes:
        points: Vertices of the outline in traversal order
    """

    points: list[IntPoint]

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Returns:
            Signed area in square pixels. Negative for clockwise outlines.
        """
        return _signed_area([p.to_tuple() for p in self.points])

    def perimeter(self) -> int:
        """Total length of the outline in pixels.

        Returns:
            Sum of the lengths of all edges, including the closing edge
        """
        return int(_perimeter([p.to_tuple() for p in self.points]))

    def winding_direction(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def is_hole(self) -> bool:
        """Check if this outline encloses non-solid pixels.

        Returns:
            True for counter-clockwise outlines
        """
        return self.winding_direction() == WindingDirection.COUNTER_CLOCKWISE

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Calculate bounding box of the outline.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0, 0, 0, 0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_list(self) -> list[list[int]]:
        """Serialize to nested lists for JSON output."""
        return [[p.x, p.y] for p in self.points]

    @classmethod
    def from_list(cls, data: list[Any]) -> "Polygon":
        """Deserialize from nested [x, y] lists."""
        return cls(points=[IntPoint(int(x), int(y)) for x, y in data])


@dataclass
class UnitPolygon:
    """A closed outline in unit space.

    Attributes:
        points: Vertices of the outline in traversal order
    """

    points: list[Point]

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula."""
        return _signed_area([p.to_tuple() for p in self.points])

    def to_list(self) -> list[list[float]]:
        """Serialize to nested lists for JSON output."""
        return [[p.x, p.y] for p in self.points]

    @classmethod
    def from_list(cls, data: list[Any]) -> "UnitPolygon":
        """Deserialize from nested [x, y] lists."""
        return cls(points=[Point(float(x), float(y)) for x, y in data])
