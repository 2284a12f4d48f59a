"""Mapping of pixel-space outlines into unit space."""

from dataclasses import dataclass

from pixeltrace.domain import IntPoint, IntRect, Point, Polygon, Sprite, UnitPolygon
from pixeltrace.exceptions import InvalidScaleError


@dataclass(frozen=True)
class CoordinateMapper:
    """Scales and offsets pixel vertices into unit space.

    Each vertex (px, py) maps to (px * scale - ox, py * scale - oy) where
    (ox, oy) is the pivot offset in units. Vertex count and order never
    change.

    Attributes:
        scale: Units per pixel, the reciprocal of pixels-per-unit
        pivot_offset: Offset subtracted after scaling, in units
    """

    scale: float = 1.0
    pivot_offset: tuple[float, float] = (0.0, 0.0)

    @classmethod
    def for_sprite(cls, sprite: Sprite) -> "CoordinateMapper":
        """Mapper placing a sprite's outline relative to its pivot.

        Args:
            sprite: Sprite with pixels-per-unit and fractional pivot

        Returns:
            CoordinateMapper for the sprite

        Raises:
            InvalidScaleError: If pixels_per_unit is not positive
        """
        return cls.from_pixels_per_unit(sprite.pixels_per_unit, sprite.pivot, sprite.rect)

    @classmethod
    def from_pixels_per_unit(
        cls,
        pixels_per_unit: float,
        pivot: tuple[float, float],
        rect: IntRect,
    ) -> "CoordinateMapper":
        """Mapper from pixels-per-unit and a pivot given as a rect fraction.

        The pivot offset is the pivot fraction times the rect's size in units.
        """
        if pixels_per_unit <= 0:
            raise InvalidScaleError(pixels_per_unit)

        scale = 1.0 / pixels_per_unit
        offset = (pivot[0] * rect.width * scale, pivot[1] * rect.height * scale)
        return cls(scale=scale, pivot_offset=offset)

    @classmethod
    def centered(cls, rect: IntRect) -> "CoordinateMapper":
        """Mapper for physics shapes: pixel units, origin at the rect center."""
        return cls(scale=1.0, pivot_offset=(rect.width / 2.0, rect.height / 2.0))

    def map_point(self, point: IntPoint) -> Point:
        offset_x, offset_y = self.pivot_offset
        return Point(point.x * self.scale - offset_x, point.y * self.scale - offset_y)

    def map_polygon(self, polygon: Polygon) -> UnitPolygon:
        return UnitPolygon(points=[self.map_point(p) for p in polygon.points])

    def map_polygons(self, polygons: list[Polygon]) -> list[UnitPolygon]:
        """Map every polygon, preserving order."""
        return [self.map_polygon(polygon) for polygon in polygons]
