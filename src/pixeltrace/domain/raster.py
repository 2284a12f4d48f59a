"""Raster types: pixel sources, rects and solidity maps.

All rasters use texture convention: pixel (0, 0) is the lower-left pixel and
y grows upwards.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pixeltrace.domain.condition import Color

OPAQUE = Color(1.0, 1.0, 1.0, 1.0)
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)


@runtime_checkable
class PixelSource(Protocol):
    """Read-only source of pixel colors.

    Implementations must be fully readable before tracing starts. Callers
    only request coordinates inside [0, width) x [0, height).
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Color: ...


@dataclass(frozen=True, slots=True)
class IntRect:
    """An integer rectangle on the pixel grid.

    Attributes:
        x: Left column
        y: Bottom row
        width: Width in pixels
        height: Height in pixels
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the rect lies inside a width x height raster."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.x_max <= width
            and self.y_max <= height
        )

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IntRect":
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
        )


@dataclass
class ColorGrid:
    """In-memory pixel source backed by a flat, row-major list of colors.

    Row 0 of the list is the bottom row of the raster.

    Attributes:
        width: Raster width in pixels
        height: Raster height in pixels
        pixels: width * height colors, bottom row first
    """

    width: int
    height: int
    pixels: list[Color] = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )

    def get_pixel(self, x: int, y: int) -> Color:
        return self.pixels[y * self.width + x]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        solid: Color = OPAQUE,
        empty: Color = TRANSPARENT,
    ) -> "ColorGrid":
        """Build a grid from text rows drawn as they appear on screen.

        The first row is the TOP of the raster. A '#' marks a solid pixel,
        any other character an empty one.

        Example:
            >>> grid = ColorGrid.from_rows(["#.", ".#"])
            >>> grid.get_pixel(0, 1) == OPAQUE
            True
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")

        pixels = [
            solid if char == "#" else empty
            for row in reversed(rows)
            for char in row
        ]
        return cls(width=width, height=height, pixels=pixels)


@dataclass
class SolidityMap:
    """Boolean solidity per pixel of a traced rect.

    Coordinates are rect-local. Cells outside the map are never solid.

    Attributes:
        width: Map width in pixels
        height: Map height in pixels
        cells: width * height flags, bottom row first
    """

    width: int
    height: int
    cells: list[bool] = field(repr=False)

    def is_solid(self, x: int, y: int) -> bool:
        """Look up a cell, treating anything out of bounds as non-solid."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return self.cells[y * self.width + x]

    def solid_count(self) -> int:
        return sum(self.cells)
