"""Domain models for pixeltrace.

This module contains the core domain models representing rasters, solidity
conditions, boundary segments, polygons and sprites. All models are designed
to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of Pillow implementation details

Key classes:
- Color, SolidCondition: Pixel classification
- IntRect, PixelSource, ColorGrid, SolidityMap: Raster access
- IntPoint, Segment, Polygon: Pixel-space outlines
- Point, UnitPolygon: Unit-space outlines
- Sprite: A named rect with pixels-per-unit and pivot
"""

from pixeltrace.domain.condition import Channel, Color, Comparator, SolidCondition
from pixeltrace.domain.geometry import (
    Direction,
    IntPoint,
    Point,
    Polygon,
    Segment,
    UnitPolygon,
    WindingDirection,
)
from pixeltrace.domain.raster import (
    OPAQUE,
    TRANSPARENT,
    ColorGrid,
    IntRect,
    PixelSource,
    SolidityMap,
)
from pixeltrace.domain.sprite import Sprite

__all__: list[str] = [
    # Enums
    "Channel",
    "Comparator",
    "Direction",
    "WindingDirection",
    # Constants
    "OPAQUE",
    "TRANSPARENT",
    # Core types
    "Color",
    "ColorGrid",
    "IntPoint",
    "IntRect",
    "PixelSource",
    "Point",
    "Polygon",
    "Segment",
    "SolidCondition",
    "SolidityMap",
    "Sprite",
    "UnitPolygon",
]
