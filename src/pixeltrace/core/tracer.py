"""Tracing entry points.

This module ties the pipeline together:

    pixel source -> solidity map -> segment buckets -> polygons -> unit polygons

All functions are pure: they read the pixel source, never modify it, and keep
no state between calls.
"""

from pixeltrace.core.classifier import build_solidity_map
from pixeltrace.core.mapper import CoordinateMapper
from pixeltrace.core.scanner import EdgeScanner, SegmentBuckets
from pixeltrace.core.stitcher import PolygonStitcher
from pixeltrace.domain import IntRect, PixelSource, Polygon, SolidCondition, Sprite, UnitPolygon
from pixeltrace.exceptions import InvalidRasterError, InvalidRectError


def resolve_rect(source: PixelSource | None, rect: IntRect | None = None) -> IntRect:
    """Validate a trace rect against its source.

    Args:
        source: Pixel source to trace
        rect: Requested region, or None for the whole source

    Returns:
        The rect to trace

    Raises:
        InvalidRasterError: If the source is missing or has no pixels
        InvalidRectError: If the rect is empty or exceeds the source bounds
    """
    if source is None:
        raise InvalidRasterError("no pixel source given")
    if source.width <= 0 or source.height <= 0:
        raise InvalidRasterError(f"source has size {source.width}x{source.height}")

    if rect is None:
        return IntRect(0, 0, source.width, source.height)
    return check_rect(rect, source.width, source.height)


def check_rect(rect: IntRect, width: int, height: int) -> IntRect:
    """Validate a rect against raster dimensions only.

    Raises:
        InvalidRectError: If the rect is empty or exceeds width x height
    """
    if rect.is_empty():
        raise InvalidRectError(rect, "width and height must be greater than 0")
    if not rect.fits_within(width, height):
        raise InvalidRectError(rect, f"must be contained within the {width}x{height} source")
    return rect


def scan_segments(
    source: PixelSource | None,
    rect: IntRect | None = None,
    condition: SolidCondition | None = None,
) -> SegmentBuckets:
    """Classify a rect and extract its boundary segments.

    Args:
        source: Readable pixel source
        rect: Region to trace (default: whole source)
        condition: Solidity condition (default: alpha > 0.5)

    Returns:
        SegmentBuckets with all boundary segments of the rect
    """
    rect = resolve_rect(source, rect)
    condition = condition or SolidCondition.DEFAULT
    solidity = build_solidity_map(source, rect, condition)
    return EdgeScanner().scan(solidity)


def trace(
    source: PixelSource | None,
    rect: IntRect | None = None,
    condition: SolidCondition | None = None,
) -> list[Polygon]:
    """Trace the pixel-perfect outline of a rect.

    Polygons are in rect-local pixel coordinates with the origin at the
    rect's lower-left corner. Solid outlines wind clockwise, holes
    counter-clockwise.

    Args:
        source: Readable pixel source
        rect: Region to trace (default: whole source)
        condition: Solidity condition (default: alpha > 0.5)

    Returns:
        Closed polygons, empty if no pixel is solid

    Raises:
        InvalidInputError: If source or rect are invalid
        StitchingError: If the outline cannot be closed

    Example:
        >>> from pixeltrace.domain import ColorGrid
        >>> [p.to_list() for p in trace(ColorGrid.from_rows(["#"]))]
        [[[0, 1], [1, 1], [1, 0], [0, 0]]]
    """
    buckets = scan_segments(source, rect, condition)
    return PolygonStitcher().stitch(buckets)


def trace_to_units(
    polygons: list[Polygon],
    scale: float,
    pivot_offset: tuple[float, float] = (0.0, 0.0),
) -> list[UnitPolygon]:
    """Map pixel polygons into unit space.

    Args:
        polygons: Polygons returned by trace()
        scale: Units per pixel (1 / pixels_per_unit)
        pivot_offset: Offset subtracted after scaling, in units

    Returns:
        Unit polygons in the same order with the same vertex counts
    """
    return CoordinateMapper(scale=scale, pivot_offset=pivot_offset).map_polygons(polygons)


def trace_sprite(
    source: PixelSource | None,
    sprite: Sprite,
    condition: SolidCondition | None = None,
) -> list[UnitPolygon]:
    """Trace a sprite and place its outline relative to the sprite pivot.

    Args:
        source: Pixel source containing the sprite
        sprite: Sprite rect, pixels-per-unit and pivot
        condition: Solidity condition (default: alpha > 0.5)

    Returns:
        Unit polygons of the sprite outline
    """
    mapper = CoordinateMapper.for_sprite(sprite)
    return mapper.map_polygons(trace(source, sprite.rect, condition))
