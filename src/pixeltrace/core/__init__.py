"""Core tracing algorithms for pixeltrace.

This module contains the core algorithms for:

- Pixel classification (solid vs non-solid)
- Boundary edge extraction into direction buckets
- Polygon stitching with the direction-alternation rule
- Coordinate mapping into unit space

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)
- Linear in the number of pixels

Key functions:
- trace: Trace the pixel outline of a rect
- trace_to_units: Map pixel polygons into unit space
- trace_sprite: Trace a sprite relative to its pivot
- scan_segments: Extract boundary segments of a rect

Key classes:
- EdgeScanner: Extracts maximal boundary segments
- PolygonStitcher: Joins segments into closed polygons
- CoordinateMapper: Maps pixel vertices into unit space
- SpriteSheetProcessor: Traces the sprites of an image in parallel
"""

from pixeltrace.core.classifier import build_solidity_map, is_pixel_solid
from pixeltrace.core.mapper import CoordinateMapper
from pixeltrace.core.processor import SpriteSheetProcessor, process_sprite
from pixeltrace.core.scanner import EdgeScanner, SegmentBuckets
from pixeltrace.core.stitcher import PolygonStitcher
from pixeltrace.core.tracer import (
    check_rect,
    resolve_rect,
    scan_segments,
    trace,
    trace_sprite,
    trace_to_units,
)

__all__ = [
    # Mapper classes
    "CoordinateMapper",
    # Scanner classes
    "EdgeScanner",
    # Stitcher classes
    "PolygonStitcher",
    "SegmentBuckets",
    # Processor classes
    "SpriteSheetProcessor",
    # Functions
    "build_solidity_map",
    "check_rect",
    "is_pixel_solid",
    "process_sprite",
    "resolve_rect",
    "scan_segments",
    "trace",
    "trace_sprite",
    "trace_to_units",
]
