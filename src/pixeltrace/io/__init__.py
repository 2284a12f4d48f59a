"""Image I/O layer for pixeltrace.

This module handles reading images with Pillow and writing traced outlines.
It provides a clean abstraction layer between Pillow and the domain models.

Key responsibilities:
- Load PNG/JPEG/etc. images
- Expose pixels in texture convention (origin bottom-left)
- Write traced outlines as JSON with the outline naming convention

Key classes:
- ImageReader: Load images and create pixel sources
- ImagePixelSource: Read-only pixel access over a Pillow image
- OutlineWriter: Save traced outlines
"""

from pixeltrace.io.converter import ImagePixelSource, image_to_pixel_source
from pixeltrace.io.reader import ImageReader
from pixeltrace.io.writer import OutlineWriter

__all__ = [
    "ImagePixelSource",
    "ImageReader",
    "OutlineWriter",
    "image_to_pixel_source",
]
