"""Pixeltrace - Trace pixel-perfect collision outlines from sprite images.

Pixeltrace converts the solid pixels of an image (or of individual sprite rects
within a sprite sheet) into closed, axis-aligned polygons that follow the
boundary between solid and non-solid pixels exactly, then maps them into unit
space using the sprite's pixels-per-unit and pivot.

Example:
    $ pixeltrace hero.png

This will create hero-outline.json with the traced polygons in both pixel
and unit coordinates.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
