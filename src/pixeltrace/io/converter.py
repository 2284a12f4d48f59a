"""Conversion between Pillow images and domain pixel sources.

Pillow stores rows top to bottom while traced outlines use texture convention
(y up), so rows are flipped on access.
"""

from PIL import Image

from pixeltrace.domain import Color


class ImagePixelSource:
    """Read-only pixel source over a Pillow image.

    The image is converted to RGBA once and its bytes are kept in memory, so
    the source stays readable after the original image is closed.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
    """

    def __init__(self, image: Image.Image) -> None:
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        self.width, self.height = rgba.size
        self._data = rgba.tobytes()

    def get_pixel(self, x: int, y: int) -> Color:
        """Color of pixel (x, y), with y = 0 being the bottom row."""
        row = self.height - 1 - y
        offset = (row * self.width + x) * 4
        r, g, b, a = self._data[offset : offset + 4]
        return Color.from_rgba8(r, g, b, a)


def image_to_pixel_source(image: Image.Image) -> ImagePixelSource:
    """Wrap a Pillow image as a pixel source.

    Args:
        image: Any Pillow image; non-RGBA modes are converted

    Returns:
        ImagePixelSource for the image
    """
    return ImagePixelSource(image)
