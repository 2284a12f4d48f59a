"""Image reader for loading sprite images.

This module provides the ImageReader class for loading image files
and exposing their pixels as a domain pixel source.
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from pixeltrace.exceptions import ImageLoadError
from pixeltrace.io.converter import ImagePixelSource, image_to_pixel_source


class ImageReader:
    """Loads image files and exposes their pixels.

    Example:
        reader = ImageReader(Path("sheet.png"))
        reader.load()
        source = reader.pixel_source()
        print(source.width, source.height)
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to a PNG, JPEG or other Pillow-readable file
        """
        self._image_path = image_path
        self._image: Image.Image | None = None

    def load(self) -> None:
        """Load and decode the image file.

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file cannot be decoded
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            image = Image.open(self._image_path)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

        self._image = image

    def _require_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def format(self) -> str:
        """Return the image file format (e.g. 'PNG')."""
        return self._require_image().format or "unknown"

    @property
    def mode(self) -> str:
        """Return the Pillow pixel mode (e.g. 'RGBA', 'P', 'L')."""
        return self._require_image().mode

    @property
    def width(self) -> int:
        return self._require_image().width

    @property
    def height(self) -> int:
        return self._require_image().height

    def pixel_source(self) -> ImagePixelSource:
        """Return a read-only pixel source for the loaded image.

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        return image_to_pixel_source(self._require_image())

    def close(self) -> None:
        """Close the image file and free resources."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "ImageReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
