"""Unit tests for the image I/O layer.

Tests for ImageReader, ImagePixelSource and OutlineWriter.
"""

import json
from pathlib import Path

import pytest
from PIL import Image

from pixeltrace import __version__
from pixeltrace.domain import (
    Channel,
    Color,
    IntPoint,
    IntRect,
    Point,
    Polygon,
    SolidCondition,
    Sprite,
    UnitPolygon,
)
from pixeltrace.exceptions import ImageLoadError, OutlineSaveError
from pixeltrace.io import ImagePixelSource, ImageReader, OutlineWriter, image_to_pixel_source


def write_png(path: Path, rows: list[str]) -> Path:
    """Write rows (top row first) as an RGBA PNG, '#' opaque white."""
    image = Image.new("RGBA", (len(rows[0]), len(rows)), (0, 0, 0, 0))
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == "#":
                image.putpixel((x, y), (255, 255, 255, 255))
    image.save(path)
    return path


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        """Test ImageReader initialization."""
        path = Path("sprite.png")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = ImageReader(Path("nonexistent.png"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = ImageReader(Path("sprite.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.format

    def test_size_before_load(self):
        reader = ImageReader(Path("sprite.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.width
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.height

    def test_pixel_source_before_load(self):
        reader = ImageReader(Path("sprite.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            reader.pixel_source()

    def test_load_invalid_file(self, tmp_path):
        """Test a file that is not an image raises ImageLoadError."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not a png")

        reader = ImageReader(path)
        with pytest.raises(ImageLoadError) as exc_info:
            reader.load()
        assert exc_info.value.path == str(path)

    def test_load_png(self, tmp_path):
        path = write_png(tmp_path / "hero.png", ["#..", "..."])

        with ImageReader(path) as reader:
            assert reader.format == "PNG"
            assert reader.mode == "RGBA"
            assert reader.width == 3
            assert reader.height == 2

    def test_close(self, tmp_path):
        path = write_png(tmp_path / "hero.png", ["#"])
        reader = ImageReader(path)
        reader.load()
        reader.close()
        assert reader._image is None


class TestImagePixelSource:
    """Tests for ImagePixelSource."""

    def test_rows_are_flipped(self, tmp_path):
        """Pixel y = 0 is the bottom row of the image."""
        path = write_png(tmp_path / "hero.png", ["#..", "..."])

        with ImageReader(path) as reader:
            source = reader.pixel_source()

        assert source.get_pixel(0, 1) == Color(1.0, 1.0, 1.0, 1.0)
        assert source.get_pixel(0, 0).a == 0.0
        assert source.get_pixel(2, 1).a == 0.0

    def test_readable_after_close(self, tmp_path):
        path = write_png(tmp_path / "hero.png", ["##"])
        reader = ImageReader(path)
        reader.load()
        source = reader.pixel_source()
        reader.close()

        assert source.width == 2
        assert source.height == 1
        assert source.get_pixel(1, 0).a == 1.0

    def test_grayscale_is_converted(self):
        image = Image.new("L", (2, 1), 0)
        image.putpixel((0, 0), 255)
        source = image_to_pixel_source(image)

        assert isinstance(source, ImagePixelSource)
        assert source.get_pixel(0, 0) == Color(1.0, 1.0, 1.0, 1.0)
        assert source.get_pixel(1, 0) == Color(0.0, 0.0, 0.0, 1.0)

    def test_channels_are_normalized(self):
        image = Image.new("RGBA", (1, 1), (255, 0, 0, 51))
        color = ImagePixelSource(image).get_pixel(0, 0)

        assert color.r == 1.0
        assert color.g == 0.0
        assert color.a == pytest.approx(0.2)


class TestOutlineWriter:
    """Tests for OutlineWriter class."""

    @pytest.fixture
    def sprite(self) -> Sprite:
        return Sprite(name="hero", rect=IntRect(0, 0, 1, 1), pixels_per_unit=1.0, pivot=(0.0, 0.0))

    @pytest.fixture
    def polygon(self) -> Polygon:
        return Polygon(points=[IntPoint(0, 1), IntPoint(1, 1), IntPoint(1, 0), IntPoint(0, 0)])

    @pytest.fixture
    def unit_polygon(self) -> UnitPolygon:
        return UnitPolygon(
            points=[Point(0.0, 1.0), Point(1.0, 1.0), Point(1.0, 0.0), Point(0.0, 0.0)]
        )

    def test_get_outline_path(self):
        """Test outline path generation."""
        assert OutlineWriter.get_outline_path(Path("art/hero.png")) == Path("art/hero-outline.json")
        assert OutlineWriter.get_outline_path(Path("sheet.v2.png")) == Path("sheet.v2-outline.json")

    def test_empty_document(self, tmp_path):
        writer = OutlineWriter(tmp_path / "out.json")
        document = writer.to_dict()

        assert document["generator"] == f"pixeltrace {__version__}"
        assert document["source"] is None
        assert document["condition"] == SolidCondition.DEFAULT.to_dict()
        assert document["sprites"] == []

    def test_save(self, tmp_path, sprite, polygon, unit_polygon):
        output = tmp_path / "nested" / "hero-outline.json"
        writer = OutlineWriter(
            output,
            source=Path("hero.png"),
            condition=SolidCondition(Channel.RED),
        )
        writer.add_sprite(sprite, [polygon], [unit_polygon])
        writer.save()

        assert writer.sprite_count == 1
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["source"] == "hero.png"
        assert document["condition"]["channel"] == "red"

        entry = document["sprites"][0]
        assert entry["name"] == "hero"
        assert entry["rect"] == {"x": 0, "y": 0, "width": 1, "height": 1}
        assert entry["polygons"] == [[[0, 1], [1, 1], [1, 0], [0, 0]]]
        assert entry["unit_polygons"] == [[[0.0, 1.0], [1.0, 1.0], [1.0, 0.0], [0.0, 0.0]]]

    def test_sprite_without_polygons(self, tmp_path, sprite):
        output = tmp_path / "empty-outline.json"
        writer = OutlineWriter(output)
        writer.add_sprite(sprite, [], [])
        writer.save()

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["sprites"][0]["polygons"] == []

    def test_save_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        writer = OutlineWriter(blocker / "out.json")
        with pytest.raises(OutlineSaveError):
            writer.save()
