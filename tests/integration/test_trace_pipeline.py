"""End-to-end tests tracing real images and verifying the written outlines."""

import json
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from pixeltrace.config import ConditionConfig, PixelTraceSettings, UnitsConfig
from pixeltrace.core import SpriteSheetProcessor, trace
from pixeltrace.domain import IntRect, Polygon, SolidCondition, UnitPolygon, WindingDirection
from pixeltrace.io import ImageReader

WIDTH = 40
HEIGHT = 30


@pytest.fixture
def ring_path(tmp_path) -> Path:
    """An opaque ring with a stray pixel, drawn on a transparent canvas."""
    image = Image.new("RGBA", (WIDTH, HEIGHT), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.ellipse((2, 2, 30, 26), fill=(200, 40, 40, 255))
    draw.ellipse((10, 9, 22, 19), fill=(0, 0, 0, 0))
    image.putpixel((36, 4), (255, 255, 255, 255))
    path = tmp_path / "ring.png"
    image.save(path)
    return path


@pytest.fixture
def sheet_path(tmp_path) -> Path:
    """Four 8x8 sprites in a row, each with a different filled rectangle."""
    image = Image.new("RGBA", (32, 8), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    for i in range(4):
        left = i * 8
        draw.rectangle((left + 1, 1, left + 1 + i, 6), fill=(255, 255, 255, 255))
    path = tmp_path / "sheet.png"
    image.save(path)
    return path


def solid_cells(path: Path) -> set[tuple[int, int]]:
    """Solid pixels in texture coordinates, read straight from Pillow."""
    with Image.open(path) as image:
        rgba = image.convert("RGBA")
        return {
            (x, rgba.height - 1 - row)
            for row in range(rgba.height)
            for x in range(rgba.width)
            if rgba.getpixel((x, row))[3] > 127
        }


def boundary_edge_count(cells: set[tuple[int, int]]) -> int:
    neighbours = ((1, 0), (-1, 0), (0, 1), (0, -1))
    return sum(
        (x + dx, y + dy) not in cells
        for x, y in cells
        for dx, dy in neighbours
    )


class TestRingImage:
    """Tracing a drawn image through the Pillow pixel source."""

    @pytest.fixture
    def polygons(self, ring_path) -> list[Polygon]:
        with ImageReader(ring_path) as reader:
            source = reader.pixel_source()
        return trace(source)

    def test_outline_and_hole(self, polygons):
        windings = [p.winding_direction() for p in polygons]
        assert windings.count(WindingDirection.CLOCKWISE) == 2
        assert windings.count(WindingDirection.COUNTER_CLOCKWISE) == 1

    def test_stray_pixel(self, polygons):
        squares = [p for p in polygons if len(p) == 4 and p.signed_area() == -1.0]
        assert [p.bounding_box() for p in squares] == [(36, HEIGHT - 5, 37, HEIGHT - 4)]

    def test_perimeter_and_area(self, polygons, ring_path):
        cells = solid_cells(ring_path)
        assert sum(p.perimeter() for p in polygons) == boundary_edge_count(cells)
        assert sum(p.signed_area() for p in polygons) == -float(len(cells))

    def test_vertices_within_bounds(self, polygons):
        for polygon in polygons:
            min_x, min_y, max_x, max_y = polygon.bounding_box()
            assert 0 <= min_x <= max_x <= WIDTH
            assert 0 <= min_y <= max_y <= HEIGHT


class TestSpriteSheet:
    """Tracing a sprite sheet with worker processes."""

    def test_sheet_outlines(self, sheet_path, tmp_path):
        settings = PixelTraceSettings(
            condition=ConditionConfig(),
            units=UnitsConfig(pixels_per_unit=8.0, pivot_x=0.5, pivot_y=0.0),
        )
        processor = SpriteSheetProcessor(settings)
        rects = [IntRect(i * 8, 0, 8, 8) for i in range(4)]
        sprites = processor.default_sprites(sheet_path, rects)
        output = tmp_path / "sheet-outline.json"

        stats = processor.process(sheet_path, output, sprites=sprites, max_workers=2)

        assert stats.processed_count == 4
        assert stats.error_count == 0

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["condition"] == SolidCondition.DEFAULT.to_dict()
        assert [s["name"] for s in document["sprites"]] == [f"sheet_{i}" for i in range(4)]

        for i, entry in enumerate(document["sprites"]):
            width = i + 1
            polygons = [Polygon.from_list(p) for p in entry["polygons"]]
            assert [p.to_list() for p in polygons] == [
                [[1, 7], [1 + width, 7], [1 + width, 1], [1, 1]]
            ]

            unit = UnitPolygon.from_list(entry["unit_polygons"][0])
            assert unit.points[0].to_tuple() == pytest.approx((1 / 8 - 0.5, 7 / 8))
            assert unit.signed_area() == pytest.approx(-(width * 6) / 64)
