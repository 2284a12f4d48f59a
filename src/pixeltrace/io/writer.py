"""Outline writer for saving traced polygons.

This module provides the OutlineWriter class for writing traced outlines
to a JSON document with the outline naming convention.
"""

import json
from pathlib import Path
from typing import Any

from pixeltrace import __version__
from pixeltrace.domain import Polygon, SolidCondition, Sprite, UnitPolygon
from pixeltrace.exceptions import OutlineSaveError


class OutlineWriter:
    """Collects traced sprites and writes them as one JSON document.

    Example:
        writer = OutlineWriter(Path("hero-outline.json"), source=Path("hero.png"))
        writer.add_sprite(sprite, polygons, unit_polygons)
        writer.save()
    """

    def __init__(
        self,
        output_path: Path,
        source: Path | None = None,
        condition: SolidCondition | None = None,
    ) -> None:
        """Initialize the outline writer.

        Args:
            output_path: Path of the JSON file to write
            source: Image the outlines were traced from
            condition: Condition used for tracing
        """
        self._output_path = output_path
        self._source = source
        self._condition = condition or SolidCondition.DEFAULT
        self._sprites: list[dict[str, Any]] = []

    @staticmethod
    def get_outline_path(image_path: Path) -> Path:
        """Generate the default outline path for an image.

        Args:
            image_path: Path to the source image

        Returns:
            Path of the form {stem}-outline.json next to the image
        """
        return image_path.with_name(f"{image_path.stem}-outline.json")

    def add_sprite(
        self,
        sprite: Sprite,
        polygons: list[Polygon],
        unit_polygons: list[UnitPolygon],
    ) -> None:
        """Add a traced sprite to the document.

        Args:
            sprite: The traced sprite
            polygons: Rect-local pixel polygons
            unit_polygons: The same polygons in unit space
        """
        entry = sprite.to_dict()
        entry["polygons"] = [p.to_list() for p in polygons]
        entry["unit_polygons"] = [p.to_list() for p in unit_polygons]
        self._sprites.append(entry)

    @property
    def sprite_count(self) -> int:
        return len(self._sprites)

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON document."""
        return {
            "generator": f"pixeltrace {__version__}",
            "source": str(self._source) if self._source else None,
            "condition": self._condition.to_dict(),
            "sprites": list(self._sprites),
        }

    def save(self) -> None:
        """Write the document to the output path.

        Raises:
            OutlineSaveError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise OutlineSaveError(str(self._output_path), str(e)) from e
