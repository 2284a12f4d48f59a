"""Sprite representation.

A sprite is a named rect of a larger image together with the information
needed to map its outline into unit space.
"""

from dataclasses import dataclass
from typing import Any

from pixeltrace.domain.raster import IntRect


@dataclass(frozen=True)
class Sprite:
    """A traceable region of an image.

    Designed for efficient serialization for parallel processing.

    Attributes:
        name: Sprite name, unique within one image
        rect: Pixel rect of the sprite within the image
        pixels_per_unit: Number of pixels spanning one unit
        pivot: Pivot as a fraction of the rect, (0.5, 0.5) is the center
    """

    name: str
    rect: IntRect
    pixels_per_unit: float = 100.0
    pivot: tuple[float, float] = (0.5, 0.5)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the sprite
        """
        return {
            "name": self.name,
            "rect": self.rect.to_dict(),
            "pixels_per_unit": self.pixels_per_unit,
            "pivot": list(self.pivot),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sprite":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a sprite

        Returns:
            Sprite instance
        """
        pivot_x, pivot_y = data.get("pivot", (0.5, 0.5))
        return cls(
            name=data["name"],
            rect=IntRect.from_dict(data["rect"]),
            pixels_per_unit=float(data.get("pixels_per_unit", 100.0)),
            pivot=(float(pivot_x), float(pivot_y)),
        )
