"""Solidity condition for classifying pixels.

A condition always reads as a sentence of the form:

    Pixels are considered solid if their {channel} is {comparator} {threshold}.

The default condition is "alpha is greater than 0.5".
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class Channel(str, Enum):
    """Color channel a condition reads."""

    ALPHA = "alpha"
    BRIGHTNESS = "brightness"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class Comparator(str, Enum):
    """Comparison applied between channel value and threshold."""

    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        """Build a color from 8-bit channel values."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @property
    def brightness(self) -> float:
        """Mean of the red, green and blue channels."""
        return (self.r + self.g + self.b) / 3.0


def _clamp01(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        raise ValueError("threshold must be a number, got NaN")
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class SolidCondition:
    """Condition deciding whether a pixel counts as solid.

    Immutable. The threshold is clamped to [0, 1] on construction.

    Attributes:
        channel: Channel whose value is compared
        comparator: Greater-than or less-than comparison
        threshold: Value the channel is compared against
    """

    DEFAULT: ClassVar["SolidCondition"]

    channel: Channel = Channel.ALPHA
    comparator: Comparator = Comparator.GREATER_THAN
    threshold: float = 0.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "channel", Channel(self.channel))
        object.__setattr__(self, "comparator", Comparator(self.comparator))
        object.__setattr__(self, "threshold", _clamp01(self.threshold))

    def channel_value(self, color: Color) -> float:
        """Select the value this condition compares."""
        if self.channel is Channel.BRIGHTNESS:
            return color.brightness
        if self.channel is Channel.RED:
            return color.r
        if self.channel is Channel.GREEN:
            return color.g
        if self.channel is Channel.BLUE:
            return color.b
        return color.a

    def is_solid(self, color: Color) -> bool:
        """Check whether a pixel color satisfies this condition.

        Args:
            color: Pixel color to classify

        Returns:
            True if the pixel is solid
        """
        value = self.channel_value(color)
        if self.comparator is Comparator.LESS_THAN:
            return value < self.threshold
        return value > self.threshold

    def describe(self) -> str:
        """Human-readable description of the condition."""
        comparison = self.comparator.value.replace("_", " ")
        return (
            f"Pixels are considered solid if their {self.channel.value} "
            f"is {comparison} {self.threshold:g}."
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and output files."""
        return {
            "channel": self.channel.value,
            "comparator": self.comparator.value,
            "threshold": self.threshold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SolidCondition":
        """Deserialize from dictionary."""
        return cls(
            channel=Channel(data["channel"]),
            comparator=Comparator(data["comparator"]),
            threshold=data["threshold"],
        )


SolidCondition.DEFAULT = SolidCondition()
