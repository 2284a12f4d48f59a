"""Configuration settings for Pixeltrace."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from pixeltrace.domain import Channel, Comparator, IntRect, SolidCondition, Sprite


class ConditionConfig(BaseModel):
    """Configuration for classifying pixels as solid."""

    channel: Channel = Field(
        default=Channel.ALPHA,
        description="Channel compared against the threshold",
    )
    comparator: Comparator = Field(
        default=Comparator.GREATER_THAN,
        description="Comparison between channel value and threshold",
    )
    threshold: float = Field(
        default=0.5,
        allow_inf_nan=False,
        description="Threshold in [0, 1]; values outside are clamped",
    )

    @field_validator("threshold")
    @classmethod
    def clamp_threshold(cls, value: float) -> float:
        """Clamp the threshold into [0, 1]."""
        return min(max(value, 0.0), 1.0)

    def to_condition(self) -> SolidCondition:
        """Build the domain condition from this configuration."""
        return SolidCondition(
            channel=self.channel,
            comparator=self.comparator,
            threshold=self.threshold,
        )


class UnitsConfig(BaseModel):
    """Configuration for mapping pixel outlines into unit space."""

    pixels_per_unit: float = Field(
        default=100.0,
        gt=0.0,
        description="Number of pixels spanning one unit",
    )
    pivot_x: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Horizontal pivot as a fraction of the sprite width",
    )
    pivot_y: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Vertical pivot as a fraction of the sprite height",
    )
    centered: bool = Field(
        default=False,
        description="Physics-shape mapping: keep pixel scale, origin at the sprite center",
    )

    @property
    def pivot(self) -> tuple[float, float]:
        return (self.pivot_x, self.pivot_y)

    def make_sprite(self, name: str, rect: IntRect) -> Sprite:
        """Create a sprite for a rect using these unit settings."""
        return Sprite(
            name=name,
            rect=rect,
            pixels_per_unit=self.pixels_per_unit,
            pivot=self.pivot,
        )


class ProcessingConfig(BaseModel):
    """Configuration for sprite sheet processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PixelTraceSettings(BaseModel):
    """Main application settings."""

    condition: ConditionConfig = Field(default_factory=ConditionConfig)
    units: UnitsConfig = Field(default_factory=UnitsConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PixelTraceSettings:
    """Get default application settings."""
    return PixelTraceSettings()
