"""Unit tests for configuration settings."""

import pytest
from pydantic import ValidationError

from pixeltrace.config import (
    ConditionConfig,
    LoggingConfig,
    PixelTraceSettings,
    ProcessingConfig,
    UnitsConfig,
    get_default_settings,
)
from pixeltrace.domain import Channel, Comparator, IntRect, SolidCondition, Sprite


class TestConditionConfig:
    """Tests for ConditionConfig."""

    def test_defaults_match_default_condition(self):
        assert ConditionConfig().to_condition() == SolidCondition.DEFAULT

    def test_string_values(self):
        config = ConditionConfig(channel="brightness", comparator="less_than", threshold=0.2)
        condition = config.to_condition()
        assert condition.channel is Channel.BRIGHTNESS
        assert condition.comparator is Comparator.LESS_THAN
        assert condition.threshold == 0.2

    @pytest.mark.parametrize(("threshold", "expected"), [(2.0, 1.0), (-3.0, 0.0)])
    def test_threshold_clamped(self, threshold, expected):
        assert ConditionConfig(threshold=threshold).threshold == expected

    def test_unknown_channel_rejected(self):
        with pytest.raises(ValidationError):
            ConditionConfig(channel="purple")

    @pytest.mark.parametrize("threshold", [float("nan"), "nan"])
    def test_nan_threshold_rejected(self, threshold):
        with pytest.raises(ValidationError):
            ConditionConfig(threshold=threshold)


class TestUnitsConfig:
    """Tests for UnitsConfig."""

    def test_defaults(self):
        config = UnitsConfig()
        assert config.pixels_per_unit == 100.0
        assert config.pivot == (0.5, 0.5)
        assert config.centered is False

    @pytest.mark.parametrize("pixels_per_unit", [0.0, -16.0])
    def test_pixels_per_unit_must_be_positive(self, pixels_per_unit):
        with pytest.raises(ValidationError):
            UnitsConfig(pixels_per_unit=pixels_per_unit)

    @pytest.mark.parametrize("pivot_x", [-0.1, 1.1])
    def test_pivot_must_be_fraction(self, pivot_x):
        with pytest.raises(ValidationError):
            UnitsConfig(pivot_x=pivot_x)

    def test_make_sprite(self):
        config = UnitsConfig(pixels_per_unit=16.0, pivot_x=0.5, pivot_y=0.0)
        sprite = config.make_sprite("hero", IntRect(0, 0, 16, 32))
        assert sprite == Sprite(
            name="hero",
            rect=IntRect(0, 0, 16, 32),
            pixels_per_unit=16.0,
            pivot=(0.5, 0.0),
        )


class TestPixelTraceSettings:
    """Tests for PixelTraceSettings."""

    def test_default_settings(self):
        settings = get_default_settings()
        assert isinstance(settings, PixelTraceSettings)
        assert settings.processing.max_workers is None
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"
        assert settings.logging.file_log_level == "DEBUG"

    def test_nested_sections(self):
        settings = PixelTraceSettings(
            processing=ProcessingConfig(max_workers=2),
            logging=LoggingConfig(log_level="DEBUG"),
        )
        assert settings.processing.max_workers == 2
        assert settings.logging.log_level == "DEBUG"
