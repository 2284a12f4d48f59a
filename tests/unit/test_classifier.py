"""Unit tests for pixel classification."""

from pixeltrace.core.classifier import build_solidity_map, is_pixel_solid
from pixeltrace.domain import (
    Channel,
    Color,
    ColorGrid,
    Comparator,
    IntRect,
    SolidCondition,
)


class TestIsPixelSolid:
    """Tests for is_pixel_solid."""

    def test_default_condition(self):
        assert is_pixel_solid(Color(0, 0, 0, 1.0), SolidCondition.DEFAULT)
        assert is_pixel_solid(Color(0, 0, 0, 0.51), SolidCondition.DEFAULT)
        assert not is_pixel_solid(Color(1, 1, 1, 0.5), SolidCondition.DEFAULT)
        assert not is_pixel_solid(Color(1, 1, 1, 0.0), SolidCondition.DEFAULT)

    def test_brightness_less_than(self):
        """Dark pixels on a light background can be traced."""
        condition = SolidCondition(Channel.BRIGHTNESS, Comparator.LESS_THAN, 0.5)
        assert is_pixel_solid(Color(0.1, 0.1, 0.1, 1.0), condition)
        assert not is_pixel_solid(Color(0.9, 0.9, 0.9, 1.0), condition)

    def test_extreme_thresholds(self):
        """Nothing exceeds 1.0 and nothing is below 0.0."""
        never_greater = SolidCondition(Channel.ALPHA, Comparator.GREATER_THAN, 1.0)
        never_less = SolidCondition(Channel.ALPHA, Comparator.LESS_THAN, 0.0)
        for alpha in (0.0, 0.5, 1.0):
            color = Color(0, 0, 0, alpha)
            assert not is_pixel_solid(color, never_greater)
            assert not is_pixel_solid(color, never_less)


class TestBuildSolidityMap:
    """Tests for build_solidity_map."""

    def test_whole_grid(self):
        grid = ColorGrid.from_rows(
            [
                "...",
                ".#.",
                "##.",
            ]
        )
        solidity = build_solidity_map(grid, IntRect(0, 0, 3, 3), SolidCondition.DEFAULT)

        assert solidity.width == 3
        assert solidity.height == 3
        assert solidity.cells == [
            True, True, False,
            False, True, False,
            False, False, False,
        ]

    def test_sub_rect_is_rect_local(self):
        grid = ColorGrid.from_rows(
            [
                "...",
                ".#.",
                "##.",
            ]
        )
        solidity = build_solidity_map(grid, IntRect(1, 0, 2, 2), SolidCondition.DEFAULT)

        assert solidity.width == 2
        assert solidity.height == 2
        assert solidity.is_solid(0, 0)
        assert not solidity.is_solid(1, 0)
        assert solidity.is_solid(0, 1)
        assert not solidity.is_solid(1, 1)

    def test_condition_is_applied(self):
        grid = ColorGrid.from_rows(["#."])
        inverted = SolidCondition(Channel.ALPHA, Comparator.LESS_THAN, 0.5)
        solidity = build_solidity_map(grid, IntRect(0, 0, 2, 1), inverted)
        assert solidity.cells == [False, True]

    def test_source_is_not_modified(self):
        grid = ColorGrid.from_rows(["#.", ".#"])
        before = list(grid.pixels)
        build_solidity_map(grid, IntRect(0, 0, 2, 2), SolidCondition.DEFAULT)
        assert grid.pixels == before
