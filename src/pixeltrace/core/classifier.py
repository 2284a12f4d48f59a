"""Pixel classification into solid and non-solid cells.

Every pixel of the traced rect is classified exactly once; later stages only
look up the resulting SolidityMap.
"""

from pixeltrace.domain import Color, IntRect, PixelSource, SolidCondition, SolidityMap


def is_pixel_solid(color: Color, condition: SolidCondition) -> bool:
    """Classify a single pixel color.

    Args:
        color: Pixel color with channels in [0, 1]
        condition: Condition to apply

    Returns:
        True if the pixel is solid under the condition

    Examples:
        >>> is_pixel_solid(Color(0, 0, 0, 1.0), SolidCondition.DEFAULT)
        True
        >>> is_pixel_solid(Color(0, 0, 0, 0.5), SolidCondition.DEFAULT)
        False
    """
    return condition.is_solid(color)


def build_solidity_map(
    source: PixelSource,
    rect: IntRect,
    condition: SolidCondition,
) -> SolidityMap:
    """Classify all pixels of a rect.

    The rect is assumed to be validated against the source bounds.

    Args:
        source: Readable pixel source
        rect: Region of the source to classify
        condition: Condition to apply

    Returns:
        Rect-local SolidityMap, bottom row first
    """
    get_pixel = source.get_pixel
    is_solid = condition.is_solid
    cells = [
        is_solid(get_pixel(x, y))
        for y in range(rect.y, rect.y_max)
        for x in range(rect.x, rect.x_max)
    ]
    return SolidityMap(width=rect.width, height=rect.height, cells=cells)
