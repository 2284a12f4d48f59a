"""Exception hierarchy for Pixeltrace."""


class PixelTraceError(Exception):
    """Base exception for all Pixeltrace errors."""

    pass


class InvalidInputError(PixelTraceError):
    """Errors caused by invalid arguments passed to a trace operation."""

    pass


class InvalidRasterError(InvalidInputError):
    """Pixel source is missing or has no pixels."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid raster: {reason}")


class InvalidRectError(InvalidInputError):
    """Trace rect is empty or not contained within the pixel source."""

    def __init__(self, rect: object, reason: str) -> None:
        self.rect = rect
        self.reason = reason
        super().__init__(f"Invalid rect {rect}: {reason}")


class InvalidScaleError(InvalidInputError):
    """Pixels-per-unit value cannot be used for coordinate mapping."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"Pixels per unit must be greater than 0, got {value}")


class ImageError(PixelTraceError):
    """Errors related to image loading or outline saving."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class OutlineSaveError(ImageError):
    """Error saving an outline file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save outline '{path}': {reason}")


class TracingError(PixelTraceError):
    """Internal inconsistencies in the tracing algorithm.

    These never occur for segments produced by the edge scanner from a valid
    solidity map. They abort the current trace and are not retried.
    """

    pass


class StitchingError(TracingError):
    """No continuation segment could be found while closing a polygon."""

    def __init__(self, point: object, last_direction: object) -> None:
        self.point = point
        self.last_direction = last_direction
        super().__init__(
            f"No segment continues the outline at {point} after {last_direction}"
        )


class DuplicateSegmentError(TracingError):
    """Two segments of the same direction share a start point."""

    def __init__(self, segment: object) -> None:
        self.segment = segment
        super().__init__(f"Segment start already present in its bucket: {segment}")


class SpriteProcessingError(PixelTraceError):
    """Error processing a specific sprite."""

    def __init__(self, sprite_name: str, reason: str) -> None:
        self.sprite_name = sprite_name
        self.reason = reason
        super().__init__(f"Error processing sprite '{sprite_name}': {reason}")

