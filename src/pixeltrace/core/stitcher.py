"""Polygon assembly from boundary segments.

Segments are joined end-to-start into closed loops. Since outlines are
axis-aligned, every vertex joins one horizontal and one vertical segment, so
after a horizontal segment the next one is vertical and vice versa.

Where two outlines touch at a single corner, two continuations are possible.
The candidate order below always turns clockwise first, which keeps each
outline around its own pixels (4-connectivity): diagonal neighbours become
separate polygons sharing one vertex.
"""

from pixeltrace.core.scanner import SegmentBuckets
from pixeltrace.domain import Direction, IntPoint, Polygon
from pixeltrace.exceptions import StitchingError

# Continuation candidates for each direction, in priority order
NEXT_DIRECTIONS: dict[Direction, tuple[Direction, Direction]] = {
    Direction.RIGHT: (Direction.DOWN, Direction.UP),
    Direction.LEFT: (Direction.UP, Direction.DOWN),
    Direction.UP: (Direction.RIGHT, Direction.LEFT),
    Direction.DOWN: (Direction.LEFT, Direction.RIGHT),
}


class PolygonStitcher:
    """Assembles closed polygons from direction buckets.

    The stitcher consumes the buckets it is given. It is stateless otherwise
    and safe for use in parallel processing.
    """

    def stitch(self, buckets: SegmentBuckets) -> list[Polygon]:
        """Consume all segments and return the closed polygons.

        Each polygon is seeded from the oldest remaining RIGHT segment, so
        identical buckets always produce identical output.

        Args:
            buckets: Segments produced by the edge scanner

        Returns:
            Polygons in seeding order, closing point omitted

        Raises:
            StitchingError: If an outline cannot be continued
        """
        polygons: list[Polygon] = []

        while len(buckets) > 0:
            seed = buckets.pop_first(Direction.RIGHT)
            if seed is None:
                raise StitchingError(None, Direction.RIGHT)
            polygons.append(self._close_loop(seed.start, seed.end, buckets))

        return polygons

    def _close_loop(
        self,
        start: IntPoint,
        end: IntPoint,
        buckets: SegmentBuckets,
    ) -> Polygon:
        points = [start, end]
        last_direction = Direction.RIGHT

        while points[-1] != points[0]:
            current = points[-1]
            for candidate in NEXT_DIRECTIONS[last_direction]:
                segment = buckets.take(candidate, current)
                if segment is not None:
                    points.append(segment.end)
                    last_direction = candidate
                    break
            else:
                raise StitchingError(current, last_direction)

        points.pop()
        return Polygon(points=points)
