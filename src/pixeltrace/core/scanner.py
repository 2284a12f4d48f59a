"""Boundary edge extraction.

The scanner sweeps every horizontal and vertical grid line of a solidity map
and emits the boundary between solid and non-solid cells as maximal straight
segments, sorted into one bucket per direction.

Orientation (y up): walking a segment from start to end, the solid cell is
always on the right-hand side.

- RIGHT: solid below the line, empty above
- LEFT: solid above the line, empty below
- UP: solid right of the line, empty left
- DOWN: solid left of the line, empty right
"""

from collections import deque
from itertools import groupby

from pixeltrace.domain import Direction, IntPoint, Segment, SolidityMap
from pixeltrace.exceptions import DuplicateSegmentError


class SegmentBuckets:
    """Four direction buckets of segments keyed by start point.

    Within a bucket no two segments share a start point, so a continuation
    lookup is a single dictionary access. A queue of start points per
    direction records insertion order; entries whose segment was already
    taken are discarded lazily, so pop_first is amortized O(1).
    """

    def __init__(self) -> None:
        self._buckets: dict[Direction, dict[IntPoint, Segment]] = {
            direction: {} for direction in Direction
        }
        self._order: dict[Direction, deque[IntPoint]] = {
            direction: deque() for direction in Direction
        }

    def add(self, segment: Segment) -> None:
        """Add a finished segment to its direction bucket.

        Raises:
            DuplicateSegmentError: If the bucket already has a segment
                starting at the same point
        """
        bucket = self._buckets[segment.direction]
        if segment.start in bucket:
            raise DuplicateSegmentError(segment)
        bucket[segment.start] = segment
        self._order[segment.direction].append(segment.start)

    def take(self, direction: Direction, start: IntPoint) -> Segment | None:
        """Remove and return the segment of a direction starting at a point."""
        return self._buckets[direction].pop(start, None)

    def pop_first(self, direction: Direction) -> Segment | None:
        """Remove and return the oldest segment of a direction."""
        bucket = self._buckets[direction]
        order = self._order[direction]
        while order:
            segment = bucket.pop(order.popleft(), None)
            if segment is not None:
                return segment
        return None

    def segments(self, direction: Direction) -> list[Segment]:
        """Segments of one direction in insertion order."""
        return list(self._buckets[direction].values())

    def count(self, direction: Direction) -> int:
        return len(self._buckets[direction])

    def counts(self) -> dict[str, int]:
        """Segment count per direction, keyed by lowercase direction name."""
        return {direction.name.lower(): len(bucket) for direction, bucket in self._buckets.items()}

    def total_length(self) -> int:
        """Number of unit boundary edges held across all buckets."""
        return sum(
            segment.length
            for bucket in self._buckets.values()
            for segment in bucket.values()
        )

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


def _horizontal_edge(solidity: SolidityMap, x: int, y: int) -> Direction | None:
    above = solidity.is_solid(x, y)
    below = solidity.is_solid(x, y - 1)
    if below and not above:
        return Direction.RIGHT
    if above and not below:
        return Direction.LEFT
    return None


def _vertical_edge(solidity: SolidityMap, x: int, y: int) -> Direction | None:
    right = solidity.is_solid(x, y)
    left = solidity.is_solid(x - 1, y)
    if right and not left:
        return Direction.UP
    if left and not right:
        return Direction.DOWN
    return None


class EdgeScanner:
    """Extracts maximal boundary segments from a solidity map.

    Each scan line is split into runs of cells sharing the same edge
    direction. A run ends at a direction change, at a cell without a
    boundary, or at the end of the line, and becomes one segment.

    The scanner is stateless and safe for use in parallel processing.
    """

    def scan(self, solidity: SolidityMap) -> SegmentBuckets:
        """Scan both sweeps of a solidity map.

        Args:
            solidity: Classified cells of the traced rect

        Returns:
            SegmentBuckets holding every boundary segment
        """
        buckets = SegmentBuckets()
        self.scan_horizontal(solidity, buckets)
        self.scan_vertical(solidity, buckets)
        return buckets

    def scan_horizontal(self, solidity: SolidityMap, buckets: SegmentBuckets) -> None:
        """Emit RIGHT and LEFT segments lying on horizontal grid lines."""
        for y in range(solidity.height + 1):
            edges = [_horizontal_edge(solidity, x, y) for x in range(solidity.width)]
            for direction, run in groupby(range(solidity.width), key=edges.__getitem__):
                if direction is None:
                    continue
                xs = list(run)
                x_min, x_max = xs[0], xs[-1] + 1
                if direction is Direction.RIGHT:
                    buckets.add(Segment(IntPoint(x_min, y), IntPoint(x_max, y), direction))
                else:
                    buckets.add(Segment(IntPoint(x_max, y), IntPoint(x_min, y), direction))

    def scan_vertical(self, solidity: SolidityMap, buckets: SegmentBuckets) -> None:
        """Emit UP and DOWN segments lying on vertical grid lines."""
        for x in range(solidity.width + 1):
            edges = [_vertical_edge(solidity, x, y) for y in range(solidity.height)]
            for direction, run in groupby(range(solidity.height), key=edges.__getitem__):
                if direction is None:
                    continue
                ys = list(run)
                y_min, y_max = ys[0], ys[-1] + 1
                if direction is Direction.UP:
                    buckets.add(Segment(IntPoint(x, y_min), IntPoint(x, y_max), direction))
                else:
                    buckets.add(Segment(IntPoint(x, y_max), IntPoint(x, y_min), direction))
