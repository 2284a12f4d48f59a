"""Parallel processing orchestration for sprite sheet tracing.

This module coordinates tracing of several sprites of one image with parallel
processing of individual sprites using ProcessPoolExecutor.

Key components:
- process_sprite: Top-level picklable function for parallel execution
- SpriteSheetProcessor: Main orchestrator class for image processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from pixeltrace.config import PixelTraceSettings
from pixeltrace.core.mapper import CoordinateMapper
from pixeltrace.core.stitcher import PolygonStitcher
from pixeltrace.core.tracer import check_rect, scan_segments
from pixeltrace.domain import IntRect, PixelSource, Polygon, SolidCondition, Sprite, UnitPolygon
from pixeltrace.exceptions import SpriteProcessingError
from pixeltrace.io import ImagePixelSource, ImageReader, OutlineWriter
from pixeltrace.utils import ProcessingLogger, ProcessingStats, configure_logging


# Decoded image of the current executor, set in each worker by _init_worker
_worker_image: tuple[str, ImagePixelSource] | None = None


def load_pixel_source(image_path: str) -> ImagePixelSource:
    """Decode an image into a read-only pixel source."""
    with ImageReader(Path(image_path)) as reader:
        return reader.pixel_source()


def _init_worker(image_path: str) -> None:
    global _worker_image
    _worker_image = (image_path, load_pixel_source(image_path))


def _source_for(image_path: str) -> ImagePixelSource:
    if _worker_image is not None and _worker_image[0] == image_path:
        return _worker_image[1]
    return load_pixel_source(image_path)


def process_sprite(
    image_path: str,
    sprite_dict: dict[str, Any],
    condition_dict: dict[str, Any],
    centered: bool = False,
    source: PixelSource | None = None,
) -> dict[str, Any]:
    """Trace a single sprite of an image.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the sprite, traces it, and returns the result.

    Args:
        image_path: Path of the image containing the sprite
        sprite_dict: Serialized sprite (from Sprite.to_dict())
        condition_dict: Serialized solidity condition
        centered: Map with the physics-shape convention instead of the pivot
        source: Already decoded pixels of the image; read from image_path if None

    Returns:
        Dictionary containing either:
        - Success: {"sprite": dict, "polygons": list, "unit_polygons": list,
          "segments": dict, "duration_ms": float}
        - Error: {"error": str, "sprite_name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        sprite = Sprite.from_dict(sprite_dict)
        condition = SolidCondition.from_dict(condition_dict)
        if source is None:
            source = _source_for(image_path)

        buckets = scan_segments(source, sprite.rect, condition)
        segment_counts = buckets.counts()
        polygons = PolygonStitcher().stitch(buckets)

        if centered:
            mapper = CoordinateMapper.centered(sprite.rect)
        else:
            mapper = CoordinateMapper.for_sprite(sprite)
        unit_polygons = mapper.map_polygons(polygons)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "sprite": sprite.to_dict(),
            "polygons": [p.to_list() for p in polygons],
            "unit_polygons": [p.to_list() for p in unit_polygons],
            "segments": segment_counts,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "sprite_name": sprite_dict.get("name", "unknown"),
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class SpriteSheetProcessor:
    """Orchestrates parallel tracing of the sprites of one image.

    Manages the complete workflow:
    1. Load image and validate sprite rects
    2. Trace sprites in parallel using worker processes
    3. Collect results and update statistics
    4. Save outlines in sprite order

    Example:
        settings = PixelTraceSettings()
        processor = SpriteSheetProcessor(settings)
        stats = processor.process(
            image_path=Path("sheet.png"),
            output_path=Path("sheet-outline.json"),
            max_workers=4
        )
    """

    def __init__(self, config: PixelTraceSettings) -> None:
        """Initialize sprite sheet processor with configuration.

        Args:
            config: Settings containing condition, units and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def default_sprites(self, image_path: Path, rects: list[IntRect] | None = None) -> list[Sprite]:
        """Build sprites for an image from rects and the unit settings.

        Without rects the whole image is one sprite named after the file.
        With rects, sprites are named {stem}_{index}.

        Args:
            image_path: Path to the image
            rects: Optional sprite rects in image pixels

        Returns:
            List of sprites
        """
        units = self.config.units
        if not rects:
            with ImageReader(image_path) as reader:
                full = IntRect(0, 0, reader.width, reader.height)
            return [units.make_sprite(image_path.stem, full)]
        return [units.make_sprite(f"{image_path.stem}_{i}", rect) for i, rect in enumerate(rects)]

    def _read_image_size(self, image_path: Path) -> tuple[int, int]:
        with ImageReader(image_path) as reader:
            self.logger.info(
                "Image loaded",
                format=reader.format,
                mode=reader.mode,
                width=reader.width,
                height=reader.height,
            )
            return reader.width, reader.height

    def _validate_sprites(self, sprites: list[Sprite], width: int, height: int) -> None:
        """Check sprite names are unique and rects lie within the image.

        Raises:
            SpriteProcessingError: If two sprites share a name
            InvalidRectError: If a rect is empty or exceeds width x height
        """
        seen: set[str] = set()
        for sprite in sprites:
            if sprite.name in seen:
                raise SpriteProcessingError(sprite.name, "duplicate sprite name")
            seen.add(sprite.name)
            check_rect(sprite.rect, width, height)

    def preview(self, image_path: Path, sprites: list[Sprite] | None = None) -> list[dict[str, Any]]:
        """Trace sprites in-process without writing any output.

        Args:
            image_path: Path to the image
            sprites: Sprites to trace (default: whole image)

        Returns:
            One result dictionary per sprite, as returned by process_sprite
        """
        if sprites is None:
            sprites = self.default_sprites(image_path)
        source = load_pixel_source(str(image_path))
        self._validate_sprites(sprites, source.width, source.height)

        condition_dict = self.config.condition.to_condition().to_dict()
        return [
            process_sprite(
                str(image_path),
                sprite.to_dict(),
                condition_dict,
                self.config.units.centered,
                source,
            )
            for sprite in sprites
        ]

    def process(
        self,
        image_path: Path,
        output_path: Path | None = None,
        sprites: list[Sprite] | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Trace the sprites of an image with parallel processing.

        Args:
            image_path: Path to the input image
            output_path: Path for the outline file (auto-generated if None)
            sprites: Sprites to trace (default: whole image)
            max_workers: Maximum worker processes (None = auto-detect)
            progress_callback: Optional callback(completed, total, sprite_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the image cannot be decoded
            InvalidInputError: If a sprite rect is outside the image
            SpriteProcessingError: If two sprites share a name
            OutlineSaveError: If the outline file cannot be written
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = OutlineWriter.get_outline_path(image_path)

        if sprites is None:
            sprites = self.default_sprites(image_path)

        self.logger.info(
            "Starting sprite processing",
            input=str(image_path),
            output=str(output_path),
            sprites=len(sprites),
            max_workers=max_workers,
        )

        width, height = self._read_image_size(image_path)
        self._validate_sprites(sprites, width, height)

        results = self._process_sprites_parallel(
            image_path=image_path,
            sprites=sprites,
            max_workers=max_workers,
            stats=stats,
            progress_callback=progress_callback,
        )

        self._save_outlines(image_path, output_path, sprites, results)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            polygons=stats.polygons_traced,
            vertices=stats.vertices_traced,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _process_sprites_parallel(
        self,
        image_path: Path,
        sprites: list[Sprite],
        max_workers: int | None,
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Trace sprites in parallel using ProcessPoolExecutor.

        Args:
            image_path: Path to the image containing the sprites
            sprites: Sprites to trace
            max_workers: Maximum worker processes
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total, sprite_name, success)
                for progress updates

        Returns:
            Dictionary mapping sprite names to successful results
        """
        results: dict[str, dict[str, Any]] = {}

        condition_dict = self.config.condition.to_condition().to_dict()
        centered = self.config.units.centered

        self.logger.info(
            "Starting parallel processing",
            sprite_count=len(sprites),
            max_workers=max_workers,
        )

        total = len(sprites)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=_init_worker,
            initargs=(str(image_path),),
        ) as executor:
            for sprite in sprites:
                self.processing_logger.log_sprite_start(sprite.name)
                future = executor.submit(
                    process_sprite,
                    str(image_path),
                    sprite.to_dict(),
                    condition_dict,
                    centered,
                )
                pending_futures[future] = sprite.name

            try:
                for future in as_completed(pending_futures):
                    sprite_name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_sprite_error(
                                sprite_name=result["sprite_name"],
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            results[sprite_name] = result
                            self.processing_logger.log_segment_scan(
                                sprite_name, result["segments"]
                            )
                            self.processing_logger.log_sprite_complete(
                                sprite_name=sprite_name,
                                polygon_count=len(result["polygons"]),
                                vertex_count=sum(len(p) for p in result["polygons"]),
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        tb = traceback.format_exc()
                        self.processing_logger.log_sprite_error(
                            sprite_name=sprite_name,
                            error=e,
                            traceback=tb,
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, sprite_name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def _save_outlines(
        self,
        image_path: Path,
        output_path: Path,
        sprites: list[Sprite],
        results: dict[str, dict[str, Any]],
    ) -> None:
        """Write traced sprites to the outline file in sprite order.

        Sprites that failed are left out of the document.
        """
        writer = OutlineWriter(
            output_path,
            source=image_path,
            condition=self.config.condition.to_condition(),
        )

        for sprite in sprites:
            result = results.get(sprite.name)
            if result is None:
                continue
            writer.add_sprite(
                sprite,
                [Polygon.from_list(p) for p in result["polygons"]],
                [UnitPolygon.from_list(p) for p in result["unit_polygons"]],
            )

        writer.save()

        self.logger.info(
            "Outlines saved",
            output=str(output_path),
            sprites=writer.sprite_count,
        )
