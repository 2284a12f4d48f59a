"""Logging utilities for Pixeltrace."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    error_count: int = 0
    polygons_traced: int = 0
    vertices_traced: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    sprite_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_sprite_time_ms(self) -> float | None:
        if not self.sprite_timings_ms:
            return None
        return sum(self.sprite_timings_ms) / len(self.sprite_timings_ms)

    @property
    def min_sprite_time_ms(self) -> float | None:
        return min(self.sprite_timings_ms) if self.sprite_timings_ms else None

    @property
    def max_sprite_time_ms(self) -> float | None:
        return max(self.sprite_timings_ms) if self.sprite_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop handlers from an earlier call so repeated setup does not duplicate output
    for handler in list(root_logger.handlers):
        if getattr(handler, "_pixeltrace", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._pixeltrace = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._pixeltrace = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("pixeltrace")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking sprite processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_sprite_start(self, sprite_name: str) -> None:
        """Log start of sprite processing."""
        self._logger.debug("Processing sprite", sprite=sprite_name)

    def log_sprite_complete(
        self,
        sprite_name: str,
        polygon_count: int,
        vertex_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful sprite processing."""
        self._logger.info(
            "Sprite traced",
            sprite=sprite_name,
            polygons=polygon_count,
            vertices=vertex_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.polygons_traced += polygon_count
        self._stats.vertices_traced += vertex_count
        self._stats.sprite_timings_ms.append(duration_ms)

    def log_sprite_error(
        self,
        sprite_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log sprite processing error."""
        self._logger.error(
            "Sprite tracing failed",
            sprite=sprite_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((sprite_name, str(error)))

    def log_segment_scan(self, sprite_name: str, counts: dict[str, int]) -> None:
        """Log boundary segment counts per direction."""
        self._logger.debug("Segments scanned", sprite=sprite_name, **counts)

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
