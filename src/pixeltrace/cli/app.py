"""CLI application entry point for pixeltrace.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from pixeltrace import __version__
from pixeltrace.cli.output import (
    console,
    print_cancelled,
    print_error,
    print_failures,
    print_source,
    print_sprite_table,
    print_summary,
    tracing_progress,
)
from pixeltrace.config import (
    ConditionConfig,
    LoggingConfig,
    PixelTraceSettings,
    ProcessingConfig,
    UnitsConfig,
)
from pixeltrace.core import SpriteSheetProcessor
from pixeltrace.domain import Channel, Comparator, IntRect, Sprite
from pixeltrace.exceptions import ImageLoadError, OutlineSaveError, PixelTraceError
from pixeltrace.io import ImageReader, OutlineWriter

# Create the Typer app
app = typer.Typer(
    name="pixeltrace",
    help="Trace pixel-perfect collision outlines from sprite images.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Pixeltrace[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_rect(value: str) -> IntRect:
    """Parse an 'x,y,width,height' rect argument.

    Raises:
        ValueError: If the value does not hold four integers
    """
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4:
        raise ValueError(f"expected x,y,width,height but got '{value}'")
    x, y, width, height = (int(part) for part in parts)
    return IntRect(x, y, width, height)


def parse_pivot(value: str) -> tuple[float, float]:
    """Parse an 'x,y' pivot argument.

    Raises:
        ValueError: If the value does not hold two numbers
    """
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected x,y but got '{value}'")
    return (float(parts[0]), float(parts[1]))


@app.command()
def trace(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-outline.json)",
        ),
    ] = None,
    rect: Annotated[
        list[str] | None,
        typer.Option(
            "--rect",
            "-r",
            help="Sprite rect as x,y,width,height with y=0 at the bottom row (repeatable)",
        ),
    ] = None,
    channel: Annotated[
        str,
        typer.Option(
            "--channel",
            "-c",
            help="Channel tested for solidity (alpha|brightness|red|green|blue)",
        ),
    ] = "alpha",
    comparator: Annotated[
        str,
        typer.Option(
            "--comparator",
            help="Comparison with the threshold (greater_than|less_than)",
        ),
    ] = "greater_than",
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Threshold in [0, 1]; values outside are clamped",
        ),
    ] = 0.5,
    pixels_per_unit: Annotated[
        float,
        typer.Option(
            "--pixels-per-unit",
            "-u",
            help="Pixels per unit for unit-space polygons",
        ),
    ] = 100.0,
    pivot: Annotated[
        str,
        typer.Option(
            "--pivot",
            help="Pivot as x,y fractions of the sprite rect",
        ),
    ] = "0.5,0.5",
    centered: Annotated[
        bool,
        typer.Option(
            "--centered",
            help="Physics-shape mapping: pixel scale with origin at the sprite center",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Trace and summarize without writing an outline file",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Trace the pixel-perfect outline of an image or of sprite rects within it.

    Every boundary between solid and non-solid pixels becomes part of a closed,
    axis-aligned polygon. Polygons are written in pixel coordinates (relative
    to each sprite rect) and in unit coordinates (relative to the pivot).

    Example:
        pixeltrace hero.png

    This will create hero-outline.json next to the image.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an image file.",
        )
        raise typer.Exit(code=1)

    try:
        channel_value = Channel(channel.lower())
        comparator_value = Comparator(comparator.lower())
    except ValueError:
        print_error(
            f"Invalid condition: {channel} {comparator}",
            details="Channels: alpha, brightness, red, green, blue. "
            "Comparators: greater_than, less_than",
        )
        raise typer.Exit(code=1)

    try:
        rects = [parse_rect(value) for value in rect or []]
        pivot_x, pivot_y = parse_pivot(pivot)
        settings = PixelTraceSettings(
            condition=ConditionConfig(
                channel=channel_value,
                comparator=comparator_value,
                threshold=threshold,
            ),
            units=UnitsConfig(
                pixels_per_unit=pixels_per_unit,
                pivot_x=pivot_x,
                pivot_y=pivot_y,
                centered=centered,
            ),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )
    except (ValueError, ValidationError) as e:
        print_error("Invalid arguments", details=str(e))
        raise typer.Exit(code=1)

    try:
        with ImageReader(input_image) as reader:
            image_format = reader.format
            width, height = reader.width, reader.height

        processor = SpriteSheetProcessor(settings)
        sprites = processor.default_sprites(input_image, rects)

        if not quiet:
            print_source(
                input_image,
                image_format,
                width,
                height,
                settings.condition.to_condition().describe(),
                len(sprites),
            )

        if dry_run:
            _handle_dry_run(processor, input_image, sprites, quiet)
            raise typer.Exit(code=0)

        actual_output_path = output or OutlineWriter.get_outline_path(input_image)

        try:
            if not quiet:
                with tracing_progress() as progress:
                    task_id = progress.add_task("trace", total=len(sprites), sprite="")

                    def update_progress(completed: int, _total: int, sprite_name: str, _ok: bool) -> None:
                        progress.update(task_id, completed=completed, sprite=sprite_name)

                    stats = processor.process(
                        image_path=input_image,
                        output_path=actual_output_path,
                        sprites=sprites,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    image_path=input_image,
                    output_path=actual_output_path,
                    sprites=sprites,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancelled(processor.processing_logger.stats)
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if verbose and stats.errors:
            print_failures(stats.errors)

        if not quiet:
            print_summary(stats, actual_output_path)

        if stats.error_count > 0:
            raise typer.Exit(code=1)

    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except OutlineSaveError as e:
        print_error(f"Could not save outline: {e.reason}")
        raise typer.Exit(code=1)
    except PixelTraceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_dry_run(
    processor: SpriteSheetProcessor,
    image_path: Path,
    sprites: list[Sprite],
    quiet: bool,
) -> None:
    """Trace in-process, print the sprite table and write nothing.

    Exits with code 1 if any sprite failed to trace.
    """
    results = processor.preview(image_path, sprites)

    if not quiet:
        print_sprite_table(sprites, results)
        console.print("dry run: no outline written")

    if any("error" in result for result in results):
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
