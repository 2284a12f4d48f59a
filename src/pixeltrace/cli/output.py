"""Console output for the pixeltrace CLI.

All output goes through one rich Console. Per-sprite results are rendered as
a table so that rects, segment counts and outline sizes line up.
"""

from pathlib import Path
from typing import Any

from rich import filesize
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from pixeltrace.domain import Polygon, Sprite
from pixeltrace.utils import ProcessingStats

console = Console()


def tracing_progress() -> Progress:
    """Progress bar counting traced sprites, with the last finished sprite name."""
    return Progress(
        TextColumn("  tracing"),
        BarColumn(bar_width=32),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("[dim]{task.fields[sprite]}"),
        console=console,
    )


def print_source(
    image_path: Path,
    image_format: str,
    width: int,
    height: int,
    condition: str,
    sprite_count: int,
) -> None:
    """Print the image being traced and how its pixels are classified."""
    console.print(f"[bold]{escape(str(image_path))}[/bold]  {image_format} {width}x{height}")
    console.print(f"  {condition}")
    console.print(f"  {sprite_count} sprite{'s' if sprite_count != 1 else ''} to trace")


def outline_counts(polygons: list[list[list[int]]]) -> tuple[int, int, int]:
    """Count outlines, holes and vertices of serialized pixel polygons.

    Returns:
        (polygons, holes, vertices)
    """
    holes = sum(1 for points in polygons if Polygon.from_list(points).is_hole())
    vertices = sum(len(points) for points in polygons)
    return len(polygons), holes, vertices


def print_sprite_table(sprites: list[Sprite], results: list[dict[str, Any]]) -> None:
    """Print one row per sprite with its rect, segments and traced outline.

    Args:
        sprites: Traced sprites
        results: Matching result dictionaries from process_sprite
    """
    table = Table(box=None, padding=(0, 1), pad_edge=False, header_style="bold")
    table.add_column("sprite")
    table.add_column("rect (x,y wxh)")
    table.add_column("segments r/l/u/d")
    table.add_column("polygons", justify="right")
    table.add_column("holes", justify="right")
    table.add_column("vertices", justify="right")

    for sprite, result in zip(sprites, results, strict=True):
        rect = sprite.rect
        rect_text = f"{rect.x},{rect.y} {rect.width}x{rect.height}"
        if "error" in result:
            table.add_row(sprite.name, rect_text, f"[red]{escape(result['error'])}[/red]", "", "", "")
            continue
        segments = result["segments"]
        segment_text = "/".join(str(segments[key]) for key in ("right", "left", "up", "down"))
        polygons, holes, vertices = outline_counts(result["polygons"])
        table.add_row(sprite.name, rect_text, segment_text, str(polygons), str(holes), str(vertices))

    console.print(table)


def print_summary(stats: ProcessingStats, output_path: Path | None = None) -> None:
    """Print totals of a run and, if written, the outline file."""
    failed = f"[red]{stats.error_count} failed[/red]" if stats.error_count else "0 failed"
    console.print(
        f"{stats.processed_count} traced, {failed}: "
        f"{stats.polygons_traced} polygons, {stats.vertices_traced} vertices "
        f"in {stats.duration_seconds:.2f}s"
    )
    if stats.avg_sprite_time_ms is not None:
        console.print(
            f"  per sprite {stats.min_sprite_time_ms:.1f} / {stats.avg_sprite_time_ms:.1f} / "
            f"{stats.max_sprite_time_ms:.1f} ms (min / avg / max)"
        )
    if output_path is not None and output_path.exists():
        size = filesize.decimal(output_path.stat().st_size)
        console.print(f"wrote [bold]{escape(str(output_path))}[/bold] ({size})")


def print_failures(errors: list[tuple[str, str]]) -> None:
    for sprite_name, message in errors:
        console.print(f"  [red]{escape(sprite_name)}[/red]: {escape(message)}")


def print_error(message: str, details: str | None = None) -> None:
    console.print(f"[bold red]error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")


def print_cancelled(stats: ProcessingStats) -> None:
    """Print what was done before Ctrl+C stopped the run."""
    console.print(
        f"cancelled after {stats.processed_count} sprites, "
        f"{stats.cancelled_count} pending sprites dropped; no outline written"
    )
