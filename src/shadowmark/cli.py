"""CLI entry point for shadowmark."""

import logging
from pathlib import Path

import click

from shadowmark import __version__
from shadowmark.config import Settings
from shadowmark.identity import InvalidLocationError, video_key
from shadowmark.navigation import find_at, find_loop_segment, find_next, find_previous
from shadowmark.store import MarkerStore, MarkerStoreError
from shadowmark.timeutils import format_time

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, "--version", "-v", help="Show version and exit.")
@click.option(
    "--config",
    type=click.Path(exists=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--storage-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding marker files (overrides configuration).",
)
@click.pass_context
def cli(ctx, config, storage_dir):
    """shadowmark - time markers for shadow-reading practice."""
    ctx.ensure_object(dict)
    overrides = {}
    if storage_dir:
        overrides["storage_dir"] = Path(storage_dir)
    if config:
        settings = Settings(_env_file=config, **overrides)
    else:
        settings = Settings(**overrides)
    logging.basicConfig(level=settings.log_level)
    ctx.obj["config"] = settings


def _get_store(ctx) -> MarkerStore:
    ctx.ensure_object(dict)
    settings = ctx.obj.get("config") or Settings()
    return MarkerStore(settings)


def _format_marker(marker) -> str:
    return f"{format_time(marker.time_ms)}  {marker.time_ms:>10}  {marker.label}"


def _display_markers(markers) -> None:
    """Display a marker list, one per line."""
    click.echo(click.style(f"{len(markers)} marker(s):", fg="blue", bold=True))
    if not markers:
        click.echo(click.style("  No markers", fg="green"))
        return
    for marker in markers:
        click.echo(f"  {_format_marker(marker)}")


@cli.command()
@click.argument("location")
def key(location: str) -> None:
    """Print the storage key of a video location."""
    try:
        click.echo(video_key(location))
    except InvalidLocationError as e:
        raise click.ClickException(str(e)) from e


@cli.command(name="list")
@click.argument("location")
@click.pass_context
def list_markers(ctx, location: str) -> None:
    """List the markers saved for a video."""
    try:
        markers = _get_store(ctx).load(location)
    except (InvalidLocationError, MarkerStoreError) as e:
        logger.error(f"Failed to load markers: {e}")
        raise click.ClickException(str(e)) from e
    _display_markers(markers)


@cli.command()
@click.argument("location")
@click.argument("time_ms", type=click.IntRange(min=0))
@click.option("--label", default=None, help="Marker text (defaults to the timestamp).")
@click.pass_context
def add(ctx, location: str, time_ms: int, label: str) -> None:
    """Add a marker at TIME_MS milliseconds."""
    try:
        markers = _get_store(ctx).add_marker(location, time_ms, label)
    except (InvalidLocationError, MarkerStoreError) as e:
        logger.error(f"Failed to add marker: {e}")
        raise click.ClickException(str(e)) from e
    click.echo(click.style(f"✓ Added marker at {format_time(time_ms)}", fg="green"))
    _display_markers(markers)


@cli.command()
@click.argument("location")
@click.argument("time_ms", type=click.IntRange(min=0))
@click.pass_context
def remove(ctx, location: str, time_ms: int) -> None:
    """Remove every marker at exactly TIME_MS milliseconds."""
    store = _get_store(ctx)
    try:
        before = store.load(location)
        markers = store.remove_marker(location, time_ms)
    except (InvalidLocationError, MarkerStoreError) as e:
        logger.error(f"Failed to remove marker: {e}")
        raise click.ClickException(str(e)) from e
    removed = len(before) - len(markers)
    click.echo(click.style(f"✓ Removed {removed} marker(s)", fg="green"))
    _display_markers(markers)


@cli.command()
@click.argument("location")
@click.argument("position_ms", type=click.IntRange(min=0))
@click.pass_context
def nav(ctx, location: str, position_ms: int) -> None:
    """Show the markers around POSITION_MS milliseconds."""
    try:
        markers = _get_store(ctx).load(location)
    except (InvalidLocationError, MarkerStoreError) as e:
        logger.error(f"Failed to load markers: {e}")
        raise click.ClickException(str(e)) from e

    click.echo(click.style(f"Position {format_time(position_ms)}", fg="cyan", bold=True))
    for name, marker in (
        ("Previous", find_previous(markers, position_ms)),
        ("At", find_at(markers, position_ms)),
        ("Next", find_next(markers, position_ms)),
    ):
        click.echo(f"  {name + ':':<9} {_format_marker(marker) if marker else 'none'}")

    segment = find_loop_segment(markers, position_ms)
    if segment is None:
        click.echo(f"  {'Loop:':<9} none")
    else:
        click.echo(
            f"  {'Loop:':<9} {format_time(segment.start_ms)} - {format_time(segment.end_ms)}"
        )
