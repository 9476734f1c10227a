"""Shared utilities for CLI commands."""

import sys
from pathlib import Path

import click

from ..error_handling import ElectronBeamError


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def handle_beam_error(command_name: str, error: ElectronBeamError) -> None:
    """Report a library error and exit."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    if isinstance(error.context, dict) and error.context.get("valid_modes"):
        click.echo(f"💡 Valid modes: {', '.join(error.context['valid_modes'])}", err=True)
    sys.exit(1)


def log_level_for(verbose: bool, debug: bool) -> str:
    """Map the verbosity flags onto a logging level name."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def resolve_output_dimensions(
    source_size: tuple[int, int], width: int | None, height: int | None
) -> tuple[int, int]:
    """Fill in a missing output dimension from the source aspect ratio.

    Only one of *width* / *height* given keeps the source aspect ratio
    (truncating); neither keeps the source size.
    """
    src_width, src_height = source_size
    if width is not None and height is not None:
        return width, height
    if width is not None:
        return width, int(width * (src_height / src_width))
    if height is not None:
        return int(height * (src_width / src_height)), height
    return src_width, src_height


def display_common_header(title: str) -> None:
    """Display a common header for CLI commands."""
    click.echo(f"📺 {title}")


def display_path_info(label: str, path: Path, emoji: str = "📁") -> None:
    """Display path information with consistent formatting."""
    click.echo(f"{emoji} {label}: {path}")
