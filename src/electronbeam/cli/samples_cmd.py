"""Write the synthetic sample images used to try the animations."""

from pathlib import Path

import click

from ..samples import SampleImageGenerator
from .utils import display_path_info, handle_generic_error


@click.command()
@click.argument(
    "output_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
)
def samples(output_dir: Path) -> None:
    """Create sample PNG images in OUTPUT_DIR (default: current directory).

    Writes test_gradient.png, test_retro.png and test_logo.png.
    """
    try:
        generator = SampleImageGenerator()
        paths = generator.generate(output_dir)
    except OSError as e:
        handle_generic_error("Sample generation", e)
        return

    for path in paths:
        display_path_info("Created", path, emoji="🖼️ ")
    click.echo(f"\n💡 Try: electronbeam render {paths[0]} cooldown.gif --verbose")
