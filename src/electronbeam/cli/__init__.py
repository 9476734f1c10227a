"""CLI module for ElectronBeam commands.

This module re-exports all command functions so the console script entry
point and the tests can reach them from one place.
"""

import click

from .. import __version__
from .render_cmd import render
from .samples_cmd import samples


@click.group()
@click.version_option(version=__version__, prog_name="electronbeam")
def main() -> None:
    """📺 ElectronBeam: CRT-style turn-off animations from still images."""
    pass


main.add_command(render)
main.add_command(samples)

__all__ = [
    "main",
    "render",
    "samples",
]
