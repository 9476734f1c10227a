"""Render a still image into a CRT turn-off animation."""

import logging
import time
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from ..animator import ElectronBeam
from ..config import AnimationConfigBuilder
from ..error_handling import ElectronBeamError
from ..io import load_image, save_gif, setup_logging
from ..modes import AnimationMode
from ..sequencer import ParallelFrameGenerator, generate_frames
from ..validation import (
    validate_frame_settings,
    validate_input_image,
    validate_output_path,
    validate_stretch,
    validate_worker_count,
)
from .utils import (
    display_common_header,
    display_path_info,
    handle_beam_error,
    handle_keyboard_interrupt,
    log_level_for,
    resolve_output_dimensions,
)

console = Console(stderr=True)
logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "input_path",
    metavar="INPUT",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "output_path",
    metavar="OUTPUT",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--mode",
    "-m",
    type=click.Choice(AnimationMode.names()),
    default=AnimationMode.COOL_DOWN.value,
    show_default=True,
    help="Animation mode",
)
@click.option("--frames", "-f", type=int, default=30, show_default=True, help="Number of frames")
@click.option(
    "--duration",
    "-d",
    type=int,
    default=100,
    show_default=True,
    help="Frame duration in milliseconds",
)
@click.option("--width", type=int, default=None, help="Output width (resizes input if different)")
@click.option("--height", type=int, default=None, help="Output height (resizes input if different)")
@click.option(
    "--v-stretch",
    type=float,
    default=0.5,
    show_default=True,
    help="Vertical stretch duration (0.0 to 1.0), happens first",
)
@click.option(
    "--h-stretch",
    type=float,
    default=0.5,
    show_default=True,
    help="Horizontal stretch duration (0.0 to 1.0), happens second",
)
@click.option("--reverse", "-r", is_flag=True, help="Play the animation backwards")
@click.option("--loop-animation", "-l", is_flag=True, help="Loop the animation forever")
@click.option(
    "--workers",
    "-j",
    type=int,
    default=1,
    show_default=True,
    help="Worker processes for frame generation (0 = CPU count)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Also write a timestamped log file into this directory",
)
def render(
    input_path: Path,
    output_path: Path,
    mode: str,
    frames: int,
    duration: int,
    width: int | None,
    height: int | None,
    v_stretch: float,
    h_stretch: float,
    reverse: bool,
    loop_animation: bool,
    workers: int,
    verbose: bool,
    debug: bool,
    log_dir: Path | None,
) -> None:
    """Create a CRT-style animation GIF from the image INPUT.

    The frames are written to OUTPUT as an animated GIF.
    """
    setup_logging(log_level_for(verbose, debug), log_dir)
    logger.info("Starting ElectronBeam render")

    try:
        validate_input_image(input_path)
        validate_frame_settings(frames, duration)
        validate_stretch("Vertical stretch", v_stretch)
        validate_stretch("Horizontal stretch", h_stretch)
        validated_workers = validate_worker_count(workers)
        validate_output_path(output_path)

        base_config = (
            AnimationConfigBuilder()
            .mode(mode)
            .stretch_durations(v_stretch, h_stretch)
            .frames(frames)
            .duration(duration)
            .reverse(reverse)
            .looping(loop_animation)
            .build()
        )

        display_common_header("ElectronBeam render")
        display_path_info("Input", input_path)

        source = load_image(input_path)
        config = base_config.with_dimensions(
            *resolve_output_dimensions((source.shape[1], source.shape[0]), width, height)
        )

        beam = ElectronBeam(config)
        beam.prepare(source)
        out_width, out_height = beam.size
        logger.info(f"Output dimensions: {out_width}x{out_height}")

        start_time = time.time()
        with Progress(
            TextColumn("[bold blue]🎞️  Drawing frames"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task("frames", total=frames)

            def on_progress(completed: int, total: int) -> None:
                progress.update(task_id, completed=completed, total=total)

            if validated_workers == 1:
                rendered = generate_frames(beam, frames, progress_callback=on_progress)
            else:
                generator = ParallelFrameGenerator(max_workers=validated_workers)
                rendered = generator.generate(beam, frames, progress_callback=on_progress)

        save_gif(rendered, output_path, config.frame_duration_ms, config.loop)
        elapsed = time.time() - start_time

    except ElectronBeamError as e:
        handle_beam_error("Render", e)
        return
    except KeyboardInterrupt:
        handle_keyboard_interrupt("Render")
        return

    click.echo("\n📊 Results:")
    click.echo(f"   • Mode: {config.mode.value}")
    click.echo(f"   • Frames: {len(rendered)} × {config.frame_duration_ms} ms")
    click.echo(f"   • Size: {out_width}x{out_height}")
    click.echo(f"   • Loop: {'yes' if config.loop else 'no'}")
    click.echo(f"   • Time: {elapsed:.2f}s")
    click.echo(f"   • Saved to: {output_path}")
