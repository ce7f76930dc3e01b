"""
Reflows Markdown prose to a fixed width.
Reads stdin and writes stdout unless files are given; `--in-place` rewrites them.

A second command, `md-latex`, renders embedded LaTeX equations to SVG images.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import ConfigError, WrapConfig, build_config
from .exceptions import RenderError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    normalize_filepath,
    write_atomically,
)
from .latex import EquationRenderer, render_document
from .log import setup_logger
from .reflow import ReflowFileError, reflow_file, reflow_stream

__all__ = ["cli", "latex_cli"]


def _reflow_path(filepath: Path, config: WrapConfig, in_place: bool) -> None:
    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, config.max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        reflowed = reflow_file(filepath, config)
    except ReflowFileError as error:
        raise click.ClickException(str(error)) from error

    if not in_place:
        click.echo(reflowed, nl=False)
        return

    try:
        write_atomically(filepath, reflowed, initial_stat)
    except IOError as error:
        raise click.ClickException(str(error)) from error


@click.command()
@click.version_option(version=__version__)
@click.option("-w", "--width", "chars_per_line", type=int, help="Target line width in characters")
@click.option("-i", "--in-place", is_flag=True, help="Rewrite the files instead of printing them")
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level")
@click.argument("filepaths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepaths: tuple[str, ...],
    chars_per_line: int | None = None,
    in_place: bool = False,
    log_level: str = "WARNING",
):
    """
    Reflow Markdown prose to a fixed width.

    Args:
        filepaths: Markdown files to reflow; stdin is used when empty.
        chars_per_line: Override for the target line width.
        in_place: Rewrite each file instead of printing its reflowed content.
        log_level: Logging level name for diagnostics on stderr.

    Raises:
        click.UsageError: If `--in-place` is given without files.
        click.BadParameter: If a path or configuration value is invalid.
        click.ClickException: If a file cannot be read, is too large, or
            cannot be rewritten safely.

    Examples:
        md-wrap --width 72 < notes.md
        md-wrap --in-place README.md CHANGELOG.md
    """
    setup_logger(log_level)
    if in_place and not filepaths:
        raise click.UsageError("--in-place requires at least one file")

    try:
        paths = [normalize_filepath(raw_path) for raw_path in filepaths]
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    search_path = paths[0].parent if paths else Path.cwd()
    try:
        config = build_config(search_path, chars_per_line=chars_per_line)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if not paths:
        reflow_stream(
            click.get_text_stream("stdin"),
            click.get_text_stream("stdout"),
            config.chars_per_line,
        )
        return

    for filepath in paths:
        _reflow_path(filepath, config, in_place)


@click.command()
@click.version_option(version=__version__)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file (default: stdin)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--img-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to generate images to (default: current directory)",
)
@click.option("--tex2svg", help="tex2svg executable (default: found on PATH)")
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level")
def latex_cli(
    input_path: Path | None = None,
    output_path: Path | None = None,
    img_dir: Path | None = None,
    tex2svg: str | None = None,
    log_level: str = "WARNING",
):
    """
    Render LaTeX equations in a Markdown document to SVG images.

    Raises:
        click.BadParameter: If a configuration value is invalid.
        click.ClickException: If reading, rendering, or writing fails.

    Examples:
        md-latex -i draft.md -o README.md --img-dir images
    """
    setup_logger(log_level)
    search_path = input_path.parent if input_path is not None else Path.cwd()
    try:
        config = build_config(
            search_path,
            tex2svg=tex2svg,
            img_dir=str(img_dir) if img_dir is not None else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    image_dir = Path(config.img_dir).expanduser().resolve() if config.img_dir else Path.cwd()
    output_dir = output_path.parent.resolve() if output_path is not None else image_dir

    try:
        image_dir.mkdir(parents=True, exist_ok=True)
        if input_path is not None:
            content = input_path.read_text(encoding="UTF-8")
        else:
            content = click.get_text_stream("stdin").read()
    except (OSError, UnicodeDecodeError) as error:
        raise click.ClickException(str(error)) from error

    renderer = EquationRenderer(image_dir, output_dir, config.tex2svg)
    try:
        rendered = render_document(content, renderer)
    except RenderError as error:
        raise click.ClickException(str(error)) from error
    except OSError as error:
        error_message = f"Could not write equation image in {image_dir}: {error}"
        raise click.ClickException(error_message) from error

    if output_path is None:
        click.echo(rendered, nl=False)
        return

    try:
        output_path.write_text(rendered, encoding="UTF-8")
    except OSError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
