import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .config import Settings, load_settings
from .dispatch import parse_file
from .exceptions import ConfigError, IncludeError, LispSyntaxError
from .render import SlideTextFormatter, render_json, render_lisp

_FORMATS = ("text", "json", "lisp")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)-8s | %(name)-20s | %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to a file instead of stdout.")
@click.option("--format", "output_format", type=click.Choice(_FORMATS), default="text",
              show_default=True, help="Output format.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Shorthand for --format json.")
@click.option("--config", "config_path", default=None, metavar="PATH",
              type=click.Path(dir_okay=False, path_type=Path),
              help="TOML settings file with a [slides] table.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def main(
    path: Path,
    output_path: str | None,
    output_format: str,
    as_json: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Parse a presentation file and print its slides.

    \b
    Recognized forms:
      - (slide ...)  (song ...)  (load "file.lisp")
      - (image ...)  (video ...)  (presentation ...)
    """
    _configure_logging(verbose)

    # --- Settings ---
    settings = Settings()
    if config_path is not None:
        try:
            settings = load_settings(config_path)
        except ConfigError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    # --- Parse ---
    try:
        result = parse_file(path, settings=settings)
    except (LispSyntaxError, IncludeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    # Number slides the way a service shows them
    slides = [replace(slide, id=index) for index, slide in enumerate(result.slides)]

    # --- Render ---
    if as_json:
        output_format = "json"
    if output_format == "json":
        rendered = render_json(slides)
    elif output_format == "lisp":
        rendered = render_lisp(slides)
    else:
        rendered = SlideTextFormatter().render(slides)

    # --- Output ---
    if output_path:
        dest = Path(output_path)
        dest.write_text(rendered, encoding="utf-8")
        click.echo(f"Written to {dest}")
    else:
        click.echo(rendered, nl=False)

    for error in result.errors:
        click.echo(f"Error: {error}", err=True)
    if result.errors:
        sys.exit(1)
