"""
Converts a directory of recipe files into static HTML pages.
Each recipe is converted on its own; a malformed recipe is reported and skipped.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .converter import convert_file, validate_file
from .exceptions import ConvertFileError
from .filesystem import (
    destination_for,
    discover_recipes,
    get_max_file_size,
    get_max_line_length,
)

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="cookbook-html")
@click.option("--source-ext", help="Extension of recipe files (default: .md)")
@click.option("--output-ext", help="Extension of generated pages (default: .html)")
@click.option(
    "--keep-partial/--discard-partial",
    default=None,
    help="Leave pages of recipes that failed halfway on disk",
)
@click.option("--check", is_flag=True, help="Validate recipes without writing pages")
@click.argument("source_dir", required=False, type=click.Path(file_okay=False))
@click.argument("output_dir", required=False, type=click.Path(file_okay=False))
def cli(
    source_dir: str | None = None,
    output_dir: str | None = None,
    source_ext: str | None = None,
    output_ext: str | None = None,
    keep_partial: bool | None = None,
    check: bool = False,
):
    """
    Entry point for converting a cookbook directory to HTML pages.

    Args:
        source_dir: Directory holding the recipes (default: cookbook).
        output_dir: Directory receiving the pages (default: docs).
        source_ext: Override for the recipe file extension.
        output_ext: Override for the page file extension.
        keep_partial: Whether pages of failed recipes are left on disk.
        check: Only validate the recipes.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If limits from the environment are invalid or the
            directories cannot be accessed. Malformed recipes never raise; they
            are reported and the remaining recipes are still converted.

    Examples:
        cookbook-html cookbook docs --output-ext .htm
    """
    try:
        config = build_config(
            Path.cwd(),
            source_dir=source_dir,
            output_dir=output_dir,
            source_extension=source_ext,
            output_extension=output_ext,
            keep_partial_output=keep_partial,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = apply_overrides(
            config,
            max_file_size=get_max_file_size(default=config.max_file_size),
            max_line_length=get_max_line_length(default=config.max_line_length),
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    source_path = Path(config.source_dir)
    output_path = Path(config.output_dir)

    try:
        recipes = discover_recipes(source_path, config.source_extension)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if not check:
        try:
            output_path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise click.ClickException(f"Error creating {output_path}: {error}") from error

    for recipe in recipes:
        if check:
            click.echo(f"Checking {recipe}...")
            try:
                validate_file(recipe, config)
            except ConvertFileError as error:
                click.echo("-> Validation failed!")
                click.echo(str(error), err=True)
            continue

        destination = destination_for(recipe, output_path, config.output_extension)
        click.echo(f"Converting {recipe} to {destination}...")
        try:
            convert_file(recipe, destination, config)
        except ConvertFileError as error:
            click.echo("-> Conversion failed!")
            click.echo(str(error), err=True)


if __name__ == "__main__":
    cli()
