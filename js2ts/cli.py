import logging
import os
import sys

import click
from pydantic import ValidationError

from js2ts.errors import Js2TsError
from js2ts.logger import set_level
from js2ts.settings import load_settings
from js2ts.transformer import convert_js_to_ts


@click.command(name="js2ts")
@click.version_option(package_name="js2ts")
@click.argument("input_path",
                metavar="INPUT",
                type=click.Path(path_type=str))
@click.option("-o", "--output",
              type=click.Path(file_okay=False, path_type=str),
              default=None,
              help="Output directory path.")
@click.option("--overwrite",
              is_flag=True,
              help="Overwrite existing files.")
@click.option("--strict/--no-strict",
              default=None,
              help="Enable/disable strict mode.  [default: strict]")
@click.option("-i", "--ignore",
              multiple=True,
              help='File pattern to ignore (repeatable, e.g. "**/*.min.js").')
@click.option("--keep-original/--no-keep-original",
              default=None,
              help="Keep or delete the original JavaScript files.  [default: keep-original]")
@click.option("-v", "--verbose",
              is_flag=True,
              help="Print verbose output.")
@click.option("--config",
              "config_file",
              type=click.Path(exists=True, dir_okay=False, path_type=str),
              default=None,
              help="TOML or JSON file with default options.")
def cli(input_path, output, overwrite, strict, ignore, keep_original, verbose, config_file):
    """
    Convert JavaScript files to TypeScript using sibling .d.ts declarations.
    """
    overrides = dict(
        input=os.path.abspath(input_path),
        output=os.path.abspath(output) if output else None,
        overwrite=overwrite or None,
        strict=strict,
        ignore=list(ignore) or None,
        keep_original=keep_original,
        verbose=verbose or None,
    )
    # unset options fall back to the config file / environment
    overrides = {k: v for k, v in overrides.items() if v is not None}

    files = {}
    if config_file:
        key = "json_file" if config_file.endswith(".json") else "toml_file"
        files[key] = config_file

    try:
        settings = load_settings(**files, **overrides)
    except ValidationError as e:
        click.echo(f"Error: Invalid settings.\n{e}", err=True)
        sys.exit(1)

    if settings.verbose:
        set_level(logging.DEBUG)
        click.echo(f"Options: {settings.model_dump()}")

    click.echo(f"Converting JavaScript to TypeScript from: {settings.input}")
    try:
        results = convert_js_to_ts(settings)
    except (Js2TsError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count

    click.echo("\nTransformation complete!")
    click.echo(f"Successfully converted: {success_count} files")

    if fail_count:
        click.echo(f"Failed to convert: {fail_count} files")
        if settings.verbose:
            click.echo("\nFailed files:")
            for r in results:
                if not r.success:
                    click.echo(f"- {r.original_path}: {r.error}")


if __name__ == "__main__":
    cli()   # noqa: E305
