"""
Compiles a siteflon markup file into an HTML document.
The document is written to stdout, or to the file given with --output.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
from .config import ConfigError, build_config
from .document import convert
from .exceptions import MalformedConstructError
from .filesystem import get_max_file_size, read_source, resolve_source, write_document

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "--preserve-newlines/--no-preserve-newlines",
    default=None,
    help="Render bare newlines as <br>",
)
@click.option("--stylesheet", help="Stylesheet href used in the document head")
@click.option("--fragment", is_flag=True, help="Emit the HTML fragment only")
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on malformed links or images instead of emitting an empty document",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the document to this file instead of stdout",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    preserve_newlines: bool | None = None,
    stylesheet: str | None = None,
    fragment: bool = False,
    strict: bool = False,
    output: str | None = None,
):
    """
    Entry point for compiling a siteflon file to HTML.

    Args:
        filepath: Path to the siteflon file to compile.
        preserve_newlines: Override for rendering bare newlines as line breaks.
        stylesheet: Override for the stylesheet href.
        fragment: Emit the compiled fragment without the document shell.
        strict: Treat malformed links or images as errors.
        output: Destination file; stdout when omitted.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths or contain
            unsupported overrides, including invalid configuration values.
        click.ClickException: If the source cannot be read, exceeds limits, or
            fails to compile in strict mode, or if the output cannot be written.

    Examples:
        siteflon index.sf --preserve-newlines -o index.html
    """
    try:
        filepath = resolve_source(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            preserve_newlines=preserve_newlines,
            stylesheet=stylesheet,
            fragment=fragment or None,
            strict=strict or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    output_path = None
    if output is not None:
        output_path = Path(output).expanduser().resolve()
        if output_path == filepath:
            raise click.BadParameter("Refusing to overwrite the source file with its output.")

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        source = read_source(filepath, max_file_size)
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = convert(source, replace(config, strict=True))
    except MalformedConstructError as error:
        if config.strict:
            raise click.ClickException(f"{filepath}: {error}") from error
        click.echo(f"Warning: {filepath}: {error}; the compiled document is empty", err=True)
        document = convert("", config)

    if output_path is None:
        click.echo(document, nl=False)
        return

    try:
        write_document(output_path, document)
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
