# -*- encoding: utf-8 -*-
# @File   : cli.py
# @Time   : 2026/10/19 17:05:26
# @Author : Kariko Lin

import logging

import click

from .errors import IniError
from .formats import IniFileParser, JsonEntriesHandler, YamlEntriesHandler
from .settings import DEFAULT_ARENA_CAPACITY, DEFAULT_TABLE_CAPACITY, Settings


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "json", "yaml"]),
    default="text", show_default=True,
    help="How to print the parsed entries.",
)
@click.option("--get", "key", default=None,
              help="Print only the value of KEY.")
@click.option("--arena-size", type=int, default=DEFAULT_ARENA_CAPACITY,
              show_default=True, help="Arena capacity in bytes.")
@click.option("--table-capacity", type=int, default=DEFAULT_TABLE_CAPACITY,
              show_default=True,
              help="Hash table slots; at most half can hold keys.")
@click.option("--encoding", default=None,
              help="Source encoding, guessed when omitted.")
@click.option("-v", "--verbose", is_flag=True, help="Log to stderr.")
@click.pass_context
def main(
    ctx: click.Context, path: str, fmt: str, key: str | None,
    arena_size: int, table_capacity: int, encoding: str | None,
    verbose: bool
) -> None:
    """Parse the INI file at PATH and print its entries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s] %(levelname)s: %(message)s')
    try:
        settings = Settings(
            arena_capacity=arena_size,
            table_capacity=table_capacity,
            encoding=encoding)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    try:
        doc = IniFileParser(path, settings).read()
    except IniError as e:
        click.echo(f"error: {e.tag}: {e}", err=True)
        ctx.exit(e.exit_code)

    with doc:
        if key is not None:
            if (value := doc.get(key)) is None:
                click.echo(f"error: no such key: {key}", err=True)
                ctx.exit(1)
            click.echo(str(value))
        elif fmt == "json":
            click.echo(JsonEntriesHandler.dumps(doc))
        elif fmt == "yaml":
            click.echo(YamlEntriesHandler.dumps(doc), nl=False)
        else:
            for i in doc.entries:
                click.echo(
                    f"Key: {i.key}, Value: {i.value}, Section: {i.section}")


if __name__ == "__main__":
    main()
