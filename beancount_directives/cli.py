import collections
import json
import os
import pathlib
import sys
import typing

import click
import rich
import yaml
from rich import box
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from beancount_directives.data_types import Directive
from beancount_directives.environment import (
    LOG_LEVEL_MAP,
    Environment,
    LogLevel,
    pass_env,
)
from beancount_directives.errors import ParseError
from beancount_directives.parser import parse, tokenize
from beancount_directives.utils import directive_kind, directive_to_dict

TABLE_HEADER_STYLE = "yellow"
TABLE_COLUMN_STYLE = "cyan"


def read_document(env: Environment, path: pathlib.Path) -> str:
    env.logger.debug("Reading document %s", path)
    return path.read_text(encoding="utf-8")


def report_error(
    env: Environment, path: pathlib.Path, exc: ParseError
) -> typing.NoReturn:
    env.logger.error(
        "Failed to parse [green]%s[/] at line [blue]%s[/], column [blue]%s[/]: %s",
        escape(str(path)),
        exc.location.line,
        exc.location.column,
        escape(exc.message),
        extra={"markup": True, "highlighter": None},
    )
    if exc.context:
        env.logger.error(
            "%s\n%s^",
            escape(exc.context),
            " " * (exc.location.column - 1),
            extra={"markup": True, "highlighter": None},
        )
    sys.exit(1)


def parse_document(env: Environment, path: pathlib.Path) -> list[Directive]:
    text = read_document(env, path)
    try:
        return parse(text)
    except ParseError as exc:
        report_error(env, path, exc)


@click.group(help="Parse Beancount documents into directives.")
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(
        list(map(lambda key: key.value, LOG_LEVEL_MAP.keys())), case_sensitive=False
    ),
    default=lambda: os.environ.get("LOG_LEVEL", "INFO"),
)
@pass_env
def cli(env: Environment, log_level: str):
    env.log_level = LogLevel(log_level.lower())
    env.setup_logging()


@cli.command(name="check")
@click.argument(
    "bean_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@pass_env
def check_cmd(env: Environment, bean_file: pathlib.Path):
    """Parse a document and report how many directives of each kind it has"""
    directives = parse_document(env, bean_file)
    counter = collections.Counter(map(directive_kind, directives))

    table = Table(
        title=escape(str(bean_file)),
        box=box.SIMPLE,
        header_style=TABLE_HEADER_STYLE,
        expand=True,
    )
    table.add_column("Directive", style=TABLE_COLUMN_STYLE)
    table.add_column("Count", style=TABLE_COLUMN_STYLE, justify="right")
    for kind, count in sorted(counter.items()):
        table.add_row(kind, str(count))
    rich.print(Padding(table, (1, 0, 0, 4)))

    env.logger.info(
        "Parsed [green]%s[/] directives from [green]%s[/]",
        len(directives),
        escape(str(bean_file)),
        extra={"markup": True, "highlighter": None},
    )


@cli.command(name="dump")
@click.argument(
    "bean_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format of the directives",
)
@click.option(
    "-o",
    "--output",
    type=click.File("wt", encoding="utf-8"),
    default="-",
    help="Output file, stdout by default",
)
@pass_env
def dump_cmd(
    env: Environment,
    bean_file: pathlib.Path,
    output_format: str,
    output: typing.TextIO,
):
    """Dump the directives of a document as JSON or YAML:

        > beancount-directives dump -f yaml main.bean
        - directive: open
          date: '2024-01-01'
          account:
            type: Assets
            segments:
            - Bank
          currencies:
          - USD

    Amounts are written as strings to keep their exact decimal value.
    """
    directives = parse_document(env, bean_file)
    payload = list(map(directive_to_dict, directives))
    if output_format.lower() == "yaml":
        yaml.safe_dump(payload, output, allow_unicode=True, sort_keys=False)
    else:
        json.dump(payload, output, indent=2, ensure_ascii=False)
        output.write("\n")
    env.logger.debug("Dumped %s directives as %s", len(payload), output_format)


@cli.command(name="tokens")
@click.argument(
    "bean_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@pass_env
def tokens_cmd(env: Environment, bean_file: pathlib.Path):
    """Print the token stream of a document"""
    text = read_document(env, bean_file)
    try:
        tokens = tokenize(text)
    except ParseError as exc:
        report_error(env, bean_file, exc)

    table = Table(
        title=escape(str(bean_file)),
        box=box.SIMPLE,
        header_style=TABLE_HEADER_STYLE,
        expand=True,
    )
    table.add_column("Line", style=TABLE_COLUMN_STYLE, justify="right")
    table.add_column("Column", style=TABLE_COLUMN_STYLE, justify="right")
    table.add_column("Type", style=TABLE_COLUMN_STYLE)
    table.add_column("Value", style=TABLE_COLUMN_STYLE)
    for token in tokens:
        table.add_row(
            str(token.line),
            str(token.column),
            token.type,
            escape(repr(token.value)),
        )
    rich.print(Padding(table, (1, 0, 0, 4)))


if __name__ == "__main__":
    cli()
