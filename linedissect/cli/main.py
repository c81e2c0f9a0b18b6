"""Command line interface for Linedissect.

Commands:
- ``linedissect check PATTERN...``  compile patterns and show their tokens
- ``linedissect run``               dissect lines from a file or stdin
"""

from __future__ import annotations

import json
import sys

import click

from linedissect import __version__
from linedissect.config import DissectConfig, load_config
from linedissect.extraction import DissectFilter
from linedissect.patterns import compile_pattern
from linedissect.types.errors import DissectError
from linedissect.utils.logger import configure_logging

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _parse_conversions(values: tuple[str, ...]) -> dict[str, str]:
    conversions: dict[str, str] = {}
    for item in values:
        name, sep, datatype = item.partition("=")
        if not sep or not name or not datatype:
            raise click.BadParameter(
                f"expected FIELD=TYPE, got {item!r}", param_hint="--convert"
            )
        conversions[name] = datatype
    return conversions


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="Linedissect", message="%(prog)s v%(version)s")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for stderr output (default: $LINEDISSECT_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Linedissect - delimiter-based field extraction for text lines."""
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("patterns", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print tokens as JSON.")
def check(patterns: tuple[str, ...], as_json: bool) -> None:
    """Compile PATTERNS and print their tokens."""
    failed = False
    for text in patterns:
        try:
            pattern = compile_pattern(text)
        except DissectError as e:
            click.echo(f"invalid: {text}", err=True)
            click.echo(f"  {e}", err=True)
            failed = True
            continue

        rows = pattern.describe()
        if as_json:
            click.echo(json.dumps({"pattern": text, "prefix": pattern.prefix, "tokens": rows}, ensure_ascii=False))
            continue

        click.echo(f"valid: {text}")
        if pattern.prefix:
            click.echo(f"  prefix: {pattern.prefix!r}")
        for row in rows:
            order = "" if row["order"] is None else f"/{row['order']}"
            click.echo(
                f"  {row['position']:>3}  {row['modifier']:<15} "
                f"{row['name'] or '-'}{order}  delimiter={row['delimiter']!r}"
            )

    if failed:
        sys.exit(1)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--pattern", "-p", help="Dissect pattern applied to each line.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="JSON configuration file (mapping, convert_datatype, ...).",
)
@click.option("--field", "-f", default="message", show_default=True, help="Field holding the raw line.")
@click.option("--convert", multiple=True, metavar="FIELD=TYPE", help="Datatype conversion, repeatable.")
@click.option("--skip-blank/--keep-blank", default=True, show_default=True, help="Ignore empty lines.")
def run(
    source,
    pattern: str | None,
    config_path: str | None,
    field: str,
    convert: tuple[str, ...],
    skip_blank: bool,
) -> None:
    """Dissect each line of SOURCE (default stdin) and print JSON records."""
    if bool(pattern) == bool(config_path):
        raise click.UsageError("Provide exactly one of --pattern or --config.")

    try:
        if config_path:
            config = load_config(config_path)
        else:
            config = DissectConfig(mapping={field: pattern})
        config.convert_datatype.update(_parse_conversions(convert))

        dissect = DissectFilter(config)
        dissect.register()
    except DissectError as e:
        click.echo(e.get_formatted_message(), err=True)
        sys.exit(2)

    for line in source:
        line = line.rstrip("\r\n")
        if skip_blank and not line:
            continue
        event = dissect.dissect_line(line, source=field)
        click.echo(json.dumps(event.to_dict(), ensure_ascii=False, default=str))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
