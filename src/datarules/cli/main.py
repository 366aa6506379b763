"""datarules CLI entry point."""

import logging

import click


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
def cli(debug: bool):
    """datarules: declarative record validation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from datarules.cli.rules_cmd import check, rules, types  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
cli.add_command(types)
