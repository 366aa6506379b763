"""Rule commands: check a record, list rule sets, list types."""

import json
from pathlib import Path

import click
import yaml

from datarules.context import ValidationContext
from datarules.errors import ConfigurationError
from datarules.loader import load_rules_file


def _load_context(rules_file: Path) -> ValidationContext:
    context = ValidationContext.from_env()
    try:
        load_rules_file(rules_file, context)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)
    return context


@click.command()
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("title")
@click.argument("record_file", type=click.File("r"))
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only print errors.")
def check(rules_file: Path, title: str, record_file, quiet: bool):
    """Validate a JSON or YAML record against a rule set.

    RECORD_FILE may be "-" to read from stdin. Prints the coerced record when
    it is valid; exits with status 1 when it is not.
    """
    context = _load_context(rules_file)

    try:
        record = yaml.safe_load(record_file)
    except yaml.YAMLError as e:
        click.echo(click.style(f"Error: cannot parse record: {e}", fg="red"), err=True)
        raise SystemExit(2)
    if record is None:
        record = {}
    if not isinstance(record, dict):
        click.echo(click.style("Error: record must be an object", fg="red"), err=True)
        raise SystemExit(2)

    try:
        errors = context.validate(title, record)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    for message in errors:
        click.echo(click.style(f"  ✗ {message}", fg="red"))

    if errors:
        click.echo(click.style(f"\n{len(errors)} error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    if not quiet:
        click.echo(json.dumps(record, indent=2, default=str))
    click.echo(click.style("Record is valid.", fg="green", bold=True))


@click.command()
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def rules(rules_file: Path):
    """List the rule sets defined in a rules file."""
    context = _load_context(rules_file)

    if len(context.enums):
        click.echo(f"Loaded {len(context.enums)} enum(s):")
        for entry in context.enums:
            click.echo(f"  {entry.name}: {', '.join(entry.values)}")

    click.echo(f"Loaded {len(context.rules)} rule set(s):")
    for rule_set in context.rules:
        click.echo(f"  ✓ {rule_set.title} ({len(rule_set)} fields)")
        for rule in rule_set.rules:
            existence = "required" if rule.required else "optional"
            click.echo(f"      {rule.name}: {rule.type}, {existence}")


@click.command()
def types():
    """List the registered types."""
    context = ValidationContext.from_env()
    for entry in context.types:
        click.echo(f"{entry.type} ({entry.kind.name.lower()})")
