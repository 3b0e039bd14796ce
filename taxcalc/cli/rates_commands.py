"""Rate table CLI commands for Tax Calc.

Manages rates.yaml - named lists of tax rates.
"""

import click
import yaml
from pydantic import ValidationError

from taxcalc.sdk import (
    get_rates_path,
    get_setting,
    load_rate_tables,
    get_rate_table,
    set_rate_table,
    remove_rate_table,
    RateTableNotFoundError,
)


def _format_rates(rates: list) -> str:
    if not rates:
        return "(no rates)"
    return ", ".join(f"{r * 100:g}%" for r in rates)


def _load_tables():
    """Load rate tables, converting file errors into CLI errors."""
    try:
        return load_rate_tables()
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in {get_rates_path()}: {e}")
    except ValidationError as e:
        raise click.ClickException(f"Invalid rate tables in {get_rates_path()}:\n{e}")


@click.group()
def rates():
    """Manage named rate tables (rates.yaml)."""
    pass


@rates.command("list")
def rates_list():
    """List all rate tables."""
    tables = _load_tables()
    click.echo(f"Rates file: {get_rates_path()}")

    if not tables:
        click.echo("No rate tables defined.")
        click.echo("Add one with: tax-calc rates set NAME RATE [RATE ...]")
        return

    default_table = get_setting("default_table")
    click.echo()
    for name, table in tables.items():
        marker = "*" if name == default_table else " "
        line = f"{marker} {name}: {_format_rates(table.rates)}"
        if table.description:
            line += f"  - {table.description}"
        click.echo(line)

    if default_table:
        click.echo()
        click.echo("* default_table")


@rates.command("show")
@click.argument("name")
def rates_show(name):
    """Show one rate table."""
    _load_tables()
    try:
        table = get_rate_table(name)
    except RateTableNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"Table: {name}")
    if table.description:
        click.echo(f"Description: {table.description}")
    click.echo(f"Rates: {_format_rates(table.rates)}")
    click.echo(f"Combined: {sum(table.rates) * 100:g}%")


@rates.command("set")
@click.argument("name")
@click.argument("rate_values", metavar="RATE...", nargs=-1, required=True, type=float)
@click.option("--description", "-d", help="Label for the table")
def rates_set(name, rate_values, description):
    """Create or replace rate table NAME.

    Rates are decimals applied to the same base, in the order given.

    Examples:
        tax-calc rates set on-hst 0.13 -d "Ontario HST"
        tax-calc rates set qc 0.05 0.09975
    """
    _load_tables()
    try:
        path = set_rate_table(name, list(rate_values), description)
    except ValidationError as e:
        raise click.ClickException(f"Invalid rates for '{name}':\n{e}")

    click.echo(f"Saved rate table '{name}': {_format_rates(list(rate_values))}")
    click.echo(f"Saved to: {path}")


@rates.command("remove")
@click.argument("name")
def rates_remove(name):
    """Delete rate table NAME."""
    _load_tables()
    try:
        remove_rate_table(name)
    except RateTableNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"Removed rate table '{name}'.")
    if get_setting("default_table") == name:
        click.echo(click.style(
            f"Warning: default_table still points to '{name}'. "
            "Update with: tax-calc settings set default_table NAME",
            fg="yellow",
        ))
