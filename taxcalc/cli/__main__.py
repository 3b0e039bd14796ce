"""Tax Calc CLI - Command-line interface for tax calculations."""

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from taxcalc import __version__
from taxcalc.sdk import (
    TaxBreakdown,
    TaxCalculator,
    TaxTypeError,
    ConfigNotFoundError,
    InvalidSettingError,
    RateTableNotFoundError,
    calculator_from_config,
    configure_logging,
    get_default_rounding,
)

from .rates_commands import rates as rates_group
from .settings_commands import settings as settings_group
from .renderers.breakdown_renderer import render_breakdown


@click.group()
@click.version_option(version=__version__, prog_name="tax-calc")
def cli():
    """Tax Calc - Forward and inverse tax calculations.

    Rates come from (in order):

    \b
    1. --rate options on the command line
    2. --table NAME from rates.yaml
    3. settings.json 'default_table'

    Configuration lives in TAX_CALC_CONFIG_PATH or ~/.config/tax-calc/.
    Set LOG_LEVEL=DEBUG to trace each calculation.
    """
    configure_logging()


cli.add_command(rates_group)
cli.add_command(settings_group)


def _calculation_options(func):
    """Options shared by forward and inverse."""
    func = click.option("--json", "as_json", is_flag=True, help="Output the breakdown as JSON")(func)
    func = click.option("--round/--no-round", "rounding", default=None,
                        help="Round values to cents (default: settings.json 'rounding', else on)")(func)
    func = click.option("--table", "-t", help="Named rate table from rates.yaml")(func)
    func = click.option("--rate", "-r", "rates", multiple=True, type=float,
                        help="Tax rate as a decimal, e.g. 0.05 (repeatable, order kept)")(func)
    return func


def _build_calculator(rates: tuple, table: str, rounding) -> TaxCalculator:
    """Resolve rates and rounding into a calculator, mapping config errors to CLI errors."""
    try:
        if rates:
            if table:
                click.echo(f"Ignoring --table {table}: explicit --rate values given.", err=True)
            if rounding is None:
                rounding = get_default_rounding()
            return TaxCalculator(list(rates), rounding)
        return calculator_from_config(table=table, rounding=rounding)
    except ConfigNotFoundError as e:
        raise click.UsageError(f"No rates given. Use --rate or --table.\n{e}")
    except (RateTableNotFoundError, InvalidSettingError, ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(str(e))


def _run(direction: str, amount: float, rates: tuple, table: str, rounding, as_json: bool) -> None:
    calc = _build_calculator(rates, table, rounding)

    try:
        if direction == "forward":
            result = calc.forward(amount)
        else:
            result = calc.inverse(amount)
    except TaxTypeError as e:
        raise click.BadParameter(str(e), param_hint="AMOUNT")

    breakdown = TaxBreakdown.from_result(direction, amount, calc.rates, result, calc.rounding)

    if as_json:
        click.echo(breakdown.model_dump_json(indent=2))
    else:
        render_breakdown(Console(), breakdown)


@cli.command("forward")
@click.argument("subtotal", type=float)
@_calculation_options
def forward_cmd(subtotal, rates, table, rounding, as_json):
    """Calculate taxes and total from a pre-tax SUBTOTAL.

    Examples:
        tax-calc forward 100 -r 0.05 -r 0.07
        tax-calc forward 59.99 --table on-hst --json
    """
    _run("forward", subtotal, rates, table, rounding, as_json)


@cli.command("inverse")
@click.argument("total", type=float)
@_calculation_options
def inverse_cmd(total, rates, table, rounding, as_json):
    """Extract subtotal and taxes from a tax-inclusive TOTAL.

    Examples:
        tax-calc inverse 112 -r 0.05 -r 0.07
        tax-calc inverse 67.79 --table on-hst --no-round
    """
    _run("inverse", total, rates, table, rounding, as_json)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
