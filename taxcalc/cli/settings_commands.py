"""Settings CLI commands for Tax Calc.

Manages settings.json - rounding preference, default rate table, paths.
"""

import click

from taxcalc.sdk import (
    load_settings,
    get_settings_path,
    get_rates_path,
    set_setting,
    unset_setting,
    parse_setting_value,
    InvalidSettingError,
)
from taxcalc.sdk.config import SETTING_TYPES, DEFAULT_ROUNDING


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - rounding: round values to cents by default (true/false)
    - default_table: rate table used when no --rate/--table is given
    - rates_file: custom path to rates.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  rounding: {current.get('rounding', DEFAULT_ROUNDING)}")
    click.echo(f"  rates_file: {get_rates_path()}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(SETTING_TYPES)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE in settings.json.

    Examples:
        tax-calc settings set rounding false
        tax-calc settings set default_table on-hst
    """
    try:
        path = set_setting(key, parse_setting_value(key, value))
    except InvalidSettingError as e:
        raise click.BadParameter(str(e), param_hint="VALUE")

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(SETTING_TYPES)))
def settings_unset(key):
    """Remove KEY from settings.json, reverting to the default."""
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
