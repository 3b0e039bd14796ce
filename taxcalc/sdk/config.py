"""Configuration management for Tax Calc.

Configuration is split into two files:

1. settings.json - Calculation preferences
   - rounding: default rounding preference (bool, default true)
   - default_table: rate table used when no rates are given
   - rates_file: path to rates.yaml (optional, if not colocated)

2. rates.yaml - Named rate tables
   - tables: name -> {description, rates}

Config directory resolution:
1. TAX_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/tax-calc/ (XDG_CONFIG_HOME fallback)

Rates file resolution:
1. settings.json "rates_file" key (if set)
2. rates.yaml in the config directory
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .taxes.calculator import TaxCalculator
from .taxes.schemas import RatesFile, RateTable


APP_NAME = "tax-calc"
SETTINGS_FILENAME = "settings.json"
RATES_FILENAME = "rates.yaml"

# Known settings and the type each must hold
SETTING_TYPES = {
    "rounding": bool,
    "default_table": str,
    "rates_file": str,
}

DEFAULT_ROUNDING = True


class ConfigNotFoundError(Exception):
    """Raised when required configuration is missing."""
    pass


class RateTableNotFoundError(Exception):
    """Raised when a named rate table is not defined."""
    pass


class InvalidSettingError(Exception):
    """Raised when a setting key or value is not valid."""
    pass


def configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TAX_CALC_CONFIG_PATH environment variable
    2. ~/.config/tax-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TAX_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load rounding and rate-table preferences from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Write rounding and rate-table preferences to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Raises:
        InvalidSettingError: If key is unknown or value has the wrong type
    """
    expected = SETTING_TYPES.get(key)
    if expected is None:
        raise InvalidSettingError(
            f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_TYPES)}"
        )
    if not isinstance(value, expected):
        raise InvalidSettingError(
            f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )

    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting from settings.json.

    Returns:
        True if the key was present
    """
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def parse_setting_value(key: str, raw: str) -> Any:
    """Convert a command-line string into the typed value for a setting.

    Example:
        parse_setting_value("rounding", "off")  # -> False
    """
    expected = SETTING_TYPES.get(key)
    if expected is None:
        raise InvalidSettingError(
            f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_TYPES)}"
        )
    if expected is bool:
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
        raise InvalidSettingError(f"Setting '{key}' expects true/false, got '{raw}'")
    return raw


def get_default_rounding() -> bool:
    """Rounding preference from settings.json (default: True)."""
    value = get_setting("rounding", DEFAULT_ROUNDING)
    if not isinstance(value, bool):
        raise InvalidSettingError(
            f"Setting 'rounding' in {get_settings_path()} must be true or false, got {value!r}"
        )
    return value


def get_rates_path() -> Path:
    """Get the path to rates.yaml.

    Resolution order:
    1. settings.json "rates_file" key (if set)
    2. rates.yaml in config directory
    """
    custom = get_setting("rates_file")
    if custom:
        return Path(custom).expanduser()
    return get_config_dir() / RATES_FILENAME


def load_rate_tables() -> dict[str, RateTable]:
    """Load and validate all rate tables from rates.yaml.

    Returns:
        Mapping of table name to RateTable (empty if the file doesn't exist)

    Raises:
        pydantic.ValidationError: If the file content is malformed
    """
    rates_file = get_rates_path()

    if not rates_file.exists():
        return {}

    with open(rates_file, "r") as f:
        raw = yaml.safe_load(f) or {}

    return RatesFile.model_validate(raw).tables


def save_rate_tables(tables: dict[str, RateTable]) -> Path:
    """Write rate tables to rates.yaml.

    Returns:
        Path to the saved rates file
    """
    path = get_rates_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = RatesFile(tables=tables).model_dump(exclude_none=True)
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    return path


def get_rate_table(name: str) -> RateTable:
    """Look up a rate table by name.

    Raises:
        RateTableNotFoundError: If no table has that name
    """
    tables = load_rate_tables()
    if name not in tables:
        available = ", ".join(sorted(tables)) or "none defined"
        raise RateTableNotFoundError(
            f"Rate table '{name}' not found in {get_rates_path()} (available: {available})\n\n"
            f"Create it with: tax-calc rates set {name} RATE [RATE ...]"
        )
    return tables[name]


def set_rate_table(name: str, rates: list, description: Optional[str] = None) -> Path:
    """Create or replace a named rate table."""
    tables = load_rate_tables()
    tables[name] = RateTable(description=description, rates=list(rates))
    return save_rate_tables(tables)


def remove_rate_table(name: str) -> Path:
    """Delete a named rate table.

    Raises:
        RateTableNotFoundError: If no table has that name
    """
    tables = load_rate_tables()
    if name not in tables:
        raise RateTableNotFoundError(f"Rate table '{name}' not found in {get_rates_path()}")
    del tables[name]
    return save_rate_tables(tables)


def calculator_from_config(
    table: Optional[str] = None,
    rounding: Optional[bool] = None,
) -> TaxCalculator:
    """Build a TaxCalculator from a named rate table and settings.

    Args:
        table: Rate table name (default: settings.json 'default_table')
        rounding: Rounding preference (default: settings.json 'rounding')

    Raises:
        ConfigNotFoundError: If no table is given and no default_table is set
        RateTableNotFoundError: If the table is not defined
    """
    if table is None:
        table = get_setting("default_table")
        if not table:
            raise ConfigNotFoundError(
                "No rate table given and no default_table set.\n\n"
                "Set one with: tax-calc settings set default_table NAME"
            )

    if rounding is None:
        rounding = get_default_rounding()

    return TaxCalculator(get_rate_table(table).rates, rounding)
