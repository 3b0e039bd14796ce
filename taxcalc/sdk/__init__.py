"""Tax Calc SDK - Core functionality for tax calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    parse_setting_value,
    get_default_rounding,
    configure_logging,
    ConfigNotFoundError,
    InvalidSettingError,
    # Rate tables
    get_rates_path,
    load_rate_tables,
    save_rate_tables,
    get_rate_table,
    set_rate_table,
    remove_rate_table,
    RateTableNotFoundError,
    calculator_from_config,
)

from .taxes import (
    TaxCalculator,
    TaxTypeError,
    forward,
    inverse,
    round2,
    RateTable,
    RatesFile,
    TaxBreakdown,
    TaxLine,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "parse_setting_value",
    "get_default_rounding",
    "configure_logging",
    "ConfigNotFoundError",
    "InvalidSettingError",
    # Rate tables
    "get_rates_path",
    "load_rate_tables",
    "save_rate_tables",
    "get_rate_table",
    "set_rate_table",
    "remove_rate_table",
    "RateTableNotFoundError",
    "calculator_from_config",
    # Calculator
    "TaxCalculator",
    "TaxTypeError",
    "forward",
    "inverse",
    "round2",
    # Schemas
    "RateTable",
    "RatesFile",
    "TaxBreakdown",
    "TaxLine",
]
