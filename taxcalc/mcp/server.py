"""Tax Calc MCP Server - FastMCP implementation for tax calculation tools."""

import json
import logging
from typing import Any

import yaml
from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

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
    get_setting,
    load_rate_tables,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("tax-calc")


def _calculate(
    direction: str,
    amount: float,
    rates: list[float] | None,
    table: str | None,
    rounding: bool | None,
) -> dict[str, Any]:
    try:
        if rates is not None:
            if rounding is None:
                rounding = get_default_rounding()
            calc = TaxCalculator(rates, rounding)
        else:
            calc = calculator_from_config(table=table, rounding=rounding)

        if direction == "forward":
            result = calc.forward(amount)
        else:
            result = calc.inverse(amount)

        breakdown = TaxBreakdown.from_result(direction, amount, calc.rates, result, calc.rounding)
        return breakdown.model_dump()

    except (TaxTypeError, ConfigNotFoundError, RateTableNotFoundError,
            InvalidSettingError, ValidationError, yaml.YAMLError) as e:
        logger.warning(f"{direction} calculation failed: {e}")
        return {"error": str(e)}


# --- Tools ---

@mcp.tool()
async def calculate_taxes(
    subtotal: float = Field(description="Amount before taxes"),
    rates: list[float] | None = Field(default=None, description="Tax rates as decimals, e.g. [0.05, 0.07]"),
    table: str | None = Field(default=None, description="Named rate table (used when rates is omitted)"),
    rounding: bool | None = Field(default=None, description="Round values to cents (default from settings, else true)"),
) -> dict[str, Any]:
    """Calculate per-rate taxes, tax sum and total from a pre-tax subtotal."""
    return _calculate("forward", subtotal, rates, table, rounding)


@mcp.tool()
async def extract_taxes(
    total: float = Field(description="Tax-inclusive amount"),
    rates: list[float] | None = Field(default=None, description="Tax rates as decimals, e.g. [0.05, 0.07]"),
    table: str | None = Field(default=None, description="Named rate table (used when rates is omitted)"),
    rounding: bool | None = Field(default=None, description="Round values to cents (default from settings, else true)"),
) -> dict[str, Any]:
    """Extract the subtotal, tax sum and per-rate taxes from a tax-inclusive total."""
    return _calculate("inverse", total, rates, table, rounding)


# --- Resources ---

@mcp.resource("taxcalc://tables")
async def list_tables_resource() -> str:
    """List configured rate tables and the default table."""
    try:
        tables = load_rate_tables()
    except (ValidationError, yaml.YAMLError) as e:
        return json.dumps({"error": str(e)})

    return json.dumps({
        "default_table": get_setting("default_table"),
        "tables": {name: table.model_dump() for name, table in tables.items()},
    }, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
