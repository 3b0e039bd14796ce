"""Tests for the MCP server tools.

Calls the tool coroutines directly; FastMCP registration is not exercised.
"""

import asyncio
import json

import pytest

pytest.importorskip("mcp")

from taxcalc.mcp import server
from taxcalc.sdk import set_rate_table, set_setting


def _call(coro):
    return asyncio.run(coro)


class TestCalculateTaxes:

    def test_explicit_rates(self, isolated_config):
        data = _call(server.calculate_taxes(subtotal=100, rates=[0.05, 0.07], table=None, rounding=None))

        assert data["total"] == 112
        assert data["tax_sum"] == 12
        assert [t["amount"] for t in data["taxes"]] == [5, 7]

    def test_empty_rates(self, isolated_config):
        data = _call(server.calculate_taxes(subtotal=10.456, rates=[], table=None, rounding=None))

        assert data["subtotal"] == 10.46
        assert data["total"] == 10.46
        assert data["tax_sum"] == 0
        assert data["taxes"] == []

    def test_malformed_rates_file_returns_error(self, isolated_config):
        (isolated_config / "rates.yaml").write_text("tables: [unclosed\n")

        data = _call(server.calculate_taxes(subtotal=100, rates=None, table="hst", rounding=None))

        assert "error" in data

    def test_named_table_without_rounding(self, isolated_config):
        set_rate_table("hst", [0.13])

        data = _call(server.calculate_taxes(subtotal=10.005, rates=None, table="hst", rounding=False))

        assert data["rounded"] is False
        assert data["subtotal"] == 10.005

    def test_missing_table_returns_error(self, isolated_config):
        data = _call(server.calculate_taxes(subtotal=100, rates=None, table="nowhere", rounding=None))
        assert "error" in data


class TestExtractTaxes:

    def test_default_table(self, isolated_config):
        set_rate_table("bc", [0.05, 0.07])
        set_setting("default_table", "bc")

        data = _call(server.extract_taxes(total=112, rates=None, table=None, rounding=None))

        assert data["direction"] == "inverse"
        assert data["subtotal"] == 100

    def test_no_rates_configured(self, isolated_config):
        data = _call(server.extract_taxes(total=112, rates=None, table=None, rounding=None))
        assert "default_table" in data["error"]


def test_tables_resource_malformed_file(isolated_config):
    (isolated_config / "rates.yaml").write_text("tables: [unclosed\n")

    data = json.loads(_call(server.list_tables_resource()))

    assert "error" in data


def test_tables_resource(isolated_config):
    set_rate_table("hst", [0.13], "Ontario HST")

    data = json.loads(_call(server.list_tables_resource()))

    assert data["default_table"] is None
    assert data["tables"]["hst"] == {"description": "Ontario HST", "rates": [0.13]}
