"""Tests for the tax-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from taxcalc.cli.__main__ import cli
from taxcalc.sdk import get_setting, load_rate_tables, set_rate_table, set_setting


@pytest.fixture
def runner(isolated_config):
    return CliRunner()


class TestForwardCommand:
    """tax-calc forward."""

    def test_explicit_rates_table_output(self, runner):
        result = runner.invoke(cli, ["forward", "100", "-r", "0.05", "-r", "0.07"])

        assert result.exit_code == 0, result.output
        assert "Taxes on subtotal" in result.output
        assert "112.00" in result.output
        assert "12.00" in result.output
        assert "5%" in result.output
        assert "7%" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["forward", "100", "-r", "0.05", "-r", "0.07", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["direction"] == "forward"
        assert data["total"] == 112
        assert data["tax_sum"] == 12
        assert [t["amount"] for t in data["taxes"]] == [5, 7]

    def test_no_round(self, runner):
        result = runner.invoke(cli, ["forward", "99.999", "-r", "0.1", "--no-round", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["rounded"] is False
        assert data["subtotal"] == 99.999
        assert data["taxes"][0]["amount"] == 0.1 * 99.999

    def test_rounding_setting_respected(self, runner):
        set_setting("rounding", False)

        result = runner.invoke(cli, ["forward", "99.999", "-r", "0.1", "--json"])

        assert json.loads(result.output)["rounded"] is False

    def test_named_table(self, runner):
        set_rate_table("bc", [0.05, 0.07])

        result = runner.invoke(cli, ["forward", "100", "--table", "bc", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total"] == 112

    def test_default_table(self, runner):
        set_rate_table("hst", [0.13])
        set_setting("default_table", "hst")

        result = runner.invoke(cli, ["forward", "100", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total"] == 113

    def test_no_rates_is_usage_error(self, runner):
        result = runner.invoke(cli, ["forward", "100"])

        assert result.exit_code == 2
        assert "No rates given" in result.output

    def test_unknown_table(self, runner):
        result = runner.invoke(cli, ["forward", "100", "--table", "nowhere"])

        assert result.exit_code == 1
        assert "Rate table 'nowhere' not found" in result.output


class TestInverseCommand:
    """tax-calc inverse."""

    def test_explicit_rates(self, runner):
        result = runner.invoke(cli, ["inverse", "112", "-r", "0.05", "-r", "0.07", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["direction"] == "inverse"
        assert data["subtotal"] == 100
        assert data["total"] == 112
        assert [t["amount"] for t in data["taxes"]] == [5, 7]

    def test_table_output(self, runner):
        result = runner.invoke(cli, ["inverse", "112", "-r", "0.05", "-r", "0.07"])

        assert result.exit_code == 0, result.output
        assert "Taxes extracted from total" in result.output
        assert "100.00" in result.output

    def test_degenerate_rates_flagged(self, runner):
        result = runner.invoke(cli, ["inverse", "100", "-r", "-1"])

        assert result.exit_code == 0, result.output
        assert "not finite" in result.output
        assert "inf" in result.output


class TestRatesCommands:
    """tax-calc rates ..."""

    def test_set_list_show_remove(self, runner):
        result = runner.invoke(cli, ["rates", "set", "qc", "0.05", "0.09975", "-d", "Quebec"])
        assert result.exit_code == 0, result.output
        assert load_rate_tables()["qc"].rates == [0.05, 0.09975]

        result = runner.invoke(cli, ["rates", "list"])
        assert "qc: 5%, 9.975%  - Quebec" in result.output

        result = runner.invoke(cli, ["rates", "show", "qc"])
        assert "Combined: 14.975%" in result.output

        result = runner.invoke(cli, ["rates", "remove", "qc"])
        assert result.exit_code == 0, result.output
        assert load_rate_tables() == {}

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["rates", "list"])
        assert "No rate tables defined." in result.output

    def test_list_marks_default(self, runner):
        set_rate_table("hst", [0.13])
        set_setting("default_table", "hst")

        result = runner.invoke(cli, ["rates", "list"])

        assert "* hst: 13%" in result.output

    def test_show_missing(self, runner):
        result = runner.invoke(cli, ["rates", "show", "nowhere"])
        assert result.exit_code == 1

    def test_remove_default_warns(self, runner):
        set_rate_table("hst", [0.13])
        set_setting("default_table", "hst")

        result = runner.invoke(cli, ["rates", "remove", "hst"])

        assert "default_table still points to 'hst'" in result.output

    def test_invalid_rates_file(self, runner, isolated_config):
        (isolated_config / "rates.yaml").write_text("tables: [unclosed\n")

        result = runner.invoke(cli, ["rates", "list"])

        assert result.exit_code == 1
        assert "Invalid YAML" in result.output


class TestSettingsCommands:
    """tax-calc settings ..."""

    def test_set_show_unset(self, runner):
        result = runner.invoke(cli, ["settings", "set", "rounding", "off"])
        assert result.exit_code == 0, result.output
        assert get_setting("rounding") is False

        result = runner.invoke(cli, ["settings", "show"])
        assert "rounding: False" in result.output

        result = runner.invoke(cli, ["settings", "unset", "rounding"])
        assert "Cleared rounding setting." in result.output
        assert get_setting("rounding") is None

    def test_show_defaults(self, runner):
        result = runner.invoke(cli, ["settings", "show"])

        assert "No settings configured (using defaults)." in result.output
        assert "rounding: True" in result.output

    def test_bad_value(self, runner):
        result = runner.invoke(cli, ["settings", "set", "rounding", "maybe"])
        assert result.exit_code == 2

    def test_unknown_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "currency", "CAD"])
        assert result.exit_code == 2


def test_version(isolated_config):
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "tax-calc" in result.output
