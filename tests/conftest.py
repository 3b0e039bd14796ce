"""Shared fixtures for Tax Calc tests."""

import pytest


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point TAX_CALC_CONFIG_PATH at an empty temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    monkeypatch.setenv("TAX_CALC_CONFIG_PATH", str(config_dir))

    return config_dir
