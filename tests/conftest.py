"""Shared fixtures: isolated settings directory and 2024 rules."""

import pytest
import yaml

from nominamx.sdk.taxes import load_tax_rules
from nominamx.sdk.taxes.rules import _get_packaged_rules_dir


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory so user settings never leak in."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("NOMINAMX_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def rules_2024():
    return load_tax_rules(2024)


@pytest.fixture
def raw_rules_2024():
    """The 2024 rules file as a plain dict, for building variants."""
    with open(_get_packaged_rules_dir() / "2024.yaml") as f:
        return yaml.safe_load(f)
