"""Tests for settings.json handling."""

import pytest

from nominamx.sdk import (
    SettingsError,
    coerce_setting,
    get_setting,
    load_settings,
    set_setting,
    unset_setting,
)


class TestLoadSettings:

    def test_missing_file_is_empty(self):
        assert load_settings() == {}
        assert get_setting("tax_year", 2024) == 2024

    def test_round_trip(self, isolated_config):
        path = set_setting("bonus_days", 30.0)
        assert path == isolated_config / "settings.json"
        assert get_setting("bonus_days") == 30.0
        assert unset_setting("bonus_days") is True
        assert unset_setting("bonus_days") is False

    def test_invalid_json(self, isolated_config):
        (isolated_config / "settings.json").write_text("{tax_year: 2024")
        with pytest.raises(SettingsError, match="Invalid JSON"):
            load_settings()

    def test_non_object(self, isolated_config):
        (isolated_config / "settings.json").write_text("[2024]")
        with pytest.raises(SettingsError, match="JSON object"):
            get_setting("tax_year")


class TestCoerce:

    def test_types(self):
        assert coerce_setting("tax_year", "2024") == 2024
        assert coerce_setting("payroll_tax_rate", "2.5") == 2.5

    def test_bad_value(self):
        with pytest.raises(SettingsError, match="expected float"):
            coerce_setting("payroll_tax_rate", "tres")

    def test_unknown_key(self):
        with pytest.raises(SettingsError, match="Unknown setting"):
            coerce_setting("color", "red")
