"""Tests for the nominamx CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from nominamx import gemini_client
from nominamx.cli.__main__ import cli
from nominamx.sdk import FALLBACK_MESSAGE, load_settings, set_setting


@pytest.fixture
def runner():
    return CliRunner()


class TestCalc:

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["calc", "5000", "--format", "json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["input"]["pay_period"] == "monthly"
        assert data["input"]["annual_bonus_days"] == 15
        assert round(data["result"]["net_monthly"], 2) == 4571.77
        assert round(data["result"]["employer_cost"]["total_monthly"], 2) == 6566.58

    def test_json_minimum_wage_warning(self, runner):
        low = json.loads(runner.invoke(cli, ["calc", "5000", "--format", "json"]).output)
        high = json.loads(runner.invoke(cli, ["calc", "20000", "--format", "json"]).output)
        assert len(low["warnings"]) == 1
        assert "mínimo" in low["warnings"][0]
        assert high["warnings"] == []

    def test_tsv_output(self, runner):
        result = runner.invoke(cli, ["calc", "5000", "-p", "weekly", "--format", "tsv"])
        assert result.exit_code == 0, result.output

        header, row = result.output.strip("\n").split("\n")
        assert len(header.split("\t")) == 20
        assert header.startswith("Trabajador Bruto (Semanal)")
        assert row.split("\t")[0] == "5000.00"

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["calc", "5000"])
        assert result.exit_code == 0, result.output
        assert "SUELDO NETO" in result.output
        assert "$4,571.77" in result.output
        assert "COSTO TOTAL" in result.output

    def test_text_and_tsv_use_rules_month_length(self, runner, tmp_path, raw_rules_2024):
        rules_dir = tmp_path / "rules"
        rules_dir.mkdir()
        raw = dict(raw_rules_2024, year=2028)
        raw["constants"] = dict(raw["constants"], days_per_month=30.0)
        (rules_dir / "2028.yaml").write_text(yaml.safe_dump(raw))
        set_setting("tax_rules_dir", str(rules_dir))

        args = ["calc", "1000", "-p", "weekly", "--year", "2028"]
        text = runner.invoke(cli, args)
        assert text.exit_code == 0, text.output
        assert "$1,000.00" in text.output
        assert "$4,285.71" in text.output
        assert "$986.84" not in text.output

        tsv = runner.invoke(cli, args + ["--format", "tsv"])
        row = tsv.output.strip("\n").split("\n")[1].split("\t")
        assert row[0] == "1000.00"
        assert row[4] == "4285.71"

    def test_options_flow_through(self, runner):
        result = runner.invoke(cli, [
            "calc", "12000", "--period", "biweekly", "--years", "6",
            "--bonus-days", "30", "--payroll-tax-rate", "4", "--format", "json",
        ])
        data = json.loads(result.output)["result"]
        assert data["gross_monthly"] == 24000
        assert data["vacation_days"] == 22
        assert data["employer_cost"]["isn"] == pytest.approx(960)

    def test_settings_defaults_used(self, runner):
        runner.invoke(cli, ["settings", "set", "payroll_tax_rate", "2"])
        data = json.loads(runner.invoke(cli, ["calc", "5000", "--format", "json"]).output)
        assert data["input"]["payroll_tax_rate"] == 2
        assert data["result"]["employer_cost"]["isn"] == pytest.approx(100)

    def test_invalid_period(self, runner):
        result = runner.invoke(cli, ["calc", "5000", "--period", "daily"])
        assert result.exit_code == 2

    def test_zero_gross(self, runner):
        result = runner.invoke(cli, ["calc", "0"])
        assert result.exit_code == 1
        assert "Invalid compensation input" in result.output
        assert "gross_pay" in result.output

    def test_missing_year(self, runner):
        result = runner.invoke(cli, ["calc", "5000", "--year", "1999"])
        assert result.exit_code == 1
        assert "1999" in result.output


class TestLookups:

    def test_vacation_days(self, runner):
        result = runner.invoke(cli, ["vacation-days", "7"])
        assert result.exit_code == 0
        assert result.output.startswith("22 días")

    def test_vacation_days_negative(self, runner):
        result = runner.invoke(cli, ["vacation-days", "--", "-1"])
        assert result.exit_code == 2

    def test_brackets(self, runner):
        result = runner.invoke(cli, ["brackets"])
        assert result.exit_code == 0
        assert "$746.05" in result.output
        assert "35.00%" in result.output
        assert "uma_daily: 108.57" in result.output

    def test_years(self, runner):
        result = runner.invoke(cli, ["years"])
        assert result.exit_code == 0
        assert "2024 (default)" in result.output


class TestAdvise:

    def test_fallback_when_ai_unavailable(self, runner, monkeypatch):
        def failing(prompt, timeout):
            raise RuntimeError("Gemini CLI not found on PATH ('gemini')")

        monkeypatch.setattr(gemini_client, "process_prompt", failing)
        result = runner.invoke(cli, ["advise", "5000"])
        assert result.exit_code == 0
        assert "Neto mensual: $4,571.77" in result.output
        assert FALLBACK_MESSAGE in result.output

    def test_prints_advice(self, runner, monkeypatch):
        prompts = []

        def generate(prompt, timeout):
            prompts.append((prompt, timeout))
            return "1. Negocia vales de despensa."

        monkeypatch.setattr(gemini_client, "process_prompt", generate)
        result = runner.invoke(cli, ["advise", "5000", "--timeout", "3"])
        assert result.exit_code == 0
        assert "Negocia vales" in result.output
        assert prompts[0][1] == 3


class TestSettings:

    def test_set_show_unset(self, runner):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "2024"])
        assert result.exit_code == 0
        assert load_settings() == {"tax_year": 2024}

        result = runner.invoke(cli, ["settings", "show"])
        assert "tax_year: 2024" in result.output

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "Cleared tax_year" in result.output
        assert load_settings() == {}

    def test_show_empty(self, runner):
        result = runner.invoke(cli, ["settings", "show"])
        assert "No settings configured" in result.output

    def test_bad_value(self, runner):
        result = runner.invoke(cli, ["settings", "set", "payroll_tax_rate", "tres"])
        assert result.exit_code == 2
        assert load_settings() == {}

    def test_unknown_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "color", "red"])
        assert result.exit_code == 2

    def test_tax_year_setting_applies(self, runner):
        runner.invoke(cli, ["settings", "set", "tax_year", "2031"])
        result = runner.invoke(cli, ["calc", "5000"])
        assert result.exit_code == 1
        assert "2031" in result.output


class TestBrokenSettings:

    def test_invalid_json_is_reported(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text("{tax_year: 2024")
        result = runner.invoke(cli, ["calc", "5000"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_non_integer_tax_year_is_reported(self, runner):
        set_setting("tax_year", "dos mil")
        result = runner.invoke(cli, ["years"])
        assert result.exit_code == 1
        assert "Invalid tax_year setting" in result.output

    def test_settings_show_reports_broken_file(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text("[]")
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 1
        assert "JSON object" in result.output
