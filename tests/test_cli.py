"""
Tests for the forecast CLI.
"""

import csv
import json
import logging

import pytest

from cli import build_parser, main, run
from utils.config import Config


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """main() reconfigures the root logger; put pytest's handlers back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def sales_csv(tmp_path, make_records, linear_prices):
    """CSV export of 12 months of rising Boston sales."""
    path = tmp_path / "sales.csv"
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow([
            "close_price", "close_date", "city", "state",
            "property_type", "building_area", "days_on_market",
        ])
        for record in make_records(linear_prices):
            writer.writerow([
                record.close_price,
                record.close_date.isoformat(),
                record.city,
                record.state,
                record.property_type,
                record.building_area,
                record.days_on_market,
            ])
    return path


class TestCli:

    def test_forecast_command(self, sales_csv, capsys):
        exit_code = main([
            "forecast", "--data", str(sales_csv), "--city", "Boston",
            "--as-of", "2024-12-31", "--horizon", "6",
        ])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["success"] is True
        assert [p["months_ahead"] for p in output["forecast"]] == [3, 6]

    def test_investment_command(self, sales_csv, capsys):
        exit_code = main([
            "investment", "--data", str(sales_csv), "--city", "Boston",
            "--as-of", "2024-12-31", "--value", "450000",
        ])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert output["current_value"] == 450000

    def test_insufficient_data_exit_code(self, sales_csv, capsys):
        exit_code = main([
            "forecast", "--data", str(sales_csv), "--city", "Worcester",
            "--as-of", "2024-12-31",
        ])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert output["data_points"] == 0

    def test_missing_file(self, tmp_path, capsys):
        exit_code = main([
            "forecast", "--data", str(tmp_path / "missing.csv"), "--city", "Boston",
        ])

        assert exit_code == 2
        assert "Error" in capsys.readouterr().err

    def test_run_uses_supplied_config(self, sales_csv):
        """Price bounds come from the config passed in, not a fresh load."""
        config = Config(min_price=400000.0)
        args = build_parser(config).parse_args([
            "forecast", "--data", str(sales_csv), "--city", "Boston",
            "--as-of", "2024-12-31",
        ])

        output = run(args, config)

        assert output["success"] is False
        assert output["data_points"] == 0
