#!/usr/bin/env python3
"""
CLI for running market forecasts against a CSV export of closed sales.

Usage:
    python cli.py forecast --data <sales_csv> --city <city> [options]
    python cli.py investment --data <sales_csv> --city <city> --value <amount>

Examples:
    # 24-month lookback, 12-month forecast for Boston condos
    python cli.py forecast --data data/sales.csv --city Boston --state MA \\
        --property-type Condominium

    # Investment projection for a $650,000 property
    python cli.py investment --data data/sales.csv --city Boston --value 650000
"""

import argparse
import json
import sys
from datetime import date

from core import InMemorySaleRecordSource, MarketForecastingEngine, MonthlyAggregator
from utils.config import Config
from utils.log_config import configure_logging


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Argument parser with forecast and investment subcommands."""
    parser = argparse.ArgumentParser(
        description="Market price forecasting and investment analysis",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_market_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--data",
            default=config.sales_data_path or None,
            required=not config.sales_data_path,
            help="CSV file of closed sales",
        )
        sub.add_argument("--city", default="", help="City filter")
        sub.add_argument("--state", default="", help="State filter")
        sub.add_argument("--property-type", default="all", help="Property type filter")
        sub.add_argument(
            "--as-of",
            type=date.fromisoformat,
            default=None,
            help="Reference date YYYY-MM-DD (default: today)",
        )

    forecast_parser = subparsers.add_parser("forecast", help="Price forecast for a market")
    add_market_args(forecast_parser)
    forecast_parser.add_argument(
        "--lookback", type=int, default=config.default_lookback_months,
        help="Historical months to analyze",
    )
    forecast_parser.add_argument(
        "--horizon", type=int, default=config.default_forecast_months,
        help="Months to forecast ahead",
    )

    investment_parser = subparsers.add_parser("investment", help="Investment analysis")
    add_market_args(investment_parser)
    investment_parser.add_argument(
        "--value", type=float, required=True, help="Current property value",
    )

    return parser


def run(args: argparse.Namespace, config: Config) -> dict:
    """Execute a parsed command and return the result dictionary."""
    source = InMemorySaleRecordSource.from_csv(args.data)
    engine = MarketForecastingEngine(
        source,
        reference_date=args.as_of,
        aggregator=MonthlyAggregator(
            min_price=config.min_price,
            max_price=config.max_price,
        ),
    )

    if args.command == "forecast":
        result = engine.get_price_forecast(
            args.city, args.state, args.property_type, args.lookback, args.horizon
        )
    else:
        result = engine.get_investment_analysis(
            args.value, args.city, args.state, args.property_type
        )

    return result.to_dict()


def main(argv=None) -> int:
    config = Config.load()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        output = run(args, config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(output, indent=2))
    return 0 if output.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
