"""
CLI entry point for the Pricing Parity Calculator.

Loads the country list and exchange rates, builds the parity pricing table
for a base price and prints it or writes it to a file.
"""

import argparse
import logging
import sys
from pathlib import Path

from src.exporter.pricing_table_exporter import to_display_frame, write_pricing_table
from src.services.pricing_service import PricingService
from src.sources.http_session import PricingSourceError
from src.utils.config_loader import load_config, load_env
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        argparse.Namespace: Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Pricing Parity Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m src.main --base-amount 99
    python -m src.main -b 49 --output data/output/prices.xlsx
    python -m src.main -v  # verbose mode
        """,
    )

    parser.add_argument(
        "--base-amount", "-b",
        help="Base price in the reference currency (default: from config)",
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the table to a .csv or .xlsx file instead of printing it",
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def run_cli(args: argparse.Namespace) -> int:
    """
    Run the CLI workflow.

    Args:
        args: Parsed command line arguments.

    Returns:
        int: Exit code (0 for success, non-zero for errors).
    """
    config = load_config(args.config)
    setup_logging(
        level="DEBUG" if args.verbose else config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.log_file,
    )

    base_amount = args.base_amount
    if base_amount is None:
        base_amount = config.parity.default_base_amount

    service = PricingService(config)
    try:
        result = service.build_table(base_amount)
    except PricingSourceError as e:
        logger.error(f"{e.message}: {e.cause or 'unknown cause'}")
        return 1

    df = result.to_dataframe()
    logger.info(
        f"Priced {result.count} countries from {result.reference_currency} "
        f"{result.base_amount:.2f}"
    )

    if args.output:
        try:
            output_path = write_pricing_table(df, args.output)
        except ValueError as e:
            logger.error(str(e))
            return 2
        print(f"Wrote {result.count} rows to {output_path}")
    else:
        print(to_display_frame(df).to_string(index=False))

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_env()
    args = parse_args(argv)
    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
