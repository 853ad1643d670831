from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from config import AppSettings, config
from domain.errors import TaxmatError, describe_validation_error
from pipeline import ConversionOptions, ConversionPipeline

logger = logging.getLogger(__name__)


def run(input_path: Path, output_path: Path, options: ConversionOptions) -> int:
    """Convert `input_path` into `output_path`, returning the output size."""
    # Resolve everything before touching the input file.
    pipeline = ConversionPipeline(options)

    logger.info("Reading %s export from %s", options.input_format, input_path)
    data = input_path.read_bytes()
    output = pipeline.run(data)

    # Written only after the whole input converted cleanly.
    output_path.write_bytes(output)
    logger.info("Wrote %s output to %s (%d bytes)", options.output_format, output_path, len(output))
    return len(output)


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taxmat", description="Staking reward CSV tax formatter.")
    parser.add_argument("input", type=Path, help="input CSV file")
    parser.add_argument("output", type=Path, help="output CSV file name")
    parser.add_argument(
        "-i", "--input-format", default=settings.default_input_format, help="subscan, kraken or staketax"
    )
    parser.add_argument(
        "-o", "--output-format", default=settings.default_output_format, help="bitcointax or cointracking"
    )
    parser.add_argument("-c", "--coin", default=settings.default_coin, help="DOT or KSM (Subscan exports)")
    parser.add_argument("-y", "--year", type=int, help="year to parse results from")
    parser.add_argument("-q", "--quarter", default=settings.default_quarter, help="q1-q4 or all")
    parser.add_argument("--currency", default=settings.default_currency, help="account currency for CoinTracking")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    try:
        settings = config()
    except ValidationError as exc:
        print(f"error: invalid settings: {describe_validation_error(exc)}", file=sys.stderr)
        raise SystemExit(1) from exc

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    level = logging.INFO if args.verbose else settings.log_level_number
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        options = ConversionOptions.create(
            coin=args.coin,
            input_format=args.input_format,
            output_format=args.output_format,
            year=args.year,
            quarter=args.quarter,
            currency=args.currency,
        )
        run(args.input, args.output, options)
    except (TaxmatError, OSError) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main()
