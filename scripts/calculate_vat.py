#!/usr/bin/env python3
"""Print the VAT breakdown for a net (or gross) price."""
import argparse
import json
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from eu_vat.calculator import VatCalculator
from eu_vat.config import Settings
from eu_vat.exceptions import VatCalculatorError
from eu_vat.utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("price", type=float, help="Net price, or gross price with --gross")
    parser.add_argument("country", help="VAT country code, e.g. DE or EL")
    parser.add_argument("--postal-code", help="Buyer postal code (for territory carve-outs)")
    parser.add_argument("--company", action="store_true", help="Buyer is a business")
    parser.add_argument("--business-country", help="Seller's home country for reverse charge")
    parser.add_argument("--category", help="Rate category: high, low, low1, super-reduced, parking")
    parser.add_argument("--gross", action="store_true", help="Treat price as gross and derive the net price")
    return parser


def run(argv: list[str] | None = None) -> dict:
    """Parse *argv*, run the calculation and return the result as a dict."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level)

    calculator = VatCalculator(settings)
    if args.business_country:
        calculator.set_business_country_code(args.business_country)

    calculate = calculator.calculate_net if args.gross else calculator.calculate
    result = calculate(
        args.price,
        args.country,
        args.postal_code,
        args.company,
        args.category,
    )
    return result.model_dump(mode="json")


if __name__ == "__main__":
    try:
        print(json.dumps(run(), indent=2))
    except VatCalculatorError as e:
        print(f"Error ({e.kind}): {e.message}")
        sys.exit(1)
