#!/usr/bin/env python3
"""Check a VAT number against the VIES registry."""
import asyncio
import json
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from eu_vat.calculator import VatCalculator
from eu_vat.config import Settings
from eu_vat.exceptions import VatCalculatorError
from eu_vat.utils.logging import get_logger, setup_logging

logger = get_logger("check_vat_number")


async def main(vat_number: str) -> None:
    """Look up a single VAT number and print the registry's answer."""
    settings = Settings()
    setup_logging(settings.log_level)
    calculator = VatCalculator(settings)

    print(f"Checking: {vat_number}")
    print("-" * 50)

    try:
        details = await calculator.get_vat_details(vat_number)
    except VatCalculatorError as e:
        logger.error("vat_check_script_failed", vat_number=vat_number, kind=e.kind.value)
        print(f"Error ({e.kind}): {e.message}")
        sys.exit(1)

    print(f"Valid: {details.is_valid}")
    if details.name:
        print(f"Name: {details.name}")
    if details.address:
        print(f"Address: {details.address}")
    print(f"\n{json.dumps(details.model_dump(mode='json'), indent=2)}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/check_vat_number.py <vat-number>")
        sys.exit(1)

    asyncio.run(main(sys.argv[1]))
