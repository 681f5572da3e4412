"""Per-country postal code formats."""

from __future__ import annotations

import re

POSTAL_CODE_PATTERNS: dict[str, re.Pattern[str]] = {
    "AT": re.compile(r"^\d{4}$"),
    "BE": re.compile(r"^\d{4}$"),
    "BG": re.compile(r"^\d{4}$"),
    "CY": re.compile(r"^\d{4}$"),
    "CZ": re.compile(r"^\d{3}\s?\d{2}$"),
    "DE": re.compile(r"^\d{5}$"),
    "DK": re.compile(r"^\d{4}$"),
    "EE": re.compile(r"^\d{5}$"),
    "EL": re.compile(r"^\d{3}\s?\d{2}$"),
    "ES": re.compile(r"^\d{5}$"),
    "FI": re.compile(r"^\d{5}$"),
    "FR": re.compile(r"^\d{2}\s?\d{3}$"),
    "GB": re.compile(r"^[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}$"),
    "GR": re.compile(r"^\d{3}\s?\d{2}$"),
    "HR": re.compile(r"^\d{5}$"),
    "HU": re.compile(r"^\d{4}$"),
    "IE": re.compile(r"^[A-Z]\d{2}\s?[A-Z\d]{4}$"),
    "IT": re.compile(r"^\d{5}$"),
    "LT": re.compile(r"^LT-\d{5}$"),
    "LU": re.compile(r"^L-\d{4}$"),
    "LV": re.compile(r"^LV-\d{4}$"),
    "MT": re.compile(r"^[A-Z]{3}\s?\d{4}$"),
    "NL": re.compile(r"^\d{4}\s?[A-Z]{2}$"),
    "PL": re.compile(r"^\d{2}-\d{3}$"),
    "PT": re.compile(r"^\d{4}-\d{3}$"),
    "RO": re.compile(r"^\d{6}$"),
    "SE": re.compile(r"^\d{3}\s?\d{2}$"),
    "SI": re.compile(r"^\d{4}$"),
    "SK": re.compile(r"^\d{3}\s?\d{2}$"),
}


def is_valid_postal_code(country_code: str, postal_code: str) -> bool:
    """Check *postal_code* against the format for *country_code*.

    Countries without a known format accept any value.
    """
    pattern = POSTAL_CODE_PATTERNS.get(country_code)
    if pattern is None:
        return True
    return bool(pattern.fullmatch(postal_code))
