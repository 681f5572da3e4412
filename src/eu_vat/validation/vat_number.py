"""Syntactic VAT identification number checks.

A format match says nothing about registration; use the VIES client for that.
"""

from __future__ import annotations

import re

VAT_NUMBER_PATTERNS: dict[str, re.Pattern[str]] = {
    "AT": re.compile(r"^ATU\d{8}$"),
    "BE": re.compile(r"^BE[01]\d{9}$"),
    "BG": re.compile(r"^BG\d{9,10}$"),
    "CY": re.compile(r"^CY\d{8}[A-Z]$"),
    "CZ": re.compile(r"^CZ\d{8,10}$"),
    "DE": re.compile(r"^DE\d{9}$"),
    "DK": re.compile(r"^DK\d{8}$"),
    "EE": re.compile(r"^EE\d{9}$"),
    "EL": re.compile(r"^EL\d{9}$"),
    "ES": re.compile(r"^ES[A-Z0-9]\d{7}[A-Z0-9]$"),
    "FI": re.compile(r"^FI\d{8}$"),
    "FR": re.compile(r"^FR[A-HJ-NP-Z0-9][A-HJ-NP-Z0-9]\d{9}$"),
    # GD: government departments, HA: health authorities
    "GB": re.compile(r"^GB(\d{9}|\d{12}|(HA|GD)\d{3})$"),
    "GR": re.compile(r"^GR\d{9}$"),
    "HR": re.compile(r"^HR\d{11}$"),
    "HU": re.compile(r"^HU\d{8}$"),
    "IE": re.compile(r"^IE\d{7}[A-Z]{1,2}$"),
    "IT": re.compile(r"^IT\d{11}$"),
    "LT": re.compile(r"^LT(\d{9}|\d{12})$"),
    "LU": re.compile(r"^LU\d{8}$"),
    "LV": re.compile(r"^LV\d{11}$"),
    "MT": re.compile(r"^MT\d{8}$"),
    "NL": re.compile(r"^NL\d{9}B\d{2}$"),
    "PL": re.compile(r"^PL\d{10}$"),
    "PT": re.compile(r"^PT\d{9}$"),
    "RO": re.compile(r"^RO\d{2,10}$"),
    "SE": re.compile(r"^SE\d{12}$"),
    "SI": re.compile(r"^SI\d{8}$"),
    "SK": re.compile(r"^SK\d{10}$"),
}

_SEPARATORS = re.compile(r"[\s.\-]")


def normalize_vat_number(vat_number: str) -> str:
    """Strip spaces, dots and hyphens and upper-case, e.g. ``de 123.456.789`` -> ``DE123456789``."""
    return _SEPARATORS.sub("", vat_number).upper()


def split_vat_number(vat_number: str) -> tuple[str, str]:
    """Split into the 2-letter country prefix and the remaining characters."""
    return vat_number[:2], vat_number[2:]


def is_valid_vat_number_format(vat_number: str) -> bool:
    """Return True when *vat_number* matches its country's pattern.

    An unknown prefix is simply invalid.
    """
    if not vat_number:
        return False
    pattern = VAT_NUMBER_PATTERNS.get(vat_number[:2])
    return bool(pattern and pattern.fullmatch(vat_number))
