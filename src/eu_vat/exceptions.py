"""Error taxonomy for VAT calculation and VAT number checks.

There is one exception type. Callers tell failures apart by ``kind`` rather
than by catching subclasses::

    try:
        calculator.set_vat_number(raw)
    except VatCalculatorError as e:
        if e.kind is VatErrorKind.INVALID_VAT_NUMBER:
            ...
"""

from __future__ import annotations

from enum import StrEnum


class VatErrorKind(StrEnum):
    INVALID_COUNTRY_CODE = "invalid_country_code"
    INVALID_POSTAL_CODE = "invalid_postal_code"
    INVALID_VAT_NUMBER = "invalid_vat_number"
    VAT_CHECK_UNAVAILABLE = "vat_check_unavailable"


DEFAULT_MESSAGES: dict[VatErrorKind, str] = {
    VatErrorKind.INVALID_COUNTRY_CODE: "The provided country code is invalid",
    VatErrorKind.INVALID_POSTAL_CODE: "The provided postal code is invalid",
    VatErrorKind.INVALID_VAT_NUMBER: "The provided VAT number is invalid",
    VatErrorKind.VAT_CHECK_UNAVAILABLE: "VAT check is currently unavailable",
}


class VatCalculatorError(Exception):
    """Raised for every calculator and registry failure."""

    def __init__(self, kind: VatErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"VatCalculatorError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def invalid_country_code(cls, message: str | None = None) -> VatCalculatorError:
        return cls(VatErrorKind.INVALID_COUNTRY_CODE, message)

    @classmethod
    def invalid_postal_code(cls, country_code: str | None = None) -> VatCalculatorError:
        if country_code:
            return cls(VatErrorKind.INVALID_POSTAL_CODE, f"Invalid postal code format for country {country_code}")
        return cls(VatErrorKind.INVALID_POSTAL_CODE)

    @classmethod
    def invalid_vat_number(cls, message: str | None = None) -> VatCalculatorError:
        return cls(VatErrorKind.INVALID_VAT_NUMBER, message)

    @classmethod
    def vat_check_unavailable(cls, message: str | None = None) -> VatCalculatorError:
        return cls(VatErrorKind.VAT_CHECK_UNAVAILABLE, message)
