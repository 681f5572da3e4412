"""Mutable per-transaction session state held by a ``VatCalculator``."""

from __future__ import annotations

from pydantic import BaseModel


class CalculationContext(BaseModel):
    """Inputs collected through the calculator's setters.

    One context per transaction; it is not shared between calculators.
    """

    net_price: float = 0.0
    country_code: str | None = None
    postal_code: str | None = None
    company: bool = False
    business_country_code: str | None = None
    vat_number: str | None = None

    @property
    def reverse_charge(self) -> bool:
        """True when a business buys in its own home country."""
        return (
            self.company
            and self.business_country_code is not None
            and self.business_country_code == self.country_code
        )
