"""Rule-table types.

A rule table maps a VAT country code (``EL`` for Greece, ``GB`` for the UK) to
the ``CountryRule`` that describes its standard rate, named sub-rates and
territorial exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

Rate = Annotated[float, Field(ge=0.0, lt=1.0)]


class RateCategory(StrEnum):
    HIGH = "high"
    LOW = "low"
    LOW1 = "low1"
    SUPER_REDUCED = "super-reduced"
    PARKING = "parking"


class SpecialRules(BaseModel):
    """Per-country handling flags."""

    model_config = ConfigDict(frozen=True)

    vat_number_required: bool = False
    reverse_charge: bool = False
    is_company_required: bool = False


class CountryRule(BaseModel):
    """VAT rule for a single jurisdiction.

    ``rates`` holds only the categories the jurisdiction defines. ``exceptions``
    lists named territories with their own flat rate; the postal-code lookup
    that applies them lives in :mod:`eu_vat.rules.territories`.
    """

    model_config = ConfigDict(frozen=True)

    rate: Rate
    rates: dict[str, Rate] = Field(default_factory=dict)
    exceptions: dict[str, Rate] = Field(default_factory=dict)
    special_rules: SpecialRules = Field(default_factory=SpecialRules)

    @field_validator("rates")
    @classmethod
    def _known_categories(cls, value: dict[str, float]) -> dict[str, float]:
        unknown = set(value) - {c.value for c in RateCategory}
        if unknown:
            raise ValueError(f"Unknown rate categories: {sorted(unknown)}")
        return value

    def sub_rate(self, category: str | None) -> float | None:
        """Return the rate for *category*, or None when it is not defined here."""
        if not category:
            return None
        return self.rates.get(str(category))


RuleTable = Mapping[str, CountryRule]
