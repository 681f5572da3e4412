"""Postal-code carve-outs for territories taxed differently from their country.

Each country's rules are mutually exclusive, so at most one can match a given
postal code.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models.rules import RuleTable
from .defaults import DEFAULT_VAT_RULES


class TerritoryRule(BaseModel):
    """A named territory selected by exact postal codes or postal-code prefixes.

    Either ``rate`` is set, or ``rate_from_country`` names the jurisdiction whose
    standard rate applies (territories administered as part of a neighbour).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    country_code: str
    postal_codes: frozenset[str] = frozenset()
    postal_prefixes: tuple[str, ...] = ()
    rate: float | None = Field(default=None, ge=0.0, lt=1.0)
    rate_from_country: str | None = None

    def matches(self, postal_code: str) -> bool:
        if postal_code in self.postal_codes:
            return True
        return any(postal_code.startswith(prefix) for prefix in self.postal_prefixes)

    def resolve(self, rules: RuleTable) -> float:
        """Return the rate this territory imposes under *rules*."""
        if self.rate_from_country is None:
            return self.rate or 0.0
        neighbour = rules.get(self.rate_from_country)
        if neighbour is None:
            # Table was trimmed by the caller; fall back to the shipped data.
            neighbour = DEFAULT_VAT_RULES[self.rate_from_country]
        return neighbour.rate


TERRITORY_RULES: dict[str, tuple[TerritoryRule, ...]] = {
    "DE": (
        TerritoryRule(
            name="Heligoland / Büsingen am Hochrhein",
            country_code="DE",
            postal_codes=frozenset({"27498", "78266"}),
            rate=0.0,
        ),
    ),
    "ES": (
        TerritoryRule(name="Canary Islands", country_code="ES", postal_prefixes=("35", "38"), rate=0.0),
    ),
    "EL": (
        TerritoryRule(name="Mount Athos", country_code="EL", postal_prefixes=("63086",), rate=0.0),
    ),
    "PT": (
        TerritoryRule(name="Azores", country_code="PT", postal_prefixes=("95",), rate=0.16),
        TerritoryRule(name="Madeira", country_code="PT", postal_prefixes=("90",), rate=0.22),
    ),
    "AT": (
        TerritoryRule(
            name="Jungholz / Mittelberg",
            country_code="AT",
            postal_codes=frozenset({"6691", "6991", "6992", "6993"}),
            rate_from_country="DE",
        ),
    ),
}


def match_territory(country_code: str, postal_code: str | None) -> TerritoryRule | None:
    """Return the territory rule that *postal_code* falls into, if any."""
    if not postal_code:
        return None
    for rule in TERRITORY_RULES.get(country_code, ()):
        if rule.matches(postal_code):
            return rule
    return None
