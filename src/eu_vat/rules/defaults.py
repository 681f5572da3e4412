"""Default VAT rule table for the EU member states and the UK."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..models.rules import CountryRule, RuleTable, SpecialRules

_DEFAULT_RULES: dict[str, CountryRule] = {
    "AT": CountryRule(
        rate=0.20,
        exceptions={"Jungholz": 0.19, "Mittelberg": 0.19},
        rates={"high": 0.20, "low": 0.10, "low1": 0.13, "parking": 0.13},
    ),
    "BE": CountryRule(
        rate=0.21,
        rates={"high": 0.21, "low": 0.06, "low1": 0.12, "parking": 0.12},
    ),
    "BG": CountryRule(rate=0.20, rates={"high": 0.20, "low": 0.09}),
    "CY": CountryRule(rate=0.19, rates={"high": 0.19, "low": 0.05, "low1": 0.09}),
    "CZ": CountryRule(rate=0.21, rates={"high": 0.21, "low": 0.12}),
    "DE": CountryRule(
        rate=0.19,
        exceptions={"Heligoland": 0.0, "Büsingen am Hochrhein": 0.0},
        rates={"high": 0.19, "low": 0.07},
    ),
    "DK": CountryRule(rate=0.25, rates={"high": 0.25}),
    "EE": CountryRule(rate=0.22, rates={"high": 0.22, "low": 0.09}),
    "EL": CountryRule(
        rate=0.24,
        exceptions={"Mount Athos": 0.0},
        rates={"high": 0.24, "low": 0.06, "low1": 0.13},
    ),
    "ES": CountryRule(
        rate=0.21,
        exceptions={"Canary Islands": 0.0, "Ceuta": 0.0, "Melilla": 0.0},
        rates={"high": 0.21, "low": 0.10, "super-reduced": 0.04},
    ),
    "FI": CountryRule(rate=0.24, rates={"high": 0.24, "low": 0.10, "low1": 0.14}),
    "FR": CountryRule(
        rate=0.20,
        exceptions={"Corsica": 0.20, "Guadeloupe": 0.085, "Martinique": 0.085, "Réunion": 0.085},
        rates={"high": 0.20, "low": 0.055, "low1": 0.10, "super-reduced": 0.021},
    ),
    "GR": CountryRule(
        rate=0.24,
        exceptions={"Mount Athos": 0.0},
        rates={"high": 0.24, "low": 0.06, "low1": 0.13},
    ),
    "HR": CountryRule(rate=0.25, rates={"high": 0.25, "low": 0.05, "low1": 0.13}),
    "HU": CountryRule(rate=0.27, rates={"high": 0.27, "low": 0.05, "low1": 0.18}),
    "IE": CountryRule(
        rate=0.23,
        rates={"high": 0.23, "low": 0.09, "low1": 0.135, "super-reduced": 0.048, "parking": 0.135},
    ),
    "IT": CountryRule(
        rate=0.22,
        rates={"high": 0.22, "low": 0.05, "low1": 0.10, "super-reduced": 0.04},
    ),
    "LT": CountryRule(rate=0.21, rates={"high": 0.21, "low": 0.05, "low1": 0.09}),
    "LU": CountryRule(
        rate=0.17,
        rates={"high": 0.17, "low": 0.08, "super-reduced": 0.03, "parking": 0.14},
    ),
    "LV": CountryRule(rate=0.21, rates={"high": 0.21, "low": 0.12, "super-reduced": 0.05}),
    "MT": CountryRule(rate=0.18, rates={"high": 0.18, "low": 0.05, "low1": 0.07}),
    "NL": CountryRule(rate=0.21, rates={"high": 0.21, "low": 0.09}),
    "PL": CountryRule(rate=0.23, rates={"high": 0.23, "low": 0.05, "low1": 0.08}),
    "PT": CountryRule(
        rate=0.23,
        exceptions={"Azores": 0.18, "Madeira": 0.22},
        rates={"high": 0.23, "low": 0.06, "low1": 0.13},
    ),
    "RO": CountryRule(rate=0.19, rates={"high": 0.19, "low": 0.05, "low1": 0.09}),
    "SE": CountryRule(rate=0.25, rates={"high": 0.25, "low": 0.06, "low1": 0.12}),
    "SI": CountryRule(rate=0.22, rates={"high": 0.22, "low": 0.095}),
    "SK": CountryRule(rate=0.20, rates={"high": 0.20, "low": 0.10}),
    # No longer an EU member; kept for historical and territory rules.
    "GB": CountryRule(
        rate=0.20,
        rates={"high": 0.20, "low": 0.05, "super-reduced": 0.0},
        exceptions={"Isle of Man": 0.20, "Channel Islands": 0.0},
        special_rules=SpecialRules(vat_number_required=True, reverse_charge=True),
    ),
}

DEFAULT_VAT_RULES: RuleTable = MappingProxyType(_DEFAULT_RULES)


def coerce_rule(rule: CountryRule | Mapping[str, Any]) -> CountryRule:
    """Accept either a ``CountryRule`` or a plain mapping such as parsed JSON."""
    if isinstance(rule, CountryRule):
        return rule
    return CountryRule.model_validate(rule)


def build_rules(rules: Mapping[str, CountryRule | Mapping[str, Any]]) -> RuleTable:
    """Return a read-only rule table built from a caller-supplied mapping.

    Keys are upper-cased; no other checks are made, a missing country simply
    resolves to "no rule found" at lookup time.
    """
    return MappingProxyType({code.upper(): coerce_rule(rule) for code, rule in rules.items()})


def merge_rules(
    overrides: Mapping[str, CountryRule | Mapping[str, Any]],
    base: RuleTable = DEFAULT_VAT_RULES,
) -> RuleTable:
    """Return a new table where each country in *overrides* replaces the one in *base*."""
    merged = dict(base)
    merged.update(build_rules(overrides))
    return MappingProxyType(merged)
