"""Rate resolution and price arithmetic.

Everything here is a pure function of a rule table and a query, so it can be
used without a ``VatCalculator`` session.
"""

from __future__ import annotations

from typing import NamedTuple

import structlog

from .models.rules import RuleTable
from .rules.territories import match_territory

logger = structlog.get_logger(__name__)

NO_RULE = "no-rule"
REVERSE_CHARGE = "reverse-charge"
STANDARD = "standard"


class RateResolution(NamedTuple):
    rate: float
    rule_applied: str


def resolve_rate(
    rules: RuleTable,
    country_code: str | None,
    postal_code: str | None = None,
    *,
    company: bool = False,
    business_country_code: str | None = None,
    rate_category: str | None = None,
) -> RateResolution:
    """Determine the VAT rate for a sale.

    Checked in order:
    1. country missing from *rules* -> 0 (no VAT applies)
    2. business buyer in its own home country -> 0 (reverse charge)
    3. postal-code territory carve-out
    4. requested rate category, when the country defines it
    5. the country's standard rate
    """
    rule = rules.get(country_code) if country_code else None
    if rule is None:
        logger.debug("vat_rate_no_rule", country_code=country_code)
        return RateResolution(0.0, NO_RULE)

    if company and business_country_code is not None and business_country_code == country_code:
        return RateResolution(0.0, REVERSE_CHARGE)

    territory = match_territory(country_code, postal_code)
    if territory is not None:
        rate = territory.resolve(rules)
        logger.debug("vat_rate_territory", country_code=country_code, territory=territory.name, rate=rate)
        return RateResolution(rate, territory.name)

    sub_rate = rule.sub_rate(rate_category)
    if sub_rate is not None:
        return RateResolution(sub_rate, str(rate_category))

    return RateResolution(rule.rate, STANDARD)


def compute_from_net(net_price: float, rate: float) -> tuple[float, float]:
    """Return ``(vat_amount, gross_price)`` for a net price."""
    vat_amount = net_price * rate
    return vat_amount, net_price + vat_amount


def compute_from_gross(gross_price: float, rate: float) -> tuple[float, float]:
    """Return ``(net_price, vat_amount)`` for a gross price; inverse of :func:`compute_from_net`."""
    net_price = gross_price / (1 + rate)
    return net_price, gross_price - net_price
