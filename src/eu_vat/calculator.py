"""VAT calculator session.

A ``VatCalculator`` holds the inputs of one transaction (country, postal code,
buyer type, VAT number) in a :class:`CalculationContext`. Setters validate
their argument, store it and return the calculator so calls can be chained::

    result = (
        VatCalculator()
        .set_country_code("DE")
        .set_postal_code("10115")
        .set_company(True)
        .calculate(100)
    )

Rate lookup itself is delegated to :func:`eu_vat.resolver.resolve_rate`.
"""

from __future__ import annotations

from typing import Any

import structlog

from .config import Settings
from .exceptions import VatCalculatorError
from .models.context import CalculationContext
from .models.results import CalculationDetails, CalculationResult, ValidationResult
from .models.rules import RuleTable
from .resolver import RateResolution, compute_from_gross, compute_from_net, resolve_rate
from .rules.defaults import build_rules
from .validation.postal_code import is_valid_postal_code
from .validation.vat_number import is_valid_vat_number_format, normalize_vat_number
from .vies.client import ViesClient

logger = structlog.get_logger(__name__)


class VatCalculator:
    """Computes VAT for one transaction and checks VAT numbers against VIES."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        vies_client: ViesClient | None = None,
        context: CalculationContext | None = None,
        **overrides: Any,
    ):
        if settings is None:
            settings = Settings(**overrides)
        elif overrides:
            # Overrides go through the same validators as env values.
            settings = Settings.model_validate({**settings.model_dump(), **overrides})
        self._settings = settings
        self._rules: RuleTable = build_rules(settings.rules)
        self._vies = vies_client or ViesClient(settings.vies_url, settings.soap_timeout)
        self._context = context if context is not None else CalculationContext()
        if settings.business_country_code:
            self.set_business_country_code(settings.business_country_code)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def rules(self) -> RuleTable:
        return self._rules

    @property
    def context(self) -> CalculationContext:
        return self._context

    # ── Collection decision ─────────────────────────────────────────────────

    def should_collect_vat(self, country_code: str) -> bool:
        """Whether VAT has to be collected for a sale into *country_code*."""
        country_code = country_code.upper()
        if not self._is_known_country(country_code):
            return False

        if self._context.company and self._context.business_country_code == country_code:
            return False

        rule = self._rules[country_code]
        # Observed behaviour kept as-is: a required but missing VAT number
        # still reports that VAT is owed rather than a blocked state.
        if rule.special_rules.vat_number_required and not self._context.vat_number:
            return True

        return True

    # ── Calculation ─────────────────────────────────────────────────────────

    def calculate(
        self,
        net_price: float,
        country_code: str | None = None,
        postal_code: str | None = None,
        company: bool | None = None,
        rate_category: str | None = None,
    ) -> CalculationResult:
        """Compute VAT and gross price from *net_price*.

        Arguments left as None fall back to what the setters stored earlier.
        """
        self._apply_arguments(country_code, postal_code, company)
        self._context.net_price = net_price

        resolution = self._resolve(rate_category)
        vat_amount, gross_price = compute_from_net(net_price, resolution.rate)
        return self._build_result(net_price, gross_price, vat_amount, resolution)

    def calculate_net(
        self,
        gross_price: float,
        country_code: str | None = None,
        postal_code: str | None = None,
        company: bool | None = None,
        rate_category: str | None = None,
    ) -> CalculationResult:
        """Inverse of :meth:`calculate`: derive net price and VAT from *gross_price*."""
        self._apply_arguments(country_code, postal_code, company)

        resolution = self._resolve(rate_category)
        net_price, vat_amount = compute_from_gross(gross_price, resolution.rate)
        self._context.net_price = net_price
        return self._build_result(net_price, gross_price, vat_amount, resolution)

    calculate_from_gross = calculate_net

    def get_tax_rate_for_country(
        self,
        country_code: str,
        company: bool = False,
        rate_category: str | None = None,
    ) -> float:
        """Rate for *country_code* ignoring any postal-code territory."""
        return resolve_rate(
            self._rules,
            country_code,
            company=company,
            business_country_code=self._context.business_country_code,
            rate_category=rate_category,
        ).rate

    def get_tax_rate_for_location(
        self,
        country_code: str,
        postal_code: str | None = None,
        company: bool = False,
        rate_category: str | None = None,
    ) -> float:
        """Rate for *country_code*, honouring postal-code territory carve-outs."""
        return resolve_rate(
            self._rules,
            country_code,
            postal_code,
            company=company,
            business_country_code=self._context.business_country_code,
            rate_category=rate_category,
        ).rate

    # ── Session accessors ───────────────────────────────────────────────────

    def get_net_price(self) -> float:
        return self._context.net_price

    def get_country_code(self) -> str | None:
        return self._context.country_code

    def set_country_code(self, country_code: str) -> VatCalculator:
        country_code = country_code.upper()
        if self._settings.validate_country_codes and not self._is_known_country(country_code):
            raise VatCalculatorError.invalid_country_code()
        self._context.country_code = country_code
        return self

    def get_postal_code(self) -> str | None:
        return self._context.postal_code

    def set_postal_code(self, postal_code: str) -> VatCalculator:
        country_code = self._context.country_code
        if (
            self._settings.validate_postal_codes
            and country_code
            and not is_valid_postal_code(country_code, postal_code)
        ):
            raise VatCalculatorError.invalid_postal_code(country_code)
        self._context.postal_code = postal_code
        return self

    def is_company(self) -> bool:
        return self._context.company

    def set_company(self, company: bool) -> VatCalculator:
        self._context.company = company
        return self

    def get_vat_number(self) -> str | None:
        return self._context.vat_number

    def set_vat_number(self, vat_number: str) -> VatCalculator:
        if self._settings.validate_vat_numbers and not is_valid_vat_number_format(vat_number):
            raise VatCalculatorError.invalid_vat_number()
        self._context.vat_number = vat_number
        return self

    def get_business_country_code(self) -> str | None:
        return self._context.business_country_code

    def set_business_country_code(self, business_country_code: str) -> VatCalculator:
        business_country_code = business_country_code.upper()
        if self._settings.validate_country_codes and not self._is_known_country(business_country_code):
            raise VatCalculatorError.invalid_country_code()
        self._context.business_country_code = business_country_code
        return self

    # ── VIES ────────────────────────────────────────────────────────────────

    async def is_valid_vat_number(self, vat_number: str) -> bool:
        """Ask VIES whether *vat_number* is currently registered.

        Without ``forward_soap_faults`` every failure, including a malformed
        number, comes back as False.
        """
        vat_number = normalize_vat_number(vat_number)
        if not is_valid_vat_number_format(vat_number):
            if self._settings.forward_soap_faults:
                raise VatCalculatorError.invalid_vat_number()
            return False

        try:
            details = await self.get_vat_details(vat_number)
        except VatCalculatorError as e:
            logger.warning("vat_number_check_failed", vat_number=vat_number, kind=e.kind.value, error=e.message)
            if self._settings.forward_soap_faults:
                raise VatCalculatorError.vat_check_unavailable() from e
            return False
        return details.is_valid

    async def get_vat_details(self, vat_number: str) -> ValidationResult:
        """Return the registry's view of *vat_number*.

        Always raises on failure, whatever ``forward_soap_faults`` says.
        """
        vat_number = normalize_vat_number(vat_number)
        if not is_valid_vat_number_format(vat_number):
            raise VatCalculatorError.invalid_vat_number()
        return await self._vies.check_vat(vat_number)

    # ── Internals ───────────────────────────────────────────────────────────

    def _is_known_country(self, country_code: str | None) -> bool:
        return bool(country_code) and country_code in self._rules

    def _apply_arguments(self, country_code: str | None, postal_code: str | None, company: bool | None) -> None:
        if country_code:
            self.set_country_code(country_code)
        if postal_code:
            self.set_postal_code(postal_code)
        if company is not None:
            self.set_company(company)

    def _resolve(self, rate_category: str | None) -> RateResolution:
        country_code = self._context.country_code
        if country_code is None:
            raise VatCalculatorError.invalid_country_code("No country code has been set")
        resolution = resolve_rate(
            self._rules,
            country_code,
            self._context.postal_code,
            company=self._context.company,
            business_country_code=self._context.business_country_code,
            rate_category=rate_category,
        )
        logger.debug(
            "vat_rate_resolved",
            country_code=country_code,
            postal_code=self._context.postal_code,
            company=self._context.company,
            rate=resolution.rate,
            rule_applied=resolution.rule_applied,
        )
        return resolution

    def _build_result(
        self,
        net_price: float,
        gross_price: float,
        vat_amount: float,
        resolution: RateResolution,
    ) -> CalculationResult:
        return CalculationResult(
            net_price=net_price,
            gross_price=gross_price,
            vat_amount=vat_amount,
            vat_rate=resolution.rate,
            country_code=self._context.country_code,
            is_company=self._context.company,
            details=CalculationDetails(
                rule_applied=resolution.rule_applied,
                reverse_charge=self._context.reverse_charge,
                vat_number_used=self._context.vat_number,
                postal_code_used=self._context.postal_code,
            ),
        )
