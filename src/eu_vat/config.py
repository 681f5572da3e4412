"""Calculator configuration via environment variables with EU_VAT_ prefix."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.rules import CountryRule
from .rules.defaults import DEFAULT_VAT_RULES
from .utils.logging import LogLevel

VIES_URL = "https://ec.europa.eu/taxation_customs/vies/services/checkVatService"


class Settings(BaseSettings):
    """VAT calculator configuration.

    Every field can be set from an ``EU_VAT_``-prefixed environment variable;
    ``EU_VAT_RULES`` takes a JSON object that replaces the whole rule table.
    Use :func:`eu_vat.rules.defaults.merge_rules` to override single countries.
    """

    model_config = SettingsConfigDict(env_prefix="EU_VAT_")

    # ── Rule table ──────────────────────────────────────────────────────────
    rules: dict[str, CountryRule] = Field(default_factory=lambda: dict(DEFAULT_VAT_RULES))
    business_country_code: str | None = None

    # ── VIES registry ───────────────────────────────────────────────────────
    vies_url: str = VIES_URL
    forward_soap_faults: bool = False
    # Milliseconds; handed to the HTTP transport as its timeout.
    soap_timeout: int = Field(default=30000, gt=0)

    # ── Validation toggles ──────────────────────────────────────────────────
    validate_vat_numbers: bool = True
    validate_country_codes: bool = True
    validate_postal_codes: bool = False

    log_level: LogLevel = "INFO"

    @field_validator("rules", mode="before")
    @classmethod
    def _upper_case_countries(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(code).upper(): rule for code, rule in value.items()}
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_case_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("business_country_code")
    @classmethod
    def _upper_case_business_country(cls, value: str | None) -> str | None:
        return value.upper() if value else value
