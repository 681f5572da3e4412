"""Values produced by a calculation or a registry check."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class CalculationDetails(BaseModel):
    """Which rule fired and which session inputs were used."""

    model_config = ConfigDict(frozen=True)

    rule_applied: str = "standard"
    reverse_charge: bool = False
    vat_number_used: str | None = None
    postal_code_used: str | None = None


class CalculationResult(BaseModel):
    """Price breakdown for one ``calculate`` / ``calculate_net`` call."""

    model_config = ConfigDict(frozen=True)

    net_price: float
    gross_price: float
    vat_amount: float
    vat_rate: float
    country_code: str | None = None
    is_company: bool = False
    details: CalculationDetails = Field(default_factory=CalculationDetails)


class ValidationResult(BaseModel):
    """Outcome of a VIES lookup.

    Identity fields are whatever the registry chose to disclose; several member
    states never return name or address.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    name: str | None = None
    address: str | None = None
    country_code: str | None = None
    vat_number: str | None = None
    request_date: date | None = None
    is_company: bool = False
