"""Client for the EU VAT Information Exchange System (VIES) checkVat service."""

from .client import ViesClient
from .soap import VIES_NAMESPACE, build_check_vat_envelope, parse_check_vat_response

__all__ = ["VIES_NAMESPACE", "ViesClient", "build_check_vat_envelope", "parse_check_vat_response"]
