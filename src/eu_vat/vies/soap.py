"""checkVat SOAP envelope building and response parsing."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import date
from xml.sax.saxutils import escape

from ..exceptions import VatCalculatorError
from ..models.results import ValidationResult
from ..validation.vat_number import split_vat_number

VIES_NAMESPACE = "urn:ec.europa.eu:taxud:vies:services:checkVat:types"
SOAP_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"

_ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<soap:Envelope xmlns:soap="{soap_ns}" xmlns:tns1="{vies_ns}">
  <soap:Body>
    <tns1:checkVat>
      <tns1:countryCode>{country_code}</tns1:countryCode>
      <tns1:vatNumber>{number}</tns1:vatNumber>
    </tns1:checkVat>
  </soap:Body>
</soap:Envelope>"""


def build_check_vat_envelope(vat_number: str) -> str:
    """Build the request body for *vat_number* (prefix and digits go in separate fields)."""
    country_code, number = split_vat_number(vat_number)
    return _ENVELOPE.format(
        soap_ns=SOAP_NAMESPACE,
        vies_ns=VIES_NAMESPACE,
        country_code=escape(country_code),
        number=escape(number),
    )


def parse_check_vat_response(body: str | bytes) -> ValidationResult:
    """Extract the checkVat fields from a VIES reply.

    Raises ``vat_check_unavailable`` for malformed XML and for SOAP faults
    (e.g. ``MS_UNAVAILABLE`` when a member state's backend is down).
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise VatCalculatorError.vat_check_unavailable(f"Unreadable VIES response: {e}") from e

    fault = root.find(f".//{{{SOAP_NAMESPACE}}}Fault")
    if fault is not None:
        fault_string = (fault.findtext("faultstring") or "").strip()
        raise VatCalculatorError.vat_check_unavailable(
            f"VIES returned a SOAP fault: {fault_string}" if fault_string else None
        )

    def node_value(tag: str) -> str | None:
        for elem in root.iter(f"{{{VIES_NAMESPACE}}}{tag}"):
            if elem.text and elem.text.strip():
                return elem.text.strip()
        return None

    is_valid = node_value("valid") == "true"
    return ValidationResult(
        is_valid=is_valid,
        name=_disclosed(node_value("name")),
        address=_disclosed(node_value("address")),
        country_code=node_value("countryCode"),
        vat_number=node_value("vatNumber"),
        request_date=_parse_request_date(node_value("requestDate")),
        is_company=is_valid,
    )


def _disclosed(value: str | None) -> str | None:
    """VIES answers ``---`` for fields a member state does not disclose."""
    if value is None or value == "---":
        return None
    return value


def _parse_request_date(value: str | None) -> date | None:
    # VIES sends an xsd:date, sometimes with a zone suffix: 2024-03-25+01:00
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
