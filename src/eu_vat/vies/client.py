"""Async HTTP client for the VIES checkVat service."""

from __future__ import annotations

import time

import httpx
import structlog

from ..config import VIES_URL
from ..exceptions import VatCalculatorError
from ..models.results import ValidationResult
from .soap import build_check_vat_envelope, parse_check_vat_response

logger = structlog.get_logger(__name__)

SOAP_HEADERS = {
    "Content-Type": "text/xml;charset=UTF-8",
    "SOAPAction": "",
}


class ViesClient:
    """Performs a single checkVat round trip per call.

    No retries or pooling; ``timeout_ms`` is passed to httpx, which enforces it.
    ``transport`` lets tests substitute an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        url: str = VIES_URL,
        timeout_ms: int = 30000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url
        self._timeout = timeout_ms / 1000
        self._transport = transport

    async def check_vat(self, vat_number: str) -> ValidationResult:
        """Look up an already format-checked *vat_number*.

        Raises ``VatCalculatorError`` with kind ``vat_check_unavailable`` on
        transport errors, non-2xx replies and SOAP faults.
        """
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._url,
                    content=build_check_vat_envelope(vat_number),
                    headers=SOAP_HEADERS,
                )
        except httpx.HTTPError as e:
            logger.warning("vies_request_failed", vat_number=vat_number, error=str(e))
            raise VatCalculatorError.vat_check_unavailable() from e
        except Exception as e:
            logger.warning("vies_transport_failed", vat_number=vat_number, error=repr(e))
            raise VatCalculatorError.vat_check_unavailable() from e

        latency_ms = int((time.monotonic() - start) * 1000)
        if not response.is_success:
            logger.warning(
                "vies_bad_status",
                vat_number=vat_number,
                status_code=response.status_code,
                latency_ms=latency_ms,
            )
            raise VatCalculatorError.vat_check_unavailable()

        result = parse_check_vat_response(response.content)
        logger.info("vies_check_completed", vat_number=vat_number, valid=result.is_valid, latency_ms=latency_ms)
        return result
