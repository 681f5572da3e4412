"""Shared test fixtures."""
import httpx
import pytest

from eu_vat.calculator import VatCalculator
from tests.factories import VALID_RESPONSE, fail_with, make_vies_client, respond_with


@pytest.fixture
def calculator():
    return VatCalculator()


@pytest.fixture
def valid_vies_client():
    return make_vies_client(respond_with(VALID_RESPONSE))


@pytest.fixture
def broken_vies_client():
    return make_vies_client(fail_with(httpx.ConnectError("Service unavailable")))
