"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["XRPL_RPC_URL"] = ""
os.environ["BITHOMP_API_KEY"] = ""

from keepix_xrpl.config import get_settings
from keepix_xrpl.providers.base import LedgerClient

get_settings.cache_clear()

# Reference wallet derived from password "toto" and the default template
REFERENCE_PASSWORD = "toto"
REFERENCE_MNEMONIC = (
    "celery net original hire stand seminar cricket reject draft hundred hybrid "
    "dry three chair sea enable perfect this good race tooth junior beyond since"
)
REFERENCE_PRIVATE_KEY = "00C39B242464E13A05D27444513BC1A516419777714EE44E3C21A3D7C4B86BAE56"
REFERENCE_ADDRESS = "rEg1y1RXRYgsRnQK1MhcEZ45A6sq8GzpwJ"

TEST_RPC = {"url": "wss://testnet.xrpl-labs.com/"}


@pytest.fixture
def ledger_client() -> MagicMock:
    """Mock ledger client with async methods."""
    client = MagicMock(spec=LedgerClient)
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client.get_balances = AsyncMock(return_value=[])
    client.autofill = AsyncMock()
    client.submit_and_wait = AsyncMock()
    return client


@pytest.fixture
def client_factory(ledger_client: MagicMock) -> MagicMock:
    """Factory returning the mock ledger client for any URL."""
    return MagicMock(return_value=ledger_client)
