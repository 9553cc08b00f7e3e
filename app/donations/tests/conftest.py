"""
Test configuration and fixtures for donation tests.

This module provides:
- Recipient fixtures (complete, without key, without secret)
- Donation fixtures
- Mocked Coinbase Commerce HTTP responses
- API clients
"""

from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import ProfileFactory
from donations.tests.factories import DonationFactory


# =============================================================================
# Recipient Fixtures
# =============================================================================


@pytest.fixture
def recipient_profile(db):
    """A recipient that accepts donations and receives webhooks."""
    return ProfileFactory(
        username="alice",
        coinbase_commerce_key="cc-alice-key-0001",
        webhook_secret="whsec-alice",
    )


@pytest.fixture
def recipient(recipient_profile):
    """The recipient's User (donations reference users)."""
    return recipient_profile.user


@pytest.fixture
def other_recipient_profile(db):
    """A second recipient, for tenant isolation checks."""
    return ProfileFactory(
        username="bob",
        coinbase_commerce_key="cc-bob-key-0002",
        webhook_secret="whsec-bob",
    )


@pytest.fixture
def keyless_profile(db):
    """A recipient that has not configured a Coinbase Commerce key."""
    return ProfileFactory(username="nokey", coinbase_commerce_key="")


# =============================================================================
# Donation Fixtures
# =============================================================================


@pytest.fixture
def pending_donation(recipient):
    return DonationFactory(recipient=recipient, charge_id="ch_pending_1")


# =============================================================================
# Coinbase Commerce Response Fixtures
# =============================================================================


@pytest.fixture
def mock_coinbase_response():
    """
    Build a mock ``requests.Response``.

    Usage:
        response = mock_coinbase_response(201, {"data": {...}})
    """

    def _create(status_code=201, json_body=None, json_error=None):
        response = MagicMock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_body if json_body is not None else {}
        return response

    return _create


@pytest.fixture
def charge_payload():
    """A successful POST /charges response body."""
    return {
        "data": {
            "id": "f5f5d2a1-0000-4c3e-9d7f-charge000001",
            "code": "ABCD1234",
            "hosted_url": "https://commerce.coinbase.com/charges/ABCD1234",
            "pricing_type": "fixed_price",
        }
    }


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def recipient_client(recipient):
    client = APIClient()
    client.force_authenticate(user=recipient)
    return client
