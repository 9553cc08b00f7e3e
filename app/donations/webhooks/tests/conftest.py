"""
Test configuration and fixtures for webhook tests.

This module provides:
- Recipients with webhook secrets
- Payload builders that produce raw bytes and matching signatures
- In-memory recipient store for pipeline tests
"""

import pytest
from django.test import Client

from authentication.tests.factories import ProfileFactory
from donations.stores import Recipient
from donations.tests.factories import DonationFactory
from donations.webhooks.signature import compute_signature
from donations.webhooks.tests.helpers import (
    ALICE_SECRET,
    BOB_SECRET,
    InMemoryRecipientStore,
    build_payload,
)


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def make_payload():
    """
    Build a raw body and its signature.

    Usage:
        body, signature = make_payload("charge:failed", "ch_1")
    """

    def _make(event_type="charge:confirmed", charge_id="ch_1", secret=ALICE_SECRET):
        body = build_payload(event_type, charge_id)
        return body, compute_signature(body, secret)

    return _make


# =============================================================================
# Recipient Fixtures
# =============================================================================


@pytest.fixture
def alice_profile(db):
    return ProfileFactory(
        username="alice",
        coinbase_commerce_key="cc-alice-key-0001",
        webhook_secret=ALICE_SECRET,
    )


@pytest.fixture
def bob_profile(db):
    return ProfileFactory(
        username="bob",
        coinbase_commerce_key="cc-bob-key-0002",
        webhook_secret=BOB_SECRET,
    )


@pytest.fixture
def alice_donation(alice_profile):
    return DonationFactory(recipient=alice_profile.user, charge_id="ch_1")


@pytest.fixture
def alice():
    return Recipient(id="11111111-1111-1111-1111-111111111111", username="alice", webhook_secret=ALICE_SECRET)


@pytest.fixture
def recipients(alice):
    return InMemoryRecipientStore(alice)


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def webhook_client():
    return Client(enforce_csrf_checks=True)


@pytest.fixture
def post_webhook(webhook_client):
    """
    POST a raw body to the webhook endpoint.

    Usage:
        response = post_webhook("alice", body, signature)
    """

    def _post(username, body, signature=None, path=None):
        extra = {}
        if signature is not None:
            extra["HTTP_X_CC_WEBHOOK_SIGNATURE"] = signature
        return webhook_client.post(
            path or f"/webhooks/{username}",
            data=body,
            content_type="application/json",
            **extra,
        )

    return _post
