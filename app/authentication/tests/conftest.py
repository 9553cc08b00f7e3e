"""
Test configuration and fixtures for authentication tests.

This module provides:
- User and profile fixtures for common scenarios
- API client helpers for authenticated requests

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/profile/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import ProfileFactory, UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """
    Create a basic user with auto-created profile.

    The profile is automatically created via signals but has no username set.
    """
    return UserFactory()


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


@pytest.fixture
def other_user(db):
    """A second user, for uniqueness and isolation checks."""
    return UserFactory()


# =============================================================================
# Profile Fixtures
# =============================================================================


@pytest.fixture
def profile(user):
    """Get the (incomplete) profile for the default user fixture."""
    return user.profile


@pytest.fixture
def recipient_profile(db):
    """A complete recipient: username, Coinbase key and webhook secret set."""
    return ProfileFactory(
        username="alice",
        coinbase_commerce_key="cc-live-key-1234567890",
        webhook_secret="whsec-alice",
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as ``user`` with a JWT access token."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def recipient_client(recipient_profile):
    """API client authenticated as the complete recipient."""
    client = APIClient()
    client.force_authenticate(user=recipient_profile.user)
    return client
