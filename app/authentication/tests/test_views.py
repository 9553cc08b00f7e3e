"""
Tests for authentication API endpoints.

- GET/PUT/PATCH /api/v1/auth/profile/
- POST /api/v1/auth/token/ and /api/v1/auth/token/refresh/
"""

from rest_framework import status

from authentication.tests.factories import ProfileFactory, UserFactory


# =============================================================================
# URL Constants
# =============================================================================


PROFILE_URL = "/api/v1/auth/profile/"
TOKEN_URL = "/api/v1/auth/token/"
TOKEN_REFRESH_URL = "/api/v1/auth/token/refresh/"


class TestProfileViewGet:
    """
    Tests for ProfileView GET endpoint.

    GET /api/v1/auth/profile/
    """

    def test_get_returns_profile_for_authenticated_user(self, authenticated_client, user):
        response = authenticated_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == user.email
        assert response.data["is_complete"] is False

    def test_get_returns_401_for_unauthenticated_request(self, api_client):
        response = api_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_never_returns_secrets(self, recipient_client):
        response = recipient_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["has_webhook_secret"] is True
        assert "whsec-alice" not in response.content.decode()


class TestProfileViewUpdate:
    """
    Tests for ProfileView PUT/PATCH endpoints.

    PUT/PATCH /api/v1/auth/profile/
    """

    def test_put_claims_username_and_settings(self, authenticated_client, user):
        response = authenticated_client.put(
            PROFILE_URL,
            {
                "username": "NewCreator",
                "coinbase_commerce_key": "cc-key-abcdefgh",
                "webhook_secret": "whsec-new",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "newcreator"
        assert response.data["has_coinbase_commerce_key"] is True
        assert response.data["webhook_url"].endswith("/webhooks/newcreator")
        user.profile.refresh_from_db()
        assert user.profile.webhook_secret == "whsec-new"

    def test_patch_without_username_rejected_for_incomplete_profile(self, authenticated_client):
        response = authenticated_client.patch(
            PROFILE_URL, {"webhook_secret": "whsec"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "username" in response.data

    def test_patch_rotates_webhook_secret(self, recipient_client, recipient_profile):
        response = recipient_client.patch(
            PROFILE_URL, {"webhook_secret": "rotated"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        recipient_profile.refresh_from_db()
        assert recipient_profile.webhook_secret == "rotated"
        assert recipient_profile.username == "alice"

    def test_put_rejects_reserved_username(self, authenticated_client):
        response = authenticated_client.put(PROFILE_URL, {"username": "donate"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_put_rejects_duplicate_username(self, authenticated_client):
        ProfileFactory(username="existing")

        response = authenticated_client.put(PROFILE_URL, {"username": "EXISTING"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestTokenViews:
    """Tests for JWT token issuance."""

    def test_obtain_and_refresh_token(self, api_client, db):
        UserFactory(email="jwt@example.com", password="TokenPass123!")

        response = api_client.post(
            TOKEN_URL,
            {"email": "jwt@example.com", "password": "TokenPass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

        refreshed = api_client.post(
            TOKEN_REFRESH_URL, {"refresh": response.data["refresh"]}, format="json"
        )
        assert refreshed.status_code == status.HTTP_200_OK
        assert "access" in refreshed.data

    def test_wrong_password_is_rejected(self, api_client, db):
        UserFactory(email="jwt2@example.com", password="TokenPass123!")

        response = api_client.post(
            TOKEN_URL,
            {"email": "jwt2@example.com", "password": "wrong"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
