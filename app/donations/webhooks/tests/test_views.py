"""
Tests for the Coinbase Commerce webhook endpoint.

POST /webhooks/<username>
"""

from unittest.mock import patch

from django.db import DatabaseError
from django.test import RequestFactory, override_settings

from donations.state_machines import DonationStatus
from donations.stores import Recipient
from donations.tests.factories import DonationFactory
from donations.webhooks.signature import compute_signature
from donations.webhooks.tests.helpers import BOB_SECRET, InMemoryRecipientStore
from donations.webhooks.views import CoinbaseWebhookView


class TestWebhookAuthentication:
    """Signature and recipient checks."""

    def test_missing_signature_returns_401(self, post_webhook, alice_donation, make_payload):
        body, _ = make_payload()

        response = post_webhook("alice", body)

        assert response.status_code == 401
        assert response.content == b"No signature"
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.PENDING

    def test_missing_signature_for_unknown_user_returns_401(self, post_webhook, db, make_payload):
        body, _ = make_payload()

        response = post_webhook("ghost", body)

        assert response.status_code == 401
        assert response.content == b"No signature"

    def test_unknown_recipient_returns_404(self, post_webhook, db, make_payload):
        body, signature = make_payload()

        response = post_webhook("ghost", body, signature)

        assert response.status_code == 404
        assert response.content == b"User not found"

    def test_username_match_is_case_sensitive(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload()

        response = post_webhook("ALICE", body, signature)

        assert response.status_code == 404

    def test_invalid_signature_returns_401(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload(secret="whsec-wrong")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 401
        assert response.content == b"Invalid signature"
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.PENDING

    def test_other_recipients_secret_rejected(self, post_webhook, alice_donation, bob_profile, make_payload):
        body, signature = make_payload(secret=BOB_SECRET)

        response = post_webhook("alice", body, signature)

        assert response.status_code == 401

    def test_tampered_body_rejected(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:failed")
        tampered = body.replace(b"charge:failed", b"charge:confirmed")

        response = post_webhook("alice", tampered, signature)

        assert response.status_code == 401
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.PENDING

    def test_recipient_without_secret_returns_404(self, post_webhook, alice_profile, make_payload):
        alice_profile.webhook_secret = ""
        alice_profile.save(update_fields=["webhook_secret"])
        body, _ = make_payload()

        response = post_webhook("alice", body, compute_signature(body, ""))

        assert response.status_code == 404


class TestWebhookReconciliation:
    """Status updates applied by signed events."""

    def test_confirmed_completes_donation(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        assert response.content == b"OK"
        assert response["Content-Type"].startswith("text/plain")
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.COMPLETED

    def test_failed_fails_donation(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:failed", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.FAILED

    def test_trailing_slash_accepted(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", "ch_1")

        response = post_webhook("alice", body, signature, path="/webhooks/alice/")

        assert response.status_code == 200
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.COMPLETED

    def test_redelivery_is_idempotent(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", "ch_1")

        first = post_webhook("alice", body, signature)
        second = post_webhook("alice", body, signature)

        assert first.status_code == 200
        assert second.status_code == 200
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.COMPLETED

    def test_ignored_event_leaves_donation_alone(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:created", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.PENDING

    def test_unknown_charge_returns_404(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", "ch_unknown")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 404
        assert response.content == b"Donation not found"

    def test_charge_of_other_recipient_not_touched(
        self, post_webhook, alice_profile, bob_profile, make_payload
    ):
        """Colliding charge ids stay scoped to the recipient in the URL."""
        bob_donation = DonationFactory(recipient=bob_profile.user, charge_id="ch_shared")
        body, signature = make_payload("charge:confirmed", "ch_shared")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 404
        bob_donation.refresh_from_db()
        assert bob_donation.status == DonationStatus.PENDING

    def test_colliding_charge_ids_updated_per_recipient(
        self, post_webhook, alice_profile, bob_profile, make_payload
    ):
        alice_donation = DonationFactory(recipient=alice_profile.user, charge_id="ch_shared")
        bob_donation = DonationFactory(recipient=bob_profile.user, charge_id="ch_shared")
        body, signature = make_payload("charge:failed", "ch_shared")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        alice_donation.refresh_from_db()
        bob_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.FAILED
        assert bob_donation.status == DonationStatus.PENDING

    def test_late_pending_reopens_donation_by_default(self, post_webhook, alice_profile, make_payload):
        donation = DonationFactory(
            recipient=alice_profile.user, charge_id="ch_1", status=DonationStatus.COMPLETED
        )
        body, signature = make_payload("charge:pending", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        donation.refresh_from_db()
        assert donation.status == DonationStatus.PENDING

    @override_settings(DONATIONS_WEBHOOK_TERMINAL_GUARD=True)
    def test_terminal_guard_keeps_settled_donation(self, post_webhook, alice_profile, make_payload):
        donation = DonationFactory(
            recipient=alice_profile.user, charge_id="ch_1", status=DonationStatus.COMPLETED
        )
        body, signature = make_payload("charge:pending", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        donation.refresh_from_db()
        assert donation.status == DonationStatus.COMPLETED

    @override_settings(DONATIONS_WEBHOOK_APPLY_PENDING=False)
    def test_pending_events_ignored_when_disabled(self, post_webhook, alice_profile, make_payload):
        donation = DonationFactory(
            recipient=alice_profile.user, charge_id="ch_1", status=DonationStatus.FAILED
        )
        body, signature = make_payload("charge:pending", "ch_1")

        response = post_webhook("alice", body, signature)

        assert response.status_code == 200
        donation.refresh_from_db()
        assert donation.status == DonationStatus.FAILED


class TestWebhookErrors:
    """Malformed input and internal failures."""

    def test_signed_non_json_body_returns_500(self, post_webhook, alice_profile):
        body = b"this is not json"

        response = post_webhook("alice", body, compute_signature(body, alice_profile.webhook_secret))

        assert response.status_code == 500
        assert response.content == b"Internal error"

    def test_mapped_event_without_charge_id_returns_500(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", None)

        response = post_webhook("alice", body, signature)

        assert response.status_code == 500
        assert response.content == b"Internal error"

    def test_storage_failure_returns_500(self, post_webhook, alice_donation, make_payload):
        body, signature = make_payload("charge:confirmed", "ch_1")

        with patch(
            "donations.stores.DonationStore.update_status",
            side_effect=DatabaseError("disk full"),
        ):
            response = post_webhook("alice", body, signature)

        assert response.status_code == 500
        assert response.content == b"Error updating donation"

    def test_unexpected_error_returns_500(self, post_webhook, alice_donation, make_payload, caplog):
        body, signature = make_payload()

        with patch(
            "donations.webhooks.views.process_webhook",
            side_effect=RuntimeError("boom"),
        ):
            response = post_webhook("alice", body, signature)

        assert response.status_code == 500
        assert response.content == b"Internal error"
        assert b"boom" not in response.content
        assert "Unexpected error processing webhook" in caplog.text

    def test_get_not_allowed(self, webhook_client, db):
        response = webhook_client.get("/webhooks/alice")

        assert response.status_code == 405

    def test_csrf_not_required(self, webhook_client, alice_donation, make_payload):
        body, signature = make_payload()

        response = webhook_client.post(
            "/webhooks/alice",
            data=body,
            content_type="application/json",
            HTTP_X_CC_WEBHOOK_SIGNATURE=signature,
        )

        assert response.status_code == 200


class TestWebhookViewCollaborators:
    """Collaborators substituted through as_view()."""

    def test_custom_recipient_store(self, alice_donation, make_payload):
        store = InMemoryRecipientStore(
            Recipient(
                id=alice_donation.recipient_id,
                username="tips",
                webhook_secret="whsec-alice",
            )
        )
        view = CoinbaseWebhookView.as_view(recipients=store)
        body, signature = make_payload("charge:confirmed", "ch_1")
        request = RequestFactory().post(
            "/webhooks/tips",
            data=body,
            content_type="application/json",
            HTTP_X_CC_WEBHOOK_SIGNATURE=signature,
        )

        response = view(request, username="tips")

        assert response.status_code == 200
        assert store.lookups == ["tips"]
        alice_donation.refresh_from_db()
        assert alice_donation.status == DonationStatus.COMPLETED

    def test_view_setting_overrides_global(self, alice_profile, make_payload):
        donation = DonationFactory(
            recipient=alice_profile.user, charge_id="ch_1", status=DonationStatus.COMPLETED
        )
        view = CoinbaseWebhookView.as_view(terminal_guard=True)
        body, signature = make_payload("charge:pending", "ch_1")
        request = RequestFactory().post(
            "/webhooks/alice",
            data=body,
            content_type="application/json",
            HTTP_X_CC_WEBHOOK_SIGNATURE=signature,
        )

        response = view(request, username="alice")

        assert response.status_code == 200
        donation.refresh_from_db()
        assert donation.status == DonationStatus.COMPLETED
