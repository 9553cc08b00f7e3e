"""
Webhook pipeline outcomes.

Every request to the webhook endpoint ends in exactly one outcome, and
each outcome has a fixed HTTP status and plain-text body. Bodies never
carry request-specific detail.
"""

from __future__ import annotations

from enum import Enum


class WebhookOutcome(str, Enum):
    """
    Terminal outcome of a webhook request.

    Usage:
        outcome = process_webhook(...)
        return HttpResponse(outcome.message, status=outcome.status_code)
    """

    AUTH_MISSING = "auth_missing"
    RECIPIENT_NOT_FOUND = "recipient_not_found"
    AUTH_INVALID = "auth_invalid"
    MALFORMED_PAYLOAD = "malformed_payload"
    EVENT_IGNORED = "event_ignored"
    DONATION_NOT_FOUND = "donation_not_found"
    STORAGE_UPDATE_FAILED = "storage_update_failed"
    RECONCILED = "reconciled"
    UNEXPECTED = "unexpected"

    @property
    def status_code(self) -> int:
        return OUTCOME_RESPONSES[self][0]

    @property
    def message(self) -> str:
        return OUTCOME_RESPONSES[self][1]

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


# outcome -> (HTTP status, response body)
OUTCOME_RESPONSES: dict[WebhookOutcome, tuple[int, str]] = {
    WebhookOutcome.AUTH_MISSING: (401, "No signature"),
    WebhookOutcome.RECIPIENT_NOT_FOUND: (404, "User not found"),
    WebhookOutcome.AUTH_INVALID: (401, "Invalid signature"),
    WebhookOutcome.MALFORMED_PAYLOAD: (500, "Internal error"),
    WebhookOutcome.EVENT_IGNORED: (200, "OK"),
    WebhookOutcome.DONATION_NOT_FOUND: (404, "Donation not found"),
    WebhookOutcome.STORAGE_UPDATE_FAILED: (500, "Error updating donation"),
    WebhookOutcome.RECONCILED: (200, "OK"),
    WebhookOutcome.UNEXPECTED: (500, "Internal error"),
}
