"""
Coinbase Commerce event classification.

Maps charge event types to donation statuses. Only three event types
change a donation; every other type (``charge:created``,
``charge:delayed``, ``charge:resolved``, ...) is acknowledged and
ignored.

Usage:
    from donations.webhooks.events import classify_event

    status = classify_event(event["type"])
    if status is None:
        return WebhookOutcome.EVENT_IGNORED
"""

from __future__ import annotations

from donations.state_machines import DonationStatus

CHARGE_PENDING = "charge:pending"
CHARGE_CONFIRMED = "charge:confirmed"
CHARGE_FAILED = "charge:failed"

EVENT_STATUS_MAP: dict[str, DonationStatus] = {
    CHARGE_PENDING: DonationStatus.PENDING,
    CHARGE_CONFIRMED: DonationStatus.COMPLETED,
    CHARGE_FAILED: DonationStatus.FAILED,
}


def classify_event(event_type: str, *, apply_pending: bool = True) -> DonationStatus | None:
    """
    Return the donation status for ``event_type``, or None to ignore it.

    Matching is exact and case-sensitive.

    Args:
        event_type: Value of ``event.type`` from the payload
        apply_pending: When False, ``charge:pending`` is ignored instead
            of resetting the donation to PENDING
    """
    if not isinstance(event_type, str):
        return None
    if event_type == CHARGE_PENDING and not apply_pending:
        return None
    return EVENT_STATUS_MAP.get(event_type)
