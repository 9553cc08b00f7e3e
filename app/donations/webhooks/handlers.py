"""
Coinbase Commerce webhook pipeline.

process_webhook runs one inbound webhook through a fixed sequence of
stages and returns the WebhookOutcome the view turns into a response:

    1. Signature header present           else AUTH_MISSING
    2. Recipient exists and has a secret  else RECIPIENT_NOT_FOUND
    3. Signature matches the raw body     else AUTH_INVALID
    4. Body parses to an event            else MALFORMED_PAYLOAD
    5. Event type maps to a status        else EVENT_IGNORED
    6. Reconcile the donation             DONATION_NOT_FOUND,
                                          STORAGE_UPDATE_FAILED or RECONCILED

Nothing is parsed or written before the signature has been checked.
Expected failures are returned as outcomes; anything raised from here is
a bug or an infrastructure failure and is handled by the view.

Usage:
    from donations.webhooks.handlers import process_webhook

    outcome = process_webhook(
        username="alice",
        raw_body=request.body,
        signature=request.headers.get(SIGNATURE_HEADER),
        recipients=RecipientStore(),
        reconciler=DonationReconciler(DonationStore.service()),
    )
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from donations.services.reconciliation_service import (
    DONATION_NOT_FOUND,
    DONATION_UPDATE_FAILED,
)
from donations.webhooks.events import classify_event
from donations.webhooks.outcomes import WebhookOutcome
from donations.webhooks.signature import verify_signature

if TYPE_CHECKING:
    from donations.services import DonationReconciler
    from donations.stores import RecipientStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChargeEvent:
    """
    The fields of a Commerce webhook the pipeline uses.

    Attributes:
        event_type: ``event.type``, e.g. ``charge:confirmed``
        charge_id: ``event.data.id`` (None when absent)
    """

    event_type: str
    charge_id: str | None


def parse_event(raw_body: bytes) -> ChargeEvent | None:
    """
    Extract the event type and charge id from a webhook body.

    Returns None when the body is not JSON or has no ``event.type``.
    A missing ``event.data.id`` is reported as ``charge_id=None`` so
    ignored events can still be acknowledged.

    Example body:
        {"id": 1, "event": {"type": "charge:confirmed", "data": {"id": "ch_1"}}}
    """
    try:
        payload = json.loads(raw_body)
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None
    event = payload.get("event")
    if not isinstance(event, dict):
        return None
    event_type = event.get("type")
    if not isinstance(event_type, str) or not event_type:
        return None

    data = event.get("data")
    charge_id = data.get("id") if isinstance(data, dict) else None
    if not isinstance(charge_id, str) or not charge_id:
        charge_id = None

    return ChargeEvent(event_type=event_type, charge_id=charge_id)


def process_webhook(
    *,
    username: str,
    raw_body: bytes,
    signature: str | None,
    recipients: RecipientStore,
    reconciler: DonationReconciler,
    apply_pending: bool = True,
) -> WebhookOutcome:
    """
    Authenticate, classify and apply one Coinbase Commerce webhook.

    Args:
        username: Recipient username from the URL path
        raw_body: Request body bytes as received
        signature: Value of the X-CC-Webhook-Signature header
        recipients: Store used to resolve ``username``
        reconciler: Applies the derived status
        apply_pending: Whether ``charge:pending`` events update donations

    Returns:
        The WebhookOutcome for this request
    """
    log_context = {"username": username}

    if not signature:
        logger.warning("Webhook received without signature header", extra=log_context)
        return WebhookOutcome.AUTH_MISSING

    recipient = recipients.lookup(username)
    if recipient is None:
        logger.warning("Webhook for unknown recipient", extra=log_context)
        return WebhookOutcome.RECIPIENT_NOT_FOUND
    if not recipient.webhook_secret:
        logger.warning("Webhook for recipient without webhook secret", extra=log_context)
        return WebhookOutcome.RECIPIENT_NOT_FOUND

    log_context["recipient_id"] = str(recipient.id)

    if not verify_signature(raw_body, signature, recipient.webhook_secret):
        logger.warning("Webhook signature verification failed", extra=log_context)
        return WebhookOutcome.AUTH_INVALID

    event = parse_event(raw_body)
    if event is None:
        logger.error("Malformed webhook payload", extra=log_context)
        return WebhookOutcome.MALFORMED_PAYLOAD

    log_context["event_type"] = event.event_type

    new_status = classify_event(event.event_type, apply_pending=apply_pending)
    if new_status is None:
        logger.info("Ignoring webhook event", extra=log_context)
        return WebhookOutcome.EVENT_IGNORED

    if event.charge_id is None:
        logger.error("Webhook event without charge id", extra=log_context)
        return WebhookOutcome.MALFORMED_PAYLOAD

    log_context["charge_id"] = event.charge_id
    logger.info(f"Received Coinbase Commerce webhook: {event.event_type}", extra=log_context)

    result = reconciler.reconcile(event.charge_id, recipient.id, new_status)
    if result:
        return WebhookOutcome.RECONCILED
    if result.error_code == DONATION_NOT_FOUND:
        return WebhookOutcome.DONATION_NOT_FOUND
    if result.error_code == DONATION_UPDATE_FAILED:
        return WebhookOutcome.STORAGE_UPDATE_FAILED

    logger.error(
        f"Unhandled reconciliation failure: {result.error_code}",
        extra=log_context,
    )
    return WebhookOutcome.UNEXPECTED
