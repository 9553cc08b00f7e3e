"""
Webhook endpoint view for Coinbase Commerce.

Each recipient registers ``https://<host>/webhooks/<username>`` in their
Coinbase Commerce settings together with a shared secret. The view reads
the raw body and the signature header and hands them to
``process_webhook``; the returned outcome decides the response.

Usage:
    # In urls.py
    from donations.webhooks.views import CoinbaseWebhookView

    urlpatterns = [
        re_path(r"^(?P<username>[^/]+)/?$", CoinbaseWebhookView.as_view()),
    ]

    # Tests substitute collaborators through as_view()
    view = CoinbaseWebhookView.as_view(recipients=FakeRecipientStore())
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from core.helpers import get_client_ip

from donations.services import DonationReconciler
from donations.stores import DonationStore, RecipientStore
from donations.webhooks.handlers import process_webhook
from donations.webhooks.outcomes import WebhookOutcome
from donations.webhooks.signature import SIGNATURE_HEADER


logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class CoinbaseWebhookView(View):
    """
    Receive Coinbase Commerce charge events for one recipient.

    Security:
    - Signature verification against the recipient's own secret
    - CSRF exemption required for external webhooks
    - Only POST requests accepted (405 otherwise)

    Returns:
        Plain-text HttpResponse:
        - 200: Event applied or ignored
        - 401: Missing or invalid signature
        - 404: Unknown recipient or donation
        - 500: Malformed payload, storage failure or unexpected error

    Attributes:
        recipients: RecipientStore (default: RecipientStore())
        donations: Cross-tenant DonationStore (default: DonationStore.service())
        apply_pending: Override DONATIONS_WEBHOOK_APPLY_PENDING
        terminal_guard: Override DONATIONS_WEBHOOK_TERMINAL_GUARD
    """

    http_method_names = ["post"]

    recipients: RecipientStore | None = None
    donations: DonationStore | None = None
    apply_pending: bool | None = None
    terminal_guard: bool | None = None

    def get_recipients(self) -> RecipientStore:
        return self.recipients if self.recipients is not None else RecipientStore()

    def get_reconciler(self) -> DonationReconciler:
        donations = self.donations if self.donations is not None else DonationStore.service()
        terminal_guard = self.terminal_guard
        if terminal_guard is None:
            terminal_guard = getattr(settings, "DONATIONS_WEBHOOK_TERMINAL_GUARD", False)
        return DonationReconciler(donations, terminal_guard=terminal_guard)

    def get_apply_pending(self) -> bool:
        if self.apply_pending is not None:
            return self.apply_pending
        return getattr(settings, "DONATIONS_WEBHOOK_APPLY_PENDING", True)

    def post(self, request: HttpRequest, username: str) -> HttpResponse:
        try:
            outcome = process_webhook(
                username=username,
                raw_body=request.body,
                signature=request.headers.get(SIGNATURE_HEADER),
                recipients=self.get_recipients(),
                reconciler=self.get_reconciler(),
                apply_pending=self.get_apply_pending(),
            )
        except Exception:
            logger.exception(
                "Unexpected error processing webhook",
                extra={"username": username, "client_ip": get_client_ip(request)},
            )
            outcome = WebhookOutcome.UNEXPECTED

        return HttpResponse(
            outcome.message,
            status=outcome.status_code,
            content_type="text/plain; charset=utf-8",
        )
