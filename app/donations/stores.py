"""
Data access handles for recipients and donations.

The webhook pipeline and the dashboard views never query the ORM
directly; they go through these stores so tests can substitute them and
so the scope of every query is fixed when the store is built.

- RecipientStore: username -> Recipient (id + webhook secret)
- DonationStore: charge lookups and status updates, either cross-tenant
  (``DonationStore.service()``) or restricted to one recipient's rows
  (``DonationStore.for_recipient(user)``)

Usage:
    recipient = RecipientStore().lookup("alice")

    store = DonationStore.service()
    rows = store.update_status("ch_123", recipient.id, DonationStatus.COMPLETED)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.utils import timezone

from authentication.models import Profile
from donations.models import Donation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recipient:
    """
    The part of a profile the webhook pipeline needs.

    Attributes:
        id: User id that donations reference as ``recipient_id``
        username: Public username from the URL
        webhook_secret: Shared secret (may be blank)
    """

    id: Any
    username: str
    webhook_secret: str

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        return f"Recipient(id={self.id!r}, username={self.username!r})"


class RecipientStore:
    """Resolves recipients by public username."""

    def lookup(self, username: str) -> Recipient | None:
        """
        Return the recipient registered under ``username``, or None.

        The match is exact and case-sensitive; stored usernames are
        lowercase. Issues a single query.
        """
        if not username:
            return None

        row = (
            Profile.objects.filter(username=username)
            .values("user_id", "username", "webhook_secret")
            .first()
        )
        if row is None:
            return None

        return Recipient(
            id=row["user_id"],
            username=row["username"],
            webhook_secret=row["webhook_secret"],
        )


class DonationStore:
    """
    Donation queries with a fixed tenant scope.

    A store built with ``recipient`` only ever sees that recipient's rows,
    whatever ``recipient_id`` a caller passes. The unscoped store is for
    server-side callers that have already authenticated the recipient
    some other way (the webhook signature).
    """

    def __init__(self, recipient=None):
        self._recipient = recipient

    @classmethod
    def service(cls) -> DonationStore:
        """Cross-tenant handle for the webhook pipeline."""
        return cls()

    @classmethod
    def for_recipient(cls, user) -> DonationStore:
        """Handle restricted to donations received by ``user``."""
        if user is None:
            raise ValueError("for_recipient() requires a user")
        return cls(recipient=user)

    def all(self) -> QuerySet[Donation]:
        """Every donation visible to this handle, newest first."""
        queryset = Donation.objects.all()
        if self._recipient is not None:
            queryset = queryset.filter(recipient=self._recipient)
        return queryset.order_by("-created_at")

    def find(self, charge_id: str, recipient_id) -> QuerySet[Donation]:
        """Donations matching both ``charge_id`` and ``recipient_id``."""
        return self.all().filter(charge_id=charge_id, recipient_id=recipient_id)

    def exists(self, charge_id: str, recipient_id) -> bool:
        return self.find(charge_id, recipient_id).exists()

    def update_status(
        self,
        charge_id: str,
        recipient_id,
        status: str,
        *,
        from_statuses: Iterable[str] | None = None,
    ) -> int:
        """
        Set ``status`` on every matching donation in one UPDATE.

        Args:
            charge_id: Provider charge id
            recipient_id: Recipient the charge belongs to
            status: New status value
            from_statuses: When given, only rows currently in one of these
                statuses are updated

        Returns:
            Number of rows updated

        Raises:
            django.db.DatabaseError: The update statement failed
        """
        queryset = Donation.objects.filter(charge_id=charge_id, recipient_id=recipient_id)
        if self._recipient is not None:
            queryset = queryset.filter(recipient=self._recipient)
        if from_statuses is not None:
            queryset = queryset.filter(status__in=list(from_statuses))

        # QuerySet.update() skips auto_now, so updated_at is set explicitly
        return queryset.update(status=status, updated_at=timezone.now())
