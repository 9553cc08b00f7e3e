"""
Reconciliation of donation status from provider events.

DonationReconciler applies a status derived from a Coinbase Commerce
charge event to the donations stored for that charge. It is the only
writer on the webhook path.

Guarantees:
    - Scope: only rows matching both charge_id and recipient_id are read
      or written. A recipient authenticated by its own webhook secret
      can never touch another recipient's donation, even when charge
      ids collide.
    - One write: a successful reconciliation issues exactly one UPDATE.
    - Idempotent: applying the same status twice leaves the same state,
      and the second call also succeeds.

Ordering:
    By default the latest event wins. With ``terminal_guard=True`` rows
    that already reached COMPLETED or FAILED are left alone, so a late
    ``charge:pending`` cannot reopen a settled donation.

Usage:
    from donations.services import DonationReconciler
    from donations.stores import DonationStore

    reconciler = DonationReconciler(DonationStore.service())
    result = reconciler.reconcile("ch_123", recipient.id, DonationStatus.COMPLETED)

    if not result and result.error_code == DONATION_NOT_FOUND:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError

from core.services import BaseService, ServiceResult

from donations.exceptions import DonationNotFoundError
from donations.state_machines import allowed_sources

if TYPE_CHECKING:
    from donations.stores import DonationStore


# =============================================================================
# Error Codes
# =============================================================================

DONATION_NOT_FOUND = DonationNotFoundError.default_error_code
DONATION_UPDATE_FAILED = "DONATION_UPDATE_FAILED"


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class ReconciliationResult:
    """
    Outcome of a successful reconciliation.

    Attributes:
        charge_id: Provider charge id the event referred to
        recipient_id: Recipient the update was scoped to
        status: Status that was applied
        matched: Rows matching (charge_id, recipient_id) before the update
        updated: Rows changed by the update
        skipped: True when the terminal guard left matching rows untouched
    """

    charge_id: str
    recipient_id: Any
    status: str
    matched: int
    updated: int
    skipped: bool = False


# =============================================================================
# Reconciler
# =============================================================================


class DonationReconciler(BaseService):
    """
    Applies a new status to the donations of one (charge, recipient) pair.

    Args:
        donations: Store used for the lookup and the update. The webhook
            passes the cross-tenant ``DonationStore.service()``.
        terminal_guard: Refuse to move rows out of a terminal status
    """

    def __init__(self, donations: DonationStore, *, terminal_guard: bool = False):
        self.donations = donations
        self.terminal_guard = terminal_guard

    def reconcile(
        self,
        charge_id: str,
        recipient_id,
        new_status: str,
    ) -> ServiceResult[ReconciliationResult]:
        """
        Set ``new_status`` on the donations for ``charge_id`` owned by
        ``recipient_id``.

        Returns:
            ServiceResult with ReconciliationResult on success.
            Failure codes:
                DONATION_NOT_FOUND: no row matches the pair
                DONATION_UPDATE_FAILED: the database rejected the update
        """
        logger = self.get_logger()
        log_context = {
            "charge_id": charge_id,
            "recipient_id": str(recipient_id),
            "status": str(new_status),
        }

        matched = self.donations.find(charge_id, recipient_id).count()
        if matched == 0:
            logger.warning("No donation for charge", extra=log_context)
            return ServiceResult.from_exception(
                DonationNotFoundError("Donation not found", details={"charge_id": charge_id})
            )

        from_statuses = allowed_sources(new_status) if self.terminal_guard else None

        try:
            updated = self.donations.update_status(
                charge_id,
                recipient_id,
                new_status,
                from_statuses=from_statuses,
            )
        except DatabaseError:
            logger.error(
                "Donation status update failed",
                extra=log_context,
                exc_info=True,
            )
            return ServiceResult.failure(
                "Error updating donation",
                error_code=DONATION_UPDATE_FAILED,
            )

        skipped = from_statuses is not None and updated < matched
        if skipped:
            logger.info(
                "Terminal donation left unchanged",
                extra={**log_context, "matched": matched, "updated": updated},
            )
        else:
            logger.info(
                "Donation status reconciled",
                extra={**log_context, "updated": updated},
            )

        return ServiceResult.success(
            ReconciliationResult(
                charge_id=charge_id,
                recipient_id=recipient_id,
                status=str(new_status),
                matched=matched,
                updated=updated,
                skipped=skipped,
            )
        )
