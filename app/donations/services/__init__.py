"""
Donation services.

This module provides:
- DonationService: tip page lookup, charge + donation creation, summaries
- DonationReconciler: applies provider event statuses to stored donations

Usage:
    from donations.services import DonationReconciler, DonationService
    from donations.stores import DonationStore

    result = DonationReconciler(DonationStore.service()).reconcile(
        charge_id, recipient.id, DonationStatus.COMPLETED
    )
"""

from donations.services.donation_service import (
    DonationService,
    DonationSummary,
    StatusTotals,
)
from donations.services.reconciliation_service import (
    DONATION_NOT_FOUND,
    DONATION_UPDATE_FAILED,
    DonationReconciler,
    ReconciliationResult,
)

__all__ = [
    "DONATION_NOT_FOUND",
    "DONATION_UPDATE_FAILED",
    "DonationReconciler",
    "DonationService",
    "DonationSummary",
    "ReconciliationResult",
    "StatusTotals",
]
