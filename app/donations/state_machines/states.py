"""
State enums for donation models.

Donation States:
    pending → completed
    pending → failed

A donation is created as PENDING by the charge-creation flow before any
webhook arrives. COMPLETED and FAILED are terminal: no transition is
declared out of either.
"""

from django.db import models


class DonationStatus(models.TextChoices):
    """
    Status of a Donation, driven by Coinbase Commerce charge events.

    Terminal states: COMPLETED, FAILED
    """

    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"


TERMINAL_STATUSES = frozenset({DonationStatus.COMPLETED, DonationStatus.FAILED})

# target -> statuses allowed to move to it (besides the target itself)
DONATION_TRANSITIONS: dict[str, frozenset[str]] = {
    DonationStatus.PENDING: frozenset(),
    DonationStatus.COMPLETED: frozenset({DonationStatus.PENDING}),
    DonationStatus.FAILED: frozenset({DonationStatus.PENDING}),
}


def allowed_sources(target: str) -> frozenset[str]:
    """
    Statuses from which a donation may be moved to ``target``.

    The target itself is always included so re-applying the same status
    stays a no-op rather than a rejected transition.

    Example:
        allowed_sources(DonationStatus.COMPLETED)
        # frozenset({"pending", "completed"})
    """
    return DONATION_TRANSITIONS.get(target, frozenset()) | {target}


__all__ = [
    "DonationStatus",
    "DONATION_TRANSITIONS",
    "TERMINAL_STATUSES",
    "allowed_sources",
]
