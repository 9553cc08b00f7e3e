"""
State machine enums and helpers for donation models.

This module defines the state enums used by donation models with django-fsm.
"""

from donations.state_machines.states import (
    DONATION_TRANSITIONS,
    TERMINAL_STATUSES,
    DonationStatus,
    allowed_sources,
)

__all__ = [
    "DONATION_TRANSITIONS",
    "DonationStatus",
    "TERMINAL_STATUSES",
    "allowed_sources",
]
