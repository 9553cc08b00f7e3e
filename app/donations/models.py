"""
Donation model.

A Donation is one payment attempt by a donor towards a recipient. It is
created as PENDING when the Coinbase Commerce charge is created, and its
status is afterwards driven by the provider's webhooks.

Usage:
    from donations.models import Donation
    from donations.state_machines import DonationStatus

    donation = Donation.objects.create(
        recipient=user,
        charge_id="66d1d5f8-...",
        donor_name="Bob",
        message="Great stream!",
        amount=Decimal("5.00"),
    )

    # Manual reconciliation (admin)
    donation.mark_completed()
    donation.save()

Note:
    The webhook path never saves instances; it issues a single scoped
    UPDATE through donations.stores.DonationStore.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from django_fsm import FSMField, transition

from core.models import BaseModel
from core.model_mixins import UUIDPrimaryKeyMixin

from donations.state_machines import DonationStatus


class Donation(UUIDPrimaryKeyMixin, BaseModel):
    """
    A donation towards a recipient, backed by a Coinbase Commerce charge.

    State Flow:
        PENDING -> COMPLETED
        PENDING -> FAILED

    Fields:
        recipient: User receiving the donation
        charge_id: Provider-assigned charge identifier
        hosted_url: Coinbase Commerce checkout page for the charge
        donor_name: Name entered by the donor
        message: Message entered by the donor
        amount: Amount in major currency units
        currency: ISO 4217 currency code
        status: Current FSM status

    Note:
        charge_id is not unique on its own. Lookups are always scoped by
        (charge_id, recipient).
    """

    # ==========================================================================
    # Relationships
    # ==========================================================================

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="donations_received",
        help_text="User receiving this donation",
    )

    # ==========================================================================
    # Coinbase Commerce Integration
    # ==========================================================================

    charge_id = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Coinbase Commerce charge ID",
    )

    hosted_url = models.URLField(
        max_length=500,
        blank=True,
        help_text="Hosted checkout URL for the charge",
    )

    # ==========================================================================
    # Donor Metadata (immutable after creation)
    # ==========================================================================

    donor_name = models.CharField(
        max_length=100,
        help_text="Name entered by the donor",
    )

    message = models.TextField(
        max_length=500,
        blank=True,
        help_text="Message entered by the donor",
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Donation amount in major currency units",
    )

    currency = models.CharField(
        max_length=3,
        default="USD",
        help_text="ISO 4217 currency code",
    )

    # ==========================================================================
    # State
    # ==========================================================================

    status = FSMField(
        default=DonationStatus.PENDING,
        choices=DonationStatus.choices,
        db_index=True,
        help_text="Current status of the donation",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Donation"
        verbose_name_plural = "Donations"
        indexes = [
            models.Index(fields=["recipient", "charge_id"], name="donation_recipient_charge_idx"),
            models.Index(
                fields=["recipient", "status", "created_at"],
                name="donation_recipient_status_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Donation({self.charge_id}, {self.amount} {self.currency}, {self.status})"

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def is_pending(self) -> bool:
        return self.status == DonationStatus.PENDING

    @property
    def is_completed(self) -> bool:
        return self.status == DonationStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status == DonationStatus.FAILED

    # ==========================================================================
    # Transitions
    # ==========================================================================

    @transition(
        field=status,
        source=DonationStatus.PENDING,
        target=DonationStatus.COMPLETED,
    )
    def mark_completed(self) -> None:
        """
        Mark the donation as paid.

        Note: Does not save - caller must save after calling.
        """

    @transition(
        field=status,
        source=DonationStatus.PENDING,
        target=DonationStatus.FAILED,
    )
    def mark_failed(self) -> None:
        """
        Mark the donation as failed.

        Note: Does not save - caller must save after calling.
        """
