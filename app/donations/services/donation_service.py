"""
Donation creation and reporting.

DonationService backs the public tip page and the recipient dashboard:

- get_recipient: resolve a tip page username to a profile
- create_donation: create the Coinbase Commerce charge, then the PENDING row
- summarize: counts and totals per status for one recipient

Charge creation happens before the row is written. If Coinbase rejects
the charge nothing is stored; if the insert fails after the charge was
created the charge is orphaned at the provider and simply never paid.

Usage:
    from donations.services import DonationService

    result = DonationService.get_recipient("alice")
    if not result:
        return Response(result.to_response(), status=404)

    result = DonationService.create_donation(
        result.data,
        donor_name="Bob",
        message="Great stream!",
        amount=Decimal("5.00"),
        redirect_url="https://tips.example.com/success",
        webhook_url="https://tips.example.com/webhooks/alice",
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings
from django.db.models import Count, Sum

from core.services import BaseService, ServiceResult

from donations.adapters import CoinbaseCommerceAdapter, CreateChargeParams
from donations.exceptions import (
    CoinbaseError,
    DonationValidationError,
    DonationsNotEnabledError,
    RecipientNotFoundError,
)
from donations.models import Donation
from donations.state_machines import DonationStatus

if TYPE_CHECKING:
    from authentication.models import Profile
    from donations.stores import DonationStore


@dataclass
class StatusTotals:
    """Count and summed amount of the donations in one status."""

    count: int = 0
    total: Decimal = Decimal("0.00")


@dataclass
class DonationSummary:
    """
    Per-status totals for one recipient.

    Attributes:
        by_status: StatusTotals keyed by status value, every status present
        total_received: Sum of completed donations
    """

    by_status: dict[str, StatusTotals] = field(default_factory=dict)

    @property
    def total_received(self) -> Decimal:
        return self.by_status[DonationStatus.COMPLETED].total

    @property
    def count(self) -> int:
        return sum(totals.count for totals in self.by_status.values())


class DonationService(BaseService):
    """Tip page and dashboard business logic."""

    @classmethod
    def get_recipient(cls, username: str) -> ServiceResult[Profile]:
        """
        Resolve a tip page username to the recipient's profile.

        Tip page URLs are matched case-insensitively.
        """
        from authentication.models import Profile

        profile = (
            Profile.objects.select_related("user")
            .filter(username__iexact=username, user__is_active=True)
            .exclude(username="")
            .first()
        )
        if profile is None:
            return ServiceResult.from_exception(
                RecipientNotFoundError("User not found", details={"username": username})
            )
        return ServiceResult.success(profile)

    @classmethod
    def create_donation(
        cls,
        profile: Profile,
        *,
        donor_name: str,
        message: str,
        amount: Decimal,
        redirect_url: str = "",
        webhook_url: str = "",
    ) -> ServiceResult[Donation]:
        """
        Create a hosted charge for the recipient and record it as PENDING.

        Returns:
            ServiceResult with the new Donation on success.
            Failure codes:
                DONATIONS_NOT_ENABLED: the recipient has no API key
                DONATION_VALIDATION_ERROR: amount or name rejected
                COINBASE_*: the provider refused or could not be reached
        """
        logger = cls.get_logger()

        if not profile.accepts_donations:
            return ServiceResult.from_exception(
                DonationsNotEnabledError(
                    "This user has not set up donations yet",
                    details={"username": profile.username},
                )
            )

        currency = getattr(settings, "DONATIONS_DEFAULT_CURRENCY", "USD")
        try:
            params = CreateChargeParams(
                name=f"Donation from {donor_name}",
                description=message,
                amount=amount,
                currency=currency,
                redirect_url=redirect_url,
                webhook_url=webhook_url,
                metadata={"recipient": profile.username},
            )
        except ValueError as e:
            return ServiceResult.from_exception(DonationValidationError(str(e)))

        try:
            charge = CoinbaseCommerceAdapter.create_charge(profile.coinbase_commerce_key, params)
        except CoinbaseError as e:
            logger.warning(
                "Charge creation failed",
                extra={
                    "username": profile.username,
                    "error_code": e.error_code,
                    "retryable": e.is_retryable,
                },
            )
            return ServiceResult.from_exception(e)

        donation = Donation.objects.create(
            recipient_id=profile.user_id,
            charge_id=charge.id,
            hosted_url=charge.hosted_url,
            donor_name=donor_name,
            message=message,
            amount=params.amount,
            currency=currency,
            status=DonationStatus.PENDING,
        )

        logger.info(
            "Donation created",
            extra={
                "donation_id": str(donation.id),
                "charge_id": charge.id,
                "recipient_id": str(profile.user_id),
            },
        )
        return ServiceResult.success(donation)

    @classmethod
    def summarize(cls, donations: DonationStore) -> DonationSummary:
        """Count and sum the donations visible to ``donations`` by status."""
        summary = DonationSummary(
            by_status={status: StatusTotals() for status in DonationStatus.values}
        )

        rows = (
            donations.all()
            .order_by()
            .values("status")
            .annotate(count=Count("id"), total=Sum("amount"))
        )
        for row in rows:
            summary.by_status[row["status"]] = StatusTotals(
                count=row["count"],
                total=row["total"] or Decimal("0.00"),
            )
        return summary
