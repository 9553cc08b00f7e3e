"""
DRF serializers for the donations app.

This module provides serializers for:
- Public tip page (recipient info, donation form)
- Recipient dashboard (donation list, summary)

Related files:
    - models.py: Donation
    - views.py: Tip page and dashboard API views
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from donations.models import Donation


class TipPageSerializer(serializers.Serializer):
    """
    Public view of a recipient.

    Never exposes the recipient's email or payment settings.
    """

    username = serializers.CharField(read_only=True)
    accepting_donations = serializers.BooleanField(source="accepts_donations", read_only=True)


class CreateDonationSerializer(serializers.Serializer):
    """
    Donation form submitted by a donor.

    Fields:
        name: Donor name (max 100 chars)
        message: Message to the recipient (max 500 chars)
        amount: Amount with at most 2 decimals, at least DONATIONS_MIN_AMOUNT
    """

    name = serializers.CharField(max_length=100, trim_whitespace=True)
    message = serializers.CharField(max_length=500, trim_whitespace=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def validate_amount(self, value):
        minimum = Decimal(str(getattr(settings, "DONATIONS_MIN_AMOUNT", "1.00")))
        if value < minimum:
            raise serializers.ValidationError(f"Minimum donation is {minimum}.")
        return value


class DonationCreatedSerializer(serializers.ModelSerializer):
    """Response to a successful donation: where to send the donor."""

    class Meta:
        model = Donation
        fields = ["id", "charge_id", "hosted_url", "status"]
        read_only_fields = fields


class DonationSerializer(serializers.ModelSerializer):
    """Donation as shown on the recipient's dashboard."""

    class Meta:
        model = Donation
        fields = [
            "id",
            "charge_id",
            "donor_name",
            "message",
            "amount",
            "currency",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StatusTotalsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class DonationSummarySerializer(serializers.Serializer):
    """
    Serializes a DonationSummary.

    Output:
        {
            "count": 3,
            "total_received": "15.00",
            "by_status": {
                "pending": {"count": 1, "total": "5.00"},
                "completed": {"count": 2, "total": "15.00"},
                "failed": {"count": 0, "total": "0.00"}
            }
        }
    """

    count = serializers.IntegerField()
    total_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    by_status = serializers.DictField(child=StatusTotalsSerializer())
