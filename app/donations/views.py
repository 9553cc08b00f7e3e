"""
Donation API views.

Public (no authentication):
    - TipPageView: recipient info for the tip page
    - CreateDonationView: start a Coinbase Commerce checkout

Recipient dashboard (authenticated):
    - DonationListView: the caller's donations, newest first
    - DonationSummaryView: counts and totals per status

Related files:
    - services/donation_service.py: DonationService
    - stores.py: DonationStore scoping
    - webhooks/: status updates from Coinbase Commerce
"""

import logging

from django.conf import settings
from django.urls import reverse
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from donations.serializers import (
    CreateDonationSerializer,
    DonationCreatedSerializer,
    DonationSerializer,
    DonationSummarySerializer,
    TipPageSerializer,
)
from donations.services import DonationService
from donations.state_machines import DonationStatus
from donations.stores import DonationStore

logger = logging.getLogger(__name__)

# error_code -> HTTP status for donation creation failures
CREATE_ERROR_STATUS = {
    "RECIPIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DONATIONS_NOT_ENABLED": status.HTTP_400_BAD_REQUEST,
    "DONATION_VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
}


class TipPageView(APIView):
    """
    Public recipient info for the tip page.

    GET: {username, accepting_donations}

    URL: /api/v1/tip/<username>/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, username):
        result = DonationService.get_recipient(username)
        if not result:
            return Response(result.to_response(), status=status.HTTP_404_NOT_FOUND)
        return Response(TipPageSerializer(result.data).data)


class CreateDonationView(APIView):
    """
    Create a donation and its hosted Coinbase Commerce charge.

    POST: Create a charge and a pending donation

    URL: /api/v1/tip/<username>/donations/

    Request body:
        {
            "name": "Bob",
            "message": "Great stream!",
            "amount": "5.00"
        }

    Returns:
        201: {id, charge_id, hosted_url, status}; redirect the donor to hosted_url
        400: Invalid input, or recipient has not enabled donations
        404: Unknown recipient
        502: Coinbase Commerce refused the charge or is unavailable
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, username):
        recipient = DonationService.get_recipient(username)
        if not recipient:
            return Response(recipient.to_response(), status=status.HTTP_404_NOT_FOUND)

        serializer = CreateDonationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = recipient.data
        result = DonationService.create_donation(
            profile,
            donor_name=serializer.validated_data["name"],
            message=serializer.validated_data["message"],
            amount=serializer.validated_data["amount"],
            redirect_url=self.get_redirect_url(request),
            webhook_url=request.build_absolute_uri(
                reverse("webhooks:coinbase-webhook", args=[profile.username])
            ),
        )

        if not result:
            http_status = CREATE_ERROR_STATUS.get(
                result.error_code, status.HTTP_502_BAD_GATEWAY
            )
            return Response(
                {"error": result.error, "error_code": result.error_code},
                status=http_status,
            )

        return Response(
            DonationCreatedSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    def get_redirect_url(self, request):
        """DONATIONS_SUCCESS_URL, or /success on the requesting host."""
        return getattr(settings, "DONATIONS_SUCCESS_URL", "") or request.build_absolute_uri("/success")


class DonationListView(generics.ListAPIView):
    """
    Donations received by the current user.

    GET: Paginated list, newest first

    URL: /api/v1/donations/?status=completed
    """

    serializer_class = DonationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = DonationStore.for_recipient(self.request.user).all()

        status_filter = self.request.query_params.get("status")
        if status_filter:
            if status_filter not in DonationStatus.values:
                raise ValidationError(
                    {"status": [f"Must be one of: {', '.join(DonationStatus.values)}."]}
                )
            queryset = queryset.filter(status=status_filter)
        return queryset


class DonationSummaryView(APIView):
    """
    Donation counts and totals grouped by status.

    URL: /api/v1/donations/summary/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        summary = DonationService.summarize(DonationStore.for_recipient(request.user))
        return Response(DonationSummarySerializer(summary).data)
