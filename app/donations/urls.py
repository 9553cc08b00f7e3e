"""
URL configuration for donations app.

URL structure:
    /api/v1/tip/<username>/               - Public tip page info (GET)
    /api/v1/tip/<username>/donations/     - Create donation (POST)
    /api/v1/donations/                    - Recipient's donations (GET)
    /api/v1/donations/summary/            - Totals per status (GET)

Webhooks are mounted separately at /webhooks/ (see webhooks/urls.py).
"""

from django.urls import path

from donations.views import (
    CreateDonationView,
    DonationListView,
    DonationSummaryView,
    TipPageView,
)

app_name = "donations"

urlpatterns = [
    path("tip/<str:username>/", TipPageView.as_view(), name="tip-page"),
    path(
        "tip/<str:username>/donations/",
        CreateDonationView.as_view(),
        name="create-donation",
    ),
    path("donations/", DonationListView.as_view(), name="donation-list"),
    path("donations/summary/", DonationSummaryView.as_view(), name="donation-summary"),
]
