"""
URL configuration for Coinbase Commerce webhooks.

URL structure:
    /webhooks/<username>    - Charge events for one recipient (POST)

The trailing slash is optional so the URL registered at the provider
works either way.
"""

from django.urls import re_path

from donations.webhooks.views import CoinbaseWebhookView

app_name = "webhooks"

urlpatterns = [
    re_path(
        r"^(?P<username>[^/]+)/?$",
        CoinbaseWebhookView.as_view(),
        name="coinbase-webhook",
    ),
]
