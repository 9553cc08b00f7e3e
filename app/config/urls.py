"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /admin/                              - Django admin interface
    /health/                             - Health check endpoint (load balancers, Docker)
    /webhooks/<username>                 - Coinbase Commerce webhook (POST)
    /api/v1/auth/                        - Authentication endpoints
        profile/                         - Recipient profile (GET/PUT/PATCH)
        token/                           - Obtain JWT pair
        token/refresh/                   - Refresh access token
    /api/v1/tip/<username>/              - Public tip page info (GET)
    /api/v1/tip/<username>/donations/    - Create donation (POST)
    /api/v1/donations/                   - Recipient's donations (GET)
    /api/v1/donations/summary/           - Totals per status (GET)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication and recipient profile
    path("auth/", include("authentication.urls")),
    # Tip page and dashboard
    path("", include("donations.urls")),
]

urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # Provider webhooks (registered at Coinbase Commerce per recipient)
    path("webhooks/", include("donations.webhooks.urls")),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Tip Jar Admin"
admin.site.site_title = "Tip Jar Admin"
admin.site.index_title = "Donations and recipients"
