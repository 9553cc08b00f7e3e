"""
Donations app configuration.
"""

from django.apps import AppConfig


class DonationsConfig(AppConfig):
    """Configuration for the donations application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "donations"
    verbose_name = "Donations"
