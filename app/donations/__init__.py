"""
Donations application.

Tips from donors to recipients, paid through Coinbase Commerce.

Key components:
    - Donation model: one charge towards one recipient, with FSM status
    - CoinbaseCommerceAdapter: charge creation against the Commerce API
    - DonationService: tip page lookup, charge + donation creation, summaries
    - DonationReconciler: applies webhook statuses to stored donations
    - webhooks: signature verification and the per-recipient webhook endpoint

Usage:
    from donations.models import Donation
    from donations.services import DonationReconciler, DonationService
"""
