"""
Donation admin configuration.

Donations are created by the tip page and updated by webhooks. The admin
allows manual reconciliation of pending donations (e.g. a missed webhook)
through the model's FSM transitions.
"""

import logging

from django.contrib import admin, messages

from django_fsm import TransitionNotAllowed

from donations.models import Donation
from donations.state_machines import DonationStatus

logger = logging.getLogger(__name__)


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    """Admin configuration for Donation."""

    list_display = [
        "charge_id",
        "recipient",
        "donor_name",
        "amount",
        "currency",
        "status",
        "created_at",
    ]
    list_filter = ["status", "currency", "created_at"]
    search_fields = ["charge_id", "donor_name", "recipient__email", "recipient__profile__username"]
    readonly_fields = ["id", "status", "created_at", "updated_at"]
    raw_id_fields = ["recipient"]
    ordering = ["-created_at"]
    actions = ["mark_completed", "mark_failed"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "recipient", "charge_id", "hosted_url", "status"),
            },
        ),
        (
            "Donor",
            {
                "fields": ("donor_name", "message", "amount", "currency"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.action(description="Mark as completed")
    def mark_completed(self, request, queryset):
        self._apply_transition(request, queryset, "mark_completed")

    @admin.action(description="Mark as failed")
    def mark_failed(self, request, queryset):
        self._apply_transition(request, queryset, "mark_failed")

    def _apply_transition(self, request, queryset, transition_name):
        """Run ``transition_name`` on each pending donation in ``queryset``."""
        changed = 0
        skipped = 0
        for donation in queryset:
            try:
                getattr(donation, transition_name)()
            except TransitionNotAllowed:
                skipped += 1
                continue
            donation.save(update_fields=["status", "updated_at"])
            changed += 1
            logger.info(
                "Donation status changed in admin",
                extra={
                    "donation_id": str(donation.id),
                    "status": donation.status,
                    "admin_user_id": str(request.user.pk),
                },
            )

        self.message_user(request, f"Updated {changed} donation(s).")
        if skipped:
            self.message_user(
                request,
                f"Skipped {skipped} donation(s) not in {DonationStatus.PENDING.label.lower()} state.",
                level=messages.WARNING,
            )
