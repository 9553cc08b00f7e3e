"""
Django admin configuration for authentication models.

Secrets on Profile are editable in the detail view but never shown in
list views.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import Profile, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the email-based User model."""

    list_display = (
        "email",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "date_joined",
    )
    search_fields = ("email",)
    ordering = ("-date_joined",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin configuration for recipient profiles."""

    list_display = (
        "user",
        "username",
        "accepts_donations",
        "receives_webhooks",
        "created_at",
    )
    list_filter = ("created_at",)
    search_fields = ("user__email", "username")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "User",
            {"fields": ("user",)},
        ),
        (
            "Recipient",
            {"fields": ("username",)},
        ),
        (
            "Coinbase Commerce",
            {"fields": ("coinbase_commerce_key", "webhook_secret")},
        ),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at")},
        ),
    )

    @admin.display(boolean=True, description="Accepts donations")
    def accepts_donations(self, obj):
        return obj.accepts_donations

    @admin.display(boolean=True, description="Receives webhooks")
    def receives_webhooks(self, obj):
        return obj.receives_webhooks
