"""
Serializers for recipient profiles.

Secrets (Coinbase Commerce key, webhook secret) are write-only: reads
expose only whether they are configured and a masked key preview.
"""

from django.urls import reverse
from rest_framework import serializers

from authentication.models import Profile
from authentication.services import ProfileService
from core.helpers import mask_secret


class ProfileSerializer(serializers.ModelSerializer):
    """
    Serializer for Profile model (read operations).

    ``tip_url`` and ``webhook_url`` are absolute when a request is in the
    serializer context, so the dashboard can show the URL to paste into
    the Coinbase Commerce webhook settings.
    """

    user_id = serializers.UUIDField(source="user.id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    has_coinbase_commerce_key = serializers.SerializerMethodField()
    coinbase_commerce_key_preview = serializers.SerializerMethodField()
    has_webhook_secret = serializers.SerializerMethodField()
    is_complete = serializers.SerializerMethodField()
    tip_url = serializers.SerializerMethodField()
    webhook_url = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            "user_id",
            "email",
            "username",
            "has_coinbase_commerce_key",
            "coinbase_commerce_key_preview",
            "has_webhook_secret",
            "is_complete",
            "tip_url",
            "webhook_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_has_coinbase_commerce_key(self, obj):
        return bool(obj.coinbase_commerce_key)

    def get_coinbase_commerce_key_preview(self, obj):
        return mask_secret(obj.coinbase_commerce_key)

    def get_has_webhook_secret(self, obj):
        return bool(obj.webhook_secret)

    def get_is_complete(self, obj):
        """Whether the username is set."""
        return bool(obj.username)

    def get_tip_url(self, obj):
        if not obj.username:
            return None
        return self._absolute(reverse("donations:tip-page", args=[obj.username]))

    def get_webhook_url(self, obj):
        if not obj.username:
            return None
        return self._absolute(reverse("webhooks:coinbase-webhook", args=[obj.username]))

    def _absolute(self, path):
        request = self.context.get("request")
        if request:
            return request.build_absolute_uri(path)
        return path


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Serializer for updating a recipient profile.

    - If the profile has no username yet, username is REQUIRED
    - Secrets are optional; an empty string clears the stored value
    """

    username = serializers.CharField(
        min_length=3,
        max_length=30,
        required=False,
        help_text="Unique username (3-30 chars, alphanumeric + _ + -)",
    )
    coinbase_commerce_key = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        write_only=True,
        trim_whitespace=True,
    )
    webhook_secret = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        write_only=True,
        trim_whitespace=True,
    )

    def __init__(self, *args, **kwargs):
        """Make username required if the profile doesn't have one set."""
        super().__init__(*args, **kwargs)
        if self.instance and not self.instance.username:
            self.fields["username"].required = True

    def validate(self, attrs):
        # Partial updates skip required checks for missing fields
        if self.instance and not self.instance.username and "username" not in attrs:
            raise serializers.ValidationError(
                {"username": "Username is required to complete your profile."}
            )
        return super().validate(attrs)

    def validate_username(self, value):
        """Validate username format, uniqueness, and reserved names."""
        user = self.context.get("user")
        is_valid, message = ProfileService.validate_username(value, exclude_user=user)
        if not is_valid:
            raise serializers.ValidationError(message)
        return value.lower().strip()

    def update(self, instance, validated_data):
        user = instance.user

        if "username" in validated_data and validated_data["username"] != instance.username:
            result = ProfileService.claim_username(user, validated_data["username"])
            if not result:
                raise serializers.ValidationError(result.errors or {"username": [result.error]})
            instance = result.data

        if "coinbase_commerce_key" in validated_data or "webhook_secret" in validated_data:
            result = ProfileService.update_payment_settings(
                user,
                coinbase_commerce_key=validated_data.get("coinbase_commerce_key"),
                webhook_secret=validated_data.get("webhook_secret"),
            )
            instance = result.data

        return instance
