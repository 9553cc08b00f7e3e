"""
Profile services.

ProfileService owns the recipient side of a profile: claiming a
username and storing the Coinbase Commerce credentials.

Related files:
    - models.py: User, Profile
    - serializers.py: ProfileUpdateSerializer delegates here
    - signals.py: Profile auto-creation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from authentication.models import Profile, User


class ProfileService(BaseService):
    """
    Recipient profile business logic.

    Usage:
        from authentication.services import ProfileService

        profile = ProfileService.get_or_create_profile(user)

        result = ProfileService.claim_username(user, "alice")
        if not result:
            return Response(result.to_response(), status=400)

        ProfileService.update_payment_settings(
            user, coinbase_commerce_key="...", webhook_secret="..."
        )
    """

    @classmethod
    def get_or_create_profile(cls, user: User) -> Profile:
        """Return the user's profile, creating it if the signal never ran."""
        from authentication.models import Profile

        profile, created = Profile.objects.get_or_create(user=user)
        if created:
            cls.get_logger().debug("Profile created", extra={"user_id": user.pk})
        return profile

    @staticmethod
    def validate_username(username: str, exclude_user: User | None = None) -> tuple[bool, str]:
        """
        Validate a username for format, reserved names, and uniqueness.

        Args:
            username: The username to validate
            exclude_user: User to exclude from the uniqueness check

        Returns:
            Tuple of (is_valid, message)
        """
        from authentication.models import (
            RESERVED_USERNAMES,
            USERNAME_PATTERN,
            Profile,
        )

        username = username.lower().strip()

        if not USERNAME_PATTERN.match(username):
            return False, (
                "Username must be 3-30 characters and contain only "
                "letters, numbers, underscores, and hyphens."
            )

        if username in RESERVED_USERNAMES:
            return False, f"The username '{username}' is reserved."

        existing = Profile.objects.filter(username__iexact=username)
        if exclude_user is not None:
            existing = existing.exclude(user=exclude_user)
        if existing.exists():
            return False, "This username is already taken."

        return True, "Username is available."

    @classmethod
    def claim_username(cls, user: User, username: str) -> ServiceResult[Profile]:
        """
        Set or change the user's public username.

        Changing the username changes the tip page and webhook URLs; the
        caller is expected to update the webhook URL at the provider.
        """
        is_valid, message = cls.validate_username(username, exclude_user=user)
        if not is_valid:
            return ServiceResult.failure(
                message,
                error_code="INVALID_USERNAME",
                errors={"username": [message]},
            )

        profile = cls.get_or_create_profile(user)
        profile.username = username.strip()
        try:
            with cls.atomic():
                profile.save(update_fields=["username", "updated_at"])
        except IntegrityError:
            # Lost a race against another claim of the same name
            return ServiceResult.failure(
                "This username is already taken.",
                error_code="INVALID_USERNAME",
                errors={"username": ["This username is already taken."]},
            )

        cls.get_logger().info(
            "Username claimed",
            extra={"user_id": user.pk, "username": profile.username},
        )
        return ServiceResult.success(profile)

    @classmethod
    def update_payment_settings(
        cls,
        user: User,
        *,
        coinbase_commerce_key: str | None = None,
        webhook_secret: str | None = None,
    ) -> ServiceResult[Profile]:
        """
        Store the Coinbase Commerce API key and/or webhook shared secret.

        ``None`` leaves a value unchanged; an empty string clears it.
        Clearing the webhook secret stops webhook updates for this
        recipient.
        """
        profile = cls.get_or_create_profile(user)
        update_fields = []

        if coinbase_commerce_key is not None:
            profile.coinbase_commerce_key = coinbase_commerce_key.strip()
            update_fields.append("coinbase_commerce_key")
        if webhook_secret is not None:
            profile.webhook_secret = webhook_secret.strip()
            update_fields.append("webhook_secret")

        if update_fields:
            profile.save(update_fields=[*update_fields, "updated_at"])
            # Field names only; values are secrets
            cls.get_logger().info(
                "Payment settings updated",
                extra={"user_id": user.pk, "fields": update_fields},
            )

        return ServiceResult.success(profile)
