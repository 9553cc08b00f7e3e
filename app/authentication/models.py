"""
Authentication models.

- User: Custom user model with email-based authentication
- Profile: Public recipient identity and payment settings (OneToOne with User)

A Profile with a username is a donation *recipient*: the username names
the public tip page and the webhook URL, the Coinbase Commerce key is
used to create charges, and the webhook secret authenticates the
provider's callbacks.

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: ProfileService business logic
    - signals.py: Auto-create profile on user creation

Security:
    - User passwords hashed with Django's PBKDF2
    - coinbase_commerce_key and webhook_secret are write-only in the API
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models.functions import Lower

from core.models import BaseModel
from core.model_mixins import UUIDPrimaryKeyMixin
from authentication.managers import UserManager


# Usernames that collide with routes or look official
RESERVED_USERNAMES = frozenset([
    "admin", "administrator", "root", "system", "api", "www",
    "mail", "email", "support", "help", "info", "contact",
    "about", "terms", "privacy", "security", "account", "login",
    "logout", "register", "signup", "signin", "signout", "auth",
    "authentication", "user", "users", "profile", "profiles",
    "settings", "config", "dashboard", "home", "index", "null",
    "undefined", "anonymous", "guest", "test", "demo", "example",
    "official", "verified", "staff", "mod", "moderator", "bot",
    "tip", "tips", "donate", "donation", "donations", "webhook",
    "webhooks", "success", "stream", "health",
])

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{3,30}$")


def validate_username_not_reserved(value):
    """Validate that username is not in the reserved list."""
    if value.lower() in RESERVED_USERNAMES:
        raise ValidationError(
            f"The username '{value}' is reserved and cannot be used."
        )


def validate_username_format(value):
    """Validate username format: 3-30 chars, alphanumeric + _ + -."""
    if not USERNAME_PATTERN.match(value):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Slim, auth-focused model. Recipient data lives on Profile.

    Usage:
        user = User.objects.create_user(
            email='creator@example.com',
            password='securepassword'
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def has_completed_profile(self):
        """Check if user has claimed a username."""
        try:
            return bool(self.profile.username)
        except Profile.DoesNotExist:
            return False


class Profile(BaseModel):
    """
    Recipient profile.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        username: Public handle for the tip page and webhook URL
        coinbase_commerce_key: Coinbase Commerce API key used to create charges
        webhook_secret: Shared secret from the Coinbase Commerce webhook settings

    Note:
        Profile is automatically created via signals when a User is created.
        A profile with a blank webhook_secret cannot receive webhook updates.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )

    username = models.CharField(
        max_length=30,
        blank=True,
        db_index=True,
        validators=[validate_username_format, validate_username_not_reserved],
        help_text="Unique username (3-30 chars, alphanumeric + _ + -)",
    )

    coinbase_commerce_key = models.CharField(
        max_length=255,
        blank=True,
        help_text="Coinbase Commerce API key used to create charges",
    )

    webhook_secret = models.CharField(
        max_length=255,
        blank=True,
        help_text="Shared secret used to verify Coinbase Commerce webhooks",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"
        constraints = [
            # Case-insensitive unique constraint for username
            models.UniqueConstraint(
                Lower("username"),
                name="unique_username_case_insensitive",
                condition=models.Q(username__gt=""),
            ),
        ]

    def __str__(self):
        return self.username or str(self.user)

    @property
    def accepts_donations(self) -> bool:
        """Whether donors can start a charge for this recipient."""
        return bool(self.username and self.coinbase_commerce_key)

    @property
    def receives_webhooks(self) -> bool:
        """Whether provider callbacks can be authenticated for this recipient."""
        return bool(self.username and self.webhook_secret)

    def clean(self):
        super().clean()
        if self.username:
            self.username = self.username.lower()

    def save(self, *args, **kwargs):
        """Normalize username before saving."""
        if self.username:
            self.username = self.username.lower()
        super().save(*args, **kwargs)
