"""
Donation-specific exceptions.

Exception Hierarchy:
    DonationError (base for donation domain)
    ├── DonationNotFoundError - Donation lookup failures
    ├── DonationValidationError - Invalid donation input
    ├── RecipientNotFoundError - Unknown tip page username
    └── DonationsNotEnabledError - Recipient has no Coinbase Commerce key

    CoinbaseError (base for all Coinbase Commerce errors)
    ├── CoinbaseAuthenticationError - Rejected API key (permanent)
    ├── CoinbaseInvalidRequestError - Rejected charge parameters (permanent)
    └── CoinbaseAPIUnavailableError - Network or server error (transient, retry)

Usage:
    from donations.exceptions import CoinbaseError, DonationsNotEnabledError

    try:
        charge = CoinbaseCommerceAdapter.create_charge(api_key, params)
    except CoinbaseError as e:
        return Response(e.to_dict(), status=502)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Donation Domain Exceptions
# =============================================================================


class DonationError(BaseApplicationError):
    """Base exception for all donation operations."""

    default_error_code: str = "DONATION_ERROR"


class DonationNotFoundError(DonationError, NotFoundError):
    """
    Raised when no donation matches a (charge_id, recipient) pair.

    Example:
        raise DonationNotFoundError(
            "Donation not found",
            details={"charge_id": charge_id},
        )
    """

    default_error_code: str = "DONATION_NOT_FOUND"


class DonationValidationError(DonationError, ValidationError):
    """Raised when donor input fails service-level validation."""

    default_error_code: str = "DONATION_VALIDATION_ERROR"


class RecipientNotFoundError(DonationError, NotFoundError):
    """Raised when a tip page username has no matching profile."""

    default_error_code: str = "RECIPIENT_NOT_FOUND"


class DonationsNotEnabledError(DonationError):
    """
    Raised when a recipient exists but cannot accept donations.

    The recipient has not stored a Coinbase Commerce API key yet.
    """

    default_error_code: str = "DONATIONS_NOT_ENABLED"


# =============================================================================
# Coinbase Commerce Exceptions
# =============================================================================


class CoinbaseError(ExternalServiceError):
    """
    Base exception for all Coinbase Commerce errors.

    Attributes:
        status_code: HTTP status returned by the API (None for network errors)
        is_retryable: Whether the operation can be retried

    Note:
        The recipient's API key is never included in message or details.
    """

    default_error_code: str = "COINBASE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, error_code=error_code, details=details)
        self.status_code = status_code


class CoinbaseAuthenticationError(CoinbaseError):
    """
    Coinbase Commerce rejected the API key (401/403).

    Permanent until the recipient stores a valid key.
    """

    default_error_code: str = "COINBASE_AUTHENTICATION_FAILED"
    is_retryable: bool = False


class CoinbaseInvalidRequestError(CoinbaseError):
    """
    Coinbase Commerce rejected the charge parameters (other 4xx).

    Permanent: the same request will never succeed.
    """

    default_error_code: str = "COINBASE_INVALID_REQUEST"
    is_retryable: bool = False


class CoinbaseAPIUnavailableError(CoinbaseError):
    """
    Coinbase Commerce is unreachable or returned a 5xx.

    Covers timeouts, connection errors and unparseable responses.
    """

    default_error_code: str = "COINBASE_UNAVAILABLE"
    is_retryable: bool = True
