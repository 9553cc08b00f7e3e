"""
Coinbase Commerce API adapter.

This module provides the CoinbaseCommerceAdapter class which wraps the
Commerce REST API. Every Commerce call goes through this adapter so
timeouts, error translation and logging stay consistent.

Each recipient brings their own API key; the adapter never reads a key
from settings and never logs one.

Configuration (via settings):
- COINBASE_COMMERCE_API_URL: API base URL
- COINBASE_COMMERCE_API_VERSION: Value of the X-CC-Version header
- COINBASE_API_TIMEOUT_SECONDS: Request timeout (default: 10)

Usage:
    from donations.adapters import CoinbaseCommerceAdapter, CreateChargeParams

    charge = CoinbaseCommerceAdapter.create_charge(
        profile.coinbase_commerce_key,
        CreateChargeParams(
            name="Donation from Bob",
            description="Great stream!",
            amount=Decimal("5.00"),
            currency="USD",
            redirect_url="https://tips.example.com/success",
            webhook_url="https://tips.example.com/webhooks/alice",
        ),
    )
    charge.id, charge.hosted_url
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import requests
from django.conf import settings

from donations.exceptions import (
    CoinbaseAPIUnavailableError,
    CoinbaseAuthenticationError,
    CoinbaseError,
    CoinbaseInvalidRequestError,
)

DEFAULT_API_URL = "https://api.commerce.coinbase.com"
DEFAULT_API_VERSION = "2018-03-22"
DEFAULT_TIMEOUT_SECONDS = 10

API_KEY_HEADER = "X-CC-Api-Key"
API_VERSION_HEADER = "X-CC-Version"


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreateChargeParams:
    """
    Parameters for creating a fixed-price Coinbase Commerce charge.

    Attributes:
        name: Charge name shown on the hosted checkout
        description: Charge description (the donor's message)
        amount: Price in major currency units
        currency: ISO 4217 currency code of the local price
        redirect_url: Where the donor lands after paying
        webhook_url: Recipient webhook endpoint for this charge
        metadata: Key-value pairs attached to the charge
    """

    name: str
    description: str
    amount: Decimal
    currency: str = "USD"
    redirect_url: str = ""
    webhook_url: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("name is required")
        if not isinstance(self.amount, Decimal):
            self.amount = Decimal(str(self.amount))
        if self.amount <= 0:
            raise ValueError("amount must be positive")
        if not self.currency:
            raise ValueError("currency is required")

    def to_payload(self) -> dict[str, Any]:
        """Request body for POST /charges."""
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "pricing_type": "fixed_price",
            "local_price": {
                "amount": str(self.amount.quantize(Decimal("0.01"))),
                "currency": self.currency.upper(),
            },
        }
        if self.redirect_url:
            payload["redirect_url"] = self.redirect_url
        if self.webhook_url:
            payload["webhook_url"] = self.webhook_url
        if self.metadata:
            payload["metadata"] = self.metadata
        return payload


@dataclass
class ChargeResult:
    """
    Result from charge creation.

    Attributes:
        id: Charge id, the key webhook events refer back to
        code: Short charge code shown to the donor
        hosted_url: Hosted checkout page the donor is redirected to
        raw_response: Full ``data`` object returned by the API
    """

    id: str
    hosted_url: str
    code: str = ""
    raw_response: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Adapter
# =============================================================================


class CoinbaseCommerceAdapter:
    """
    Adapter for Coinbase Commerce API operations.

    All methods are classmethods - no instance state is maintained.
    """

    @staticmethod
    def _api_url(path: str) -> str:
        base = getattr(settings, "COINBASE_COMMERCE_API_URL", DEFAULT_API_URL)
        return f"{base.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def _headers(api_key: str) -> dict[str, str]:
        return {
            API_KEY_HEADER: api_key,
            API_VERSION_HEADER: getattr(
                settings, "COINBASE_COMMERCE_API_VERSION", DEFAULT_API_VERSION
            ),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Core Operations
    # =========================================================================

    @classmethod
    def create_charge(cls, api_key: str, params: CreateChargeParams) -> ChargeResult:
        """
        Create a hosted charge.

        Args:
            api_key: The recipient's Coinbase Commerce API key
            params: Charge parameters

        Returns:
            ChargeResult with the charge id and hosted checkout URL

        Raises:
            CoinbaseAuthenticationError: API key rejected (401/403)
            CoinbaseInvalidRequestError: Parameters rejected (other 4xx)
            CoinbaseAPIUnavailableError: Network failure, timeout, 5xx or
                an unreadable response
        """
        if not api_key:
            raise CoinbaseAuthenticationError("Coinbase Commerce API key is not configured")

        logger = cls.get_logger()
        log_context = {
            "operation": "create_charge",
            "amount": str(params.amount),
            "currency": params.currency,
        }
        timeout = getattr(settings, "COINBASE_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)

        start_time = time.time()
        logger.info("Starting Coinbase Commerce operation", extra=log_context)

        try:
            response = requests.post(
                cls._api_url("charges"),
                json=params.to_payload(),
                headers=cls._headers(api_key),
                timeout=timeout,
            )
        except requests.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_request_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        if response.status_code >= 400:
            cls._handle_error_response(response, log_context, duration_ms)

        charge = cls._parse_charge(response, log_context)
        logger.info(
            "Coinbase Commerce operation completed",
            extra={
                **log_context,
                "charge_id": charge.id,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return charge

    # =========================================================================
    # Error Translation
    # =========================================================================

    @classmethod
    def _parse_charge(cls, response: requests.Response, log_context: dict[str, Any]) -> ChargeResult:
        """Extract the charge from a 2xx response body."""
        try:
            data = response.json()["data"]
            return ChargeResult(
                id=data["id"],
                hosted_url=data["hosted_url"],
                code=data.get("code", ""),
                raw_response=data,
            )
        except (ValueError, KeyError, TypeError):
            cls.get_logger().error(
                "Unreadable charge response from Coinbase Commerce",
                extra={**log_context, "status_code": response.status_code},
                exc_info=True,
            )
            raise CoinbaseAPIUnavailableError(
                "Coinbase Commerce returned an unexpected response",
                status_code=response.status_code,
            )

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Provider's ``error.message`` when the body carries one."""
        try:
            error = response.json().get("error") or {}
            message = error.get("message")
        except (ValueError, AttributeError):
            message = None
        return message or f"Coinbase Commerce returned HTTP {response.status_code}"

    @classmethod
    def _handle_error_response(
        cls,
        response: requests.Response,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate a 4xx/5xx response to a domain exception.

        Raises:
            CoinbaseAuthenticationError: 401/403
            CoinbaseInvalidRequestError: other 4xx
            CoinbaseAPIUnavailableError: 5xx
        """
        logger = cls.get_logger()
        status_code = response.status_code
        message = cls._error_message(response)
        log_context = {**log_context, "status_code": status_code, "duration_ms": duration_ms}

        if status_code in (401, 403):
            logger.warning("Coinbase Commerce rejected the API key", extra=log_context)
            raise CoinbaseAuthenticationError(message, status_code=status_code)

        if status_code < 500:
            logger.error(
                "Invalid request to Coinbase Commerce",
                extra={**log_context, "provider_message": message},
            )
            raise CoinbaseInvalidRequestError(message, status_code=status_code)

        logger.error("Coinbase Commerce server error", extra=log_context)
        raise CoinbaseAPIUnavailableError(
            "Coinbase Commerce is unavailable. Please retry.",
            status_code=status_code,
        )

    @classmethod
    def _handle_request_error(
        cls,
        error: requests.RequestException,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """Translate a transport-level failure to a domain exception."""
        logger = cls.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, requests.Timeout):
            logger.error("Coinbase Commerce request timed out", extra=log_context)
            raise CoinbaseAPIUnavailableError(
                "Coinbase Commerce request timed out. Please retry.",
                error_code="COINBASE_TIMEOUT",
            )

        logger.error(
            f"Connection error to Coinbase Commerce: {type(error).__name__}",
            extra=log_context,
            exc_info=True,
        )
        raise CoinbaseAPIUnavailableError(
            "Could not connect to Coinbase Commerce. Please retry.",
        )


def is_retryable_coinbase_error(error: Exception) -> bool:
    """
    Check whether an error from the adapter is worth retrying.

    Example:
        except CoinbaseError as e:
            if is_retryable_coinbase_error(e):
                ...
    """
    return isinstance(error, CoinbaseError) and error.is_retryable
