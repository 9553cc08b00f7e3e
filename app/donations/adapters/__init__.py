"""
Adapters for external services.

All Coinbase Commerce API calls go through CoinbaseCommerceAdapter.

Usage:
    from donations.adapters import CoinbaseCommerceAdapter, CreateChargeParams
"""

from donations.adapters.coinbase_adapter import (
    ChargeResult,
    CoinbaseCommerceAdapter,
    CreateChargeParams,
    is_retryable_coinbase_error,
)

__all__ = [
    "ChargeResult",
    "CoinbaseCommerceAdapter",
    "CreateChargeParams",
    "is_retryable_coinbase_error",
]
