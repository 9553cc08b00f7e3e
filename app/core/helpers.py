"""
Helper functions for common infrastructure operations.

- Secret masking for display
- HTTP request helpers (client IP extraction)

These utilities have no knowledge of donations or recipients.

Usage:
    from core.helpers import get_client_ip, mask_secret
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.http import HttpRequest


def mask_secret(value: str | None, visible: int = 4) -> str:
    """
    Mask a secret for display, keeping only the last ``visible`` characters.

    Short values are masked entirely so nothing useful leaks.

    Example:
        mask_secret("abcd-1234-efgh")  # "••••••••••efgh"
    """
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "•" * len(value)
    return "•" * (len(value) - visible) + value[-visible:]


def get_client_ip(request: HttpRequest) -> str:
    """
    Extract client IP from request, handling proxies.

    Checks X-Forwarded-For header for proxy chains.
    """
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        # First entry is the original client
        ip = x_forwarded_for.split(",")[0].strip()
    else:
        ip = request.META.get("REMOTE_ADDR", "")
    return ip
