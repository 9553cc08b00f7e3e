"""
Coinbase Commerce webhook signature verification.

Coinbase Commerce signs every webhook with HMAC-SHA256 over the raw
request body, keyed with the shared secret from the recipient's webhook
settings, and sends the lowercase hex digest in the
``X-CC-Webhook-Signature`` header.

The body must be verified exactly as received. Re-serializing parsed
JSON changes whitespace and key order and breaks the digest.

Usage:
    from donations.webhooks.signature import SIGNATURE_HEADER, verify_signature

    signature = request.headers.get(SIGNATURE_HEADER)
    if not verify_signature(request.body, signature, recipient.webhook_secret):
        return HttpResponse("Invalid signature", status=401)
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "X-CC-Webhook-Signature"


def compute_signature(raw_body: bytes, secret: str) -> str:
    """
    Return the lowercase hex HMAC-SHA256 of ``raw_body`` keyed by ``secret``.

    Example:
        compute_signature(b'{"event": {}}', "whsec")
    """
    return hmac.new(
        secret.encode("utf-8"),
        raw_body,
        hashlib.sha256,
    ).hexdigest()


def verify_signature(
    raw_body: bytes,
    provided_signature: str | None,
    secret: str | None,
) -> bool:
    """
    Verify a Coinbase Commerce webhook signature.

    The comparison is exact: case-sensitive, no trimming, no prefix
    matching. A missing signature or secret is a failed verification,
    never an error.

    Args:
        raw_body: Request body bytes as received
        provided_signature: Value of the signature header
        secret: Recipient's webhook shared secret

    Returns:
        True if the signature matches
    """
    if not provided_signature or not secret:
        return False

    expected = compute_signature(raw_body, secret)
    # Bytes on both sides; compare_digest rejects non-ASCII str
    return hmac.compare_digest(
        expected.encode("ascii"),
        provided_signature.encode("utf-8"),
    )
