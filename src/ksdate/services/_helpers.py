"""Shared service-layer helper functions."""

from __future__ import annotations

import hashlib
import hmac

_MAC_LENGTH = 20


def sign_nonce(secret: str, action: str, expires: int) -> str:
    """Signed, expiring token ``"<expires>-<mac>"`` bound to *action*.

    *expires* is a Unix timestamp; the MAC is a truncated HMAC-SHA256 over
    the action and the expiry.
    """
    message = f"{action}|{expires}".encode()
    mac = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()
    return f"{expires}-{mac[:_MAC_LENGTH]}"


def verify_nonce(secret: str, action: str, nonce: str, now: int) -> bool:
    """Check a token from :func:`sign_nonce` against *secret* at time *now*."""
    expires_text, sep, _mac = nonce.partition("-")
    if not sep or not (expires_text.isascii() and expires_text.isdigit()):
        return False
    expires = int(expires_text)
    if expires < now:
        return False
    expected = sign_nonce(secret, action, expires)
    return hmac.compare_digest(expected.encode(), nonce.encode("utf-8"))
