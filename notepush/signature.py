"""LINE webhook signature checks."""

from __future__ import annotations

import base64
import hashlib
import hmac

SIGNATURE_HEADER = "x-line-signature"


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Return the base64 HMAC-SHA256 of ``raw_body`` keyed with ``secret``."""

    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(raw_body: bytes, signature: str | None, secret: str) -> bool:
    """Check a signature header against the raw request body.

    Never raises: a missing, malformed or mismatching header is simply ``False``.
    The body must be the exact bytes received, before any JSON parsing.
    """

    if not signature:
        return False
    try:
        provided = signature.encode("ascii")
    except UnicodeEncodeError:
        return False
    expected = compute_signature(raw_body, secret).encode("ascii")
    if len(expected) != len(provided):
        return False
    return hmac.compare_digest(expected, provided)
