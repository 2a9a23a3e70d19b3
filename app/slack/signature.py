"""Slack request signature verification."""
import hashlib
import hmac
import time
from typing import Optional


def compute_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """
    Compute the v0 signature Slack sends in X-Slack-Signature.

    Args:
        signing_secret: App signing secret
        timestamp: Value of X-Slack-Request-Timestamp
        body: Raw request body

    Returns:
        Signature string of the form "v0=<hex digest>"

    Example:
        >>> compute_signature("secret", "1", b"a=b").startswith("v0=")
        True
    """
    basestring = b"v0:" + timestamp.encode("utf-8") + b":" + body
    digest = hmac.new(
        signing_secret.encode("utf-8"), basestring, hashlib.sha256
    ).hexdigest()
    return f"v0={digest}"


def verify_signature(
    signing_secret: str,
    timestamp: Optional[str],
    signature: Optional[str],
    body: bytes,
    tolerance_seconds: int = 300,
    now: Optional[float] = None,
) -> bool:
    """
    Verify a Slack request signature.

    Args:
        signing_secret: App signing secret
        timestamp: X-Slack-Request-Timestamp header
        signature: X-Slack-Signature header
        body: Raw request body
        tolerance_seconds: Maximum request age, guards against replays
        now: Current unix time (defaults to time.time())

    Returns:
        True if the signature matches and the request is fresh, False otherwise
    """
    if not timestamp or not signature:
        return False

    try:
        request_time = int(timestamp)
    except ValueError:
        return False

    current = time.time() if now is None else now
    if abs(current - request_time) > tolerance_seconds:
        return False

    expected = compute_signature(signing_secret, timestamp, body)
    return hmac.compare_digest(expected, signature)
