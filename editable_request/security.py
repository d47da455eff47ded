"""Slack request signature verification for the events endpoint."""

from __future__ import annotations

import hmac
import time
from hashlib import sha256


SLACK_SIGNATURE_HEADER = "X-Slack-Signature"
SLACK_TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_VERSION = "v0"
MAX_REQUEST_AGE = 60 * 5  # seconds


def compute_signature(signing_secret: str, timestamp: str, body: str) -> str:
    """Return the ``v0=<hex>`` signature Slack would send for *body*."""

    basestring = f"{SIGNATURE_VERSION}:{timestamp}:{body}".encode("utf-8")
    digest = hmac.new(signing_secret.encode("utf-8"), basestring, sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def is_fresh_timestamp(timestamp: str, *, max_age: int = MAX_REQUEST_AGE) -> bool:
    """Return True when *timestamp* is an integer within *max_age* of now."""

    try:
        request_ts = int(timestamp)
    except (TypeError, ValueError):
        return False
    return abs(int(time.time()) - request_ts) <= max_age


def is_valid_slack_request(
    *, signing_secret: str, timestamp: str, body: str, signature: str, max_age: int = MAX_REQUEST_AGE
) -> bool:
    """Validate the signature and reject replayed or stale requests."""

    if not timestamp or not signature:
        return False
    if not is_fresh_timestamp(timestamp, max_age=max_age):
        return False

    expected = compute_signature(signing_secret, timestamp, body)
    return hmac.compare_digest(expected, signature)
