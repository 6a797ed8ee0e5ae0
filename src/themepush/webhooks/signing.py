"""HMAC-SHA256 payload signing and verification.

The signature is a lowercase hex digest over the compact JSON of the
payload *without* its ``signature`` field, keyed by the project's API key.
"""

from __future__ import annotations

import hashlib
import hmac
import json

from themepush.models import WebhookPayload


def compute_signature(payload: str | bytes, secret: str) -> str:
    """Compute the HMAC-SHA256 hex digest of a serialized payload.

    Args:
        payload: Serialized payload (str is encoded as UTF-8).
        secret: Shared secret for HMAC.

    Returns:
        Lowercase hex digest.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=payload,
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify_signature(payload: str | bytes, secret: str, signature: str) -> bool:
    """Check a signature against a serialized payload in constant time."""
    expected = compute_signature(payload, secret)
    return hmac.compare_digest(expected, signature.lower())


def sign_payload(payload: WebhookPayload, secret: str | None) -> str | None:
    """Sign a payload with a project's key.

    Returns None when the key is missing or empty: the payload is then
    delivered unsigned rather than signed with an empty key.
    """
    if not secret:
        return None
    return compute_signature(payload.unsigned_json(), secret)


def verify_payload(payload: WebhookPayload, secret: str) -> bool:
    """Receiver-side check of a parsed payload. Unsigned payloads fail."""
    if not payload.signature:
        return False
    return verify_signature(payload.unsigned_json(), secret, payload.signature)


def verify_request_body(body: str | bytes, secret: str) -> bool:
    """Receiver-side check of a raw request body.

    Strips ``signature`` from the decoded object and re-serializes the rest
    compactly in received key order, which reproduces the signed bytes.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return False
    if not isinstance(data, dict):
        return False

    signature = data.pop("signature", None)
    if not isinstance(signature, str) or not signature:
        return False

    unsigned = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return verify_signature(unsigned, secret, signature)
