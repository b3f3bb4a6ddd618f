from __future__ import annotations

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


class SignatureError(ValueError):
    pass


def verify_signature(*, public_key: str, signature: str | None, timestamp: str | None, body: bytes) -> None:
    """Check the platform's Ed25519 signature over `timestamp + body`.

    Raises SignatureError if anything is missing or does not verify.
    """

    if not public_key:
        raise SignatureError("Public key not configured")
    if not signature or not timestamp:
        raise SignatureError("Missing signature headers")

    try:
        key = VerifyKey(bytes.fromhex(public_key))
        key.verify(timestamp.encode("utf-8") + body, bytes.fromhex(signature))
    except (BadSignatureError, ValueError) as e:
        raise SignatureError("Invalid request signature") from e
