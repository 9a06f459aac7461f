"""Request signing for the authenticated GDAX REST API.

The exchange authenticates every private request with four headers. The
signature is an HMAC-SHA256, keyed with the base64-decoded API secret, over
the concatenation ``timestamp + METHOD + request_path + body`` and sent back
base64-encoded. ``body`` must be the exact string put on the wire, otherwise
the exchange computes a different digest and rejects the request.
"""
import base64
import binascii
import hashlib
import hmac
from typing import Dict, Union

from .errors import InvalidCredentials
from .secrets import GDAXCredentials

Secret = Union[str, bytes]


def decode_secret(secret: Secret) -> bytes:
    """Return the HMAC key for ``secret``.

    A ``str`` is the base64 secret issued by the exchange; ``bytes`` are taken
    to be the already-decoded key.
    """
    if isinstance(secret, (bytes, bytearray)):
        key = bytes(secret)
    else:
        try:
            key = base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise InvalidCredentials("Secret must be base64-encoded for signing") from e
    if not key:
        raise InvalidCredentials("Secret is empty")
    return key


def sign(secret: Secret, timestamp: Union[str, float, int], method: str, path: str, body: str = "") -> str:
    """Compute the base64 request signature. Pure; performs no I/O."""
    message = f"{timestamp}{method.upper()}{path}{body or ''}"
    digest = hmac.new(decode_secret(secret), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def auth_headers(
    credentials: GDAXCredentials,
    timestamp: Union[str, float, int],
    method: str,
    path: str,
    body: str = "",
) -> Dict[str, str]:
    """Build the full authentication header set for one request."""
    return {
        "CB-ACCESS-KEY": credentials.api_key,
        "CB-ACCESS-SIGN": sign(credentials.api_secret, timestamp, method, path, body),
        "CB-ACCESS-TIMESTAMP": str(timestamp),
        "CB-ACCESS-PASSPHRASE": credentials.passphrase,
        "Content-Type": "application/json",
    }
