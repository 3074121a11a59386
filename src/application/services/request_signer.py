"""
Coinbase Exchange request signing (CB-ACCESS-SIGN).

The prehash string is timestamp + method + path + body with no separators.
`path` must include the query string and `body` must be the exact text sent on
the wire, otherwise the exchange rejects the signature.
"""

import base64
import binascii
import hashlib
import hmac

from src.domain.entities.exchange_request import SignedRequestContext
from src.domain.errors.proxy_errors import SigningError
from src.domain.result import Failure, Result, Success


def sign(
    secret: str,
    timestamp: str,
    method: str,
    path: str,
    body: str,
) -> Result[str, SigningError]:
    """Return the base64 HMAC-SHA256 signature of a request.

    Args:
        secret:    base64-encoded API secret.
        timestamp: Unix seconds as a decimal string.
        method:    HTTP verb exactly as sent (e.g. "GET").
        path:      Request path including query string, no scheme/host.
        body:      Request body text, "" for bodyless requests.
    """
    context = SignedRequestContext(timestamp=timestamp, method=method, path=path, body=body)
    try:
        key = base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        return Failure(SigningError(f"API secret is not valid base64: {exc}"))

    digest = hmac.new(key, context.message.encode("utf-8"), hashlib.sha256).digest()
    return Success(base64.b64encode(digest).decode("ascii"))
