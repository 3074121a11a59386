"""
Process-wide cache of exchange credentials.

The first successful ensure_loaded() fetches the secret and parses it; every
later call returns the cached Credentials without touching the secret store.
A lock makes concurrent cold callers wait for a single fetch.
"""

import json
import logging
import threading
from typing import Optional

from src.domain.entities.exchange_request import Credentials
from src.domain.errors.proxy_errors import ConfigurationError, SecretUnavailable
from src.domain.ports.secret_store_port import ISecretStore
from src.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("apiKey", "apiSecret", "apiPassphrase")


class CredentialCache:
    def __init__(self, secret_store: ISecretStore, secret_id: Optional[str]) -> None:
        self._secret_store = secret_store
        self._secret_id = secret_id
        self._credentials: Optional[Credentials] = None
        self._lock = threading.Lock()

    def is_loaded(self) -> bool:
        return self._credentials is not None

    def ensure_loaded(self) -> Result[Credentials, SecretUnavailable | ConfigurationError]:
        """Return cached credentials, fetching them on first use.

        Failures are not cached, so a later call retries the fetch.
        """
        if self._credentials is not None:
            return Success(self._credentials)

        with self._lock:
            if self._credentials is not None:
                return Success(self._credentials)

            if not self._secret_id:
                return Failure(
                    ConfigurationError("COINBASE_API_SECRET_ARN environment variable is not set.")
                )

            logger.info("Loading exchange credentials from secret %s", self._secret_id)
            try:
                payload = self._secret_store.get_secret(self._secret_id)
            except Exception as exc:
                logger.error("Failed to fetch secret %s: %s", self._secret_id, exc)
                return Failure(SecretUnavailable(f"Failed to load API keys: {exc}"))

            result = _parse_credentials(payload)
            if isinstance(result, Success):
                self._credentials = result.value
            return result


def _parse_credentials(payload: Optional[str]) -> Result[Credentials, SecretUnavailable]:
    if payload is None:
        return Failure(SecretUnavailable("Secret string is null."))
    try:
        secret_map = json.loads(payload)
    except ValueError:
        return Failure(SecretUnavailable("Secret payload is not valid JSON."))
    if not isinstance(secret_map, dict):
        return Failure(SecretUnavailable("Secret payload must be a JSON object."))

    missing = [key for key in REQUIRED_KEYS if not secret_map.get(key)]
    if missing:
        return Failure(SecretUnavailable(f"Secret is missing required keys: {', '.join(missing)}"))

    return Success(
        Credentials(
            api_key=str(secret_map["apiKey"]),
            api_secret=str(secret_map["apiSecret"]),
            api_passphrase=str(secret_map["apiPassphrase"]),
        )
    )
