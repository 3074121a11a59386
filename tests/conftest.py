"""
Shared pytest fixtures: in-memory fakes of the domain ports.
"""

import json
import threading

import pytest

from src.application.services.credential_cache import CredentialCache
from src.application.use_cases.dispatch_proxy_action import DispatchProxyActionUseCase
from src.domain.entities.exchange_request import HttpResponse
from src.domain.errors.proxy_errors import TransportError
from src.domain.ports.http_transport_port import IHttpTransport
from src.domain.ports.secret_store_port import ISecretStore
from src.domain.result import Failure, Success

# base64("supersecretkey-0123456789abcdef")
API_SECRET = "c3VwZXJzZWNyZXRrZXktMDEyMzQ1Njc4OWFiY2RlZg=="
FIXED_TIMESTAMP = 1700000000
SECRET_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:coinbase-exchange"


class FakeSecretStore(ISecretStore):
    def __init__(self, payload: str | None = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def get_secret(self, secret_id: str) -> str:
        with self._lock:
            self.calls.append(secret_id)
        if self.error is not None:
            raise self.error
        return self.payload


class FakeTransport(IHttpTransport):
    def __init__(self, status_code: int = 200, body: str = "{}", error: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests: list[dict] = []

    def send(self, method, url, headers, body=""):
        self.requests.append({"method": method, "url": url, "headers": headers, "body": body})
        if self.error is not None:
            return Failure(TransportError(self.error))
        return Success(HttpResponse(status_code=self.status_code, body=self.body))


@pytest.fixture
def secret_payload() -> str:
    return json.dumps(
        {"apiKey": "test-key", "apiSecret": API_SECRET, "apiPassphrase": "test-passphrase"}
    )


@pytest.fixture
def secret_store(secret_payload) -> FakeSecretStore:
    return FakeSecretStore(payload=secret_payload)


@pytest.fixture
def credential_cache(secret_store) -> CredentialCache:
    return CredentialCache(secret_store, SECRET_ARN)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def use_case(credential_cache, transport) -> DispatchProxyActionUseCase:
    return DispatchProxyActionUseCase(
        credentials=credential_cache,
        transport=transport,
        clock=lambda: FIXED_TIMESTAMP + 0.75,
    )


@pytest.fixture
def api_secret() -> str:
    return API_SECRET


@pytest.fixture
def fixed_timestamp() -> int:
    return FIXED_TIMESTAMP


@pytest.fixture
def secret_arn() -> str:
    return SECRET_ARN


@pytest.fixture
def make_secret_store():
    return FakeSecretStore


@pytest.fixture
def make_transport():
    return FakeTransport
