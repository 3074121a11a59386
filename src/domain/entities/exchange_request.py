"""
Domain entities for credentials and signed exchange requests.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Exchange API credentials. Secret fields are excluded from repr."""

    api_key: str
    api_secret: str = field(repr=False)
    api_passphrase: str = field(repr=False)


@dataclass(frozen=True)
class ExchangeRequest:
    """An unsigned request: `path` includes the query string, `body` is the exact wire text."""

    method: str
    path: str
    failure_label: str
    body: str = ""


@dataclass(frozen=True)
class SignedRequestContext:
    timestamp: str
    method: str
    path: str
    body: str

    @property
    def message(self) -> str:
        return self.timestamp + self.method + self.path + self.body


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str
