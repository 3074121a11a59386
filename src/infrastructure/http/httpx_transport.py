"""
Infrastructure adapter: httpx → IHttpTransport.

One httpx.Client is shared for the lifetime of the process so connections are
reused across warm invocations. No retries: a failed call is reported as-is.
"""

import logging

import httpx

from src.domain.entities.exchange_request import HttpResponse
from src.domain.errors.proxy_errors import TransportError
from src.domain.ports.http_transport_port import IHttpTransport
from src.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_SECONDS = 10.0
TOTAL_TIMEOUT_SECONDS = 25.0


class HttpxTransport(IHttpTransport):
    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(TOTAL_TIMEOUT_SECONDS, connect=CONNECT_TIMEOUT_SECONDS),
        )

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str = "",
    ) -> Result[HttpResponse, TransportError]:
        try:
            response = self._client.request(
                method,
                url,
                headers=headers,
                content=body.encode("utf-8") if body else None,
            )
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            return Failure(TransportError(f"{type(exc).__name__}: {exc}"))
        return Success(HttpResponse(status_code=response.status_code, body=response.text))
