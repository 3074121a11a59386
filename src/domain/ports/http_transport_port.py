"""
Port (interface) for outbound HTTP transports.
Infrastructure adapters (e.g. HttpxTransport) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.exchange_request import HttpResponse
from src.domain.errors.proxy_errors import TransportError
from src.domain.result import Result


class IHttpTransport(ABC):
    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str = "",
    ) -> Result[HttpResponse, TransportError]:
        """Send a request and return the status code and body text.

        Non-2xx responses are a Success; only network-level failures are a Failure.
        """
        ...
