"""
Domain error values for the exchange proxy.

These are data, not exceptions: they travel inside Failure(...) and are mapped
to an HTTP status exactly once, in DispatchProxyActionUseCase.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProxyError:
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ConfigurationError(ProxyError):
    """Required configuration (e.g. the secret id) is missing."""


@dataclass(frozen=True, slots=True)
class SecretUnavailable(ProxyError):
    """The credential secret could not be fetched or parsed."""


@dataclass(frozen=True, slots=True)
class ValidationError(ProxyError):
    """The inbound request is malformed or breaks an order invariant."""


@dataclass(frozen=True, slots=True)
class SigningError(ProxyError):
    """The API secret is not valid base64."""


@dataclass(frozen=True, slots=True)
class TransportError(ProxyError):
    """The outbound HTTP call failed before a response arrived."""


@dataclass(frozen=True, slots=True)
class RemoteApiError(ProxyError):
    """The exchange answered with a non-200 status."""

    status_code: int = 502


@dataclass(frozen=True, slots=True)
class InternalError(ProxyError):
    """Anything unanticipated."""
