"""
Maps exchange responses and error values to ProxyOutcome, and ProxyOutcome to
the JSON response handed back to API Gateway / FastAPI.

render() must never raise: a payload that cannot be serialized degrades to a
fixed error body while keeping the original status code.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from src.domain.entities.exchange_request import HttpResponse
from src.domain.entities.proxy_outcome import ProxyOutcome
from src.domain.errors.proxy_errors import (
    ConfigurationError,
    ProxyError,
    RemoteApiError,
    ValidationError,
)
from src.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

SERIALIZATION_ERROR_BODY = '{"error":"Serialization error"}'


@dataclass(frozen=True)
class RenderedResponse:
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    def to_lambda(self) -> dict:
        """Shape expected by an API Gateway Lambda proxy integration."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }


def map_exchange_response(
    response: HttpResponse,
    failure_label: str,
) -> Result[ProxyOutcome, RemoteApiError]:
    """200 passes the parsed body through verbatim; anything else is a RemoteApiError
    carrying the exchange status code.

    Raises:
        ValueError: if a 200 body is not valid JSON.
    """
    if response.status_code == 200:
        return Success(ProxyOutcome.ok(json.loads(response.body)))
    message = f"{failure_label}: {response.status_code} - {response.body}"
    logger.error(message)
    return Failure(RemoteApiError(message, status_code=response.status_code))


def outcome_from_error(error: ProxyError) -> ProxyOutcome:
    if isinstance(error, ValidationError):
        return ProxyOutcome.failed(400, error.message)
    if isinstance(error, RemoteApiError):
        return ProxyOutcome.failed(error.status_code, error.message)
    if isinstance(error, ConfigurationError):
        logger.error("Configuration error: %s", error.message)
    return ProxyOutcome.failed(500, f"Internal server error: {error.message}")


def render(outcome: ProxyOutcome, headers: Optional[dict[str, str]] = None) -> RenderedResponse:
    return render_payload(outcome.status_code, outcome.json_body(), headers)


def render_payload(
    status_code: int,
    payload: Any,
    headers: Optional[dict[str, str]] = None,
) -> RenderedResponse:
    try:
        body = json.dumps(payload, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.error("Failed to serialize response body: %s", exc)
        body = SERIALIZATION_ERROR_BODY
    merged = dict(headers or {})
    merged["Content-Type"] = "application/json"
    return RenderedResponse(status_code=status_code, body=body, headers=merged)
