"""
AWS Lambda entry point — Coinbase Exchange proxy (API Gateway proxy integration).

The Composition Root is built once per container on the first invocation and
reused while warm, so the credential cache survives across invocations.

Deploy with handler:
    src.infrastructure.entrypoints.exchange_proxy_handler.lambda_handler
Environment:
    COINBASE_API_SECRET_ARN, FRONTEND_BASE_URL (optional), LOG_LEVEL (optional)
"""

import base64
import binascii
import logging
from functools import lru_cache
from typing import Any

from src.application.schemas.proxy_request import INVALID_REQUEST_BODY
from src.application.services.credential_cache import CredentialCache
from src.application.services.outcome_mapper import render, render_payload
from src.application.use_cases.dispatch_proxy_action import DispatchProxyActionUseCase
from src.domain.entities.proxy_outcome import ProxyOutcome
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import ProxySettings
from src.infrastructure.http.httpx_transport import HttpxTransport
from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _composition_root() -> tuple[ProxySettings, DispatchProxyActionUseCase]:
    settings = ProxySettings.from_env()
    configure_logging(settings.log_level)
    credentials = CredentialCache(
        SecretsManagerAdapter(region=settings.aws_region),
        settings.secret_id,
    )
    use_case = DispatchProxyActionUseCase(
        credentials=credentials,
        transport=HttpxTransport(),
        api_url=settings.exchange_api_url,
    )
    return settings, use_case


def lambda_handler(event: dict, context: Any = None) -> dict:
    settings, use_case = _composition_root()
    return handle_event(event, use_case, settings)


def handle_event(
    event: dict,
    use_case: DispatchProxyActionUseCase,
    settings: ProxySettings,
) -> dict:
    """Translate an API Gateway proxy event into a use-case call and back."""
    cors = settings.cors_headers()
    method = (event or {}).get("httpMethod") or ""

    if method.upper() == "OPTIONS":
        return render_payload(200, {}, cors).to_lambda()
    if method.upper() != "POST":
        return render(ProxyOutcome.failed(405, "Method Not Allowed"), cors).to_lambda()

    try:
        body = _request_body(event)
    except (binascii.Error, ValueError):
        return render(ProxyOutcome.failed(400, INVALID_REQUEST_BODY), cors).to_lambda()

    outcome = use_case.execute(body)
    logger.info("Exchange proxy responded %s", outcome.status_code)
    return render(outcome, cors).to_lambda()


def _request_body(event: dict) -> bytes | str | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True)
    return body
