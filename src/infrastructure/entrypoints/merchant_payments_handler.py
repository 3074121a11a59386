"""
AWS Lambda entry point — Coinbase Commerce hosted checkout links.

Deploy with handler:
    src.infrastructure.entrypoints.merchant_payments_handler.lambda_handler
Environment:
    COINBASE_COMMERCE_API_KEY, FRONTEND_BASE_URL (redirect/cancel target)
"""

import base64
import binascii
import logging
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.application.schemas.payment import CreatePaymentInput, PaymentLinkResponse
from src.application.services.outcome_mapper import render_payload
from src.application.use_cases.create_payment_link import CreatePaymentLinkUseCase
from src.domain.errors.commerce_error import CoinbaseApiError
from src.infrastructure.commerce.coinbase_commerce_gateway import CoinbaseCommerceGateway
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import ProxySettings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _composition_root() -> CreatePaymentLinkUseCase:
    settings = ProxySettings.from_env()
    configure_logging(settings.log_level)
    gateway = CoinbaseCommerceGateway(
        api_key=settings.commerce_api_key,
        frontend_base_url=settings.frontend_base_url,
    )
    return CreatePaymentLinkUseCase(gateway)


def lambda_handler(event: dict, context: Any = None) -> dict:
    return handle_event(event, _composition_root())


def handle_event(event: dict, use_case: CreatePaymentLinkUseCase) -> dict:
    try:
        if not event or not event.get("httpMethod"):
            return _error(400, "Bad Request")
        if event["httpMethod"].upper() != "POST":
            return _error(405, "Method Not Allowed")

        payment_input = _parse_input(event)
        if payment_input is None:
            return _error(400, "Invalid request body")

        link = use_case.execute(payment_input.to_domain())
        return render_payload(200, PaymentLinkResponse.from_domain(link).to_json_dict()).to_lambda()
    except CoinbaseApiError as exc:
        logger.error("Coinbase API error: %s", exc.message)
        return _error(502, exc.message)
    except Exception as exc:
        logger.exception("Unhandled error")
        return _error(500, f"Internal error: {exc}")


def _parse_input(event: dict) -> CreatePaymentInput | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, ValueError):
            return None
    if not body or not body.strip():
        return None
    try:
        return CreatePaymentInput.model_validate_json(body)
    except PydanticValidationError:
        return None


def _error(status_code: int, message: str) -> dict:
    return render_payload(status_code, {"error": message}).to_lambda()
