"""
Infrastructure adapter: Coinbase Commerce charges API → ICommerceGateway.

Authenticates with a static API key header; no request signing. One POST per
charge, no retries.
"""

import logging
from typing import Any, Optional

import httpx

from src.domain.entities.payment_link import PaymentLink, PaymentRequest
from src.domain.errors.commerce_error import CoinbaseApiError
from src.domain.ports.commerce_gateway_port import ICommerceGateway

logger = logging.getLogger(__name__)

CHARGES_URL = "https://api.commerce.coinbase.com/charges"
API_VERSION = "2018-03-22"
TIMEOUT_SECONDS = 20.0


class CoinbaseCommerceGateway(ICommerceGateway):
    def __init__(
        self,
        api_key: Optional[str],
        frontend_base_url: Optional[str] = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._frontend_base_url = frontend_base_url
        self._client = client or httpx.Client(timeout=TIMEOUT_SECONDS)

    def create_charge(self, request: PaymentRequest) -> PaymentLink:
        if not self._api_key or not self._api_key.strip():
            raise CoinbaseApiError("Missing COINBASE_COMMERCE_API_KEY env var")

        try:
            logger.info("Creating Coinbase charge: amount=%s currency=USD", request.amount)
            response = self._client.post(
                CHARGES_URL,
                json=self._charge_body(request),
                headers={
                    "Content-Type": "application/json",
                    "X-CC-Api-Key": self._api_key,
                    "X-CC-Version": API_VERSION,
                },
            )
            if not 200 <= response.status_code < 300:
                logger.error(
                    "Coinbase API error status=%s body=%s", response.status_code, response.text
                )
                raise CoinbaseApiError(f"Coinbase API error: {_error_message(response)}")

            data = (response.json() or {}).get("data") or {}
            if not data.get("code") or not data.get("hosted_url"):
                raise CoinbaseApiError("Unexpected Coinbase response")

            return PaymentLink(
                id=data["code"],
                charge_id=data["code"],
                hosted_url=data["hosted_url"],
                created_at=data.get("created_at"),
                amount=request.amount,
                currency="USD",
                description=request.description,
                customer_email=request.customer_email,
                status="pending",
            )
        except CoinbaseApiError:
            raise
        except Exception as exc:
            raise CoinbaseApiError(f"Internal error: {exc}") from exc

    def _charge_body(self, request: PaymentRequest) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": request.description or "Payment",
            "description": request.description,
            "pricing_type": "fixed_price",
            "local_price": {"amount": f"{request.amount:.2f}", "currency": "USD"},
            "redirect_url": request.redirect_url or self._frontend_base_url,
            "cancel_url": request.cancel_url or self._frontend_base_url,
        }
        if request.customer_email and request.customer_email.strip():
            body["metadata"] = {"customer_email": request.customer_email}
        return {key: value for key, value in body.items() if value is not None}


def _error_message(response: httpx.Response) -> str:
    """Prefer Commerce's error.message; fall back to the raw body."""
    try:
        error = response.json().get("error")
    except (ValueError, AttributeError):
        return response.text
    if isinstance(error, dict) and error.get("message") is not None:
        return str(error["message"])
    return response.text
