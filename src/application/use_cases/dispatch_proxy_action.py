"""
Use-case: relay a typed proxy action to the Coinbase Exchange REST API.

Every step returns a Result; the first Failure short-circuits and is turned
into a ProxyOutcome by outcome_from_error(). Order-field validation happens
before credentials are loaded, so an invalid order never reaches the secret
store, the signer, or the network. Unexpected exceptions are caught once, in
execute(), and reported as a 500.
"""

import json
import logging
import time
from typing import Callable, Union

from src.application.schemas.proxy_request import decode_action
from src.application.services.credential_cache import CredentialCache
from src.application.services.outcome_mapper import map_exchange_response, outcome_from_error
from src.application.services.request_signer import sign
from src.domain.entities.exchange_request import Credentials, ExchangeRequest
from src.domain.entities.proxy_action import CandlesRequest, OrderRequest, OrderSide, ProxyAction
from src.domain.entities.proxy_outcome import ProxyOutcome
from src.domain.errors.proxy_errors import InternalError, ValidationError
from src.domain.ports.http_transport_port import IHttpTransport
from src.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

SANDBOX_API_URL = "https://api-public.sandbox.exchange.coinbase.com"

FUNDS_REQUIRED = "Funds are required for market buy orders."
SIZE_REQUIRED = "Size is required for market sell orders."
INVALID_SIDE = "Invalid order side. Must be 'buy' or 'sell'."


class DispatchProxyActionUseCase:
    def __init__(
        self,
        credentials: CredentialCache,
        transport: IHttpTransport,
        api_url: str = SANDBOX_API_URL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            credentials: Lazily-loaded credential cache shared across invocations.
            transport:   IHttpTransport implementation (e.g. HttpxTransport).
            api_url:     Exchange base URL, no trailing slash.
            clock:       Returns the current Unix time; injectable for tests.
        """
        self._credentials = credentials
        self._transport = transport
        self._api_url = api_url.rstrip("/")
        self._clock = clock

    def execute(self, raw_payload: Union[bytes, str, None]) -> ProxyOutcome:
        try:
            return self._dispatch(raw_payload)
        except Exception as exc:
            logger.exception("Unhandled error in exchange proxy")
            return outcome_from_error(InternalError(str(exc)))

    def _dispatch(self, raw_payload: Union[bytes, str, None]) -> ProxyOutcome:
        decoded = decode_action(raw_payload)
        if isinstance(decoded, Failure):
            return outcome_from_error(decoded.error)

        built = build_request(decoded.value)
        if isinstance(built, Failure):
            return outcome_from_error(built.error)
        request = built.value

        loaded = self._credentials.ensure_loaded()
        if isinstance(loaded, Failure):
            return outcome_from_error(loaded.error)
        creds = loaded.value

        timestamp = str(int(self._clock()))
        signed = sign(creds.api_secret, timestamp, request.method, request.path, request.body)
        if isinstance(signed, Failure):
            return outcome_from_error(signed.error)

        sent = self._transport.send(
            request.method,
            self._api_url + request.path,
            _auth_headers(creds, signed.value, timestamp),
            request.body,
        )
        if isinstance(sent, Failure):
            return outcome_from_error(sent.error)

        mapped = map_exchange_response(sent.value, request.failure_label)
        if isinstance(mapped, Failure):
            return outcome_from_error(mapped.error)
        return mapped.value


def build_request(action: ProxyAction) -> Result[ExchangeRequest, ValidationError]:
    match action:
        case CandlesRequest(trading_pair=pair, granularity=granularity):
            return Success(
                ExchangeRequest(
                    method="GET",
                    path=f"/products/{pair}/candles?granularity={granularity}",
                    failure_label="Failed to fetch candles",
                )
            )
        case OrderRequest():
            return _build_order_request(action)
    raise TypeError(f"Unhandled proxy action: {type(action).__name__}")


def _build_order_request(order: OrderRequest) -> Result[ExchangeRequest, ValidationError]:
    side = (order.side or "").lower()
    body = {"side": side, "product_id": order.product_id, "type": order.type}

    if side == OrderSide.BUY.value:
        if not order.funds:
            return Failure(ValidationError(FUNDS_REQUIRED))
        body["funds"] = order.funds
    elif side == OrderSide.SELL.value:
        if not order.size:
            return Failure(ValidationError(SIZE_REQUIRED))
        body["size"] = order.size
    else:
        return Failure(ValidationError(INVALID_SIDE))

    return Success(
        ExchangeRequest(
            method="POST",
            path="/orders",
            failure_label="Failed to place order",
            body=json.dumps(body, separators=(",", ":")),
        )
    )


def _auth_headers(creds: Credentials, signature: str, timestamp: str) -> dict[str, str]:
    return {
        "CB-ACCESS-KEY": creds.api_key,
        "CB-ACCESS-SIGN": signature,
        "CB-ACCESS-TIMESTAMP": timestamp,
        "CB-ACCESS-PASSPHRASE": creds.api_passphrase,
        "Content-Type": "application/json",
    }
