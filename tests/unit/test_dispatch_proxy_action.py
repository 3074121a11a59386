"""Unit tests for DispatchProxyActionUseCase with fake secret store and transport."""

import json

import pytest

from src.application.services.credential_cache import CredentialCache
from src.application.services.outcome_mapper import outcome_from_error
from src.application.services.request_signer import sign
from src.application.use_cases.dispatch_proxy_action import (
    SANDBOX_API_URL,
    DispatchProxyActionUseCase,
)
from src.domain.errors.proxy_errors import RemoteApiError

CANDLES = {"action": "getCandles", "tradingPair": "BTC-USD", "granularity": 60}
BUY = {
    "action": "placeOrder",
    "side": "buy",
    "productId": "BTC-USD",
    "type": "market",
    "funds": "100.00",
}


def _payload(**kwargs) -> bytes:
    return json.dumps(kwargs).encode()


@pytest.mark.unit
class TestCandles:
    def test_passes_candles_through(self, use_case, transport):
        transport.body = "[[1,2,3,4,5,6]]"

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 200
        assert outcome.json_body() == [[1, 2, 3, 4, 5, 6]]

    def test_builds_signed_get_request(self, use_case, transport, api_secret, fixed_timestamp):
        transport.body = "[]"

        use_case.execute(_payload(**CANDLES))

        [sent] = transport.requests
        path = "/products/BTC-USD/candles?granularity=60"
        expected_sig = sign(api_secret, str(fixed_timestamp), "GET", path, "").value
        assert sent["method"] == "GET"
        assert sent["url"] == SANDBOX_API_URL + path
        assert sent["body"] == ""
        assert sent["headers"] == {
            "CB-ACCESS-KEY": "test-key",
            "CB-ACCESS-SIGN": expected_sig,
            "CB-ACCESS-TIMESTAMP": str(fixed_timestamp),
            "CB-ACCESS-PASSPHRASE": "test-passphrase",
            "Content-Type": "application/json",
        }

    def test_remote_error_keeps_status(self, use_case, transport):
        transport.status_code = 503
        transport.body = "maintenance"

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 503
        assert outcome.json_body() == {"error": "Failed to fetch candles: 503 - maintenance"}


@pytest.mark.unit
class TestOrders:
    def test_buy_order_passes_response_through(self, use_case, transport):
        order = {"id": "d0c5340b", "side": "buy", "status": "pending", "funds": "100.00"}
        transport.body = json.dumps(order)

        outcome = use_case.execute(_payload(**BUY))

        assert outcome.status_code == 200
        assert outcome.json_body() == order

    def test_buy_order_body_and_signature(self, use_case, transport, api_secret, fixed_timestamp):
        use_case.execute(_payload(**BUY))

        [sent] = transport.requests
        assert sent["method"] == "POST"
        assert sent["url"] == SANDBOX_API_URL + "/orders"
        assert sent["body"] == (
            '{"side":"buy","product_id":"BTC-USD","type":"market","funds":"100.00"}'
        )
        assert sent["headers"]["CB-ACCESS-SIGN"] == sign(
            api_secret, str(fixed_timestamp), "POST", "/orders", sent["body"]
        ).value

    def test_sell_order_sends_size_only(self, use_case, transport):
        use_case.execute(
            _payload(action="placeOrder", side="SELL", productId="BTC-USD", type="market",
                     size="0.01", funds="999")
        )

        body = json.loads(transport.requests[0]["body"])
        assert body == {"side": "sell", "product_id": "BTC-USD", "type": "market", "size": "0.01"}

    def test_remote_order_error(self, use_case, transport):
        transport.status_code = 400
        transport.body = '{"message":"Insufficient funds"}'

        outcome = use_case.execute(_payload(**BUY))

        assert outcome.status_code == 400
        assert outcome.error == 'Failed to place order: 400 - {"message":"Insufficient funds"}'

    @pytest.mark.parametrize("funds", [None, ""])
    def test_buy_without_funds_is_rejected_before_any_io(self, use_case, transport, secret_store, funds):
        payload = dict(BUY, funds=funds, size="1")

        outcome = use_case.execute(_payload(**payload))

        assert outcome.status_code == 400
        assert outcome.json_body() == {"error": "Funds are required for market buy orders."}
        assert transport.requests == []
        assert secret_store.calls == []

    @pytest.mark.parametrize("size", [None, ""])
    def test_sell_without_size_is_rejected(self, use_case, transport, size):
        payload = dict(BUY, side="sell", size=size)

        outcome = use_case.execute(_payload(**payload))

        assert outcome.status_code == 400
        assert outcome.error == "Size is required for market sell orders."
        assert transport.requests == []

    @pytest.mark.parametrize("side", ["hold", "", None, "short"])
    def test_invalid_side_is_rejected(self, use_case, transport, side):
        payload = dict(BUY, side=side, size="1", funds="1")

        outcome = use_case.execute(_payload(**payload))

        assert outcome.status_code == 400
        assert outcome.error == "Invalid order side. Must be 'buy' or 'sell'."
        assert transport.requests == []

    @pytest.mark.parametrize(
        "payload, message",
        [
            (
                {"side": "buy", "productId": "", "funds": ""},
                "Funds are required for market buy orders.",
            ),
            ({"side": "buy"}, "Funds are required for market buy orders."),
            ({"side": "sell"}, "Size is required for market sell orders."),
            ({"side": "hold"}, "Invalid order side. Must be 'buy' or 'sell'."),
        ],
    )
    def test_order_rules_apply_without_product_id(
        self, use_case, transport, secret_store, payload, message
    ):
        outcome = use_case.execute(_payload(action="placeOrder", **payload))

        assert outcome.status_code == 400
        assert outcome.json_body() == {"error": message}
        assert transport.requests == []
        assert secret_store.calls == []

    def test_order_without_product_id_is_forwarded_as_null(self, use_case, transport):
        use_case.execute(_payload(action="placeOrder", side="buy", funds="10"))

        body = json.loads(transport.requests[0]["body"])
        assert body == {"side": "buy", "product_id": None, "type": "market", "funds": "10"}


@pytest.mark.unit
class TestFailures:
    def test_unknown_action(self, use_case, transport):
        outcome = use_case.execute(b'{"action":"unknown"}')

        assert outcome.status_code == 400
        assert outcome.json_body() == {"error": "Unsupported proxy request type"}
        assert transport.requests == []

    @pytest.mark.parametrize("raw", [b'{"action":["getCandles"]}', b'{"action":{}}', b'{"action":1}'])
    def test_non_string_action_is_400(self, use_case, transport, raw):
        outcome = use_case.execute(raw)

        assert outcome.status_code == 400
        assert outcome.json_body() == {"error": "Unsupported proxy request type"}
        assert transport.requests == []

    @pytest.mark.parametrize("pair", ["BTC-USD/ticker?", "BTC-USD/../../orders", "BTC USD"])
    def test_trading_pair_outside_base_quote_never_reaches_exchange(
        self, use_case, transport, secret_store, pair
    ):
        outcome = use_case.execute(_payload(action="getCandles", tradingPair=pair, granularity=60))

        assert outcome.status_code == 400
        assert outcome.error.startswith("Invalid request body: tradingPair")
        assert transport.requests == []
        assert secret_store.calls == []

    def test_missing_secret_id_is_500(self, make_secret_store, transport, secret_payload):
        use_case = DispatchProxyActionUseCase(
            credentials=CredentialCache(make_secret_store(payload=secret_payload), None),
            transport=transport,
        )

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert outcome.error == (
            "Internal server error: COINBASE_API_SECRET_ARN environment variable is not set."
        )
        assert transport.requests == []

    def test_secret_fetch_failure_is_500(self, make_secret_store, transport, secret_arn):
        store = make_secret_store(error=RuntimeError("ResourceNotFound"))
        use_case = DispatchProxyActionUseCase(CredentialCache(store, secret_arn), transport)

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert outcome.error.startswith("Internal server error: Failed to load API keys")

    def test_bad_api_secret_is_500(self, make_secret_store, transport, secret_arn):
        payload = json.dumps({"apiKey": "k", "apiSecret": "%%%", "apiPassphrase": "p"})
        use_case = DispatchProxyActionUseCase(
            CredentialCache(make_secret_store(payload=payload), secret_arn), transport
        )

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert transport.requests == []

    def test_transport_failure_is_500(self, credential_cache, make_transport):
        transport = make_transport(error="ConnectTimeout: timed out")
        use_case = DispatchProxyActionUseCase(credential_cache, transport)

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert outcome.error == "Internal server error: ConnectTimeout: timed out"

    def test_unparseable_success_body_is_500(self, use_case, transport):
        transport.body = "<html>oops</html>"

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert outcome.error.startswith("Internal server error: ")

    def test_remote_non_200_maps_through_remote_api_error(self, use_case, transport):
        transport.status_code = 429
        transport.body = '{"message":"Too many requests"}'

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome == outcome_from_error(
            RemoteApiError(
                'Failed to fetch candles: 429 - {"message":"Too many requests"}', status_code=429
            )
        )

    def test_unexpected_exception_is_500(self, credential_cache):
        class ExplodingTransport:
            def send(self, *args, **kwargs):
                raise RuntimeError("boom")

        use_case = DispatchProxyActionUseCase(credential_cache, ExplodingTransport())

        outcome = use_case.execute(_payload(**CANDLES))

        assert outcome.status_code == 500
        assert outcome.error == "Internal server error: boom"

    def test_credentials_load_once_across_calls(self, use_case, secret_store, transport):
        transport.body = "[]"

        for _ in range(3):
            use_case.execute(_payload(**CANDLES))

        assert len(secret_store.calls) == 1
        assert len(transport.requests) == 3
