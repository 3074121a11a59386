"""
Wire schemas for the exchange proxy request body.

pydantic is treated as framework (not infrastructure) and is allowed in the
application layer. The `action` field selects the variant; the validated model
is converted to a domain ProxyAction before dispatch.
"""

import json
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.entities.proxy_action import CandlesRequest, OrderRequest, ProxyAction
from src.domain.errors.proxy_errors import ValidationError
from src.domain.result import Failure, Result, Success

UNSUPPORTED_REQUEST_TYPE = "Unsupported proxy request type"
INVALID_REQUEST_BODY = "Invalid request body"

# BASE-QUOTE, e.g. BTC-USD; keeps the value a single path segment
PRODUCT_ID_PATTERN = r"^[A-Za-z0-9]+-[A-Za-z0-9]+$"


class _ProxyRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")


class CandlesRequestModel(_ProxyRequestModel):
    action: Literal["getCandles"]
    trading_pair: str = Field(alias="tradingPair", pattern=PRODUCT_ID_PATTERN)
    granularity: int

    def to_domain(self) -> CandlesRequest:
        return CandlesRequest(trading_pair=self.trading_pair, granularity=self.granularity)


class OrderRequestModel(_ProxyRequestModel):
    action: Literal["placeOrder"]
    side: Optional[str] = None
    product_id: Optional[str] = Field(default=None, alias="productId")
    type: str = "market"
    size: Optional[str] = None
    funds: Optional[str] = None

    def to_domain(self) -> OrderRequest:
        return OrderRequest(
            side=self.side or "",
            product_id=self.product_id,
            type=self.type,
            size=self.size,
            funds=self.funds,
        )


ProxyRequestModel = Annotated[
    Union[CandlesRequestModel, OrderRequestModel],
    Field(discriminator="action"),
]

_adapter = TypeAdapter(ProxyRequestModel)
_SUPPORTED_ACTIONS = {"getCandles", "placeOrder"}


def decode_action(raw: Union[bytes, str, None]) -> Result[ProxyAction, ValidationError]:
    """Decode a raw request body into a ProxyAction.

    Returns Failure(ValidationError) when the body is not a JSON object, the
    `action` discriminator is missing or unknown, or a variant field is invalid.
    """
    if not raw:
        return Failure(ValidationError(INVALID_REQUEST_BODY))
    try:
        data = json.loads(raw)
    except ValueError:
        return Failure(ValidationError(INVALID_REQUEST_BODY))
    if not isinstance(data, dict):
        return Failure(ValidationError(INVALID_REQUEST_BODY))

    action = data.get("action")
    if not isinstance(action, str) or action not in _SUPPORTED_ACTIONS:
        return Failure(ValidationError(UNSUPPORTED_REQUEST_TYPE))

    try:
        model = _adapter.validate_python(data)
    except PydanticValidationError as exc:
        return Failure(ValidationError(f"{INVALID_REQUEST_BODY}: {_summarize(exc)}"))
    return Success(model.to_domain())


def _summarize(exc: PydanticValidationError) -> str:
    # loc[0] is the discriminator tag
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0])
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)
