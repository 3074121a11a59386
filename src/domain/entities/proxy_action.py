"""
Domain entities for the actions the exchange proxy can relay.
Zero external dependencies — pure Python dataclasses only.

ProxyAction is a closed union; the dispatcher matches on it exhaustively.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class CandlesRequest:
    trading_pair: str
    granularity: int


@dataclass(frozen=True)
class OrderRequest:
    side: str
    product_id: Optional[str]
    type: str
    size: Optional[str] = None
    funds: Optional[str] = None


ProxyAction = Union[CandlesRequest, OrderRequest]
