"""
Domain entities for Coinbase Commerce hosted checkout links.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PaymentRequest:
    amount: Optional[float]
    description: Optional[str] = None
    customer_email: Optional[str] = None
    redirect_url: Optional[str] = None
    cancel_url: Optional[str] = None


@dataclass(frozen=True)
class PaymentLink:
    id: str
    charge_id: str
    hosted_url: str
    created_at: Optional[str]
    amount: float
    currency: str = "USD"
    description: Optional[str] = None
    customer_email: Optional[str] = None
    status: str = "pending"
