"""
Wire schemas for the payment-link endpoint. Fields are camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities.payment_link import PaymentLink, PaymentRequest


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePaymentInput(_CamelModel):
    amount: Optional[float] = None
    description: Optional[str] = None
    customer_email: Optional[str] = None
    redirect_url: Optional[str] = None
    cancel_url: Optional[str] = None

    def to_domain(self) -> PaymentRequest:
        return PaymentRequest(
            amount=self.amount,
            description=self.description,
            customer_email=self.customer_email,
            redirect_url=self.redirect_url,
            cancel_url=self.cancel_url,
        )


class PaymentLinkResponse(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    charge_id: str
    hosted_url: str
    created_at: Optional[str] = None
    amount: float
    currency: str
    description: Optional[str] = None
    customer_email: Optional[str] = None
    status: str

    @classmethod
    def from_domain(cls, link: PaymentLink) -> "PaymentLinkResponse":
        return cls.model_validate(link)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)
