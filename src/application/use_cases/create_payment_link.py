"""
Use-case: create a hosted checkout link for a one-off USD payment.
Depends only on Domain ports and entities — no infrastructure imports.
"""

import logging

from src.domain.entities.payment_link import PaymentLink, PaymentRequest
from src.domain.errors.commerce_error import CoinbaseApiError
from src.domain.ports.commerce_gateway_port import ICommerceGateway

logger = logging.getLogger(__name__)


class CreatePaymentLinkUseCase:
    def __init__(self, gateway: ICommerceGateway) -> None:
        self._gateway = gateway

    def execute(self, request: PaymentRequest) -> PaymentLink:
        """Validate *request* and create the charge.

        Raises:
            CoinbaseApiError: if the amount is missing or not positive, or the
                              gateway fails.
        """
        if request.amount is None or request.amount <= 0:
            raise CoinbaseApiError("Invalid amount")
        logger.info(
            "Create charge: amount=%s desc=%s email=%s",
            request.amount,
            request.description,
            request.customer_email,
        )
        return self._gateway.create_charge(request)
