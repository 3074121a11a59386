"""
Port (interface) for hosted-checkout payment providers.
Infrastructure adapters (e.g. CoinbaseCommerceGateway) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.payment_link import PaymentLink, PaymentRequest


class ICommerceGateway(ABC):
    @abstractmethod
    def create_charge(self, request: PaymentRequest) -> PaymentLink:
        """Create a charge and return its hosted checkout link.

        Raises:
            CoinbaseApiError: on configuration, transport, or provider failure.
        """
        ...
