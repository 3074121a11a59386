"""
Port (interface) for secret stores.
Infrastructure adapters (e.g. SecretsManagerAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    @abstractmethod
    def get_secret(self, secret_id: str) -> str:
        """Fetch a secret by id/ARN and return its raw string payload.

        Raises:
            Any exception from the backend if the secret cannot be read.
        """
        ...
