"""
Exception raised by the Coinbase Commerce charge flow.
Unlike the exchange proxy, the payments flow keeps exception-based control flow.
"""


class CoinbaseApiError(Exception):
    """Charge creation failed; the message is safe to return to the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
