"""
Domain entity for the single value the exchange proxy returns to its caller.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ProxyOutcome:
    """Either a verbatim downstream JSON payload or an error message.

    Exactly one of `payload` / `error` is meaningful; `error` wins when set.
    """

    status_code: int
    payload: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, payload: Any) -> "ProxyOutcome":
        return cls(status_code=200, payload=payload)

    @classmethod
    def failed(cls, status_code: int, message: str) -> "ProxyOutcome":
        return cls(status_code=status_code, error=message)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def json_body(self) -> Any:
        return {"error": self.error} if self.is_error else self.payload
