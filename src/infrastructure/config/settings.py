"""
Environment-driven settings shared by the Lambda handlers and the local server.

Nothing here is required at import time: a missing COINBASE_API_SECRET_ARN is
reported on the first credential load, a missing Commerce key on the first
charge.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.application.use_cases.dispatch_proxy_action import SANDBOX_API_URL


@dataclass(frozen=True)
class ProxySettings:
    secret_id: Optional[str]
    frontend_base_url: Optional[str]
    commerce_api_key: Optional[str]
    exchange_api_url: str = SANDBOX_API_URL
    aws_region: str = "us-east-1"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProxySettings":
        env = os.environ if environ is None else environ
        return cls(
            secret_id=env.get("COINBASE_API_SECRET_ARN") or None,
            frontend_base_url=env.get("FRONTEND_BASE_URL") or None,
            commerce_api_key=env.get("COINBASE_COMMERCE_API_KEY") or None,
            exchange_api_url=env.get("COINBASE_EXCHANGE_API_URL") or SANDBOX_API_URL,
            aws_region=env.get("AWS_DEFAULT_REGION", "us-east-1"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    def cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.frontend_base_url or "*",
            "Access-Control-Allow-Methods": "OPTIONS,GET,POST",
        }
