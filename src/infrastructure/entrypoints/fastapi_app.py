"""
FastAPI entry point — local development server.

Exposes the same two handlers the Lambdas serve, wired through FastAPI
dependencies so tests can override them with fakes.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool

load_dotenv()

from src.application.services.credential_cache import CredentialCache
from src.application.services.outcome_mapper import render
from src.application.use_cases.create_payment_link import CreatePaymentLinkUseCase
from src.application.use_cases.dispatch_proxy_action import DispatchProxyActionUseCase
from src.infrastructure.commerce.coinbase_commerce_gateway import CoinbaseCommerceGateway
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import ProxySettings
from src.infrastructure.entrypoints import merchant_payments_handler
from src.infrastructure.http.httpx_transport import HttpxTransport
from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter


# ---------------------------------------------------------------------------
# Composition Root — dependencies are built once, on first request
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> ProxySettings:
    settings = ProxySettings.from_env()
    configure_logging(settings.log_level)
    return settings


@lru_cache(maxsize=1)
def get_proxy_use_case() -> DispatchProxyActionUseCase:
    settings = get_settings()
    credentials = CredentialCache(
        SecretsManagerAdapter(region=settings.aws_region),
        settings.secret_id,
    )
    return DispatchProxyActionUseCase(
        credentials=credentials,
        transport=HttpxTransport(),
        api_url=settings.exchange_api_url,
    )


@lru_cache(maxsize=1)
def get_payment_use_case() -> CreatePaymentLinkUseCase:
    settings = get_settings()
    return CreatePaymentLinkUseCase(
        CoinbaseCommerceGateway(
            api_key=settings.commerce_api_key,
            frontend_base_url=settings.frontend_base_url,
        )
    )


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(title="Coinbase Proxy API")


@app.post("/exchange-proxy")
async def exchange_proxy(
    request: Request,
    use_case: DispatchProxyActionUseCase = Depends(get_proxy_use_case),
    settings: ProxySettings = Depends(get_settings),
) -> Response:
    """Relay a getCandles / placeOrder action to the exchange."""
    body = await request.body()
    outcome = await run_in_threadpool(use_case.execute, body)
    rendered = render(outcome, settings.cors_headers())
    return Response(
        content=rendered.body,
        status_code=rendered.status_code,
        headers=rendered.headers,
        media_type="application/json",
    )


@app.post("/payments")
async def create_payment(
    request: Request,
    use_case: CreatePaymentLinkUseCase = Depends(get_payment_use_case),
) -> Response:
    """Create a hosted checkout link; mirrors the Lambda's status mapping."""
    body = (await request.body()).decode("utf-8")
    event = {"httpMethod": "POST", "body": body}
    result = await run_in_threadpool(merchant_payments_handler.handle_event, event, use_case)
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
        media_type="application/json",
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
