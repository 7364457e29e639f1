"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from onebot_relay.api.middleware import RequestContextMiddleware
from onebot_relay.api.routes_events import router as events_router
from onebot_relay.api.routes_health import router as health_router
from onebot_relay.config.settings import Settings
from onebot_relay.delivery.dispatcher import ReplyDispatcher
from onebot_relay.delivery.onebot_client import OnebotHttpClient
from onebot_relay.generation.openai_provider import OpenAIChatProvider
from onebot_relay.generation.orchestrator import CompletionOrchestrator
from onebot_relay.observability.logger import get_logger, setup_logging
from onebot_relay.pipeline.relay_pipeline import RelayPipeline

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    setup_logging(verbose=settings.extra_log, json_output=settings.log_json)

    # Completion
    provider = OpenAIChatProvider(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout,
        verbose=settings.extra_log,
    )
    orchestrator = CompletionOrchestrator(
        client=provider,
        primary_model=settings.primary_model,
        secondary_model=settings.secondary_model,
    )

    # Delivery
    gateway = OnebotHttpClient(
        base_address=settings.recv_addr,
        timeout=settings.request_timeout,
        check_status=settings.delivery_check_status,
    )
    dispatcher = ReplyDispatcher(transport=gateway)

    app.state.relay_pipeline = RelayPipeline(
        orchestrator=orchestrator,
        dispatcher=dispatcher,
        settings=settings,
    )
    app.state.settings = settings

    if not settings.openai_api_key:
        logger.warning("openai_api_key_missing")
    if not settings.recv_addr:
        logger.warning("recv_addr_missing")

    logger.info(
        "startup_complete",
        primary_model=settings.primary_model,
        secondary_model=settings.secondary_model,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )

    yield

    await gateway.close()
    await provider.close()
    logger.info("shutdown_complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="OneBot Relay",
        version="1.0.0",
        description="Relays OneBot group messages to OpenAI chat completions",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(events_router, tags=["events"])
    return app
