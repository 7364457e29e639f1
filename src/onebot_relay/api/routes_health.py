"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from onebot_relay.api.dependencies import get_settings
from onebot_relay.config.settings import Settings
from onebot_relay.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        primary_model=settings.primary_model,
        secondary_model=settings.secondary_model,
        max_attempts=settings.max_retries,
        retry_delay_seconds=settings.retry_delay,
        gateway_configured=bool(settings.recv_addr),
    )
