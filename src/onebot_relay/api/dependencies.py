"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from onebot_relay.config.settings import Settings
from onebot_relay.pipeline.relay_pipeline import RelayPipeline


def get_relay_pipeline(request: Request) -> RelayPipeline:
    return request.app.state.relay_pipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
