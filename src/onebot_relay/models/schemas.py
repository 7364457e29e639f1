"""Pydantic models for the OneBot wire format and the HTTP surface."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

UINT64_MAX = 2**64 - 1

UInt64 = Annotated[int, Field(ge=0, le=UINT64_MAX)]


class Sender(BaseModel):
    user_id: int | None = None
    nickname: str | None = None
    card: str | None = None
    role: str | None = None
    sex: str | None = None
    age: int | None = None
    area: str | None = None
    level: str | None = None
    title: str | None = None

    model_config = {"extra": "ignore"}


class GroupMessageEvent(BaseModel):
    """OneBot v11 group message event. Only the first three fields drive the relay."""

    raw_message: str
    group_id: UInt64
    user_id: UInt64

    post_type: str | None = None
    message_type: str | None = None
    sub_type: str | None = None
    time: int | None = None
    self_id: int | None = None
    message_id: int | None = None
    message_seq: int | None = None
    font: int | None = None
    message: str | list | None = None
    sender: Sender | None = None
    anonymous: dict | None = None

    model_config = {"extra": "ignore"}


class MessageSegment(BaseModel):
    type: Literal["at", "text"]
    data: dict[str, str]


class SendGroupMessageRequest(BaseModel):
    group_id: UInt64
    message: list[MessageSegment]


class EventAck(BaseModel):
    status: Literal["ok"] = "ok"
    trace_id: str
    outcome: str
    delivered: bool


class HealthResponse(BaseModel):
    status: str
    primary_model: str
    secondary_model: str
    max_attempts: int
    retry_delay_seconds: float
    gateway_configured: bool
