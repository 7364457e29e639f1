"""Inbound message normalization: strip CQ mention codes, extract ids."""

from __future__ import annotations

import re

from onebot_relay.exceptions import ParseError
from onebot_relay.models.domain import InboundMessage
from onebot_relay.models.schemas import GroupMessageEvent

MENTION_PATTERN = re.compile(r"\[CQ:at,qq=[0-9]+\]")


def normalize(raw_message: str) -> str:
    """Remove every ``[CQ:at,qq=<digits>]`` token, leaving all other text as-is."""
    return MENTION_PATTERN.sub("", raw_message)


def parse_event(body: str | bytes) -> InboundMessage:
    try:
        event = GroupMessageEvent.model_validate_json(body)
    except ValueError as e:
        raise ParseError(f"Invalid group message event: {e}") from e
    return InboundMessage(
        raw_text=event.raw_message,
        group_id=event.group_id,
        user_id=event.user_id,
    )
