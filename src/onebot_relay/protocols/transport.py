"""Protocol for the messaging gateway transport."""

from __future__ import annotations

from typing import Protocol


class MessageTransport(Protocol):
    async def send_group_msg(self, payload: dict) -> None:
        """POST one send_group_msg request. Raises DeliveryFailure."""
        ...
