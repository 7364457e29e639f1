"""Reply dispatcher: build the outbound message and deliver it with retry."""

from __future__ import annotations

import asyncio

from onebot_relay.exceptions import DeliveryFailure
from onebot_relay.models.domain import CompletionOutcome, DeliveryResult, OutboundMessage
from onebot_relay.observability.logger import get_logger
from onebot_relay.protocols.transport import MessageTransport
from onebot_relay.retry.engine import RetryPolicy, Sleep, run_with_retry

logger = get_logger("dispatcher")


class ReplyDispatcher:
    def __init__(self, transport: MessageTransport, sleep: Sleep = asyncio.sleep) -> None:
        self._transport = transport
        self._sleep = sleep

    @staticmethod
    def build_message(outcome: CompletionOutcome, group_id: int, user_id: int) -> OutboundMessage:
        return OutboundMessage.reply(group_id=group_id, user_id=user_id, text=outcome.text)

    async def deliver(
        self,
        outcome: CompletionOutcome,
        group_id: int,
        user_id: int,
        policy: RetryPolicy,
    ) -> DeliveryResult:
        payload = self.build_message(outcome, group_id, user_id).to_payload()

        async def attempt(_n: int) -> None:
            await self._transport.send_group_msg(payload)

        result = await run_with_retry(
            attempt,
            policy,
            retry_on=(DeliveryFailure,),
            label="delivery",
            sleep=self._sleep,
        )
        if not result.succeeded:
            logger.error(
                "delivery_failed",
                group_id=group_id,
                attempts=result.attempts,
                error=str(result.error),
            )
            return DeliveryResult(succeeded=False, attempts=result.attempts, error=str(result.error))

        logger.info("delivery_succeeded", group_id=group_id, attempts=result.attempts)
        return DeliveryResult(succeeded=True, attempts=result.attempts)
