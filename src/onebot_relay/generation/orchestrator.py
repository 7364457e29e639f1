"""Two-tier completion with per-tier retry and a fixed notice on exhaustion."""

from __future__ import annotations

import asyncio

from onebot_relay.exceptions import CompletionFailure
from onebot_relay.models.domain import CompletionOutcome
from onebot_relay.observability.logger import get_logger
from onebot_relay.protocols.llm import CompletionClient
from onebot_relay.retry.engine import RetryPolicy, RetryResult, Sleep, run_with_retry

logger = get_logger("orchestrator")


class CompletionOrchestrator:
    """Primary model first, then the secondary model, each with its own budget.

    Worst case makes ``2 * max_attempts`` calls. The outcome is never an
    exception: total failure becomes ``CompletionOutcome.all_failed``.
    """

    def __init__(
        self,
        client: CompletionClient,
        primary_model: str,
        secondary_model: str,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._primary_model = primary_model
        self._secondary_model = secondary_model
        self._sleep = sleep

    async def complete(self, prompt: str, policy: RetryPolicy) -> CompletionOutcome:
        primary = await self._run_tier(prompt, self._primary_model, policy)
        if primary.succeeded:
            return CompletionOutcome.primary(
                primary.value, model=self._primary_model, attempts=primary.attempts
            )

        logger.warning(
            "primary_tier_exhausted",
            primary_model=self._primary_model,
            secondary_model=self._secondary_model,
            attempts=primary.attempts,
        )

        secondary = await self._run_tier(prompt, self._secondary_model, policy)
        total = primary.attempts + secondary.attempts
        if secondary.succeeded:
            return CompletionOutcome.degraded(
                secondary.value, model=self._secondary_model, attempts=total
            )

        logger.error("all_tiers_exhausted", attempts=total, error=str(secondary.error))
        return CompletionOutcome.all_failed(attempts=total)

    async def _run_tier(self, prompt: str, model: str, policy: RetryPolicy) -> RetryResult[str]:
        async def attempt(_n: int) -> str:
            return await self._client.complete(prompt, model)

        return await run_with_retry(
            attempt,
            policy,
            retry_on=(CompletionFailure,),
            label=f"completion:{model}",
            sleep=self._sleep,
        )
