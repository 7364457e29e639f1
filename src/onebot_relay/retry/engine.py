"""Attempt-counting retry state machine shared by completion tiers and delivery.

Each retry loop is modelled as ATTEMPTING(n) -> SUCCEEDED | ATTEMPTING(n+1) | EXHAUSTED.
Every failure of the configured type is retried identically; no attempt is
made to tell transient errors from permanent ones.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from onebot_relay.exceptions import ConfigurationError
from onebot_relay.observability.logger import get_logger

logger = get_logger("retry")

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay_seconds: float = 5.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds must be >= 0, got {self.delay_seconds}")


class AttemptPhase(str, Enum):
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class RetryState:
    policy: RetryPolicy
    attempt: int = 1
    phase: AttemptPhase = AttemptPhase.ATTEMPTING
    last_error: Exception | None = None

    @property
    def done(self) -> bool:
        return self.phase is not AttemptPhase.ATTEMPTING

    @property
    def should_wait(self) -> bool:
        """True when a failed attempt is followed by another one."""
        return self.phase is AttemptPhase.ATTEMPTING and self.attempt > 1

    def record_success(self) -> None:
        self._require_attempting()
        self.phase = AttemptPhase.SUCCEEDED
        self.last_error = None

    def record_failure(self, error: Exception) -> None:
        self._require_attempting()
        self.last_error = error
        if self.attempt >= self.policy.max_attempts:
            self.phase = AttemptPhase.EXHAUSTED
        else:
            self.attempt += 1

    def _require_attempting(self) -> None:
        if self.done:
            raise RuntimeError(f"retry state already {self.phase.value}")


@dataclass(frozen=True)
class RetryResult(Generic[T]):
    value: T | None
    attempts: int
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def run_with_retry(
    operation: Callable[[int], Awaitable[T]],
    policy: RetryPolicy,
    retry_on: tuple[type[Exception], ...],
    label: str,
    sleep: Sleep = asyncio.sleep,
) -> RetryResult[T]:
    """Call ``operation(attempt)`` until it succeeds or the budget is spent.

    Only exceptions in ``retry_on`` count as failed attempts; anything else
    propagates. The delay is applied between attempts, never after the last.
    """
    state = RetryState(policy=policy)
    value: T | None = None

    while not state.done:
        if state.should_wait:
            await sleep(policy.delay_seconds)
        try:
            value = await operation(state.attempt)
        except retry_on as e:
            logger.warning(
                "attempt_failed",
                label=label,
                attempt=state.attempt,
                max_attempts=policy.max_attempts,
                error=str(e),
            )
            state.record_failure(e)
        else:
            state.record_success()

    if state.phase is AttemptPhase.EXHAUSTED:
        logger.warning("attempts_exhausted", label=label, attempts=state.attempt)
        return RetryResult(value=None, attempts=state.attempt, error=state.last_error)
    return RetryResult(value=value, attempts=state.attempt)
