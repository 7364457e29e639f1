"""Metric recording helpers for relay invocations."""

from __future__ import annotations

from onebot_relay.models.domain import CompletionOutcome, DeliveryResult
from onebot_relay.observability.logger import get_logger

logger = get_logger("metrics")


def log_completion_metrics(trace_id: str, outcome: CompletionOutcome, duration_ms: float) -> None:
    logger.info(
        "completion_metrics",
        trace_id=trace_id,
        outcome=outcome.kind.value,
        model=outcome.model,
        attempts=outcome.attempts,
        reply_len=len(outcome.text),
        duration_ms=round(duration_ms, 2),
    )


def log_delivery_metrics(trace_id: str, result: DeliveryResult, duration_ms: float) -> None:
    logger.info(
        "delivery_metrics",
        trace_id=trace_id,
        delivered=result.succeeded,
        attempts=result.attempts,
        duration_ms=round(duration_ms, 2),
    )
