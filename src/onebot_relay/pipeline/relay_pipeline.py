"""Relay pipeline: parse -> normalize -> complete -> deliver, one reply per event."""

from __future__ import annotations

from dataclasses import dataclass

from onebot_relay.config.settings import Settings
from onebot_relay.delivery.dispatcher import ReplyDispatcher
from onebot_relay.exceptions import ParseError
from onebot_relay.generation.orchestrator import CompletionOrchestrator
from onebot_relay.models.domain import CompletionOutcome, DeliveryResult
from onebot_relay.normalization.mentions import normalize, parse_event
from onebot_relay.observability.logger import get_logger
from onebot_relay.observability.metrics import log_completion_metrics, log_delivery_metrics
from onebot_relay.observability.tracing import TraceContext

logger = get_logger("relay_pipeline")


@dataclass(frozen=True)
class RequestMeta:
    method: str
    path: str
    headers: dict[str, str]


@dataclass(frozen=True)
class HandleResult:
    trace_id: str
    outcome: CompletionOutcome
    delivery: DeliveryResult


class RelayPipeline:
    def __init__(
        self,
        orchestrator: CompletionOrchestrator,
        dispatcher: ReplyDispatcher,
        settings: Settings,
    ) -> None:
        self._orchestrator = orchestrator
        self._dispatcher = dispatcher
        self._settings = settings
        self._policy = settings.retry_policy()

    async def handle(self, body: str | bytes, meta: RequestMeta | None = None) -> HandleResult:
        """Handle one inbound event.

        Only ``ParseError`` escapes; it is raised before any external call.
        A delivery failure is logged and the invocation still counts as handled.
        """
        trace = TraceContext()
        verbose = self._settings.extra_log

        if verbose:
            self._dump_request(body, meta)

        try:
            with trace.span("parse"):
                inbound = parse_event(body)
        except ParseError as e:
            logger.error("event_parse_failed", trace_id=trace.trace_id, error=str(e))
            raise

        prompt = normalize(inbound.raw_text)
        if verbose:
            logger.info("clean_message", trace_id=trace.trace_id, prompt=prompt)

        with trace.span("completion") as span:
            outcome = await self._orchestrator.complete(prompt, self._policy)
        log_completion_metrics(trace.trace_id, outcome, span.duration_ms)

        with trace.span("delivery") as span:
            delivery = await self._dispatcher.deliver(
                outcome, inbound.group_id, inbound.user_id, self._policy
            )
        log_delivery_metrics(trace.trace_id, delivery, span.duration_ms)

        logger.info(
            "invocation_completed",
            trace_id=trace.trace_id,
            group_id=inbound.group_id,
            outcome=outcome.kind.value,
            delivered=delivery.succeeded,
            latency_ms=round(trace.elapsed_ms, 2),
            spans=trace.span_durations(),
        )
        return HandleResult(trace_id=trace.trace_id, outcome=outcome, delivery=delivery)

    @staticmethod
    def _dump_request(body: str | bytes, meta: RequestMeta | None) -> None:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        if meta is not None:
            logger.info(
                "inbound_request",
                method=meta.method,
                path=meta.path,
                headers=meta.headers,
            )
        logger.info("inbound_body", body=text)
