"""Shared test fixtures."""

from __future__ import annotations

import json

import pytest

from onebot_relay.config.settings import Settings
from onebot_relay.delivery.dispatcher import ReplyDispatcher
from onebot_relay.exceptions import CompletionFailure, DeliveryFailure
from onebot_relay.generation.orchestrator import CompletionOrchestrator
from onebot_relay.pipeline.relay_pipeline import RelayPipeline
from onebot_relay.retry.engine import RetryPolicy


class FakeCompletionClient:
    """Replays a scripted list of replies/errors per model; the last entry repeats."""

    def __init__(self, script: dict[str, list] | None = None) -> None:
        self._script = script or {}
        self.calls: list[tuple[str, str]] = []

    async def complete(self, prompt: str, model: str) -> str:
        self.calls.append((prompt, model))
        steps = self._script.get(model) or [CompletionFailure("no script", model=model)]
        n = self.calls_for(model)
        step = steps[min(n, len(steps)) - 1]
        if isinstance(step, Exception):
            raise step
        return step

    def calls_for(self, model: str) -> int:
        return sum(1 for _, m in self.calls if m == model)


class FakeTransport:
    """Records payloads; fails the first ``failures`` sends."""

    def __init__(self, failures: int = 0) -> None:
        self._failures = failures
        self.payloads: list[dict] = []

    async def send_group_msg(self, payload: dict) -> None:
        self.payloads.append(payload)
        if len(self.payloads) <= self._failures:
            raise DeliveryFailure("connection refused")


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def _group_event(
    raw_message: str = "[CQ:at,qq=12345]hello", group_id: int = 100, user_id: int = 12345
) -> str:
    return json.dumps(
        {
            "post_type": "message",
            "message_type": "group",
            "sub_type": "normal",
            "time": 1680000000,
            "self_id": 10000,
            "message_id": 42,
            "raw_message": raw_message,
            "message": raw_message,
            "group_id": group_id,
            "user_id": user_id,
            "font": 0,
            "sender": {"user_id": user_id, "nickname": "tester", "role": "member"},
            "anonymous": None,
        },
        ensure_ascii=False,
    )


@pytest.fixture
def primary_model():
    return "gpt-4-0314"


@pytest.fixture
def secondary_model():
    return "gpt-3.5-turbo-0301"


@pytest.fixture
def make_client():
    """Factory for a scripted completion client keyed by model name."""
    return FakeCompletionClient


@pytest.fixture
def make_transport():
    """Factory for a recording gateway transport."""
    return FakeTransport


@pytest.fixture
def group_event():
    """Builder for a OneBot group message event body."""
    return _group_event


@pytest.fixture
def settings(primary_model, secondary_model):
    """Test settings: two attempts per tier, no delay."""
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        recv_addr="http://gateway.test",
        max_retries=2,
        retry_delay=0,
        primary_model=primary_model,
        secondary_model=secondary_model,
    )


@pytest.fixture
def policy():
    return RetryPolicy(max_attempts=3, delay_seconds=5)


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def make_pipeline(settings, sleep):
    """Build a pipeline around fake collaborators."""

    def _make(client, transport, pipeline_settings: Settings | None = None) -> RelayPipeline:
        active = pipeline_settings or settings
        orchestrator = CompletionOrchestrator(
            client=client,
            primary_model=active.primary_model,
            secondary_model=active.secondary_model,
            sleep=sleep,
        )
        dispatcher = ReplyDispatcher(transport=transport, sleep=sleep)
        return RelayPipeline(orchestrator=orchestrator, dispatcher=dispatcher, settings=active)

    return _make
