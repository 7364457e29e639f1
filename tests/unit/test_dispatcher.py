"""Tests for reply building and delivery retry."""

from __future__ import annotations

from onebot_relay.delivery.dispatcher import ReplyDispatcher
from onebot_relay.models.domain import ALL_FAILED_NOTICE, CompletionOutcome


async def test_payload_shape(make_transport, policy, sleep):
    transport = make_transport()
    outcome = CompletionOutcome.primary("reply", model="m", attempts=1)
    result = await ReplyDispatcher(transport, sleep=sleep).deliver(outcome, 100, 12345, policy)

    assert result.succeeded
    assert result.attempts == 1
    assert transport.payloads == [
        {
            "group_id": 100,
            "message": [
                {"type": "at", "data": {"qq": "12345"}},
                {"type": "text", "data": {"text": "reply"}},
            ],
        }
    ]
    assert sleep.delays == []


async def test_large_user_id_is_decimal_string(make_transport, policy, sleep):
    transport = make_transport()
    outcome = CompletionOutcome.primary("x", model="m", attempts=1)
    await ReplyDispatcher(transport, sleep=sleep).deliver(outcome, 1, 2**64 - 1, policy)
    at, text = transport.payloads[0]["message"]
    assert at == {"type": "at", "data": {"qq": "18446744073709551615"}}
    assert text["type"] == "text"


async def test_retries_then_succeeds(make_transport, policy, sleep):
    transport = make_transport(failures=2)
    outcome = CompletionOutcome.primary("x", model="m", attempts=1)
    result = await ReplyDispatcher(transport, sleep=sleep).deliver(outcome, 1, 2, policy)

    assert result.succeeded
    assert result.attempts == 3
    assert len(transport.payloads) == 3
    assert sleep.delays == [5, 5]


async def test_exhaustion_reports_failure(make_transport, policy, sleep):
    transport = make_transport(failures=10)
    outcome = CompletionOutcome.primary("x", model="m", attempts=1)
    result = await ReplyDispatcher(transport, sleep=sleep).deliver(outcome, 1, 2, policy)

    assert not result.succeeded
    assert result.attempts == policy.max_attempts
    assert "connection refused" in result.error
    assert len(transport.payloads) == policy.max_attempts


async def test_all_failed_notice_is_delivered(make_transport, policy, sleep):
    transport = make_transport()
    outcome = CompletionOutcome.all_failed(attempts=6)
    await ReplyDispatcher(transport, sleep=sleep).deliver(outcome, 7, 8, policy)
    assert transport.payloads[0]["message"][1]["data"]["text"] == ALL_FAILED_NOTICE
