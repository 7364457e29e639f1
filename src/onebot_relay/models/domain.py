"""Core domain objects used throughout the relay."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEGRADATION_NOTICE = "(对话降级至GPT-3.5)\n"
ALL_FAILED_NOTICE = "GPT-4、GPT-3.5尝试均失败，请稍后再试。"


@dataclass(frozen=True)
class InboundMessage:
    raw_text: str
    group_id: int
    user_id: int


class OutcomeKind(str, Enum):
    PRIMARY = "primary"
    DEGRADED_SECONDARY = "degraded_secondary"
    ALL_FAILED = "all_failed"


@dataclass(frozen=True)
class CompletionOutcome:
    kind: OutcomeKind
    text: str
    model: str | None = None
    attempts: int = 0  # completion calls made across both tiers

    @classmethod
    def primary(cls, text: str, model: str, attempts: int) -> CompletionOutcome:
        return cls(kind=OutcomeKind.PRIMARY, text=text, model=model, attempts=attempts)

    @classmethod
    def degraded(cls, text: str, model: str, attempts: int) -> CompletionOutcome:
        return cls(
            kind=OutcomeKind.DEGRADED_SECONDARY,
            text=DEGRADATION_NOTICE + text,
            model=model,
            attempts=attempts,
        )

    @classmethod
    def all_failed(cls, attempts: int) -> CompletionOutcome:
        return cls(kind=OutcomeKind.ALL_FAILED, text=ALL_FAILED_NOTICE, attempts=attempts)


class SegmentKind(str, Enum):
    AT = "at"
    TEXT = "text"


@dataclass(frozen=True)
class OutboundSegment:
    kind: SegmentKind
    payload: str

    def to_dict(self) -> dict:
        key = "qq" if self.kind is SegmentKind.AT else "text"
        return {"type": self.kind.value, "data": {key: self.payload}}


@dataclass(frozen=True)
class OutboundMessage:
    group_id: int
    segments: tuple[OutboundSegment, ...] = field(default_factory=tuple)

    @classmethod
    def reply(cls, group_id: int, user_id: int, text: str) -> OutboundMessage:
        """Mention segment first, text segment second."""
        return cls(
            group_id=group_id,
            segments=(
                OutboundSegment(SegmentKind.AT, str(user_id)),
                OutboundSegment(SegmentKind.TEXT, text),
            ),
        )

    def to_payload(self) -> dict:
        return {
            "group_id": self.group_id,
            "message": [segment.to_dict() for segment in self.segments],
        }


@dataclass(frozen=True)
class DeliveryResult:
    succeeded: bool
    attempts: int
    error: str | None = None
