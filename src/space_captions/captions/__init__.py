"""Chat-history message model for Space caption logs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class MessageKind(IntEnum):
    CHAT = 1
    CONTROL = 2
    AUTH = 3


class DecodeError(ValueError):
    """A log line (or one of its nested layers) is not the expected structure."""

    def __init__(self, stage: str, reason: str):
        super().__init__(f"{stage}: {reason}")
        self.stage = stage  # "outer", "chat" or "chat-data"
        self.reason = reason


@dataclass(frozen=True)
class OuterEnvelope:
    """Kind-tagged wrapper of one chat-history line."""

    kind: int | None
    payload: str

    @property
    def is_chat(self) -> bool:
        return self.kind == MessageKind.CHAT


@dataclass(frozen=True)
class ChatEnvelope:
    uuid: str | None
    body: str | None

    @property
    def is_genuine(self) -> bool:
        return bool(self.uuid)


@dataclass(frozen=True)
class ChatPayload:
    """One revision of a chat/caption utterance."""

    final: bool
    body: str
    username: str
    timestamp: float | None  # epoch milliseconds

    @property
    def is_finalized(self) -> bool:
        return self.final and bool(self.body.strip())
