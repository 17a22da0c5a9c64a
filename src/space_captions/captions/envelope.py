"""Decode the three nested layers of a chat-history line.

Each line of a captured chat log looks like::

    {"kind": 1, "payload": "<chat envelope, JSON-encoded>"}

The outer object is tagged with a :class:`MessageKind`; its ``payload`` is a
JSON string holding the chat envelope, whose ``body`` is in turn a JSON
string holding the chat data. Every ``decode_*`` function raises
:class:`DecodeError` for structural problems. Filtering (non-chat kinds,
control frames without a ``uuid``, interim revisions) is not an error and
is expressed by returning ``None``.
"""

from __future__ import annotations

import json
import math
from typing import Any

from . import ChatEnvelope, ChatPayload, DecodeError, MessageKind, OuterEnvelope


def _load_object(raw: Any, stage: str) -> dict:
    if not isinstance(raw, (str, bytes)):
        raise DecodeError(stage, f"expected a JSON string, got {type(raw).__name__}")
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(stage, f"invalid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise DecodeError(stage, f"expected an object, got {type(value).__name__}")
    return value


def _optional_str(obj: dict, key: str, stage: str) -> str | None:
    value = obj.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(stage, f"'{key}' must be a string")
    return value


def _normalize_kind(kind: Any) -> int | None:
    # bool is an int subclass but never a message kind
    if isinstance(kind, bool):
        return None
    if isinstance(kind, int):
        return kind
    if isinstance(kind, float) and kind.is_integer():
        return int(kind)
    return None


def decode_outer(raw: str) -> OuterEnvelope:
    """Decode the kind-tagged wrapper.

    A missing or non-numeric ``kind`` yields ``kind=None``, which is filtered
    like any other non-chat kind. Only chat envelopes must carry a string
    ``payload``.
    """
    obj = _load_object(raw, "outer")
    kind = _normalize_kind(obj.get("kind"))
    payload = obj.get("payload")
    if not isinstance(payload, str):
        if kind == MessageKind.CHAT and payload is not None:
            raise DecodeError("outer", "'payload' must be a string")
        payload = ""
    return OuterEnvelope(kind=kind, payload=payload)


def classify_outer(envelope: OuterEnvelope) -> str | None:
    """Return the inner payload of a chat envelope, or None for any other kind."""
    if not envelope.is_chat:
        return None
    return envelope.payload


def decode_chat_envelope(payload: str) -> ChatEnvelope:
    obj = _load_object(payload, "chat")
    return ChatEnvelope(
        uuid=_optional_str(obj, "uuid", "chat"),
        body=_optional_str(obj, "body", "chat"),
    )


def genuine_chat_body(envelope: ChatEnvelope) -> str | None:
    """Return the chat data of a real chat message, or None for control frames."""
    if not envelope.is_genuine:
        return None
    if envelope.body is None:
        raise DecodeError("chat", "missing 'body'")
    return envelope.body


def _is_finite(value: float) -> bool:
    # JSON allows 1e999, Infinity and integers too large for a float
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def decode_chat_payload(body: str) -> ChatPayload:
    """Decode the chat data. A missing ``username`` decodes as ``""``; it is
    rejected only when the payload is formatted into a transcript line."""
    obj = _load_object(body, "chat-data")
    timestamp = obj.get("timestamp")
    if timestamp is not None and (isinstance(timestamp, bool) or not isinstance(timestamp, (int, float))):
        raise DecodeError("chat-data", "'timestamp' must be a number")
    if timestamp is not None and not _is_finite(timestamp):
        raise DecodeError("chat-data", "'timestamp' must be finite")
    return ChatPayload(
        final=bool(obj.get("final")),
        body=_optional_str(obj, "body", "chat-data") or "",
        username=_optional_str(obj, "username", "chat-data") or "",
        timestamp=timestamp,
    )


def unwrap(raw: str) -> ChatPayload | None:
    """Narrow a raw log line down to a finalized chat payload.

    Returns None when the line is filtered out at any layer; raises
    DecodeError when a layer is malformed.
    """
    inner = classify_outer(decode_outer(raw))
    if inner is None:
        return None
    body = genuine_chat_body(decode_chat_envelope(inner))
    if body is None:
        return None
    payload = decode_chat_payload(body)
    if not payload.is_finalized:
        return None
    return payload
