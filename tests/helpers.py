"""Builders for chat-history log lines."""

import json


def chat_data(username="alice", body="hello", timestamp=1050, final=True) -> str:
    return json.dumps({
        "type": 45,
        "final": final,
        "body": body,
        "username": username,
        "timestamp": timestamp,
    })


def chat_line(username="alice", body="hello", timestamp=1050, final=True, uuid="msg-001") -> str:
    envelope = {"body": chat_data(username, body, timestamp, final)}
    if uuid is not None:
        envelope["uuid"] = uuid
    return json.dumps({"kind": 1, "payload": json.dumps(envelope)})


def control_line() -> str:
    return json.dumps({"kind": 2, "payload": json.dumps({"kind": 4, "sender": {"user_id": "1"}})})


def write_log(path, lines) -> None:
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")


def wrap_chat_data(data: str, uuid="msg-001") -> str:
    """Wrap hand-written chat data, e.g. with literals json.dumps never emits."""
    return json.dumps({"kind": 1, "payload": json.dumps({"uuid": uuid, "body": data})})
