"""Turn raw chat-history lines into formatted transcript lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import ChatPayload, DecodeError
from .envelope import unwrap

_LOGGER = logging.getLogger(__name__)


@dataclass
class ProcessStats:
    lines: int = 0
    emitted: int = 0
    skipped: int = 0
    failed: int = 0


def format_elapsed(ms: float) -> str:
    """Render a duration in milliseconds as ``M:SS`` or ``H:MM:SS``."""
    total_seconds = max(0, int(ms // 1000))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_line(payload: ChatPayload, session_start: float | None = None) -> str:
    """Format a finalized payload as one newline-terminated transcript line."""
    if not payload.username:
        raise DecodeError("chat-data", "missing 'username'")
    prefix = ""
    if session_start is not None:
        if payload.timestamp is None:
            raise DecodeError("chat-data", "missing 'timestamp'")
        # Clock skew can put an event before the session start
        elapsed = max(0, payload.timestamp - session_start)
        prefix = f"{format_elapsed(elapsed)} | "
    return f"{prefix}{payload.username}: {payload.body.strip()}\n"


class LineProcessor:
    """Per-line filter and formatter. Never raises for a bad line."""

    def __init__(self, session_start: float | None = None):
        self.session_start = session_start
        self.stats = ProcessStats()

    def process(self, raw_line: str, line_number: int) -> str | None:
        self.stats.lines += 1
        if not raw_line.strip():
            self.stats.skipped += 1
            return None
        try:
            payload = unwrap(raw_line)
            line = format_line(payload, self.session_start) if payload is not None else None
        except DecodeError as exc:
            self.stats.failed += 1
            _LOGGER.error(
                "Failed to process line %d: %s",
                line_number,
                exc,
                extra={"event": "line-failed", "context": {"line": line_number, "stage": exc.stage}},
            )
            return None
        except Exception as exc:
            # Anything else wrong with one line must not end the run
            self.stats.failed += 1
            _LOGGER.exception(
                "Failed to process line %d: %s",
                line_number,
                exc,
                extra={"event": "line-failed", "context": {"line": line_number, "stage": "unknown"}},
            )
            return None
        if line is None:
            self.stats.skipped += 1
        else:
            self.stats.emitted += 1
        return line
