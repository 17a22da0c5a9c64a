"""Summarizer: condense a finished transcript with an LLM."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Config
from .llm import compress

_LOGGER = logging.getLogger(__name__)

SUMMARIZER_PROMPT_PATH = Path(__file__).parent / "prompts" / "summarizer.md"


def summary_path_for(transcript_path: Path) -> Path:
    return transcript_path.with_name(transcript_path.name + ".summary.md")


def summarize_transcript(transcript_path: Path, config: Config | None = None) -> Path | None:
    """Summarize a transcript file and write ``<transcript>.summary.md``.

    Args:
        transcript_path: Path to a plain-text transcript.
        config: Runtime config. Uses defaults if None.

    Returns:
        Path of the written summary, or None if the transcript is empty.
    """
    if config is None:
        config = Config()

    transcript_path = Path(transcript_path)
    transcript = transcript_path.read_text(encoding="utf-8")
    if not transcript.strip():
        _LOGGER.info("Transcript %s is empty, nothing to summarize", transcript_path)
        return None

    if len(transcript) > config.summary_max_chars:
        _LOGGER.warning(
            "Transcript %s has %d chars, summarizing the first %d",
            transcript_path,
            len(transcript),
            config.summary_max_chars,
        )
        transcript = transcript[: config.summary_max_chars]

    _LOGGER.info("Summarizing %s", transcript_path)
    user_content = f"## Transcript\n\n{transcript}"
    result = compress(_load_summarizer_prompt(), user_content, config, max_tokens=config.summary_max_tokens)

    out = summary_path_for(transcript_path)
    out.write_text(result.rstrip() + "\n", encoding="utf-8")
    _LOGGER.info("Summary saved to %s", out)
    return out


def _load_summarizer_prompt() -> str:
    """Load the summarizer system prompt."""
    if SUMMARIZER_PROMPT_PATH.exists():
        return SUMMARIZER_PROMPT_PATH.read_text()
    # Fallback minimal prompt
    return (
        "You are summarizing the live captions of an audio Space. Each line is "
        "'elapsed | speaker: text'. Write a short markdown summary: the main topics "
        "in order, notable claims or announcements with their speaker, and any "
        "open questions. Output only the summary."
    )
