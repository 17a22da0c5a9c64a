"""Extractor: rebuild a caption transcript from a chat-history log."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from .captions.processor import LineProcessor
from .captions.writer import TranscriptWriter, resolve_output_path
from .config import Config
from .summarize import summarize_transcript

_LOGGER = logging.getLogger(__name__)

Summarizer = Callable[[Path, Config], object]


class CaptionsExtractor:
    """One extraction run over one chat-history log.

    Args:
        input_path: Chat-history log written by the crawler.
        output_path: Transcript path. Defaults to ``<input>.txt``.
        started_at: Session start in epoch milliseconds. When set, every
            transcript line is prefixed with the elapsed time.
        config: Runtime config. Uses defaults if None.
        summarizer: Called with the transcript path and config after
            extraction when summarization is enabled.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path | None = None,
        started_at: float | None = None,
        config: Config | None = None,
        summarizer: Summarizer | None = None,
    ):
        self.input_path = Path(input_path)
        self.output_path = resolve_output_path(self.input_path, output_path)
        self.started_at = started_at
        self.config = config if config is not None else Config()
        self.summarizer = summarizer or summarize_transcript

    async def extract(self) -> Path | None:
        """Write the transcript and return its path.

        Returns None, without creating any output, when the input log does
        not exist. I/O errors on the input or the transcript propagate.
        """
        if not self.input_path.exists():
            _LOGGER.warning(
                "Input file not found at %s",
                self.input_path,
                extra={"event": "input-missing", "context": {"input": str(self.input_path)}},
            )
            return None

        processor = await asyncio.to_thread(self._process_file)
        _LOGGER.info(
            "Captions saved to %s (%d of %d lines, %d failed)",
            self.output_path,
            processor.stats.emitted,
            processor.stats.lines,
            processor.stats.failed,
            extra={"event": "transcript-saved", "context": {"output": str(self.output_path)}},
        )

        await self._summarize()
        return self.output_path

    def _process_file(self) -> LineProcessor:
        _LOGGER.info("Loading captions from %s", self.input_path)
        processor = LineProcessor(self.started_at)
        with TranscriptWriter(self.output_path) as writer, self.input_path.open(
            encoding="utf-8", errors="replace"
        ) as lines:
            for line_number, raw in enumerate(lines, start=1):
                text = processor.process(raw.rstrip("\r\n"), line_number)
                if text is not None:
                    writer.append_line(text)
        return processor

    async def _summarize(self) -> None:
        if not self.config.summary_enabled:
            return
        if not self.output_path.exists():
            return
        _LOGGER.info("Summarizing transcript %s", self.output_path)
        try:
            await asyncio.to_thread(self.summarizer, self.output_path, self.config)
        except Exception as exc:
            # The transcript is already on disk; a failed summary must not fail the run
            _LOGGER.error(
                "Summary generation failed: %s",
                exc,
                extra={"event": "summary-failed", "context": {"output": str(self.output_path)}},
            )


def extract_captions(
    input_path: Path,
    output_path: Path | None = None,
    started_at: float | None = None,
    config: Config | None = None,
) -> Path | None:
    """Run one extraction to completion from synchronous code."""
    extractor = CaptionsExtractor(input_path, output_path, started_at, config)
    return asyncio.run(extractor.extract())
