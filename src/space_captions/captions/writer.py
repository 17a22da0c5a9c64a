"""Append-only transcript file."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_output_path(input_path: Path, output_path: Path | None = None) -> Path:
    """Pick the transcript path, never the input log itself.

    Defaults to ``<input>.txt``. An explicit output equal to the input gets
    an extra ``.txt`` suffix.
    """
    input_path = Path(input_path)
    if output_path is None:
        return input_path.with_name(input_path.name + ".txt")
    output_path = Path(output_path)
    if output_path == input_path or (output_path.exists() and output_path.resolve() == input_path.resolve()):
        return output_path.with_name(output_path.name + ".txt")
    return output_path


class TranscriptWriter:
    """Truncates the transcript on enter, appends durably, closes on exit.

    Usage::

        with TranscriptWriter(path) as writer:
            writer.append_line("alice: hi\\n")
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.lines_written = 0
        self._fh = None

    def __enter__(self) -> TranscriptWriter:
        self._fh = self.path.open("w", encoding="utf-8", newline="\n")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def append_line(self, text: str) -> None:
        if self._fh is None:
            raise RuntimeError(f"Transcript {self.path} is not open")
        self._fh.write(text)
        self._fh.flush()
        os.fsync(self._fh.fileno())
        self.lines_written += 1
