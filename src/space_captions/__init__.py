"""Rebuild readable transcripts from Space chat-history logs."""

__version__ = "0.1.0"
