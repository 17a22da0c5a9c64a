"""Paths, defaults, and environment detection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


ENV_FILE_TEMPLATE = """\
# space-captions settings
# This file is loaded by space-captions before every command.
# It is NOT committed to any repo. Keep it private.

# Summarize transcripts after extraction
# SPACE_CAPTIONS_SUMMARY_ENABLED=true

# Provider keys (Anthropic is preferred when both exist)
# ANTHROPIC_API_KEY=sk-ant-...
# OPENAI_API_KEY=sk-...

# Or an OpenAI-compatible endpoint with its own key
# SPACE_CAPTIONS_SUMMARY_API_KEY=...
# SPACE_CAPTIONS_SUMMARY_API_ENDPOINT=https://example.invalid/v1
"""


@dataclass(frozen=True)
class Config:
    """Runtime configuration, resolved once from env vars and defaults."""

    # Env file for API keys and flags
    env_file: Path = field(default_factory=lambda: _xdg_config_home() / "space-captions" / "env")

    # Summarization
    summary_enabled: bool = field(default_factory=lambda: _env_flag("SPACE_CAPTIONS_SUMMARY_ENABLED"))
    summary_api_key: str | None = field(
        default_factory=lambda: os.environ.get("SPACE_CAPTIONS_SUMMARY_API_KEY") or None
    )
    summary_api_endpoint: str | None = field(
        default_factory=lambda: os.environ.get("SPACE_CAPTIONS_SUMMARY_API_ENDPOINT") or None
    )
    summary_max_tokens: int = field(default_factory=lambda: _env_int("SPACE_CAPTIONS_SUMMARY_MAX_TOKENS", 2048))
    summary_max_chars: int = 200_000  # transcript chars sent to the LLM

    # LLM settings
    llm_provider: str | None = field(
        default_factory=lambda: os.environ.get("SPACE_CAPTIONS_LLM_PROVIDER") or None
    )  # "anthropic" | "openai" | None (auto-detect)
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_model: str = "gpt-4o-mini"

    def load_env_file(self) -> None:
        """Load settings from the env file into os.environ (if not already set)."""
        if not self.env_file.exists():
            return
        for line in self.env_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip("'\"")
            # Don't overwrite keys already in the environment
            if key and key not in os.environ:
                os.environ[key] = value

    def ensure_env_file(self) -> bool:
        """Create the env file from template if it doesn't exist. Returns True if created."""
        if self.env_file.exists():
            return False
        self.env_file.parent.mkdir(parents=True, exist_ok=True)
        self.env_file.write_text(ENV_FILE_TEMPLATE)
        self.env_file.chmod(0o600)
        return True

    def detect_provider(self) -> str:
        """Auto-detect which LLM API to use based on available keys."""
        if self.llm_provider:
            return self.llm_provider
        if os.environ.get("ANTHROPIC_API_KEY"):
            return "anthropic"
        if os.environ.get("OPENAI_API_KEY"):
            return "openai"
        if self.summary_api_key or self.summary_api_endpoint:
            # A bare key/endpoint pair is assumed to speak the OpenAI protocol
            return "openai"
        raise RuntimeError(
            "No LLM API key found. Add your key to "
            f"{self.env_file} or set ANTHROPIC_API_KEY / OPENAI_API_KEY."
        )
