"""Tests for the config module."""

import dataclasses
import os

import pytest

from space_captions.config import Config


class TestEnvFile:
    def test_ensure_env_file_creates_file(self, tmp_path):
        config = Config(env_file=tmp_path / "sc" / "env")
        assert config.ensure_env_file() is True
        assert config.env_file.exists()
        # Check permissions (owner-only)
        assert oct(config.env_file.stat().st_mode & 0o777) == "0o600"

    def test_ensure_env_file_idempotent(self, tmp_path):
        config = Config(env_file=tmp_path / "sc" / "env")
        config.ensure_env_file()
        assert config.ensure_env_file() is False  # already exists

    def test_load_env_file_sets_vars(self, tmp_path, monkeypatch):
        env_file = tmp_path / "env"
        env_file.write_text("TEST_SC_KEY=secret123\n")
        monkeypatch.delenv("TEST_SC_KEY", raising=False)

        Config(env_file=env_file).load_env_file()

        assert os.environ.get("TEST_SC_KEY") == "secret123"
        monkeypatch.delenv("TEST_SC_KEY", raising=False)

    def test_load_env_file_skips_comments_and_keeps_existing(self, tmp_path, monkeypatch):
        env_file = tmp_path / "env"
        env_file.write_text("# SHOULD_NOT_SET=value\nEXISTING_VAR='from_file'\n")
        monkeypatch.delenv("SHOULD_NOT_SET", raising=False)
        monkeypatch.setenv("EXISTING_VAR", "from_env")

        Config(env_file=env_file).load_env_file()

        assert os.environ.get("SHOULD_NOT_SET") is None
        assert os.environ.get("EXISTING_VAR") == "from_env"

    def test_load_missing_env_file_is_noop(self, tmp_path):
        Config(env_file=tmp_path / "nonexistent").load_env_file()  # should not raise


class TestSummarySettings:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_enabled_flag(self, raw, monkeypatch):
        monkeypatch.setenv("SPACE_CAPTIONS_SUMMARY_ENABLED", raw)
        assert Config().summary_enabled is True

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("SPACE_CAPTIONS_SUMMARY_ENABLED", raising=False)
        assert Config().summary_enabled is False

    def test_endpoint_and_key_from_env(self, monkeypatch):
        monkeypatch.setenv("SPACE_CAPTIONS_SUMMARY_API_KEY", "k-123")
        monkeypatch.setenv("SPACE_CAPTIONS_SUMMARY_API_ENDPOINT", "https://llm.example/v1")
        config = Config()
        assert config.summary_api_key == "k-123"
        assert config.summary_api_endpoint == "https://llm.example/v1"

    def test_bad_max_tokens_falls_back(self, monkeypatch):
        monkeypatch.setenv("SPACE_CAPTIONS_SUMMARY_MAX_TOKENS", "lots")
        assert Config().summary_max_tokens == 2048

    def test_config_is_immutable(self):
        config = Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.summary_enabled = True


class TestDetectProvider:
    @pytest.fixture(autouse=True)
    def _clear_keys(self, monkeypatch):
        for key in (
            "ANTHROPIC_API_KEY",
            "OPENAI_API_KEY",
            "SPACE_CAPTIONS_LLM_PROVIDER",
            "SPACE_CAPTIONS_SUMMARY_API_KEY",
            "SPACE_CAPTIONS_SUMMARY_API_ENDPOINT",
        ):
            monkeypatch.delenv(key, raising=False)

    def test_detects_anthropic(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert Config(env_file=tmp_path / "env").detect_provider() == "anthropic"

    def test_detects_openai(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert Config(env_file=tmp_path / "env").detect_provider() == "openai"

    def test_prefers_anthropic(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert Config(env_file=tmp_path / "env").detect_provider() == "anthropic"

    def test_summary_endpoint_implies_openai(self, tmp_path):
        config = Config(env_file=tmp_path / "env", summary_api_endpoint="https://llm.example/v1")
        assert config.detect_provider() == "openai"

    def test_explicit_provider_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert Config(env_file=tmp_path / "env", llm_provider="anthropic").detect_provider() == "anthropic"

    def test_raises_without_key(self, tmp_path):
        config = Config(env_file=tmp_path / "env")
        with pytest.raises(RuntimeError) as exc_info:
            config.detect_provider()
        assert "env" in str(exc_info.value).lower()
