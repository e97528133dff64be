"""Tests for OnionchainConfig."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from onionchain.core.config import OnionchainConfig


class TestOnionchainConfig:
    def test_default_values(self):
        config = OnionchainConfig()
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.log_dir is None
        assert config.log_max_bytes == 10_485_760
        assert config.log_backup_count == 5
        assert config.demo_name == "Alice"

    def test_log_level_normalized(self):
        config = OnionchainConfig(log_level=" debug ")
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="unknown log level"):
            OnionchainConfig(log_level="chatty")

    def test_unknown_log_format_rejected(self):
        with pytest.raises(ValidationError):
            OnionchainConfig(log_format="xml")

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ONIONCHAIN_LOG_LEVEL", "warning")
        monkeypatch.setenv("ONIONCHAIN_LOG_FORMAT", "json")
        monkeypatch.setenv("ONIONCHAIN_LOG_DIR", str(tmp_path))
        monkeypatch.setenv("ONIONCHAIN_DEMO_NAME", "Bob")
        config = OnionchainConfig()
        assert config.log_level == "WARNING"
        assert config.log_format == "json"
        assert config.log_dir == Path(tmp_path)
        assert config.demo_name == "Bob"
