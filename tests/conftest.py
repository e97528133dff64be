"""Shared fixtures for testing."""

from __future__ import annotations

import os

import pytest

from onionchain.core.config import OnionchainConfig


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Prevent .env file and shell env from leaking into tests."""
    monkeypatch.setitem(OnionchainConfig.model_config, "env_file", None)
    for key in list(os.environ):
        if key.startswith("ONIONCHAIN_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def events():
    return []


@pytest.fixture
def recording(events):
    """Factory for middleware that logs entry and exit into ``events``."""

    def _make(label: str):
        async def _mw(ctx, call_next):
            events.append(f"{label}-start")
            await call_next()
            events.append(f"{label}-end")

        _mw.__name__ = f"mw_{label}"
        return _mw

    return _make
