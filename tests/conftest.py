from __future__ import annotations

import pytest

_ENV_VARS = ("SLACKMD_LOG_LEVEL", "SLACKMD_CALLBACK_PREFIX", "SLACKMD_SUPPORT_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without slackmd env vars; undo anything .env loading sets."""
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
