"""Global pytest configuration."""

from __future__ import annotations

import pytest

from cyberkit.analyzer import EmailDetector


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep host environment and the repo's config/ out of every test."""
    for name in ("EMAIL_SCORE_THRESHOLD", "LOG_LEVEL", "QUIZ_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path / "config"))


@pytest.fixture
def detector():
    """Email detector with the built-in heuristics."""
    return EmailDetector()
