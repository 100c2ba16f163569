"""Tests for configuration loading."""

import logging
from pathlib import Path

import pytest

from cyberkit.analyzer import DetectionInput, EmailDetector, URLChecker
from cyberkit.config import (
    DEFAULT_EMAIL_SCORING,
    DEFAULT_SUSPICIOUS_KEYWORDS,
    Config,
    load_config,
    validate_config,
)

HEURISTICS = """
email:
  keywords: [Lottery, "  "]
  brands:
    contoso: [www.contoso.com, contoso.net]
  attachments:
    dangerous: [.exe, iso]
  weights:
    keyword: 5
    spf_missing: -1
    bogus: 3
url:
  suspicious_tlds: [.zip]
"""


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    path.mkdir()
    monkeypatch.setenv("CONFIG_DIR", str(path))
    return path


class TestLoadConfig:
    """Environment variables and heuristics.yaml."""

    def test_defaults(self, config_dir):
        config = load_config()
        assert config.email_threshold == 7
        assert config.log_level == "INFO"
        assert config.config_dir == config_dir
        assert config.quiz_dir == config_dir / "quizzes"
        assert config.suspicious_keywords == DEFAULT_SUSPICIOUS_KEYWORDS
        assert config.email_scoring == DEFAULT_EMAIL_SCORING
        assert validate_config(config) == []

    def test_environment(self, config_dir, monkeypatch, tmp_path):
        monkeypatch.setenv("EMAIL_SCORE_THRESHOLD", "9")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("QUIZ_DIR", str(tmp_path / "banks"))
        config = load_config()
        assert config.email_threshold == 9
        assert config.log_level == "DEBUG"
        assert config.quiz_dir == tmp_path / "banks"

    def test_bad_threshold_falls_back(self, config_dir, monkeypatch, caplog):
        monkeypatch.setenv("EMAIL_SCORE_THRESHOLD", "lots")
        with caplog.at_level(logging.WARNING):
            config = load_config()
        assert config.email_threshold == 7
        assert "EMAIL_SCORE_THRESHOLD" in caplog.text

    def test_heuristics_override(self, config_dir, caplog):
        (config_dir / "heuristics.yaml").write_text(HEURISTICS, encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            config = load_config()

        assert config.suspicious_keywords == ["lottery"]
        assert config.brands == {"contoso": ["contoso.com", "contoso.net"]}
        assert config.dangerous_extensions == {"exe", "iso"}
        assert config.url_suspicious_tlds == {"zip"}
        assert config.email_scoring["keyword"] == 5
        assert config.email_scoring["spf_missing"] == DEFAULT_EMAIL_SCORING["spf_missing"]
        assert "bogus" not in config.email_scoring
        assert "Unknown scoring key" in caplog.text
        assert "Negative weight" in caplog.text

    def test_broken_heuristics_use_defaults(self, config_dir, caplog):
        (config_dir / "heuristics.yaml").write_text("email: [unclosed\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            config = load_config()
        assert config.suspicious_keywords == DEFAULT_SUSPICIOUS_KEYWORDS
        assert "Failed to parse heuristics.yaml" in caplog.text

    def test_shipped_heuristics_match_defaults(self, monkeypatch):
        repo_config = Path(__file__).resolve().parent.parent / "config"
        monkeypatch.setenv("CONFIG_DIR", str(repo_config))
        config = load_config()
        assert config.email_scoring == DEFAULT_EMAIL_SCORING
        assert validate_config(config) == []


class TestConfiguredAnalyzers:
    """Config flows into the analyzers."""

    def test_detector_from_config(self, config_dir):
        (config_dir / "heuristics.yaml").write_text(HEURISTICS, encoding="utf-8")
        detector = EmailDetector.from_config(load_config())
        result = detector.detect(
            DetectionInput(
                subject="You won the LOTTERY",
                from_address="prizes@c0ntoso.com",
                auth_results="spf=pass",
            )
        )
        assert "Suspicious keyword: 'lottery'" in result.reasons
        assert "Brand lookalike domain: c0ntoso.com imitates 'contoso'" in result.reasons
        assert result.score == 5 + 4

    def test_url_checker_from_config(self, config_dir):
        (config_dir / "heuristics.yaml").write_text(HEURISTICS, encoding="utf-8")
        checker = URLChecker.from_config(load_config())
        assert "Suspicious top-level domain: .zip" in checker.check("https://files.zip").warnings


class TestValidateConfig:
    def test_threshold_must_be_positive(self):
        errors = validate_config(Config(email_threshold=0))
        assert any("EMAIL_SCORE_THRESHOLD" in e for e in errors)

    def test_log_level(self):
        errors = validate_config(Config(log_level="loud"))
        assert any("LOG_LEVEL" in e for e in errors)

    def test_brands_required(self):
        assert validate_config(Config(brands={}))

    def test_dangerous_decoy_overlap(self):
        config = Config(dangerous_extensions={"exe", "pdf"})
        errors = validate_config(config)
        assert errors == ["Extensions cannot be both dangerous and decoy: pdf"]
