"""Tests for the command-line front end and text formatters."""

import io
import json

import pytest

from cyberkit.analyzer import DetectionInput, EmailDetector, analyze_password
from cyberkit.formatters import format_email_result, format_password_report
from cyberkit.main import _read_choice, main, run_quiz
from cyberkit.quiz import BUILTIN_QUIZZES


def _scripted(answers):
    """input() replacement that replays answers, then signals EOF."""
    replies = iter(answers)

    def _input(prompt=""):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    return _input


class TestEmailCommand:
    def test_json_output(self, capsys):
        assert main(["email", "--from", "support@paypa1.com", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["score"] == 6
        assert payload["category"] == "Likely Safe"
        assert "Brand lookalike domain: paypa1.com imitates 'paypal'" in payload["reasons"]

    def test_disable_and_threshold(self, capsys):
        argv = [
            "email",
            "--from", "support@paypa1.com",
            "--attachment", "invoice.pdf.exe",
            "--disable", "headers",
            "--threshold", "4",
            "--json",
        ]
        assert main(argv) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["score"] == 9
        assert payload["threshold"] == 4
        assert payload["category"] == "Suspicious"

    def test_body_file(self, capsys, tmp_path):
        body = tmp_path / "body.txt"
        body.write_text("Please reset password immediately", encoding="utf-8")
        assert main(["email", "--body-file", str(body), "--auth-results", "spf=pass"]) == 0
        out = capsys.readouterr().out
        assert "Suspicious keyword: 'reset password' (+1)" in out
        assert "Score: 2 (threshold 7)" in out

    def test_missing_body_file(self, tmp_path):
        assert main(["email", "--body-file", str(tmp_path / "missing.txt")]) == 2

    def test_invalid_rule_group(self):
        with pytest.raises(SystemExit):
            main(["email", "--disable", "everything"])

    @pytest.mark.parametrize("value", ["0", "-1", "seven"])
    def test_threshold_must_be_positive(self, value, capsys):
        with pytest.raises(SystemExit):
            main(["email", "--threshold", value])
        assert "--threshold" in capsys.readouterr().err


class TestOtherCommands:
    def test_url(self, capsys):
        assert main(["url", "example.com"]) == 0
        assert "This URL looks legitimate: https://example.com" in capsys.readouterr().out

    def test_url_unparsable(self, capsys):
        assert main(["url", "https://example.com:99999"]) == 1
        assert "Invalid URL format" in capsys.readouterr().out

    def test_website(self, capsys):
        assert main(["website", "http://example.com"]) == 0
        out = capsys.readouterr().out
        assert "This website may be suspicious: example.com" in out
        assert "❌ Uses secure HTTPS" in out

    def test_website_without_host(self, capsys):
        assert main(["website", "mailto:a@b.com"]) == 0
        assert "⚠️ This website may be suspicious: mailto:a@b.com" in capsys.readouterr().out

    def test_website_invalid(self, capsys):
        assert main(["website", "example.com", "--json"]) == 1
        assert json.loads(capsys.readouterr().out)["summary"] == "Invalid URL format."

    def test_password_argument(self, capsys):
        assert main(["password", "Password1!", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["level"] == "Strong"

    def test_password_prompt(self, capsys, monkeypatch):
        monkeypatch.setattr("getpass.getpass", lambda prompt="": "abc")
        assert main(["password", "--hashes", "--details"]) == 0
        out = capsys.readouterr().out
        assert "Password Strength: Weak" in out
        assert "Hash-Based Estimates:" in out
        assert "CPU: Intel Core i5-10400" in out

    def test_invalid_config(self, monkeypatch):
        monkeypatch.setenv("EMAIL_SCORE_THRESHOLD", "-1")
        assert main(["url", "example.com"]) == 2

    def test_quiz_list(self, capsys):
        assert main(["quiz", "--list"]) == 0
        out = capsys.readouterr().out
        assert "phish: Detect Phishing Emails (3 questions)" in out

    def test_quiz_unknown_topic(self, capsys):
        assert main(["quiz", "--topic", "nope"]) == 2
        assert "Unknown quiz 'nope'" in capsys.readouterr().err


class TestRunQuiz:
    """Interactive quiz loop with scripted answers."""

    def test_perfect_run(self):
        out = io.StringIO()
        # URL quiz answers are B then C; a bad entry is re-prompted
        score = run_quiz(BUILTIN_QUIZZES["url"], _scripted(["z", "b", "3"]), out)
        text = out.getvalue()
        assert score == 2
        assert "Please choose one of the listed options." in text
        assert "Question 2 of 2" in text
        assert text.startswith("URLs: Detect Malicious or Typosquatted URLs")
        assert text.rstrip().endswith("Your score: 2 / 2")

    def test_wrong_answer_shows_correct_choice(self):
        out = io.StringIO()
        run_quiz(BUILTIN_QUIZZES["url"], _scripted(["a", "c"]), out)
        assert "❌ Not quite. The answer is B. https://goog1e.com" in out.getvalue()

    def test_eof_ends_quiz(self):
        out = io.StringIO()
        assert run_quiz(BUILTIN_QUIZZES["phish"], _scripted([]), out) == 0
        assert "Your score: 0 / 3" in out.getvalue()

    @pytest.mark.parametrize(
        "raw, expected",
        [("a", 0), ("D", 3), ("2", 1), ("", None), ("e", None), ("0", None), ("ab", None)],
    )
    def test_read_choice(self, raw, expected):
        assert _read_choice(raw, 4) == expected


class TestFormatters:
    def test_email_result(self):
        result = EmailDetector().detect(DetectionInput(auth_results="spf=pass"))
        text = format_email_result(result)
        assert text.startswith("✅ Likely Safe")
        assert "No risk indicators found." in text

    def test_empty_password(self):
        assert format_password_report(analyze_password("")) == "Enter a password to analyze."
