"""Tests for the static URL checker."""

import pytest

from cyberkit.analyzer.url_checker import URLChecker, check_url, invalid_url_parts, is_valid_domain
from cyberkit.constants import FindingLevel


@pytest.fixture
def checker():
    return URLChecker()


def _messages(result) -> list[str]:
    return [f.message for f in result.findings]


class TestURLChecker:
    """Findings and checklist for typical inputs."""

    def test_empty_input(self, checker):
        result = checker.check("   ")
        assert _messages(result) == ["Please enter a URL"]
        assert result.findings[0].level is FindingLevel.ERROR
        assert not result.legitimate

    def test_legitimate_url_without_scheme(self, checker):
        result = checker.check("example.com")
        assert result.url == "https://example.com"
        assert result.domain == "example.com"
        assert result.legitimate
        assert _messages(result) == ["This URL looks legitimate: https://example.com"]
        assert result.checklist == [
            "Valid URL format",
            "No suspicious TLD detected",
            "No IDN homograph issues",
            "No unusual characters in domain or path/query/fragment",
        ]

    def test_registered_domain_is_reported(self, checker):
        result = checker.check("https://secure.paypal.accounts.verify.example.com/login")
        assert result.domain == "example.com"

    def test_suspicious_tld(self, checker):
        result = checker.check("http://free-prizes.xyz")
        assert "Suspicious top-level domain: .xyz" in _messages(result)
        assert "Suspicious TLD detected" in result.checklist
        assert result.warnings
        assert not result.legitimate

    def test_custom_suspicious_tlds(self):
        checker = URLChecker(suspicious_tlds=[".zip"])
        assert not checker.check("https://example.zip").legitimate
        assert checker.check("https://example.xyz").legitimate

    @pytest.mark.parametrize(
        "value",
        ["https://bad host.com", "https://example.com:99999", "https://"],
    )
    def test_unparsable(self, checker, value):
        result = checker.check(value)
        assert _messages(result) == ["Invalid URL format"]
        assert result.checklist == ["URL could not be parsed properly"]
        assert not result.parsed

    def test_no_registered_domain(self, checker):
        result = checker.check("http://localhost:8080")
        assert "Could not extract domain" in _messages(result)
        assert "No valid domain found" in result.checklist

    def test_punycode_homograph(self, checker):
        result = checker.check("https://xn--bcher-kva.com")
        assert result.unicode_domain == "bücher.com"
        assert "Possible IDN homograph detected: bücher.com (xn--bcher-kva.com)" in _messages(
            result
        )

    def test_unicode_homograph(self, checker):
        result = checker.check("https://bücher.com/")
        assert result.ascii_domain == "xn--bcher-kva.com"
        levels = {f.level for f in result.findings}
        assert levels == {FindingLevel.WARNING}

    def test_numeric_domain(self, checker):
        result = checker.check("https://12345.com")
        assert "Domain name is numeric-only" in _messages(result)

    def test_bad_hyphen(self, checker):
        result = checker.check("https://-example-.com")
        assert (
            "Domain contains invalid characters or invalid hyphen placement" in _messages(result)
        )

    def test_invalid_path_characters(self, checker):
        result = checker.check("https://example.com/pa^th?q=<x>#frag{}")
        assert "Path contains invalid characters" in _messages(result)
        assert "Query contains invalid characters" in _messages(result)
        assert "Fragment contains invalid characters" in _messages(result)

    def test_to_dict(self, checker):
        payload = checker.check("example.com").to_dict()
        assert payload["legitimate"] is True
        assert payload["findings"] == [
            {"level": "ok", "message": "This URL looks legitimate: https://example.com"}
        ]

    def test_module_helper(self):
        assert check_url("example.com").legitimate


class TestHelpers:
    def test_is_valid_domain(self):
        assert is_valid_domain("my-site.example.com")
        assert not is_valid_domain("my_site.com")
        assert not is_valid_domain("-site.com")
        assert not is_valid_domain("site..com")

    def test_invalid_url_parts(self):
        assert invalid_url_parts("/a/b-c_d~e", "x=1&y=%20", "top") == []
        assert invalid_url_parts("/a b", "", "") == ["Path contains invalid characters"]
