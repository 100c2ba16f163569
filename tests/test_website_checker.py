"""Tests for the website checklist."""

import pytest

from cyberkit.analyzer.website_checker import check_website


class TestWebsiteChecker:
    """Checklist results and summaries."""

    def test_secure_site(self):
        result = check_website("https://www.example.com/account")
        assert result.hostname == "www.example.com"
        assert result.legitimate
        assert result.summary == "This website looks legitimate: www.example.com"
        assert [c.label for c in result.checks] == [
            "Valid URL format",
            "Uses http or https protocol",
            "Uses secure HTTPS",
            "No invalid characters in hostname",
            "Domain length is reasonable",
            "Domain is not a raw IP address",
        ]

    def test_plain_http(self):
        result = check_website("http://example.com")
        assert result.failed == ["Uses secure HTTPS"]
        assert result.summary == "This website may be suspicious: example.com"

    def test_other_scheme(self):
        result = check_website("ftp://files.example.com")
        assert "Uses http or https protocol" in result.failed
        assert "Uses secure HTTPS" in result.failed

    def test_ip_address(self):
        result = check_website("https://192.168.10.5/login")
        assert result.failed == ["Domain is not a raw IP address"]

    def test_single_character_host(self):
        assert "Domain length is reasonable" in check_website("https://a").failed

    @pytest.mark.parametrize("value", ["example.com", "", "https://exa mple.com", "https://"])
    def test_invalid_format(self, value):
        result = check_website(value)
        assert result.summary == "Invalid URL format."
        assert not result.parsed
        assert result.hostname == ""
        assert [(c.label, c.passed) for c in result.checks] == [
            ("Valid URL format", False),
            ("Starts with http or https", False),
        ]
        assert not result.legitimate

    def test_to_dict(self):
        payload = check_website("https://example.com").to_dict()
        assert payload["legitimate"] is True
        assert len(payload["checks"]) == 6

    @pytest.mark.parametrize("value", ["mailto:a@b.com", "javascript:alert(1)"])
    def test_scheme_without_host(self, value):
        """Non-web schemes parse; the checklist reports what is wrong with them."""
        result = check_website(value)
        assert result.parsed
        assert result.hostname == ""
        assert result.failed == [
            "Uses http or https protocol",
            "Uses secure HTTPS",
            "Domain length is reasonable",
        ]
        assert result.summary == f"This website may be suspicious: {value}"
