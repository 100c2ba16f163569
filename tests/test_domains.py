"""Tests for domain and link extraction helpers."""

from cyberkit.utils.domains import (
    address_domain,
    canonicalize_domain,
    domain_label,
    ensure_url,
    extract_hostname,
    extract_links,
    public_suffix,
    registered_domain,
    split_address,
)


class TestHostnames:
    """Hostname and registered-domain resolution."""

    def test_ensure_url_adds_scheme(self):
        assert ensure_url("example.com") == "https://example.com"
        assert ensure_url("http://example.com") == "http://example.com"
        assert ensure_url("   ") == ""

    def test_extract_hostname_lowercases(self):
        assert extract_hostname("HTTPS://Mail.Example.COM/inbox") == "mail.example.com"

    def test_extract_hostname_malformed(self):
        """Malformed input yields an empty host rather than raising."""
        assert extract_hostname("http://[broken") == ""
        assert extract_hostname("http://example.com:notaport") == ""
        assert extract_hostname("") == ""

    def test_canonicalize_strips_www_and_port(self):
        assert canonicalize_domain("WWW.Example.COM:8080/path?q=1") == "example.com"

    def test_registered_domain_multi_part_suffix(self):
        assert registered_domain("https://login.example.co.uk/path") == "example.co.uk"
        assert registered_domain("secure.paypal.accounts.verify.example.com") == "example.com"

    def test_registered_domain_fallback(self):
        """Hosts without a public suffix fall back to the host unless disabled."""
        assert registered_domain("http://localhost:8000") == "localhost"
        assert registered_domain("http://localhost:8000", fallback=False) == ""

    def test_registered_domain_malformed(self):
        assert registered_domain("http://[broken") == ""

    def test_domain_label_and_suffix(self):
        assert domain_label("www.paypal.co.uk") == "paypal"
        assert public_suffix("shop.example.co.uk") == "co.uk"


class TestAddresses:
    """RFC 5322 address parsing."""

    def test_display_name_address(self):
        assert split_address("PayPal <Support@PayPal.com>") == ("PayPal", "support@paypal.com")
        assert address_domain("PayPal <Support@PayPal.com>") == "paypal.com"

    def test_bare_address(self):
        assert address_domain("billing@mail.contoso.com") == "mail.contoso.com"

    def test_not_an_address(self):
        assert address_domain("not an address") == ""
        assert address_domain("") == ""


class TestExtractLinks:
    """Markdown, HTML and plain URL extraction."""

    def test_all_link_kinds_in_order(self):
        text = (
            "See [docs](https://docs.example.com/a) and "
            '<a href="https://evil-site.net/x">https://bank.com</a> '
            "or https://plain.example.org/page."
        )
        links = extract_links(text)
        assert [link.kind for link in links] == ["markdown", "html", "plain"]
        assert links[0].url == "https://docs.example.com/a"
        assert links[0].text == "docs"
        assert links[1].url == "https://evil-site.net/x"
        assert links[1].text == "https://bank.com"
        # Trailing punctuation is not part of the URL
        assert links[2].url == "https://plain.example.org/page"

    def test_html_anchor_text_is_visible_text(self):
        text = '<a class="btn" href="https://example.com/login"><b>Sign&nbsp;in</b> now</a>'
        (link,) = extract_links(text)
        assert link.text == "Sign in now"
        assert link.has_distinct_text

    def test_plain_url_text_is_url(self):
        (link,) = extract_links("go to https://example.com/x")
        assert link.text == link.url
        assert not link.has_distinct_text

    def test_duplicates_removed(self):
        links = extract_links("https://a.example.com https://a.example.com")
        assert len(links) == 1

    def test_same_url_with_different_text(self):
        """Same destination with different visible text is kept twice."""
        text = "[click](https://a.example.com) or https://a.example.com"
        assert [link.kind for link in extract_links(text)] == ["markdown", "plain"]

    def test_empty_text(self):
        assert extract_links("") == []
        assert extract_links(None) == []
