"""Domain and link extraction utilities."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from email.utils import parseaddr
from urllib.parse import urlparse

import tldextract

# Offline extractor: bundled public-suffix snapshot only, never fetched.
_extract = tldextract.TLDExtract(suffix_list_urls=())

_PLAIN_URL_RE = re.compile(r"""https?://[^\s<>"'\]\[()]+""", re.IGNORECASE)
_MARKDOWN_LINK_RE = re.compile(r"\[([^\]]*)\]\(\s*(https?://[^)\s]+)\s*\)", re.IGNORECASE)
_HTML_ANCHOR_RE = re.compile(
    r"""<a\s[^>]*?href\s*=\s*["']([^"']+)["'][^>]*>(.*?)</a\s*>""",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]+>")
_TRAILING_PUNCT = ".,;:!?"


@dataclass(frozen=True)
class ExtractedLink:
    """A link found in free text."""

    url: str
    text: str
    kind: str  # plain | markdown | html

    @property
    def has_distinct_text(self) -> bool:
        return self.kind != "plain" and bool(self.text) and self.text != self.url


def ensure_url(value: str) -> str:
    """Prefix a scheme when the value does not carry one."""
    raw = (value or "").strip()
    if not raw:
        return ""
    if re.match(r"^[a-z][a-z0-9+.-]*://", raw, re.IGNORECASE):
        return raw
    return f"https://{raw}"


def extract_hostname(value: str) -> str:
    """Return the lowercase hostname of a URL or bare host, or "" if malformed."""
    raw = (value or "").strip()
    if not raw:
        return ""
    try:
        parsed = urlparse(ensure_url(raw))
        host = parsed.hostname or ""
        # Accessing the port validates it.
        parsed.port
    except ValueError:
        return ""
    return host.strip(".").lower()


def canonicalize_domain(value: str) -> str:
    """
    Normalize a domain/URL to a canonical host key.

    - Lowercase
    - Strip leading "www."
    - Ignore port/path/query/fragment
    """
    host = extract_hostname(value)
    if host.startswith("www.") and len(host) > 4:
        host = host[4:]
    return host


def registered_domain(value: str, fallback: bool = True) -> str:
    """Return the registrable domain (eTLD+1) for a host or URL.

    Hosts without a recognised public suffix (IPs, intranet names) fall back
    to the raw hostname unless ``fallback`` is False, in which case "" is
    returned.
    """
    host = canonicalize_domain(value)
    if not host:
        return ""
    extracted = _extract(host)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return host if fallback else ""


def domain_label(value: str) -> str:
    """Return the registrable label, e.g. "paypal" for "www.paypal.co.uk"."""
    host = canonicalize_domain(value)
    if not host:
        return ""
    extracted = _extract(host)
    if extracted.domain and extracted.suffix:
        return extracted.domain.lower()
    return host.split(".")[0]


def public_suffix(value: str) -> str:
    """Return the public suffix of a host, or "" when none is recognised."""
    host = canonicalize_domain(value)
    if not host:
        return ""
    return _extract(host).suffix.lower()


def split_address(value: str) -> tuple[str, str]:
    """Split an RFC 5322 address into (display name, lowercase address)."""
    name, address = parseaddr(value or "")
    address = address.strip().lower()
    if "@" not in address:
        return name.strip(), ""
    return name.strip(), address


def address_domain(value: str) -> str:
    """Return the host part of an email address ("" if none)."""
    _, address = split_address(value)
    if not address:
        return ""
    return canonicalize_domain(address.rsplit("@", 1)[1])


def _clean_url(url: str) -> str:
    return html.unescape(url.strip()).rstrip(_TRAILING_PUNCT)


def _visible_text(fragment: str) -> str:
    text = _TAG_RE.sub(" ", fragment or "")
    return " ".join(html.unescape(text).split())


def extract_links(text: str) -> list[ExtractedLink]:
    """Extract plain URLs, Markdown links and HTML anchors in order of appearance."""
    if not text:
        return []

    found: list[tuple[int, ExtractedLink]] = []
    covered: list[tuple[int, int]] = []

    for match in _MARKDOWN_LINK_RE.finditer(text):
        link = ExtractedLink(_clean_url(match.group(2)), match.group(1).strip(), "markdown")
        found.append((match.start(), link))
        covered.append(match.span())

    for match in _HTML_ANCHOR_RE.finditer(text):
        link = ExtractedLink(_clean_url(match.group(1)), _visible_text(match.group(2)), "html")
        found.append((match.start(), link))
        covered.append(match.span())

    for match in _PLAIN_URL_RE.finditer(text):
        start = match.start()
        if any(lo <= start < hi for lo, hi in covered):
            continue
        url = _clean_url(match.group(0))
        found.append((start, ExtractedLink(url, url, "plain")))

    found.sort(key=lambda item: item[0])

    links: list[ExtractedLink] = []
    seen: set[tuple[str, str]] = set()
    for _, link in found:
        if not link.url:
            continue
        key = (link.url, link.text)
        if key in seen:
            continue
        seen.add(key)
        links.append(link)
    return links

