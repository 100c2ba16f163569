"""Static URL validation.

Analyzes a URL without fetching it:

- input sanitization (blank input, whitespace, unparsable hosts/ports)
- registered-domain extraction through the public suffix list
- label validation (characters, hyphen placement, numeric-only names)
- IDN homograph detection (Unicode or punycode labels)
- suspicious TLDs
- RFC 3986 character checks on path, query and fragment

The result carries findings plus a checklist explaining the verdict.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable
from urllib.parse import urlparse

import idna

from ..config import DEFAULT_URL_SUSPICIOUS_TLDS, Config
from ..constants import FindingLevel
from ..utils.domains import domain_label, registered_domain

logger = logging.getLogger(__name__)

INVALID_URL_PART_CHARS = re.compile(r"[^a-zA-Z0-9\-._~:/?#\[\]@!$&'()*+,;=%]")
VALID_LABEL_RE = re.compile(r"^[a-zA-Z0-9-]+$")


@dataclass
class Finding:
    level: FindingLevel
    message: str


@dataclass
class URLCheckResult:
    """Outcome of a static URL check."""

    input: str
    url: str = ""
    domain: str = ""
    ascii_domain: str = ""
    unicode_domain: str = ""
    parsed: bool = False
    findings: list[Finding] = field(default_factory=list)
    checklist: list[str] = field(default_factory=list)

    @property
    def legitimate(self) -> bool:
        return (
            self.parsed
            and bool(self.domain)
            and all(f.level is FindingLevel.OK for f in self.findings)
        )

    @property
    def warnings(self) -> list[str]:
        return [f.message for f in self.findings if f.level is not FindingLevel.OK]

    def to_dict(self) -> dict:
        return {
            "input": self.input,
            "url": self.url,
            "domain": self.domain,
            "ascii_domain": self.ascii_domain,
            "unicode_domain": self.unicode_domain,
            "legitimate": self.legitimate,
            "findings": [{"level": f.level.value, "message": f.message} for f in self.findings],
            "checklist": list(self.checklist),
        }


def is_valid_domain(domain: str) -> bool:
    """Every label non-empty, alphanumeric or hyphen, no leading/trailing hyphen."""
    for label in domain.split("."):
        if not label:
            return False
        if not VALID_LABEL_RE.match(label):
            return False
        if label.startswith("-") or label.endswith("-"):
            return False
    return True


def invalid_url_parts(path: str, query: str, fragment: str) -> list[str]:
    issues = []
    for part, name in ((path, "Path"), (query, "Query"), (fragment, "Fragment")):
        if part and INVALID_URL_PART_CHARS.search(part):
            issues.append(f"{name} contains invalid characters")
    return issues


def _to_ascii(domain: str) -> str:
    try:
        return idna.encode(domain, uts46=True).decode("ascii")
    except (idna.IDNAError, UnicodeError):
        return ""


def _to_unicode(domain: str) -> str:
    try:
        return idna.decode(domain)
    except (idna.IDNAError, UnicodeError):
        return domain


class URLChecker:
    """Runs the static URL checks."""

    def __init__(self, suspicious_tlds: Iterable[str] | None = None):
        self.suspicious_tlds = {
            t.lower().lstrip(".") for t in (suspicious_tlds or DEFAULT_URL_SUSPICIOUS_TLDS)
        }

    @classmethod
    def from_config(cls, config: Config) -> "URLChecker":
        return cls(suspicious_tlds=config.url_suspicious_tlds)

    def check(self, value: str) -> URLCheckResult:
        trimmed = (value or "").strip()
        result = URLCheckResult(input=value or "")

        if not trimmed:
            result.findings.append(Finding(FindingLevel.ERROR, "Please enter a URL"))
            return result

        url = trimmed if re.match(r"^https?://", trimmed, re.IGNORECASE) else f"https://{trimmed}"
        result.url = url

        parsed = _parse(url)
        if parsed is None:
            result.findings.append(Finding(FindingLevel.ERROR, "Invalid URL format"))
            result.checklist.append("URL could not be parsed properly")
            return result
        result.parsed = True

        domain = registered_domain(url, fallback=False)
        result.domain = domain

        if not domain:
            result.findings.append(Finding(FindingLevel.ERROR, "Could not extract domain"))
            result.checklist.append("No valid domain found")
        else:
            self._check_domain(result, domain)

        for issue in invalid_url_parts(parsed.path, parsed.query, parsed.fragment):
            result.findings.append(Finding(FindingLevel.ERROR, issue))
            result.checklist.append(issue)

        if not result.findings and domain:
            result.findings.append(
                Finding(FindingLevel.OK, f"This URL looks legitimate: {url}")
            )
            result.checklist.extend(
                [
                    "Valid URL format",
                    "No suspicious TLD detected",
                    "No IDN homograph issues",
                    "No unusual characters in domain or path/query/fragment",
                ]
            )

        logger.debug("URL check %s -> %s finding(s)", url, len(result.findings))
        return result

    def _check_domain(self, result: URLCheckResult, domain: str) -> None:
        ascii_domain = _to_ascii(domain)
        unicode_domain = _to_unicode(ascii_domain) if ascii_domain else domain
        result.ascii_domain = ascii_domain
        result.unicode_domain = unicode_domain

        if not ascii_domain or not is_valid_domain(ascii_domain):
            result.findings.append(
                Finding(
                    FindingLevel.ERROR,
                    "Domain contains invalid characters or invalid hyphen placement",
                )
            )
            result.checklist.append("Domain has invalid characters or hyphen issues")

        if domain_label(domain).isdigit():
            result.findings.append(Finding(FindingLevel.ERROR, "Domain name is numeric-only"))
            result.checklist.append("Domain name contains only digits")

        is_punycode = any(label.startswith("xn--") for label in domain.split("."))
        if ascii_domain and (ascii_domain != domain or is_punycode):
            result.findings.append(
                Finding(
                    FindingLevel.WARNING,
                    f"Possible IDN homograph detected: {unicode_domain} ({ascii_domain})",
                )
            )
            result.checklist.append(
                "Domain may use deceptive Unicode characters (IDN homograph)"
            )

        tld = domain.rsplit(".", 1)[-1]
        if tld in self.suspicious_tlds:
            result.findings.append(
                Finding(FindingLevel.WARNING, f"Suspicious top-level domain: .{tld}")
            )
            result.checklist.append("Suspicious TLD detected")


def _parse(url: str):
    if re.search(r"\s", url):
        return None
    try:
        parsed = urlparse(url)
        # Accessing the port validates it.
        parsed.port
    except ValueError:
        return None
    if not parsed.hostname:
        return None
    return parsed


def check_url(value: str, checker: URLChecker | None = None) -> URLCheckResult:
    return (checker or URLChecker()).check(value)
