"""Website address validation.

Complements the URL checker by looking at the website as a whole: the input
must already be a full address (scheme included), and the result is a
pass/fail checklist plus a one-line summary. Nothing is fetched; SSL, DNS and
blocklist lookups are out of scope.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlparse

INVALID_HOST_CHARS = re.compile(r"""[ !@#$%^&*(),;:'"?/\\|<>\[\]{}]""")
IP_ADDRESS_RE = re.compile(
    r"^(?:\d{1,3}\.){3}\d{1,3}$|^\[?[A-F0-9]*:[A-F0-9:]+\]?$", re.IGNORECASE
)
MAX_HOSTNAME_LENGTH = 253
WEB_SCHEMES = ("http", "https")


@dataclass
class CheckResult:
    label: str
    passed: bool


@dataclass
class WebsiteCheckResult:
    """Checklist and summary for one website address."""

    input: str
    parsed: bool = False
    hostname: str = ""
    checks: list[CheckResult] = field(default_factory=list)
    summary: str = ""

    @property
    def legitimate(self) -> bool:
        return bool(self.checks) and all(c.passed for c in self.checks)

    @property
    def failed(self) -> list[str]:
        return [c.label for c in self.checks if not c.passed]

    def to_dict(self) -> dict:
        return {
            "input": self.input,
            "parsed": self.parsed,
            "hostname": self.hostname,
            "legitimate": self.legitimate,
            "summary": self.summary,
            "checks": [{"label": c.label, "passed": c.passed} for c in self.checks],
        }


def _parse(value: str):
    if not value or re.search(r"\s", value):
        return None
    try:
        parsed = urlparse(value)
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    # Web schemes need a host; mailto:, javascript: and friends parse without one.
    if parsed.scheme.lower() in WEB_SCHEMES and not parsed.hostname:
        return None
    return parsed


def check_website(value: str) -> WebsiteCheckResult:
    """Run the website checklist against a full address."""
    raw = (value or "").strip()
    result = WebsiteCheckResult(input=value or "")

    parsed = _parse(raw)
    if parsed is None:
        result.checks = [
            CheckResult("Valid URL format", False),
            CheckResult("Starts with http or https", False),
        ]
        result.summary = "Invalid URL format."
        return result

    protocol = parsed.scheme.lower()
    hostname = parsed.hostname or ""
    result.parsed = True
    result.hostname = hostname

    result.checks = [
        CheckResult("Valid URL format", True),
        CheckResult("Uses http or https protocol", protocol in WEB_SCHEMES),
        CheckResult("Uses secure HTTPS", protocol == "https"),
        CheckResult("No invalid characters in hostname", not INVALID_HOST_CHARS.search(hostname)),
        CheckResult(
            "Domain length is reasonable",
            1 < len(hostname) <= MAX_HOSTNAME_LENGTH,
        ),
        CheckResult("Domain is not a raw IP address", not IP_ADDRESS_RE.match(hostname)),
    ]

    if result.legitimate:
        result.summary = f"This website looks legitimate: {hostname or raw}"
    else:
        result.summary = f"This website may be suspicious: {hostname or raw}"
    return result
