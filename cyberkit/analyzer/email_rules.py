"""Email detector rule implementations."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..constants import AttachmentRisk
from ..utils.domains import public_suffix, registered_domain, split_address
from .lookalike import decode_punycode
from .rules import DetectionContext, RuleResult

if TYPE_CHECKING:
    from .email_detector import EmailDetector

SPF_PASS_RE = re.compile(r"\bspf\s*=\s*pass\b|\breceived-spf\s*:\s*pass\b", re.IGNORECASE)
DOMAIN_IN_TEXT_RE = re.compile(
    r"(?:https?://)?((?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,63})\b", re.IGNORECASE
)

# Public suffixes that double as common file extensions ("readme.md", "setup.py")
FILENAME_SUFFIXES = frozenset(
    {"md", "py", "sh", "pl", "rs", "ps", "so", "cc", "ml", "rb", "cs", "ai", "zip", "mov"}
)


def classify_attachment(
    filename: str,
    dangerous: set[str],
    macro: set[str],
    decoy: set[str],
) -> AttachmentRisk | None:
    """Classify one attachment filename; double extension wins over dangerous over macro."""
    name = re.split(r"[\\/]", (filename or "").strip())[-1].lower()
    parts = [p.strip() for p in name.split(".")]
    extensions = [p for p in parts[1:] if p]
    if not extensions:
        return None

    last = extensions[-1]
    if last in dangerous:
        if len(extensions) >= 2 and extensions[-2] in decoy:
            return AttachmentRisk.DOUBLE_EXTENSION
        return AttachmentRisk.DANGEROUS
    if last in macro:
        return AttachmentRisk.MACRO
    return None


def _shown_domain(text: str) -> str:
    """Registered domain written in link text, or "" when the text names none."""
    shown = DOMAIN_IN_TEXT_RE.search(text or "")
    if not shown:
        return ""
    host = shown.group(1).lower()
    suffix = public_suffix(host)
    if not suffix:
        return ""
    explicit = "://" in shown.group(0) or host.startswith("www.")
    if not explicit and host.count(".") == 1 and suffix in FILENAME_SUFFIXES:
        return ""
    return registered_domain(host)


class KeywordRule:
    name = "keywords"
    group = "keywords"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        weight = detector.scoring["keyword"]
        for keyword in detector.suspicious_keywords:
            if keyword in context.text:
                result.add(f"Suspicious keyword: '{keyword}'", weight)
        return result


class LongDomainRule:
    name = "long_domain"
    group = "domains"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        limit = detector.scoring["long_domain_length"]
        for host in context.hosts:
            if len(host) > limit and not detector.brand_matcher.is_official(host):
                result.add(
                    f"Unusually long domain ({len(host)} chars): {host}",
                    detector.scoring["long_domain"],
                )
        return result


class PunycodeRule:
    name = "punycode"
    group = "domains"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        for host in context.hosts:
            labels = host.split(".")
            if any(label.startswith("xn--") for label in labels):
                decoded = ".".join(decode_punycode(label) for label in labels)
                result.add(f"Punycode domain: {host} ({decoded})", detector.scoring["punycode"])
            elif not host.isascii():
                result.add(f"Internationalized domain: {host}", detector.scoring["punycode"])
        return result


class DomainKeywordRule:
    name = "domain_keyword"
    group = "domains"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        for host in context.hosts:
            if detector.brand_matcher.is_official(host):
                continue
            found = [kw for kw in detector.domain_keywords if kw in host]
            if found:
                result.add(
                    f"Suspicious keyword in domain: {host} ('{found[0]}')",
                    detector.scoring["domain_keyword"],
                )
        return result


class BrandLookalikeRule:
    name = "brand_lookalike"
    group = "lookalikes"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        seen: set[str] = set()
        for host in context.hosts:
            match = detector.brand_matcher.match_domain(host)
            if match is None or match.candidate in seen:
                continue
            seen.add(match.candidate)
            result.add(
                f"Brand lookalike domain: {match.candidate} imitates '{match.brand}'",
                detector.scoring["brand_lookalike"],
            )
        return result


class LinkMismatchRule:
    name = "link_mismatch"
    group = "links"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        weight = detector.scoring["link_mismatch"]
        for link in context.links:
            if not link.has_distinct_text:
                continue
            destination = registered_domain(link.url)
            if not destination:
                continue

            shown_domain = _shown_domain(link.text)
            if shown_domain:
                if shown_domain != destination:
                    result.add(
                        f"Link text shows {shown_domain} but points to {destination}", weight
                    )
                continue

            for brand in detector.brand_matcher.brands_mentioned(link.text):
                if destination not in detector.brand_matcher.official_domains(brand):
                    result.add(
                        f"Link text '{link.text}' mentions {brand} but points to {destination}",
                        weight,
                    )
                    break
        return result


class AttachmentRule:
    name = "attachments"
    group = "attachments"

    REASONS = {
        AttachmentRisk.DOUBLE_EXTENSION: ("Double extension attachment", "attachment_double_extension"),
        AttachmentRisk.DANGEROUS: ("Dangerous attachment type", "attachment_dangerous"),
        AttachmentRisk.MACRO: ("Macro-enabled attachment", "attachment_macro"),
    }

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        for filename in context.message.attachments:
            risk = classify_attachment(
                filename,
                detector.dangerous_extensions,
                detector.macro_extensions,
                detector.decoy_extensions,
            )
            if risk is None:
                continue
            label, key = self.REASONS[risk]
            result.add(f"{label}: {filename}", detector.scoring[key])
        return result


class ReplyToMismatchRule:
    name = "reply_to_mismatch"
    group = "headers"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        if not context.from_domain or not context.reply_to_domain:
            return result
        sender = registered_domain(context.from_domain)
        reply = registered_domain(context.reply_to_domain)
        if sender and reply and sender != reply:
            result.add(
                f"Reply-To domain {reply} does not match From domain {sender}",
                detector.scoring["reply_to_mismatch"],
            )
        return result


class SpfRule:
    name = "spf"
    group = "headers"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        if not SPF_PASS_RE.search(context.message.auth_results or ""):
            result.add("SPF pass not found in authentication results", detector.scoring["spf_missing"])
        return result


class FreeProviderBrandRule:
    name = "free_provider_brand"
    group = "headers"

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:
        result = RuleResult(self.name)
        headers = (
            ("From", context.message.from_address),
            ("Reply-To", context.message.reply_to),
        )
        for header, value in headers:
            display_name, address = split_address(value)
            if not address:
                continue
            local, _, host = address.rpartition("@")
            provider = registered_domain(host)
            if provider not in detector.free_providers:
                continue

            brands = detector.brand_matcher.brands_mentioned(display_name)
            if not brands:
                match = detector.brand_matcher.match_label(local)
                brands = [match.brand] if match else []
            if brands:
                result.add(
                    f"{header} uses free provider {provider} while claiming to be '{brands[0]}'",
                    detector.scoring["free_provider_brand"],
                )
        return result
