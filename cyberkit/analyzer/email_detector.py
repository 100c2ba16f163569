"""Heuristic email risk scoring engine."""

from __future__ import annotations

import logging
from typing import Iterable

from ..config import (
    DEFAULT_BRAND_ALIASES,
    DEFAULT_BRANDS,
    DEFAULT_DANGEROUS_EXTENSIONS,
    DEFAULT_DECOY_EXTENSIONS,
    DEFAULT_DOMAIN_KEYWORDS,
    DEFAULT_EMAIL_SCORING,
    DEFAULT_FREE_PROVIDERS,
    DEFAULT_MACRO_EXTENSIONS,
    DEFAULT_SUSPICIOUS_KEYWORDS,
    Config,
)
from ..constants import DEFAULT_EMAIL_THRESHOLD, classify
from ..utils.domains import address_domain, extract_hostname, extract_links
from .email_models import DetectionInput, DetectionOptions, DetectionResult, ReasonHit
from .email_rules import (
    AttachmentRule,
    BrandLookalikeRule,
    DomainKeywordRule,
    FreeProviderBrandRule,
    KeywordRule,
    LinkMismatchRule,
    LongDomainRule,
    PunycodeRule,
    ReplyToMismatchRule,
    SpfRule,
)
from .lookalike import BrandMatcher
from .rules import DetectionContext, DetectionRule

logger = logging.getLogger(__name__)


class EmailDetector:
    """Scores an email for phishing indicators via an ordered list of independent rules."""

    def __init__(
        self,
        suspicious_keywords: Iterable[str] | None = None,
        domain_keywords: Iterable[str] | None = None,
        brands: dict[str, list[str]] | None = None,
        brand_aliases: dict[str, list[str]] | None = None,
        free_providers: Iterable[str] | None = None,
        dangerous_extensions: Iterable[str] | None = None,
        macro_extensions: Iterable[str] | None = None,
        decoy_extensions: Iterable[str] | None = None,
        scoring_weights: dict | None = None,
        default_threshold: int = DEFAULT_EMAIL_THRESHOLD,
    ):
        self.suspicious_keywords = [
            k.lower() for k in (suspicious_keywords or DEFAULT_SUSPICIOUS_KEYWORDS)
        ]
        self.domain_keywords = [k.lower() for k in (domain_keywords or DEFAULT_DOMAIN_KEYWORDS)]
        self.free_providers = {d.lower() for d in (free_providers or DEFAULT_FREE_PROVIDERS)}
        self.dangerous_extensions = {
            e.lower().lstrip(".") for e in (dangerous_extensions or DEFAULT_DANGEROUS_EXTENSIONS)
        }
        self.macro_extensions = {
            e.lower().lstrip(".") for e in (macro_extensions or DEFAULT_MACRO_EXTENSIONS)
        }
        self.decoy_extensions = {
            e.lower().lstrip(".") for e in (decoy_extensions or DEFAULT_DECOY_EXTENSIONS)
        }
        self.scoring = dict(DEFAULT_EMAIL_SCORING)
        if scoring_weights:
            self.scoring.update(scoring_weights)
        self.default_threshold = default_threshold or DEFAULT_EMAIL_THRESHOLD

        self.brand_matcher = BrandMatcher(
            brands or DEFAULT_BRANDS,
            aliases=DEFAULT_BRAND_ALIASES if brand_aliases is None else brand_aliases,
            fuzzy_ratio=self.scoring["lookalike_fuzzy_ratio"],
            fuzzy_min_length=self.scoring["lookalike_fuzzy_min_length"],
        )

        # Evaluation order is the order reasons are reported in.
        self._rules: list[DetectionRule] = [
            KeywordRule(),
            LongDomainRule(),
            PunycodeRule(),
            DomainKeywordRule(),
            BrandLookalikeRule(),
            LinkMismatchRule(),
            AttachmentRule(),
            ReplyToMismatchRule(),
            SpfRule(),
            FreeProviderBrandRule(),
        ]

    @classmethod
    def from_config(cls, config: Config) -> "EmailDetector":
        return cls(
            suspicious_keywords=config.suspicious_keywords,
            domain_keywords=config.domain_keywords,
            brands=config.brands,
            brand_aliases=config.brand_aliases,
            free_providers=config.free_providers,
            dangerous_extensions=config.dangerous_extensions,
            macro_extensions=config.macro_extensions,
            decoy_extensions=config.decoy_extensions,
            scoring_weights=config.email_scoring,
            default_threshold=config.email_threshold,
        )

    @property
    def rules(self) -> list[DetectionRule]:
        return list(self._rules)

    def build_context(self, message: DetectionInput) -> DetectionContext:
        """Extract links, domains and header domains once for all rules."""
        text = f"{message.subject}\n{message.body}"
        links = extract_links(text)
        from_domain = address_domain(message.from_address)
        reply_to_domain = address_domain(message.reply_to)

        hosts: list[str] = []
        candidates = [from_domain, reply_to_domain] + [extract_hostname(link.url) for link in links]
        for host in candidates:
            if host and host not in hosts:
                hosts.append(host)

        return DetectionContext(
            message=message,
            text=text.lower(),
            links=links,
            hosts=hosts,
            from_domain=from_domain,
            reply_to_domain=reply_to_domain,
        )

    def detect(self, message: DetectionInput) -> DetectionResult:
        """Evaluate every enabled rule and classify the total score."""
        options = message.options or DetectionOptions()
        threshold = (
            options.threshold if options.threshold is not None else self.default_threshold
        )

        context = self.build_context(message)
        hits: list[ReasonHit] = []

        for rule in self._rules:
            if not getattr(options, rule.group, True):
                continue
            try:
                rule_result = rule.apply(self, context)
            except Exception as exc:
                logger.warning("Rule %s failed: %s", getattr(rule, "name", "unknown"), exc)
                continue

            for reason, weight in rule_result.hits:
                hits.append(ReasonHit(rule.name, reason, weight))
            if rule_result.hits:
                logger.debug("Rule %s added %s point(s)", rule.name, rule_result.score)

        score = sum(hit.weight for hit in hits)
        return DetectionResult(
            score=score,
            category=classify(score, threshold),
            threshold=threshold,
            hits=hits,
            domains=list(context.hosts),
            urls=list(dict.fromkeys(link.url for link in context.links)),
        )


def detect_email(
    subject: str = "",
    body: str = "",
    from_address: str = "",
    reply_to: str = "",
    auth_results: str = "",
    attachments: Iterable[str] = (),
    options: DetectionOptions | None = None,
    detector: EmailDetector | None = None,
) -> DetectionResult:
    """Convenience wrapper: build a DetectionInput and score it."""
    message = DetectionInput(
        subject=subject or "",
        body=body or "",
        from_address=from_address or "",
        reply_to=reply_to or "",
        auth_results=auth_results or "",
        attachments=tuple(attachments or ()),
        options=options or DetectionOptions(),
    )
    return (detector or EmailDetector()).detect(message)
