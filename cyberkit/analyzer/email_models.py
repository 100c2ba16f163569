"""Email detector data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import DEFAULT_EMAIL_THRESHOLD, Category


@dataclass(frozen=True)
class DetectionOptions:
    """Per-call configuration bag: rule group switches and the threshold."""

    keywords: bool = True
    domains: bool = True
    lookalikes: bool = True
    links: bool = True
    attachments: bool = True
    headers: bool = True
    threshold: int | None = None  # None: detector default (7 unless configured)

    def __post_init__(self):
        if self.threshold is not None and self.threshold <= 0:
            raise ValueError(f"threshold must be a positive integer, got {self.threshold}")


@dataclass(frozen=True)
class DetectionInput:
    """Everything the email detector looks at for one message."""

    subject: str = ""
    body: str = ""
    from_address: str = ""
    reply_to: str = ""
    auth_results: str = ""
    attachments: tuple[str, ...] = ()
    options: DetectionOptions = field(default_factory=DetectionOptions)

    def __post_init__(self):
        # Accept any iterable of filenames but keep the instance immutable.
        object.__setattr__(self, "attachments", tuple(a for a in (self.attachments or ()) if a))


@dataclass(frozen=True)
class ReasonHit:
    """A single triggered reason with the weight it contributed."""

    rule: str
    reason: str
    weight: int


@dataclass
class DetectionResult:
    """Result of email risk scoring."""

    score: int
    category: Category
    threshold: int = DEFAULT_EMAIL_THRESHOLD
    hits: list[ReasonHit] = field(default_factory=list)
    domains: list[str] = field(default_factory=list)
    urls: list[str] = field(default_factory=list)

    @property
    def reasons(self) -> list[str]:
        return [hit.reason for hit in self.hits]

    @property
    def is_suspicious(self) -> bool:
        return self.category is Category.SUSPICIOUS

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "category": self.category.value,
            "threshold": self.threshold,
            "reasons": self.reasons,
            "hits": [
                {"rule": h.rule, "reason": h.reason, "weight": h.weight} for h in self.hits
            ],
            "domains": list(self.domains),
            "urls": list(self.urls),
        }
