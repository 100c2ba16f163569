"""Rule-based building blocks for email risk scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from ..utils.domains import ExtractedLink
from .email_models import DetectionInput

if TYPE_CHECKING:
    from .email_detector import EmailDetector


@dataclass
class DetectionContext:
    """Shared context passed to each detection rule."""

    message: DetectionInput
    text: str
    links: list[ExtractedLink] = field(default_factory=list)
    hosts: list[str] = field(default_factory=list)
    from_domain: str = ""
    reply_to_domain: str = ""


@dataclass
class RuleResult:
    """Outcome of a single detection rule."""

    name: str
    hits: list[tuple[str, int]] = field(default_factory=list)

    def add(self, reason: str, weight: int) -> None:
        self.hits.append((reason, weight))

    @property
    def score(self) -> int:
        return sum(weight for _, weight in self.hits)

    @property
    def reasons(self) -> list[str]:
        return [reason for reason, _ in self.hits]


class DetectionRule(Protocol):
    """Interface for detection rules."""

    name: str
    group: str

    def apply(self, detector: "EmailDetector", context: DetectionContext) -> RuleResult:  # pragma: no cover - interface
        ...
