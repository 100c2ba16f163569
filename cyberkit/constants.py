"""Centralized constants for CyberKit.

Enums and classification helpers shared by the analyzers, the formatters
and the command line front end.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_EMAIL_THRESHOLD = 7


class Category(str, Enum):
    """Email risk category derived from the total score."""

    LIKELY_SAFE = "Likely Safe"
    NEEDS_REVIEW = "Needs Review"
    SUSPICIOUS = "Suspicious"

    def __str__(self) -> str:
        return self.value


class StrengthLevel(str, Enum):
    """Password strength level."""

    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"

    def __str__(self) -> str:
        return self.value


class AttachmentRisk(str, Enum):
    """Risk class of an attachment filename."""

    DOUBLE_EXTENSION = "double_extension"  # invoice.pdf.exe
    DANGEROUS = "dangerous"  # executables and scripts
    MACRO = "macro"  # macro-enabled Office documents


class FindingLevel(str, Enum):
    """Severity of a single URL checklist finding."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


def classify(score: int, threshold: int = DEFAULT_EMAIL_THRESHOLD) -> Category:
    """Map a score to a category: >= 2x threshold is suspicious, >= threshold needs review."""
    if score >= threshold * 2:
        return Category.SUSPICIOUS
    if score >= threshold:
        return Category.NEEDS_REVIEW
    return Category.LIKELY_SAFE
