"""Brand lookalike detection for domains and sender identities."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

import idna
from rapidfuzz import fuzz

from ..utils.domains import domain_label, registered_domain


@dataclass(frozen=True)
class BrandMatch:
    """A domain or label that imitates a known brand."""

    brand: str
    candidate: str
    normalized: str
    method: str  # exact | token | contains | similar
    ratio: float = 100.0


class BrandMatcher:
    """Matches labels against a fixed brand list after homoglyph normalization."""

    # Non-Latin characters that look like Latin
    HOMOGLYPHS = {
        "а": "a",  # Cyrillic а
        "е": "e",  # Cyrillic е
        "о": "o",  # Cyrillic о
        "р": "p",  # Cyrillic р
        "с": "c",  # Cyrillic с
        "у": "y",  # Cyrillic у
        "х": "x",  # Cyrillic х
        "ѕ": "s",  # Cyrillic ѕ
        "і": "i",  # Cyrillic і
        "ј": "j",  # Cyrillic ј
        "ԁ": "d",  # Cyrillic ԁ
        "һ": "h",  # Cyrillic һ
        "ɡ": "g",  # Latin script g
        "ո": "n",  # Armenian ո
        "ս": "u",  # Armenian ս
        "ο": "o",  # Greek omicron
        "α": "a",  # Greek alpha
        "ν": "v",  # Greek nu
        "ı": "i",  # dotless i
    }

    # Digit/symbol swaps. "1" reads as either "l" or "i", so both are tried.
    SUBSTITUTION_VARIANTS = (
        {"0": "o", "1": "l", "3": "e", "4": "a", "5": "s", "7": "t", "8": "b", "@": "a", "$": "s", "|": "l"},
        {"0": "o", "1": "i", "3": "e", "4": "a", "5": "s", "7": "t", "8": "b", "@": "a", "$": "s", "!": "i"},
    )

    SEQUENCE_SUBSTITUTIONS = (("rn", "m"), ("vv", "w"))

    def __init__(
        self,
        brands: dict[str, list[str]],
        aliases: dict[str, list[str]] | None = None,
        fuzzy_ratio: int = 85,
        fuzzy_min_length: int = 5,
    ):
        self.brands = {b.lower(): {d.lower() for d in domains} for b, domains in brands.items()}
        self.aliases = {b.lower(): [a.lower() for a in v] for b, v in (aliases or {}).items()}
        self.fuzzy_ratio = fuzzy_ratio
        self.fuzzy_min_length = fuzzy_min_length
        self._official = {d for domains in self.brands.values() for d in domains}

    def official_domains(self, brand: str) -> set[str]:
        return self.brands.get(brand.lower(), set())

    def is_official(self, domain: str) -> bool:
        return registered_domain(domain) in self._official

    def normalize_homoglyphs(self, text: str) -> str:
        """Replace homoglyphs with their Latin equivalents."""
        result = []
        for char in text:
            if char in self.HOMOGLYPHS:
                result.append(self.HOMOGLYPHS[char])
            else:
                # NFKC folds fullwidth and other compatibility lookalikes
                result.append(unicodedata.normalize("NFKC", char))
        return "".join(result).lower()

    def normalized_variants(self, label: str) -> list[str]:
        """Return the distinct normalized spellings of a label, original first."""
        base = self.normalize_homoglyphs(decode_punycode(label.lower()))
        variants = [base]
        for table in self.SUBSTITUTION_VARIANTS:
            swapped = "".join(table.get(ch, ch) for ch in base)
            for seq, repl in self.SEQUENCE_SUBSTITUTIONS:
                swapped = swapped.replace(seq, repl)
            if swapped not in variants:
                variants.append(swapped)
        return variants

    def match_label(self, label: str) -> BrandMatch | None:
        """Match a bare label (domain name or mailbox local part) against the brands."""
        label = (label or "").strip().lower()
        if not label:
            return None

        variants = self.normalized_variants(label)
        for brand in self.brands:
            for variant in variants:
                method = _contains_brand(variant, brand)
                if method:
                    return BrandMatch(brand, label, variant, method)

        for brand in self.brands:
            if len(brand) < self.fuzzy_min_length:
                continue
            for variant in variants:
                compact = re.sub(r"[^a-z0-9]", "", variant)
                if len(compact) < self.fuzzy_min_length:
                    continue
                ratio = fuzz.ratio(brand, compact)
                if ratio >= self.fuzzy_ratio:
                    return BrandMatch(brand, label, compact, "similar", ratio)
        return None

    def match_domain(self, domain: str) -> BrandMatch | None:
        """Return the brand a non-official domain imitates, if any."""
        registered = registered_domain(domain)
        if not registered or registered in self._official:
            return None
        match = self.match_label(domain_label(domain))
        if match is None:
            return None
        return BrandMatch(match.brand, registered, match.normalized, match.method, match.ratio)

    def brands_mentioned(self, text: str) -> list[str]:
        """Return the brands named in free text (word-boundary match)."""
        lowered = (text or "").lower()
        if not lowered:
            return []
        found = []
        for brand in self.brands:
            for spelling in [brand, *self.aliases.get(brand, [])]:
                if re.search(rf"\b{re.escape(spelling)}\b", lowered):
                    found.append(brand)
                    break
        return found


def decode_punycode(label: str) -> str:
    if "xn--" not in label:
        return label
    try:
        return idna.decode(label)
    except (idna.IDNAError, UnicodeError):
        return label


def _contains_brand(candidate: str, brand: str) -> str:
    if candidate == brand:
        return "exact"
    tokens = [t for t in re.split(r"[^a-z0-9]+", candidate) if t]
    if brand in tokens:
        return "token"
    # Longer brands may also lead a token ("paypalsecure"). A brand buried
    # inside a word ("pineapple", "purchase") is not a match, and short
    # brands ("ups", "dhl") only match as whole tokens.
    if len(brand) >= 5 and any(token.startswith(brand) for token in tokens):
        return "contains"
    return ""
