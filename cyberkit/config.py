"""Configuration management for CyberKit."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Set

import yaml
from dotenv import load_dotenv

from .constants import DEFAULT_EMAIL_THRESHOLD
from .utils.domains import registered_domain

logger = logging.getLogger(__name__)


# Default heuristics for the analyzers. These can be overridden via
# config/heuristics.yaml without touching code.
DEFAULT_SUSPICIOUS_KEYWORDS: list[str] = [
    "urgent",
    "click here",
    "reset password",
    "verify",
    "suspended",
    "immediately",
    "act now",
    "confirm your identity",
    "unusual activity",
    "password expires",
    "wire transfer",
    "gift card",
]

DEFAULT_DOMAIN_KEYWORDS: list[str] = [
    "login",
    "signin",
    "sign-in",
    "verify",
    "verification",
    "secure",
    "account",
    "update",
    "confirm",
    "unlock",
    "recover",
    "webscr",
]

# Brand -> official registered domains
DEFAULT_BRANDS: dict[str, list[str]] = {
    "paypal": ["paypal.com", "paypal.me"],
    "amazon": ["amazon.com", "amazon.co.uk", "amazon.de", "amazon.ca", "amazonaws.com"],
    "apple": ["apple.com", "icloud.com"],
    "microsoft": [
        "microsoft.com",
        "microsoftonline.com",
        "office.com",
        "office365.com",
        "live.com",
        "outlook.com",
        "hotmail.com",
    ],
    "google": ["google.com", "gmail.com", "googlemail.com", "youtube.com"],
    "netflix": ["netflix.com"],
    "facebook": ["facebook.com", "fb.com", "meta.com"],
    "instagram": ["instagram.com"],
    "linkedin": ["linkedin.com"],
    "dropbox": ["dropbox.com"],
    "docusign": ["docusign.com", "docusign.net"],
    "dhl": ["dhl.com", "dhl.de"],
    "fedex": ["fedex.com"],
    "ups": ["ups.com"],
    "chase": ["chase.com"],
    "wellsfargo": ["wellsfargo.com"],
    "bankofamerica": ["bankofamerica.com", "bofa.com"],
}

# Multi-word spellings used when looking for brand names in free text
DEFAULT_BRAND_ALIASES: dict[str, list[str]] = {
    "wellsfargo": ["wells fargo"],
    "bankofamerica": ["bank of america"],
}

DEFAULT_FREE_PROVIDERS: set[str] = {
    "gmail.com",
    "googlemail.com",
    "yahoo.com",
    "ymail.com",
    "outlook.com",
    "hotmail.com",
    "live.com",
    "msn.com",
    "aol.com",
    "icloud.com",
    "me.com",
    "proton.me",
    "protonmail.com",
    "gmx.com",
    "gmx.net",
    "mail.com",
    "yandex.com",
    "yandex.ru",
    "mail.ru",
    "zoho.com",
    "tutanota.com",
}

DEFAULT_DANGEROUS_EXTENSIONS: set[str] = {
    "exe", "scr", "com", "pif", "bat", "cmd", "msi", "cpl", "jar",
    "js", "jse", "vbs", "vbe", "wsf", "wsh", "hta", "ps1", "lnk",
    "reg", "iso", "img",
}

DEFAULT_MACRO_EXTENSIONS: set[str] = {
    "docm", "dotm", "xlsm", "xltm", "xlam", "pptm", "potm", "ppam", "ppsm", "sldm",
}

# Extensions attackers put in front of the real one ("invoice.pdf.exe")
DEFAULT_DECOY_EXTENSIONS: set[str] = {
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "rtf", "csv",
    "jpg", "jpeg", "png", "gif", "mp3", "mp4", "zip", "html", "htm",
}

DEFAULT_URL_SUSPICIOUS_TLDS: set[str] = {"xyz", "top", "club", "online", "site", "info"}

DEFAULT_EMAIL_SCORING: dict[str, int] = {
    "keyword": 1,
    "long_domain": 1,
    "punycode": 2,
    "domain_keyword": 1,
    "brand_lookalike": 4,
    "link_mismatch": 3,
    "attachment_double_extension": 5,
    "attachment_dangerous": 4,
    "attachment_macro": 3,
    "reply_to_mismatch": 2,
    "spf_missing": 2,
    "free_provider_brand": 3,
    "long_domain_length": 30,
    "lookalike_fuzzy_ratio": 85,
    "lookalike_fuzzy_min_length": 5,
}


@dataclass
class Config:
    """Application configuration loaded from environment."""

    email_threshold: int = DEFAULT_EMAIL_THRESHOLD
    log_level: str = "INFO"

    # Paths
    config_dir: Path = field(default_factory=lambda: Path("./config"))
    quiz_dir: Path | None = None

    # Heuristics (override via config/heuristics.yaml)
    suspicious_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_SUSPICIOUS_KEYWORDS)
    )
    domain_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_DOMAIN_KEYWORDS))
    brands: dict[str, list[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_BRANDS.items()}
    )
    brand_aliases: dict[str, list[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_BRAND_ALIASES.items()}
    )
    free_providers: Set[str] = field(default_factory=lambda: set(DEFAULT_FREE_PROVIDERS))
    dangerous_extensions: Set[str] = field(
        default_factory=lambda: set(DEFAULT_DANGEROUS_EXTENSIONS)
    )
    macro_extensions: Set[str] = field(default_factory=lambda: set(DEFAULT_MACRO_EXTENSIONS))
    decoy_extensions: Set[str] = field(default_factory=lambda: set(DEFAULT_DECOY_EXTENSIONS))
    url_suspicious_tlds: Set[str] = field(
        default_factory=lambda: set(DEFAULT_URL_SUSPICIOUS_TLDS)
    )
    email_scoring: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_EMAIL_SCORING))

    def __post_init__(self):
        """Normalize paths and list casing."""
        self.config_dir = Path(self.config_dir)
        self.quiz_dir = Path(self.quiz_dir) if self.quiz_dir else self.config_dir / "quizzes"
        self.log_level = (self.log_level or "INFO").upper()

        self.suspicious_keywords = [k.lower() for k in self.suspicious_keywords if k]
        self.domain_keywords = [k.lower() for k in self.domain_keywords if k]
        self.brands = {
            brand.lower(): [registered_domain(d) or d.lower() for d in domains]
            for brand, domains in self.brands.items()
        }
        self.brand_aliases = {
            brand.lower(): [a.lower() for a in aliases]
            for brand, aliases in self.brand_aliases.items()
        }
        self.free_providers = {d.lower() for d in self.free_providers}
        self.dangerous_extensions = {_bare_extension(e) for e in self.dangerous_extensions}
        self.macro_extensions = {_bare_extension(e) for e in self.macro_extensions}
        self.decoy_extensions = {_bare_extension(e) for e in self.decoy_extensions}
        self.url_suspicious_tlds = {_bare_extension(t) for t in self.url_suspicious_tlds}


def _bare_extension(value: str) -> str:
    return str(value).strip().lower().lstrip(".")


def _load_heuristics(config_dir: Path) -> dict:
    """Load heuristic overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring heuristics.yaml: top level must be a mapping")
        return {}

    def _coerce_strings(raw):
        if not isinstance(raw, (list, tuple, set)):
            return None
        items = [str(item).strip() for item in raw if str(item or "").strip()]
        return items or None

    def _coerce_brands(raw):
        if not isinstance(raw, dict):
            return None
        brands: dict[str, list[str]] = {}
        for name, domains in raw.items():
            name = str(name or "").strip()
            if not name:
                continue
            if isinstance(domains, str):
                domains = [domains]
            cleaned = _coerce_strings(domains)
            if cleaned:
                brands[name] = cleaned
        return brands or None

    def _coerce_weights(raw):
        weights = dict(DEFAULT_EMAIL_SCORING)
        if not isinstance(raw, dict):
            return weights
        for key, value in raw.items():
            if key not in DEFAULT_EMAIL_SCORING:
                logger.warning("Unknown scoring key in heuristics.yaml: %s", key)
                continue
            try:
                points = int(value)
            except (TypeError, ValueError):
                continue
            if points < 0:
                logger.warning("Negative weight for %s ignored", key)
                continue
            weights[key] = points
        return weights

    email_cfg = data.get("email", {}) if isinstance(data.get("email"), dict) else {}
    attach_cfg = (
        email_cfg.get("attachments", {}) if isinstance(email_cfg.get("attachments"), dict) else {}
    )
    url_cfg = data.get("url", {}) if isinstance(data.get("url"), dict) else {}

    return {
        "suspicious_keywords": _coerce_strings(email_cfg.get("keywords")),
        "domain_keywords": _coerce_strings(email_cfg.get("domain_keywords")),
        "brands": _coerce_brands(email_cfg.get("brands")),
        "free_providers": _coerce_strings(email_cfg.get("free_providers")),
        "dangerous_extensions": _coerce_strings(attach_cfg.get("dangerous")),
        "macro_extensions": _coerce_strings(attach_cfg.get("macro")),
        "decoy_extensions": _coerce_strings(attach_cfg.get("decoy")),
        "email_scoring": _coerce_weights(email_cfg.get("weights")),
        "url_suspicious_tlds": _coerce_strings(url_cfg.get("suspicious_tlds")),
    }


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    config_dir = Path(os.getenv("CONFIG_DIR", "./config"))
    heuristics = _load_heuristics(config_dir)

    try:
        threshold = int(os.getenv("EMAIL_SCORE_THRESHOLD", str(DEFAULT_EMAIL_THRESHOLD)))
    except ValueError:
        logger.warning("EMAIL_SCORE_THRESHOLD is not an integer; using %s", DEFAULT_EMAIL_THRESHOLD)
        threshold = DEFAULT_EMAIL_THRESHOLD

    quiz_dir = os.getenv("QUIZ_DIR", "").strip()

    return Config(
        email_threshold=threshold,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        config_dir=config_dir,
        quiz_dir=Path(quiz_dir) if quiz_dir else None,
        suspicious_keywords=heuristics.get("suspicious_keywords") or list(DEFAULT_SUSPICIOUS_KEYWORDS),
        domain_keywords=heuristics.get("domain_keywords") or list(DEFAULT_DOMAIN_KEYWORDS),
        brands=heuristics.get("brands") or {k: list(v) for k, v in DEFAULT_BRANDS.items()},
        free_providers=set(heuristics.get("free_providers") or DEFAULT_FREE_PROVIDERS),
        dangerous_extensions=set(heuristics.get("dangerous_extensions") or DEFAULT_DANGEROUS_EXTENSIONS),
        macro_extensions=set(heuristics.get("macro_extensions") or DEFAULT_MACRO_EXTENSIONS),
        decoy_extensions=set(heuristics.get("decoy_extensions") or DEFAULT_DECOY_EXTENSIONS),
        url_suspicious_tlds=set(heuristics.get("url_suspicious_tlds") or DEFAULT_URL_SUSPICIOUS_TLDS),
        email_scoring=heuristics.get("email_scoring") or dict(DEFAULT_EMAIL_SCORING),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    if config.email_threshold <= 0:
        errors.append("EMAIL_SCORE_THRESHOLD must be a positive integer")
    if config.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        errors.append(f"LOG_LEVEL '{config.log_level}' is not a logging level")
    if not config.brands:
        errors.append("At least one brand is required for lookalike detection")

    overlap = config.dangerous_extensions & config.decoy_extensions
    if overlap:
        errors.append(
            "Extensions cannot be both dangerous and decoy: " + ", ".join(sorted(overlap))
        )

    if not config.quiz_dir.exists():
        logger.debug("Quiz directory %s not found; only built-in quizzes available", config.quiz_dir)

    return errors
