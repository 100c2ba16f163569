"""Analyzer modules for CyberKit."""

from .email_detector import EmailDetector, detect_email
from .email_models import DetectionInput, DetectionOptions, DetectionResult
from .lookalike import BrandMatcher
from .password import analyze_password
from .url_checker import URLChecker, check_url
from .website_checker import check_website

__all__ = [
    "BrandMatcher",
    "DetectionInput",
    "DetectionOptions",
    "DetectionResult",
    "EmailDetector",
    "URLChecker",
    "analyze_password",
    "check_url",
    "check_website",
    "detect_email",
]
