"""Password strength meter and brute-force crack-time estimates."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from ..constants import StrengthLevel


@dataclass(frozen=True)
class StrengthRule:
    label: str
    pattern: re.Pattern

    def passes(self, password: str) -> bool:
        return bool(self.pattern.search(password))


STRENGTH_RULES: tuple[StrengthRule, ...] = (
    StrengthRule("8+ characters", re.compile(r".{8,}")),
    StrengthRule("Uppercase", re.compile(r"[A-Z]")),
    StrengthRule("Lowercase", re.compile(r"[a-z]")),
    StrengthRule("Number", re.compile(r"[0-9]")),
    StrengthRule("Special character", re.compile(r"[^A-Za-z0-9]")),
)


BASE_GUESSES_PER_SECOND = 1e7


@dataclass(frozen=True)
class MachineProfile:
    """A reference attacker machine."""

    name: str
    multiplier: int
    cpu: str
    cores: int
    clock: str
    gpu: str

    @property
    def guesses_per_second(self) -> float:
        return BASE_GUESSES_PER_SECOND * self.multiplier


MACHINE_PROFILES: tuple[MachineProfile, ...] = (
    MachineProfile("Typical PC", 1, "Intel Core i5-10400", 6, "2.9 GHz", "Integrated"),
    MachineProfile("Gaming Rig", 8, "AMD Ryzen 9 5900X", 12, "3.7 GHz", "NVIDIA RTX 3080"),
    MachineProfile("Cloud Cluster", 1000, "Xeon Platinum 8260", 48, "2.4 GHz", "Tesla V100 x8"),
    MachineProfile("Supercomputer", 10000, "IBM POWER9", 2048, "3.1 GHz", "NVIDIA A100 x512"),
)

# Offline hashes per second for a single attacker rig
HASH_RATES: dict[str, float] = {
    "md5": 1e11,
    "sha1": 6e10,
    "sha256": 8e9,
    "bcrypt10": 1e5,
    "bcrypt12": 2.5e4,
    "scrypt": 8e4,
    "argon2id": 5e4,
}

TIME_UNITS: tuple[tuple[str, int], ...] = (
    ("years", 31557600),
    ("days", 86400),
    ("hours", 3600),
    ("minutes", 60),
    ("seconds", 1),
)


@dataclass
class CrackEstimate:
    name: str
    guesses_per_second: float
    average_seconds: float
    maximum_seconds: float

    @property
    def average(self) -> str:
        return format_time(self.average_seconds)

    @property
    def maximum(self) -> str:
        return format_time(self.maximum_seconds)


@dataclass
class PasswordReport:
    """Strength and crack-time report. Never holds the password itself."""

    length: int
    rules: list[tuple[str, bool]]
    score: float
    level: StrengthLevel
    charset_size: int
    keyspace: float
    machine_estimates: list[CrackEstimate] = field(default_factory=list)
    hash_estimates: list[CrackEstimate] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for _, ok in self.rules if ok)

    def to_dict(self) -> dict:
        def _estimates(items: list[CrackEstimate]) -> list[dict]:
            return [
                {"name": e.name, "average": e.average, "maximum": e.maximum} for e in items
            ]

        return {
            "length": self.length,
            "score": self.score,
            "level": self.level.value,
            "rules": [{"label": label, "passed": ok} for label, ok in self.rules],
            "charset_size": self.charset_size,
            "keyspace": self.keyspace if math.isfinite(self.keyspace) else None,
            "machines": _estimates(self.machine_estimates),
            "hashes": _estimates(self.hash_estimates),
        }


def evaluate_rules(password: str) -> list[tuple[str, bool]]:
    return [(rule.label, rule.passes(password or "")) for rule in STRENGTH_RULES]


def strength_score(password: str) -> float:
    """Fraction of strength rules passed (0.0 - 1.0)."""
    results = evaluate_rules(password)
    return sum(1 for _, ok in results if ok) / len(results)


def strength_level(score: float) -> StrengthLevel:
    if score <= 0.4:
        return StrengthLevel.WEAK
    if score <= 0.8:
        return StrengthLevel.MEDIUM
    return StrengthLevel.STRONG


def charset_size(password: str) -> int:
    """Size of the character pool an attacker would have to search."""
    password = password or ""
    size = 0
    if re.search(r"[a-z]", password):
        size += 26
    if re.search(r"[A-Z]", password):
        size += 26
    if re.search(r"[0-9]", password):
        size += 10
    if re.search(r"[^a-zA-Z0-9]", password):
        size += 32
    return size


def keyspace(password: str) -> float:
    """charset ** length, or infinity when it no longer fits in a float."""
    password = password or ""
    try:
        return float(charset_size(password) or 1) ** len(password)
    except OverflowError:
        return math.inf


def format_time(seconds: float) -> str:
    """Human readable duration in the largest whole unit."""
    if not math.isfinite(seconds):
        return "—"
    if seconds < 1:
        return "Instant"
    for label, value in TIME_UNITS:
        if seconds >= value:
            return f"{math.floor(seconds / value)} {label}"
    return "Instant"


def _estimate(name: str, rate: float, space: float) -> CrackEstimate:
    return CrackEstimate(
        name=name,
        guesses_per_second=rate,
        average_seconds=space / 2 / rate,
        maximum_seconds=space / rate,
    )


def machine_estimates(password: str) -> list[CrackEstimate]:
    space = keyspace(password)
    return [_estimate(pc.name, pc.guesses_per_second, space) for pc in MACHINE_PROFILES]


def hash_estimates(password: str) -> list[CrackEstimate]:
    space = keyspace(password)
    return [_estimate(algo, rate, space) for algo, rate in HASH_RATES.items()]


def analyze_password(password: str) -> PasswordReport:
    """Build the full strength and crack-time report for a password."""
    password = password or ""
    score = strength_score(password)
    return PasswordReport(
        length=len(password),
        rules=evaluate_rules(password),
        score=score,
        level=strength_level(score),
        charset_size=charset_size(password),
        keyspace=keyspace(password),
        machine_estimates=machine_estimates(password),
        hash_estimates=hash_estimates(password),
    )
