"""Plain-text formatters for analyzer results."""

from __future__ import annotations

from .analyzer.email_models import DetectionResult
from .analyzer.password import MACHINE_PROFILES, PasswordReport
from .analyzer.url_checker import URLCheckResult
from .analyzer.website_checker import WebsiteCheckResult
from .constants import Category, FindingLevel
from .quiz.session import Feedback, Question, QuizSession, choice_letter

CATEGORY_EMOJI = {
    Category.LIKELY_SAFE: "✅",
    Category.NEEDS_REVIEW: "⚠️",
    Category.SUSPICIOUS: "🚨",
}

FINDING_EMOJI = {
    FindingLevel.OK: "✅",
    FindingLevel.WARNING: "⚠️",
    FindingLevel.ERROR: "❌",
}


def _check(passed: bool) -> str:
    return "✅" if passed else "❌"


def format_email_result(result: DetectionResult) -> str:
    emoji = CATEGORY_EMOJI.get(result.category, "")
    lines = [
        f"{emoji} {result.category.value}",
        f"Score: {result.score} (threshold {result.threshold})",
    ]
    if result.hits:
        lines.append("")
        lines.append("Reasons:")
        for hit in result.hits:
            lines.append(f"  - {hit.reason} (+{hit.weight})")
    else:
        lines.append("No risk indicators found.")
    return "\n".join(lines)


def format_url_result(result: URLCheckResult) -> str:
    lines = [f"{FINDING_EMOJI[f.level]} {f.message}" for f in result.findings]
    if result.checklist:
        lines.append("")
        lines.append("Checklist:")
        lines.extend(f"  - {item}" for item in result.checklist)
    return "\n".join(lines)


def format_website_result(result: WebsiteCheckResult) -> str:
    if not result.parsed:
        headline = f"❌ {result.summary}"
    elif result.legitimate:
        headline = f"✅ {result.summary}"
    else:
        headline = f"⚠️ {result.summary}"
    lines = [headline, ""]
    lines.extend(f"{_check(c.passed)} {c.label}" for c in result.checks)
    return "\n".join(lines)


def _strength_bar(score: float, width: int = 20) -> str:
    filled = round(score * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_password_report(
    report: PasswordReport,
    show_hashes: bool = False,
    show_details: bool = False,
) -> str:
    if not report.length:
        return "Enter a password to analyze."

    lines = [
        f"Password Strength: {report.level.value} {_strength_bar(report.score)}",
    ]
    lines.extend(f"  {_check(ok)} {label}" for label, ok in report.rules)

    lines.append("")
    lines.append("PC Crack Times:")
    profiles = {pc.name: pc for pc in MACHINE_PROFILES}
    for estimate in report.machine_estimates:
        lines.append(f"  {estimate.name}: Avg: {estimate.average} | Max: {estimate.maximum}")
        pc = profiles.get(estimate.name)
        if show_details and pc:
            lines.append(f"      CPU: {pc.cpu}")
            lines.append(f"      Cores: {pc.cores}")
            lines.append(f"      Clock: {pc.clock}")
            lines.append(f"      GPU: {pc.gpu}")

    if show_hashes:
        lines.append("")
        lines.append("Hash-Based Estimates:")
        for estimate in report.hash_estimates:
            lines.append(f"  {estimate.name}: {estimate.average} | {estimate.maximum}")

    return "\n".join(lines)


def format_question(session: QuizSession, question: Question) -> str:
    lines = [session.progress, question.prompt, ""]
    lines.extend(
        f"  {choice_letter(i)}. {choice}" for i, choice in enumerate(question.choices)
    )
    return "\n".join(lines)


def format_feedback(feedback: Feedback) -> str:
    if feedback.correct:
        headline = "✅ Correct!"
    else:
        answer = feedback.question.answer
        correct = feedback.question.correct_choice
        headline = f"❌ Not quite. The answer is {choice_letter(answer)}. {correct}"
    return f"{headline}\n\nExplanation: {feedback.explanation}"


def format_quiz_summary(session: QuizSession) -> str:
    return f"Finished\nYour score: {session.score} / {session.total}"
