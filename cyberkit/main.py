"""Command-line entry point for CyberKit."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

from .analyzer import (
    DetectionInput,
    DetectionOptions,
    EmailDetector,
    URLChecker,
    analyze_password,
    check_website,
)
from .config import Config, load_config, validate_config
from .formatters import (
    format_email_result,
    format_feedback,
    format_password_report,
    format_question,
    format_quiz_summary,
    format_url_result,
    format_website_result,
)
from .quiz import DEFAULT_TAB, Quiz, quiz_catalog

logger = logging.getLogger(__name__)

RULE_GROUPS = ("keywords", "domains", "lookalikes", "links", "attachments", "headers")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} must be a positive integer")
    return number


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _emit(args, payload: dict, text: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(text)


def cmd_email(args, config: Config) -> int:
    body = args.body or ""
    if args.body_file:
        try:
            body = Path(args.body_file).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.error("Could not read body file %s: %s", args.body_file, exc)
            return 2

    disabled = set(args.disable or [])
    options = DetectionOptions(
        **{group: group not in disabled for group in RULE_GROUPS},
        threshold=args.threshold,
    )
    message = DetectionInput(
        subject=args.subject or "",
        body=body,
        from_address=args.from_address or "",
        reply_to=args.reply_to or "",
        auth_results=args.auth_results or "",
        attachments=tuple(args.attachment or ()),
        options=options,
    )
    result = EmailDetector.from_config(config).detect(message)
    _emit(args, result.to_dict(), format_email_result(result))
    return 0


def cmd_url(args, config: Config) -> int:
    result = URLChecker.from_config(config).check(args.url)
    _emit(args, result.to_dict(), format_url_result(result))
    return 0 if result.parsed else 1


def cmd_website(args, config: Config) -> int:
    result = check_website(args.url)
    _emit(args, result.to_dict(), format_website_result(result))
    return 0 if result.parsed else 1


def cmd_password(args, config: Config) -> int:
    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
    report = analyze_password(password)
    _emit(
        args,
        report.to_dict(),
        format_password_report(report, show_hashes=args.hashes, show_details=args.details),
    )
    return 0


def _read_choice(raw: str, count: int) -> int | None:
    """Accept a letter (A, b) or a 1-based number; None when unusable."""
    value = (raw or "").strip()
    if not value:
        return None
    if value.isdigit():
        index = int(value) - 1
    elif len(value) == 1 and value.isalpha():
        index = ord(value.upper()) - ord("A")
    else:
        return None
    return index if 0 <= index < count else None


def run_quiz(
    quiz: Quiz,
    input_func: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> int:
    """Play a quiz interactively; returns the final score."""
    out = out or sys.stdout
    session = quiz.start()
    print(f"{quiz.label}: {quiz.title}" if quiz.label else quiz.title, file=out)
    print("", file=out)

    while not session.finished:
        question = session.current
        print(format_question(session, question), file=out)

        choice = None
        while choice is None:
            try:
                raw = input_func("Your answer: ")
            except EOFError:
                print("", file=out)
                print(format_quiz_summary(session), file=out)
                return session.score
            choice = _read_choice(raw, len(question.choices))
            if choice is None:
                print("Please choose one of the listed options.", file=out)

        session.select(choice)
        feedback = session.submit()
        print(format_feedback(feedback), file=out)
        print("", file=out)
        session.next()

    print(format_quiz_summary(session), file=out)
    return session.score


def cmd_quiz(args, config: Config) -> int:
    catalog = quiz_catalog(config.quiz_dir)
    if args.list:
        for quiz_id, quiz in catalog.items():
            print(f"{quiz_id}: {quiz.title} ({len(quiz.questions)} questions)")
        return 0

    quiz = catalog.get(args.topic)
    if quiz is None:
        print(f"Unknown quiz '{args.topic}'. Available: {', '.join(catalog)}", file=sys.stderr)
        return 2
    run_quiz(quiz)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cyberkit",
        description="Offline phishing, URL, website and password checks plus awareness quizzes.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    email = sub.add_parser("email", help="Score an email for phishing indicators")
    email.add_argument("--subject", default="")
    body = email.add_mutually_exclusive_group()
    body.add_argument("--body", default="")
    body.add_argument("--body-file", type=Path, help="Read the body from a file")
    email.add_argument("--from", dest="from_address", default="")
    email.add_argument("--reply-to", default="")
    email.add_argument("--auth-results", default="", help="Raw Authentication-Results text")
    email.add_argument(
        "--attachment", action="append", help="Attachment filename (repeatable)"
    )
    email.add_argument("--threshold", type=positive_int, default=None)
    email.add_argument(
        "--disable", action="append", choices=RULE_GROUPS, help="Disable a rule group"
    )
    email.add_argument("--json", action="store_true")
    email.set_defaults(func=cmd_email)

    url = sub.add_parser("url", help="Statically check a URL")
    url.add_argument("url")
    url.add_argument("--json", action="store_true")
    url.set_defaults(func=cmd_url)

    website = sub.add_parser("website", help="Run the website checklist")
    website.add_argument("url")
    website.add_argument("--json", action="store_true")
    website.set_defaults(func=cmd_website)

    password = sub.add_parser("password", help="Estimate password strength")
    password.add_argument("password", nargs="?", help="Prompted for when omitted")
    password.add_argument("--hashes", action="store_true", help="Show hash-based estimates")
    password.add_argument("--details", action="store_true", help="Show machine specs")
    password.add_argument("--json", action="store_true")
    password.set_defaults(func=cmd_password)

    quiz = sub.add_parser("quiz", help="Take a detection quiz")
    quiz.add_argument("--topic", default=DEFAULT_TAB)
    quiz.add_argument("--list", action="store_true", help="List available quizzes")
    quiz.set_defaults(func=cmd_quiz)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    if args.log_level:
        config.log_level = args.log_level.upper()
    setup_logging(config.log_level)

    errors = validate_config(config)
    if errors:
        for error in errors:
            logger.error("Config error: %s", error)
        return 2

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
