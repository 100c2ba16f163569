"""Load custom quiz banks from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .banks import BUILTIN_QUIZZES
from .session import Question, Quiz

logger = logging.getLogger(__name__)


class QuizLoadError(Exception):
    """A quiz file could not be parsed into a question bank."""


def _parse_question(raw, position: int, source: Path) -> Question:
    if not isinstance(raw, dict):
        raise QuizLoadError(f"{source}: question #{position} must be a mapping")

    prompt = str(raw.get("prompt") or "").strip()
    choices = raw.get("choices")
    if not prompt:
        raise QuizLoadError(f"{source}: question #{position} has no prompt")
    if not isinstance(choices, list) or not all(isinstance(c, (str, int, float)) for c in choices):
        raise QuizLoadError(f"{source}: question #{position} choices must be a list of strings")

    try:
        answer = int(raw.get("answer"))
        question_id = int(raw.get("id", position))
    except (TypeError, ValueError) as exc:
        raise QuizLoadError(f"{source}: question #{position} has a non-integer id/answer") from exc

    try:
        return Question(
            id=question_id,
            prompt=prompt,
            choices=tuple(str(c) for c in choices),
            answer=answer,
            explanation=str(raw.get("explanation") or "").strip(),
        )
    except ValueError as exc:
        raise QuizLoadError(f"{source}: {exc}") from exc


def load_question_bank(path: Path) -> Quiz:
    """Parse one YAML quiz file."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise QuizLoadError(f"{path}: {exc}") from exc

    if not isinstance(data, dict):
        raise QuizLoadError(f"{path}: top level must be a mapping")

    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list) or not raw_questions:
        raise QuizLoadError(f"{path}: 'questions' must be a non-empty list")

    quiz_id = str(data.get("id") or path.stem).strip().lower()
    title = str(data.get("title") or quiz_id).strip()
    questions = [
        _parse_question(raw, position, path)
        for position, raw in enumerate(raw_questions, start=1)
    ]
    return Quiz(quiz_id, title, questions, str(data.get("label") or title).strip())


def load_quiz_dir(directory: Path | None) -> dict[str, Quiz]:
    """Load every *.yaml / *.yml quiz in a directory, skipping broken files."""
    quizzes: dict[str, Quiz] = {}
    if directory is None or not Path(directory).is_dir():
        return quizzes

    paths = sorted(Path(directory).glob("*.yaml")) + sorted(Path(directory).glob("*.yml"))
    for path in paths:
        try:
            quiz = load_question_bank(path)
        except QuizLoadError as exc:
            logger.warning("Skipping quiz file: %s", exc)
            continue
        quizzes[quiz.id] = quiz
    return quizzes


def quiz_catalog(directory: Path | None = None) -> dict[str, Quiz]:
    """Built-in quizzes plus any custom ones (custom ids override built-ins)."""
    catalog = dict(BUILTIN_QUIZZES)
    custom = load_quiz_dir(directory)
    if custom:
        logger.info("Loaded %s custom quiz(zes): %s", len(custom), sorted(custom))
    catalog.update(custom)
    return catalog
