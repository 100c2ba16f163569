"""Detection quizzes for CyberKit."""

from .banks import BUILTIN_QUIZZES, DEFAULT_TAB
from .loader import QuizLoadError, load_question_bank, load_quiz_dir, quiz_catalog
from .session import Feedback, Question, Quiz, QuizSession, choice_letter

__all__ = [
    "BUILTIN_QUIZZES",
    "DEFAULT_TAB",
    "Feedback",
    "Question",
    "Quiz",
    "QuizLoadError",
    "QuizSession",
    "choice_letter",
    "load_question_bank",
    "load_quiz_dir",
    "quiz_catalog",
]
