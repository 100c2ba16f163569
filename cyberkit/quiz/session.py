"""Quiz models and the question-by-question session state machine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Question:
    id: int
    prompt: str
    choices: tuple[str, ...]
    answer: int  # index of correct choice
    explanation: str

    def __post_init__(self):
        object.__setattr__(self, "choices", tuple(self.choices))
        if len(self.choices) < 2:
            raise ValueError(f"Question {self.id} needs at least two choices")
        if not 0 <= self.answer < len(self.choices):
            raise ValueError(f"Question {self.id} answer index {self.answer} is out of range")

    @property
    def correct_choice(self) -> str:
        return self.choices[self.answer]


@dataclass(frozen=True)
class Feedback:
    """What the player sees after submitting an answer."""

    question: Question
    selected: int
    correct: bool

    @property
    def explanation(self) -> str:
        return self.question.explanation


@dataclass
class Quiz:
    """A titled question bank."""

    id: str
    title: str
    questions: list[Question] = field(default_factory=list)
    label: str = ""

    def start(self) -> "QuizSession":
        return QuizSession(self.title, self.questions)


def choice_letter(index: int) -> str:
    return chr(ord("A") + index)


class QuizSession:
    """Tracks one run through a quiz.

    select -> submit -> next, repeated until the last question, then
    ``finished``. Out-of-order calls are ignored (they return False/None),
    so a front end can forward user input without guarding every step.
    """

    def __init__(self, title: str, questions: list[Question]):
        if not questions:
            raise ValueError("A quiz needs at least one question")
        self.title = title
        self.questions = list(questions)
        self.restart()

    def restart(self) -> None:
        self.index = 0
        self.selected: int | None = None
        self.score = 0
        self.answered = False
        self.finished = False

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> Question | None:
        if self.finished:
            return None
        return self.questions[self.index]

    @property
    def progress(self) -> str:
        return f"Question {self.index + 1} of {self.total}"

    def select(self, choice: int) -> bool:
        """Pick a choice for the current question; ignored once answered."""
        if self.finished or self.answered:
            return False
        question = self.questions[self.index]
        if not 0 <= choice < len(question.choices):
            raise ValueError(f"Choice {choice} is out of range for question {question.id}")
        self.selected = choice
        return True

    def submit(self) -> Feedback | None:
        """Lock in the selected choice and reveal the explanation."""
        if self.finished or self.answered or self.selected is None:
            return None
        question = self.questions[self.index]
        correct = self.selected == question.answer
        if correct:
            self.score += 1
        self.answered = True
        return Feedback(question, self.selected, correct)

    def next(self) -> bool:
        """Advance after an answer has been submitted."""
        if self.finished or not self.answered:
            return False
        self.answered = False
        self.selected = None
        if self.index + 1 >= self.total:
            self.finished = True
        else:
            self.index += 1
        return True
