"""Typed domain values for the tutor.

All values are frozen dataclasses with slots, so they can be shared freely
and "updated" only by building new instances (see olytutor.progress and
olytutor.conversation).

Timestamps are epoch milliseconds, matching what browser clients store.

"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal

Role = Literal["user", "model", "system"]

ROLES: frozenset[str] = frozenset(("user", "model", "system"))


class OlympiadSubject(Enum):
    """Subjects a student can prepare for."""

    MATH = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    INFORMATICS = "Informatics"


OLYMPIAD_SUBJECTS: tuple[OlympiadSubject, ...] = tuple(OlympiadSubject)


@dataclass(frozen=True, slots=True)
class DailyQuestion:
    """A generated practice question."""

    id: str
    text: str
    subject: OlympiadSubject


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One turn of tutor feedback or follow-up chat.

    Attributes:
        id: Unique message id
        role: "user", "model", or "system"
        text: Message body, may contain $math$
        timestamp: Epoch milliseconds

    """

    id: str
    role: Role
    text: str
    timestamp: int


@dataclass(frozen=True, slots=True)
class QuestionAttempt:
    """A student's solution to a question and the feedback it received.

    Attributes:
        id: Unique attempt id
        question_id: Id of the attempted DailyQuestion
        question_text: Question text at the time of the attempt
        solution_attempt: The submitted solution
        is_correct: Verdict derived from the evaluator's feedback
        feedback: Evaluation followed by any follow-up conversation
        timestamp: Epoch milliseconds
        subject: Subject of the question

    """

    id: str
    question_id: str
    question_text: str
    solution_attempt: str
    is_correct: bool
    feedback: tuple[ChatMessage, ...]
    timestamp: int
    subject: OlympiadSubject


@dataclass(frozen=True, slots=True)
class UserProgress:
    """All attempts, in the order they were recorded."""

    attempts: tuple[QuestionAttempt, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class StreakData:
    """Consecutive-day activity streak.

    Attributes:
        current_streak: Number of consecutive active days
        last_activity_date: Last day with activity, or None if never active

    """

    current_streak: int = 0
    last_activity_date: date | None = None


__all__ = [
    "OLYMPIAD_SUBJECTS",
    "ROLES",
    "ChatMessage",
    "DailyQuestion",
    "OlympiadSubject",
    "QuestionAttempt",
    "Role",
    "StreakData",
    "UserProgress",
]
