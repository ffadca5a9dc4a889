"""Progress tracking and analytics.

Pure functions over the frozen values in olytutor.models. Every "update"
returns a new value; callers decide where to store it.

Example:
    >>> from datetime import date
    >>> streak = update_streak(StreakData(), today=date(2024, 3, 1))
    >>> update_streak(streak, today=date(2024, 3, 2)).current_streak
    2

"""

from __future__ import annotations

import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone

from olytutor.models import (
    ChatMessage,
    OlympiadSubject,
    QuestionAttempt,
    StreakData,
    UserProgress,
)
from olytutor.utils.logger import get_logger

logger = get_logger(__name__)

# Characters of question text used to group attempts into a topic
TOPIC_KEY_LENGTH = 30


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def today_utc() -> date:
    """Current calendar day in UTC."""
    return datetime.now(timezone.utc).date()


def is_correct_feedback(text: str) -> bool:
    """Read the evaluator's verdict from its feedback text.

    The evaluator is instructed to open with "Correct!" or "Incorrect.".
    Leading whitespace is ignored.
    """
    return text.lstrip().lower().startswith("correct")


def new_attempt(
    *,
    question_id: str,
    question_text: str,
    solution_attempt: str,
    subject: OlympiadSubject,
    feedback: Sequence[ChatMessage] = (),
    is_correct: bool | None = None,
    now: int | None = None,
) -> QuestionAttempt:
    """Create an attempt with a fresh id and timestamp.

    Args:
        question_id: Id of the attempted question
        question_text: Question text
        solution_attempt: The student's solution
        subject: Subject of the question
        feedback: Evaluation and follow-up messages
        is_correct: Verdict; derived from the first feedback message if None
        now: Timestamp in epoch milliseconds (None = current time)

    Returns:
        New QuestionAttempt
    """
    if is_correct is None:
        is_correct = bool(feedback) and is_correct_feedback(feedback[0].text)
    return QuestionAttempt(
        id=uuid.uuid4().hex,
        question_id=question_id,
        question_text=question_text,
        solution_attempt=solution_attempt,
        is_correct=is_correct,
        feedback=tuple(feedback),
        timestamp=now_ms() if now is None else now,
        subject=subject,
    )


def add_attempt(progress: UserProgress, attempt: QuestionAttempt) -> UserProgress:
    """Return progress with attempt appended."""
    return replace(progress, attempts=(*progress.attempts, attempt))


def update_streak(streak: StreakData, today: date | None = None) -> StreakData:
    """Record activity on a day.

    Activity on the same day leaves the streak unchanged. Activity on the
    day after the last active day extends it; any gap restarts it at 1.

    Args:
        streak: Current streak
        today: Day of the activity (None = today in UTC)

    Returns:
        Updated streak (the same object if nothing changed)
    """
    if today is None:
        today = today_utc()

    last = streak.last_activity_date
    if last == today:
        return streak
    if last is not None and last == today - timedelta(days=1):
        return StreakData(current_streak=streak.current_streak + 1, last_activity_date=today)

    if last is not None and streak.current_streak:
        logger.debug("Streak of %d reset (last active %s)", streak.current_streak, last)
    return StreakData(current_streak=1, last_activity_date=today)


def correct_count(progress: UserProgress) -> int:
    return sum(1 for a in progress.attempts if a.is_correct)


def accuracy_rate(progress: UserProgress) -> float:
    """Percentage of correct attempts, 0.0 when there are none."""
    total = len(progress.attempts)
    if total == 0:
        return 0.0
    return correct_count(progress) / total * 100


@dataclass(frozen=True, slots=True)
class AccuracyPoint:
    """Cumulative accuracy after an attempt.

    Attributes:
        day: UTC day of the attempt
        accuracy: Cumulative percent correct up to and including the attempt
        attempted: Cumulative number of attempts

    """

    day: date
    accuracy: float
    attempted: int


def progress_over_time(progress: UserProgress) -> list[AccuracyPoint]:
    """Cumulative accuracy series, thinned to one point per day change.

    Fewer than two attempts yield an empty series. Longer series keep the
    first and last points plus every point whose day differs from the
    point before it.
    """
    if len(progress.attempts) < 2:
        return []

    points: list[AccuracyPoint] = []
    correct = 0
    for attempted, attempt in enumerate(sorted(progress.attempts, key=lambda a: a.timestamp), 1):
        if attempt.is_correct:
            correct += 1
        points.append(
            AccuracyPoint(
                day=datetime.fromtimestamp(attempt.timestamp / 1000, tz=timezone.utc).date(),
                accuracy=correct / attempted * 100,
                attempted=attempted,
            )
        )

    if len(points) <= 2:
        return points
    last = len(points) - 1
    return [
        p
        for i, p in enumerate(points)
        if i == 0 or i == last or p.day != points[i - 1].day
    ]


@dataclass(frozen=True, slots=True)
class TopicStat:
    """Error statistics for one topic.

    Attributes:
        name: Topic key (truncated question text)
        errors: Incorrect attempts on the topic
        total_attempts: All attempts on the topic
        error_rate: errors / total_attempts in percent

    """

    name: str
    errors: int
    total_attempts: int
    error_rate: float


def topic_key(question_text: str) -> str:
    """Group key for a question: its first characters plus an ellipsis."""
    return question_text[:TOPIC_KEY_LENGTH] + "..."


def struggle_topics(progress: UserProgress, limit: int = 5) -> list[TopicStat]:
    """Topics with the most incorrect attempts.

    Only topics with at least one error are reported. Ties keep the order
    in which topics first failed.
    """
    errors: dict[str, int] = {}
    occurrences: dict[str, int] = {}
    for attempt in progress.attempts:
        key = topic_key(attempt.question_text)
        occurrences[key] = occurrences.get(key, 0) + 1
        if not attempt.is_correct:
            errors[key] = errors.get(key, 0) + 1

    stats = [
        TopicStat(
            name=key,
            errors=count,
            total_attempts=occurrences[key],
            error_rate=count / occurrences[key] * 100,
        )
        for key, count in errors.items()
    ]
    stats.sort(key=lambda s: s.errors, reverse=True)
    return stats[:limit]


__all__ = [
    "AccuracyPoint",
    "TopicStat",
    "accuracy_rate",
    "add_attempt",
    "correct_count",
    "is_correct_feedback",
    "new_attempt",
    "now_ms",
    "progress_over_time",
    "struggle_topics",
    "today_utc",
    "topic_key",
    "update_streak",
]
