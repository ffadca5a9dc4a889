"""Record attempts, keep a streak, and summarize progress.

All values are immutable: each step returns a new value to store.

Run::

    python examples/progress/study_report.py

"""

from datetime import date

from olytutor import (
    Conversation,
    OlympiadSubject,
    StreakData,
    UserProgress,
    accuracy_rate,
    add_attempt,
    export_progress,
    new_attempt,
    render_message,
    struggle_topics,
    update_streak,
)

subject = OlympiadSubject.MATH
progress = UserProgress()
streak = StreakData()

feedback = (
    Conversation(subject)
    .append("model", "Incorrect. Note that $x^2 - 1 = (x-1)(x+1)$.")
    .append("user", "Why does that factor?")
)
print(render_message(feedback.messages[0]))

for day, text, reply in [
    (date(2024, 3, 1), "Factor $x^2 - 1$", feedback.messages),
    (date(2024, 3, 2), "Sum $\\frac{1}{n^2}$", ()),
]:
    attempt = new_attempt(
        question_id=text,
        question_text=text,
        solution_attempt="...",
        subject=subject,
        feedback=reply,
    )
    progress = add_attempt(progress, attempt)
    streak = update_streak(streak, today=day)

print(f"Streak: {streak.current_streak} days")
print(f"Accuracy: {accuracy_rate(progress):.1f}%")
for topic in struggle_topics(progress):
    print(f"Struggling with {topic.name} ({topic.errors}/{topic.total_attempts})")
print(export_progress(progress))
