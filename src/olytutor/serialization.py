"""JSON round-trip for tutor values.

Converts model dataclasses to/from JSON-compatible dicts. Used for the
"export progress" download and for restoring data a client stored.

Each dict carries a ``_type`` discriminator. Dates are ISO strings and
subjects are their display values ("Mathematics", ...).

Example:
    from olytutor.serialization import export_progress, import_progress

    json_str = export_progress(progress)
    restored = import_progress(json_str)
    assert restored == progress

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from datetime import date
from typing import Any

from olytutor.errors import SerializationError
from olytutor.models import (
    ChatMessage,
    DailyQuestion,
    OlympiadSubject,
    QuestionAttempt,
    StreakData,
    UserProgress,
)

# Registry of type names to classes for deserialization
_MODEL_TYPES: dict[str, type] = {
    "ChatMessage": ChatMessage,
    "DailyQuestion": DailyQuestion,
    "QuestionAttempt": QuestionAttempt,
    "StreakData": StreakData,
    "UserProgress": UserProgress,
}


def to_dict(value: Any) -> dict[str, Any]:
    """Convert a model value to a JSON-compatible dict.

    Args:
        value: Any olytutor model dataclass

    Returns:
        Dict with ``_type`` and all fields
    """
    result: dict[str, Any] = {"_type": type(value).__name__}
    for f in fields(value):
        result[f.name] = _serialize_value(getattr(value, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if is_dataclass(value):
        return to_dict(value)
    if isinstance(value, OlympiadSubject):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a model value from a dict produced by to_dict.

    Raises:
        SerializationError: If ``_type`` is missing, unknown, or a field
            value cannot be converted
    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized value"
        raise SerializationError(msg)

    model_cls = _MODEL_TYPES.get(type_name)
    if model_cls is None:
        msg = f"Unknown type: {type_name!r}"
        raise SerializationError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(model_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    try:
        return model_cls(**kwargs)
    except TypeError as e:
        msg = f"Cannot build {type_name}: {e}"
        raise SerializationError(msg) from e


def _deserialize_value(value: Any, field_name: str) -> Any:
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item, field_name) for item in value)
    try:
        if field_name == "subject":
            return OlympiadSubject(value)
        if field_name == "last_activity_date" and value is not None:
            return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        msg = f"Invalid {field_name}: {value!r}"
        raise SerializationError(msg) from e
    return value


def to_json(value: Any, *, indent: int | None = None) -> str:
    """Serialize a model value to JSON."""
    return json.dumps(to_dict(value), indent=indent, ensure_ascii=False)


def from_json(json_str: str) -> Any:
    """Deserialize a model value from JSON.

    Raises:
        SerializationError: If the payload is not valid JSON or not a model
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e
    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise SerializationError(msg)
    return from_dict(data)


def export_progress(progress: UserProgress) -> str:
    """JSON array of all attempts, indented for download."""
    return json.dumps(
        [to_dict(a) for a in progress.attempts], indent=2, ensure_ascii=False
    )


def import_progress(json_str: str) -> UserProgress:
    """Rebuild progress from export_progress output.

    Raises:
        SerializationError: If the payload is not a JSON array of attempts
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e
    if not isinstance(data, list):
        msg = f"Expected a JSON array, got {type(data).__name__}"
        raise SerializationError(msg)

    attempts = []
    for item in data:
        if not isinstance(item, dict):
            msg = f"Expected an attempt object, got {type(item).__name__}"
            raise SerializationError(msg)
        attempt = from_dict(item)
        if not isinstance(attempt, QuestionAttempt):
            msg = f"Expected QuestionAttempt, got {type(attempt).__name__}"
            raise SerializationError(msg)
        attempts.append(attempt)
    return UserProgress(attempts=tuple(attempts))


def export_filename(subject: OlympiadSubject, day: date) -> str:
    """Download name for exported progress."""
    return f"olympiad_progress_{subject.value}_{day.isoformat()}.json"


__all__ = [
    "export_filename",
    "export_progress",
    "from_dict",
    "from_json",
    "import_progress",
    "to_dict",
    "to_json",
]
