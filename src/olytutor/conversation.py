"""Conversation history as an explicit value.

A Conversation is the ordered list of messages exchanged about one problem.
Each call that talks to the tutor model takes a Conversation and returns a
new one; nothing holds a shared "current chat" handle.

Example:
    >>> convo = Conversation(OlympiadSubject.MATH)
    >>> convo = convo.append("user", "Why is $x^2 \\\\geq 0$?", now=1)
    >>> len(convo)
    1
    >>> convo.history()[0]["role"]
    'user'

Thread Safety:
Conversations are frozen. Appending builds a new instance.

"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any

from olytutor.errors import ConversationError
from olytutor.models import ROLES, ChatMessage, OlympiadSubject, Role
from olytutor.progress import now_ms

# Roles accepted as chat history by the generative API
_HISTORY_ROLES: dict[str, str] = {"user": "user", "model": "model", "system": "user"}


@dataclass(frozen=True, slots=True)
class Conversation:
    """Immutable chat history about one problem.

    Attributes:
        subject: Subject the tutor is coaching
        messages: Messages in the order they were exchanged

    """

    subject: OlympiadSubject
    messages: tuple[ChatMessage, ...] = field(default_factory=tuple)

    def with_message(self, message: ChatMessage) -> Conversation:
        """Return a conversation with message appended.

        Raises:
            ConversationError: If the message role is unknown
        """
        if message.role not in ROLES:
            msg = f"Unknown message role: {message.role!r}"
            raise ConversationError(msg)
        return replace(self, messages=(*self.messages, message))

    def append(self, role: Role, text: str, *, now: int | None = None) -> Conversation:
        """Return a conversation with a new message appended.

        Args:
            role: "user", "model", or "system"
            text: Message body
            now: Timestamp in epoch milliseconds (None = current time)
        """
        message = ChatMessage(
            id=uuid.uuid4().hex,
            role=role,
            text=text,
            timestamp=now_ms() if now is None else now,
        )
        return self.with_message(message)

    def last(self) -> ChatMessage:
        """Most recent message.

        Raises:
            ConversationError: If the conversation is empty
        """
        if not self.messages:
            msg = "Conversation has no messages"
            raise ConversationError(msg)
        return self.messages[-1]

    def history(self) -> list[dict[str, Any]]:
        """Messages in the generative API's chat-history shape.

        System messages are sent as user turns, since the API only accepts
        "user" and "model".
        """
        return [
            {"role": _HISTORY_ROLES[m.role], "parts": [{"text": m.text}]}
            for m in self.messages
        ]

    def system_instruction(self) -> str:
        """Tutor instruction for follow-up questions in this subject."""
        return (
            f"You are an Olympiad AI Tutor for {self.subject.value}. "
            "The user is asking for clarification about a previous explanation "
            "related to a problem. Be patient, encouraging, and provide deeper "
            "clarification with examples if needed. Keep your responses helpful "
            "and focused on the user's query. If using mathematical expressions, "
            "use LaTeX-like syntax."
        )

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __bool__(self) -> bool:
        return bool(self.messages)


__all__ = ["Conversation"]
