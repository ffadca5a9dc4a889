"""Exception classes for olytutor.

Formatting math text never raises. These exceptions signal misuse of the
library: bad symbol rules, invalid conversation operations, or malformed
exported progress data.
"""

from __future__ import annotations


class OlytutorError(Exception):
    """Base exception for all olytutor errors.

    Subclass this for specific error categories.
    """

    pass


class RuleError(OlytutorError):
    """Error when a substitution rule cannot be registered.

    Raised for malformed commands, duplicate registrations, and commands
    that an earlier, shorter rule would clobber.
    """

    def __init__(self, command: str, message: str) -> None:
        """Initialize rule error.

        Args:
            command: The LaTeX command being registered (e.g., "\\alpha")
            message: Description of the problem
        """
        self.command = command
        super().__init__(f"Rule {command!r}: {message}")


class ConversationError(OlytutorError):
    """Error in a conversation operation.

    Raised for unknown message roles or reading from an empty conversation.
    """

    pass


class SerializationError(OlytutorError):
    """Error while reading serialized progress data.

    Raised when a payload is missing its type discriminator, names an
    unknown type, or is not valid JSON.
    """

    pass
