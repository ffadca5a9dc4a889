"""StringBuilder for O(n) string accumulation.

The formatter emits one fragment per plain-text run and per math segment.
Appending to a list and joining once keeps that linear in the input size.

Thread Safety:
StringBuilder instances are local to each format call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("x").append("<sup>2</sup>")
            >>> sb.build()
            'x<sup>2</sup>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

