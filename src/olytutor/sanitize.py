"""Safe rendering of untrusted text.

format_math() copies plain text verbatim, so text that came from a user or a
model response must be escaped before its output is injected as markup.
These helpers escape first, then format. Escaping leaves the characters math
markup relies on (``$``, ``\\``, ``^``, ``_``, braces) untouched.

Example:
    >>> render_safe("<b>$x^2$</b>")
    '&lt;b&gt;x<sup>2</sup>&lt;/b&gt;'

"""

import re

from olytutor.config import FormatConfig
from olytutor.formatter import format_math
from olytutor.models import ChatMessage

# Zero-width and bidi override characters to strip (Trojan Source mitigation)
_INVISIBLE_PATTERN = re.compile(
    "[\u200b\u200c\u200d\u200e\u200f\u202a\u202b\u202c\u202d\u202e\ufeff]+"
)


def escape_text(text: str) -> str:
    """Escape &, <, > and strip invisible control characters.

    Quotes are left alone: the formatter never places text inside an
    attribute value.
    """
    if not text:
        return ""
    text = _INVISIBLE_PATTERN.sub("", text)
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def render_safe(text: str, config: FormatConfig | None = None) -> str:
    """Escape untrusted text, then format its math."""
    return format_math(escape_text(text), config)


def render_message(message: ChatMessage, config: FormatConfig | None = None) -> str:
    """Render a chat message body for display."""
    return render_safe(message.text, config)


__all__ = [
    "escape_text",
    "render_message",
    "render_safe",
]
