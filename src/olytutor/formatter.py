"""Math markup formatter: LaTeX-like math to an HTML fragment.

Finds math segments delimited by ``$$...$$`` (display) or ``$...$`` (inline)
and rewrites each segment's content with a fixed chain of passes:

1. Superscripts: ``x^2``, ``x^{2+y}`` -> ``x<sup>2</sup>``
2. Subscripts: ``a_1``, ``a_{ij}`` -> ``a<sub>1</sub>``
3. Fractions: ``\\frac{a}{b}`` -> ``(a)/(b)``
4. Nth roots: ``\\sqrt[n]{x}`` -> ``<sup>n</sup>√(x)``
5. Square roots: ``\\sqrt{x}`` -> ``√(x)``
6. Symbol table: ``\\alpha`` -> ``α``, ``\\leq`` -> ``≤``, ...

Delimiters are dropped. Text outside segments is copied verbatim and is not
escaped; see olytutor.sanitize for untrusted input.

Example:
    >>> from olytutor import format_math
    >>> format_math("Solve $x^2 = 4$ for $x$")
    'Solve x<sup>2</sup> = 4 for x'

Thread Safety:
    All functions are pure. Compiled patterns and the default symbol table
    are immutable and shared.

"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from olytutor.config import FormatConfig, get_format_config
from olytutor.stringbuilder import StringBuilder
from olytutor.symbols import DEFAULT_SYMBOL_TABLE, SymbolTable
from olytutor.utils.logger import get_logger

logger = get_logger(__name__)


class MathKind(Enum):
    """Which delimiter pair enclosed a math segment."""

    DISPLAY = "display"
    INLINE = "inline"


@dataclass(frozen=True, slots=True)
class MathSegment:
    """A delimited math span found in the input.

    Attributes:
        kind: Display ($$) or inline ($)
        content: Raw text strictly between the delimiters
        start: Offset of the opening delimiter
        end: Offset just past the closing delimiter

    """

    kind: MathKind
    content: str
    start: int
    end: int


def scan_segments(text: str) -> Iterator[MathSegment]:
    """Yield math segments in left-to-right order.

    At each ``$`` a ``$$...$$`` pair is tried first, then ``$...$``. Content
    ends at the first matching closer and may span newlines. A ``$`` with no
    closer ends the scan; the rest of the text is plain.

    The scan is linear in len(text): once no ``$$`` remains after some
    position, later positions skip the display search.
    """
    pos = 0
    display_exhausted = False

    while True:
        start = text.find("$", pos)
        if start == -1:
            return

        if not display_exhausted and text.startswith("$$", start):
            close = text.find("$$", start + 2)
            if close != -1:
                yield MathSegment(MathKind.DISPLAY, text[start + 2 : close], start, close + 2)
                pos = close + 2
                continue
            display_exhausted = True

        close = text.find("$", start + 1)
        if close == -1:
            return
        yield MathSegment(MathKind.INLINE, text[start + 1 : close], start, close + 1)
        pos = close + 1


def _wrap_group(tag: str) -> Callable[[re.Match[str]], str]:
    """Build a replacer wrapping a ^/_ target in tag, stripping one brace pair."""

    def replace(match: re.Match[str]) -> str:
        target = match.group(1)
        if target.startswith("{") and target.endswith("}"):
            target = target[1:-1]
        return f"<{tag}>{target}</{tag}>"

    return replace


# Structural passes, applied in order before the symbol table.
# \w is ASCII-only; braced groups end at the first "}".
_STRUCTURAL_PASSES: tuple[tuple[re.Pattern[str], str | Callable[[re.Match[str]], str]], ...] = (
    (re.compile(r"\^(\w+|\{.*?\})", re.DOTALL | re.ASCII), _wrap_group("sup")),
    (re.compile(r"_(\w+|\{.*?\})", re.DOTALL | re.ASCII), _wrap_group("sub")),
    (re.compile(r"\\frac\{(.*?)\}\{(.*?)\}", re.DOTALL), r"(\1)/(\2)"),
    (re.compile(r"\\sqrt\[(.*?)\]\{(.*?)\}", re.DOTALL), r"<sup>\1</sup>√(\2)"),
    (re.compile(r"\\sqrt\{(.*?)\}", re.DOTALL), r"√(\1)"),
)


def transform_math(content: str, table: SymbolTable | None = None) -> str:
    """Rewrite the content of one math segment.

    Args:
        content: Text between the delimiters
        table: Symbol table for the final pass (None = built-in table)

    Returns:
        Content with structural passes and symbol substitutions applied

    Example:
        >>> transform_math("\\\\frac{1}{2} \\\\cdot x^2")
        '(1)/(2) · x<sup>2</sup>'
    """
    for pattern, replacement in _STRUCTURAL_PASSES:
        content = pattern.sub(replacement, content)
    if table is None:
        table = DEFAULT_SYMBOL_TABLE
    return table.apply(content)


def format_math(text: str, config: FormatConfig | None = None) -> str:
    """Convert every math segment in text to HTML/Unicode.

    Never raises for any string input. Unterminated delimiters and unknown
    commands are left as literal text.

    Args:
        text: Input text, possibly containing $...$ or $$...$$ segments
        config: Formatter config (None = active context config)

    Returns:
        HTML fragment with math delimiters removed

    Example:
        >>> format_math("before $$x^2$$ after")
        'before x<sup>2</sup> after'
    """
    if not text:
        return ""

    if config is None:
        config = get_format_config()
    table = DEFAULT_SYMBOL_TABLE if config.symbol_table is None else config.symbol_table

    sb = StringBuilder()
    pos = 0
    count = 0
    for segment in scan_segments(text):
        sb.append(text[pos : segment.start])
        rendered = transform_math(segment.content, table)
        if config.wrap_display and segment.kind is MathKind.DISPLAY:
            css_class = html.escape(config.display_class)
            rendered = f'<div class="{css_class}">{rendered}</div>'
        sb.append(rendered)
        pos = segment.end
        count += 1

    if count == 0:
        return text

    sb.append(text[pos:])
    logger.debug("Formatted %d math segment(s) in %d chars", count, len(text))
    return sb.build()


class MathFormatter:
    """Reusable formatter bound to a config.

    Usage:
            >>> fmt = MathFormatter(FormatConfig(wrap_display=True))
            >>> fmt("$$x$$")
            '<div class="math-display">x</div>'

    Thread Safety:
        Holds only an immutable config. Safe to share.

    """

    __slots__ = ("_config",)

    def __init__(self, config: FormatConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> FormatConfig:
        """The bound config, or the active context config when unbound."""
        return self._config if self._config is not None else get_format_config()

    def __call__(self, text: str) -> str:
        return format_math(text, self.config)


__all__ = [
    "MathFormatter",
    "MathKind",
    "MathSegment",
    "format_math",
    "scan_segments",
    "transform_math",
]
