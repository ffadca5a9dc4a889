"""
olytutor: Math markup and study tracking for an Olympiad tutor

Turns LaTeX-like math in tutor text into HTML/Unicode, and keeps a
student's attempts, streak, and follow-up conversations as plain immutable
values. Zero runtime dependencies.

Quick Start:
    >>> from olytutor import format_math
    >>> format_math("If $a_1 = 2$ then $a_1^2 \\\\leq 4$")
    'If a<sub>1</sub> = 2 then a<sub>1</sub><sup>2</sup> ≤ 4'

    >>> # Untrusted text: escape first, then format
    >>> from olytutor import render_safe
    >>> render_safe("<i>$\\\\pi$</i>")
    '&lt;i&gt;π&lt;/i&gt;'

Custom Symbols:
    >>> from olytutor import FormatConfig, MathFormatter, create_table_with_defaults
    >>> table = create_table_with_defaults().register_symbol("\\\\hbar", "ℏ").build()
    >>> fmt = MathFormatter(FormatConfig(symbol_table=table))
    >>> fmt("$E = \\\\hbar \\\\omega$")
    'E = ℏ ω'
"""

from olytutor.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from olytutor.conversation import Conversation
from olytutor.errors import (
    ConversationError,
    OlytutorError,
    RuleError,
    SerializationError,
)
from olytutor.formatter import (
    MathFormatter,
    MathKind,
    MathSegment,
    format_math,
    scan_segments,
    transform_math,
)
from olytutor.models import (
    OLYMPIAD_SUBJECTS,
    ChatMessage,
    DailyQuestion,
    OlympiadSubject,
    QuestionAttempt,
    StreakData,
    UserProgress,
)
from olytutor.progress import (
    AccuracyPoint,
    TopicStat,
    accuracy_rate,
    add_attempt,
    is_correct_feedback,
    new_attempt,
    progress_over_time,
    struggle_topics,
    update_streak,
)
from olytutor.sanitize import escape_text, render_message, render_safe
from olytutor.serialization import (
    export_filename,
    export_progress,
    from_dict,
    from_json,
    import_progress,
    to_dict,
    to_json,
)
from olytutor.symbols import (
    DEFAULT_SYMBOL_TABLE,
    SubstitutionRule,
    SymbolTable,
    SymbolTableBuilder,
    create_default_table,
    create_table_with_defaults,
)

__version__ = "0.1.0"

__all__ = [
    # Formatting
    "format_math",
    "transform_math",
    "scan_segments",
    "MathFormatter",
    "MathKind",
    "MathSegment",
    # Safe rendering
    "escape_text",
    "render_safe",
    "render_message",
    # Configuration
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
    # Symbols
    "DEFAULT_SYMBOL_TABLE",
    "SubstitutionRule",
    "SymbolTable",
    "SymbolTableBuilder",
    "create_default_table",
    "create_table_with_defaults",
    # Models
    "OLYMPIAD_SUBJECTS",
    "ChatMessage",
    "DailyQuestion",
    "OlympiadSubject",
    "QuestionAttempt",
    "StreakData",
    "UserProgress",
    # Progress
    "AccuracyPoint",
    "TopicStat",
    "accuracy_rate",
    "add_attempt",
    "is_correct_feedback",
    "new_attempt",
    "progress_over_time",
    "struggle_topics",
    "update_streak",
    # Conversation
    "Conversation",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "export_progress",
    "import_progress",
    "export_filename",
    # Errors
    "OlytutorError",
    "RuleError",
    "ConversationError",
    "SerializationError",
    # Version
    "__version__",
]
