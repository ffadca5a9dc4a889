"""ContextVar-based formatter configuration for olytutor.

Provides thread-local configuration using Python's ContextVars (PEP 567).
format_math() reads the active config when none is passed explicitly.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit config
    from olytutor import FormatConfig, format_math
    html = format_math("$$x^2$$", config=FormatConfig(wrap_display=True))

    # Or scope it with the context manager
    with format_config_context(FormatConfig(wrap_display=True)):
        html = format_math("$$x^2$$")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from olytutor.symbols import SymbolTable


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable formatter configuration.

    The defaults render display and inline math identically, which is the
    plain behavior callers get without any configuration.

    Attributes:
        wrap_display: Wrap $$display$$ content in a block element
        display_class: CSS class of the display wrapper
        symbol_table: Symbol table to apply (None = built-in table)

    """

    wrap_display: bool = False
    display_class: str = "math-display"
    symbol_table: "SymbolTable | None" = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = FormatConfig.from_dict({
            ...     "wrap_display": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.wrap_display
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current formatter configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set formatter configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with format_config_context(FormatConfig(wrap_display=True)):
        ...     html = format_math("$$x$$")
        >>> # Previous config restored here

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]
