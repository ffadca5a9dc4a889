"""Symbol table for LaTeX command substitution.

The symbol table is the ordered catalog of literal LaTeX commands that the
formatter swaps for Unicode characters once the structural passes
(superscripts, subscripts, fractions, roots) have run.

Thread Safety:
SymbolTable is immutable after creation. Safe to share.
Use SymbolTableBuilder for mutable construction.

Example:
    >>> table = SymbolTableBuilder().register_symbol("\\\\alpha", "α").build()
    >>> table.apply("\\\\alpha + 1")
    'α + 1'

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from olytutor.errors import RuleError


@dataclass(frozen=True, slots=True)
class SubstitutionRule:
    """A literal command-to-text replacement.

    Attributes:
        command: Literal LaTeX text to find (e.g. "\\cdot")
        replacement: Text substituted for every occurrence

    """

    command: str
    replacement: str

    def apply(self, text: str) -> str:
        return text.replace(self.command, self.replacement)


# Order matters: a command always precedes any shorter command it contains,
# otherwise the shorter replacement would eat the longer one.
_DEFAULT_SYMBOLS: tuple[tuple[str, str], ...] = (
    # Operators
    ("\\cdots", "⋯"),
    ("\\cdot", "·"),
    ("\\times", "×"),
    # Greek
    ("\\alpha", "α"),
    ("\\beta", "β"),
    ("\\gamma", "γ"),
    ("\\Gamma", "Γ"),
    ("\\delta", "δ"),
    ("\\Delta", "Δ"),
    ("\\epsilon", "ε"),
    ("\\zeta", "ζ"),
    ("\\eta", "η"),
    ("\\theta", "θ"),
    ("\\Theta", "Θ"),
    ("\\kappa", "κ"),
    ("\\lambda", "λ"),
    ("\\Lambda", "Λ"),
    ("\\mu", "μ"),
    ("\\nu", "ν"),
    ("\\xi", "ξ"),
    ("\\Xi", "Ξ"),
    ("\\pi", "π"),
    ("\\Pi", "Π"),
    ("\\rho", "ρ"),
    ("\\sigma", "σ"),
    ("\\Sigma", "Σ"),
    ("\\tau", "τ"),
    ("\\upsilon", "υ"),
    ("\\phi", "φ"),
    ("\\Phi", "Φ"),
    ("\\chi", "χ"),
    ("\\psi", "ψ"),
    ("\\Psi", "Ψ"),
    ("\\omega", "ω"),
    ("\\Omega", "Ω"),
    # Relations
    ("\\leq", "≤"),
    ("\\geq", "≥"),
    ("\\neq", "≠"),
    ("\\approx", "≈"),
    ("\\pm", "±"),
    # Calculus and sets
    ("\\sum", "∑"),
    ("\\int", "∫"),
    ("\\partial", "∂"),
    ("\\nabla", "∇"),
    ("\\infty", "∞"),
    ("\\forall", "∀"),
    ("\\exists", "∃"),
    ("\\in", "∈"),
    ("\\notin", "∉"),
    ("\\subseteq", "⊆"),
    ("\\supseteq", "⊇"),
    ("\\subset", "⊂"),
    ("\\supset", "⊃"),
    ("\\cup", "∪"),
    ("\\cap", "∩"),
    ("\\emptyset", "∅"),
    ("\\therefore", "∴"),
    ("\\because", "∵"),
    ("\\ldots", "..."),
    ("\\vdots", "⋮"),
    ("\\ddots", "⋱"),
    # Number sets
    ("\\ R ", " ℝ "),
    ("\\mathbb{R}", "ℝ"),
    ("\\ Z ", " ℤ "),
    ("\\mathbb{Z}", "ℤ"),
    ("\\ N ", " ℕ "),
    ("\\mathbb{N}", "ℕ"),
    ("\\ Q ", " ℚ "),
    ("\\mathbb{Q}", "ℚ"),
    ("\\ C ", " ℂ "),
    ("\\mathbb{C}", "ℂ"),
    # Arrows
    ("\\rightarrow", "→"),
    ("\\leftarrow", "←"),
    ("\\leftrightarrow", "↔"),
    ("\\Rightarrow", "⇒"),
    ("\\Leftarrow", "⇐"),
    ("\\Leftrightarrow", "⇔"),
)


class SymbolTable:
    """Immutable, ordered table of substitution rules.

    Rules are applied in registration order by apply().

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_rules", "_by_command")

    def __init__(
        self,
        rules: tuple[SubstitutionRule, ...],
        by_command: dict[str, SubstitutionRule],
    ) -> None:
        """Initialize table with pre-built mappings.

        Use SymbolTableBuilder to create instances.
        """
        self._rules = rules
        self._by_command = by_command

    def get(self, command: str) -> SubstitutionRule | None:
        """Get the rule for a command, or None if not registered."""
        return self._by_command.get(command)

    def has(self, command: str) -> bool:
        """Check if command is registered."""
        return command in self._by_command

    def apply(self, text: str) -> str:
        """Apply every rule, in order, to text."""
        for rule in self._rules:
            text = rule.apply(text)
        return text

    @property
    def rules(self) -> tuple[SubstitutionRule, ...]:
        """Get all rules in application order."""
        return self._rules

    @property
    def commands(self) -> frozenset[str]:
        """Get all registered commands."""
        return frozenset(self._by_command)

    def __contains__(self, command: str) -> bool:
        return self.has(command)

    def __iter__(self) -> Iterator[SubstitutionRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


class SymbolTableBuilder:
    """Mutable builder for SymbolTable.

    Register rules, then call build() to create an immutable table.

    Example:
            >>> builder = create_table_with_defaults()
            >>> table = builder.register_symbol("\\\\hbar", "ℏ").build()

    """

    __slots__ = ("_rules", "_by_command")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._rules: list[SubstitutionRule] = []
        self._by_command: dict[str, SubstitutionRule] = {}

    def register(self, rule: SubstitutionRule) -> SymbolTableBuilder:
        """Register a substitution rule.

        Args:
            rule: Rule to append to the table

        Returns:
            Self for chaining

        Raises:
            RuleError: If the command is not a backslash command, is already
                registered, or contains an earlier registered command
        """
        command = rule.command
        if not command.startswith("\\") or len(command) < 2:
            raise RuleError(command, "command must start with a backslash")

        if command in self._by_command:
            existing = self._by_command[command]
            raise RuleError(command, f"already registered as {existing.replacement!r}")

        for earlier in self._rules:
            if earlier.command in command:
                raise RuleError(
                    command,
                    f"would be clobbered by earlier rule {earlier.command!r}; "
                    "register longer commands first",
                )

        self._by_command[command] = rule
        self._rules.append(rule)
        return self

    def register_symbol(self, command: str, replacement: str) -> SymbolTableBuilder:
        """Register a rule from a command and its replacement."""
        return self.register(SubstitutionRule(command=command, replacement=replacement))

    def extend(self, rules: Iterable[SubstitutionRule]) -> SymbolTableBuilder:
        """Register multiple rules in order."""
        for rule in rules:
            self.register(rule)
        return self

    def build(self) -> SymbolTable:
        """Build immutable table from registered rules."""
        return SymbolTable(
            rules=tuple(self._rules),
            by_command=dict(self._by_command),
        )

    def __len__(self) -> int:
        return len(self._rules)


def create_table_with_defaults() -> SymbolTableBuilder:
    """Create a builder pre-seeded with the default symbols.

    Use this to add commands on top of the built-in catalog.
    """
    builder = SymbolTableBuilder()
    for command, replacement in _DEFAULT_SYMBOLS:
        builder.register_symbol(command, replacement)
    return builder


def create_default_table() -> SymbolTable:
    """Create the built-in symbol table."""
    return create_table_with_defaults().build()


DEFAULT_SYMBOL_TABLE: SymbolTable = create_default_table()


__all__ = [
    "DEFAULT_SYMBOL_TABLE",
    "SubstitutionRule",
    "SymbolTable",
    "SymbolTableBuilder",
    "create_default_table",
    "create_table_with_defaults",
]
