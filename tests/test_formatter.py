"""Tests for the math markup formatter."""

import time

import pytest

from olytutor import (
    FormatConfig,
    MathFormatter,
    MathKind,
    MathSegment,
    SymbolTableBuilder,
    create_table_with_defaults,
    format_math,
    scan_segments,
    transform_math,
)


class TestPlainText:
    """Text without math passes through untouched."""

    def test_empty_input(self) -> None:
        assert format_math("") == ""

    def test_no_dollars_is_identity(self) -> None:
        text = "Find all primes p such that p + 2 is prime."
        assert format_math(text) == text

    def test_html_is_not_escaped(self) -> None:
        assert format_math("<b>bold</b> & more") == "<b>bold</b> & more"

    def test_carets_outside_math_untouched(self) -> None:
        assert format_math("x^2 and a_1 stay literal") == "x^2 and a_1 stay literal"

    def test_surrounding_text_preserved(self) -> None:
        assert format_math("before $$x^2$$ after") == "before x<sup>2</sup> after"

    def test_html_around_math_preserved(self) -> None:
        assert format_math("<b>$x$</b>") == "<b>x</b>"


class TestScripts:
    """Superscript and subscript passes."""

    def test_superscript(self) -> None:
        assert format_math("$x^2$") == "x<sup>2</sup>"

    def test_braced_superscript(self) -> None:
        assert format_math("$x^{2+y}$") == "x<sup>2+y</sup>"

    def test_word_superscript(self) -> None:
        assert format_math("$e^ix$") == "e<sup>ix</sup>"

    def test_subscript(self) -> None:
        assert format_math("$a_1$") == "a<sub>1</sub>"

    def test_braced_subscript(self) -> None:
        assert format_math("$a_{n+1}$") == "a<sub>n+1</sub>"

    def test_subscript_and_superscript(self) -> None:
        assert format_math("$a_1^2$") == "a<sub>1</sub><sup>2</sup>"

    def test_caret_before_command_is_left(self) -> None:
        # ^ followed by neither a word nor a brace group is not a superscript
        assert format_math(r"$\int_0^\infty$") == "∫<sub>0</sub>^∞"


class TestStructural:
    """Fractions and roots."""

    def test_fraction(self) -> None:
        assert format_math(r"$\frac{1}{2}$") == "(1)/(2)"

    def test_fraction_with_superscript_inside(self) -> None:
        assert format_math(r"$\frac{x^{2}}{y}$") == "(x<sup>2</sup>)/(y)"

    def test_square_root(self) -> None:
        assert format_math(r"$\sqrt{4}$") == "√(4)"

    def test_nth_root(self) -> None:
        assert format_math(r"$\sqrt[3]{8}$") == "<sup>3</sup>√(8)"

    def test_fraction_denominator_stops_at_first_close_brace(self) -> None:
        # Nested braces are not balanced; the first "}" closes the group
        assert format_math(r"$\frac{1}{{a}b}$") == "(1)/({a)b}"

    def test_fraction_numerator_may_hold_braced_command(self) -> None:
        assert format_math(r"$\frac{\mathbb{R}}{2}$") == "(ℝ)/(2)"


class TestSymbols:
    """Symbol table substitution."""

    def test_greek_and_relations(self) -> None:
        assert format_math(r"$\alpha + \beta \leq \pi$") == "α + β ≤ π"

    def test_uppercase_greek(self) -> None:
        assert format_math(r"$\Gamma \Delta \Omega$") == "Γ Δ Ω"

    def test_operators(self) -> None:
        assert format_math(r"$a \cdot b \times c$") == "a · b × c"

    def test_longer_command_not_clobbered_by_prefix(self) -> None:
        assert format_math(r"$1, \cdots, n$") == "1, ⋯, n"
        assert format_math(r"$A \subseteq B \subset C$") == "A ⊆ B ⊂ C"
        assert format_math(r"$\int \infty \in$") == "∫ ∞ ∈"

    def test_number_sets(self) -> None:
        assert format_math(r"$x \in \mathbb{R}$") == "x ∈ ℝ"
        assert format_math(r"$\mathbb{Z} \subset \mathbb{Q}$") == "ℤ ⊂ ℚ"

    def test_spaced_number_set(self) -> None:
        assert format_math(r"$x \in \ R $") == "x ∈  ℝ "

    def test_arrows(self) -> None:
        assert format_math(r"$A \Rightarrow B \leftrightarrow C$") == "A ⇒ B ↔ C"

    def test_dots(self) -> None:
        assert format_math(r"$a_1, \ldots, a_n$") == "a<sub>1</sub>, ..., a<sub>n</sub>"

    def test_unknown_command_left_literal(self) -> None:
        assert format_math(r"$\foo + x$") == r"\foo + x"


class TestDelimiters:
    """Segment scanning and delimiter handling."""

    def test_double_dollar_precedence(self) -> None:
        assert format_math(r"$$\sum x$$") == "∑ x"

    def test_display_may_contain_single_dollar(self) -> None:
        assert format_math("$$a$b$$") == "a$b"

    def test_multiple_independent_segments(self) -> None:
        assert format_math("$a^2$ and $b_2$") == "a<sup>2</sup> and b<sub>2</sub>"

    def test_segments_span_newlines(self) -> None:
        assert format_math("$$\na^2\n$$") == "\na<sup>2</sup>\n"
        assert format_math("$a\nb$") == "a\nb"

    def test_empty_segments_disappear(self) -> None:
        assert format_math("$$$$") == ""
        assert format_math("$$") == ""
        assert format_math("a$$b") == "ab"

    def test_unterminated_dollar_left_literal(self) -> None:
        text = "cost is $5 and that's all"
        assert format_math(text) == text

    def test_trailing_unterminated_after_segment(self) -> None:
        assert format_math("$x^2$ costs $5") == "x<sup>2</sup> costs $5"

    def test_unterminated_on_large_input_returns_promptly(self) -> None:
        text = "price $" + "x^2 " * 50_000
        start = time.perf_counter()
        assert format_math(text) == text
        assert time.perf_counter() - start < 1.0

    def test_many_unclosed_display_openers_return_promptly(self) -> None:
        text = "$$ a $" * 20_000
        start = time.perf_counter()
        result = format_math(text)
        assert time.perf_counter() - start < 2.0
        assert isinstance(result, str)


class TestScanSegments:
    """The scanner on its own."""

    def test_offsets_and_kinds(self) -> None:
        segments = list(scan_segments("a $x$ b $$y$$"))
        assert segments == [
            MathSegment(MathKind.INLINE, "x", 2, 5),
            MathSegment(MathKind.DISPLAY, "y", 8, 13),
        ]

    def test_no_segments(self) -> None:
        assert list(scan_segments("no math")) == []
        assert list(scan_segments("one $ only")) == []

    def test_unclosed_display_falls_back_to_inline(self) -> None:
        segments = list(scan_segments("$$x"))
        assert segments == [MathSegment(MathKind.INLINE, "", 0, 2)]


class TestTransformMath:
    def test_transform_without_delimiters(self) -> None:
        assert transform_math(r"\frac{1}{2} \cdot x^2") == "(1)/(2) · x<sup>2</sup>"

    def test_custom_table(self) -> None:
        table = create_table_with_defaults().register_symbol(r"\hbar", "ℏ").build()
        assert transform_math(r"\hbar \omega", table) == "ℏ ω"
        assert transform_math(r"\hbar \omega") == r"\hbar ω"

    def test_empty_table_substitutes_nothing(self) -> None:
        empty = SymbolTableBuilder().build()
        assert transform_math(r"\alpha^2", empty) == r"\alpha<sup>2</sup>"
        assert format_math(r"$\alpha$", FormatConfig(symbol_table=empty)) == r"\alpha"


class TestDisplayWrapping:
    """FormatConfig.wrap_display."""

    def test_display_wrapped(self) -> None:
        config = FormatConfig(wrap_display=True)
        result = format_math("$$x$$ and $y$", config)
        assert result == '<div class="math-display">x</div> and y'

    def test_custom_class(self) -> None:
        config = FormatConfig(wrap_display=True, display_class="eq")
        assert format_math("$$x$$", config) == '<div class="eq">x</div>'

    def test_default_does_not_wrap(self) -> None:
        assert format_math("$$x$$") == "x"


class TestMathFormatter:
    def test_bound_config(self) -> None:
        fmt = MathFormatter(FormatConfig(wrap_display=True))
        assert fmt("$$x$$") == '<div class="math-display">x</div>'

    def test_unbound_uses_default(self) -> None:
        fmt = MathFormatter()
        assert fmt("$x^2$") == "x<sup>2</sup>"
        assert fmt.config == FormatConfig()

    @pytest.mark.parametrize(
        "text",
        ["", "plain", "$x$", "$$", "$", r"$\frac{1}{2}$"],
    )
    def test_matches_function(self, text: str) -> None:
        assert MathFormatter()(text) == format_math(text)
