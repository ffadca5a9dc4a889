"""Property-based tests for the formatter using Hypothesis.

These tests verify invariants that hold for any input text:
1. Formatting never raises
2. Text without dollar signs is returned unchanged
3. Formatting never introduces dollar signs
4. Plain text between segments survives verbatim
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from olytutor import format_math, scan_segments

# Text biased toward math syntax so segments and commands actually occur
math_alphabet = st.sampled_from(list("$^_{}[]\\ ab12xy+=\n") + ["\\frac", "\\sqrt", "\\alpha"])
math_text = st.lists(math_alphabet, max_size=60).map("".join)
dollar_free_text = st.text(alphabet=st.characters(exclude_characters="$"), max_size=200)
plain_word = st.text(alphabet="abcdefghij ,.", max_size=20)
math_word = st.text(alphabet="abcxyz123+=", min_size=1, max_size=20)


class TestFormatterProperties:
    @given(text=st.text(max_size=300))
    @settings(max_examples=200)
    def test_never_raises(self, text: str) -> None:
        assert isinstance(format_math(text), str)

    @given(text=math_text)
    @settings(max_examples=300)
    def test_never_raises_on_math_like_text(self, text: str) -> None:
        assert isinstance(format_math(text), str)

    @given(text=dollar_free_text)
    @settings(max_examples=200)
    def test_dollar_free_text_is_identity(self, text: str) -> None:
        assert format_math(text) == text

    @given(text=math_text)
    @settings(max_examples=200)
    def test_no_dollars_introduced(self, text: str) -> None:
        assert format_math(text).count("$") <= text.count("$")

    @given(text=math_text)
    @settings(max_examples=100)
    def test_deterministic(self, text: str) -> None:
        assert format_math(text) == format_math(text)

    @given(before=plain_word, middle=plain_word, after=plain_word, a=math_word, b=math_word)
    @settings(max_examples=100)
    def test_plain_text_between_segments_preserved(
        self, before: str, middle: str, after: str, a: str, b: str
    ) -> None:
        text = f"{before}${a}${middle}$${b}$${after}"
        assert format_math(text) == f"{before}{a}{middle}{b}{after}"


class TestScannerProperties:
    @given(text=math_text)
    @settings(max_examples=200)
    def test_segments_ordered_and_disjoint(self, text: str) -> None:
        last_end = 0
        for segment in scan_segments(text):
            assert segment.start >= last_end
            assert segment.end > segment.start
            assert text[segment.start] == "$"
            assert text[segment.end - 1] == "$"
            last_end = segment.end
