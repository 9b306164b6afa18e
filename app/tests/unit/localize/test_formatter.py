"""Tests for localize.formatter module."""

import pytest

from localize.formatter import (
    PSEUDO_CLOSE,
    PSEUDO_OPEN,
    MessageFormatter,
    format_message,
    pseudo_localize,
)


@pytest.mark.unit
class TestMessageFormatter:
    """Tests for positional argument substitution."""

    def test_substitutes_positional_arguments(self):
        """Placeholders are replaced by the argument at their index."""
        formatter = MessageFormatter()
        assert formatter.format("{0} {1}", ["Hello", "World"]) == "Hello World"

    def test_arguments_can_be_reordered(self):
        """Placeholder order does not need to match argument order."""
        formatter = MessageFormatter()
        assert formatter.format("{1}, {0}!", ["World", "Hello"]) == "Hello, World!"

    def test_repeated_placeholder(self):
        """The same placeholder can appear more than once."""
        formatter = MessageFormatter()
        assert formatter.format("{0} and {0}", ["tea"]) == "tea and tea"

    def test_template_without_arguments_is_unchanged(self):
        """A template formatted without arguments is returned as is."""
        formatter = MessageFormatter()
        assert formatter.format("Hello {0}") == "Hello {0}"

    def test_out_of_range_placeholder_is_kept(self):
        """Placeholders without a matching argument stay in the output."""
        formatter = MessageFormatter()
        assert formatter.format("{0} {2}", ["a"]) == "a {2}"

    def test_multi_digit_index(self):
        """Placeholder indices are not limited to a single digit."""
        formatter = MessageFormatter()
        args = [str(i) for i in range(11)]
        assert formatter.format("{10}-{1}", args) == "10-1"

    def test_malformed_placeholders_are_ignored(self):
        """Text that merely looks like a placeholder is left untouched."""
        formatter = MessageFormatter()
        assert formatter.format("{x} {0 } {-1} {0", ["a"]) == "{x} {0 } {-1} {0"

    def test_scalar_arguments_are_stringified(self):
        """None, booleans and numbers are rendered with their JSON spelling."""
        formatter = MessageFormatter()
        result = formatter.format(
            "{0} {1} {2} {3} {4} {5}", [None, True, False, 3, 1.5, 2.0]
        )
        assert result == "null true false 3 1.5 2"

    def test_unsupported_argument_keeps_placeholder(self):
        """Arguments that are not strings, numbers or booleans are not rendered."""
        formatter = MessageFormatter()
        assert formatter.format("{0} {1}", [["list"], "ok"]) == "{0} ok"

    def test_arguments_are_not_reformatted(self):
        """Placeholder text inside an argument is not substituted again."""
        formatter = MessageFormatter()
        assert formatter.format("{0}", ["{1}", "x"]) == "{1}"


@pytest.mark.unit
class TestPseudoLocalization:
    """Tests for the pseudo-localization transform."""

    def test_pseudo_localize_doubles_vowels_and_wraps(self):
        """Lowercase vowels are doubled and the text is bracketed."""
        assert pseudo_localize("Hello World") == "［Heelloo Woorld］"

    def test_uppercase_vowels_are_not_doubled(self):
        """Only lowercase vowels are doubled."""
        assert pseudo_localize("AEIOU aeiou") == "［AEIOU aaeeiioouu］"

    def test_empty_template(self):
        """An empty template becomes just the brackets."""
        assert pseudo_localize("") == PSEUDO_OPEN + PSEUDO_CLOSE

    def test_pseudo_formatter_without_arguments(self):
        """The pseudo formatter transforms templates without arguments too."""
        formatter = MessageFormatter(pseudo=True)
        assert formatter.format("Hello World") == "［Heelloo Woorld］"

    def test_pseudo_transform_happens_before_substitution(self):
        """Arguments are inserted after the transform and stay unchanged."""
        formatter = MessageFormatter(pseudo=True)
        result = formatter.format("Hello {0} World", ["bright"])
        assert result == "［Heelloo bright Woorld］"


@pytest.mark.unit
class TestFormatMessage:
    """Tests for the format_message helper."""

    def test_format_message(self):
        """format_message formats without an explicit formatter."""
        assert format_message("Goodbye {0}", ["Max"]) == "Goodbye Max"

    def test_format_message_pseudo(self):
        """format_message honours the pseudo flag."""
        assert format_message("Hi", pseudo=True) == "［Hii］"
