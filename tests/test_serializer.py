"""Tests for serializing tokens back to pattern text."""

from __future__ import annotations

import pytest

from datekit.syntax import FieldRun, QuotedLiteral, TextLiteral, serialize, tokenize


class TestSerialize:
    """serialize() output."""

    def test_empty(self) -> None:
        assert serialize([]) == ""

    def test_fields_and_plain_text(self) -> None:
        tokens = [FieldRun("y", 4), TextLiteral("-"), FieldRun("M", 2)]
        assert serialize(tokens) == "yyyy-MM"

    def test_quoted_literal_with_apostrophe(self) -> None:
        tokens = [FieldRun("h", 1), TextLiteral(" "), QuotedLiteral("o'clock")]
        assert serialize(tokens) == "h 'o''clock'"

    def test_text_with_field_letter_is_quoted(self) -> None:
        assert serialize([FieldRun("H", 2), TextLiteral("h")]) == "HH'h'"

    def test_plain_apostrophe_is_doubled(self) -> None:
        assert serialize([TextLiteral("'")]) == "''"

    def test_leading_apostrophe_outside_quotes(self) -> None:
        assert serialize([QuotedLiteral("'at")]) == "'''at'"

    def test_only_apostrophes(self) -> None:
        assert serialize([QuotedLiteral("''")]) == "''''"

    def test_adjacent_quoted_sections_merge(self) -> None:
        assert serialize([QuotedLiteral("a"), QuotedLiteral("b")]) == "'ab'"

    def test_unknown_token_type(self) -> None:
        with pytest.raises(TypeError, match="Unknown token type"):
            serialize(["yyyy"])  # type: ignore[list-item]


class TestRoundTrip:
    """tokenize(serialize(tokens)) keeps fields and literal text."""

    @pytest.mark.parametrize(
        "pattern",
        [
            "yyyy-MM-dd'T'HH:mm:ss.SSSZZZZZ",
            "h 'o''clock' a",
            "EEEE, d. MMMM y",
            "''",
            "'at' HH",
            "dd.MM.yyyy",
        ],
    )
    def test_canonical_patterns_are_fixed_points(self, pattern: str) -> None:
        assert serialize(tokenize(pattern)) == pattern

    def test_quoted_then_apostrophe_then_quoted(self) -> None:
        """Apostrophe text between quoted sections reads back as one literal."""
        tokens = [QuotedLiteral("a"), TextLiteral("'"), QuotedLiteral("b")]
        assert tokenize(serialize(tokens)) == (QuotedLiteral("a'b"),)

    def test_apostrophe_before_quoted(self) -> None:
        tokens = [TextLiteral("'"), QuotedLiteral("x")]
        assert tokenize(serialize(tokens)) == (TextLiteral("'"), QuotedLiteral("x"))
