"""Tests for the CLDR date pattern tokenizer."""

from __future__ import annotations

import logging

import pytest

from datekit.diagnostics import DiagnosticCode, PatternSyntaxError
from datekit.syntax import FieldRun, QuotedLiteral, TextLiteral, tokenize


class TestFieldRuns:
    """Maximal runs of field symbols."""

    def test_empty_pattern(self) -> None:
        assert tokenize("") == ()

    def test_iso_date(self) -> None:
        assert tokenize("yyyy-MM-dd") == (
            FieldRun("y", 4),
            TextLiteral("-"),
            FieldRun("M", 2),
            TextLiteral("-"),
            FieldRun("d", 2),
        )

    def test_adjacent_runs_of_different_symbols(self) -> None:
        assert tokenize("yyyyMM") == (FieldRun("y", 4), FieldRun("M", 2))

    def test_non_symbol_letters_are_literal(self) -> None:
        """'t' and 'o' are not CLDR field letters."""
        assert tokenize("HH to") == (FieldRun("H", 2), TextLiteral(" to"))

    def test_unicode_literal(self) -> None:
        assert tokenize("d. MMMM, ÿ") == (
            FieldRun("d", 1),
            TextLiteral(". "),
            FieldRun("M", 4),
            TextLiteral(", ÿ"),
        )


class TestQuoting:
    """Apostrophe rules."""

    def test_quoted_text(self) -> None:
        assert tokenize("h 'o''clock' a") == (
            FieldRun("h", 1),
            TextLiteral(" "),
            QuotedLiteral("o'clock"),
            TextLiteral(" "),
            FieldRun("a", 1),
        )

    def test_quoted_field_letters_stay_literal(self) -> None:
        assert tokenize("yyyy'T'HH") == (
            FieldRun("y", 4),
            QuotedLiteral("T"),
            FieldRun("H", 2),
        )

    def test_doubled_apostrophe_outside_quotes(self) -> None:
        assert tokenize("''") == (TextLiteral("'"),)

    def test_doubled_apostrophe_between_fields(self) -> None:
        assert tokenize("HH''mm") == (FieldRun("H", 2), TextLiteral("'"), FieldRun("m", 2))

    def test_two_escaped_apostrophes_merge(self) -> None:
        assert tokenize("''''") == (TextLiteral("''"),)

    def test_escaped_apostrophe_merges_with_text(self) -> None:
        assert tokenize("-''-") == (TextLiteral("-'-"),)


class TestUnterminatedQuote:
    """Lenient by default, strict on request."""

    def test_lenient_runs_to_end(self) -> None:
        assert tokenize("HH 'abc") == (
            FieldRun("H", 2),
            TextLiteral(" "),
            QuotedLiteral("abc"),
        )

    def test_lenient_lone_trailing_quote(self) -> None:
        assert tokenize("HH'") == (FieldRun("H", 2),)

    def test_lenient_after_escape(self) -> None:
        assert tokenize("'''") == (TextLiteral("'"),)

    def test_lenient_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="datekit.syntax.tokenizer"):
            tokenize("HH 'abc")
        assert "Unterminated quote" in caplog.text

    def test_strict_raises_with_position(self) -> None:
        with pytest.raises(PatternSyntaxError) as exc_info:
            tokenize("HH 'abc", strict=True)
        assert exc_info.value.position == 3
        assert exc_info.value.pattern == "HH 'abc"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PATTERN_UNTERMINATED_QUOTE

    def test_strict_lone_trailing_quote(self) -> None:
        with pytest.raises(PatternSyntaxError) as exc_info:
            tokenize("HH'", strict=True)
        assert exc_info.value.position == 2

    def test_strict_accepts_valid_pattern(self) -> None:
        assert tokenize("h 'o''clock' a", strict=True) == tokenize("h 'o''clock' a")


class TestTokens:
    """Token validation and helpers."""

    def test_field_run_pattern(self) -> None:
        assert FieldRun("M", 3).pattern == "MMM"

    def test_field_run_rejects_non_symbol(self) -> None:
        with pytest.raises(ValueError, match="field letter"):
            FieldRun("t", 1)

    def test_field_run_rejects_zero_width(self) -> None:
        with pytest.raises(ValueError, match="width"):
            FieldRun("M", 0)

    @pytest.mark.parametrize("token_type", [TextLiteral, QuotedLiteral])
    def test_literals_reject_empty(self, token_type: type) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            token_type("")

    def test_guards(self) -> None:
        assert FieldRun.guard(FieldRun("d", 1))
        assert not FieldRun.guard(TextLiteral("d"))
        assert QuotedLiteral.guard(QuotedLiteral("x"))
        assert TextLiteral.guard(TextLiteral("x"))
