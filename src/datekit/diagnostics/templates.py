"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    @staticmethod
    def unterminated_quote(pattern: str, position: int) -> Diagnostic:
        """Quoted literal never closed.

        Args:
            pattern: The pattern being tokenized
            position: Offset of the opening quote

        Returns:
            Diagnostic for PATTERN_UNTERMINATED_QUOTE
        """
        msg = f"Unterminated quoted literal in pattern '{pattern}'"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_UNTERMINATED_QUOTE,
            message=msg,
            hint="Close the literal with a matching apostrophe, or write '' for a literal one",
            position=position,
        )

    @staticmethod
    def formatting_failed(value: str, pattern: str, reason: str) -> Diagnostic:
        """Babel could not render a value.

        Args:
            value: ISO representation of the instant
            pattern: Pattern or style being applied
            reason: Underlying error text

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting '{value}' with '{pattern}' failed: {reason}"
        return Diagnostic(code=DiagnosticCode.FORMATTING_FAILED, message=msg)

    @staticmethod
    def parse_datetime_failed(value: str, pattern: str, reason: str) -> Diagnostic:
        """Datetime parsing failed.

        Args:
            value: The input string that failed to parse
            pattern: The pattern used for parsing
            reason: The reason parsing failed

        Returns:
            Diagnostic for PARSE_DATETIME_FAILED
        """
        msg = f"Failed to parse datetime '{value}' with pattern '{pattern}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_DATETIME_FAILED,
            message=msg,
            hint="Check that the input matches the pattern field by field",
        )

    @staticmethod
    def parse_pattern_unsupported(pattern: str, field: str) -> Diagnostic:
        """Pattern contains a field that cannot be parsed.

        Args:
            pattern: The pattern used for parsing
            field: The offending field run (e.g. "QQQ")

        Returns:
            Diagnostic for PARSE_PATTERN_UNSUPPORTED
        """
        msg = f"Field '{field}' in pattern '{pattern}' is not supported for parsing"
        return Diagnostic(
            code=DiagnosticCode.PARSE_PATTERN_UNSUPPORTED,
            message=msg,
            hint="Parse with numeric year/month/day/time fields instead",
        )

    @staticmethod
    def locale_unknown(locale_code: str) -> Diagnostic:
        """Locale not known to Babel.

        Args:
            locale_code: The requested locale identifier

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"Unknown locale identifier '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Use a BCP 47 or POSIX identifier such as 'en-US' or 'de_DE'",
        )

    @staticmethod
    def timezone_unknown(name: str) -> Diagnostic:
        """Time zone name not in the IANA database.

        Args:
            name: The requested zone name

        Returns:
            Diagnostic for TIMEZONE_UNKNOWN
        """
        msg = f"Unknown time zone '{name}'"
        return Diagnostic(
            code=DiagnosticCode.TIMEZONE_UNKNOWN,
            message=msg,
            hint="Use an IANA zone name such as 'Europe/Riga' or 'UTC'",
        )

    @staticmethod
    def calendar_unsupported(calendar: str) -> Diagnostic:
        """Calendar system not supported.

        Args:
            calendar: The requested calendar identifier

        Returns:
            Diagnostic for CALENDAR_UNSUPPORTED
        """
        msg = f"Unsupported calendar '{calendar}'"
        return Diagnostic(
            code=DiagnosticCode.CALENDAR_UNSUPPORTED,
            message=msg,
            hint="Only the 'gregorian' calendar is available",
        )
