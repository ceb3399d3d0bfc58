"""datekit exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class DateKitError(Exception):
    """Base exception for all datekit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize DateKitError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class PatternSyntaxError(DateKitError):
    """Malformed date pattern.

    Only raised by ``tokenize(..., strict=True)``. The default tokenizer is
    total and degrades gracefully instead.

    Attributes:
        pattern: The pattern being tokenized
        position: Offset of the offending character
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        pattern: str = "",
        position: int = 0,
    ) -> None:
        """Initialize PatternSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            pattern: The pattern being tokenized
            position: Offset of the offending character
        """
        super().__init__(message)
        self.pattern = pattern
        self.position = position


class FormattingError(DateKitError):
    """Raised when locale-aware formatting fails.

    The error carries a fallback_value that callers may render instead
    of the formatted text.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value


class DateParseError(DateKitError):
    """Error during string -> datetime parsing.

    Returned (never raised) by ``datekit.parsing`` functions.

    Attributes:
        input_value: The string that failed to parse
        pattern: The date pattern used for parsing
        parse_type: Type of parsing attempted ('datetime')

    Example:
        >>> result, errors = parse_datetime("invalid", "yyyy-MM-dd")
        >>> if errors:
        ...     for error in errors:
        ...         print(f"Parse failed: {error.input_value} ({error.pattern})")
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        input_value: str = "",
        pattern: str = "",
        parse_type: str = "",
    ) -> None:
        """Initialize DateParseError.

        Args:
            message: Error message string OR Diagnostic object
            input_value: The string that failed to parse
            pattern: The date pattern used for parsing
            parse_type: Type of parsing ('datetime')
        """
        super().__init__(message)
        self.input_value = input_value
        self.pattern = pattern
        self.parse_type = parse_type
