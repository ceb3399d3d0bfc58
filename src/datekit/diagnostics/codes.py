"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Pattern syntax errors (strict tokenizing)
        2000-2999: Formatting errors (Babel rendering)
        3000-3999: Parsing errors (string -> datetime)
        4000-4999: Configuration errors (locale, timezone, calendar)
    """

    # Pattern syntax errors (1000-1999)
    PATTERN_UNTERMINATED_QUOTE = 1001

    # Formatting errors (2000-2999)
    FORMATTING_FAILED = 2001

    # Parsing errors (3000-3999)
    PARSE_DATETIME_FAILED = 3001
    PARSE_PATTERN_UNSUPPORTED = 3002

    # Configuration errors (4000-4999)
    LOCALE_UNKNOWN = 4001
    TIMEZONE_UNKNOWN = 4002
    CALENDAR_UNSUPPORTED = 4003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        position: Character offset in the pattern (pattern errors only)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    position: int | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[PATTERN_UNTERMINATED_QUOTE]: Unterminated quoted literal
              --> offset 5
              = help: Close the literal with a matching apostrophe

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.position is not None:
            lines.append(f"  --> offset {self.position}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
