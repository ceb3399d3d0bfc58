"""Diagnostic system for datekit errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import DateKitError, DateParseError, FormattingError, PatternSyntaxError
from .templates import ErrorTemplate

__all__ = [
    "DateKitError",
    "DateParseError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FormattingError",
    "PatternSyntaxError",
]
