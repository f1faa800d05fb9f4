"""
Corgi Error Hierarchy
=====================

This module defines the exception hierarchy for the Corgi toolchain.
All exceptions inherit from CorgiError, allowing callers to catch all
toolchain errors with a single except clause if desired.

Exception Hierarchy
-------------------
CorgiError (base)
├── ScanOpenError - source file cannot be opened or read
├── CursorError - invalid use of the source cursor
└── LexicalError - lexical defect found while scanning
    ├── UnterminatedStringError - missing closing quote
    ├── InvalidIdentifierCharacterError - bad character inside an identifier
    └── UnidentifiedTokenError - word that matches no token rule

Recoverable vs Fatal
--------------------
Only ScanOpenError stops a scan. Lexical defects are never raised by the
scanner: it returns an ERROR token and keeps going, so a single pass finds
every defect in a file. The driver turns each ERROR token into a
LexicalError instance for reporting, and collects them in a
DiagnosticCollector.

Error messages follow this format:
    filename:line:column: error: description
      while reading offset: 'offending source text'
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from corgi.lexer import Token


# Messages carried by the scanner's ERROR tokens
UNTERMINATED_STRING = "unterminated string"
INVALID_IDENTIFIER_CHARACTER = "identifier contains an invalid character"
UNIDENTIFIED_TOKEN = "unidentified token"


# =============================================================================
# Base Exception Class
# =============================================================================

class CorgiError(Exception):
    """
    Base exception for all Corgi toolchain errors.

        try:
            stream = scan_file("program.cg")
        except CorgiError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for in-memory source)
        line: Line number (1-indexed)
        column: Column number (1-indexed, counted in bytes)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Fatal Errors
# =============================================================================

class ScanOpenError(CorgiError):
    """
    The source file could not be opened for reading.

    This is the only error that aborts a scan: no tokens are produced.

    Attributes:
        path: The path that was requested
        reason: The operating system's explanation (e.g. "No such file or directory")
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"error while opening '{path}': {reason}")


class CursorError(CorgiError):
    """Invalid cursor operation, such as unreading twice in a row."""
    pass


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(CorgiError):
    """
    A lexical defect, built from an ERROR token for reporting.

    The scanner itself never raises these. They exist so the driver and
    the command line can carry a defect around with its position and the
    literal text of the offending span.

    Attributes:
        message: The scanner's diagnostic message
        offset: Absolute byte offset of the offending span
        length: Length of the offending span in bytes
        text: Literal source text of the span
        location: Line/column of the span start (optional)
    """

    def __init__(
        self,
        message: str,
        offset: int,
        length: int,
        text: str,
        location: Optional[SourceLocation] = None,
    ):
        self.message = message
        self.offset = offset
        self.length = length
        self.text = text
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the two-line diagnostic.

        Example output:
            hello.cg:3:9: error: unterminated string
              while reading 27: '"hello'
        """
        if self.location:
            header = f"{self.location}: error: {self.message}"
        else:
            header = f"error: {self.message}"
        return f"{header}\n  while reading {self.offset}: '{self.text}'"

    @classmethod
    def from_token(
        cls,
        token: "Token",
        text: str,
        location: Optional[SourceLocation] = None,
    ) -> "LexicalError":
        """
        Build the matching LexicalError subclass for an ERROR token.

        Args:
            token: An ERROR token produced by the scanner
            text: The literal source text of the token's span
            location: Where the span starts, if known
        """
        error_class = _ERROR_CLASSES.get(token.error, cls)
        return error_class(token.error, token.offset, token.length, text, location)


class UnterminatedStringError(LexicalError):
    """
    A string literal was opened but end of input came before its closing quote.

    Example:
        var s = "hello
    """
    pass


class InvalidIdentifierCharacterError(LexicalError):
    """
    A word starts like an identifier but contains a disallowed character.

    The span covers the whole word, not just the bad character.

    Example:
        var x$y = 1
    """
    pass


class UnidentifiedTokenError(LexicalError):
    """A word whose first character matches no classification rule."""
    pass


_ERROR_CLASSES: dict[str, type[LexicalError]] = {
    UNTERMINATED_STRING: UnterminatedStringError,
    INVALID_IDENTIFIER_CHARACTER: InvalidIdentifierCharacterError,
    UNIDENTIFIED_TOKEN: UnidentifiedTokenError,
}


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class DiagnosticCollector:
    """
    Collects lexical diagnostics for batch reporting.

    Scanning keeps going after a defect, so a file can yield many
    diagnostics. They are gathered here and reported together.

    Example:
        collector = DiagnosticCollector()
        collector.add(error)
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self) -> None:
        self.errors: list[LexicalError] = []

    def add(self, error: LexicalError) -> None:
        """Add a diagnostic to the collection."""
        self.errors.append(error)

    def extend(self, errors) -> None:
        """Add several diagnostics at once."""
        self.errors.extend(errors)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            Formatted string with every diagnostic and a summary line
        """
        lines = [str(error) for error in self.errors]
        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()
