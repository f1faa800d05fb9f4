"""
Corgi - Lexical Front End for the Corgi Scripting Language
==========================================================

This package turns Corgi source files (.cg) into streams of classified
tokens: numbers, symbols, keywords, strings, identifiers, line
terminators and end-of-file markers. Malformed input is reported as
ERROR tokens without stopping the scan, so a single pass finds every
lexical defect in a file.

Main Components
---------------
- **lexer**: token types and the single-token scanner (read_token)
- **driver**: whole-file scanning into a TokenStream (scan_file)
- **cursor**: byte cursor with peek and one-byte pushback
- **cli**: the cglex token dump tool

Quick Start
-----------
Scan a file:
    >>> from corgi import scan_file
    >>> stream = scan_file("hello.cg")
    >>> for token in stream:
    ...     print(token.type.display_name, token.text or "")

Scan a string:
    >>> from corgi import scan_source
    >>> [t.type.name for t in scan_source("let x = 1")]
    ['LET', 'IDENTIFIER', 'EQUALS', 'NUMBER', 'END_OF_FILE']

Or use the command-line tool:
    $ cglex hello.cg
"""

__version__ = "0.1.0"
__author__ = "Corgi Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from corgi.config import ScanOptions
from corgi.cursor import SourceCursor
from corgi.driver import TokenStream, scan_file, scan_source
from corgi.errors import (
    CorgiError,
    CursorError,
    DiagnosticCollector,
    InvalidIdentifierCharacterError,
    LexicalError,
    ScanOpenError,
    SourceLocation,
    UnidentifiedTokenError,
    UnterminatedStringError,
)
from corgi.lexer import (
    KEYWORDS,
    SYMBOLS,
    Lexer,
    Token,
    TokenType,
    read_token,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Scanner
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "SYMBOLS",
    "read_token",
    "SourceCursor",
    # Driver
    "TokenStream",
    "scan_file",
    "scan_source",
    "ScanOptions",
    # Exception hierarchy
    "CorgiError",
    "CursorError",
    "ScanOpenError",
    "LexicalError",
    "UnterminatedStringError",
    "InvalidIdentifierCharacterError",
    "UnidentifiedTokenError",
    "SourceLocation",
    "DiagnosticCollector",
]
