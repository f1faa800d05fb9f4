"""
Scan Driver
===========

Builds a complete token stream for one source file by calling the
scanner until it reports end of input.

The driver:
- discards COMMENT tokens
- keeps every other token in source order, ERROR tokens included
  (unless ScanOptions.keep_error_tokens is False)
- turns each ERROR token into a LexicalError diagnostic, logs it and
  stores it on the stream, then keeps scanning
- guarantees the stream ends with exactly one END_OF_FILE token

Only an unreadable file stops a scan (ScanOpenError); lexical defects
never do.

Usage
-----
>>> from corgi.driver import scan_source
>>> stream = scan_source("var x = 1 -- set x")
>>> [t.type.name for t in stream]
['VAR', 'IDENTIFIER', 'EQUALS', 'NUMBER', 'END_OF_FILE']
"""

from bisect import bisect_right
import logging
from pathlib import Path
from typing import Iterator, Optional

from corgi.config import ScanOptions
from corgi.errors import LexicalError, ScanOpenError, SourceLocation
from corgi.lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)


# =============================================================================
# Token Stream
# =============================================================================

class TokenStream:
    """
    The tokens of one source file, in source order.

    Attributes:
        tokens: The tokens; the last one is always END_OF_FILE
        source: The scanned source bytes
        filename: Name of the source file
        diagnostics: One LexicalError per ERROR token found, in order
        encoding: Codec used for token text and error text
    """

    def __init__(
        self,
        source: bytes,
        filename: str = "<input>",
        encoding: str = "utf-8",
    ):
        self.source = source
        self.filename = filename
        self.encoding = encoding
        self.tokens: list[Token] = []
        self.diagnostics: list[LexicalError] = []

        # Offsets where each line begins, built on first use
        self._line_starts: Optional[list[int]] = None

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, index: int | slice) -> Token | list[Token]:
        return self.tokens[index]

    def __repr__(self) -> str:
        return (
            f"TokenStream({self.filename!r}, {len(self.tokens)} tokens, "
            f"{len(self.diagnostics)} errors)"
        )

    def append(self, token: Token) -> None:
        self.tokens.append(token)

    def text_of(self, token: Token) -> str:
        """Return the literal source text covered by a token."""
        raw = self.source[token.offset:token.end]
        return raw.decode(self.encoding, errors="replace")

    def location_of(self, token: Token) -> SourceLocation:
        """
        Return the line/column where a token starts.

        Line starts are indexed on the first call; later calls are a
        binary search over that index.
        """
        if self._line_starts is None:
            self._line_starts = _line_starts(self.source)
        offset = min(max(token.offset, 0), len(self.source))
        line = bisect_right(self._line_starts, offset)
        return SourceLocation(self.filename, line, offset - self._line_starts[line - 1] + 1)

    @property
    def errors(self) -> list[Token]:
        """ERROR tokens present in the stream."""
        return [t for t in self.tokens if t.type is TokenType.ERROR]

    def has_errors(self) -> bool:
        """Return True if any lexical defect was found."""
        return len(self.diagnostics) > 0

    def types(self) -> list[TokenType]:
        """Token types in order, convenient for quick comparisons."""
        return [t.type for t in self.tokens]


def _line_starts(source: bytes) -> list[int]:
    """Offsets of the first byte of every line."""
    starts = [0]
    index = source.find(b"\n")
    while index != -1:
        starts.append(index + 1)
        index = source.find(b"\n", index + 1)
    return starts


# =============================================================================
# Driver Functions
# =============================================================================

def scan_source(
    source: bytes | str,
    filename: str = "<input>",
    options: Optional[ScanOptions] = None,
) -> TokenStream:
    """
    Scan in-memory source into a TokenStream.

    Args:
        source: Source bytes, or text to be encoded with options.encoding
        filename: Name used in diagnostics
        options: Scan options (defaults to ScanOptions())

    Returns:
        TokenStream ending with END_OF_FILE, comments removed
    """
    options = options or ScanOptions()
    lexer = Lexer(source, filename, encoding=options.encoding)
    stream = TokenStream(lexer.source, filename, encoding=options.encoding)

    comment_count = 0
    for token in lexer.tokenize():
        if token.type is TokenType.COMMENT:
            comment_count += 1
            continue

        if token.type is TokenType.ERROR:
            # Report and keep going; later errors are independent
            diagnostic = LexicalError.from_token(
                token,
                stream.text_of(token),
                stream.location_of(token),
            )
            stream.diagnostics.append(diagnostic)
            if options.report_errors:
                logger.warning(str(diagnostic))
            if not options.keep_error_tokens:
                continue

        stream.append(token)

    logger.debug(
        f"Scanned {filename}: {len(stream)} tokens, "
        f"{comment_count} comments, {len(stream.diagnostics)} errors"
    )
    return stream


def scan_file(path: str | Path, options: Optional[ScanOptions] = None) -> TokenStream:
    """
    Scan a source file into a TokenStream.

    Args:
        path: Path to the Corgi source file
        options: Scan options (defaults to ScanOptions())

    Returns:
        TokenStream ending with END_OF_FILE, comments removed

    Raises:
        ScanOpenError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to open {path}: {e.strerror or e}")
        raise ScanOpenError(str(path), e.strerror or str(e)) from e

    logger.debug(f"Read {len(source)} bytes from {path}")
    return scan_source(source, str(path), options)
