"""
Corgi Lexer (Scanner)
=====================

This module converts the raw bytes of a Corgi source file into tokens.
Each call to read_token() consumes exactly one token from a SourceCursor
and returns it; the driver (corgi.driver) loops over it to build a full
token stream.

Token Categories
----------------
- Numbers: any word starting with a digit (12, 3.5 lexes as 3 DOT 5, 12a)
- Symbols: ( ) = < > + - * / & | ! . { } %
- Keywords: and not or if then else elif while until for in do end
            var let type import function return
- Strings: "raw text" (no escape sequences, may span lines)
- Identifiers: letter or underscore, then letters, digits, underscores
- Line terminators: ';' or a newline
- Comments: '--' up to the end of the line

Malformed input never raises. The scanner returns an ERROR token with
one of the fixed messages below and carries on from the end of the bad
span, so one pass reports every defect.

Example Usage
-------------
>>> from corgi.lexer import Lexer
>>> for token in Lexer('var x = "hi"'):
...     print(token)
Token(VAR, 0+3)
Token(IDENTIFIER, 'x', 4+1)
Token(EQUALS, 6+1)
Token(STRING, 'hi', 8+4)
Token(END_OF_FILE, 12+1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from corgi.cursor import SourceCursor
from corgi.errors import (
    INVALID_IDENTIFIER_CHARACTER,
    UNIDENTIFIED_TOKEN,
    UNTERMINATED_STRING,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Corgi language.

    Keywords get their own types so that a parser never needs to compare
    identifier text against reserved words.
    """

    NUMBER = auto()

    # === Symbols ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    EQUALS = auto()         # =
    LESS_THAN = auto()      # <
    GREATER_THAN = auto()   # >
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULTIPLY = auto()       # *
    DIVIDE = auto()         # /
    BITWISE_AND = auto()    # &
    BITWISE_OR = auto()     # |
    BANG = auto()           # !
    DOT = auto()            # .
    LCURLYBRACE = auto()    # {
    RCURLYBRACE = auto()    # }
    MODULO = auto()         # %

    # === Keywords ===
    AND = auto()
    NOT = auto()
    OR = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    ELIF = auto()
    WHILE = auto()
    UNTIL = auto()
    FOR = auto()
    IN = auto()
    DO = auto()
    END = auto()
    VAR = auto()
    LET = auto()
    TYPE = auto()
    IMPORT = auto()
    FUNCTION = auto()
    RETURN = auto()

    # Two hyphens, then anything up to the end of the line
    COMMENT = auto()

    # Raw text between double quotes
    STRING = auto()

    IDENTIFIER = auto()

    # ';' or a newline character
    END_OF_LINE = auto()

    # End of input, or a NUL byte
    END_OF_FILE = auto()

    ERROR = auto()

    @property
    def display_name(self) -> str:
        """Human-readable name used in token dumps."""
        return _DISPLAY_NAMES.get(self, self.name.lower())

    def is_symbol(self) -> bool:
        """Return True for the single-character operator/punctuation types."""
        return self in _SYMBOL_TYPES

    def is_keyword(self) -> bool:
        """Return True for reserved-word types."""
        return self in _KEYWORD_TYPES


# =============================================================================
# Lookup Tables
# =============================================================================

# Single-character symbols and their token types
SYMBOLS: dict[bytes, TokenType] = {
    b"(": TokenType.LPAREN,
    b")": TokenType.RPAREN,
    b"=": TokenType.EQUALS,
    b"<": TokenType.LESS_THAN,
    b">": TokenType.GREATER_THAN,
    b"+": TokenType.PLUS,
    b"-": TokenType.MINUS,
    b"*": TokenType.MULTIPLY,
    b"/": TokenType.DIVIDE,
    b"&": TokenType.BITWISE_AND,
    b"|": TokenType.BITWISE_OR,
    b"!": TokenType.BANG,
    b".": TokenType.DOT,
    b"{": TokenType.LCURLYBRACE,
    b"}": TokenType.RCURLYBRACE,
    b"%": TokenType.MODULO,
}

# Reserved words and their token types
KEYWORDS: dict[bytes, TokenType] = {
    # Logic
    b"and": TokenType.AND,
    b"not": TokenType.NOT,
    b"or": TokenType.OR,

    # Control flow
    b"if": TokenType.IF,
    b"then": TokenType.THEN,
    b"else": TokenType.ELSE,
    b"elif": TokenType.ELIF,
    b"while": TokenType.WHILE,
    b"until": TokenType.UNTIL,
    b"for": TokenType.FOR,
    b"in": TokenType.IN,
    b"do": TokenType.DO,
    b"end": TokenType.END,

    # Declarations
    b"var": TokenType.VAR,
    b"let": TokenType.LET,
    b"type": TokenType.TYPE,
    b"import": TokenType.IMPORT,
    b"function": TokenType.FUNCTION,
    b"return": TokenType.RETURN,
}

_SYMBOL_TYPES = frozenset(SYMBOLS.values())
_KEYWORD_TYPES = frozenset(KEYWORDS.values())

_DISPLAY_NAMES: dict[TokenType, str] = {
    TokenType.LESS_THAN: "less than",
    TokenType.GREATER_THAN: "greater than",
    TokenType.BITWISE_AND: "bitwise and",
    TokenType.BITWISE_OR: "bitwise or",
    TokenType.END_OF_LINE: "end of line",
    TokenType.END_OF_FILE: "end of file",
    TokenType.ERROR: "error token",
}


def _byte_set(chars: bytes) -> frozenset[bytes]:
    """One-byte bytes objects for membership tests against cursor reads."""
    return frozenset(chars[i:i + 1] for i in range(len(chars)))


# Skipped before a token; newlines are tokens, not whitespace
INLINE_WHITESPACE = _byte_set(b" \t")

LINE_TERMINATORS = _byte_set(b";\n")

# Bytes that end a word. '[' and ']' have no token type of their own but
# still split words. ';' does not: "x;" is one malformed word.
WORD_DELIMITERS = (
    _byte_set(b" \t\n\r\v\f\0[]")
    | frozenset(SYMBOLS)
)

# Word classification works on ints (iterating bytes yields ints)
DIGITS = frozenset(string.digits.encode("ascii"))
IDENT_START = frozenset((string.ascii_letters + "_").encode("ascii"))
IDENT_CHARS = frozenset((string.ascii_letters + string.digits + "_").encode("ascii"))


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from Corgi source.

    Attributes:
        type: The TokenType classification
        offset: Absolute byte offset where the token starts (after whitespace)
        length: Number of source bytes the token consumed
        text: Payload for STRING and IDENTIFIER tokens, None otherwise
        error: Diagnostic message for ERROR tokens, None otherwise
    """
    type: TokenType
    offset: int
    length: int
    text: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self):
        carries_text = self.type in (TokenType.STRING, TokenType.IDENTIFIER)
        if (self.text is not None) != carries_text:
            raise ValueError(f"{self.type.name} token text must be {'set' if carries_text else 'None'}")
        if (self.error is not None) != (self.type is TokenType.ERROR):
            raise ValueError("only ERROR tokens carry an error message")

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.text is not None:
            return f"Token({self.type.name}, {self.text!r}, {self.offset}+{self.length})"
        if self.error is not None:
            return f"Token({self.type.name}, {self.error!r}, {self.offset}+{self.length})"
        return f"Token({self.type.name}, {self.offset}+{self.length})"

    @property
    def end(self) -> int:
        """Offset just past the last consumed byte."""
        return self.offset + self.length


# =============================================================================
# Scanner
# =============================================================================

def read_token(cursor: SourceCursor, encoding: str = "utf-8") -> Token:
    """
    Read the next token and move the cursor past it.

    At end of input (or a NUL byte) the cursor is left where it is, so
    calling again returns END_OF_FILE again.

    Args:
        cursor: Cursor positioned anywhere in the source
        encoding: Codec used to decode STRING and IDENTIFIER text

    Returns:
        The next Token. Malformed input yields an ERROR token; this
        function does not raise for bad source.
    """
    position = cursor.position
    char = cursor.advance()

    # Spaces and tabs only; newlines terminate statements
    while char in INLINE_WHITESPACE:
        position = cursor.position
        char = cursor.advance()

    # '--' starts a comment. The newline stays unconsumed since it may
    # terminate the statement before the comment.
    if char == b"-":
        after_next = cursor.advance()
        if after_next == b"-":
            while cursor.peek() not in (b"\n", b""):
                cursor.advance()
            return Token(TokenType.COMMENT, position, cursor.position - position)
        if after_next:
            cursor.unread()

    if char == b"" or char == b"\0":
        cursor.seek(position)
        return Token(TokenType.END_OF_FILE, position, 1)

    if char in LINE_TERMINATORS:
        return Token(TokenType.END_OF_LINE, position, 1)

    if char in SYMBOLS:
        return Token(SYMBOLS[char], position, 1)

    if char == b'"':
        return _scan_string(cursor, position, encoding)

    # Anything else is a word running up to the next delimiter. A leading
    # delimiter with no token type of its own ('[', '\r', ...) is a
    # one-byte word, so the cursor always moves forward.
    if char not in WORD_DELIMITERS:
        while cursor.peek() and cursor.peek() not in WORD_DELIMITERS:
            cursor.advance()

    return _classify_word(cursor.slice(position, cursor.position), position, encoding)


def _scan_string(cursor: SourceCursor, position: int, encoding: str) -> Token:
    """Scan a raw string literal; the opening quote is already consumed."""
    content_start = cursor.position

    char = cursor.advance()
    while char != b'"' and char != b"":
        char = cursor.advance()

    length = cursor.position - position
    if char == b"":
        return Token(TokenType.ERROR, position, length, error=UNTERMINATED_STRING)

    raw = cursor.slice(content_start, cursor.position - 1)
    return Token(TokenType.STRING, position, length, text=_decode(raw, encoding))


def _classify_word(word: bytes, position: int, encoding: str) -> Token:
    """
    Decide what a delimited word is.

    Order matters: digit-first words are numbers before anything else,
    then keywords, then identifiers.
    """
    length = len(word)
    first = word[0]

    # No validation of the remaining characters; '12a' is still a NUMBER
    if first in DIGITS:
        return Token(TokenType.NUMBER, position, length)

    if word in KEYWORDS:
        return Token(KEYWORDS[word], position, length)

    if first in IDENT_START:
        if all(byte in IDENT_CHARS for byte in word):
            return Token(TokenType.IDENTIFIER, position, length, text=_decode(word, encoding))
        return Token(TokenType.ERROR, position, length, error=INVALID_IDENTIFIER_CHARACTER)

    return Token(TokenType.ERROR, position, length, error=UNIDENTIFIED_TOKEN)


def _decode(raw: bytes, encoding: str) -> str:
    """Decode token text; undecodable bytes round-trip via surrogateescape."""
    return raw.decode(encoding, errors="surrogateescape")


_ASCII = bytes(range(128))


def is_ascii_compatible(encoding: str) -> bool:
    """
    Check that a codec decodes every ASCII byte to itself.

    Only such codecs can decode arbitrary token bytes with surrogateescape
    without raising, since that handler only rescues bytes >= 0x80.
    UTF-16, UTF-32, EBCDIC code pages and bytes-to-bytes codecs fail.
    """
    try:
        return _ASCII.decode(encoding) == _ASCII.decode("ascii")
    except (LookupError, UnicodeError):
        return False


# =============================================================================
# Lexer Class
# =============================================================================

class Lexer:
    """
    Tokenizes Corgi source held in memory.

    Usage:
        lexer = Lexer(source_bytes, "main.cg")
        tokens = list(lexer.tokenize())

    tokenize() yields every token the scanner produces, comments
    included, ending with the first END_OF_FILE. Filtering comments and
    collecting diagnostics is the driver's job.

    Attributes:
        source: The source bytes being tokenized
        filename: Name of the source file (for diagnostics)
        encoding: Codec used to decode token text
    """

    def __init__(
        self,
        source: bytes | str,
        filename: str = "<input>",
        encoding: str = "utf-8",
    ):
        if not is_ascii_compatible(encoding):
            raise ValueError(f"encoding {encoding!r} is not ASCII-compatible")
        if isinstance(source, str):
            source = source.encode(encoding, errors="surrogateescape")
        self.source = source
        self.filename = filename
        self.encoding = encoding
        self.cursor = SourceCursor(source)

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def read_token(self) -> Token:
        """Read one token from the current cursor position."""
        return read_token(self.cursor, self.encoding)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the current position to end of input.

        Yields:
            Token objects, the last one being END_OF_FILE
        """
        while True:
            token = self.read_token()
            yield token
            if token.type is TokenType.END_OF_FILE:
                return
