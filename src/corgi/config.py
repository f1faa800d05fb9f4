"""
Scan Configuration
==================

Options controlling how the driver builds a token stream. Configuration
can come from:
- Default values (defined here)
- Environment variables (ScanOptions.from_env)
- Command-line flags (corgi.cli.cglex)
"""

from dataclasses import dataclass
import os

from corgi.lexer import is_ascii_compatible


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScanOptions:
    """
    Driver configuration options.

    Attributes:
        keep_error_tokens: Leave ERROR tokens in the token stream. When
                           False they are only reported as diagnostics.
        report_errors: Log each lexical error as it is found.
        encoding: Codec for STRING and IDENTIFIER text. Bytes that do not
                  decode are kept via surrogateescape, so the codec must
                  be ASCII-compatible.

    Raises:
        ValueError: If encoding is unknown or not ASCII-compatible
    """
    keep_error_tokens: bool = True
    report_errors: bool = True
    encoding: str = "utf-8"

    def __post_init__(self):
        if not is_ascii_compatible(self.encoding):
            raise ValueError(f"encoding {self.encoding!r} is not ASCII-compatible")

    @classmethod
    def from_env(cls) -> "ScanOptions":
        """
        Create ScanOptions from environment variables.

        Environment variables (all optional):
            CORGI_KEEP_ERROR_TOKENS: "1"/"0", "true"/"false", ...
            CORGI_REPORT_ERRORS: "1"/"0", "true"/"false", ...
            CORGI_ENCODING: An ASCII-compatible codec name (utf-8, latin-1, ...)

        Invalid values are ignored and the default is kept.
        """
        options = cls()

        if (keep := _parse_flag(os.environ.get("CORGI_KEEP_ERROR_TOKENS"))) is not None:
            options.keep_error_tokens = keep

        if (report := _parse_flag(os.environ.get("CORGI_REPORT_ERRORS"))) is not None:
            options.report_errors = report

        # Unknown codecs and ones like utf-16 keep the default
        if (encoding := os.environ.get("CORGI_ENCODING")) and is_ascii_compatible(encoding):
            options.encoding = encoding

        return options


def _parse_flag(value):
    """Parse a boolean environment value, or return None if unset/invalid."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None
