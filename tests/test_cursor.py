# =============================================================================
# test_cursor.py - Source Cursor Unit Tests
# =============================================================================
# Tests for corgi.cursor.SourceCursor: reading, peeking, the one-byte
# pushback used for comment detection, seeking and line/column lookup.
# =============================================================================

import pytest

from corgi.cursor import SourceCursor
from corgi.errors import CorgiError, CursorError


class TestReading:
    """Test peek() and advance()."""

    def test_advance_returns_bytes(self):
        cursor = SourceCursor(b"ab")
        assert cursor.advance() == b"a"
        assert cursor.advance() == b"b"
        assert cursor.position == 2
        assert cursor.at_end()

    def test_end_sentinel(self):
        """Reading past the end returns b'' and does not move."""
        cursor = SourceCursor(b"a")
        cursor.advance()
        assert cursor.advance() == b""
        assert cursor.advance() == b""
        assert cursor.position == 1

    def test_peek_does_not_advance(self):
        cursor = SourceCursor(b"xy")
        assert cursor.peek() == b"x"
        assert cursor.peek(1) == b"y"
        assert cursor.peek(2) == b""
        assert cursor.position == 0

    def test_empty_source(self):
        cursor = SourceCursor(b"")
        assert cursor.at_end()
        assert cursor.peek() == b""


class TestPushback:
    """Test the single-level unread()."""

    def test_unread_restores_byte(self):
        cursor = SourceCursor(b"-x")
        cursor.advance()
        assert cursor.advance() == b"x"
        cursor.unread()
        assert cursor.position == 1
        assert cursor.peek() == b"x"

    def test_unread_only_once(self):
        cursor = SourceCursor(b"ab")
        cursor.advance()
        cursor.advance()
        cursor.unread()
        with pytest.raises(CursorError):
            cursor.unread()

    def test_unread_without_read(self):
        with pytest.raises(CursorError):
            SourceCursor(b"abc").unread()

    def test_unread_after_end_sentinel(self):
        """A read that hit the end consumed nothing, so it cannot be undone."""
        cursor = SourceCursor(b"")
        cursor.advance()
        with pytest.raises(CursorError):
            cursor.unread()

    def test_cursor_error_is_corgi_error(self):
        assert issubclass(CursorError, CorgiError)


class TestSeekAndSlice:
    """Test seek(), slice() and location()."""

    def test_seek(self):
        cursor = SourceCursor(b"hello")
        cursor.seek(3)
        assert cursor.advance() == b"l"
        cursor.seek(5)
        assert cursor.at_end()

    def test_seek_out_of_range(self):
        cursor = SourceCursor(b"hi")
        with pytest.raises(CursorError):
            cursor.seek(3)
        with pytest.raises(CursorError):
            cursor.seek(-1)

    def test_seek_clears_pushback(self):
        cursor = SourceCursor(b"abc")
        cursor.advance()
        cursor.seek(2)
        with pytest.raises(CursorError):
            cursor.unread()

    def test_slice(self):
        cursor = SourceCursor(b"var x")
        assert cursor.slice(0, 3) == b"var"
        assert cursor.slice(4, 10) == b"x"

    @pytest.mark.parametrize("offset,expected", [
        (0, (1, 1)),
        (2, (1, 3)),
        (3, (2, 1)),
        (4, (2, 2)),
        (99, (2, 3)),
    ])
    def test_location(self, offset, expected):
        cursor = SourceCursor(b"ab\ncd")
        assert cursor.location(offset) == expected
