"""
Source Cursor
=============

A read position over an immutable byte buffer.

The scanner never touches the buffer directly: it reads one byte at a
time through this cursor, peeks ahead without consuming, and can push
back exactly one byte. The single pushback is what lets the scanner read
past a '-' to check for a second '-' and then give the byte back when
the first one turns out to be a plain minus sign.

End of input is reported as b"" (an empty bytes object) rather than an
exception, so scanning loops can test for it like any other character.
"""

from typing import Optional

from corgi.errors import CursorError


class SourceCursor:
    """
    Byte cursor with one level of pushback.

    Attributes:
        data: The source bytes being read
    """

    def __init__(self, data: bytes):
        self.data = data
        self._pos = 0

        # Position before the most recent advance(), if it can be undone
        self._unread_pos: Optional[int] = None

    def __repr__(self) -> str:
        return f"SourceCursor(position={self._pos}, size={len(self.data)})"

    @property
    def position(self) -> int:
        """Absolute byte offset of the next byte to be read."""
        return self._pos

    def at_end(self) -> bool:
        """Check if every byte has been consumed."""
        return self._pos >= len(self.data)

    def peek(self, offset: int = 0) -> bytes:
        """
        Look at the byte at current position + offset without advancing.

        Returns b"" if past end of input.
        """
        pos = self._pos + offset
        return self.data[pos:pos + 1]

    def advance(self) -> bytes:
        """
        Consume and return the current byte.

        At end of input returns b"" and stays put; that read cannot be
        unread since nothing was consumed.
        """
        if self.at_end():
            self._unread_pos = None
            return b""

        byte = self.data[self._pos:self._pos + 1]
        self._unread_pos = self._pos
        self._pos += 1
        return byte

    def unread(self) -> None:
        """
        Push back the byte consumed by the most recent advance().

        Raises:
            CursorError: If there is no byte to push back
        """
        if self._unread_pos is None:
            raise CursorError("nothing to unread")
        self._pos = self._unread_pos
        self._unread_pos = None

    def seek(self, position: int) -> None:
        """
        Move to an absolute position within the buffer.

        Raises:
            CursorError: If position is outside [0, len(data)]
        """
        if not 0 <= position <= len(self.data):
            raise CursorError(
                f"position {position} outside source of {len(self.data)} bytes"
            )
        self._pos = position
        self._unread_pos = None

    def slice(self, start: int, end: int) -> bytes:
        """Reread the bytes in [start, end), clamped to the buffer."""
        return self.data[max(start, 0):max(end, 0)]

    def location(self, offset: int) -> tuple[int, int]:
        """
        Return the 1-indexed (line, column) of an offset.

        Columns count bytes. An offset at or past the end maps to the
        position just after the last byte.
        """
        offset = min(max(offset, 0), len(self.data))
        line = self.data.count(b"\n", 0, offset) + 1
        line_start = self.data.rfind(b"\n", 0, offset) + 1
        return line, offset - line_start + 1
