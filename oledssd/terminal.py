"""Terminal mode: bufferless text output in 8x8 character cells."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from oledssd.command import AddrMode
from oledssd.display import Ssd1306
from oledssd.errors import DisplayError
from oledssd.interface import WriteOnlyDataCommand
from oledssd.rotation import DisplayRotation
from oledssd.size import (
    DisplaySize,
    DisplaySize64x48,
    DisplaySize72x40,
    DisplaySize96x16,
    DisplaySize128x32,
    DisplaySize128x64,
)

_CHAR_COUNTS: dict[type[DisplaySize], int] = {
    DisplaySize128x64: 128,
    DisplaySize128x32: 64,
    DisplaySize96x16: 24,
    DisplaySize72x40: 45,
    DisplaySize64x48: 48,
}

# Glyphs for '!' through '~', followed by a blank glyph used for anything else.
_GLYPHS: tuple[bytes, ...] = (
    bytes([0x00, 0x2F, 0x00, 0x00, 0x00, 0x00]),  # !
    bytes([0x03, 0x00, 0x03, 0x00, 0x00, 0x00]),  # "
    bytes([0x12, 0x3F, 0x12, 0x12, 0x3F, 0x12]),  # #
    bytes([0x2E, 0x2A, 0x7F, 0x2A, 0x3A, 0x00]),  # $
    bytes([0x23, 0x13, 0x08, 0x04, 0x32, 0x31]),  # %
    bytes([0x10, 0x2A, 0x25, 0x2A, 0x10, 0x20]),  # &
    bytes([0x02, 0x01, 0x00, 0x00, 0x00, 0x00]),  # '
    bytes([0x1E, 0x21, 0x00, 0x00, 0x00, 0x00]),  # (
    bytes([0x21, 0x1E, 0x00, 0x00, 0x00, 0x00]),  # )
    bytes([0x08, 0x2A, 0x1C, 0x2A, 0x08, 0x00]),  # *
    bytes([0x08, 0x08, 0x3E, 0x08, 0x08, 0x00]),  # +
    bytes([0x80, 0x60, 0x00, 0x00, 0x00, 0x00]),  # ,
    bytes([0x08, 0x08, 0x08, 0x08, 0x08, 0x00]),  # -
    bytes([0x30, 0x30, 0x00, 0x00, 0x00, 0x00]),  # .
    bytes([0x20, 0x10, 0x08, 0x04, 0x02, 0x00]),  # /
    bytes([0x1E, 0x31, 0x29, 0x25, 0x23, 0x1E]),  # 0
    bytes([0x22, 0x21, 0x3F, 0x20, 0x20, 0x20]),  # 1
    bytes([0x32, 0x29, 0x29, 0x29, 0x29, 0x26]),  # 2
    bytes([0x12, 0x21, 0x21, 0x25, 0x25, 0x1A]),  # 3
    bytes([0x18, 0x14, 0x12, 0x3F, 0x10, 0x00]),  # 4
    bytes([0x17, 0x25, 0x25, 0x25, 0x25, 0x19]),  # 5
    bytes([0x1E, 0x25, 0x25, 0x25, 0x25, 0x18]),  # 6
    bytes([0x01, 0x01, 0x31, 0x09, 0x05, 0x03]),  # 7
    bytes([0x1A, 0x25, 0x25, 0x25, 0x25, 0x1A]),  # 8
    bytes([0x06, 0x29, 0x29, 0x29, 0x29, 0x1E]),  # 9
    bytes([0x24, 0x00, 0x00, 0x00, 0x00, 0x00]),  # :
    bytes([0x80, 0x64, 0x00, 0x00, 0x00, 0x00]),  # ;
    bytes([0x08, 0x14, 0x22, 0x00, 0x00, 0x00]),  # <
    bytes([0x14, 0x14, 0x14, 0x14, 0x14, 0x00]),  # =
    bytes([0x22, 0x14, 0x08, 0x00, 0x00, 0x00]),  # >
    bytes([0x02, 0x01, 0x01, 0x29, 0x05, 0x02]),  # ?
    bytes([0x1E, 0x21, 0x2D, 0x2B, 0x2D, 0x0E]),  # @
    bytes([0x3E, 0x09, 0x09, 0x09, 0x09, 0x3E]),  # A
    bytes([0x3F, 0x25, 0x25, 0x25, 0x25, 0x1A]),  # B
    bytes([0x1E, 0x21, 0x21, 0x21, 0x21, 0x12]),  # C
    bytes([0x3F, 0x21, 0x21, 0x21, 0x12, 0x0C]),  # D
    bytes([0x3F, 0x25, 0x25, 0x25, 0x25, 0x21]),  # E
    bytes([0x3F, 0x05, 0x05, 0x05, 0x05, 0x01]),  # F
    bytes([0x1E, 0x21, 0x21, 0x21, 0x29, 0x1A]),  # G
    bytes([0x3F, 0x04, 0x04, 0x04, 0x04, 0x3F]),  # H
    bytes([0x21, 0x21, 0x3F, 0x21, 0x21, 0x00]),  # I
    bytes([0x10, 0x20, 0x20, 0x20, 0x20, 0x1F]),  # J
    bytes([0x3F, 0x04, 0x0C, 0x0A, 0x11, 0x20]),  # K
    bytes([0x3F, 0x20, 0x20, 0x20, 0x20, 0x20]),  # L
    bytes([0x3F, 0x02, 0x04, 0x04, 0x02, 0x3F]),  # M
    bytes([0x3F, 0x02, 0x04, 0x08, 0x10, 0x3F]),  # N
    bytes([0x1E, 0x21, 0x21, 0x21, 0x21, 0x1E]),  # O
    bytes([0x3F, 0x09, 0x09, 0x09, 0x09, 0x06]),  # P
    bytes([0x1E, 0x21, 0x29, 0x31, 0x21, 0x5E]),  # Q
    bytes([0x3F, 0x09, 0x09, 0x09, 0x19, 0x26]),  # R
    bytes([0x12, 0x25, 0x25, 0x25, 0x25, 0x18]),  # S
    bytes([0x01, 0x01, 0x01, 0x3F, 0x01, 0x01]),  # T
    bytes([0x1F, 0x20, 0x20, 0x20, 0x20, 0x1F]),  # U
    bytes([0x0F, 0x10, 0x20, 0x20, 0x10, 0x0F]),  # V
    bytes([0x1F, 0x20, 0x10, 0x10, 0x20, 0x1F]),  # W
    bytes([0x21, 0x12, 0x0C, 0x0C, 0x12, 0x21]),  # X
    bytes([0x01, 0x02, 0x3C, 0x02, 0x01, 0x00]),  # Y
    bytes([0x21, 0x31, 0x29, 0x25, 0x23, 0x21]),  # Z
    bytes([0x3F, 0x21, 0x00, 0x00, 0x00, 0x00]),  # [
    bytes([0x02, 0x04, 0x08, 0x10, 0x20, 0x00]),  # backslash
    bytes([0x21, 0x3F, 0x00, 0x00, 0x00, 0x00]),  # ]
    bytes([0x04, 0x02, 0x3F, 0x02, 0x04, 0x00]),  # ^
    bytes([0x40, 0x40, 0x40, 0x40, 0x40, 0x40]),  # _
    bytes([0x01, 0x02, 0x00, 0x00, 0x00, 0x00]),  # `
    bytes([0x10, 0x2A, 0x2A, 0x2A, 0x3C, 0x00]),  # a
    bytes([0x3F, 0x24, 0x24, 0x24, 0x18, 0x00]),  # b
    bytes([0x1C, 0x22, 0x22, 0x22, 0x00, 0x00]),  # c
    bytes([0x18, 0x24, 0x24, 0x24, 0x3F, 0x00]),  # d
    bytes([0x1C, 0x2A, 0x2A, 0x2A, 0x24, 0x00]),  # e
    bytes([0x00, 0x3E, 0x05, 0x01, 0x00, 0x00]),  # f
    bytes([0x18, 0xA4, 0xA4, 0xA4, 0x7C, 0x00]),  # g
    bytes([0x3F, 0x04, 0x04, 0x04, 0x38, 0x00]),  # h
    bytes([0x00, 0x24, 0x3D, 0x20, 0x00, 0x00]),  # i
    bytes([0x20, 0x40, 0x40, 0x3D, 0x00, 0x00]),  # j
    bytes([0x3F, 0x0C, 0x12, 0x20, 0x00, 0x00]),  # k
    bytes([0x1F, 0x20, 0x20, 0x00, 0x00, 0x00]),  # l
    bytes([0x3E, 0x02, 0x3C, 0x02, 0x3C, 0x00]),  # m
    bytes([0x3E, 0x02, 0x02, 0x02, 0x3C, 0x00]),  # n
    bytes([0x1C, 0x22, 0x22, 0x22, 0x1C, 0x00]),  # o
    bytes([0xFC, 0x24, 0x24, 0x24, 0x18, 0x00]),  # p
    bytes([0x18, 0x24, 0x24, 0x24, 0xFC, 0x00]),  # q
    bytes([0x3E, 0x04, 0x02, 0x02, 0x00, 0x00]),  # r
    bytes([0x24, 0x2A, 0x2A, 0x2A, 0x10, 0x00]),  # s
    bytes([0x02, 0x1F, 0x22, 0x20, 0x00, 0x00]),  # t
    bytes([0x1E, 0x20, 0x20, 0x20, 0x1E, 0x00]),  # u
    bytes([0x06, 0x18, 0x20, 0x18, 0x06, 0x00]),  # v
    bytes([0x1E, 0x30, 0x1C, 0x30, 0x1E, 0x00]),  # w
    bytes([0x22, 0x14, 0x08, 0x14, 0x22, 0x00]),  # x
    bytes([0x1C, 0xA0, 0xA0, 0xA0, 0x7C, 0x00]),  # y
    bytes([0x22, 0x32, 0x2A, 0x26, 0x22, 0x00]),  # z
    bytes([0x0C, 0x3F, 0x21, 0x00, 0x00, 0x00]),  # {
    bytes([0x3F, 0x00, 0x00, 0x00, 0x00, 0x00]),  # |
    bytes([0x21, 0x3F, 0x0C, 0x00, 0x00, 0x00]),  # }
    bytes([0x02, 0x01, 0x02, 0x01, 0x00, 0x00]),  # ~
    bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00]),  # blank
)

_FIRST_GLYPH = ord("!")


class TerminalModeError(Exception):
    """Base class for errors raised in terminal mode."""


class TerminalInterfaceError(TerminalModeError):
    """The underlying interface failed."""

    def __init__(self, error: DisplayError) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return "InterfaceError"


class UninitializedError(TerminalModeError):
    """Terminal mode was used before it was initialised."""

    def __str__(self) -> str:
        return "Uninitialized"


class OutOfBoundsError(TerminalModeError):
    """A position outside the screen was given."""

    def __str__(self) -> str:
        return "OutOfBound"


def char_count(size: DisplaySize) -> int:
    """Return how many 8x8 characters fit on a display of the given size."""
    try:
        return _CHAR_COUNTS[type(size)]
    except KeyError:
        raise ValueError(
            f"{type(size).__name__} is not supported in terminal mode"
        ) from None


def char_to_bitmap(c: str) -> bytes:
    """Return the eight column bytes for a character; unknown ones are blank."""
    index = ord(c) - _FIRST_GLYPH
    glyph = _GLYPHS[index] if 0 <= index < len(_GLYPHS) else _GLYPHS[-1]
    return bytes([0]) + glyph + bytes([0])


def rotate_bitmap(bitmap: bytes) -> bytes:
    """Transpose an 8x8 bitmap of column bytes."""
    rotated = bytearray(8)
    for col, source in enumerate(bitmap):
        for row in range(8):
            if source & (1 << row):
                rotated[row] |= 1 << col
    return bytes(rotated)


def _is_transposed(rotation: DisplayRotation) -> bool:
    return rotation in (DisplayRotation.ROTATE_90, DisplayRotation.ROTATE_270)


@dataclass
class _Cursor:
    width: int
    height: int
    col: int = 0
    row: int = 0

    @classmethod
    def for_pixels(cls, width_pixels: int, height_pixels: int) -> _Cursor:
        return cls(width_pixels // 8, height_pixels // 8)

    def advance(self) -> int | None:
        """Move one character on; return the new row if the line wrapped."""
        self.col = (self.col + 1) % self.width
        if self.col == 0:
            self.row = (self.row + 1) % self.height
            return self.row
        return None

    def advance_line(self) -> int:
        self.row = (self.row + 1) % self.height
        self.col = 0
        return self.row

    def set_position(self, col: int, row: int) -> None:
        self.col = min(col, self.width - 1)
        self.row = min(row, self.height - 1)

    @property
    def position(self) -> tuple[int, int]:
        return self.col, self.row

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height


@contextmanager
def _interface_errors() -> Iterator[None]:
    try:
        yield
    except DisplayError as exc:
        raise TerminalInterfaceError(exc) from exc


class TerminalDisplay(Ssd1306):
    """SSD1306 driver that writes text directly, like a simple terminal."""

    def __init__(
        self,
        interface: WriteOnlyDataCommand,
        size: DisplaySize,
        rotation: DisplayRotation,
    ) -> None:
        self._char_num = char_count(size)
        super().__init__(interface, size, rotation)
        self._cursor: _Cursor | None = None

    @classmethod
    def from_display(cls, display: Ssd1306) -> TerminalDisplay:
        """Take over a basic driver's interface, size, rotation and addressing."""
        converted = cls(display.interface, display.size, display.rotation())
        converted.addr_mode = display.addr_mode
        return converted

    def _offset_x(self) -> int:
        size = self.size
        if self.rotation() in (DisplayRotation.ROTATE_0, DisplayRotation.ROTATE_270):
            return size.OFFSETX
        # With segment remapping flipped the offset counts from the other edge.
        return size.DRIVER_COLS - size.WIDTH - size.OFFSETX

    def _ensure_cursor(self) -> _Cursor:
        if self._cursor is None:
            raise UninitializedError()
        return self._cursor

    def init(self) -> None:
        """Initialise in page addressing mode and home the cursor."""
        with _interface_errors():
            self.init_with_addr_mode(AddrMode.PAGE)
        self._reset_pos()

    def set_rotation(self, rotation: DisplayRotation) -> None:
        """Set the rotation and home the cursor; the screen is not cleared."""
        with _interface_errors():
            super().set_rotation(rotation)
        self._reset_pos()

    def clear(self) -> None:
        """Blank the screen and home the cursor."""
        size = self.size
        with _interface_errors():
            # The chip wraps lines itself in horizontal mode, which blanks faster.
            self.set_addr_mode(AddrMode.HORIZONTAL)
            offset_x = self._offset_x()
            self.set_draw_area(
                (offset_x, size.OFFSETY),
                (size.WIDTH + offset_x, size.HEIGHT + size.OFFSETY),
            )
            blank = bytes(8)
            for _ in range(self._char_num):
                self.draw(blank)
            self.set_addr_mode(AddrMode.PAGE)
        self._reset_pos()

    def print_char(self, c: str) -> None:
        """Print one character, handling newline and carriage return."""
        if c == "\n":
            new_line = self._ensure_cursor().advance_line()
            self.set_position(0, new_line)
        elif c == "\r":
            with _interface_errors():
                self.set_column(0)
            cursor = self._ensure_cursor()
            cursor.set_position(0, cursor.row)
        else:
            bitmap = char_to_bitmap(c)
            if _is_transposed(self.rotation()):
                bitmap = rotate_bitmap(bitmap)
            with _interface_errors():
                self.draw(bitmap)
            self._advance_cursor()

    def position(self) -> tuple[int, int]:
        """Return the (column, row) the next character is written to."""
        return self._ensure_cursor().position

    def set_position(self, column: int, row: int) -> None:
        """Move the cursor to (column, row) in character cells."""
        cursor = self._ensure_cursor()
        width, height = cursor.dimensions
        if not (0 <= column < width and 0 <= row < height):
            raise OutOfBoundsError()
        offset_x = self._offset_x()
        offset_y = self.size.OFFSETY
        with _interface_errors():
            if _is_transposed(self.rotation()):
                self.set_column(offset_x + row * 8)
                self.set_row(offset_y + column * 8)
            else:
                self.set_column(offset_x + column * 8)
                self.set_row(offset_y + row * 8)
        cursor.set_position(column, row)

    def write_str(self, s: str) -> None:
        """Print every character of a string, stopping at the first error."""
        for c in s:
            self.print_char(c)

    def write(self, s: str) -> None:
        """Formatter-style hook: prints only the final character, ignoring errors."""
        if not s:
            return
        try:
            self.print_char(s[-1])
        except TerminalModeError:
            pass

    def _reset_pos(self) -> None:
        width, height = self.dimensions()
        self._cursor = _Cursor.for_pixels(width, height)
        self.set_position(0, 0)

    def _advance_cursor(self) -> None:
        cursor = self._ensure_cursor()
        cursor.advance()
        self.set_position(*cursor.position)