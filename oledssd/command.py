"""Commands understood by the SSD1306 controller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oledssd.interface import WriteOnlyDataCommand


class HScrollDir(IntEnum):
    """Horizontal scroll direction."""

    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1


class VHScrollDir(IntEnum):
    """Combined vertical and horizontal scroll direction."""

    VERTICAL_RIGHT = 0b01
    VERTICAL_LEFT = 0b10


class Page(IntEnum):
    """A display page: a band of rows eight pixels high."""

    PAGE_0 = 0
    PAGE_1 = 1
    PAGE_2 = 2
    PAGE_3 = 3
    PAGE_4 = 4
    PAGE_5 = 5
    PAGE_6 = 6
    PAGE_7 = 7
    PAGE_8 = 8
    PAGE_9 = 9
    PAGE_10 = 10
    PAGE_11 = 11
    PAGE_12 = 12
    PAGE_13 = 13
    PAGE_14 = 14
    PAGE_15 = 15

    @classmethod
    def from_row(cls, row: int) -> Page:
        """Return the page holding the given pixel row."""
        if row < 0:
            raise ValueError("Row must not be negative")
        page = row // 8
        if page > 15:
            raise ValueError("Page too high")
        return cls(page)


class NFrames(IntEnum):
    """Frame interval between scroll steps."""

    F2 = 0b111
    F3 = 0b100
    F4 = 0b101
    F5 = 0b000
    F25 = 0b110
    F64 = 0b001
    F128 = 0b010
    F256 = 0b011


class AddrMode(IntEnum):
    """Memory addressing mode."""

    HORIZONTAL = 0b00
    VERTICAL = 0b01
    PAGE = 0b10


class VcomhLevel(IntEnum):
    """Vcomh deselect level."""

    V065 = 0b001
    V077 = 0b010
    V083 = 0b011
    AUTO = 0b100


class Command(ABC):
    """A single controller command."""

    __slots__ = ()

    @abstractmethod
    def encode(self) -> bytes:
        """Return the command bytes sent to the controller."""

    def send(self, iface: WriteOnlyDataCommand) -> None:
        """Send the command through a display interface."""
        iface.send_commands(self.encode())


@dataclass(frozen=True)
class Contrast(Command):
    """Set contrast; higher is more contrast."""

    value: int

    def encode(self) -> bytes:
        return bytes([0x81, self.value])


@dataclass(frozen=True)
class AllOn(Command):
    """Force every pixel on, or show memory contents."""

    on: bool

    def encode(self) -> bytes:
        return bytes([0xA4 | int(self.on)])


@dataclass(frozen=True)
class Invert(Command):
    """Invert the display."""

    invert: bool

    def encode(self) -> bytes:
        return bytes([0xA6 | int(self.invert)])


@dataclass(frozen=True)
class DisplayOn(Command):
    """Turn the display on or off."""

    on: bool

    def encode(self) -> bytes:
        return bytes([0xAE | int(self.on)])


@dataclass(frozen=True)
class HScrollSetup(Command):
    """Set up horizontal scrolling."""

    direction: HScrollDir
    start: Page
    end: Page
    rate: NFrames

    def encode(self) -> bytes:
        return bytes(
            [0x26 | self.direction, 0, self.start, self.rate, self.end, 0, 0xFF]
        )


@dataclass(frozen=True)
class VHScrollSetup(Command):
    """Set up combined vertical and horizontal scrolling."""

    direction: VHScrollDir
    start: Page
    end: Page
    rate: NFrames
    offset: int

    def encode(self) -> bytes:
        return bytes(
            [0x28 | self.direction, 0, self.start, self.rate, self.end, self.offset]
        )


@dataclass(frozen=True)
class EnableScroll(Command):
    """Start or stop scrolling."""

    enable: bool

    def encode(self) -> bytes:
        return bytes([0x2E | int(self.enable)])


@dataclass(frozen=True)
class VScrollArea(Command):
    """Set the vertical scroll area: rows above it and rows within it."""

    above: int
    lines: int

    def encode(self) -> bytes:
        return bytes([0xA3, self.above, self.lines])


@dataclass(frozen=True)
class LowerColStart(Command):
    """Set the lower nibble of the page-mode column start address."""

    address: int

    def encode(self) -> bytes:
        return bytes([0xF & self.address])


@dataclass(frozen=True)
class UpperColStart(Command):
    """Set the upper nibble of the page-mode column start address."""

    address: int

    def encode(self) -> bytes:
        return bytes([0x10 | (0xF & self.address)])


@dataclass(frozen=True)
class ColStart(Command):
    """Set the full page-mode column start address."""

    address: int

    def encode(self) -> bytes:
        return bytes([0xF & self.address, 0x10 | (0xF & (self.address >> 4))])


@dataclass(frozen=True)
class AddressMode(Command):
    """Select the memory addressing mode."""

    mode: AddrMode

    def encode(self) -> bytes:
        return bytes([0x20, self.mode])


@dataclass(frozen=True)
class ColumnAddress(Command):
    """Set column start and end for horizontal or vertical addressing."""

    start: int
    end: int

    def encode(self) -> bytes:
        return bytes([0x21, self.start, self.end])


@dataclass(frozen=True)
class PageAddress(Command):
    """Set page start and end for horizontal or vertical addressing."""

    start: Page
    end: Page

    def encode(self) -> bytes:
        return bytes([0x22, self.start, self.end])


@dataclass(frozen=True)
class PageStart(Command):
    """Set the page start address for page addressing."""

    page: Page

    def encode(self) -> bytes:
        return bytes([0xB0 | self.page])


@dataclass(frozen=True)
class StartLine(Command):
    """Set the display start line."""

    line: int

    def encode(self) -> bytes:
        return bytes([0x40 | (0x3F & self.line)])


@dataclass(frozen=True)
class SegmentRemap(Command):
    """Reverse the column order."""

    remap: bool

    def encode(self) -> bytes:
        return bytes([0xA0 | int(self.remap)])


@dataclass(frozen=True)
class Multiplex(Command):
    """Set the multiplex ratio (MUX - 1)."""

    ratio: int

    def encode(self) -> bytes:
        return bytes([0xA8, self.ratio])


@dataclass(frozen=True)
class ReverseComDir(Command):
    """Scan the COM lines in reverse."""

    reverse: bool

    def encode(self) -> bytes:
        return bytes([0xC0 | (int(self.reverse) << 3)])


@dataclass(frozen=True)
class DisplayOffset(Command):
    """Set the vertical shift."""

    offset: int

    def encode(self) -> bytes:
        return bytes([0xD3, self.offset])


@dataclass(frozen=True)
class ComPinConfig(Command):
    """Configure COM pins: alternative layout and left/right remap."""

    alternative: bool
    left_right_remap: bool

    def encode(self) -> bytes:
        return bytes(
            [
                0xDA,
                0x2 | (int(self.alternative) << 4) | (int(self.left_right_remap) << 5),
            ]
        )


@dataclass(frozen=True)
class DisplayClockDiv(Command):
    """Set oscillator frequency and clock divide ratio minus one."""

    fosc: int
    divide: int

    def encode(self) -> bytes:
        return bytes([0xD5, ((0xF & self.fosc) << 4) | (0xF & self.divide)])


@dataclass(frozen=True)
class PreChargePeriod(Command):
    """Set phase 1 and phase 2 of the pre-charge period (each 1 to 15)."""

    phase1: int
    phase2: int

    def encode(self) -> bytes:
        return bytes([0xD9, ((0xF & self.phase2) << 4) | (0xF & self.phase1)])


@dataclass(frozen=True)
class VcomhDeselect(Command):
    """Set the Vcomh deselect level."""

    level: VcomhLevel

    def encode(self) -> bytes:
        return bytes([0xDB, self.level << 4])


@dataclass(frozen=True)
class Noop(Command):
    """Do nothing."""

    def encode(self) -> bytes:
        return bytes([0xE3])


@dataclass(frozen=True)
class ChargePump(Command):
    """Enable or disable the charge pump."""

    enable: bool

    def encode(self) -> bytes:
        return bytes([0x8D, 0x10 | (int(self.enable) << 2)])


@dataclass(frozen=True)
class InternalIref(Command):
    """Select internal or external IREF (SSD1306B 72x40 only)."""

    enable: bool
    current: bool

    def encode(self) -> bytes:
        return bytes([0xAD, (int(self.current) << 5) | (int(self.enable) << 4)])