"""The SSD1306 driver in its basic mode."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice
from typing import Any

from oledssd.brightness import Brightness
from oledssd.command import (
    AddrMode,
    AddressMode,
    AllOn,
    ChargePump,
    ColStart,
    ColumnAddress,
    Contrast,
    DisplayClockDiv,
    DisplayOffset,
    DisplayOn,
    EnableScroll,
    Invert,
    Multiplex,
    Page,
    PageAddress,
    PageStart,
    PreChargePeriod,
    ReverseComDir,
    SegmentRemap,
    StartLine,
    VcomhDeselect,
    VcomhLevel,
)
from oledssd.errors import PinError
from oledssd.interface import WriteOnlyDataCommand
from oledssd.rotation import DisplayRotation
from oledssd.size import DisplaySize

_BITS_PER_BYTE = 8
_BYTES_PER_BATCH = 64
_PIXELS_PER_BATCH = _BITS_PER_BYTE * _BYTES_PER_BATCH

# (segment remap, reverse COM direction) for each rotation
_ROTATION_REMAP = {
    DisplayRotation.ROTATE_0: (True, True),
    DisplayRotation.ROTATE_90: (False, True),
    DisplayRotation.ROTATE_180: (False, False),
    DisplayRotation.ROTATE_270: (True, False),
}

_MIRROR_REMAP = {
    DisplayRotation.ROTATE_0: (False, True),
    DisplayRotation.ROTATE_90: (False, False),
    DisplayRotation.ROTATE_180: (True, False),
    DisplayRotation.ROTATE_270: (True, True),
}


def _is_transposed(rotation: DisplayRotation) -> bool:
    return rotation in (DisplayRotation.ROTATE_90, DisplayRotation.ROTATE_270)


class Ssd1306:
    """SSD1306 driver offering the low-level drawing and configuration calls."""

    def __init__(
        self,
        interface: WriteOnlyDataCommand,
        size: DisplaySize,
        rotation: DisplayRotation,
    ) -> None:
        self.interface = interface
        self.size = size
        self.addr_mode = AddrMode.PAGE
        self._rotation = rotation

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(interface={self.interface!r}, "
            f"size={self.size!r}, rotation={self._rotation!r}, "
            f"addr_mode={self.addr_mode!r})"
        )

    def init_with_addr_mode(self, mode: AddrMode) -> None:
        """Initialise the display in the given addressing mode."""
        iface = self.interface
        DisplayOn(False).send(iface)
        DisplayClockDiv(0x8, 0x0).send(iface)
        Multiplex(self.size.HEIGHT - 1).send(iface)
        DisplayOffset(0).send(iface)
        StartLine(0).send(iface)
        ChargePump(True).send(iface)
        AddressMode(mode).send(iface)

        self.size.configure(iface)
        self._apply_rotation(self._rotation)

        self.set_brightness(Brightness.NORMAL)
        VcomhDeselect(VcomhLevel.AUTO).send(iface)
        AllOn(False).send(iface)
        Invert(False).send(iface)
        EnableScroll(False).send(iface)
        DisplayOn(True).send(iface)

        self.addr_mode = mode

    def init(self) -> None:
        """Initialise the display in horizontal addressing mode."""
        self.init_with_addr_mode(AddrMode.HORIZONTAL)

    def clear(self) -> None:
        """Blank the whole display memory."""
        old_mode = self.addr_mode
        if old_mode != AddrMode.HORIZONTAL:
            self.set_addr_mode(AddrMode.HORIZONTAL)

        dim = self.dimensions()
        self.set_draw_area((0, 0), dim)

        num_pixels = dim[0] * dim[1]
        # Not every size is a multiple of a batch, so one more covers the tail
        num_batches = num_pixels // _PIXELS_PER_BATCH + 1
        blank = bytes(_BYTES_PER_BATCH)
        for _ in range(num_batches):
            self.draw(blank)

        if old_mode != AddrMode.HORIZONTAL:
            self.set_addr_mode(old_mode)

    def set_addr_mode(self, mode: AddrMode) -> None:
        """Change the addressing mode."""
        AddressMode(mode).send(self.interface)
        self.addr_mode = mode

    def bounded_draw(
        self,
        buffer: bytes,
        disp_width: int,
        upper_left: tuple[int, int],
        lower_right: tuple[int, int],
    ) -> None:
        """Send the part of a framebuffer inside a bounding box."""
        self._flush_buffer_chunks(
            self.interface, buffer, disp_width, upper_left, lower_right
        )

    def draw(self, buffer: bytes) -> None:
        """Send a raw buffer to the display."""
        self.interface.send_data(bytes(buffer))

    def dimensions(self) -> tuple[int, int]:
        """Return (width, height), taking the rotation into account."""
        width, height = self.size.WIDTH, self.size.HEIGHT
        if _is_transposed(self._rotation):
            return height, width
        return width, height

    def rotation(self) -> DisplayRotation:
        """Return the display rotation."""
        return self._rotation

    def set_rotation(self, rotation: DisplayRotation) -> None:
        """Set the display rotation."""
        self._apply_rotation(rotation)

    def _apply_rotation(self, rotation: DisplayRotation) -> None:
        self._rotation = rotation
        remap, reverse = _ROTATION_REMAP[rotation]
        SegmentRemap(remap).send(self.interface)
        ReverseComDir(reverse).send(self.interface)

    def set_mirror(self, mirror: bool) -> None:
        """Enable or disable mirroring."""
        if mirror:
            remap, reverse = _MIRROR_REMAP[self._rotation]
            SegmentRemap(remap).send(self.interface)
            ReverseComDir(reverse).send(self.interface)
        else:
            self._apply_rotation(self._rotation)

    def set_brightness(self, brightness: Brightness) -> None:
        """Change the display brightness."""
        PreChargePeriod(1, brightness.precharge).send(self.interface)
        Contrast(brightness.contrast).send(self.interface)

    def set_display_on(self, on: bool) -> None:
        """Turn the display on or off; memory is retained while off."""
        DisplayOn(on).send(self.interface)

    def set_draw_area(self, start: tuple[int, int], end: tuple[int, int]) -> None:
        """Limit where sent data is drawn; ``end`` is exclusive."""
        ColumnAddress(start[0], max(end[0] - 1, 0)).send(self.interface)
        if self.addr_mode != AddrMode.PAGE:
            PageAddress(
                Page.from_row(start[1]), Page.from_row(max(end[1] - 1, 0))
            ).send(self.interface)

    def set_column(self, column: int) -> None:
        """Set the column where sent data is drawn."""
        ColStart(column).send(self.interface)

    def set_row(self, row: int) -> None:
        """Set the page holding the given pixel row as the draw start."""
        PageStart(Page.from_row(row)).send(self.interface)

    def set_invert(self, invert: bool) -> None:
        """Set pixel inversion."""
        Invert(invert).send(self.interface)

    def release(self) -> WriteOnlyDataCommand:
        """Return the contained interface."""
        return self.interface

    def reset(self, rst: Any, delay: Any) -> None:
        """Pulse the reset pin low; pin failures raise :class:`PinError`.

        ``rst`` provides ``set_high()`` and ``set_low()``; ``delay`` provides
        ``delay_ms(ms)``.
        """
        self._drive_pin(rst.set_high)
        delay.delay_ms(1)
        self._drive_pin(rst.set_low)
        delay.delay_ms(10)
        self._drive_pin(rst.set_high)

    @staticmethod
    def _drive_pin(action: Any) -> None:
        try:
            action()
        except Exception as exc:
            raise PinError(exc) from exc

    @staticmethod
    def _buffer_chunks(
        buffer: bytes,
        disp_width: int,
        upper_left: tuple[int, int],
        lower_right: tuple[int, int],
    ) -> Iterator[bytes]:
        if disp_width <= 0:
            raise ValueError("Display width must be positive")
        if lower_right[1] < upper_left[1]:
            raise ValueError("Lower right corner lies above upper left corner")
        page_lower, page_upper = upper_left[0], lower_right[0]
        if page_lower > page_upper:
            raise ValueError("Lower right corner lies left of upper left corner")

        # Each page is a band of eight rows
        num_pages = (lower_right[1] - upper_left[1]) // 8 + 1
        starting_page = upper_left[1] // 8

        data = bytes(buffer)
        chunks = (
            data[i : i + disp_width] for i in range(0, len(data), disp_width)
        )
        for chunk in islice(chunks, starting_page, starting_page + num_pages):
            if page_upper > len(chunk):
                raise ValueError("Bounding box exceeds the buffer row")
            yield chunk[page_lower:page_upper]

    @classmethod
    def _flush_buffer_chunks(
        cls,
        interface: WriteOnlyDataCommand,
        buffer: bytes,
        disp_width: int,
        upper_left: tuple[int, int],
        lower_right: tuple[int, int],
    ) -> None:
        for chunk in cls._buffer_chunks(buffer, disp_width, upper_left, lower_right):
            interface.send_data(chunk)