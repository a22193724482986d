"""Buffered graphics mode: draw into a framebuffer, then flush changed areas."""

from __future__ import annotations

from collections.abc import Iterable

from oledssd.command import AddrMode
from oledssd.interface import WriteOnlyDataCommand
from oledssd.rotation import DisplayRotation
from oledssd.display import Ssd1306
from oledssd.size import DisplaySize

_NO_MIN = 255
_NO_MAX = 0

Pixel = tuple[tuple[int, int], bool]


def _is_transposed(rotation: DisplayRotation) -> bool:
    return rotation in (DisplayRotation.ROTATE_90, DisplayRotation.ROTATE_270)


class BufferedGraphicsDisplay(Ssd1306):
    """SSD1306 driver that keeps a pixel buffer in memory.

    Pixels are drawn with :meth:`set_pixel` or :meth:`draw_iter`; only the
    region changed since the last :meth:`flush` is sent to the display.
    """

    def __init__(
        self,
        interface: WriteOnlyDataCommand,
        size: DisplaySize,
        rotation: DisplayRotation,
    ) -> None:
        super().__init__(interface, size, rotation)
        self._buffer = size.new_buffer()
        self._reset_dirty()

    @classmethod
    def from_display(cls, display: Ssd1306) -> BufferedGraphicsDisplay:
        """Take over a basic driver's interface, size, rotation and addressing."""
        converted = cls(display.interface, display.size, display.rotation())
        converted.addr_mode = display.addr_mode
        return converted

    def _reset_dirty(self) -> None:
        self._min_x = _NO_MIN
        self._max_x = _NO_MAX
        self._min_y = _NO_MIN
        self._max_y = _NO_MAX

    def _clear_impl(self, on: bool) -> None:
        fill = 0xFF if on else 0x00
        self._buffer[:] = bytes([fill]) * len(self._buffer)
        width, height = self.dimensions()
        self._min_x = 0
        self._max_x = width - 1
        self._min_y = 0
        self._max_y = height - 1

    def init(self) -> None:
        """Clear the buffer and initialise the display in horizontal mode."""
        self._clear_impl(False)
        self.init_with_addr_mode(AddrMode.HORIZONTAL)

    def clear_buffer(self) -> None:
        """Clear the framebuffer; call :meth:`flush` to update the screen."""
        self._clear_impl(False)

    def clear(self, on: bool = False) -> None:
        """Fill the framebuffer with every pixel on or off."""
        self._clear_impl(bool(on))

    def buffer(self) -> bytes:
        """Return a copy of the framebuffer."""
        return bytes(self._buffer)

    def flush(self) -> None:
        """Send the parts of the framebuffer changed since the last flush."""
        if self._max_x < self._min_x or self._max_y < self._min_y:
            return

        width, height = self.dimensions()
        rotation = self.rotation()
        transposed = _is_transposed(rotation)

        disp_min_x = self._min_x
        disp_min_y = self._min_y
        if transposed:
            disp_max_x = min(self._max_x | 7, width)
            disp_max_y = min(self._max_y + 1, height)
        else:
            disp_max_x = min(self._max_x + 1, width)
            disp_max_y = min(self._max_y | 7, height)

        self._reset_dirty()

        size = self.size
        if rotation in (DisplayRotation.ROTATE_0, DisplayRotation.ROTATE_270):
            offset_x = size.OFFSETX
        else:
            # With segment remapping flipped the offset counts from the other edge.
            offset_x = size.DRIVER_COLS - size.WIDTH - size.OFFSETX

        if transposed:
            self.set_draw_area(
                (disp_min_y + offset_x, disp_min_x + size.OFFSETY),
                (disp_max_y + offset_x, disp_max_x + size.OFFSETY),
            )
            self._flush_buffer_chunks(
                self.interface,
                self._buffer,
                height,
                (disp_min_y, disp_min_x),
                (disp_max_y, disp_max_x),
            )
        else:
            self.set_draw_area(
                (disp_min_x + offset_x, disp_min_y + size.OFFSETY),
                (disp_max_x + offset_x, disp_max_y + size.OFFSETY),
            )
            self._flush_buffer_chunks(
                self.interface,
                self._buffer,
                width,
                (disp_min_x, disp_min_y),
                (disp_max_x, disp_max_y),
            )

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        """Turn a pixel on or off; positions outside the buffer are ignored."""
        if x < 0 or y < 0:
            return
        if _is_transposed(self.rotation()):
            idx = (x // 8) * self.size.WIDTH + y
            bit = x % 8
        else:
            idx = (y // 8) * self.size.WIDTH + x
            bit = y % 8

        if idx >= len(self._buffer):
            return

        px, py = x & 0xFF, y & 0xFF
        self._min_x = min(self._min_x, px)
        self._max_x = max(self._max_x, px)
        self._min_y = min(self._min_y, py)
        self._max_y = max(self._max_y, py)

        byte = self._buffer[idx] & ~(1 << bit) & 0xFF
        self._buffer[idx] = byte | (int(bool(value)) << bit)

    def draw_iter(self, pixels: Iterable[Pixel]) -> None:
        """Draw ``((x, y), on)`` pixels, skipping those outside the display."""
        width, height = self.dimensions()
        for (x, y), color in pixels:
            if 0 <= x < width and 0 <= y < height:
                self.set_pixel(x, y, bool(color))