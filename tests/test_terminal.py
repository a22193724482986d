import pytest

from oledssd.command import AddrMode, ColStart, Page, PageStart
from oledssd.display import Ssd1306
from oledssd.errors import DisplayError
from oledssd.interface import WriteOnlyDataCommand
from oledssd.rotation import DisplayRotation
from oledssd.size import (
    DisplaySize64x32,
    DisplaySize64x48,
    DisplaySize72x40,
    DisplaySize96x16,
    DisplaySize128x32,
    DisplaySize128x64,
)
from oledssd.terminal import (
    OutOfBoundsError,
    TerminalDisplay,
    TerminalInterfaceError,
    TerminalModeError,
    UninitializedError,
    char_count,
    char_to_bitmap,
    rotate_bitmap,
)


class RecordingInterface(WriteOnlyDataCommand):
    def __init__(self):
        self.commands = []
        self.data = []

    def send_commands(self, data):
        self.commands.append(bytes(data))

    def send_data(self, data):
        self.data.append(bytes(data))


class FailingInterface(WriteOnlyDataCommand):
    def send_commands(self, data):
        raise DisplayError("bus down")

    def send_data(self, data):
        raise DisplayError("bus down")


def make(size=None, rotation=DisplayRotation.ROTATE_0, init=True):
    iface = RecordingInterface()
    display = TerminalDisplay(iface, size or DisplaySize128x64(), rotation)
    if init:
        display.init()
        iface.commands.clear()
        iface.data.clear()
    return display, iface


@pytest.mark.parametrize(
    "size, expected",
    [
        (DisplaySize128x64(), 128),
        (DisplaySize128x32(), 64),
        (DisplaySize96x16(), 24),
        (DisplaySize72x40(), 45),
        (DisplaySize64x48(), 48),
    ],
)
def test_char_count(size, expected):
    assert char_count(size) == expected


def test_char_count_unsupported_size():
    with pytest.raises(ValueError):
        char_count(DisplaySize64x32())


def test_char_to_bitmap_known_glyphs():
    assert char_to_bitmap("!") == bytes([0, 0x00, 0x2F, 0x00, 0x00, 0x00, 0x00, 0])
    assert char_to_bitmap("A") == bytes([0, 0x3E, 0x09, 0x09, 0x09, 0x09, 0x3E, 0])


@pytest.mark.parametrize("c", [" ", "\x7f", "\u00e9", "\t"])
def test_char_to_bitmap_unknown_is_blank(c):
    assert char_to_bitmap(c) == bytes(8)


def test_rotate_bitmap_is_involution():
    bitmap = char_to_bitmap("Q")
    assert rotate_bitmap(rotate_bitmap(bitmap)) == bitmap


def test_rotate_bitmap_full_column():
    assert rotate_bitmap(bytes([0xFF, 0, 0, 0, 0, 0, 0, 0])) == bytes([1] * 8)


def test_unsupported_size_rejected():
    with pytest.raises(ValueError):
        TerminalDisplay(RecordingInterface(), DisplaySize64x32(), DisplayRotation.ROTATE_0)


def test_position_before_init_raises():
    display, _ = make(init=False)
    with pytest.raises(UninitializedError):
        display.position()


def test_print_before_init_raises():
    display, _ = make(init=False)
    with pytest.raises(TerminalModeError):
        display.print_char("a")


def test_init_homes_cursor():
    display, _ = make()
    assert display.position() == (0, 0)
    assert display.addr_mode == AddrMode.PAGE


def test_print_char_sends_bitmap_and_advances():
    display, iface = make()
    display.print_char("A")
    assert iface.data == [char_to_bitmap("A")]
    assert display.position() == (1, 0)


def test_line_wraps_after_full_row():
    display, _ = make()
    display.write_str("a" * 16)
    assert display.position() == (0, 1)


def test_screen_wraps_to_top():
    display, _ = make()
    display.set_position(15, 7)
    display.print_char("z")
    assert display.position() == (0, 0)


def test_newline_and_carriage_return():
    display, _ = make()
    display.write_str("ab")
    display.print_char("\n")
    assert display.position() == (0, 1)
    display.write_str("cde")
    display.print_char("\r")
    assert display.position() == (0, 1)


def test_set_position_out_of_bounds():
    display, _ = make()
    with pytest.raises(OutOfBoundsError):
        display.set_position(16, 0)
    with pytest.raises(OutOfBoundsError):
        display.set_position(0, 8)


def test_set_position_commands():
    display, iface = make()
    display.set_position(2, 3)
    assert iface.commands == [
        ColStart(16).encode(),
        PageStart(Page.from_row(24)).encode(),
    ]
    assert display.position() == (2, 3)


def test_set_position_uses_offset():
    display, iface = make(DisplaySize72x40())
    display.set_position(0, 0)
    assert iface.commands[0] == ColStart(28).encode()


def test_rotated_display_transposes_glyphs_and_grid():
    display, iface = make(rotation=DisplayRotation.ROTATE_90)
    display.print_char("A")
    assert iface.data == [rotate_bitmap(char_to_bitmap("A"))]
    display.set_position(7, 15)
    assert display.position() == (7, 15)
    with pytest.raises(OutOfBoundsError):
        display.set_position(8, 0)


def test_clear_blanks_and_homes():
    display, iface = make(DisplaySize96x16())
    display.write_str("hi")
    iface.data.clear()
    display.clear()
    assert iface.data == [bytes(8)] * char_count(DisplaySize96x16())
    assert display.position() == (0, 0)
    assert display.addr_mode == AddrMode.PAGE


def test_set_rotation_resets_cursor():
    display, _ = make()
    display.write_str("abc")
    display.set_rotation(DisplayRotation.ROTATE_90)
    assert display.position() == (0, 0)
    assert display.rotation() == DisplayRotation.ROTATE_90
    assert display.dimensions() == (64, 128)


def test_write_str_prints_all():
    display, iface = make()
    display.write_str("abc")
    assert iface.data == [char_to_bitmap(c) for c in "abc"]
    assert display.position() == (3, 0)


def test_write_prints_only_last_character():
    display, iface = make()
    display.write("abc")
    assert iface.data == [char_to_bitmap("c")]
    assert display.position() == (1, 0)


def test_write_swallows_errors():
    display, iface = make(init=False)
    display.write("x")
    assert iface.data == [char_to_bitmap("x")]


def test_interface_failure_is_wrapped():
    display = TerminalDisplay(
        FailingInterface(), DisplaySize128x64(), DisplayRotation.ROTATE_0
    )
    with pytest.raises(TerminalInterfaceError) as info:
        display.init()
    assert isinstance(info.value.error, DisplayError)


def test_from_display_keeps_settings():
    iface = RecordingInterface()
    basic = Ssd1306(iface, DisplaySize128x32(), DisplayRotation.ROTATE_180)
    basic.set_addr_mode(AddrMode.VERTICAL)
    terminal = TerminalDisplay.from_display(basic)
    assert terminal.release() is iface
    assert terminal.rotation() == DisplayRotation.ROTATE_180
    assert terminal.addr_mode == AddrMode.VERTICAL


def test_from_display_rejects_unsupported_size():
    basic = Ssd1306(RecordingInterface(), DisplaySize64x32(), DisplayRotation.ROTATE_0)
    with pytest.raises(ValueError):
        TerminalDisplay.from_display(basic)