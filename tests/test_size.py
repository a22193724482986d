import pytest

from oledssd.command import ComPinConfig, InternalIref
from oledssd.size import (
    DisplaySize,
    DisplaySize64x32,
    DisplaySize64x48,
    DisplaySize72x40,
    DisplaySize96x16,
    DisplaySize128x32,
    DisplaySize128x64,
)


class RecordingInterface:
    def __init__(self):
        self.commands = []

    def send_commands(self, data):
        self.commands.append(bytes(data))

    def send_data(self, data):
        raise AssertionError("configuration must not send data")


def test_documented_dimensions():
    large = DisplaySize128x64()
    small = DisplaySize72x40()
    assert (large.WIDTH, large.HEIGHT) == (128, 64)
    assert (small.WIDTH, small.HEIGHT) == (72, 40)
    assert small.OFFSETX == 28
    assert large.OFFSETX == 0
    assert small.buffer_size() == 360


def test_128x64_buffer_is_1024_bytes():
    assert DisplaySize128x64().buffer_size() == 1024


def test_buffer_holds_one_bit_per_pixel():
    expected = [
        (DisplaySize128x64(), 1024),
        (DisplaySize128x32(), 512),
        (DisplaySize96x16(), 192),
        (DisplaySize72x40(), 360),
        (DisplaySize64x48(), 384),
        (DisplaySize64x32(), 256),
    ]
    for size, length in expected:
        buf = size.new_buffer()
        assert len(buf) == length
        assert size.buffer_size() == length
        assert not any(buf)


def test_new_buffer_is_fresh():
    sizes = [
        DisplaySize128x64(),
        DisplaySize128x32(),
        DisplaySize96x16(),
        DisplaySize72x40(),
        DisplaySize64x48(),
        DisplaySize64x32(),
    ]
    for size in sizes:
        first = size.new_buffer()
        first[0] = 0xFF
        assert size.new_buffer()[0] == 0


def test_size_fits_in_driver():
    sizes = [
        DisplaySize128x64(),
        DisplaySize128x32(),
        DisplaySize96x16(),
        DisplaySize72x40(),
        DisplaySize64x48(),
        DisplaySize64x32(),
    ]
    for size in sizes:
        assert size.OFFSETX + size.WIDTH <= size.DRIVER_COLS
        assert size.OFFSETY + size.HEIGHT <= size.DRIVER_ROWS
        assert size.buffer_size() * 8 <= size.DRIVER_COLS * size.DRIVER_ROWS


@pytest.mark.parametrize(
    "cls, expected",
    [
        (DisplaySize128x64, [ComPinConfig(True, False)]),
        (DisplaySize128x32, [ComPinConfig(False, False)]),
        (DisplaySize96x16, [ComPinConfig(False, False)]),
        (DisplaySize72x40, [ComPinConfig(True, False), InternalIref(True, True)]),
        (DisplaySize64x48, [ComPinConfig(True, False)]),
        (DisplaySize64x32, [ComPinConfig(True, False)]),
    ],
)
def test_configure_sends_model_commands(cls, expected):
    iface = RecordingInterface()
    cls().configure(iface)
    assert iface.commands == [cmd.encode() for cmd in expected]


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        DisplaySize()


def test_sizes_compare_by_type():
    assert DisplaySize128x64() == DisplaySize128x64()
    assert DisplaySize128x64() != DisplaySize128x32()