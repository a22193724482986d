import pytest

from oledssd.errors import DisplayError
from oledssd.interface import I2CDisplayInterface, I2CInterface, WriteOnlyDataCommand


class FakeBus:
    def __init__(self):
        self.writes = []

    def write(self, address, data):
        self.writes.append((address, bytes(data)))


class FailingBus:
    def write(self, address, data):
        raise OSError("no ack")


def test_default_address():
    iface = I2CDisplayInterface.new(FakeBus())
    assert iface.address == 0x3C
    assert iface.data_byte == 0x40


def test_alternate_address():
    assert I2CDisplayInterface.new_alternate_address(FakeBus()).address == 0x3D


def test_custom_address():
    bus = FakeBus()
    iface = I2CDisplayInterface.new_custom_address(bus, 0x2A)
    assert iface.address == 0x2A
    assert iface.i2c is bus


def test_send_data_prefixed_with_data_byte():
    bus = FakeBus()
    iface = I2CDisplayInterface.new(bus)
    iface.send_data(bytearray([1, 2, 3]))
    assert bus.writes == [(0x3C, bytes([0x40, 1, 2, 3]))]


def test_commands_and_data_use_different_control_bytes():
    bus = FakeBus()
    iface = I2CDisplayInterface.new(bus)
    iface.send_commands(bytes([0xAE]))
    iface.send_data(bytes([0xAE]))
    (cmd_addr, cmd), (data_addr, data) = bus.writes
    assert cmd_addr == data_addr == 0x3C
    assert cmd[1:] == data[1:] == bytes([0xAE])
    assert cmd[0] != data[0]
    assert cmd[0] == 0x00


def test_bus_failure_raises_display_error():
    iface = I2CDisplayInterface.new(FailingBus())
    with pytest.raises(DisplayError) as info:
        iface.send_commands(bytes([0xE3]))
    assert isinstance(info.value.__cause__, OSError)


def test_bad_address_rejected():
    with pytest.raises(ValueError):
        I2CDisplayInterface.new_custom_address(FakeBus(), 256)


def test_interface_base_is_abstract():
    with pytest.raises(TypeError):
        WriteOnlyDataCommand()


def test_i2c_interface_is_a_data_command_channel():
    iface = I2CInterface(FakeBus(), 0x3C)
    assert isinstance(iface, WriteOnlyDataCommand)
    assert iface.data_byte == 0x40