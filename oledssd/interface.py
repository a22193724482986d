"""Interfaces that carry commands and pixel data to the display."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from oledssd.errors import DisplayError

_COMMAND_CONTROL_BYTE = 0x00
_DATA_CONTROL_BYTE = 0x40
_DEFAULT_ADDRESS = 0x3C
_ALTERNATE_ADDRESS = 0x3D


class WriteOnlyDataCommand(ABC):
    """A write-only channel that distinguishes commands from display data."""

    @abstractmethod
    def send_commands(self, data: bytes) -> None:
        """Send command bytes to the controller."""

    @abstractmethod
    def send_data(self, data: bytes) -> None:
        """Send display data bytes to the controller."""


@dataclass
class I2CInterface(WriteOnlyDataCommand):
    """Sends commands and data over an I2C bus.

    The bus object must provide ``write(address, data)``. Each transfer is
    prefixed with a control byte that tells the controller whether command
    or data bytes follow. Bus failures (``OSError``) are raised as
    :class:`DisplayError`.
    """

    i2c: Any
    address: int
    data_byte: int = _DATA_CONTROL_BYTE

    def __post_init__(self) -> None:
        if not 0 <= self.address <= 0xFF:
            raise ValueError("I2C address must be between 0 and 255")
        if not 0 <= self.data_byte <= 0xFF:
            raise ValueError("Data control byte must be between 0 and 255")

    def _write(self, control: int, data: bytes) -> None:
        try:
            self.i2c.write(self.address, bytes([control]) + bytes(data))
        except OSError as exc:
            raise DisplayError(f"I2C write to 0x{self.address:02X} failed") from exc

    def send_commands(self, data: bytes) -> None:
        self._write(_COMMAND_CONTROL_BYTE, data)

    def send_data(self, data: bytes) -> None:
        self._write(self.data_byte, data)


class I2CDisplayInterface:
    """Factory for I2C interfaces preconfigured for the display."""

    @staticmethod
    def new(i2c: Any) -> I2CInterface:
        """Create an interface at the default address 0x3C."""
        return I2CDisplayInterface.new_custom_address(i2c, _DEFAULT_ADDRESS)

    @staticmethod
    def new_alternate_address(i2c: Any) -> I2CInterface:
        """Create an interface at the alternate address 0x3D."""
        return I2CDisplayInterface.new_custom_address(i2c, _ALTERNATE_ADDRESS)

    @staticmethod
    def new_custom_address(i2c: Any, address: int) -> I2CInterface:
        """Create an interface at a custom address."""
        return I2CInterface(i2c, address, _DATA_CONTROL_BYTE)