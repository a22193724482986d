"""Display sizes and their controller configuration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from oledssd.command import ComPinConfig, InternalIref

if TYPE_CHECKING:
    from oledssd.interface import WriteOnlyDataCommand


class DisplaySize(ABC):
    """Resolution, offsets and framebuffer size of a display variant."""

    WIDTH: ClassVar[int]
    HEIGHT: ClassVar[int]
    DRIVER_COLS: ClassVar[int] = 128
    DRIVER_ROWS: ClassVar[int] = 64
    OFFSETX: ClassVar[int] = 0
    OFFSETY: ClassVar[int] = 0

    def buffer_size(self) -> int:
        """Number of framebuffer bytes: one bit per pixel."""
        return self.WIDTH * self.HEIGHT // 8

    def new_buffer(self) -> bytearray:
        """Return a zeroed framebuffer for this display."""
        return bytearray(self.buffer_size())

    @abstractmethod
    def configure(self, iface: WriteOnlyDataCommand) -> None:
        """Send resolution and model-dependent configuration to the display."""


@dataclass(frozen=True)
class DisplaySize128x64(DisplaySize):
    """The common 128x64 variants."""

    WIDTH: ClassVar[int] = 128
    HEIGHT: ClassVar[int] = 64

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(True, False).send(iface)


@dataclass(frozen=True)
class DisplaySize128x32(DisplaySize):
    """The common 128x32 variants."""

    WIDTH: ClassVar[int] = 128
    HEIGHT: ClassVar[int] = 32

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(False, False).send(iface)


@dataclass(frozen=True)
class DisplaySize96x16(DisplaySize):
    """The common 96x16 variants."""

    WIDTH: ClassVar[int] = 96
    HEIGHT: ClassVar[int] = 16

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(False, False).send(iface)


@dataclass(frozen=True)
class DisplaySize72x40(DisplaySize):
    """The common 72x40 variants."""

    WIDTH: ClassVar[int] = 72
    HEIGHT: ClassVar[int] = 40
    OFFSETX: ClassVar[int] = 28
    OFFSETY: ClassVar[int] = 0

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(True, False).send(iface)
        InternalIref(True, True).send(iface)


@dataclass(frozen=True)
class DisplaySize64x48(DisplaySize):
    """The common 64x48 variants."""

    WIDTH: ClassVar[int] = 64
    HEIGHT: ClassVar[int] = 48
    OFFSETX: ClassVar[int] = 32
    OFFSETY: ClassVar[int] = 0

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(True, False).send(iface)


@dataclass(frozen=True)
class DisplaySize64x32(DisplaySize):
    """The common 64x32 variants."""

    WIDTH: ClassVar[int] = 64
    HEIGHT: ClassVar[int] = 32
    OFFSETX: ClassVar[int] = 32
    OFFSETY: ClassVar[int] = 0

    def configure(self, iface: WriteOnlyDataCommand) -> None:
        ComPinConfig(True, False).send(iface)