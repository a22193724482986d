"""Display brightness levels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Brightness:
    """A display brightness: a pre-charge period paired with a contrast value.

    ``precharge`` is the phase 2 argument of the Set Pre-Charge Period command
    and must lie between 1 and 15. ``contrast`` is the argument of the Set
    Contrast Control command and must lie between 0 and 255.
    """

    precharge: int
    contrast: int

    DIMMEST: ClassVar[Brightness]
    DIM: ClassVar[Brightness]
    NORMAL: ClassVar[Brightness]
    BRIGHT: ClassVar[Brightness]
    BRIGHTEST: ClassVar[Brightness]

    def __post_init__(self) -> None:
        if not 0 < self.precharge <= 15:
            raise ValueError("Precharge value must be between 1 and 15")
        if not 0 <= self.contrast <= 0xFF:
            raise ValueError("Contrast value must be between 0 and 255")

    @classmethod
    def custom(cls, precharge: int, contrast: int) -> Brightness:
        """Create a brightness from a pre-charge period and a contrast value."""
        return cls(precharge, contrast)


Brightness.DIMMEST = Brightness.custom(0x1, 0x00)
Brightness.DIM = Brightness.custom(0x2, 0x2F)
Brightness.NORMAL = Brightness.custom(0x2, 0x5F)
Brightness.BRIGHT = Brightness.custom(0x2, 0x9F)
Brightness.BRIGHTEST = Brightness.custom(0x2, 0xFF)