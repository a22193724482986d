"""Display rotation."""

from enum import Enum


class DisplayRotation(Enum):
    """Clockwise rotation of the display, in degrees."""

    ROTATE_0 = 0
    ROTATE_90 = 90
    ROTATE_180 = 180
    ROTATE_270 = 270