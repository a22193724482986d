"""Errors raised while talking to the display."""

from __future__ import annotations


class DisplayError(Exception):
    """Communication with the display controller failed."""


class PinError(Exception):
    """Driving a control pin, such as the reset line, failed."""

    def __init__(self, error: object) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return f"pin error: {self.error}"