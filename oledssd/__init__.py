"""Driver for the SSD1306 monochrome OLED display controller, with buffered graphics and terminal modes."""

__version__ = "0.10.0"