# oledssd

A driver for the SSD1306 monochrome OLED display controller. It builds the
controller's command bytes, initialises the panel, and manages rotation,
mirroring, inversion and brightness. On top of the basic driver there are two
ways to draw:

- `BufferedGraphicsDisplay` (in `oledssd.buffered_graphics`) keeps a
  framebuffer in memory; you set pixels and `flush()` sends only the region
  that changed since the last flush.
- `TerminalDisplay` (in `oledssd.terminal`) needs no framebuffer and prints
  text in 8x8 character cells with a built-in font, wrapping lines and
  screens like a simple terminal.

There are no runtime dependencies.

## Installing

```
pip install oledssd
```

## Interfaces

The driver talks to the panel through any object with `send_commands(data)`
and `send_data(data)` methods; `oledssd.interface.WriteOnlyDataCommand` is
the abstract base for such objects.

For I2C, `I2CDisplayInterface.new(i2c)` wraps a bus object at the default
address 0x3C, `new_alternate_address(i2c)` uses 0x3D and
`new_custom_address(i2c, address)` takes any address. Each returns an
`I2CInterface`. The bus object only needs a `write(address, data)` method;
every transfer is prefixed with a control byte (0x00 for commands, 0x40 for
data), and an `OSError` raised by the bus is re-raised as
`oledssd.errors.DisplayError`.

## The basic driver

`oledssd.display.Ssd1306(interface, size, rotation)` offers the low-level
calls: `init()` (horizontal addressing) or `init_with_addr_mode(mode)`,
`clear()`, `draw(buffer)` for raw data, `bounded_draw(...)`,
`set_draw_area(start, end)`, `set_column`, `set_row`, `set_addr_mode`,
`set_rotation`, `set_mirror`, `set_brightness`, `set_display_on`,
`set_invert`, `dimensions()` (width and height after rotation),
`rotation()` and `release()`, which returns the interface.

`reset(rst, delay)` pulses a reset line: `rst` must provide `set_high()` and
`set_low()`, `delay` must provide `delay_ms(ms)`. Any exception from the pin
is raised as `oledssd.errors.PinError`.

## Drawing pixels

```python
from oledssd.buffered_graphics import BufferedGraphicsDisplay
from oledssd.display import Ssd1306
from oledssd.interface import I2CDisplayInterface
from oledssd.rotation import DisplayRotation
from oledssd.size import DisplaySize128x64

interface = I2CDisplayInterface.new(i2c_bus)
display = BufferedGraphicsDisplay.from_display(
    Ssd1306(interface, DisplaySize128x64(), DisplayRotation.ROTATE_0)
)
display.init()

for i in range(4):
    display.set_pixel(i, 0, True)
    display.set_pixel(i, 3, True)
    display.set_pixel(0, i, True)
    display.set_pixel(3, i, True)

display.flush()
```

`set_pixel` silently ignores positions outside the buffer. `draw_iter`
takes an iterable of `((x, y), on)` pairs and skips pixels outside the
display. `clear(on=False)` fills the whole buffer, `clear_buffer()` empties
it, and `buffer()` returns a copy of the framebuffer bytes. Nothing reaches
the screen until `flush()`.

## Printing text

```python
from oledssd.terminal import TerminalDisplay

terminal = TerminalDisplay.from_display(
    Ssd1306(interface, DisplaySize128x64(), DisplayRotation.ROTATE_0)
)
terminal.init()
terminal.clear()
terminal.write_str("Hello, world\n")
print(terminal.position())
```

`print_char(c)` handles `"\n"` (next line) and `"\r"` (back to column 0);
characters outside `!` to `~` are drawn blank. `set_position(column, row)`
moves the cursor in character cells. `write(s)` prints only the last
character of `s` and swallows terminal errors; use `write_str` to print a
whole string. The helpers `char_count(size)`, `char_to_bitmap(c)` and
`rotate_bitmap(bitmap)` are available at module level.

Errors from the terminal are subclasses of `TerminalModeError`:
`UninitializedError` when it is used before `init()`, `OutOfBoundsError` for
cursor positions off the screen, and `TerminalInterfaceError` when the
underlying interface fails.

Terminal mode supports the 128x64, 128x32, 96x16, 72x40 and 64x48 sizes;
creating a `TerminalDisplay` for 64x32 raises `ValueError`.

## Brightness and other settings

```python
from oledssd.brightness import Brightness

display.set_brightness(Brightness.BRIGHTEST)
display.set_brightness(Brightness.custom(2, 0x40))
display.set_invert(True)
display.set_rotation(DisplayRotation.ROTATE_180)
```

The predefined levels are `DIMMEST`, `DIM`, `NORMAL`, `BRIGHT` and
`BRIGHTEST`. `Brightness.custom` raises `ValueError` unless the pre-charge
is between 1 and 15 and the contrast between 0 and 255.

Supported panel sizes are 128x64, 128x32, 96x16, 72x40, 64x48 and 64x32, in
`oledssd.size`. Low-level commands live in `oledssd.command`; each command's
`encode()` returns the bytes it puts on the wire and `send(iface)` sends
them.

## What it does not do

The package contains no bus drivers: you supply the I2C bus object (or your
own `WriteOnlyDataCommand`, for example for SPI with a data/command pin). It
has no shape or font rendering beyond setting individual pixels and the
terminal's built-in character set.

## Running the tests

```
pip install -e ".[test]"
pytest
```