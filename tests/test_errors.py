import pytest

from oledssd.errors import DisplayError, PinError


def test_display_error_carries_message():
    err = DisplayError("bus write failed")
    assert "bus write failed" in str(err)
    assert isinstance(err, Exception)


def test_pin_error_keeps_underlying_error():
    cause = OSError("line stuck")
    err = PinError(cause)
    assert err.error is cause
    assert "line stuck" in str(err)


def test_pin_error_can_be_chained():
    cause = RuntimeError("gpio")
    err = PinError(cause)
    assert err.error is cause
    with pytest.raises(PinError) as info:
        raise err from cause
    assert info.value is err
    assert info.value.error is cause
    assert info.value.__cause__ is cause
    assert "gpio" in str(info.value)


def test_error_kinds_are_distinct():
    pin_err = PinError(OSError("x"))
    display_err = DisplayError("y")
    assert "x" in str(pin_err)
    assert "y" in str(display_err)
    assert not isinstance(pin_err, DisplayError)
    assert not isinstance(display_err, PinError)
    with pytest.raises(PinError) as info:
        try:
            raise pin_err
        except DisplayError:
            raise AssertionError("pin error caught as display error")
    assert info.value is pin_err