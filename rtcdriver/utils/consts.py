"""Constants and utility values shared across chip drivers."""


class ConstUtils:
    """Bitwise masks used by the register codecs."""

    MASK_8_BITS = 0xFF
    """Register width: every RTC register is one byte."""

    MASK_7_BITS = 0x7F
    """7-bit mask: I2C device addresses and sign-magnitude payloads."""

    LOW_NIBBLE = 0x0F
    """BCD units digit."""

    NIBBLE_SHIFT = 4
    """Shift between the units and tens digit of a packed BCD byte."""


# Two-digit years on the chip are offset from this century.
CENTURY_BASE = 2000


def is_valid_i2c_address(address: int) -> bool:
    """Return True if address fits the 7-bit I2C address space."""
    return 0 <= address <= ConstUtils.MASK_7_BITS
