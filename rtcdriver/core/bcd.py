"""Binary-coded-decimal codec for RTC registers.

Each decimal digit occupies its own nibble: 59 is stored as 0x59. The tens
digit shares its byte with chip flags, so decoding takes the field's tens
mask rather than assuming the whole upper nibble.
"""

from __future__ import annotations

from rtcdriver.core.register import RegisterFieldSpec
from rtcdriver.utils.consts import ConstUtils


def encode(value: int) -> int:
    """Pack a decimal 0..99 into one BCD byte.

    No range check is done here; values above 99 overflow the tens nibble.
    """
    tens, units = divmod(value, 10)
    return (tens << ConstUtils.NIBBLE_SHIFT) | units


def decode(byte: int, mask: int) -> int:
    """Unpack a BCD byte, keeping only the tens bits selected by mask.

    Passing the wrong mask gives a plausible but wrong number; nothing
    here can detect that.
    """
    units = byte & ConstUtils.LOW_NIBBLE
    tens = (byte & mask) >> ConstUtils.NIBBLE_SHIFT
    return tens * 10 + units


def decode_field(byte: int, spec: RegisterFieldSpec) -> int:
    """Decode a register byte with the tens mask of its own field."""
    if spec.tens_mask is None:
        raise ValueError(f"{spec.name} register is not BCD encoded")
    return decode(byte, spec.tens_mask)
