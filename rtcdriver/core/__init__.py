"""Core modules for the driver.

Chip-agnostic infrastructure:
- bcd: binary-coded-decimal codec
- register: field tags, per-field register specs, byte register storage
- validation: day-of-month clamp and optional range checks
- snapshot: raw bytes from the last burst read
- chip: driver registry and factory
- exceptions: error taxonomy
"""

from rtcdriver.core.bcd import decode, decode_field, encode
from rtcdriver.core.chip import ChipRegistry, create_rtc, list_available_chips
from rtcdriver.core.exceptions import (
    BusError,
    ConfigurationError,
    InvalidRangeError,
    RtcError,
)
from rtcdriver.core.register import (
    Field,
    Register,
    RegisterFieldSpec,
    RegisterFile,
    SimpleRegister,
)
from rtcdriver.core.snapshot import TimeDateSnapshot
from rtcdriver.core.validation import check_range, clamp_day, is_leap_year

__all__ = [
    # BCD codec
    "encode",
    "decode",
    "decode_field",
    # Register abstractions
    "Field",
    "RegisterFieldSpec",
    "Register",
    "SimpleRegister",
    "RegisterFile",
    # Validation
    "clamp_day",
    "is_leap_year",
    "check_range",
    # Snapshot
    "TimeDateSnapshot",
    # Errors
    "RtcError",
    "BusError",
    "ConfigurationError",
    "InvalidRangeError",
    # Chip registry
    "ChipRegistry",
    "create_rtc",
    "list_available_chips",
]
