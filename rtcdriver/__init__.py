"""MCP7940N real-time clock driver.

This package drives battery-backed RTC chips over a two-wire (I2C) bus:
BCD register codec, one-time chip bring-up, stop/write/restart oscillator
choreography and date validation.

Architecture:
- core: chip-agnostic pieces (BCD codec, register specs, validation, errors)
- interfaces: contracts for bus transports and RTC drivers
- bus: transports (smbus2 on Linux, an in-process simulated bus)
- mcp7940: the MCP7940N driver, register map and emulator

Getting started:
    from rtcdriver import SMBusTransport, create_rtc

    with SMBusTransport(1) as bus:
        rtc = create_rtc("mcp7940n", bus)
        rtc.set_time(9, 5, 30)
        print(rtc.read_time())
"""

# Core abstractions
from rtcdriver.core.chip import create_rtc, list_available_chips
from rtcdriver.core.exceptions import (
    BusError,
    ConfigurationError,
    InvalidRangeError,
    RtcError,
)
from rtcdriver.core.register import Field
from rtcdriver.core.snapshot import TimeDateSnapshot
from rtcdriver.interfaces.rtc import RealTimeClock

# Transports
from rtcdriver.bus import SimulatedBus, SMBusTransport

# Chip implementations (auto-register when imported)
from rtcdriver.mcp7940 import MCP7940Emulator, MCP7940N

__all__ = [
    # Core
    "Field",
    "RealTimeClock",
    "TimeDateSnapshot",
    # Errors
    "RtcError",
    "BusError",
    "ConfigurationError",
    "InvalidRangeError",
    # Chip creation
    "create_rtc",
    "list_available_chips",
    # Transports
    "SimulatedBus",
    "SMBusTransport",
    # Concrete chips
    "MCP7940N",
    "MCP7940Emulator",
]
