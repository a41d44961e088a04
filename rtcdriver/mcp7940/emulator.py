"""Register-level software model of the MCP7940N.

The emulator is the device side of a SimulatedBus. It reproduces the parts
of the chip the driver depends on:

- A register pointer set by the first byte of every write, auto-incrementing
  after each byte transferred (wrapping inside 0x00-0x5F)
- The ST bit in the seconds register gating timekeeping
- OSCRUN (weekday bit 5) and LPYR (month bit 5) as read-only status bits
- Time advancing only through tick(), so tests stay deterministic

Register contents are kept exactly as written; the emulator never corrects
out-of-range values, matching the silicon.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from rtcdriver.core.bcd import decode_field, encode
from rtcdriver.core.register import Field, Register, RegisterFile, SimpleRegister
from rtcdriver.core.validation import is_leap_year
from rtcdriver.utils.consts import CENTURY_BASE, ConstUtils
from .consts import (
    FIELD_SPECS,
    LEAP_YEAR_FLAG,
    OSCRUN,
    REG_DAY,
    REG_MONTH,
    REG_SECONDS,
    REG_WEEKDAY,
    REG_YEAR,
    SRAM_END,
    START_RTC,
    WEEKDAY_MASK,
)

REGISTER_SPACE = SRAM_END + 1
YEARS_PER_CENTURY = 100

# Power-on values from the datasheet; every other register starts at 0x00.
POWER_ON_VALUES = {REG_WEEKDAY: 0x01, REG_DAY: 0x01, REG_MONTH: 0x01}


class StatusBitRegister(SimpleRegister):
    """Register whose masked bits are driven by the chip, not the bus.

    Writes to the status bits are ignored; reads report them from a
    callback so they always reflect current chip state.
    """

    def __init__(
        self,
        address: int,
        status_mask: int,
        status: Callable[[], bool],
        reset_value: int = 0,
    ):
        super().__init__(address, reset_value & ~status_mask)
        self._status_mask = status_mask
        self._status = status

    def read(self) -> int:
        flags = self._status_mask if self._status() else 0
        return (self.value & ~self._status_mask) | flags

    def write(self, val: int) -> None:
        super().write(val & ~self._status_mask)


class MCP7940Emulator:
    """In-memory MCP7940N implementing the BusDevice protocol."""

    def __init__(self):
        self._pointer = 0
        self.registers = RegisterFile()
        for address in range(REGISTER_SPACE):
            self.registers.add(self._make_register(address))

    def _make_register(self, address: int) -> Register:
        reset_value = POWER_ON_VALUES.get(address, 0)
        if address == REG_WEEKDAY:
            return StatusBitRegister(
                address, OSCRUN, lambda: self.oscillator_running, reset_value
            )
        if address == REG_MONTH:
            return StatusBitRegister(address, LEAP_YEAR_FLAG, self._is_leap_year, reset_value)
        return SimpleRegister(address, reset_value)

    # BusDevice protocol -----------------------------------------------------

    def receive(self, data: bytes) -> None:
        """First byte selects the register; the rest are written sequentially."""
        if not data:
            return
        self._pointer = data[0] % REGISTER_SPACE
        for byte in data[1:]:
            self.registers.write(self._pointer, byte)
            self._advance()

    def transmit(self, count: int) -> bytes:
        out = bytearray()
        for _ in range(count):
            out.append(self.registers.read(self._pointer))
            self._advance()
        return bytes(out)

    # Inspection helpers -----------------------------------------------------

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def oscillator_running(self) -> bool:
        return bool(self.peek(REG_SECONDS) & START_RTC)

    def peek(self, address: int) -> int:
        """Read a register without moving the bus pointer."""
        return self.registers.read(address)

    def poke(self, address: int, value: int) -> None:
        """Write a register without moving the bus pointer."""
        self.registers.write(address, value)

    def reset(self) -> None:
        """Power-on reset: registers back to their power-on values, oscillator stopped."""
        self.registers.reset()
        self._pointer = 0

    def current_datetime(self) -> datetime:
        """Decode the timekeeping registers into a datetime.

        Raises:
            ValueError: If the registers do not hold a valid date
        """
        values = {
            field: decode_field(self.peek(spec.address), spec)
            for field, spec in FIELD_SPECS.items()
            if spec.tens_mask is not None
        }
        return datetime(
            CENTURY_BASE + values[Field.YEAR],
            values[Field.MONTH],
            values[Field.DAY],
            values[Field.HOURS],
            values[Field.MINUTES],
            values[Field.SECONDS],
        )

    def tick(self, seconds: int = 1) -> None:
        """Advance timekeeping by whole seconds if the oscillator runs.

        Date registers that do not form a calendar date (day 0, 31 April...)
        are left as they are while the time of day keeps counting.
        """
        if seconds < 0:
            raise ValueError("seconds must be >= 0")
        if seconds == 0 or not self.oscillator_running:
            return

        try:
            before = self.current_datetime()
        except ValueError:
            self._tick_time_of_day(seconds)
            return

        after = before + timedelta(seconds=seconds)
        self._store_fields(
            {
                Field.SECONDS: after.second,
                Field.MINUTES: after.minute,
                Field.HOURS: after.hour,
                Field.DAY: after.day,
                Field.MONTH: after.month,
                Field.YEAR: (after.year - CENTURY_BASE) % YEARS_PER_CENTURY,
            }
        )
        self._advance_weekday((after.date() - before.date()).days)

    # Private helpers --------------------------------------------------------

    def _advance(self) -> None:
        self._pointer = (self._pointer + 1) % REGISTER_SPACE

    def _is_leap_year(self) -> bool:
        year = decode_field(self.peek(REG_YEAR), FIELD_SPECS[Field.YEAR])
        return is_leap_year(year)

    def _tick_time_of_day(self, seconds: int) -> None:
        hours, minutes, secs = (
            decode_field(self.peek(FIELD_SPECS[f].address), FIELD_SPECS[f])
            for f in (Field.HOURS, Field.MINUTES, Field.SECONDS)
        )
        total = hours * 3600 + minutes * 60 + secs + seconds
        self._store_fields(
            {
                Field.SECONDS: total % 60,
                Field.MINUTES: total // 60 % 60,
                Field.HOURS: total // 3600 % 24,
            }
        )

    def _store_fields(self, updates: dict[Field, int]) -> None:
        # Upper flag bits of each register are preserved; only digits change.
        for field, number in updates.items():
            spec = FIELD_SPECS[field]
            digits = (spec.tens_mask or 0) | ConstUtils.LOW_NIBBLE
            current = self.registers.read(spec.address)
            self.registers.write(spec.address, (current & ~digits) | encode(number))

    def _advance_weekday(self, days_elapsed: int) -> None:
        if not days_elapsed:
            return
        current = self.registers.read(REG_WEEKDAY)
        day_number = current & WEEKDAY_MASK
        if day_number:
            day_number = (day_number - 1 + days_elapsed) % 7 + 1
            self.registers.write(REG_WEEKDAY, (current & ~WEEKDAY_MASK) | day_number)
