"""MCP7940N real-time clock driver.

OSCILLATOR HANDLING
===================
The datasheet asks for the oscillator to be stopped while time or date
registers are changed, so every write follows the same choreography:

  1. stop      seconds register <- 0x00 (ST bit cleared)
  2. write     one or more BCD-encoded field registers
  3. restart   seconds register <- 0x80 | seconds

The clock loses the sub-second remainder while stopped. The seconds value
used for the restart is chosen once per driver by the configured restart
policy ("preserve" or "zero") and applied to every write path that does not
itself write a new seconds value.

BRING-UP
========
Before the first register access the chip is configured once: external
oscillator selected through the control register, battery backup enabled
in the weekday register (read-modify-write), and the oscillator started
without resetting the running seconds count. The guard is the driver's own
``initialized`` flag; a new driver instance repeats the sequence even if the
chip is already configured, which is harmless.

LOCKING
=======
Selecting a register and transferring its data are separate bus
transactions. Each driver holds a re-entrant lock for the whole of every
choreography so threads sharing one driver cannot interleave them. Drivers
on the same bus that are not this instance are not coordinated.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from rtcdriver.core.bcd import decode_field, encode
from rtcdriver.core.exceptions import BusError, InvalidRangeError, RtcError
from rtcdriver.core.register import Field, RegisterFieldSpec
from rtcdriver.core.snapshot import TimeDateSnapshot
from rtcdriver.core.validation import check_range, clamp_day
from rtcdriver.interfaces.bus import BusTransport
from rtcdriver.interfaces.rtc import RealTimeClock
from rtcdriver.utils.config_loader import RtcConfig, get_config
from rtcdriver.utils.consts import CENTURY_BASE, ConstUtils
from .consts import (
    ENABLE_BATTERY_BACKUP,
    FIELD_SPECS,
    OSCRUN,
    OSCTRIM_MAX,
    OSCTRIM_SIGN,
    PWRFAIL,
    REG_CONTROL,
    REG_OSCTRIM,
    REG_PWR_UP_MINUTE,
    REG_SECONDS,
    REG_WEEKDAY,
    START_RTC,
    STOP_RTC,
    TIMEKEEPING_REGISTER_COUNT,
    WEEKDAY_MASK,
)

logger = logging.getLogger(__name__)

CONFIG_NAME = "mcp7940"


class MCP7940N(RealTimeClock):
    """Driver for one MCP7940N on one bus."""

    def __init__(
        self,
        bus: BusTransport,
        address: Optional[int] = None,
        config: Optional[RtcConfig] = None,
    ):
        """Bind the driver to a bus.

        Args:
            bus: Transport used for every register transfer
            address: 7-bit device address; defaults to the configured one
            config: Driver settings; defaults to the bundled config.yaml
        """
        self.config = config or get_config(CONFIG_NAME)
        self._bus = bus
        self._address = self.config.chip.address if address is None else address
        self._initialized = False
        self._snapshot = TimeDateSnapshot()
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return "MCP7940N"

    @property
    def address(self) -> int:
        return self._address

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def snapshot(self) -> TimeDateSnapshot:
        return self._snapshot

    @property
    def restart_policy(self) -> str:
        return self.config.writes.restart_policy

    # Bring-up ---------------------------------------------------------------

    def begin(self) -> None:
        """Run the bring-up sequence once for this driver."""
        with self._lock:
            if self._initialized:
                return

            current_seconds = self._read_register(REG_SECONDS)
            self._write_register(REG_CONTROL, self.config.bring_up.control)

            weekday_reg = self._read_register(REG_WEEKDAY)
            self._write_register(REG_WEEKDAY, weekday_reg | ENABLE_BATTERY_BACKUP)

            self._write_register(REG_SECONDS, START_RTC | current_seconds)
            self._initialized = True
            logger.debug(
                f"{self.name} at 0x{self._address:02X} initialized "
                f"(control=0x{self.config.bring_up.control:02X})"
            )

    def _ensure_ready(self) -> None:
        if self._initialized:
            return
        if not self.config.bring_up.auto:
            raise RtcError(
                f"{self.name} not initialized; call begin() first",
                details={"address": f"0x{self._address:02X}"},
            )
        self.begin()

    # Read path --------------------------------------------------------------

    def read_all(self) -> TimeDateSnapshot:
        """Burst-read seconds through year and store them in the snapshot."""
        with self._lock:
            self._ensure_ready()
            raw = self._read_registers(REG_SECONDS, TIMEKEEPING_REGISTER_COUNT)
            self._snapshot = TimeDateSnapshot.from_bytes(raw)
            return self._snapshot

    def _read_field(self, field: Field) -> int:
        spec = FIELD_SPECS[field]
        snap = self.read_all()
        return decode_field(getattr(snap, spec.name), spec)

    def _decode_snapshot(self, snap: TimeDateSnapshot, *fields: Field) -> list[int]:
        return [
            decode_field(getattr(snap, FIELD_SPECS[f].name), FIELD_SPECS[f])
            for f in fields
        ]

    def read_time(self) -> str:
        hours, minutes, seconds = self._decode_snapshot(
            self.read_all(), Field.HOURS, Field.MINUTES, Field.SECONDS
        )
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def read_date(self) -> str:
        day, month, year = self._decode_snapshot(
            self.read_all(), Field.DAY, Field.MONTH, Field.YEAR
        )
        return f"{day:02d}/{month:02d}/{year:02d}"

    def read_datetime(self) -> datetime:
        """Return the chip time as a naive datetime in the 2000s.

        Raises:
            ValueError: If the registers do not hold a valid calendar date
        """
        year, month, day, hours, minutes, seconds = self._decode_snapshot(
            self.read_all(),
            Field.YEAR,
            Field.MONTH,
            Field.DAY,
            Field.HOURS,
            Field.MINUTES,
            Field.SECONDS,
        )
        return datetime(CENTURY_BASE + year, month, day, hours, minutes, seconds)

    def read_seconds(self) -> int:
        return self._read_field(Field.SECONDS)

    def read_minutes(self) -> int:
        return self._read_field(Field.MINUTES)

    def read_hours(self) -> int:
        return self._read_field(Field.HOURS)

    def read_day(self) -> int:
        return self._read_field(Field.DAY)

    def read_month(self) -> int:
        return self._read_field(Field.MONTH)

    def read_year(self) -> int:
        return self._read_field(Field.YEAR)

    def read_weekday(self) -> int:
        """Return the weekday number (1-7); flag bits are dropped."""
        return self.read_all().weekday & WEEKDAY_MASK

    def is_running(self) -> bool:
        """True if the chip reports its oscillator running (OSCRUN)."""
        with self._lock:
            self._ensure_ready()
            return bool(self._read_register(REG_WEEKDAY) & OSCRUN)

    def power_failed(self) -> bool:
        """True if main power dropped since the flag was last cleared (PWRFAIL)."""
        with self._lock:
            self._ensure_ready()
            return bool(self._read_register(REG_WEEKDAY) & PWRFAIL)

    def read_power_up_minute(self) -> int:
        """Return the minute at which main power was last restored.

        Only meaningful while power_failed() is True.
        """
        with self._lock:
            self._ensure_ready()
            raw = self._read_register(REG_PWR_UP_MINUTE)
        return decode_field(raw, FIELD_SPECS[Field.MINUTES])

    # Write path -------------------------------------------------------------

    def set_time(self, hours: int, minutes: int, seconds: int) -> None:
        """Set the time with the oscillator stopped across all three writes."""
        bcd_hours = self._prepare(Field.HOURS, hours)
        bcd_minutes = self._prepare(Field.MINUTES, minutes)
        bcd_seconds = self._prepare(Field.SECONDS, seconds)

        with self._lock:
            self._ensure_ready()
            self._write_register(REG_SECONDS, STOP_RTC)
            try:
                self._write_register(FIELD_SPECS[Field.HOURS].address, bcd_hours)
                self._write_register(FIELD_SPECS[Field.MINUTES].address, bcd_minutes)
            finally:
                self._write_register(REG_SECONDS, START_RTC | bcd_seconds)

    def set_date(self, day: int, month: int, year: int) -> None:
        """Set the date after correcting the day for the target month."""
        day = clamp_day(day, month, year)
        bcd_day = self._prepare(Field.DAY, day)
        bcd_month = self._prepare(Field.MONTH, month)
        bcd_year = self._prepare(Field.YEAR, year)

        with self._lock:
            self._ensure_ready()
            restart = self._halt_for_update()
            try:
                self._write_register(FIELD_SPECS[Field.DAY].address, bcd_day)
                self._write_register(FIELD_SPECS[Field.MONTH].address, bcd_month)
                self._write_register(FIELD_SPECS[Field.YEAR].address, bcd_year)
            finally:
                self._resume(restart)

    def set_datetime(self, value: datetime) -> None:
        """Write date, time and ISO weekday (Monday=1) from a datetime.

        Every field is written inside one stop/restart window, so a midnight
        rollover cannot land between the date and the time.
        """
        year = value.year - CENTURY_BASE
        if not 0 <= year <= 99:
            raise InvalidRangeError("year", value.year, CENTURY_BASE, CENTURY_BASE + 99)

        writes = [
            (FIELD_SPECS[field].address, self._prepare(field, number))
            for field, number in (
                (Field.DAY, value.day),
                (Field.MONTH, value.month),
                (Field.YEAR, year),
                (Field.HOURS, value.hour),
                (Field.MINUTES, value.minute),
            )
        ]
        bcd_seconds = self._prepare(Field.SECONDS, value.second)

        with self._lock:
            self._ensure_ready()
            self._write_register(REG_SECONDS, STOP_RTC)
            try:
                for register, bcd in writes:
                    self._write_register(register, bcd)
                flags = self._read_register(REG_WEEKDAY) & ~(WEEKDAY_MASK | OSCRUN)
                self._write_register(REG_WEEKDAY, flags | value.isoweekday())
            finally:
                self._write_register(REG_SECONDS, START_RTC | bcd_seconds)

    def write_seconds(self, seconds: int) -> None:
        """Stop, then write the new seconds with the start bit in one byte."""
        bcd_seconds = self._prepare(Field.SECONDS, seconds)
        with self._lock:
            self._ensure_ready()
            self._write_register(REG_SECONDS, STOP_RTC)
            self._write_register(REG_SECONDS, START_RTC | bcd_seconds)

    def write_minutes(self, minutes: int) -> None:
        self._write_field(Field.MINUTES, minutes)

    def write_hours(self, hours: int) -> None:
        self._write_field(Field.HOURS, hours)

    def write_day(self, day: int) -> None:
        self._write_field(Field.DAY, day)

    def write_month(self, month: int) -> None:
        self._write_field(Field.MONTH, month)

    def write_year(self, year: int) -> None:
        self._write_field(Field.YEAR, year)

    def write_weekday(self, weekday: int) -> None:
        """Set the weekday number, keeping the flag bits that share its register."""
        if self.config.validation.strict_ranges:
            check_range(FIELD_SPECS[Field.WEEKDAY], weekday)

        with self._lock:
            self._ensure_ready()
            restart = self._halt_for_update()
            try:
                flags = self._read_register(REG_WEEKDAY) & ~(WEEKDAY_MASK | OSCRUN)
                self._write_register(REG_WEEKDAY, flags | (weekday & WEEKDAY_MASK))
            finally:
                self._resume(restart)

    # Oscillator trim --------------------------------------------------------

    def read_trim(self) -> int:
        """Return the digital trim in sign-magnitude steps.

        Positive values add clock cycles (SIGN bit set), negative values
        subtract them.
        """
        with self._lock:
            self._ensure_ready()
            raw = self._read_register(REG_OSCTRIM)
        magnitude = raw & OSCTRIM_MAX
        return magnitude if raw & OSCTRIM_SIGN else -magnitude

    def write_trim(self, steps: int) -> None:
        if not -OSCTRIM_MAX <= steps <= OSCTRIM_MAX:
            raise InvalidRangeError("trim", steps, -OSCTRIM_MAX, OSCTRIM_MAX)
        raw = abs(steps) | (OSCTRIM_SIGN if steps > 0 else 0)
        with self._lock:
            self._ensure_ready()
            self._write_register(REG_OSCTRIM, raw)

    # Private helpers --------------------------------------------------------

    def _prepare(self, field: Field, value: int) -> int:
        spec: RegisterFieldSpec = FIELD_SPECS[field]
        if self.config.validation.strict_ranges:
            check_range(spec, value)
        return encode(value)

    def _write_field(self, field: Field, value: int) -> None:
        bcd = self._prepare(field, value)
        with self._lock:
            self._ensure_ready()
            restart = self._halt_for_update()
            try:
                self._write_register(FIELD_SPECS[field].address, bcd)
            finally:
                self._resume(restart)

    def _halt_for_update(self) -> int:
        """Stop the oscillator; return the seconds byte to restart with."""
        restart = 0
        if self.restart_policy == "preserve":
            restart = self._read_register(REG_SECONDS) & ~START_RTC
        self._write_register(REG_SECONDS, STOP_RTC)
        return restart

    def _resume(self, seconds_byte: int) -> None:
        self._write_register(REG_SECONDS, START_RTC | seconds_byte)

    def _write_register(self, register: int, value: int) -> None:
        value &= ConstUtils.MASK_8_BITS
        logger.debug(f"{self.name} reg 0x{register:02X} <- 0x{value:02X}")
        self._bus.write(self._address, bytes((register, value)))

    def _read_registers(self, register: int, count: int) -> bytes:
        self._bus.write(self._address, bytes((register,)))
        data = self._bus.read(self._address, count)
        if len(data) != count:
            raise BusError(
                self._address,
                "read",
                message=f"Short read from 0x{self._address:02X}: "
                f"expected {count} bytes, got {len(data)}",
            )
        return data

    def _read_register(self, register: int) -> int:
        return self._read_registers(register, 1)[0]
