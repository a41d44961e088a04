"""MCP7940N register map and bit constants.

Values are fixed by the Microchip MCP7940N datasheet and must match the
silicon exactly.
"""

from rtcdriver.core.register import Field, RegisterFieldSpec

CHIP_ADDRESS = 0x6F
"""Fixed 7-bit I2C address of the MCP7940N."""

# Register addresses
REG_SECONDS = 0x00
REG_MINUTES = 0x01
REG_HOURS = 0x02
REG_WEEKDAY = 0x03
REG_DAY = 0x04
REG_MONTH = 0x05
REG_YEAR = 0x06
REG_CONTROL = 0x07
REG_OSCTRIM = 0x08
REG_PWR_UP_MINUTE = 0x1C
"""Minute of the last power-up timestamp, latched while PWRFAIL is set."""

TIMEKEEPING_REGISTER_COUNT = 7
"""Seconds through year, read in one burst."""

SRAM_END = 0x5F
"""Last byte of battery-backed SRAM; the register map ends here."""

# Seconds register
START_RTC = 0x80
"""ST bit: oscillator enabled."""
STOP_RTC = 0x00
"""Value written to the seconds register to halt the oscillator."""

# Weekday register flags
OSCRUN = 0x20
"""Read-only: oscillator is running."""
PWRFAIL = 0x10
"""Power failure timestamp is valid."""
ENABLE_BATTERY_BACKUP = 0x08
"""VBATEN: switch to the backup battery when main power drops."""
WEEKDAY_MASK = 0x07

# Month register
LEAP_YEAR_FLAG = 0x20
"""Read-only: the current year register value is a leap year."""

# Control register
CONTROL_SQWEN = 0x40
CONTROL_EXTOSC = 0x08
CONTROL_SQWFS_32KHZ = 0x03
CONTROL_BRING_UP = 0x43
"""Control value written during bring-up by the board vendor's driver."""

# Oscillator trim register (sign-magnitude)
OSCTRIM_SIGN = 0x80
OSCTRIM_MAX = 0x7F

# Hours are kept in 24-hour mode (bit 6 clear), where HRTEN spans bits 5:4.
FIELD_SPECS: dict[Field, RegisterFieldSpec] = {
    Field.SECONDS: RegisterFieldSpec(Field.SECONDS, REG_SECONDS, 0x70, 0, 59),
    Field.MINUTES: RegisterFieldSpec(Field.MINUTES, REG_MINUTES, 0x70, 0, 59),
    Field.HOURS: RegisterFieldSpec(Field.HOURS, REG_HOURS, 0x30, 0, 23),
    Field.WEEKDAY: RegisterFieldSpec(Field.WEEKDAY, REG_WEEKDAY, None, 1, 7),
    Field.DAY: RegisterFieldSpec(Field.DAY, REG_DAY, 0x30, 1, 31),
    Field.MONTH: RegisterFieldSpec(Field.MONTH, REG_MONTH, 0x10, 1, 12),
    Field.YEAR: RegisterFieldSpec(Field.YEAR, REG_YEAR, 0xF0, 0, 99),
}
