"""Tests for the MCP7940N register-level emulator."""

from datetime import datetime

import pytest

from rtcdriver.mcp7940.consts import (
    LEAP_YEAR_FLAG,
    OSCRUN,
    REG_DAY,
    REG_HOURS,
    REG_MINUTES,
    REG_MONTH,
    REG_SECONDS,
    REG_WEEKDAY,
    REG_YEAR,
    SRAM_END,
    START_RTC,
)
from rtcdriver.mcp7940.emulator import MCP7940Emulator


def load_time(emulator, seconds=0x00, minutes=0x00, hours=0x00, day=0x01, month=0x01, year=0x24):
    emulator.receive(bytes([REG_SECONDS, seconds, minutes, hours, 0x00, day, month, year]))


class TestPointer:
    def test_first_byte_sets_pointer(self, emulator):
        emulator.receive(bytes([REG_DAY]))
        assert emulator.pointer == REG_DAY

    def test_sequential_write_auto_increments(self, emulator):
        emulator.receive(bytes([REG_MINUTES, 0x12, 0x08]))

        assert emulator.peek(REG_MINUTES) == 0x12
        assert emulator.peek(REG_HOURS) == 0x08
        assert emulator.pointer == REG_HOURS + 1

    def test_burst_read_auto_increments(self, emulator):
        load_time(emulator, seconds=0x15, minutes=0x30, hours=0x12)

        emulator.receive(bytes([REG_SECONDS]))
        data = emulator.transmit(3)

        assert data == bytes([0x15, 0x30, 0x12])

    def test_pointer_wraps_at_end_of_sram(self, emulator):
        emulator.receive(bytes([SRAM_END, 0xAA, 0xBB]))

        assert emulator.peek(SRAM_END) == 0xAA
        assert emulator.peek(REG_SECONDS) == 0xBB

    def test_empty_write_is_ignored(self, emulator):
        emulator.receive(bytes([REG_YEAR]))
        emulator.receive(b"")
        assert emulator.pointer == REG_YEAR


class TestStatusBits:
    def test_oscrun_follows_start_bit(self, emulator):
        assert not emulator.peek(REG_WEEKDAY) & OSCRUN

        emulator.poke(REG_SECONDS, START_RTC)
        assert emulator.peek(REG_WEEKDAY) & OSCRUN

    def test_oscrun_is_read_only(self, emulator):
        emulator.poke(REG_WEEKDAY, 0xFF)
        assert emulator.peek(REG_WEEKDAY) == 0xFF & ~OSCRUN

    def test_leap_year_flag_tracks_year(self, emulator):
        emulator.poke(REG_MONTH, 0x02)
        emulator.poke(REG_YEAR, 0x24)
        assert emulator.peek(REG_MONTH) == 0x02 | LEAP_YEAR_FLAG

        emulator.poke(REG_YEAR, 0x25)
        assert emulator.peek(REG_MONTH) == 0x02


class TestTimekeeping:
    def test_tick_does_nothing_while_stopped(self, emulator):
        load_time(emulator, seconds=0x10)
        emulator.tick(5)
        assert emulator.peek(REG_SECONDS) == 0x10

    def test_tick_advances_and_keeps_start_bit(self, emulator):
        load_time(emulator, seconds=START_RTC | 0x58)

        emulator.tick(3)

        assert emulator.peek(REG_SECONDS) == START_RTC | 0x01
        assert emulator.peek(REG_MINUTES) == 0x01

    def test_tick_rolls_over_year_end(self, emulator):
        load_time(
            emulator, seconds=START_RTC | 0x59, minutes=0x59, hours=0x23,
            day=0x31, month=0x12, year=0x24,
        )

        emulator.tick()

        assert emulator.current_datetime() == datetime(2025, 1, 1, 0, 0, 0)

    def test_tick_advances_weekday(self, emulator):
        load_time(emulator, seconds=START_RTC | 0x59, minutes=0x59, hours=0x23)
        emulator.poke(REG_WEEKDAY, 0x08 | 7)

        emulator.tick()

        assert emulator.peek(REG_WEEKDAY) & 0x07 == 1
        assert emulator.peek(REG_WEEKDAY) & 0x08

    def test_negative_tick_rejected(self, emulator):
        with pytest.raises(ValueError):
            emulator.tick(-1)

    def test_tick_outside_calendar_keeps_time_counting(self, emulator):
        emulator.poke(REG_DAY, 0x00)
        emulator.poke(REG_MINUTES, 0x59)
        emulator.poke(REG_SECONDS, START_RTC | 0x58)

        emulator.tick(3)

        assert emulator.peek(REG_SECONDS) == START_RTC | 0x01
        assert emulator.peek(REG_MINUTES) == 0x00
        assert emulator.peek(REG_HOURS) == 0x01
        assert emulator.peek(REG_DAY) == 0x00

    def test_tick_rolls_over_century(self, emulator):
        load_time(
            emulator, seconds=START_RTC | 0x59, minutes=0x59, hours=0x23,
            day=0x31, month=0x12, year=0x99,
        )

        emulator.tick()

        assert emulator.peek(REG_YEAR) == 0x00
        assert emulator.current_datetime() == datetime(2000, 1, 1, 0, 0, 0)


class TestPowerOn:
    def test_date_registers_start_at_one(self, emulator):
        assert emulator.peek(REG_WEEKDAY) == 0x01
        assert emulator.peek(REG_DAY) == 0x01
        assert emulator.peek(REG_MONTH) & ~LEAP_YEAR_FLAG == 0x01
        assert emulator.peek(REG_YEAR) == 0x00
        assert emulator.current_datetime() == datetime(2000, 1, 1, 0, 0, 0)

    def test_fresh_chip_ticks_once_started(self, emulator):
        emulator.poke(REG_SECONDS, START_RTC)

        emulator.tick(61)

        assert emulator.current_datetime() == datetime(2000, 1, 1, 0, 1, 1)


def test_reset_restores_power_on_values_and_stops_oscillator():
    emulator = MCP7940Emulator()
    load_time(emulator, seconds=START_RTC | 0x30, day=0x15)
    emulator.poke(REG_WEEKDAY, 0x0B)

    emulator.reset()

    assert not emulator.oscillator_running
    assert emulator.peek(REG_WEEKDAY) == 0x01
    assert emulator.peek(REG_DAY) == 0x01
    assert emulator.peek(REG_SECONDS) == 0x00
    assert emulator.pointer == 0
