"""RealTimeClock abstraction - behavioral contract.

A RealTimeClock is a driver bound to one chip on one bus. Every concrete
chip driver must implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from rtcdriver.core.snapshot import TimeDateSnapshot


class RealTimeClock(ABC):
    """Base class for RTC chip drivers.

    All values cross this interface as plain decimal integers; BCD and
    oscillator handling are the driver's concern.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable chip name (e.g., 'MCP7940N')."""
        ...

    @property
    @abstractmethod
    def initialized(self) -> bool:
        """True once the bring-up sequence has run on this driver."""
        ...

    @property
    @abstractmethod
    def snapshot(self) -> TimeDateSnapshot:
        """Register bytes from the most recent burst read."""
        ...

    @abstractmethod
    def begin(self) -> None:
        """Run the one-time chip bring-up sequence (idempotent)."""
        ...

    @abstractmethod
    def read_all(self) -> TimeDateSnapshot:
        """Burst-read every time/date register into the snapshot."""
        ...

    # Combined time / date ---------------------------------------------------

    @abstractmethod
    def set_time(self, hours: int, minutes: int, seconds: int) -> None:
        """Set hours (0-23), minutes (0-59) and seconds (0-59)."""
        ...

    @abstractmethod
    def read_time(self) -> str:
        """Return the time as 'HH:MM:SS'."""
        ...

    @abstractmethod
    def set_date(self, day: int, month: int, year: int) -> None:
        """Set day (1-31), month (1-12) and two-digit year (0-99)."""
        ...

    @abstractmethod
    def read_date(self) -> str:
        """Return the date as 'DD/MM/YY'."""
        ...

    @abstractmethod
    def read_datetime(self) -> datetime:
        """Return the chip time as a naive datetime."""
        ...

    @abstractmethod
    def set_datetime(self, value: datetime) -> None:
        """Write date and time from a naive datetime."""
        ...

    # Optional chip features -------------------------------------------------

    def read_trim(self) -> int:
        """Read the oscillator digital trim (override in subclasses)."""
        raise NotImplementedError(f"{self.name} has no oscillator trim")

    def write_trim(self, steps: int) -> None:
        """Write the oscillator digital trim (override in subclasses)."""
        raise NotImplementedError(f"{self.name} has no oscillator trim")

    # Single fields ----------------------------------------------------------

    @abstractmethod
    def write_seconds(self, seconds: int) -> None: ...

    @abstractmethod
    def read_seconds(self) -> int: ...

    @abstractmethod
    def write_minutes(self, minutes: int) -> None: ...

    @abstractmethod
    def read_minutes(self) -> int: ...

    @abstractmethod
    def write_hours(self, hours: int) -> None: ...

    @abstractmethod
    def read_hours(self) -> int: ...

    @abstractmethod
    def write_day(self, day: int) -> None: ...

    @abstractmethod
    def read_day(self) -> int: ...

    @abstractmethod
    def write_month(self, month: int) -> None: ...

    @abstractmethod
    def read_month(self) -> int: ...

    @abstractmethod
    def write_year(self, year: int) -> None: ...

    @abstractmethod
    def read_year(self) -> int: ...
