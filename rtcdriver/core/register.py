"""Register abstraction layer.

Two halves live here:

- ``Field`` / ``RegisterFieldSpec`` describe where each clock field sits in a
  chip's register map and how its BCD tens digit is masked. Chip packages
  build an immutable table of these from the datasheet.
- ``Register`` / ``RegisterFile`` are byte-wide storage used by the chip
  emulator to model the device side of the bus.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from rtcdriver.utils.consts import ConstUtils


class Field(IntEnum):
    """Semantic clock/calendar field tag."""

    SECONDS = 0
    MINUTES = 1
    HOURS = 2
    WEEKDAY = 3
    DAY = 4
    MONTH = 5
    YEAR = 6


@dataclass(frozen=True)
class RegisterFieldSpec:
    """Datasheet facts for one clock field.

    ``tens_mask`` isolates the BCD tens digit inside the register byte. Its
    width differs per field because the chip shares the upper bits with
    control flags such as the start bit or the leap-year flag.
    A ``tens_mask`` of ``None`` means the register is not BCD decoded.
    """

    field: Field
    address: int
    tens_mask: Optional[int]
    low: int
    high: int

    @property
    def name(self) -> str:
        return self.field.name.lower()

    def in_range(self, value: int) -> bool:
        return self.low <= value <= self.high


class Register(ABC):
    """Base class for a byte-wide device register.

    For plain storage use SimpleRegister. Registers with hardware side
    effects (read-only status bits, self-clearing flags) subclass and
    override read() / write().
    """

    def __init__(self, address: int, reset_value: int = 0):
        """Initialize a register.

        Args:
            address: Register address inside the device
            reset_value: Value to return to on reset()
        """
        self.address = address
        self.reset_value = reset_value & ConstUtils.MASK_8_BITS
        self.value = self.reset_value

    @abstractmethod
    def read(self) -> int:
        """Return the byte a bus master would see."""
        ...

    @abstractmethod
    def write(self, val: int) -> None:
        """Update register state from a bus write."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset to power-on state."""
        ...


class SimpleRegister(Register):
    """A register that is just storage (no side effects)."""

    def read(self) -> int:
        return self.value

    def write(self, val: int) -> None:
        self.value = val & ConstUtils.MASK_8_BITS

    def reset(self) -> None:
        self.value = self.reset_value


class RegisterFile:
    """Storage and dispatch for a set of byte registers.

    Maps address -> Register. Reads of unmapped addresses return 0x00 and
    writes to them are ignored, which is how the chip treats its reserved
    locations.
    """

    def __init__(self):
        self._registers: dict[int, Register] = {}

    def add(self, reg: Register) -> None:
        """Add a register to this file.

        Raises:
            ValueError: If a register already exists at this address
        """
        if reg.address in self._registers:
            raise ValueError(f"Register at address 0x{reg.address:02X} already exists")
        self._registers[reg.address] = reg

    def read(self, address: int) -> int:
        if address in self._registers:
            return self._registers[address].read()
        return 0

    def write(self, address: int, val: int) -> None:
        if address in self._registers:
            self._registers[address].write(val)

    def reset(self) -> None:
        """Reset all registers."""
        for reg in self._registers.values():
            reg.reset()

    def get_register(self, address: int) -> Optional[Register]:
        """Return the register at address, or None."""
        return self._registers.get(address)
