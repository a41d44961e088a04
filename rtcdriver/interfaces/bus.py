"""Bus transport protocol for two-wire (I2C) devices.

A BusTransport moves raw bytes to and from a device address. It knows
nothing about registers: selecting a register is done by writing its
address as the first byte, after which the chip's internal pointer
auto-increments on every byte transferred.

PROTOCOL CONTRACT:
- Each call is one complete bus transaction (START ... STOP)
- A call either fully succeeds or raises BusError
- Transports never retry; retry policy belongs to the caller
"""

from __future__ import annotations

from typing import Protocol


class BusTransport(Protocol):
    """Synchronous request/response bus (structural subtyping)."""

    def write(self, address: int, data: bytes) -> None:
        """Write data to the device at a 7-bit address.

        Raises:
            BusError: If the transfer fails
        """
        ...

    def read(self, address: int, count: int) -> bytes:
        """Read count bytes from the device at a 7-bit address.

        Returns:
            Exactly count bytes

        Raises:
            BusError: If the transfer fails
        """
        ...


class BusDevice(Protocol):
    """Device side of a simulated bus.

    Implemented by chip emulators attached to a SimulatedBus.
    """

    def receive(self, data: bytes) -> None:
        """Accept bytes written by the bus master."""
        ...

    def transmit(self, count: int) -> bytes:
        """Return count bytes requested by the bus master."""
        ...
