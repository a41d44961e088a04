"""In-process two-wire bus.

Routes transactions by 7-bit device address to attached BusDevice models
(such as MCP7940Emulator) and keeps an ordered log of every transaction,
which is what tests inspect to check register choreography.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from rtcdriver.core.exceptions import BusError
from rtcdriver.interfaces.bus import BusDevice
from rtcdriver.utils.consts import is_valid_i2c_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusTransaction:
    """One completed transfer as seen on the wire."""

    kind: Literal["write", "read"]
    address: int
    data: bytes


class SimulatedBus:
    """Address dispatcher implementing the BusTransport protocol.

    Transfers to an address with no attached device fail with BusError,
    the way a real adapter reports a missing ACK.
    """

    def __init__(self):
        self._devices: dict[int, BusDevice] = {}
        self.transactions: list[BusTransaction] = []

    def attach(self, address: int, device: BusDevice) -> None:
        """Attach a device model at a 7-bit address.

        Raises:
            ValueError: If the address is invalid or already in use
        """
        if not is_valid_i2c_address(address):
            raise ValueError(f"Invalid 7-bit address 0x{address:X}")
        if address in self._devices:
            raise ValueError(f"Device already attached at 0x{address:02X}")
        self._devices[address] = device

    def find_device(self, address: int) -> Optional[BusDevice]:
        return self._devices.get(address)

    def write(self, address: int, data: bytes) -> None:
        device = self._require_device(address, "write")
        payload = bytes(data)
        device.receive(payload)
        self.transactions.append(BusTransaction("write", address, payload))

    def read(self, address: int, count: int) -> bytes:
        if count < 0:
            raise ValueError("count must be >= 0")
        device = self._require_device(address, "read")
        payload = device.transmit(count)
        self.transactions.append(BusTransaction("read", address, payload))
        return payload

    def writes(self, address: Optional[int] = None) -> list[bytes]:
        """Payloads of logged writes, optionally for one address only."""
        return [
            t.data
            for t in self.transactions
            if t.kind == "write" and (address is None or t.address == address)
        ]

    def clear_log(self) -> None:
        self.transactions.clear()

    def _require_device(self, address: int, operation: str) -> BusDevice:
        device = self._devices.get(address)
        if device is None:
            logger.error(f"No device acknowledged {operation} at 0x{address:02X}")
            raise BusError(address, operation, message=f"No device at 0x{address:02X}")
        return device
