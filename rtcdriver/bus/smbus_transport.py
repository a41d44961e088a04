"""Linux I2C transport built on smbus2.

Each write() and read() is issued as a single I2C_RDWR message, so the
register pointer write and the data read are two separate transactions
exactly as the driver expects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from smbus2 import SMBus, i2c_msg

from rtcdriver.core.exceptions import BusError

logger = logging.getLogger(__name__)


class SMBusTransport:
    """BusTransport over /dev/i2c-<bus_number>.

    The device node is opened lazily on first use and closed by close() or
    by leaving a ``with`` block.
    """

    def __init__(
        self,
        bus_number: int = 1,
        bus_factory: Optional[Callable[[int], Any]] = None,
    ):
        self.bus_number = bus_number
        self._bus_factory = bus_factory or SMBus
        self._bus: Optional[Any] = None

    def __enter__(self) -> SMBusTransport:
        bus = self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> Any:
        """Open the device node if needed and return the smbus2 handle."""
        if self._bus is not None:
            return self._bus
        try:
            self._bus = self._bus_factory(self.bus_number)
        except OSError as exc:
            raise BusError(
                0,
                "open",
                message=f"Cannot open I2C bus {self.bus_number}: {exc}",
                details={"bus": self.bus_number},
            ) from exc
        logger.debug(f"Opened I2C bus {self.bus_number}")
        return self._bus

    def close(self) -> None:
        if self._bus is not None:
            try:
                self._bus.close()
            finally:
                self._bus = None

    @property
    def is_open(self) -> bool:
        return self._bus is not None

    def write(self, address: int, data: bytes) -> None:
        msg = i2c_msg.write(address, list(data))
        self._transfer(address, "write", msg)

    def read(self, address: int, count: int) -> bytes:
        msg = i2c_msg.read(address, count)
        self._transfer(address, "read", msg)
        return bytes(list(msg))

    def _transfer(self, address: int, operation: str, msg: Any) -> None:
        bus = self.open()
        try:
            bus.i2c_rdwr(msg)
        except OSError as exc:
            logger.error(f"I2C {operation} at 0x{address:02X} failed: {exc}")
            raise BusError(
                address, operation, details={"bus": self.bus_number, "errno": exc.errno}
            ) from exc
