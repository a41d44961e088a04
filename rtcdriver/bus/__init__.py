"""Bus transports."""

from .simulated import BusTransaction, SimulatedBus
from .smbus_transport import SMBusTransport

__all__ = ["BusTransaction", "SimulatedBus", "SMBusTransport"]
