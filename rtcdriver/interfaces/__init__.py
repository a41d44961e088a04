"""Interface abstractions for the driver.

- BusTransport: what a driver needs from the bus (write/read by address)
- BusDevice: device side of a simulated bus
- RealTimeClock: contract every chip driver implements
"""

from rtcdriver.interfaces.bus import BusDevice, BusTransport
from rtcdriver.interfaces.rtc import RealTimeClock

__all__ = [
    "BusTransport",
    "BusDevice",
    "RealTimeClock",
]
