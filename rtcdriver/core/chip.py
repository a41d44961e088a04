"""Chip registry and factory.

Provides discovery and instantiation of RTC drivers that are registered
globally during module initialization.

Chip packages call register_chip() in their __init__.py, so importing the
package is enough to make the chip available to create_rtc().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from rtcdriver.interfaces.bus import BusTransport
    from rtcdriver.interfaces.rtc import RealTimeClock


class ChipRegistry:
    """Registry of available RTC driver implementations.

    THREAD SAFETY: Not thread-safe. All chip registration should happen
    during module initialization before any threads are spawned.
    """

    def __init__(self):
        self._chips: dict[str, Type[RealTimeClock]] = {}

    def register(self, name: str, driver_class: Type[RealTimeClock]) -> None:
        """Register a driver implementation under a chip name."""
        key = name.lower()
        if key in self._chips:
            raise ValueError(f"Chip '{name}' already registered")
        self._chips[key] = driver_class

    def get(self, name: str) -> Type[RealTimeClock]:
        """Get a driver class by chip name (case-insensitive)."""
        key = name.lower()
        if key not in self._chips:
            raise ValueError(
                f"Unknown chip '{name}'. Available: {list(self._chips.keys())}"
            )
        return self._chips[key]

    def list_chips(self) -> list[str]:
        """List all registered chip names."""
        return list(self._chips.keys())

    def create(self, name: str, bus: BusTransport, **kwargs: Any) -> RealTimeClock:
        """Instantiate a driver for the named chip on the given bus."""
        driver_class = self.get(name)
        return driver_class(bus, **kwargs)


# Global registry
_REGISTRY = ChipRegistry()


def register_chip(name: str, driver_class: Type[RealTimeClock]) -> None:
    """Register a chip driver globally."""
    _REGISTRY.register(name, driver_class)


def create_rtc(name: str, bus: BusTransport, **kwargs: Any) -> RealTimeClock:
    """Create a driver instance for the named chip."""
    return _REGISTRY.create(name, bus, **kwargs)


def list_available_chips() -> list[str]:
    """List all registered chips."""
    return _REGISTRY.list_chips()
