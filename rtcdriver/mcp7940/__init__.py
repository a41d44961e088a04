"""Microchip MCP7940N implementation.

Importing this package registers the driver as "mcp7940n".
"""

from rtcdriver.core.chip import register_chip

from .driver import MCP7940N
from .emulator import MCP7940Emulator

register_chip("mcp7940n", MCP7940N)

__all__ = ["MCP7940N", "MCP7940Emulator"]
