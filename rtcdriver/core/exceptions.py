"""Custom exceptions used throughout the rtcdriver package."""

from typing import Any, Optional


class RtcError(Exception):
    """Base exception for all driver errors.

    All rtcdriver-specific exceptions inherit from this class, so callers
    can catch every driver failure with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(RtcError):
    """Raised when driver settings cannot be loaded or are unusable.

    Covers unreadable YAML, absent required sections and values the chip
    cannot accept (a 9-bit control byte, an unknown restart policy).
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Build the error.

        Called with one positional argument, that argument is the message
        and the offending key is reported as "configuration".

        Args:
            config_key: Dotted path of the offending setting (e.g. 'chip.address')
            message: What is wrong with it
            details: Additional context
        """
        if message is None:
            config_key, message = None, config_key or "Invalid configuration"
        self.config_key = config_key or "configuration"
        super().__init__(
            message=f"Configuration error for '{self.config_key}': {message}",
            details=details,
        )


class BusError(RtcError):
    """Raised when a bus transfer to the chip fails.

    Examples:
    - The I2C adapter reports an I/O error (no ACK, arbitration lost)
    - No device answers at the requested address
    """

    def __init__(
        self,
        address: int,
        operation: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if message is None:
            message = f"Bus {operation} failed for device 0x{address:02X}"
        details = details or {}
        details["address"] = f"0x{address:02X}"
        details["operation"] = operation

        super().__init__(message=message, details=details)
        self.address = address
        self.operation = operation


class InvalidRangeError(RtcError, ValueError):
    """Raised when a clock or calendar value is outside its field range.

    Only raised when strict range checking is enabled; otherwise values are
    written to the chip verbatim.
    """

    def __init__(
        self,
        field: str,
        value: int,
        low: int,
        high: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{field} value {value} is out of range [{low},{high}]"
        super().__init__(message=message, details=details)
        self.field = field
        self.value = value
        self.low = low
        self.high = high
