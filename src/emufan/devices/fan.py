"""
Emulated Fan Device Module

This module provides the handler for emulated fan devices. Each fan
exposes a single writable "speed" setting, kept in memory per device
and reported back as a "fan.speed" reading.
"""

import logging
import re
import threading
from typing import Callable, Dict, List

from ..sdk import (
    RPM,
    Device,
    DeviceHandler,
    Output,
    ParseError,
    Reading,
    ValidationError,
    WriteData,
)

logger = logging.getLogger(__name__)

# Base-10 integer with optional sign, ASCII digits only
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Speeds are stored as signed 64-bit values
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


def parse_int(raw: bytes) -> int:
    """Parse raw write data as a base-10 integer.

    Args:
        raw: UTF-8 encoded integer text (e.g. b"42", b"-7")

    Returns:
        Parsed integer

    Raises:
        ParseError: If the data is not valid UTF-8, not an integer, or
            outside the signed 64-bit range
    """
    try:
        text = raw.decode("utf-8")
        if not _INT_PATTERN.fullmatch(text):
            raise ValueError(f"invalid literal for int() with base 10: {text!r}")
        value = int(text)
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"value out of range: {text!r}")
        return value
    except ValueError as e:
        # UnicodeDecodeError is a ValueError as well
        raise ParseError(str(e)) from e


class FanDeviceHandler:
    """Handles reads and writes for emulated fan devices"""

    NAME = "fan"
    SPEED_OUTPUT = "fan.speed"

    # Output used when a device does not configure "fan.speed" itself
    DEFAULT_OUTPUT = Output(name=SPEED_OUTPUT, type="speed", unit=RPM)

    def __init__(self):
        """Initialize handler with no speeds set"""
        self._speeds: Dict[str, int] = {}
        self._lock = threading.Lock()

        # Write action name -> setter
        self.actions: Dict[str, Callable[[Device, bytes], None]] = {
            "speed": self._set_speed,
        }

    def get_speed(self, device: Device) -> int:
        """Get current speed of a device, 0 if never written"""
        with self._lock:
            return self._speeds.get(device.id, 0)

    def _set_speed(self, device: Device, raw: bytes) -> None:
        speed = parse_int(raw)
        with self._lock:
            self._speeds[device.id] = speed
        logger.info(f"Set speed of {device.id} to {speed}")

    def read(self, device: Device) -> List[Reading]:
        """Read the current speed of a fan device.

        Args:
            device: Device being read

        Returns:
            List with one "fan.speed" reading

        Raises:
            ConversionError: If the speed cannot be converted to a reading
        """
        output = device.get_output(self.SPEED_OUTPUT) or self.DEFAULT_OUTPUT
        speed = self.get_speed(device)
        return [output.make_reading(speed, device=device.id)]

    def write(self, device: Device, data: WriteData) -> None:
        """Apply a write command to a fan device.

        The "speed" action sets the fan speed from integer text. Other
        actions are accepted and ignored.

        Args:
            device: Device being written
            data: Write payload

        Raises:
            ValidationError: If the payload carries no data
            ParseError: If a speed cannot be parsed from the data
        """
        if not data.data:
            raise ValidationError("no values specified for 'data', but required")

        setter = self.actions.get(data.action)
        if setter is None:
            logger.debug(f"Ignoring unsupported action '{data.action}' for {device.id}")
            return
        setter(device, data.data)

    def descriptor(self) -> DeviceHandler:
        """Get the registration descriptor for this handler"""
        return DeviceHandler(name=self.NAME, read=self.read, write=self.write)


# Shared handler and descriptor registered by the plugin
fan = FanDeviceHandler()
FAN = fan.descriptor()
