"""
Plugin SDK Package for emufan

This package provides the contract between the plugin host and device
handlers.

Key Components:
- Device, Output: Registered devices and the readings they can emit
- Reading: A single value reported by a device
- WriteData: Payload of a write command
- DeviceHandler: Registration descriptor for a handler's read/write operations

Example Usage:
    >>> from emufan.sdk import Output, Device, RPM
    >>>
    >>> output = Output(name="fan.speed", type="speed", unit=RPM)
    >>> device = Device(id="fan-1", type="fan", handler="fan", outputs=[output])
    >>> device.get_output("fan.speed").make_reading(1200, device=device.id).value
    1200
"""

from .device import (
    OUTPUT_TYPES,
    RPM,
    Device,
    DeviceHandler,
    Output,
    Reading,
    Unit,
    WriteData,
)
from .errors import (
    ConfigError,
    ConversionError,
    DeviceNotFoundError,
    ParseError,
    PluginError,
    RegistrationError,
    UnsupportedCommandError,
    ValidationError,
)

__all__ = [
    'OUTPUT_TYPES',
    'RPM',
    'Device',
    'DeviceHandler',
    'Output',
    'Reading',
    'Unit',
    'WriteData',
    'ConfigError',
    'ConversionError',
    'DeviceNotFoundError',
    'ParseError',
    'PluginError',
    'RegistrationError',
    'UnsupportedCommandError',
    'ValidationError',
]
