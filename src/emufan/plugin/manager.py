"""
Plugin Manager Module

This module provides the plugin host that registers device handlers,
creates devices from configuration and dispatches reads and writes to
the handler serving each device.
"""

import logging
from typing import Any, Dict, List, Optional

from ..sdk import (
    Device,
    DeviceHandler,
    DeviceNotFoundError,
    Reading,
    RegistrationError,
    UnsupportedCommandError,
    WriteData,
)
from .config import build_devices, validate_config

logger = logging.getLogger(__name__)


class Plugin:
    """Registry and dispatcher for device handlers"""

    def __init__(self, name: str = "emufan"):
        """Initialize an empty plugin

        Args:
            name: Plugin name used in log messages
        """
        self.name = name
        self.handlers: Dict[str, DeviceHandler] = {}
        self.devices: Dict[str, Device] = {}

    def register_device_handlers(self, *handlers: DeviceHandler) -> None:
        """Register device handlers by name

        Raises:
            RegistrationError: If a handler name is already registered
        """
        for handler in handlers:
            if handler.name in self.handlers:
                raise RegistrationError(f"Device handler '{handler.name}' is already registered")
            self.handlers[handler.name] = handler
            logger.debug(f"Registered device handler '{handler.name}'")

    def register_devices(self, config: Dict[str, Any]) -> List[Device]:
        """Create and register devices from configuration

        Args:
            config: Device configuration dictionary

        Returns:
            Newly registered devices

        Raises:
            ConfigError: If the configuration is malformed
            RegistrationError: If a device names an unknown handler or
                reuses an existing id
        """
        validate_config(config)
        devices = build_devices(config)

        seen = set(self.devices)
        for device in devices:
            if device.handler not in self.handlers:
                raise RegistrationError(f"No device handler '{device.handler}' for device {device.id}")
            if device.id in seen:
                raise RegistrationError(f"Duplicate device id {device.id}")
            seen.add(device.id)

        for device in devices:
            self.devices[device.id] = device
        logger.info(f"{self.name}: registered {len(devices)} device(s)")
        return devices

    def get_device(self, device_id: str) -> Device:
        """Get a registered device

        Raises:
            DeviceNotFoundError: If no device has the given id
        """
        try:
            return self.devices[device_id]
        except KeyError:
            raise DeviceNotFoundError(f"No device with id {device_id}") from None

    def _handler_for(self, device: Device) -> DeviceHandler:
        return self.handlers[device.handler]

    def read(self, device_id: str) -> List[Reading]:
        """Read a device through its handler

        Raises:
            DeviceNotFoundError: If no device has the given id
            UnsupportedCommandError: If the handler cannot read
        """
        device = self.get_device(device_id)
        handler = self._handler_for(device)
        if handler.read is None:
            raise UnsupportedCommandError(f"Device handler '{handler.name}' does not support read")
        readings = handler.read(device)
        logger.debug(f"Read {len(readings)} reading(s) from {device_id}")
        return readings

    def read_all(self) -> Dict[str, List[Reading]]:
        """Read every registered device that supports reads"""
        readings = {}
        for device_id, device in self.devices.items():
            if self._handler_for(device).read is not None:
                readings[device_id] = self.read(device_id)
        return readings

    def write(self, device_id: str, data: WriteData) -> None:
        """Write to a device through its handler

        Raises:
            DeviceNotFoundError: If no device has the given id
            UnsupportedCommandError: If the handler cannot write
        """
        device = self.get_device(device_id)
        handler = self._handler_for(device)
        if handler.write is None:
            raise UnsupportedCommandError(f"Device handler '{handler.name}' does not support write")
        logger.debug(f"Writing action '{data.action}' to {device_id}")
        handler.write(device, data)

    def find_devices(self, device_type: Optional[str] = None) -> List[Device]:
        """List registered devices, optionally filtered by type"""
        return [d for d in self.devices.values() if device_type is None or d.type == device_type]
