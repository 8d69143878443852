"""
Plugin Error Types

Exceptions raised by device handlers and the plugin host. Every error
propagates to the caller unchanged; nothing here is retried.
"""


class PluginError(Exception):
    """Base exception for plugin-related errors"""
    pass


class ValidationError(PluginError):
    """Raised when a write payload fails validation"""
    pass


class ParseError(PluginError):
    """Raised when write data cannot be parsed into the expected type"""
    pass


class ConversionError(PluginError):
    """Raised when a value cannot be converted into a reading"""
    pass


class RegistrationError(PluginError):
    """Raised when a handler or device cannot be registered"""
    pass


class DeviceNotFoundError(PluginError):
    """Raised when no device is registered under the requested id"""
    pass


class UnsupportedCommandError(PluginError):
    """Raised when a device handler does not support the requested operation"""
    pass


class ConfigError(PluginError):
    """Raised when the device configuration is missing or malformed"""
    pass
