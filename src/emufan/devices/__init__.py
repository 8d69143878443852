"""
Device handlers for emufan

Each module provides a handler for one emulated device type along with
its registration descriptor.
"""

from .fan import FAN, FanDeviceHandler, fan

HANDLERS = [FAN]

__all__ = [
    'FAN',
    'FanDeviceHandler',
    'HANDLERS',
    'fan',
]
