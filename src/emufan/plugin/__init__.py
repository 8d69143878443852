"""
Plugin host package for emufan

This package provides device registration from configuration and
dispatch of reads and writes to device handlers.
"""

from .config import DEFAULT_CONFIG, build_devices, load_config, validate_config
from .manager import Plugin

__all__ = [
    'DEFAULT_CONFIG',
    'Plugin',
    'build_devices',
    'load_config',
    'validate_config',
]
