"""
emufan - Emulated fan device plugin

Provides an in-process plugin host and an emulated fan device handler
whose speed can be read and written like a real device.
"""

__version__ = "0.1.0"
