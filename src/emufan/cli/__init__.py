"""
CLI package for emufan

This package provides the command-line interface for listing,
reading and writing emulated devices.
"""

from .interface import main

__all__ = ['main']
