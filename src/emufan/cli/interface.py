"""
Command Line Interface Module

This module provides the command-line interface for listing, reading
and writing emulated devices within a single process.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..devices import HANDLERS
from ..plugin import DEFAULT_CONFIG, Plugin, load_config
from ..sdk import PluginError, Reading, WriteData

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Keep library modules quiet unless --debug is given
LIBRARY_LOGGERS = ['emufan.devices.fan', 'emufan.plugin.manager', 'emufan.plugin.config']
for name in LIBRARY_LOGGERS:
    logging.getLogger(name).setLevel(logging.WARNING)


class CLI:
    """Command-line interface handler"""

    def __init__(self):
        """Initialize CLI handler"""
        self.parser = self._create_parser()
        self.plugin: Optional[Plugin] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create command-line argument parser

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            description="emufan - Emulated fan device plugin"
        )

        parser.add_argument(
            "-c", "--config",
            help="Path to device configuration file (default: one emulated fan)",
        )

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        subparsers.add_parser("devices", help="List configured devices")

        read_parser = subparsers.add_parser("read", help="Read one or all devices")
        read_parser.add_argument("device", nargs="?", help="Device id (default: all devices)")

        write_parser = subparsers.add_parser("write", help="Write to a device")
        write_parser.add_argument("device", help="Device id")
        write_parser.add_argument("action", help="Write action (e.g. speed)")
        write_parser.add_argument("data", help="Write data (e.g. 1200)")

        return parser

    def _setup_plugin(self, config_path: Optional[str]) -> Plugin:
        """Create plugin with all handlers and configured devices"""
        config = load_config(config_path) if config_path else DEFAULT_CONFIG
        plugin = Plugin()
        plugin.register_device_handlers(*HANDLERS)
        plugin.register_devices(config)
        return plugin

    @staticmethod
    def _format_reading(reading: Reading) -> str:
        unit = f" {reading.unit.symbol}" if reading.unit else ""
        return f"{reading.device}  {reading.name} = {reading.value}{unit}"

    def _print_readings(self, readings: List[Reading]) -> None:
        for reading in readings:
            print(self._format_reading(reading))

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Run CLI application"""
        args = self.parser.parse_args(argv)

        if args.debug:
            logging.getLogger("emufan").setLevel(logging.DEBUG)
            for name in LIBRARY_LOGGERS:
                logging.getLogger(name).setLevel(logging.DEBUG)

        try:
            self.plugin = self._setup_plugin(args.config)

            if args.command == "devices":
                for device in self.plugin.find_devices():
                    info = f"  {device.info}" if device.info else ""
                    print(f"{device.id}  {device.type}{info}")

            elif args.command == "read":
                if args.device:
                    self._print_readings(self.plugin.read(args.device))
                else:
                    for readings in self.plugin.read_all().values():
                        self._print_readings(readings)

            elif args.command == "write":
                data = WriteData.from_dict({"action": args.action, "data": args.data})
                self.plugin.write(args.device, data)
                self._print_readings(self.plugin.read(args.device))

        except PluginError as e:
            logger.error(f"Error: {e}")
            sys.exit(1)


def main() -> None:
    """Main entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
