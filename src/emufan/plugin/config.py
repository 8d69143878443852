"""
Device Configuration Module

Loads device definitions from YAML and turns them into Device objects.
"""

import logging
from typing import Any, Dict, List

import yaml

from ..sdk import OUTPUT_TYPES, ConfigError, Device, Output, Unit

logger = logging.getLogger(__name__)

# Used when no configuration file is given
DEFAULT_CONFIG: Dict[str, Any] = {
    "devices": [
        {
            "type": "fan",
            "outputs": [
                {
                    "name": "fan.speed",
                    "type": "speed",
                    "unit": {"name": "revolutions per minute", "symbol": "RPM"},
                },
            ],
            "instances": [
                {"id": "fan-1", "info": "Emulated Fan"},
            ],
        },
    ],
}


def load_config(config_path: str) -> Dict[str, Any]:
    """Load and validate a device configuration file

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file cannot be read or is malformed
    """
    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    validate_config(config)
    logger.info(f"Loaded configuration from {config_path}")
    return config


def validate_config(config: Any) -> None:
    """Check a configuration dictionary for required fields

    Raises:
        ConfigError: If a required field is missing or invalid
    """
    if not isinstance(config, dict) or not isinstance(config.get("devices"), list):
        raise ConfigError("Configuration must contain a 'devices' list")

    for index, entry in enumerate(config["devices"]):
        if not isinstance(entry, dict) or not entry.get("type"):
            raise ConfigError(f"Device entry {index} is missing 'type'")

        instances = entry.get("instances")
        if instances is not None and not isinstance(instances, list):
            raise ConfigError(f"Device entry {index} ({entry['type']}) 'instances' must be a list")
        if not instances:
            raise ConfigError(f"Device entry {index} ({entry['type']}) has no instances")
        for instance in instances:
            if not isinstance(instance, dict) or not instance.get("id"):
                raise ConfigError(f"Device entry {index} ({entry['type']}) has an instance without 'id'")

        outputs = entry.get("outputs") or []
        if not isinstance(outputs, list):
            raise ConfigError(f"Device entry {index} ({entry['type']}) 'outputs' must be a list")
        for output in outputs:
            if not isinstance(output, dict) or not output.get("name"):
                raise ConfigError(f"Device entry {index} ({entry['type']}) has an output without 'name'")
            if output.get("type") not in OUTPUT_TYPES:
                raise ConfigError(f"Output '{output['name']}' has unsupported type {output.get('type')!r}")
            unit = output.get("unit")
            if unit is not None and not isinstance(unit, dict):
                raise ConfigError(f"Output '{output['name']}' unit must be a mapping with 'name' and 'symbol'")


def _build_output(config: Dict[str, Any]) -> Output:
    unit = config.get("unit")
    return Output(
        name=config["name"],
        type=config["type"],
        precision=config.get("precision"),
        unit=Unit(name=unit.get("name", ""), symbol=unit.get("symbol", "")) if unit else None,
    )


def build_devices(config: Dict[str, Any]) -> List[Device]:
    """Create devices from a configuration dictionary

    Args:
        config: Validated configuration dictionary

    Returns:
        One Device per configured instance
    """
    devices = []
    for entry in config["devices"]:
        outputs = [_build_output(o) for o in entry.get("outputs") or []]
        for instance in entry["instances"]:
            devices.append(Device(
                id=str(instance["id"]),
                type=entry["type"],
                handler=instance.get("handler", entry.get("handler", entry["type"])),
                info=instance.get("info", ""),
                outputs=list(outputs),
                data=instance.get("data") or {},
            ))
    return devices
