"""
Device Model Module

This module defines the records exchanged between the plugin host and
device handlers: devices, their outputs, the readings they produce and
the write payloads they accept.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import ConversionError, ValidationError


# Python types accepted for each output type. bool is a subclass of int
# and is only accepted where listed explicitly.
OUTPUT_TYPES: Dict[str, Tuple[type, ...]] = {
    "speed": (int,),
    "int": (int,),
    "float": (int, float),
    "temperature": (int, float),
    "string": (str,),
    "bool": (bool,),
}


def _timestamp() -> str:
    """Current time as an RFC 3339 UTC string"""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Unit:
    """Unit of measure attached to an output"""
    name: str
    symbol: str


RPM = Unit(name="revolutions per minute", symbol="RPM")


@dataclass
class Reading:
    """A single value reported by a device.

    Attributes:
        device: Id of the device that produced the reading
        type: Output type (e.g. "speed")
        name: Output name (e.g. "fan.speed")
        value: Reading value
        unit: Optional unit of measure
        timestamp: RFC 3339 time the reading was made
    """
    device: str
    type: str
    name: str
    value: Any
    unit: Optional[Unit] = None
    timestamp: str = field(default_factory=_timestamp)


@dataclass
class Output:
    """Describes one kind of reading a device emits.

    Attributes:
        name: Output name, unique per device (e.g. "fan.speed")
        type: Output type, one of OUTPUT_TYPES
        precision: Decimal places kept for float values
        unit: Optional unit of measure
    """
    name: str
    type: str
    precision: Optional[int] = None
    unit: Optional[Unit] = None

    def make_reading(self, value: Any, device: str = "") -> Reading:
        """Build a reading for this output.

        Args:
            value: Value to report
            device: Id of the device producing the reading

        Returns:
            Reading carrying the value

        Raises:
            ConversionError: If the value does not match the output type
        """
        accepted = OUTPUT_TYPES.get(self.type)
        if accepted is None:
            raise ConversionError(f"Unsupported output type '{self.type}' for output '{self.name}'")

        if isinstance(value, bool) and bool not in accepted:
            raise ConversionError(
                f"Cannot convert {value!r} (bool) to output '{self.name}' of type '{self.type}'"
            )
        if not isinstance(value, accepted):
            raise ConversionError(
                f"Cannot convert {value!r} ({type(value).__name__}) to output "
                f"'{self.name}' of type '{self.type}'"
            )

        if isinstance(value, float) and self.precision is not None:
            value = round(value, self.precision)

        return Reading(
            device=device,
            type=self.type,
            name=self.name,
            value=value,
            unit=self.unit,
        )


@dataclass
class WriteData:
    """Payload of a write command.

    Attributes:
        action: Which writable attribute the command targets
        data: Raw command data
    """
    action: str
    data: bytes = b""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "WriteData":
        """Create write data from a dictionary, encoding str data as UTF-8

        Raises:
            ValidationError: If data is neither str nor bytes-like
        """
        data = payload.get("data")
        if data is None:
            data = b""
        elif isinstance(data, str):
            data = data.encode("utf-8")
        elif not isinstance(data, (bytes, bytearray, memoryview)):
            raise ValidationError(f"'data' must be str or bytes, got {type(data).__name__}")
        return cls(action=payload.get("action", ""), data=bytes(data))


@dataclass
class Device:
    """A device instance registered with the plugin.

    Attributes:
        id: Unique device id
        type: Device type (e.g. "fan")
        handler: Name of the handler that serves the device
        info: Human readable description
        outputs: Outputs the device can emit
        data: Extra per-device configuration
    """
    id: str
    type: str
    handler: str
    info: str = ""
    outputs: List[Output] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def get_output(self, name: str) -> Optional[Output]:
        """Get an output by name.

        Args:
            name: Output name

        Returns:
            Matching output, or None if the device has no such output
        """
        for output in self.outputs:
            if output.name == name:
                return output
        return None


ReadFunc = Callable[[Device], List[Reading]]
WriteFunc = Callable[[Device, WriteData], None]


@dataclass
class DeviceHandler:
    """Registration descriptor pairing a handler name with its operations"""
    name: str
    read: Optional[ReadFunc] = None
    write: Optional[WriteFunc] = None
