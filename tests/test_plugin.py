"""
Tests for the plugin host and device configuration
"""

import copy

import pytest
import yaml

from emufan.devices import FanDeviceHandler
from emufan.plugin import DEFAULT_CONFIG, Plugin, build_devices, load_config
from emufan.sdk import (
    ConfigError,
    DeviceHandler,
    DeviceNotFoundError,
    ParseError,
    RegistrationError,
    UnsupportedCommandError,
    ValidationError,
    WriteData,
)

# Test configuration
TEST_CONFIG = {
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
                {"id": "fan-1", "info": "Front"},
                {"id": "fan-2", "info": "Rear"},
            ],
        },
    ],
}


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file"""
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(TEST_CONFIG, f)
    return str(path)


@pytest.fixture
def plugin():
    """Plugin with a fresh fan handler and test devices"""
    plugin = Plugin()
    plugin.register_device_handlers(FanDeviceHandler().descriptor())
    plugin.register_devices(TEST_CONFIG)
    return plugin


class TestConfig:
    """Test configuration loading"""

    def test_load_config(self, config_file):
        """Test valid file loads"""
        assert load_config(config_file) == TEST_CONFIG

    def test_missing_file(self, tmp_path):
        """Test missing file raises ConfigError"""
        with pytest.raises(ConfigError, match="Failed to read config"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Test unparseable YAML raises ConfigError"""
        path = tmp_path / "bad.yaml"
        path.write_text("devices: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(str(path))

    @pytest.mark.parametrize("content", ["", "devices: fan\n", "- 1\n"])
    def test_missing_devices(self, tmp_path, content):
        """Test configuration without devices list is rejected"""
        path = tmp_path / "config.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError, match="'devices' list"):
            load_config(str(path))

    def test_entry_without_type(self):
        """Test device entry needs a type"""
        with pytest.raises(ConfigError, match="missing 'type'"):
            Plugin().register_devices({"devices": [{"instances": [{"id": "a"}]}]})

    def test_entry_without_instances(self):
        """Test device entry needs instances"""
        with pytest.raises(ConfigError, match="no instances"):
            Plugin().register_devices({"devices": [{"type": "fan"}]})

    def test_instance_without_id(self):
        """Test instances need an id"""
        with pytest.raises(ConfigError, match="without 'id'"):
            Plugin().register_devices({"devices": [{"type": "fan", "instances": [{"info": "x"}]}]})

    def test_output_with_bad_type(self):
        """Test outputs need a supported type"""
        config = copy.deepcopy(TEST_CONFIG)
        config["devices"][0]["outputs"][0]["type"] = "mystery"
        with pytest.raises(ConfigError, match="unsupported type"):
            Plugin().register_devices(config)

    def test_empty_outputs(self, tmp_path):
        """Test a bare 'outputs:' key loads with no outputs"""
        path = tmp_path / "config.yaml"
        path.write_text("devices:\n  - type: fan\n    outputs:\n    instances:\n      - id: fan-1\n")
        config = load_config(str(path))
        devices = build_devices(config)
        assert devices[0].outputs == []

    @pytest.mark.parametrize("key,value,message", [
        ("outputs", "fan.speed", "'outputs' must be a list"),
        ("outputs", {"name": "fan.speed"}, "'outputs' must be a list"),
        ("instances", "fan-1", "'instances' must be a list"),
        ("instances", {"id": "fan-1"}, "'instances' must be a list"),
    ])
    def test_non_list_sections(self, key, value, message):
        """Test outputs and instances must be lists"""
        config = copy.deepcopy(TEST_CONFIG)
        config["devices"][0][key] = value
        with pytest.raises(ConfigError, match=message):
            Plugin().register_devices(config)

    @pytest.mark.parametrize("unit", ["RPM", ["RPM"], 5])
    def test_output_with_scalar_unit(self, unit):
        """Test an output unit must be a mapping"""
        config = copy.deepcopy(TEST_CONFIG)
        config["devices"][0]["outputs"][0]["unit"] = unit
        plugin = Plugin()
        plugin.register_device_handlers(FanDeviceHandler().descriptor())
        with pytest.raises(ConfigError, match="unit must be a mapping"):
            plugin.register_devices(config)

    def test_output_without_unit(self):
        """Test an empty unit is allowed"""
        config = copy.deepcopy(TEST_CONFIG)
        config["devices"][0]["outputs"][0]["unit"] = None
        assert build_devices(config)[0].get_output("fan.speed").unit is None

    def test_build_devices(self):
        """Test devices are created per instance"""
        devices = build_devices(TEST_CONFIG)
        assert [d.id for d in devices] == ["fan-1", "fan-2"]
        assert all(d.handler == "fan" for d in devices)
        assert devices[0].info == "Front"
        assert devices[0].get_output("fan.speed").unit.symbol == "RPM"

    def test_handler_override(self):
        """Test explicit handler name is used"""
        config = {"devices": [{"type": "fan", "handler": "other", "instances": [{"id": "a"}]}]}
        assert build_devices(config)[0].handler == "other"

    def test_default_config(self):
        """Test built-in configuration defines one fan"""
        devices = build_devices(DEFAULT_CONFIG)
        assert [(d.id, d.type) for d in devices] == [("fan-1", "fan")]


class TestRegistration:
    """Test handler and device registration"""

    def test_duplicate_handler(self):
        """Test handler names are unique"""
        plugin = Plugin()
        plugin.register_device_handlers(DeviceHandler(name="fan"))
        with pytest.raises(RegistrationError, match="already registered"):
            plugin.register_device_handlers(DeviceHandler(name="fan"))

    def test_unknown_handler(self):
        """Test devices need a registered handler"""
        with pytest.raises(RegistrationError, match="No device handler 'fan'"):
            Plugin().register_devices(TEST_CONFIG)

    def test_duplicate_device(self, plugin):
        """Test device ids are unique and failed registration adds nothing"""
        config = {"devices": [{"type": "fan", "instances": [{"id": "fan-3"}, {"id": "fan-1"}]}]}
        with pytest.raises(RegistrationError, match="Duplicate device id fan-1"):
            plugin.register_devices(config)
        assert "fan-3" not in plugin.devices

    def test_find_devices(self, plugin):
        """Test device listing and filtering"""
        assert [d.id for d in plugin.find_devices()] == ["fan-1", "fan-2"]
        assert [d.id for d in plugin.find_devices("fan")] == ["fan-1", "fan-2"]
        assert plugin.find_devices("led") == []


class TestDispatch:
    """Test read/write dispatch"""

    def test_read_write(self, plugin):
        """Test writes are visible through reads"""
        assert plugin.read("fan-1")[0].value == 0
        plugin.write("fan-1", WriteData("speed", b"1200"))
        assert plugin.read("fan-1")[0].value == 1200
        assert plugin.read("fan-2")[0].value == 0

    def test_read_all(self, plugin):
        """Test all devices are read"""
        plugin.write("fan-2", WriteData("speed", b"5"))
        readings = plugin.read_all()
        assert {k: v[0].value for k, v in readings.items()} == {"fan-1": 0, "fan-2": 5}

    def test_unknown_device(self, plugin):
        """Test unknown id raises DeviceNotFoundError"""
        with pytest.raises(DeviceNotFoundError):
            plugin.read("fan-9")
        with pytest.raises(DeviceNotFoundError):
            plugin.write("fan-9", WriteData("speed", b"1"))

    def test_handler_errors_propagate(self, plugin):
        """Test handler errors reach the caller unchanged"""
        with pytest.raises(ValidationError):
            plugin.write("fan-1", WriteData("speed", b""))
        with pytest.raises(ParseError):
            plugin.write("fan-1", WriteData("speed", b"abc"))

    def test_unsupported_operations(self):
        """Test handlers without read or write"""
        plugin = Plugin()
        plugin.register_device_handlers(DeviceHandler(name="fan"))
        plugin.register_devices(TEST_CONFIG)
        with pytest.raises(UnsupportedCommandError, match="does not support read"):
            plugin.read("fan-1")
        with pytest.raises(UnsupportedCommandError, match="does not support write"):
            plugin.write("fan-1", WriteData("speed", b"1"))
        assert plugin.read_all() == {}
