"""
Pytest configuration and shared fixtures for the rtcdriver test suite.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'rtcdriver' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rtcdriver.bus.simulated import SimulatedBus  # noqa: E402
from rtcdriver.mcp7940.consts import CHIP_ADDRESS  # noqa: E402
from rtcdriver.mcp7940.driver import MCP7940N  # noqa: E402
from rtcdriver.mcp7940.emulator import MCP7940Emulator  # noqa: E402
from rtcdriver.utils.config_loader import (  # noqa: E402
    _parse_rtc_cfg_from_dict,
    clear_config_cache,
)


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def temp_yaml_file(tmp_path):
    """Path to a not-yet-written YAML file inside pytest's tmp_path."""
    return tmp_path / "rtc.yaml"


@pytest.fixture
def valid_rtc_config_dict():
    """
    Fixture providing a complete valid driver configuration dictionary.
    """
    return {
        "chip": {"address": 0x6F},
        "bus": {"number": 1},
        "bring_up": {"control": 0x43, "auto": True},
        "writes": {"restart_policy": "preserve"},
        "validation": {"strict_ranges": True},
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_rtc_config_dict):
    """
    Fixture that writes a valid configuration into a temporary YAML file.
    """
    temp_yaml_file.write_text(yaml.dump(valid_rtc_config_dict), encoding="utf-8")

    return temp_yaml_file


@pytest.fixture
def make_config(valid_rtc_config_dict):
    """Factory building an RtcConfig with selected sections overridden."""

    def build(**sections):
        raw = {k: dict(v) for k, v in valid_rtc_config_dict.items()}
        for section, values in sections.items():
            raw[section].update(values)
        return _parse_rtc_cfg_from_dict(raw)

    return build


@pytest.fixture
def emulator():
    """A powered-on MCP7940N model with all registers cleared."""
    return MCP7940Emulator()


@pytest.fixture
def bus(emulator):
    """Simulated bus with the emulator attached at the chip address."""
    sim = SimulatedBus()
    sim.attach(CHIP_ADDRESS, emulator)
    return sim


@pytest.fixture
def rtc(bus, make_config):
    """Driver on the simulated bus using default settings."""
    return MCP7940N(bus, config=make_config())
