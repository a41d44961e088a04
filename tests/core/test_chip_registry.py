import pytest

from rtcdriver.core.chip import (
    ChipRegistry,
    create_rtc,
    list_available_chips,
    register_chip,
)
from rtcdriver.mcp7940.driver import MCP7940N


class DummyChip:
    def __init__(self, bus, **kwargs):
        self.bus = bus
        self.kwargs = kwargs


def test_chip_registry_basic_operations():
    registry = ChipRegistry()
    registry.register("Dummy", DummyChip)
    assert registry.get("dummy") is DummyChip
    assert registry.get("DUMMY") is DummyChip
    assert registry.list_chips() == ["dummy"]

    bus = object()
    instance = registry.create("dummy", bus, foo=1)
    assert isinstance(instance, DummyChip)
    assert instance.bus is bus
    assert instance.kwargs == {"foo": 1}

    with pytest.raises(ValueError):
        registry.register("dummy", DummyChip)

    with pytest.raises(ValueError):
        registry.get("missing")


def test_global_registry_functions(monkeypatch):
    registry = ChipRegistry()
    monkeypatch.setattr("rtcdriver.core.chip._REGISTRY", registry)

    register_chip("dummy", DummyChip)
    assert registry.get("dummy") is DummyChip
    assert list_available_chips() == ["dummy"]
    instance = create_rtc("dummy", "bus", bar=2)
    assert instance.kwargs == {"bar": 2}


def test_mcp7940n_registered_on_import(bus, make_config):
    assert "mcp7940n" in list_available_chips()
    rtc = create_rtc("MCP7940N", bus, config=make_config())
    assert isinstance(rtc, MCP7940N)
