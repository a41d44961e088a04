from unittest.mock import Mock

import pytest

from rtcdriver.bus.smbus_transport import SMBusTransport
from rtcdriver.core.exceptions import BusError


class FakeSMBus:
    """Minimal stand-in for smbus2.SMBus recording I2C_RDWR messages."""

    def __init__(self, bus_number, read_payload=b""):
        self.bus_number = bus_number
        self.read_payload = read_payload
        self.messages = []
        self.closed = False

    def i2c_rdwr(self, *msgs):
        for msg in msgs:
            if msg.flags & 0x0001:  # I2C_M_RD
                for i, byte in enumerate(self.read_payload[: msg.len]):
                    msg.buf[i] = bytes([byte])
            self.messages.append(msg)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_bus():
    return FakeSMBus(1, read_payload=b"\x95\x05")


@pytest.fixture
def transport(fake_bus):
    return SMBusTransport(1, bus_factory=lambda n: fake_bus)


def test_opens_lazily(transport, fake_bus):
    assert not transport.is_open
    transport.write(0x6F, b"\x00")
    assert transport.is_open


def test_open_returns_same_handle_until_closed():
    opened = []

    def factory(number):
        opened.append(FakeSMBus(number))
        return opened[-1]

    transport = SMBusTransport(1, bus_factory=factory)

    assert transport.open() is opened[0]
    assert transport.open() is opened[0]
    transport.close()
    assert transport.open() is opened[1]


def test_write_sends_single_message(transport, fake_bus):
    transport.write(0x6F, b"\x02\x09")

    msg = fake_bus.messages[0]
    assert msg.addr == 0x6F
    assert list(msg) == [0x02, 0x09]


def test_read_returns_bytes(transport):
    assert transport.read(0x6F, 2) == b"\x95\x05"


def test_oserror_becomes_bus_error(transport, fake_bus):
    fake_bus.i2c_rdwr = Mock(side_effect=OSError(121, "Remote I/O error"))

    with pytest.raises(BusError) as info:
        transport.write(0x6F, b"\x00")

    assert info.value.address == 0x6F
    assert info.value.details["errno"] == 121
    assert isinstance(info.value.__cause__, OSError)


def test_open_failure_becomes_bus_error():
    def factory(number):
        raise FileNotFoundError(2, "No such file", f"/dev/i2c-{number}")

    transport = SMBusTransport(7, bus_factory=factory)
    with pytest.raises(BusError) as info:
        transport.read(0x6F, 1)
    assert info.value.details["bus"] == 7


def test_context_manager_closes(fake_bus):
    with SMBusTransport(1, bus_factory=lambda n: fake_bus) as transport:
        assert transport.is_open

    assert fake_bus.closed
    assert not transport.is_open
