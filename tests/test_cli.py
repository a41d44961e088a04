"""Tests for the rtcdriver command-line tool (simulated chip only)."""

import argparse

import pytest

from rtcdriver import cli
from rtcdriver.bus import SimulatedBus, SMBusTransport


def test_read_on_fresh_chip(capsys):
    assert cli.main(["--simulate", "read"]) == 0
    assert capsys.readouterr().out.strip() == "00:00:00 01/01/00"


def test_set_time_prints_new_time(capsys):
    assert cli.main(["--simulate", "set-time", "09:05:30"]) == 0
    assert capsys.readouterr().out.strip() == "09:05:30"


def test_set_date_applies_day_clamp(capsys):
    assert cli.main(["--simulate", "set-date", "31/04/24"]) == 0
    assert capsys.readouterr().out.strip() == "30/04/24"


def test_trim_write_then_read(capsys):
    assert cli.main(["--simulate", "trim", "-12"]) == 0
    assert capsys.readouterr().out.strip() == "-12"


def test_sync_succeeds(capsys):
    assert cli.main(["--simulate", "sync"]) == 0


def test_out_of_range_value_returns_error(capsys):
    assert cli.main(["--simulate", "set-time", "30:00:00"]) == 1


def test_simulated_chip_follows_address_override(capsys):
    assert cli.main(["--simulate", "--address", "0x50", "set-time", "12:00:00"]) == 0
    assert capsys.readouterr().out.strip() == "12:00:00"


def test_malformed_time_is_rejected():
    with pytest.raises(SystemExit):
        cli.parse_args(["set-time", "9-5-30"])


@pytest.mark.parametrize("address", ["0x80", "-1", "sixty"])
def test_invalid_address_is_rejected_by_parser(address):
    with pytest.raises(SystemExit):
        cli.parse_args(["--simulate", "--address", address, "read"])


def test_triplet_parser():
    parse = cli._triplet(":", "HH:MM:SS")
    assert parse("09:05:30") == (9, 5, 30)
    with pytest.raises(argparse.ArgumentTypeError):
        parse("09:05")


def test_build_transport_selects_backend(make_config):
    config = make_config()

    simulated = cli.build_transport(cli.parse_args(["--simulate", "read"]), config)
    assert isinstance(simulated, SimulatedBus)
    assert simulated.find_device(0x6F) is not None

    real = cli.build_transport(cli.parse_args(["--bus", "3", "read"]), config)
    assert isinstance(real, SMBusTransport)
    assert real.bus_number == 3
    assert not real.is_open


def test_custom_config_file(temp_config_yaml_file, capsys):
    args = ["--simulate", "--config", str(temp_config_yaml_file), "set-time", "23:59:59"]
    assert cli.main(args) == 0
    assert capsys.readouterr().out.strip() == "23:59:59"
