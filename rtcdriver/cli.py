"""Command-line access to an RTC chip.

Usage:
    rtcdriver read
    rtcdriver set-time 09:05:30
    rtcdriver set-date 29/02/24
    rtcdriver sync                  # write the host's local time
    rtcdriver trim [STEPS]          # show or set oscillator trim
    rtcdriver --simulate read       # run against the in-process emulator
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from typing import Optional, Sequence

from rtcdriver.bus import SimulatedBus, SMBusTransport
from rtcdriver.core.chip import create_rtc, list_available_chips
from rtcdriver.core.exceptions import RtcError
from rtcdriver.interfaces.bus import BusTransport
from rtcdriver.mcp7940 import MCP7940Emulator
from rtcdriver.mcp7940.driver import CONFIG_NAME
from rtcdriver.utils.config_loader import RtcConfig, get_config, load_config
from rtcdriver.utils.consts import is_valid_i2c_address

logger = logging.getLogger("rtcdriver")


def _triplet(separator: str, label: str):
    def parse(text: str) -> tuple[int, int, int]:
        parts = text.split(separator)
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise argparse.ArgumentTypeError(f"expected {label}, got {text!r}")
        first, second, third = (int(p) for p in parts)
        return first, second, third

    return parse


def _i2c_address(text: str) -> int:
    try:
        address = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer address, got {text!r}") from None
    if not is_valid_i2c_address(address):
        raise argparse.ArgumentTypeError(f"0x{address:X} is not a 7-bit I2C address")
    return address


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rtcdriver", description="Read and set a battery-backed RTC chip."
    )
    parser.add_argument(
        "--chip",
        default="mcp7940n",
        help=f"Chip driver name (available: {', '.join(list_available_chips())})",
    )
    parser.add_argument("--bus", type=int, default=None, help="I2C bus number")
    parser.add_argument(
        "--address",
        type=_i2c_address,
        default=None,
        help="7-bit device address (e.g. 0x6F)",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Use the in-process chip emulator instead of real hardware",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("read", help="Print the current time and date")
    set_time = sub.add_parser("set-time", help="Set the time")
    set_time.add_argument("time", type=_triplet(":", "HH:MM:SS"))
    set_date = sub.add_parser("set-date", help="Set the date")
    set_date.add_argument("date", type=_triplet("/", "DD/MM/YY"))
    sub.add_parser("sync", help="Write the host's local time to the chip")
    trim = sub.add_parser("trim", help="Show or set the oscillator digital trim")
    trim.add_argument("steps", type=int, nargs="?", default=None)
    return parser.parse_args(argv)


def build_transport(args: argparse.Namespace, config: RtcConfig) -> BusTransport:
    if args.simulate:
        bus = SimulatedBus()
        address = config.chip.address if args.address is None else args.address
        bus.attach(address, MCP7940Emulator())
        return bus
    number = config.bus.number if args.bus is None else args.bus
    return SMBusTransport(number)


def run(args: argparse.Namespace) -> int:
    config = load_config(CONFIG_NAME, args.config) if args.config else get_config(CONFIG_NAME)
    transport = build_transport(args, config)
    rtc = create_rtc(args.chip, transport, address=args.address, config=config)

    try:
        if args.command == "read":
            print(f"{rtc.read_time()} {rtc.read_date()}")
        elif args.command == "set-time":
            rtc.set_time(*args.time)
            print(rtc.read_time())
        elif args.command == "set-date":
            day, month, year = args.date
            rtc.set_date(day, month, year)
            print(rtc.read_date())
        elif args.command == "sync":
            now = datetime.now().replace(microsecond=0)
            rtc.set_datetime(now)
            logger.info(f"Chip set to {now.isoformat(sep=' ')}")
        elif args.command == "trim":
            if args.steps is not None:
                rtc.write_trim(args.steps)
            print(rtc.read_trim())
    finally:
        if isinstance(transport, SMBusTransport):
            transport.close()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    try:
        return run(args)
    except RtcError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
