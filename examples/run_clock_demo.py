import argparse
import sys
from pathlib import Path

# Ensure local repo package is used even if another "rtcdriver" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rtcdriver import MCP7940Emulator, SimulatedBus, create_rtc


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the MCP7940N driver against the emulator.")
    parser.add_argument("--time", default="23:59:50", help="Start time HH:MM:SS")
    parser.add_argument("--date", default="28/02/24", help="Start date DD/MM/YY")
    parser.add_argument("--steps", type=int, default=5, help="Number of samples to print")
    parser.add_argument(
        "--seconds",
        type=int,
        default=5,
        help="Emulated seconds elapsed between samples",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    chip = MCP7940Emulator()
    bus = SimulatedBus()
    bus.attach(0x6F, chip)

    rtc = create_rtc("mcp7940n", bus)
    rtc.set_date(*(int(p) for p in args.date.split("/")))
    rtc.set_time(*(int(p) for p in args.time.split(":")))

    for _ in range(args.steps):
        print(rtc.read_date(), rtc.read_time())
        chip.tick(args.seconds)


if __name__ == "__main__":
    main()
