"""Last time/date values fetched from the chip."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Sequence


@dataclass
class TimeDateSnapshot:
    """Raw register bytes from the most recent burst read.

    Bytes are stored exactly as read, flags included; decoding happens per
    accessor with the matching field mask. The snapshot is replaced on every
    read, it is not a cache.
    """

    seconds: int = 0
    minutes: int = 0
    hours: int = 0
    weekday: int = 0
    day: int = 0
    month: int = 0
    year: int = 0

    @classmethod
    def from_bytes(cls, raw: Sequence[int]) -> TimeDateSnapshot:
        """Build a snapshot from a 7-byte burst starting at the seconds register."""
        names = [f.name for f in fields(cls)]
        if len(raw) != len(names):
            raise ValueError(f"Expected {len(names)} register bytes, got {len(raw)}")
        return cls(**dict(zip(names, raw)))
