"""Helpers for loading and validating RTC driver configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, cast
import threading

import yaml  # type: ignore[import-untyped]

from rtcdriver.core.exceptions import ConfigurationError
from rtcdriver.utils.consts import ConstUtils, is_valid_i2c_address

RestartPolicy = Literal["preserve", "zero"]
RESTART_POLICIES = ("preserve", "zero")


@dataclass(frozen=True)
class ChipConfig:
    address: int


@dataclass(frozen=True)
class BusConfig:
    number: int


@dataclass(frozen=True)
class BringUpConfig:
    control: int
    auto: bool = True


@dataclass(frozen=True)
class WriteConfig:
    restart_policy: RestartPolicy = "preserve"


@dataclass(frozen=True)
class ValidationConfig:
    strict_ranges: bool = True


@dataclass(frozen=True)
class RtcConfig:
    chip: ChipConfig
    bus: BusConfig
    bring_up: BringUpConfig
    writes: WriteConfig
    validation: ValidationConfig


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, RtcConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(chip_name: str, path: Optional[str] = None) -> str:
    if path is None:
        # Config files are in rtcdriver/{chip_name}/config.yaml
        base = Path(__file__).parent.parent / chip_name / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")
    return raw


def _build_writes_cfg(writes_raw: dict[str, Any]) -> WriteConfig:
    policy = writes_raw.get("restart_policy", "preserve")
    if policy not in RESTART_POLICIES:
        raise ConfigurationError(
            "writes.restart_policy",
            f"must be one of {list(RESTART_POLICIES)}, got {policy!r}",
        )
    return WriteConfig(restart_policy=cast(RestartPolicy, policy))


def _parse_rtc_cfg_from_dict(raw: dict[str, Any]) -> RtcConfig:
    try:
        chip = raw["chip"]
        bus = raw.get("bus", {})
        bring_up = raw["bring_up"]

        cfg = RtcConfig(
            chip=ChipConfig(address=int(chip["address"])),
            bus=BusConfig(number=int(bus.get("number", 1))),
            bring_up=BringUpConfig(
                control=int(bring_up["control"]),
                auto=bool(bring_up.get("auto", True)),
            ),
            writes=_build_writes_cfg(raw.get("writes", {})),
            validation=ValidationConfig(
                strict_ranges=bool(raw.get("validation", {}).get("strict_ranges", True)),
            ),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_rtc_config(cfg)
    return cfg


def _validate_rtc_config(cfg: RtcConfig) -> None:
    """Basic sanity checks to fail fast on bad configs."""
    if not is_valid_i2c_address(cfg.chip.address):
        raise ConfigurationError(
            "chip.address", f"0x{cfg.chip.address:X} is not a 7-bit I2C address"
        )
    if cfg.bus.number < 0:
        raise ConfigurationError("bus.number", "must be >= 0")
    if not 0 <= cfg.bring_up.control <= ConstUtils.MASK_8_BITS:
        raise ConfigurationError("bring_up.control", "must fit in one byte")


def load_config(chip_name: str, path: Optional[str] = None) -> RtcConfig:
    """Load and validate configuration from a YAML file.

    Args:
        chip_name: Chip package name (e.g., 'mcp7940') for config lookup.
        path: Optional path to YAML config. If None, load bundled rtcdriver/{chip_name}/config.yaml.

    Returns:
        RtcConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(chip_name=chip_name, path=path))
    raw = _load_yaml_file(p)

    return _parse_rtc_cfg_from_dict(raw=raw)


def get_config(chip_name: str) -> RtcConfig:
    """Return the loaded config for chip_name, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe.
    """
    with _CACHE_LOCK:
        if chip_name not in _LOADER_CACHE:
            _LOADER_CACHE[chip_name] = load_config(chip_name=chip_name)
        return _LOADER_CACHE[chip_name]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
