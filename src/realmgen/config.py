# src/realmgen/config.py
# Tuning knobs read from data/tuning.toml. Generation code takes explicit
# arguments; the CLI and the session cache pull their defaults from here.

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).resolve().parent / "data" / "tuning.toml"


@dataclass(frozen=True)
class Tuning:
    world_width: int = 10
    world_height: int = 10
    entry_direction: str = "south"
    no_evil: bool = True
    log_level: str = "WARNING"
    log_format: str = "%(levelname)s %(name)s: %(message)s"


# [section] key -> Tuning field
_KEYS = {
    ("world", "width"): "world_width",
    ("world", "height"): "world_height",
    ("town", "entry_direction"): "entry_direction",
    ("population", "no_evil"): "no_evil",
    ("logging", "level"): "log_level",
    ("logging", "format"): "log_format",
}

TUNING = Tuning()


def _coerce(name: str, value: Any, expected: type) -> Any:
    # bool is an int subclass; keep them apart.
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if not isinstance(value, expected):
        raise ConfigError(f"{name} must be {expected.__name__}, got {value!r}")
    return value


def tuning_from_dict(data: Dict[str, Any]) -> Tuning:
    types = {f.name: f.type for f in fields(Tuning)}
    values = {}
    for (section, key), attr in _KEYS.items():
        table = data.get(section, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[{section}] must be a table")
        if key in table:
            values[attr] = _coerce(f"{section}.{key}", table[key], types[attr])

    tuning = Tuning(**values)
    if tuning.world_width < 4 or tuning.world_height < 4:
        raise ConfigError("world width and height must be at least 4")
    if tuning.entry_direction not in ("north", "south", "east", "west"):
        raise ConfigError(f"unknown entry direction {tuning.entry_direction!r}")
    if not isinstance(logging.getLevelName(tuning.log_level.upper()), int):
        raise ConfigError(f"unknown log level {tuning.log_level!r}")
    return tuning


def load_tuning(path: Optional[Union[str, Path]] = None) -> Tuning:
    """Read tuning from *path* (default: the packaged tuning.toml). A missing file gives defaults."""
    path = Path(path) if path is not None else DEFAULT_PATH
    if not path.exists():
        logger.info("%s not found; using default tuning", path)
        return Tuning()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    tuning = tuning_from_dict(data)
    logger.debug("Loaded tuning from %s", path)
    return tuning
