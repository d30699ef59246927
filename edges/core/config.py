"""Daemon options and the per-zone command file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from edges.core.zones import DEFAULT_BAND_FRACTION, Zone
from edges.log import get_logger

log = get_logger(name="config")

DEFAULT_CONFIG_DIR = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "edges"
)
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "edges.rc"

MAX_DELAY_MS = 1000
DEFAULT_POLL_INTERVAL_MS = 16  # ~60Hz


class ConfigError(Exception):
    """The command file is missing, unreadable or malformed."""


@dataclass
class Config:
    """Runtime options, filled from the command line."""

    # Wait for a command to exit before reacting to the pointer again
    blocking: bool = True
    # Take commands from the rc file instead of the command line
    use_config: bool = False
    # Log every pointer sample and command call
    verbose: bool = False
    # Delay in ms before running a command; it runs only if the pointer is still there
    delay_ms: int = 0
    # Fraction of the vertical extent reserved as a dead zone next to each corner
    band_fraction: float = DEFAULT_BAND_FRACTION
    # How often the pointer position is sampled
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    # Command file read in use_config mode
    config_file: Path = DEFAULT_CONFIG_FILE
    # Raw command strings from the command line, keyed by zone
    commands: dict[Zone, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.delay_ms = max(0, min(self.delay_ms, MAX_DELAY_MS))
        if not 0.0 <= self.band_fraction < 0.5:
            raise ValueError(
                f"band fraction must be in [0, 0.5), got {self.band_fraction}"
            )
        if self.poll_interval_ms <= 0:
            raise ValueError(
                f"poll interval must be positive, got {self.poll_interval_ms}"
            )
        self.config_file = Path(self.config_file)


def load_commands(path: Path | str | None = None) -> dict[Zone, str]:
    """Read ``key=value`` command lines from the rc file.

    Blank lines and lines starting with '#' are skipped. Keys are zone
    names (top-left, ..., bottom); unknown keys are ignored and a later
    line for the same key wins.
    """
    path = Path(path) if path else DEFAULT_CONFIG_FILE
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise ConfigError(f"Failed to open '{path}': {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(
            f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
        ) from exc

    commands: dict[Zone, str] = {}
    for linenum, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ConfigError(f"{path}:{linenum} - syntax error")
        key = key.strip()
        try:
            zone = Zone(key)
        except ValueError:
            zone = Zone.NONE
        if zone is Zone.NONE:
            log.debug("%s:%d - ignoring unknown key %r", path, linenum, key)
            continue
        commands[zone] = value.strip()
    return commands


def resolve_commands(config: Config) -> dict[Zone, str]:
    """Raw command strings to use: the rc file replaces the CLI set in use_config mode."""
    if config.use_config:
        log.debug("Reading commands from %s", config.config_file)
        return load_commands(config.config_file)
    return dict(config.commands)
