"""Configuration loading from environment variables and tracker.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_DIR = Path.home() / ".config" / "obsidian-tracker"
_DEFAULT_STATE_FILE = _CONFIG_DIR / "config.json"
_CONFIG_FILENAME = "tracker.toml"

VAULT_ENV_VAR = "OBSIDIAN_VAULT"


@dataclass(frozen=True)
class TrackerSettings:
    """Ambient settings threaded through every tool call."""

    state_file: Path = _DEFAULT_STATE_FILE
    vault_env: str | None = None
    log_level: str = "INFO"


def load_settings(config_path: Path | None = None) -> TrackerSettings:
    """Load settings from environment variables and optional tracker.toml.

    Priority: environment variables > tracker.toml > defaults.
    The vault override (OBSIDIAN_VAULT) is only ever read from the environment.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.config/obsidian-tracker/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _CONFIG_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    state_file = os.getenv("OBSIDIAN_TRACKER_CONFIG", file_data.get("state_file"))
    return TrackerSettings(
        state_file=Path(state_file).expanduser() if state_file else _DEFAULT_STATE_FILE,
        vault_env=os.getenv(VAULT_ENV_VAR) or None,
        log_level=os.getenv("OBSIDIAN_TRACKER_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
