"""Persisted vault configuration and vault-root resolution."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from obsidian_tracker.errors import InvalidVaultPath, NotInitialized
from obsidian_tracker.vault import layout

logger = logging.getLogger(__name__)

_HOME_TOKENS = ("${HOME}", "$HOME")


@dataclass(frozen=True)
class VaultConfig:
    """The single persisted record: where the vault lives."""

    vault_path: str | None = None
    initialized: bool = False

    def to_json(self) -> dict:
        data: dict = {"initialized": self.initialized}
        if self.vault_path:
            data["vaultPath"] = self.vault_path
        return data

    @classmethod
    def from_json(cls, data: dict) -> VaultConfig:
        vault_path = data.get("vaultPath")
        return cls(
            vault_path=vault_path if isinstance(vault_path, str) and vault_path else None,
            initialized=data.get("initialized") is True,
        )


class ConfigStore:
    """Read/write access to the JSON config record."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> VaultConfig:
        """Return the stored record, or a blank one if it is missing or malformed."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug("No usable config at %s: %s", self.path, e)
            return VaultConfig()
        if not isinstance(data, dict):
            logger.debug("Config at %s is not an object, ignoring", self.path)
            return VaultConfig()
        return VaultConfig.from_json(data)

    def save(self, config: VaultConfig) -> None:
        """Overwrite the record (no merge)."""
        layout.atomic_write_text(self.path, json.dumps(config.to_json(), indent=2) + "\n")
        logger.info("Saved config to %s", self.path)


def expand_home(value: str, home: Path | None = None) -> str:
    """Expand $HOME / ${HOME} anywhere and a leading ~ to the home directory."""
    home_str = str(home or Path.home())
    for token in _HOME_TOKENS:
        value = value.replace(token, home_str)
    if value == "~" or value.startswith(("~/", "~\\")):
        value = home_str + value[1:]
    return value


def resolve_vault_path(
    config: VaultConfig,
    env_value: str | None,
    home: Path | None = None,
) -> Path | None:
    """Resolve the vault root. Persisted path first, then the environment override."""
    if config.vault_path and config.vault_path.strip():
        return Path(config.vault_path)
    if env_value and env_value.strip():
        return Path(expand_home(env_value.strip(), home))
    return None


def require_vault(config: VaultConfig, env_value: str | None) -> Path:
    """Return a usable vault root or raise NotInitialized / InvalidVaultPath."""
    vault = resolve_vault_path(config, env_value)
    if vault is None:
        raise NotInitialized()
    if not layout.exists(vault):
        raise InvalidVaultPath(str(vault))
    return vault
