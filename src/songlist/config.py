"""Configuration loading from environment variables and songlist.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from songlist.errors import ConfigError

_DEFAULT_PLAYLIST_FILE = Path("playlist.txt")
_CONFIG_FILENAME = "songlist.toml"

# Longest title the original menu accepted (200-byte buffer minus terminator).
DEFAULT_MAX_TITLE_LENGTH = 199

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class StorageConfig:
    """Where and how the playlist file is written."""

    playlist_file: Path = _DEFAULT_PLAYLIST_FILE
    atomic_rewrite: bool = True
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH


@dataclass
class CLIConfig:
    """Interactive menu configuration."""

    confirm_clear: bool = True


@dataclass
class SonglistConfig:
    """Top-level songlist configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
    log_level: str = "WARNING"


def _parse_bool(name: str, value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def _parse_title_length(value: str | int) -> int:
    try:
        length = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"max_title_length: expected an integer, got {value!r}") from None
    if length < 1:
        raise ConfigError(f"max_title_length must be positive, got {length}")
    return length


def load_config(config_path: Path | None = None) -> SonglistConfig:
    """Load configuration from environment variables and optional songlist.toml.

    Priority: environment variables > songlist.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.songlist/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".songlist" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})
    cli_data = file_data.get("cli", {})

    config = SonglistConfig(
        storage=StorageConfig(
            playlist_file=Path(
                os.getenv("SONGLIST_FILE", storage_data.get("playlist_file", str(_DEFAULT_PLAYLIST_FILE)))
            ).expanduser(),
            atomic_rewrite=_parse_bool(
                "atomic_rewrite",
                os.getenv("SONGLIST_ATOMIC", storage_data.get("atomic_rewrite", True)),
            ),
            max_title_length=_parse_title_length(
                os.getenv(
                    "SONGLIST_MAX_TITLE",
                    storage_data.get("max_title_length", DEFAULT_MAX_TITLE_LENGTH),
                )
            ),
        ),
        cli=CLIConfig(
            confirm_clear=_parse_bool("confirm_clear", cli_data.get("confirm_clear", True)),
        ),
        log_level=os.getenv("SONGLIST_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
