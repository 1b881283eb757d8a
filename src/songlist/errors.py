"""Exceptions shared between the playlist store, the config layer and the CLI."""

from __future__ import annotations


class SonglistError(Exception):
    """Base class for songlist errors."""


class ConfigError(SonglistError):
    """Raised when a configuration value cannot be used."""


class ValidationError(SonglistError, ValueError):
    """Raised when a song title is empty after trimming."""


class PersistenceError(SonglistError, OSError):
    """Raised when the playlist file cannot be read or written.

    The store catches it on writes, logs it and keeps the in-memory change.
    """

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return self.args[0] if self.args else ""
