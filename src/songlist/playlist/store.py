"""Playlist store: the ordered collection plus its file mirror.

The in-memory collection is the source of truth for the running process.
Writes to the playlist file are best effort: a failed write is logged and
remembered in ``last_error`` but never undoes the change in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from songlist.config import DEFAULT_MAX_TITLE_LENGTH, SonglistConfig
from songlist.errors import PersistenceError
from songlist.playlist.collection import SongCollection
from songlist.playlist.models import Song
from songlist.playlist.persistence import PlaylistFile

logger = logging.getLogger(__name__)


class PlaylistStore:
    """Add, remove, reorder and clear songs; keep the playlist file in step."""

    def __init__(
        self,
        path: Path,
        atomic: bool = True,
        max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
    ) -> None:
        self.file = PlaylistFile(path, atomic=atomic, max_title_length=max_title_length)
        self._songs = SongCollection(max_title_length=max_title_length)
        self.last_error: PersistenceError | None = None
        self._dirty = False
        self._songs.restore(self.file.load_all())

    @classmethod
    def initialize(cls, config: SonglistConfig) -> PlaylistStore:
        """Load from the configured playlist file, or start empty."""
        storage = config.storage
        return cls(
            storage.playlist_file,
            atomic=storage.atomic_rewrite,
            max_title_length=storage.max_title_length,
        )

    @property
    def path(self) -> Path:
        return self.file.path

    @property
    def next_id(self) -> int:
        return self._songs.next_id

    # ── Operations ────────────────────────────────────────────

    def add_song(self, title: str) -> Song:
        """Append a song and its record. Raises ValidationError for an empty title."""
        song = self._songs.insert(title)
        if self._dirty:
            # the file missed an earlier change; appending would not fix it
            self._rewrite()
        else:
            self._persist(self.file.append_one, song)
        logger.info("Added #%d - %s", song.id, song.title)
        return song

    def remove_song(self, song_id: int) -> bool:
        if not self._songs.remove_by_id(song_id):
            return False
        self._rewrite()
        logger.info("Removed #%d", song_id)
        return True

    def move_up(self, song_id: int) -> bool:
        if not self._songs.move_up(song_id):
            return False
        self._rewrite()
        return True

    def move_down(self, song_id: int) -> bool:
        if not self._songs.move_down(song_id):
            return False
        self._rewrite()
        return True

    def clear(self) -> None:
        self._songs.clear()
        self._rewrite()
        logger.info("Playlist cleared (next id stays %d)", self._songs.next_id)

    def list_songs(self) -> tuple[Song, ...]:
        return self._songs.list()

    def get_song(self, song_id: int) -> Song | None:
        return self._songs.get(song_id)

    def position(self, song_id: int) -> int | None:
        return self._songs.position(song_id)

    def __len__(self) -> int:
        return len(self._songs)

    # ── Persistence ───────────────────────────────────────────

    def _rewrite(self) -> None:
        self._persist(self.file.rewrite_all, self._songs.list())

    def _persist(self, write: Callable[..., None], *args: Any) -> None:
        try:
            write(*args)
        except PersistenceError as e:
            logger.error("Playlist not saved: %s", e)
            self.last_error = e
            self._dirty = True
        else:
            self.last_error = None
            self._dirty = False
