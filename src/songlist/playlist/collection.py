"""In-memory ordered song collection with monotonic id allocation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from songlist.config import DEFAULT_MAX_TITLE_LENGTH
from songlist.playlist.models import Song, validate_title

logger = logging.getLogger(__name__)


class SongCollection:
    """Songs in playback order.

    Ids come from ``next_id``, which only ever grows: removing songs or
    clearing the collection never makes an id available again.
    """

    def __init__(self, max_title_length: int = DEFAULT_MAX_TITLE_LENGTH) -> None:
        self._songs: list[Song] = []
        self._next_id = 1
        self.max_title_length = max_title_length

    @property
    def next_id(self) -> int:
        return self._next_id

    # ── Loading ───────────────────────────────────────────────

    def restore(self, songs: Iterable[Song]) -> None:
        """Append already-identified songs (e.g. read from disk) in order.

        ``next_id`` moves past the largest id seen; it is never lowered.
        """
        seen = {song.id for song in self._songs}
        for song in songs:
            if song.id in seen:
                logger.warning("Ignoring duplicate song id %d", song.id)
                continue
            seen.add(song.id)
            self._songs.append(song)
            if song.id >= self._next_id:
                self._next_id = song.id + 1

    # ── Mutations ─────────────────────────────────────────────

    def insert(self, title: str) -> Song:
        """Create a song at the end of the playlist."""
        song = Song(id=self._next_id, title=validate_title(title, self.max_title_length))
        self._next_id += 1
        self._songs.append(song)
        return song

    def remove_by_id(self, song_id: int) -> bool:
        """Remove the first song with ``song_id``. False if there is none."""
        index = self._index_of(song_id)
        if index is None:
            return False
        del self._songs[index]
        return True

    def move_up(self, song_id: int) -> bool:
        index = self._index_of(song_id)
        if index is None or index == 0:
            return False
        self._swap(index - 1, index)
        return True

    def move_down(self, song_id: int) -> bool:
        index = self._index_of(song_id)
        if index is None or index == len(self._songs) - 1:
            return False
        self._swap(index, index + 1)
        return True

    def clear(self) -> None:
        # next_id is kept on purpose: cleared ids are not handed out again.
        self._songs.clear()

    # ── Queries ───────────────────────────────────────────────

    def list(self) -> tuple[Song, ...]:
        return tuple(self._songs)

    def get(self, song_id: int) -> Song | None:
        index = self._index_of(song_id)
        return None if index is None else self._songs[index]

    def position(self, song_id: int) -> int | None:
        """1-based playback position of ``song_id``."""
        index = self._index_of(song_id)
        return None if index is None else index + 1

    def __len__(self) -> int:
        return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        return iter(tuple(self._songs))

    def __contains__(self, song_id: object) -> bool:
        return any(song.id == song_id for song in self._songs)

    # ── Internals ─────────────────────────────────────────────

    def _index_of(self, song_id: int) -> int | None:
        for i, song in enumerate(self._songs):
            if song.id == song_id:
                return i
        return None

    def _swap(self, i: int, j: int) -> None:
        self._songs[i], self._songs[j] = self._songs[j], self._songs[i]
