"""Line-oriented playlist file: ``<id><TAB><title>`` per line, UTF-8."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from songlist.config import DEFAULT_MAX_TITLE_LENGTH
from songlist.errors import PersistenceError
from songlist.playlist.models import Song, clean_title

logger = logging.getLogger(__name__)


class PlaylistFile:
    """Mirror of the playlist on disk.

    Insertions are appended (``append_one``); anything that edits or reorders
    existing records regenerates the whole file (``rewrite_all``).
    """

    def __init__(
        self,
        path: Path,
        atomic: bool = True,
        max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
    ) -> None:
        self.path = Path(path)
        self.atomic = atomic
        self.max_title_length = max_title_length

    # ── Read ──────────────────────────────────────────────────

    def load_all(self) -> list[Song]:
        """Read every well-formed record in file order.

        A missing file means first run and yields an empty list. Lines without
        a tab are skipped silently; lines with a bad id, an empty title or an
        id seen earlier are skipped with a warning.
        """
        if not self.path.exists():
            logger.info("No playlist file at %s, starting empty", self.path)
            return []

        songs: list[Song] = []
        seen: set[int] = set()
        try:
            with self.path.open("r", encoding="utf-8", errors="replace", newline="") as f:
                for lineno, line in enumerate(f, start=1):
                    song = self._parse_line(line, lineno)
                    if song is None:
                        continue
                    if song.id in seen:
                        logger.warning("%s:%d: duplicate id %d, skipped", self.path, lineno, song.id)
                        continue
                    seen.add(song.id)
                    songs.append(song)
        except OSError as e:
            raise PersistenceError(f"cannot read {self.path}: {e}", self.path) from e

        logger.info("Loaded %d song(s) from %s", len(songs), self.path)
        return songs

    def _parse_line(self, line: str, lineno: int) -> Song | None:
        raw_id, sep, raw_title = line.partition("\t")
        if not sep:
            return None
        digits = raw_id.strip()
        if not (digits.isascii() and digits.isdigit()):
            logger.warning("%s:%d: invalid id %r, skipped", self.path, lineno, raw_id)
            return None
        song_id = int(digits)
        if song_id < 1:
            logger.warning("%s:%d: non-positive id %d, skipped", self.path, lineno, song_id)
            return None
        title = clean_title(raw_title, self.max_title_length)
        if not title.strip():
            logger.warning("%s:%d: empty title, skipped", self.path, lineno)
            return None
        return Song(id=song_id, title=title)

    # ── Write ─────────────────────────────────────────────────

    def append_one(self, song: Song) -> None:
        """Append a single record. Only valid right after a pure insertion."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            record = song.to_record()
            if not self._ends_with_newline():
                record = "\n" + record
            with self.path.open("a", encoding="utf-8", newline="\n") as f:
                f.write(record)
        except OSError as e:
            raise PersistenceError(f"cannot append to {self.path}: {e}", self.path) from e
        logger.debug("Appended #%d to %s", song.id, self.path)

    def rewrite_all(self, songs: Iterable[Song]) -> None:
        """Replace the file with ``songs`` in order. An empty iterable truncates it."""
        records = "".join(song.to_record() for song in songs)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic:
                self._replace(records)
            else:
                with self.path.open("w", encoding="utf-8", newline="\n") as f:
                    f.write(records)
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}", self.path) from e
        logger.debug("Rewrote %s (%d bytes)", self.path, len(records))

    def _ends_with_newline(self) -> bool:
        """True when a new record can go straight after the file's last byte."""
        if not self.path.exists():
            return True
        with self.path.open("rb") as f:
            if f.seek(0, os.SEEK_END) == 0:
                return True
            f.seek(-1, os.SEEK_END)
            return f.read(1) in (b"\n", b"\r")

    def _replace(self, records: str) -> None:
        """Write to a temp file beside the real target, then move it over.

        A symlinked playlist keeps its link; an existing file keeps its mode.
        """
        target = Path(os.path.realpath(self.path))
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(records)
                f.flush()
                os.fsync(f.fileno())
            if target.exists():
                os.chmod(tmp_name, stat.S_IMODE(target.stat().st_mode))
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
