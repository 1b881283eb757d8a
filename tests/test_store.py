"""Tests for the playlist store: operations plus their effect on disk."""

from __future__ import annotations

import logging

import pytest
from pathlib import Path

from songlist.config import SonglistConfig, StorageConfig
from songlist.errors import PersistenceError, ValidationError
from songlist.playlist.store import PlaylistStore


@pytest.fixture
def path(tmp_path: Path) -> Path:
    return tmp_path / "playlist.txt"


@pytest.fixture
def store(path: Path) -> PlaylistStore:
    return PlaylistStore(path)


def pairs(store: PlaylistStore) -> list[tuple[int, str]]:
    return [(s.id, s.title) for s in store.list_songs()]


def reload(path: Path) -> list[tuple[int, str]]:
    return pairs(PlaylistStore(path))


class TestInitialize:
    def test_first_run_is_empty(self, store: PlaylistStore, path: Path):
        assert store.list_songs() == ()
        assert store.next_id == 1
        assert not path.exists()

    def test_from_config(self, path: Path):
        path.write_text("4\tD\n", encoding="utf-8")
        config = SonglistConfig(storage=StorageConfig(playlist_file=path, atomic_rewrite=False))
        store = PlaylistStore.initialize(config)
        assert pairs(store) == [(4, "D")]
        assert store.next_id == 5
        assert store.file.atomic is False

    def test_next_id_after_max(self, path: Path):
        path.write_text("2\tB\n7\tG\n3\tC\n", encoding="utf-8")
        store = PlaylistStore(path)
        assert store.add_song("H").id == 8


class TestAddSong:
    def test_appends_record(self, store: PlaylistStore, path: Path):
        store.add_song("A")
        store.add_song("B")
        assert path.read_text(encoding="utf-8") == "1\tA\n2\tB\n"

    def test_append_does_not_rewrite_existing_lines(self, path: Path):
        # a line the loader skips survives an append, but not a rewrite
        path.write_text("1\tA\nnot a record\n", encoding="utf-8")
        store = PlaylistStore(path)
        store.add_song("B")
        assert path.read_text(encoding="utf-8") == "1\tA\nnot a record\n2\tB\n"
        store.move_up(2)
        assert path.read_text(encoding="utf-8") == "2\tB\n1\tA\n"

    def test_append_after_unterminated_last_line(self, path: Path):
        path.write_text("1\tA", encoding="utf-8")
        store = PlaylistStore(path)
        store.add_song("B")
        assert path.read_text(encoding="utf-8") == "1\tA\n2\tB\n"
        assert reload(path) == [(1, "A"), (2, "B")]

    def test_empty_title(self, store: PlaylistStore, path: Path):
        with pytest.raises(ValidationError):
            store.add_song("  \n")
        assert store.list_songs() == ()
        assert store.next_id == 1
        assert not path.exists()

    def test_ids_strictly_increasing(self, store: PlaylistStore):
        ids = [store.add_song(f"Song {i}").id for i in range(20)]
        assert ids == sorted(set(ids))
        assert ids == list(range(1, 21))


class TestStructuralChanges:
    def test_scenario(self, store: PlaylistStore, path: Path):
        assert store.add_song("A").id == 1
        assert store.add_song("B").id == 2
        assert store.add_song("C").id == 3
        assert store.move_up(3) is True
        assert pairs(store) == [(1, "A"), (3, "C"), (2, "B")]
        assert store.remove_song(1) is True
        assert pairs(store) == [(3, "C"), (2, "B")]
        assert reload(path) == [(3, "C"), (2, "B")]

    def test_move_down_persisted(self, store: PlaylistStore, path: Path):
        for t in "ABC":
            store.add_song(t)
        assert store.move_down(1) is True
        assert reload(path) == [(2, "B"), (1, "A"), (3, "C")]

    def test_failed_ops_do_not_touch_file(self, store: PlaylistStore, path: Path):
        store.add_song("A")
        store.add_song("B")
        # a marker line the loader would skip; any rewrite would drop it
        path.write_text("1\tA\n2\tB\n# marker without tab\n", encoding="utf-8")
        assert store.remove_song(99) is False
        assert store.move_up(1) is False
        assert store.move_down(2) is False
        assert path.read_text(encoding="utf-8").endswith("# marker without tab\n")

    def test_clear(self, store: PlaylistStore, path: Path):
        for t in "ABC":
            store.add_song(t)
        store.clear()
        assert store.list_songs() == ()
        assert path.read_text(encoding="utf-8") == ""
        assert store.add_song("D").id == 4
        assert reload(path) == [(4, "D")]

    def test_clear_on_empty_creates_file(self, store: PlaylistStore, path: Path):
        store.clear()
        assert path.exists()
        assert path.read_text(encoding="utf-8") == ""

    def test_ids_not_reused_after_remove(self, store: PlaylistStore):
        store.add_song("A")
        store.add_song("B")
        store.remove_song(2)
        assert store.add_song("C").id == 3

    def test_get_song_and_position(self, store: PlaylistStore):
        store.add_song("A")
        store.add_song("B")
        store.move_up(2)
        assert store.get_song(2).title == "B"
        assert store.position(2) == 1
        assert store.get_song(5) is None
        assert len(store) == 2


class TestPersistenceFailure:
    @pytest.fixture
    def broken(self, tmp_path: Path) -> PlaylistStore:
        store = PlaylistStore(tmp_path / "playlist.txt")
        store.add_song("A")
        store.add_song("B")
        # Point the store at a directory so every write fails
        blocked = tmp_path / "blocked"
        blocked.mkdir()
        store.file.path = blocked
        return store

    def test_add_kept_in_memory(self, broken: PlaylistStore, caplog):
        with caplog.at_level(logging.ERROR, logger="songlist.playlist.store"):
            song = broken.add_song("C")
        assert song.id == 3
        assert pairs(broken)[-1] == (3, "C")
        assert isinstance(broken.last_error, PersistenceError)
        assert "Playlist not saved" in caplog.text

    def test_structural_changes_not_rolled_back(self, broken: PlaylistStore):
        assert broken.move_up(2) is True
        assert broken.remove_song(1) is True
        assert pairs(broken) == [(2, "B")]
        broken.clear()
        assert broken.list_songs() == ()
        assert broken.last_error is not None

    def test_error_cleared_after_successful_write(self, broken: PlaylistStore, tmp_path: Path):
        broken.add_song("C")
        assert broken.last_error is not None
        broken.file.path = tmp_path / "playlist.txt"
        broken.move_down(1)
        assert broken.last_error is None
        assert reload(tmp_path / "playlist.txt") == [(2, "B"), (1, "A"), (3, "C")]

    def test_add_after_failed_rewrite_resyncs_file(self, broken: PlaylistStore, tmp_path: Path):
        path = tmp_path / "playlist.txt"
        broken.remove_song(1)
        assert broken.last_error is not None

        broken.file.path = path
        broken.add_song("C")
        assert broken.last_error is None
        assert reload(path) == [(2, "B"), (3, "C")]
        assert path.read_text(encoding="utf-8") == "2\tB\n3\tC\n"

    def test_append_resumes_after_resync(self, broken: PlaylistStore, tmp_path: Path):
        path = tmp_path / "playlist.txt"
        broken.remove_song(1)
        broken.file.path = path
        broken.add_song("C")
        # a line the loader skips shows whether the next write appended or rewrote
        path.write_text("2\tB\n3\tC\n# kept by append\n", encoding="utf-8")
        broken.add_song("D")
        assert path.read_text(encoding="utf-8") == "2\tB\n3\tC\n# kept by append\n4\tD\n"
