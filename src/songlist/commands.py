"""Playlist commands for the interactive menu.

Each command calls one store operation and returns the text to show the
user, so the menu loop only deals with input and output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from songlist.errors import ValidationError

if TYPE_CHECKING:
    from songlist.playlist.store import PlaylistStore


def format_playlist(store: PlaylistStore) -> str:
    songs = store.list_songs()
    if not songs:
        return "Playlist empty."
    lines = ["", "--- Playlist ---"]
    for idx, song in enumerate(songs, start=1):
        lines.append(f"{idx:3d}) #{song.id} - {song.title}")
    return "\n".join(lines)


def get_playlist_commands(store: PlaylistStore) -> dict[str, Callable[..., str]]:
    """Return a dict of command_name -> callable for playlist operations."""

    def with_save_status(text: str) -> str:
        if store.last_error is not None:
            return f"{text}\nWarning: changes not saved ({store.last_error})"
        return text

    def add(title: str) -> str:
        """Add a song at the end of the playlist."""
        try:
            song = store.add_song(title)
        except ValidationError as e:
            return str(e)
        return with_save_status(f"Added: #{song.id} - {song.title}")

    def remove(song_id: int) -> str:
        """Remove a song by id."""
        song = store.get_song(song_id)
        if song is None or not store.remove_song(song_id):
            return f"Song #{song_id} not found."
        return with_save_status(f"Removed: #{song.id} - {song.title}")

    def show() -> str:
        """Show the playlist in playback order."""
        return format_playlist(store)

    def move_up(song_id: int) -> str:
        """Move a song one position towards the start."""
        if not store.move_up(song_id):
            return "Cannot move up (maybe head or not found)."
        return with_save_status("Moved up.")

    def move_down(song_id: int) -> str:
        """Move a song one position towards the end."""
        if not store.move_down(song_id):
            return "Cannot move down (last or not found)."
        return with_save_status("Moved down.")

    def clear() -> str:
        """Remove every song and truncate the playlist file."""
        store.clear()
        return with_save_status("Playlist cleared.")

    return {
        "add": add,
        "remove": remove,
        "show": show,
        "move_up": move_up,
        "move_down": move_down,
        "clear": clear,
    }
