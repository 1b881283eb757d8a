"""Interactive numbered-menu connector for the playlist store."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from songlist.commands import get_playlist_commands

if TYPE_CHECKING:
    from songlist.playlist.store import PlaylistStore

logger = logging.getLogger(__name__)

MENU = (
    "\n1) Add song\n2) Remove song by id\n3) Show playlist\n4) Move up\n"
    "5) Move down\n6) Clear playlist\n0) Exit\nChoose: "
)

# menu choice -> (command, prompt for the song id)
_ID_COMMANDS = {
    2: ("remove", "Enter song id: "),
    4: ("move_up", "Enter song id to move up: "),
    5: ("move_down", "Enter song id to move down: "),
}


class CLIConnector:
    """Menu REPL — reads from stdin, writes to stdout."""

    def __init__(self, store: PlaylistStore, confirm_clear: bool = True) -> None:
        self._store = store
        self._commands = get_playlist_commands(store)
        self._confirm_clear = confirm_clear
        self._running = False

    @property
    def name(self) -> str:
        return "cli"

    async def start(self) -> None:
        self._running = True
        print("Playlist Manager (persistent)")
        logger.debug("Menu started on %s (%d songs)", self._store.path, len(self._store))

        while self._running:
            line = await self._prompt(MENU)
            if line is None:
                break
            try:
                choice = int(line.strip())
            except ValueError:
                self.reply("Invalid input.")
                continue

            if choice == 0:
                break
            if not await self._dispatch(choice):
                break

        self._running = False
        self.reply("Exiting.")

    async def _dispatch(self, choice: int) -> bool:
        """Run one menu choice. Returns False when input ran out."""
        if choice == 1:
            title = await self._prompt("Enter song title: ")
            if title is None:
                return False
            self.reply(self._commands["add"](title))
        elif choice in _ID_COMMANDS:
            command, prompt = _ID_COMMANDS[choice]
            raw = await self._prompt(prompt)
            if raw is None:
                return False
            try:
                song_id = int(raw.strip())
            except ValueError:
                self.reply("Invalid.")
                return True
            self.reply(self._commands[command](song_id))
        elif choice == 3:
            self.reply(self._commands["show"]())
        elif choice == 6:
            if self._confirm_clear:
                answer = await self._prompt("Confirm clear playlist? (y/N): ")
                if answer is None:
                    return False
                if answer.strip()[:1] not in ("y", "Y"):
                    self.reply("Cancelled.")
                    return True
            self.reply(self._commands["clear"]())
        else:
            self.reply("Invalid.")
        return True

    async def _prompt(self, text: str) -> str | None:
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, self._read_input, text)
        except EOFError:
            return None

    def _read_input(self, prompt: str) -> str | None:
        try:
            sys.stdout.write(prompt)
            sys.stdout.flush()
            raw = sys.stdin.buffer.readline()
            if not raw:
                return None
            return raw.decode("utf-8", errors="replace").rstrip("\r\n")
        except EOFError:
            return None

    async def stop(self) -> None:
        self._running = False

    def reply(self, text: str) -> None:
        print(text)
