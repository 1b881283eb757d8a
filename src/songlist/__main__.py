"""Entry point: python -m songlist [menu|list]

- No args / "menu": Interactive numbered menu
- "list":           Print the playlist once and exit
"""

from __future__ import annotations

import asyncio
import logging
import sys

from songlist.config import load_config
from songlist.errors import SonglistError


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _run_menu() -> None:
    """Interactive menu mode."""
    config = load_config()
    _setup_logging(config.log_level)

    from songlist.connectors.cli import CLIConnector
    from songlist.playlist.store import PlaylistStore

    store = PlaylistStore.initialize(config)
    cli = CLIConnector(store, confirm_clear=config.cli.confirm_clear)

    try:
        asyncio.run(cli.start())
    except KeyboardInterrupt:
        print("\nExiting.")


def _run_list() -> None:
    """Print the playlist and exit."""
    config = load_config()
    _setup_logging(config.log_level)

    from songlist.commands import format_playlist
    from songlist.playlist.store import PlaylistStore

    store = PlaylistStore.initialize(config)
    print(format_playlist(store).lstrip("\n"))


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "menu"

    try:
        if cmd == "menu":
            _run_menu()
        elif cmd == "list":
            _run_list()
        else:
            print(f"Usage: python -m songlist [menu|list]")
            print(f"  menu   — Interactive playlist menu (default)")
            print(f"  list   — Print the playlist and exit")
            sys.exit(1)
    except SonglistError as e:
        print(f"songlist: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
