"""Playlist store — ordered songs mirrored to a flat text file.

Layout:
    playlist.txt
    ├── 1<TAB>Bohemian Rhapsody      # <id><TAB><title>, one song per line
    ├── 3<TAB>Hey Jude               # file order == playback order
    └── 2<TAB>Imagine

Ids come from a counter that only grows, so a removed or cleared id is never
handed out again by the same store. Adding a song appends one line; removing,
reordering or clearing rewrites the file.
"""
