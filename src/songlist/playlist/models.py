"""Song record and title normalisation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from songlist.config import DEFAULT_MAX_TITLE_LENGTH
from songlist.errors import ValidationError

_LINE_END = re.compile(r"[\r\n]")


@dataclass(frozen=True)
class Song:
    """One playlist entry. ``id`` is unique for the lifetime of the store."""

    id: int
    title: str

    def to_record(self) -> str:
        """Render as a ``id<TAB>title`` line, newline included."""
        return f"{self.id}\t{self.title}\n"


def clean_title(raw: str, max_length: int = DEFAULT_MAX_TITLE_LENGTH) -> str:
    """Cut at the first line ending, drop tabs and bound the length.

    Does not strip surrounding whitespace; file records keep their title as
    written.
    """
    title = _LINE_END.split(raw, maxsplit=1)[0]
    title = title.replace("\t", " ")
    return title[:max_length]


def validate_title(raw: str, max_length: int = DEFAULT_MAX_TITLE_LENGTH) -> str:
    """Normalise a user-supplied title. Raises ValidationError if nothing is left."""
    title = _LINE_END.split(raw, maxsplit=1)[0].replace("\t", " ").strip()
    title = title[:max_length].rstrip()
    if not title:
        raise ValidationError("Empty title.")
    return title
