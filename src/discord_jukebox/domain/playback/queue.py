"""Ordered playlist queue with a play cursor."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from pydantic import BaseModel, Field, model_validator

from discord_jukebox.domain.playback.entities import PlaylistEntry, Track
from discord_jukebox.domain.shared.exceptions import EmptyPlaylist
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from discord_jukebox.domain.shared.types import NonNegativeInt

logger = logging.getLogger(__name__)


class PlaylistQueue(BaseModel):
    """Tracks of one loaded playlist and the index of the next one to dispatch.

    Everything before ``cursor`` has already been handed out by ``advance()``.
    ``cursor == len(items)`` means the queue is exhausted.
    """

    items: list[Track] = Field(default_factory=list)
    cursor: NonNegativeInt = 0
    title: str = ""

    @model_validator(mode="after")
    def _check_cursor(self) -> PlaylistQueue:
        if self.cursor > len(self.items):
            raise ValueError(ErrorMessages.INVALID_QUEUE_CURSOR.format(length=len(self.items)))
        return self

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_loaded(self) -> bool:
        return bool(self.items)

    @property
    def is_exhausted(self) -> bool:
        return self.is_loaded and self.cursor >= len(self.items)

    @property
    def has_remaining(self) -> bool:
        return self.cursor < len(self.items)

    @property
    def position(self) -> int:
        """1-based position of the last dispatched track (0 before the first advance)."""
        return self.cursor

    def load(self, entries: Iterable[PlaylistEntry], title: str) -> int:
        """Replace the queue with the playable entries and return how many were kept.

        Entries that are live or lack an id or url are dropped. Raises
        ``EmptyPlaylist`` (leaving the queue untouched) if nothing is left.
        """
        tracks = [Track.from_entry(entry) for entry in entries if entry.is_playable]
        logger.info(LogTemplates.PLAYLIST_FILTERED, len(tracks))
        if not tracks:
            raise EmptyPlaylist(title)

        self.items = tracks
        self.cursor = 0
        self.title = title
        return len(tracks)

    def shuffle_remaining(self, rng: random.Random | None = None) -> bool:
        """Permute the not-yet-played tracks in place, keeping history intact.

        Returns False when there is nothing left to shuffle.
        """
        if not self.has_remaining:
            return False

        remaining = self.items[self.cursor :]
        (rng or random).shuffle(remaining)
        self.items = self.items[: self.cursor] + remaining
        logger.debug(LogTemplates.QUEUE_SHUFFLED, len(remaining))
        return True

    def advance(self) -> Track | None:
        """Return the track at the cursor and move past it, or None when exhausted."""
        if not self.has_remaining:
            return None
        track = self.items[self.cursor]
        self.cursor += 1
        return track

    def peek_current(self) -> Track | None:
        """The track most recently returned by ``advance()``."""
        if self.cursor == 0:
            return None
        return self.items[self.cursor - 1]

    def clear(self) -> None:
        self.items = []
        self.cursor = 0
        self.title = ""
