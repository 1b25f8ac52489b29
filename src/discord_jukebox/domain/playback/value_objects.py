"""Immutable value objects for the playback bounded context."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import PlainSerializer, PlainValidator

from discord_jukebox.domain.shared.messages import ErrorMessages

_YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
)


@dataclass(frozen=True)
class TrackId:
    """Typically a YouTube video ID or a hash of the URL."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_url(cls, url: str) -> TrackId:
        """Extract track ID from a URL, using YouTube video ID or a URL hash as fallback."""
        for pattern in _YOUTUBE_ID_PATTERNS:
            match = pattern.search(url)
            if match:
                return cls(match.group(1))

        url_hash = hashlib.md5(url.encode()).hexdigest()[:16]
        return cls(url_hash)


# Serializes as plain string, stores as TrackId in the model.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(lambda v: TrackId(v) if isinstance(v, str) else v),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class PlaybackStatus(Enum):
    """What the single playback session is doing right now.

    Transitions (enforced by ``PlaybackStateMachine``):
    - IDLE -> BUFFERING (start)
    - BUFFERING -> PLAYING (fetch succeeded)
    - BUFFERING -> IDLE (fetch failed)
    - PLAYING -> PAUSED (pause)
    - PAUSED -> PLAYING (resume)
    - PLAYING | PAUSED -> IDLE (finish)
    - Any -> IDLE (reset)
    """

    IDLE = "idle"
    BUFFERING = "buffering"
    PLAYING = "playing"
    PAUSED = "paused"

    @property
    def is_active(self) -> bool:
        """A track is handed to the transport (playing or paused)."""
        return self in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)


class FailureKind(Enum):
    """Classification of a source failure for retry purposes."""

    RATE_LIMITED = "rate_limited"
    PERMANENT = "permanent"


class ActionKind(Enum):
    """User-initiated actions that are reported on the control surface."""

    PLAY = "play"
    LOOP = "loop"
    PLAYLIST = "playlist"
    SKIP = "skip"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"
    SHUFFLE = "shuffle"


class OutcomeStatus(Enum):
    """Result classification of a handled command."""

    OK = "ok"
    DECLINED = "declined"
    FAILED = "failed"
