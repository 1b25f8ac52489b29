"""Core domain entities for the playback bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.playback.value_objects import PlaybackStatus, TrackId, TrackIdField
from discord_jukebox.domain.shared.types import NonEmptyStr


class PlaylistEntry(BaseModel):
    """Raw item of a playlist listing, before filtering."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    url: str | None = None
    title: str | None = None
    is_live: bool = False

    @property
    def is_playable(self) -> bool:
        return bool(self.id) and bool(self.url) and not self.is_live


class PlaylistListing(BaseModel):
    """Everything a playlist source returns for one playlist URL."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    entries: list[PlaylistEntry] = Field(default_factory=list)


class Track(BaseModel):
    """Immutable value object representing one playable audio item."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: TrackIdField
    display_title: NonEmptyStr
    source_url: NonEmptyStr
    is_live: bool = False

    @classmethod
    def from_url(cls, url: str, title: str | None = None) -> Track:
        """Build a track for a URL issued directly by a play or loop command."""
        return cls(id=TrackId.from_url(url), display_title=title or url, source_url=url)

    @classmethod
    def from_entry(cls, entry: PlaylistEntry) -> Track:
        """Build a track from a playable playlist entry."""
        if not entry.is_playable:
            raise ValueError(f"Playlist entry {entry.id!r} is not playable")
        return cls(
            id=TrackId(entry.id),
            display_title=entry.title or entry.url,
            source_url=entry.url,
            is_live=entry.is_live,
        )


class StreamDescriptor(BaseModel):
    """A probed audio stream, ready to hand to the transport."""

    model_config = ConfigDict(frozen=True)

    track: Track
    stream_url: NonEmptyStr
    codec: str | None = None


class PlaybackState(BaseModel):
    """Tagged value describing the session: a status plus the track it concerns."""

    model_config = ConfigDict(frozen=True)

    status: PlaybackStatus = PlaybackStatus.IDLE
    track: Track | None = None

    @classmethod
    def idle(cls) -> PlaybackState:
        return cls()

    @property
    def is_idle(self) -> bool:
        return self.status is PlaybackStatus.IDLE

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def __str__(self) -> str:
        if self.track is None:
            return self.status.value
        return f"{self.status.value}({self.track.id})"
