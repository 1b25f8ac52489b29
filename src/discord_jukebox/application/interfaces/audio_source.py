"""Port interfaces for resolving tracks and playlists from URLs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from ...domain.playback.entities import PlaylistListing, StreamDescriptor, Track


class TrackSource(ABC):
    """Interface for turning a track into a playable audio stream."""

    @abstractmethod
    async def probe(self, track: "Track") -> "StreamDescriptor":
        """Resolve the track's audio stream.

        Raises ``SourceRateLimited`` on a transient block and
        ``SourceUnavailable`` when the track cannot be played at all.
        """
        ...


class PlaylistSource(ABC):
    """Interface for listing the entries of a playlist."""

    @abstractmethod
    async def list(self, url: NonEmptyStr) -> "PlaylistListing":
        """Fetch the playlist title and its raw entries.

        Raises ``SourceRateLimited``, ``SourceNotFound`` or ``SourceUnavailable``.
        """
        ...
