"""Port interface for the audio transport (a Discord voice connection)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.playback.entities import StreamDescriptor

TrackEndCallback = Callable[[int], Awaitable[None]]
"""Called with the playback id of the source that stopped producing audio."""


class Transport(ABC):
    """Interface for the single voice connection the session plays through."""

    @abstractmethod
    async def join(self, channel_id: DiscordSnowflake) -> bool:
        """Connect to a voice channel, or move there if already connected elsewhere."""
        ...

    @abstractmethod
    async def play(self, stream: "StreamDescriptor") -> int:
        """Start a stream, replacing whatever is playing, and return its playback id."""
        ...

    @abstractmethod
    async def pause(self) -> bool:
        ...

    @abstractmethod
    async def resume(self) -> bool:
        ...

    @abstractmethod
    async def stop(self) -> bool:
        """Stop the current source. The track end callback is not invoked for it."""
        ...

    @abstractmethod
    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        """Set callback for when a playback ends on its own."""
        ...
