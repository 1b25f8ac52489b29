"""Port interface for the rendered control panel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.playback.surface import ControlSurfaceModel


class ControlSurface(ABC):
    """Interface for the one live control panel of the session.

    Both methods raise ``SurfaceRenderFailure`` when the panel cannot be
    written.
    """

    @abstractmethod
    async def create(self, model: "ControlSurfaceModel", channel_id: DiscordSnowflake) -> None:
        """Post a fresh panel. The previous panel, if any, is never edited again."""
        ...

    @abstractmethod
    async def update(self, model: "ControlSurfaceModel") -> None:
        """Edit the current panel in place. A no-op when no panel exists."""
        ...
