"""Dependency Injection Container

Manages the application's dependency graph. Components are created on-demand
and cached for reuse for the lifetime of the bot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.services.orchestrator import PlaybackOrchestrator
    from ..infrastructure.audio.ytdlp_source import YtDlpSource
    from ..infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter
    from ..infrastructure.discord.services.control_surface import DiscordControlSurface
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. The voice adapter
    and the control surface need the bot, so ``set_bot`` must run first.
    """

    settings: Settings
    _bot: Bot | None = None

    # Infrastructure adapters
    _track_source: YtDlpSource | None = None
    _voice_adapter: DiscordVoiceAdapter | None = None
    _control_surface: DiscordControlSurface | None = None

    # Application services
    _orchestrator: PlaybackOrchestrator | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Infrastructure Adapters ===

    @property
    def track_source(self) -> YtDlpSource:
        """Get the yt-dlp source (serves both tracks and playlists)."""
        if self._track_source is None:
            from ..infrastructure.audio.ytdlp_source import YtDlpSource

            self._track_source = YtDlpSource(self.settings.audio)
        return self._track_source

    @property
    def voice_adapter(self) -> DiscordVoiceAdapter:
        """Get the voice adapter."""
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter

            self._voice_adapter = DiscordVoiceAdapter(
                self.bot, self.settings.audio, self.settings.playback
            )
        return self._voice_adapter

    @property
    def control_surface(self) -> DiscordControlSurface:
        """Get the control panel renderer."""
        if self._control_surface is None:
            from ..infrastructure.discord.services.control_surface import (
                DiscordControlSurface,
            )

            self._control_surface = DiscordControlSurface(self.bot)
        return self._control_surface

    # === Application Services ===

    @property
    def orchestrator(self) -> PlaybackOrchestrator:
        """Get the playback orchestrator."""
        if self._orchestrator is None:
            from ..application.services.orchestrator import PlaybackOrchestrator

            playback = self.settings.playback
            self._orchestrator = PlaybackOrchestrator(
                track_source=self.track_source,
                playlist_source=self.track_source,
                transport=self.voice_adapter,
                control_surface=self.control_surface,
                track_retry_policy=playback.track_retry_policy,
                playlist_retry_policy=playback.playlist_retry_policy,
                skip_delay=playback.skip_delay_seconds,
            )
            self.control_surface.bind(self._orchestrator)
        return self._orchestrator

    async def shutdown(self) -> None:
        """Stop playback and leave voice."""
        if self._voice_adapter is not None:
            await self._voice_adapter.disconnect()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
