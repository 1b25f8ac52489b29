"""Posts and edits the control panel message in a Discord text channel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.control_surface import ControlSurface
from discord_jukebox.domain.shared.exceptions import SurfaceRenderFailure
from discord_jukebox.domain.shared.messages import LogTemplates
from discord_jukebox.infrastructure.discord.views.control_panel_view import ControlPanelView
from discord_jukebox.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.services.orchestrator import PlaybackOrchestrator
    from ....domain.playback.surface import ControlSurfaceModel

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 2000


class DiscordControlSurface(ControlSurface):
    """Keeps track of the one live control panel.

    ``create`` posts a new message with a fresh ``ControlPanelView``; the
    previous view is stopped and its message is left as it was.
    """

    def __init__(self, bot: discord.Client) -> None:
        self._bot = bot
        self._orchestrator: PlaybackOrchestrator | None = None
        self._view: ControlPanelView | None = None

    def bind(self, orchestrator: PlaybackOrchestrator) -> None:
        """Set the orchestrator the panel buttons drive."""
        self._orchestrator = orchestrator

    @property
    def current_message(self) -> discord.Message | None:
        return self._view.message if self._view is not None else None

    async def _resolve_channel(self, channel_id: int) -> discord.abc.Messageable:
        channel = self._bot.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self._bot.fetch_channel(channel_id)
            except discord.HTTPException as exc:
                raise SurfaceRenderFailure(f"Cannot reach channel {channel_id}: {exc}") from exc
        if not isinstance(channel, discord.abc.Messageable):
            raise SurfaceRenderFailure(f"Channel {channel_id} cannot receive messages")
        return channel

    async def create(self, model: ControlSurfaceModel, channel_id: int) -> None:
        if self._orchestrator is None:
            raise SurfaceRenderFailure("Control surface is not bound to an orchestrator")

        if self._view is not None:
            self._view.stop()
            self._view = None

        channel = await self._resolve_channel(channel_id)
        view = ControlPanelView(self._orchestrator)
        try:
            message = await channel.send(
                content=truncate(model.content, MAX_MESSAGE_LENGTH), view=view
            )
        except discord.HTTPException as exc:
            view.stop()
            raise SurfaceRenderFailure(str(exc)) from exc

        view.set_message(message)
        self._view = view
        logger.info(LogTemplates.SURFACE_CREATED, channel_id)

    async def update(self, model: ControlSurfaceModel) -> None:
        message = self.current_message
        if message is None:
            logger.debug(LogTemplates.SURFACE_MISSING)
            return

        try:
            await message.edit(content=truncate(model.content, MAX_MESSAGE_LENGTH), view=self._view)
        except discord.HTTPException as exc:
            raise SurfaceRenderFailure(str(exc)) from exc
