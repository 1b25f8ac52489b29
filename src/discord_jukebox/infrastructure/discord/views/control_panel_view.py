"""Control panel view: the five playback buttons under the control message."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.infrastructure.discord.views.base_view import BaseInteractiveView

if TYPE_CHECKING:
    from ....application.services.orchestrator import PlaybackOrchestrator


def actor_name(interaction: discord.Interaction) -> str:
    user = interaction.user
    return getattr(user, "display_name", None) or user.name


class ControlPanelView(BaseInteractiveView):
    """Skip, pause, resume, stop and shuffle buttons.

    Presses are acknowledged silently; the outcome shows up as the "Last Action"
    line the next time the panel is rendered.
    """

    def __init__(self, orchestrator: PlaybackOrchestrator) -> None:
        super().__init__(timeout=None)
        self.orchestrator = orchestrator

    async def _acknowledge(self, interaction: discord.Interaction) -> str:
        await interaction.response.defer()
        return actor_name(interaction)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_SKIP, style=discord.ButtonStyle.primary, custom_id="skip"
    )
    async def skip_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        actor = await self._acknowledge(interaction)
        await self.orchestrator.skip(actor=actor)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_PAUSE,
        style=discord.ButtonStyle.secondary,
        custom_id="pause",
    )
    async def pause_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        actor = await self._acknowledge(interaction)
        await self.orchestrator.pause(actor=actor)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_RESUME,
        style=discord.ButtonStyle.success,
        custom_id="resume",
    )
    async def resume_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        actor = await self._acknowledge(interaction)
        await self.orchestrator.resume(actor=actor)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_STOP, style=discord.ButtonStyle.danger, custom_id="stop"
    )
    async def stop_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        actor = await self._acknowledge(interaction)
        await self.orchestrator.stop(actor=actor)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_SHUFFLE,
        style=discord.ButtonStyle.secondary,
        custom_id="shuffle",
    )
    async def shuffle_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        actor = await self._acknowledge(interaction)
        await self.orchestrator.shuffle(actor=actor)
