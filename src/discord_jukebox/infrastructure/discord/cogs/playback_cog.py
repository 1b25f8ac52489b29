"""Slash-command cog for playback: ping, play, loop, playlist."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages
from discord_jukebox.infrastructure.discord.guards.voice_guards import (
    get_voice_channel_id,
    reply,
)
from discord_jukebox.infrastructure.discord.views.control_panel_view import actor_name

if TYPE_CHECKING:
    from ....application.services.orchestrator import PlaybackOrchestrator
    from ....config.container import Container


class PlaybackCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @property
    def orchestrator(self) -> PlaybackOrchestrator:
        return self.container.orchestrator

    @app_commands.command(name="ping", description="Replies with Pong!")
    async def ping(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message(DiscordUIMessages.PONG)

    @app_commands.command(name="play", description="Play a YouTube video once.")
    @app_commands.describe(url="YouTube video URL")
    async def play(self, interaction: discord.Interaction, url: str) -> None:
        await interaction.response.defer()
        voice_channel_id = await get_voice_channel_id(interaction)
        if voice_channel_id is None:
            return

        outcome = await self.orchestrator.play(
            url,
            actor=actor_name(interaction),
            voice_channel_id=voice_channel_id,
            text_channel_id=interaction.channel_id,
        )
        await reply(interaction, outcome.message)

    @app_commands.command(name="loop", description="Play a YouTube video on repeat.")
    @app_commands.describe(url="YouTube video URL")
    async def loop(self, interaction: discord.Interaction, url: str) -> None:
        await interaction.response.defer()
        voice_channel_id = await get_voice_channel_id(interaction)
        if voice_channel_id is None:
            return

        outcome = await self.orchestrator.loop(
            url,
            actor=actor_name(interaction),
            voice_channel_id=voice_channel_id,
            text_channel_id=interaction.channel_id,
        )
        await reply(interaction, outcome.message)

    @app_commands.command(name="playlist", description="Shuffle-play a YouTube playlist.")
    @app_commands.describe(url="YouTube playlist URL")
    async def playlist(self, interaction: discord.Interaction, url: str) -> None:
        await interaction.response.defer()
        voice_channel_id = await get_voice_channel_id(interaction)
        if voice_channel_id is None:
            return

        async def progress(message: str) -> None:
            await interaction.edit_original_response(content=message)

        outcome = await self.orchestrator.playlist(
            url,
            actor=actor_name(interaction),
            voice_channel_id=voice_channel_id,
            text_channel_id=interaction.channel_id,
            progress=progress,
        )
        await reply(interaction, outcome.message)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PlaybackCog(bot, container))
