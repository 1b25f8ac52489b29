"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (bot, cogs, voice transport, control panel)
- Audio (yt-dlp track and playlist source)
"""

from discord_jukebox.infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter
from discord_jukebox.infrastructure.discord.bot import create_bot

__all__ = [
    "create_bot",
    "DiscordVoiceAdapter",
]
