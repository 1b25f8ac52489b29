"""Discord cogs - command handlers."""

from discord_jukebox.infrastructure.discord.cogs.playback_cog import PlaybackCog

__all__ = [
    "PlaybackCog",
]
