"""Discord voice adapter implementing Transport for connection and playback."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.transport import TrackEndCallback, Transport
from discord_jukebox.config.settings import AudioSettings, PlaybackSettings
from discord_jukebox.domain.shared.exceptions import TransportError
from discord_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ....domain.playback.entities import StreamDescriptor

logger = logging.getLogger(__name__)

# Matches yt-dlp's Android client user-agent to avoid YouTube 403 responses
ANDROID_USER_AGENT = "com.google.android.youtube/19.44.38 (Linux; U; Android 14) gzip"

OPUS_CODEC = "opus"


class DiscordVoiceAdapter(Transport):
    """The one voice connection the session plays through.

    Every ``play`` gets a fresh playback id. Sources we stop ourselves (stop,
    or a new play replacing the old one) are remembered so their FFmpeg
    ``after`` callback is not reported as a natural end.
    """

    def __init__(
        self,
        bot: discord.Client,
        settings: AudioSettings | None = None,
        playback_settings: PlaybackSettings | None = None,
    ) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._connect_timeout = (playback_settings or PlaybackSettings()).connect_timeout_seconds
        self._ffmpeg_options = self._settings.ffmpeg_options

        self._voice_client: discord.VoiceClient | None = None
        self._on_track_end: TrackEndCallback | None = None
        self._next_playback_id = 0
        self._current_playback_id: int | None = None
        self._suppressed: set[int] = set()

    def _get_voice_client(self) -> discord.VoiceClient | None:
        vc = self._voice_client
        if vc is None or not vc.is_connected():
            return None
        return vc

    # TODO(integ): Test real voice connect with a test bot in a test guild.
    # Verify: successful connect, self-deaf, timeout, permission denied (Forbidden).
    async def join(self, channel_id: int) -> bool:
        channel = self._bot.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            return False

        vc = self._get_voice_client()
        if vc is not None and vc.channel is not None and vc.channel.id == channel_id:
            return True

        try:
            async with asyncio.timeout(self._connect_timeout):
                if vc is not None:
                    await vc.move_to(channel)
                    logger.info(LogTemplates.VOICE_MOVED, channel.name)
                else:
                    self._voice_client = await channel.connect(self_deaf=True)
                    logger.info(LogTemplates.VOICE_CONNECTED, channel.name)
            await self._ensure_self_deaf(channel)
            logger.info(LogTemplates.VOICE_READY)
            return True
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            return False
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def _ensure_self_deaf(self, channel: discord.VoiceChannel | discord.StageChannel) -> None:
        """Ensure the bot is self-deafened in the guild's current voice connection."""
        try:
            await channel.guild.change_voice_state(channel=channel, self_deaf=True)
        except discord.HTTPException as exc:
            logger.debug(LogTemplates.VOICE_SELF_DEAFEN_FAILED, channel.guild.id, exc)

    # TODO(integ): Test real disconnect after a live connect. Verify voice_client is cleaned up.
    async def disconnect(self) -> bool:
        vc = self._voice_client
        self._voice_client = None
        if vc is None:
            return True

        self._suppress_current()
        await vc.disconnect(force=True)
        logger.info(LogTemplates.VOICE_DISCONNECTED)
        return True

    def _build_source(self, stream: StreamDescriptor) -> discord.AudioSource:
        # User-Agent must match yt-dlp's Android client to prevent YouTube 403
        base_before_opts = self._ffmpeg_options.get("before_options", "")
        before_opts = f'{base_before_opts} -headers "User-Agent: {ANDROID_USER_AGENT}"'
        options = self._ffmpeg_options.get("options", "")

        if stream.codec == OPUS_CODEC:
            return discord.FFmpegOpusAudio(
                stream.stream_url,
                codec="copy",
                before_options=before_opts,
                options=options,
            )
        return discord.FFmpegPCMAudio(
            stream.stream_url,
            before_options=before_opts,
            options=options,
        )

    # TODO(integ): Test playing a short audio clip via FFmpeg on a live voice connection.
    # Verify: after_callback fires when the clip ends and the playback id is reported.
    async def play(self, stream: StreamDescriptor) -> int:
        vc = self._get_voice_client()
        if vc is None:
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED)
            raise TransportError(LogTemplates.VOICE_NOT_CONNECTED)

        if vc.is_playing() or vc.is_paused():
            self._suppress_current()
            vc.stop()

        self._next_playback_id += 1
        playback_id = self._next_playback_id

        def after_callback(error: Exception | None = None) -> None:
            if error:
                logger.warning(LogTemplates.PLAYBACK_ERROR, playback_id, error)
            asyncio.run_coroutine_threadsafe(
                self._handle_track_end(playback_id),
                self._bot.loop,
            )

        try:
            vc.play(self._build_source(stream), after=after_callback)
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise TransportError(str(e)) from e

        self._current_playback_id = playback_id
        logger.info(LogTemplates.PLAYBACK_STARTED, stream.track.display_title, playback_id)
        return playback_id

    # TODO(integ): Test stop while audio is playing. Verify is_playing() becomes False.
    async def stop(self) -> bool:
        vc = self._get_voice_client()
        if vc is None:
            return False

        if vc.is_playing() or vc.is_paused():
            self._suppress_current()
            vc.stop()
        return True

    async def pause(self) -> bool:
        vc = self._get_voice_client()
        if vc is None or not vc.is_playing():
            return False

        vc.pause()
        logger.info(LogTemplates.PLAYBACK_PAUSED)
        return True

    async def resume(self) -> bool:
        vc = self._get_voice_client()
        if vc is None or not vc.is_paused():
            return False

        vc.resume()
        logger.info(LogTemplates.PLAYBACK_RESUMED)
        return True

    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        self._on_track_end = callback

    def _suppress_current(self) -> None:
        if self._current_playback_id is not None:
            self._suppressed.add(self._current_playback_id)
            self._current_playback_id = None

    async def _handle_track_end(self, playback_id: int) -> None:
        """Called from the FFmpeg thread via run_coroutine_threadsafe."""
        if playback_id in self._suppressed:
            self._suppressed.discard(playback_id)
            return
        if playback_id == self._current_playback_id:
            self._current_playback_id = None

        if self._on_track_end is None:
            logger.warning(LogTemplates.PLAYBACK_NO_CALLBACK, playback_id)
            return

        try:
            await self._on_track_end(playback_id)
        except Exception as e:
            logger.error(LogTemplates.PLAYBACK_CALLBACK_ERROR, playback_id, e)
