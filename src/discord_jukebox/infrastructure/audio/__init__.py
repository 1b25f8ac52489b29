"""Audio infrastructure - yt-dlp track and playlist source."""

from discord_jukebox.infrastructure.audio.models import (
    AudioFormatInfo,
    ExtractorArgs,
    YtDlpOpts,
    YtDlpPlaylistEntry,
    YtDlpPlaylistInfo,
    YtDlpStreamInfo,
    YouTubeExtractorConfig,
)
from discord_jukebox.infrastructure.audio.ytdlp_source import YtDlpSource, classify_download_error

__all__ = [
    "AudioFormatInfo",
    "ExtractorArgs",
    "YtDlpOpts",
    "YtDlpPlaylistEntry",
    "YtDlpPlaylistInfo",
    "YtDlpSource",
    "YtDlpStreamInfo",
    "YouTubeExtractorConfig",
    "classify_download_error",
]
