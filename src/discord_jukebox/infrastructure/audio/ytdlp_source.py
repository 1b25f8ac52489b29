"""TrackSource and PlaylistSource implementation using yt-dlp."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Final, cast

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from discord_jukebox.application.interfaces.audio_source import PlaylistSource, TrackSource
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.playback.entities import PlaylistListing, StreamDescriptor, Track
from discord_jukebox.domain.shared.exceptions import (
    SourceError,
    SourceNotFound,
    SourceRateLimited,
    SourceUnavailable,
)
from discord_jukebox.domain.shared.messages import LogTemplates
from discord_jukebox.infrastructure.audio.models import (
    DEFAULT_FORMAT,
    ExtractorArgs,
    YouTubeExtractorConfig,
    YtDlpOpts,
    YtDlpPlaylistInfo,
    YtDlpStreamInfo,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES: Final[frozenset[int]] = frozenset({403, 429})
NOT_FOUND_STATUSES: Final[frozenset[int]] = frozenset({404, 410})
MAX_CAUSE_DEPTH: Final[int] = 5

HTTP_STATUS_PATTERN: Final[re.Pattern[str]] = re.compile(r"HTTP Error (\d{3})")
NOT_FOUND_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"private|unavailable|does not exist|not found|has been removed", re.IGNORECASE
)


def _http_status(error: BaseException) -> int | None:
    """Find the HTTP status code behind a yt-dlp error, if there is one.

    yt-dlp wraps the network error several times (DownloadError -> ExtractorError
    -> HTTPError), so the chain is walked through ``exc_info``, ``cause`` and
    ``__cause__`` before falling back to the message text.
    """
    current: BaseException | None = error
    for _ in range(MAX_CAUSE_DEPTH):
        if current is None:
            break
        for attr in ("status", "code"):
            status = getattr(current, attr, None)
            if isinstance(status, int):
                return status

        exc_info = getattr(current, "exc_info", None)
        if isinstance(exc_info, tuple) and len(exc_info) > 1 and exc_info[1] is not current:
            current = exc_info[1]
            continue
        cause = getattr(current, "cause", None)
        current = cause if isinstance(cause, BaseException) else current.__cause__

    match = HTTP_STATUS_PATTERN.search(str(error))
    if match:
        return int(match.group(1))
    return None


def classify_download_error(target: str, error: BaseException) -> SourceError:
    """Convert a yt-dlp failure into the matching domain error."""
    status = _http_status(error)
    message = str(error)

    if status in RATE_LIMIT_STATUSES:
        return SourceRateLimited(target, message)
    if status in NOT_FOUND_STATUSES or NOT_FOUND_PATTERN.search(message):
        return SourceNotFound(target, message)
    return SourceUnavailable(target, message)


class YtDlpSource(TrackSource, PlaylistSource):
    """Resolves stream URLs for tracks and flat listings for playlists."""

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._format = self._settings.ytdlp_format or DEFAULT_FORMAT

        extractor_args = None
        if self._settings.pot_server_url:
            extractor_args = ExtractorArgs(
                youtube=YouTubeExtractorConfig(pot_server_url=self._settings.pot_server_url)
            )
            logger.info(LogTemplates.YTDLP_POT_CONFIGURED, self._settings.pot_server_url)

        self._base_opts = YtDlpOpts(format=self._format, extractor_args=extractor_args)

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(noplaylist=False, extract_flat="in_playlist")

    def _extract_sync(self, url: str, opts: YtDlpOpts) -> dict[str, Any]:
        try:
            with YoutubeDL(params=cast(Any, opts.model_dump(exclude_none=True))) as ydl:
                data = ydl.extract_info(url, download=False)
        except DownloadError as exc:
            raise classify_download_error(url, exc) from exc

        if not isinstance(data, dict):
            raise SourceUnavailable(url, f"yt-dlp returned no info for {url}")
        return dict(data)

    def _probe_sync(self, track: Track) -> StreamDescriptor:
        url = track.source_url
        try:
            info = YtDlpStreamInfo.model_validate(self._extract_sync(url, self._get_opts()))
        except SourceError as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url, exc)
            raise

        stream_url = info.stream_url
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, url)
            raise SourceUnavailable(url, f"No audio stream found for {url}")

        return StreamDescriptor(track=track, stream_url=stream_url, codec=info.codec)

    def _list_sync(self, url: str) -> PlaylistListing:
        try:
            info = YtDlpPlaylistInfo.model_validate(
                self._extract_sync(url, self._get_playlist_opts())
            )
        except SourceError as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_PLAYLIST, url, exc)
            raise

        if info.entries is None:
            raise SourceUnavailable(url, f"{url} is not a playlist")

        return PlaylistListing(
            title=info.title,
            entries=[entry.to_entry() for entry in info.entries],
        )

    async def probe(self, track: Track) -> StreamDescriptor:
        return await asyncio.to_thread(self._probe_sync, track)

    async def list(self, url: str) -> PlaylistListing:
        return await asyncio.to_thread(self._list_sync, url)
