"""Pydantic models for yt-dlp data transformation and configuration.

These are infrastructure-specific models for parsing external yt-dlp data
and configuring yt-dlp options.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_jukebox.domain.playback.entities import PlaylistEntry
from discord_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr, PositiveInt

DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
DEFAULT_HTTP_CHUNK_SIZE: Final[int] = 1024 * 1024  # 1 MiB
DEFAULT_FORMAT: Final[str] = "251/140/bestaudio[protocol^=http]/bestaudio/best"


# ── Pydantic models for yt-dlp data ────────────────────────────────────


class AudioFormatInfo(BaseModel):
    """A single audio format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None

    @field_validator("url", "acodec", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        """Convert empty / whitespace-only / non-string values to None."""
        if not isinstance(v, str) or not v.strip():
            return None
        return v


class YtDlpStreamInfo(BaseModel):
    """Trimmed yt-dlp extraction result for a single video.

    Extra fields from yt-dlp are silently ignored. Before-validators coerce
    garbage from external yt-dlp data gracefully.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    is_live: bool = False
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator("url", "acodec", "title", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("is_live", mode="before")
    @classmethod
    def _coerce_is_live(cls, v: Any) -> bool:
        return v is True

    @field_validator("formats", mode="before")
    @classmethod
    def _coerce_formats(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [f for f in v if isinstance(f, dict)]

    @property
    def stream_url(self) -> str | None:
        """The direct URL of the selected format, or the last usable audio format."""
        if self.url:
            return self.url
        audio_formats = [f for f in self.formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None

    @property
    def codec(self) -> str | None:
        if self.acodec and self.acodec != "none":
            return self.acodec
        return None


class YtDlpPlaylistEntry(BaseModel):
    """One flat (unresolved) entry of a yt-dlp playlist extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr | None = None
    url: NonEmptyStr | None = None
    webpage_url: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    is_live: bool | None = None
    live_status: NonEmptyStr | None = None

    @field_validator("id", "url", "webpage_url", "title", "live_status", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("is_live", mode="before")
    @classmethod
    def _coerce_is_live(cls, v: Any) -> bool | None:
        return v if isinstance(v, bool) else None

    def to_entry(self) -> PlaylistEntry:
        return PlaylistEntry(
            id=self.id,
            url=self.webpage_url or self.url,
            title=self.title,
            is_live=bool(self.is_live) or self.live_status == "is_live",
        )


class YtDlpPlaylistInfo(BaseModel):
    """Trimmed yt-dlp extraction result for a playlist."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    entries: list[YtDlpPlaylistEntry] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("entries", mode="before")
    @classmethod
    def _coerce_entries(cls, v: Any) -> list[Any] | None:
        if v is None:
            return None
        return [e for e in v if isinstance(e, dict)]


# ── yt-dlp option models ───────────────────────────────────────────────


class YouTubeExtractorConfig(BaseModel):
    """YouTube-specific yt-dlp extractor arguments."""

    model_config = ConfigDict(frozen=True)

    pot_server_url: HttpUrlStr
    player_client: list[NonEmptyStr] = Field(
        default_factory=lambda: ["android", "web"], min_length=1,
    )


class ExtractorArgs(BaseModel):
    """Container for yt-dlp extractor arguments."""

    model_config = ConfigDict(frozen=True)

    youtube: YouTubeExtractorConfig


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    forceipv4: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
    http_chunk_size: PositiveInt = DEFAULT_HTTP_CHUNK_SIZE
    format: NonEmptyStr | None = None
    skip_download: bool = True
    extract_flat: NonEmptyStr | bool = False
    extractor_args: ExtractorArgs | None = None
