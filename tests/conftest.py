import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest

# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    from discord_jukebox.domain.playback.entities import Track

    return Track.from_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ", title="Test Track")


@pytest.fixture
def make_entry():
    """Factory for raw playlist entries."""
    from discord_jukebox.domain.playback.entities import PlaylistEntry

    def _make(index: int, *, is_live: bool = False, **overrides):
        fields = {
            "id": f"vid{index:08d}",
            "url": f"https://www.youtube.com/watch?v=vid{index:08d}",
            "title": f"Song {index}",
            "is_live": is_live,
        }
        fields.update(overrides)
        return PlaylistEntry(**fields)

    return _make


@pytest.fixture
def make_listing(make_entry):
    """Factory for a playlist listing of ``count`` playable entries."""
    from discord_jukebox.domain.playback.entities import PlaylistListing

    def _make(count: int, title: str = "Road Trip", overrides: dict | None = None):
        overrides = overrides or {}
        return PlaylistListing(
            title=title,
            entries=[make_entry(i, **overrides.get(i, {})) for i in range(1, count + 1)],
        )

    return _make


# ============================================================================
# Port Fixtures
# ============================================================================


@pytest.fixture
def track_source():
    """TrackSource whose probe succeeds for every track."""
    from discord_jukebox.domain.playback.entities import StreamDescriptor

    source = MagicMock()
    source.probe = AsyncMock(
        side_effect=lambda track: StreamDescriptor(
            track=track, stream_url=f"https://stream.example/{track.id}", codec="opus"
        )
    )
    return source


@pytest.fixture
def playlist_source(make_listing):
    """PlaylistSource returning a five item playlist."""
    source = MagicMock()
    source.list = AsyncMock(return_value=make_listing(5))
    return source


@pytest.fixture
def transport():
    """Transport that joins successfully and numbers each play call."""
    counter = itertools.count(1)

    mock = MagicMock()
    mock.join = AsyncMock(return_value=True)
    mock.play = AsyncMock(side_effect=lambda stream: next(counter))
    mock.pause = AsyncMock(return_value=True)
    mock.resume = AsyncMock(return_value=True)
    mock.stop = AsyncMock(return_value=True)
    mock.set_on_track_end_callback = MagicMock()
    return mock


@pytest.fixture
def control_surface():
    """ControlSurface recording create/update calls."""
    mock = MagicMock()
    mock.create = AsyncMock()
    mock.update = AsyncMock()
    return mock


@pytest.fixture
def fake_sleep():
    """Replacement for asyncio.sleep that returns immediately."""
    return AsyncMock()


@pytest.fixture
def keep_order_rng():
    """Random source whose shuffle leaves the list untouched."""
    rng = MagicMock()
    rng.shuffle = MagicMock()
    return rng


@pytest.fixture
def orchestrator(
    track_source, playlist_source, transport, control_surface, fake_sleep, keep_order_rng
):
    """PlaybackOrchestrator wired to mock ports."""
    from discord_jukebox.application.services.orchestrator import PlaybackOrchestrator

    return PlaybackOrchestrator(
        track_source=track_source,
        playlist_source=playlist_source,
        transport=transport,
        control_surface=control_surface,
        sleep=fake_sleep,
        rng=keep_order_rng,
    )
