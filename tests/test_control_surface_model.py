"""
Unit Tests for the control surface renderer

Tests for:
- LastAction descriptions (accepted and declined)
- ControlSurfaceModel.content assembly
- build_control_surface for playlist, single track, loop and stopped sessions
"""

import pytest

from discord_jukebox.domain.playback.entities import PlaybackState
from discord_jukebox.domain.playback.queue import PlaylistQueue
from discord_jukebox.domain.playback.surface import (
    ControlSurfaceModel,
    LastAction,
    build_control_surface,
)
from discord_jukebox.domain.playback.value_objects import ActionKind, PlaybackStatus


@pytest.fixture
def loaded_queue(make_listing):
    queue = PlaylistQueue()
    queue.load(make_listing(4, title="Road Trip").entries, "Road Trip")
    return queue


# =============================================================================
# LastAction / Model Tests
# =============================================================================


class TestLastAction:
    """Tests for last action descriptions."""

    def test_accepted_description(self):
        """Should describe an accepted skip."""
        action = LastAction(kind=ActionKind.SKIP, accepted=True, actor_name="alice")

        assert action.description == "⏭️ Skipped to next song"

    def test_declined_description(self):
        """Should describe a declined pause."""
        action = LastAction(kind=ActionKind.PAUSE, accepted=False, actor_name="alice")

        assert action.description == "❌ Pause failed - nothing playing"

    def test_declined_without_specific_text_uses_generic(self):
        """Should fall back to the generic declined text."""
        action = LastAction(kind=ActionKind.STOP, accepted=False, actor_name="alice")

        assert action.description == "❌ Stop failed"


class TestControlSurfaceModel:
    """Tests for the rendered message content."""

    def test_content_joins_sections(self):
        """Should separate header, body and last action with blank lines."""
        model = ControlSurfaceModel(
            header_text="HEADER",
            body_text="BODY",
            last_action=LastAction(kind=ActionKind.SHUFFLE, accepted=True, actor_name="bob"),
        )

        assert model.content == (
            "HEADER\n\nBODY\n\n🔧 **Last Action:** 🔀 Shuffled remaining playlist by bob"
        )

    def test_content_without_body_or_action(self):
        """Should render only the header."""
        assert ControlSurfaceModel(header_text="HEADER").content == "HEADER"


# =============================================================================
# build_control_surface Tests
# =============================================================================


class TestBuildPlaylistSurface:
    """Tests for playlist sessions."""

    def test_loading_first_song(self, loaded_queue):
        """Should show the loading line before the first advance."""
        model = build_control_surface(PlaybackState.idle(), loaded_queue, None, None)

        assert model.header_text == "🎶 **Road Trip**"
        assert model.body_text == "⏳ **Loading first song...**\n📍 **Position:** 1/4"

    def test_now_playing(self, loaded_queue):
        """Should show the current track, its position and URL."""
        track = loaded_queue.advance()
        state = PlaybackState(status=PlaybackStatus.PLAYING, track=track)

        model = build_control_surface(state, loaded_queue, None, None)

        assert model.body_text == (
            "🎵 **Now Playing:** Song 1\n"
            "📍 **Position:** 1/4\n"
            f"🔗 **URL:** {track.source_url}"
        )

    def test_paused(self, loaded_queue):
        """Should show the paused line for a paused track."""
        track = loaded_queue.advance()
        state = PlaybackState(status=PlaybackStatus.PAUSED, track=track)

        model = build_control_surface(state, loaded_queue, None, None)

        assert model.body_text.startswith("⏸️ **Paused:** Song 1")

    def test_buffering(self, loaded_queue):
        """Should show the loading line while a track is buffering."""
        loaded_queue.advance()
        track = loaded_queue.advance()
        state = PlaybackState(status=PlaybackStatus.BUFFERING, track=track)

        model = build_control_surface(state, loaded_queue, None, None)

        assert model.body_text.startswith("⏳ **Loading:** Song 2\n📍 **Position:** 2/4")

    def test_skipping_unavailable(self, loaded_queue):
        """Should announce the unavailable item being skipped."""
        track = loaded_queue.advance()

        model = build_control_surface(PlaybackState.idle(), loaded_queue, None, None, skipped=track)

        assert model.body_text == "🎵 **Skipping unavailable:** Song 1\n📍 **Position:** 1/4"

    def test_finished(self, loaded_queue):
        """Should mark the playlist finished once exhausted."""
        while loaded_queue.advance() is not None:
            pass

        model = build_control_surface(PlaybackState.idle(), loaded_queue, None, None)

        assert model.body_text == "✅ **Playlist finished**"

    def test_includes_last_action(self, loaded_queue):
        """Should append the last action line."""
        action = LastAction(kind=ActionKind.PLAYLIST, accepted=True, actor_name="carol")

        model = build_control_surface(PlaybackState.idle(), loaded_queue, None, action)

        assert model.content.endswith("🔧 **Last Action:** 🎶 Started a playlist by carol")


class TestBuildSingleTrackSurface:
    """Tests for single track and loop sessions."""

    def test_single_track_playing(self, sample_track):
        """Should show the single track header with the URL."""
        state = PlaybackState(status=PlaybackStatus.PLAYING, track=sample_track)

        model = build_control_surface(state, PlaylistQueue(), None, None)

        assert model.header_text == (
            "🎵 **Now Playing:** Single Track\n" f"🔗 **URL:** {sample_track.source_url}"
        )
        assert model.body_text == ""

    def test_loop_playing(self, sample_track):
        """Should show the looping header."""
        state = PlaybackState(status=PlaybackStatus.PLAYING, track=sample_track)

        model = build_control_surface(state, PlaylistQueue(), sample_track, None)

        assert model.header_text.startswith("🔁 **Looping:** Single Track")

    def test_loop_between_replays_still_shows_loop(self, sample_track):
        """Should keep the loop header while the target is re-fetched."""
        model = build_control_surface(PlaybackState.idle(), PlaylistQueue(), sample_track, None)

        assert model.header_text.startswith("🔁 **Looping:** Single Track")

    def test_paused_single_track(self, sample_track):
        """Should show the paused header even for a loop."""
        state = PlaybackState(status=PlaybackStatus.PAUSED, track=sample_track)

        model = build_control_surface(state, PlaylistQueue(), sample_track, None)

        assert model.header_text.startswith("⏸️ **Paused:** Single Track")

    def test_stopped(self):
        """Should show the stopped header when nothing is active."""
        model = build_control_surface(PlaybackState.idle(), PlaylistQueue(), None, None)

        assert model.header_text == "⏹️ **Playback stopped**"
        assert model.body_text == ""
