"""
Unit Tests for PlaybackOrchestrator

Tests for:
- play / loop: success, retry exhaustion, voice join failure
- playlist: filtering, skip-on-failure, exhaustion, listing errors, progress
- skip / pause / resume / stop / shuffle: accepted and declined paths
- Natural track end: loop replay, queue advance, late events ignored
- Stale fetch results and the single in-flight advance guard
- Control surface render failures never abort playback
"""

import asyncio

import pytest

from discord_jukebox.application.services.orchestrator import (
    CommandOutcome,
    playlist_error_message,
)
from discord_jukebox.domain.playback.entities import StreamDescriptor
from discord_jukebox.domain.playback.value_objects import (
    ActionKind,
    OutcomeStatus,
    PlaybackStatus,
)
from discord_jukebox.domain.shared.exceptions import (
    RetriesExhaustedError,
    SourceNotFound,
    SourceRateLimited,
    SourceUnavailable,
    SurfaceRenderFailure,
    TransportError,
)
from discord_jukebox.domain.shared.messages import DiscordUIMessages

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
PLAYLIST_URL = "https://www.youtube.com/playlist?list=PL123"
VOICE_CHANNEL = 111
TEXT_CHANNEL = 222
STOPPED_HEADER = DiscordUIMessages.SURFACE_STOPPED_HEADER


async def _play(orchestrator, url=URL, actor="alice"):
    return await orchestrator.play(
        url, actor=actor, voice_channel_id=VOICE_CHANNEL, text_channel_id=TEXT_CHANNEL
    )


async def _loop(orchestrator, url=URL, actor="alice"):
    return await orchestrator.loop(
        url, actor=actor, voice_channel_id=VOICE_CHANNEL, text_channel_id=TEXT_CHANNEL
    )


async def _playlist(orchestrator, url=PLAYLIST_URL, actor="alice", progress=None):
    return await orchestrator.playlist(
        url,
        actor=actor,
        voice_channel_id=VOICE_CHANNEL,
        text_channel_id=TEXT_CHANNEL,
        progress=progress,
    )


def _probed_titles(track_source):
    return [c.args[0].display_title for c in track_source.probe.await_args_list]


def _last_rendered(control_surface):
    return control_surface.update.await_args.args[0]


async def _yield_to_tasks(times: int = 5):
    for _ in range(times):
        await asyncio.sleep(0)


def _block_probe(track_source):
    """Make probe wait on an event; returns the event that releases it."""
    release = asyncio.Event()

    async def slow_probe(track):
        await release.wait()
        return StreamDescriptor(track=track, stream_url=f"https://stream.example/{track.id}")

    track_source.probe.side_effect = slow_probe
    return release


# =============================================================================
# CommandOutcome / error message Tests
# =============================================================================


class TestCommandOutcome:
    """Tests for the outcome value object."""

    def test_factories(self):
        """Should build outcomes with the matching status."""
        assert CommandOutcome.ok("a").is_ok
        assert CommandOutcome.declined("b").status is OutcomeStatus.DECLINED
        assert CommandOutcome.failed("c").status is OutcomeStatus.FAILED


class TestPlaylistErrorMessage:
    """Tests for mapping listing failures to user text."""

    def test_exhausted_rate_limit_is_blocked(self):
        """Should report blocking when retries ran out on a rate limit."""
        error = RetriesExhaustedError(PLAYLIST_URL, 4, SourceRateLimited(PLAYLIST_URL))

        assert playlist_error_message(error) == (
            DiscordUIMessages.PLAYLIST_ERROR_PREFIX + DiscordUIMessages.PLAYLIST_ERROR_BLOCKED
        )

    def test_not_found_is_unavailable(self):
        """Should report a private or missing playlist."""
        assert playlist_error_message(SourceNotFound(PLAYLIST_URL)) == (
            DiscordUIMessages.PLAYLIST_ERROR_PREFIX
            + DiscordUIMessages.PLAYLIST_ERROR_UNAVAILABLE
        )

    def test_other_failures_are_invalid(self):
        """Should suggest checking the URL for anything else."""
        assert playlist_error_message(SourceUnavailable(PLAYLIST_URL)) == (
            DiscordUIMessages.PLAYLIST_ERROR_PREFIX + DiscordUIMessages.PLAYLIST_ERROR_INVALID
        )


# =============================================================================
# play / loop Tests
# =============================================================================


class TestPlay:
    """Tests for the play command."""

    def test_registers_track_end_callback(self, orchestrator, transport):
        """Should subscribe to natural track ends on construction."""
        transport.set_on_track_end_callback.assert_called_once_with(orchestrator.on_track_end)

    async def test_play_success(self, orchestrator, transport, control_surface):
        """Should join, start the track and create a fresh control surface."""
        outcome = await _play(orchestrator)

        assert outcome == CommandOutcome.ok(DiscordUIMessages.PLAY_STARTED)
        transport.join.assert_awaited_once_with(VOICE_CHANNEL)
        transport.play.assert_awaited_once()
        assert orchestrator.state.status is PlaybackStatus.PLAYING
        assert orchestrator.state.track.source_url == URL

        control_surface.create.assert_awaited_once()
        model, channel_id = control_surface.create.await_args.args
        assert channel_id == TEXT_CHANNEL
        assert model.header_text.startswith("🎵 **Now Playing:** Single Track")
        assert "🎵 Started a track by alice" in model.content

    async def test_play_fails_after_all_retries(
        self, orchestrator, track_source, transport, control_surface, fake_sleep
    ):
        """Should report unavailable, create no surface and stay idle."""
        track_source.probe.side_effect = SourceRateLimited(URL, "HTTP Error 403: Forbidden")

        outcome = await _play(orchestrator)

        assert outcome == CommandOutcome.failed(DiscordUIMessages.PLAY_FAILED)
        assert track_source.probe.await_count == 3
        assert [c.args[0] for c in fake_sleep.await_args_list] == [2.0, 4.0]
        control_surface.create.assert_not_awaited()
        transport.play.assert_not_awaited()
        assert orchestrator.state.is_idle

    async def test_permanent_failure_not_retried(self, orchestrator, track_source, fake_sleep):
        """Should give up on an unavailable video immediately."""
        track_source.probe.side_effect = SourceUnavailable(URL)

        outcome = await _play(orchestrator)

        assert outcome.status is OutcomeStatus.FAILED
        assert track_source.probe.await_count == 1
        fake_sleep.assert_not_awaited()

    async def test_join_failure(self, orchestrator, track_source, transport):
        """Should report the voice failure without fetching anything."""
        transport.join.return_value = False

        outcome = await _play(orchestrator)

        assert outcome == CommandOutcome.failed(DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)
        track_source.probe.assert_not_awaited()

    async def test_join_transport_error(self, orchestrator, transport):
        """Should treat a transport error while joining as a join failure."""
        transport.join.side_effect = TransportError("no voice")

        outcome = await _play(orchestrator)

        assert outcome.message == DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE

    async def test_transport_play_error_returns_to_idle(self, orchestrator, transport):
        """Should fail the command when the transport refuses the stream."""
        transport.play.side_effect = TransportError("not connected")

        outcome = await _play(orchestrator)

        assert outcome.status is OutcomeStatus.FAILED
        assert orchestrator.state.is_idle

    async def test_new_play_replaces_previous_session(
        self, orchestrator, transport, control_surface
    ):
        """Should stop the previous audio and create a new surface."""
        await _loop(orchestrator)
        await _play(orchestrator, url="https://youtu.be/aaaaaaaaaaa")

        assert transport.stop.await_count == 2
        assert control_surface.create.await_count == 2
        assert orchestrator.loop_target is None
        assert orchestrator.generation == 2


class TestLoop:
    """Tests for the loop command and replay on natural end."""

    async def test_loop_success(self, orchestrator, control_surface):
        """Should set the loop target and show the looping header."""
        outcome = await _loop(orchestrator)

        assert outcome == CommandOutcome.ok(DiscordUIMessages.LOOP_STARTED)
        assert orchestrator.loop_target.source_url == URL
        model = control_surface.create.await_args.args[0]
        assert model.header_text.startswith("🔁 **Looping:** Single Track")

    async def test_n_natural_ends_start_n_plus_one_times(self, orchestrator, track_source):
        """Should re-select the loop target after every natural end."""
        await _loop(orchestrator)

        for playback_id in (1, 2, 3):
            await orchestrator.on_track_end(playback_id)

        assert track_source.probe.await_count == 4
        assert {c.args[0].source_url for c in track_source.probe.await_args_list} == {URL}
        assert orchestrator.state.status is PlaybackStatus.PLAYING

    async def test_loop_fetch_failure_clears_target(self, orchestrator, track_source):
        """Should not keep a loop target whose first fetch failed."""
        track_source.probe.side_effect = SourceUnavailable(URL)

        outcome = await _loop(orchestrator)

        assert outcome.status is OutcomeStatus.FAILED
        assert orchestrator.loop_target is None

    async def test_failed_replay_drops_loop(self, orchestrator, track_source, control_surface):
        """Should leave the loop and show the stopped panel when a replay fails."""
        await _loop(orchestrator)
        track_source.probe.side_effect = SourceUnavailable(URL)

        await orchestrator.on_track_end(1)

        assert orchestrator.loop_target is None
        assert orchestrator.state.is_idle
        assert _last_rendered(control_surface).header_text == STOPPED_HEADER


# =============================================================================
# playlist Tests
# =============================================================================


class TestPlaylist:
    """Tests for the playlist command."""

    async def test_live_item_filtered_and_first_item_played(
        self, orchestrator, playlist_source, track_source, control_surface, make_listing
    ):
        """Should queue four of five items and start with item #1."""
        playlist_source.list.return_value = make_listing(5, overrides={3: {"is_live": True}})
        progress = AsyncMockProgress()

        outcome = await _playlist(orchestrator, progress=progress)

        created = DiscordUIMessages.PLAYLIST_CREATED.format(title="Road Trip", count=4)
        assert outcome == CommandOutcome.ok(created)
        assert len(orchestrator.queue) == 4
        assert _probed_titles(track_source) == ["Song 1"]
        assert orchestrator.state.track.display_title == "Song 1"
        assert progress.messages == [DiscordUIMessages.PLAYLIST_LOADING, created]

        control_surface.create.assert_awaited_once()
        first_model = control_surface.create.await_args.args[0]
        assert first_model.header_text == "🎶 **Road Trip**"
        assert "Loading first song" in first_model.body_text
        assert "🎵 **Now Playing:** Song 1" in _last_rendered(control_surface).body_text

    async def test_playlist_is_shuffled_on_load(self, orchestrator, keep_order_rng):
        """Should shuffle the whole queue once before playing."""
        await _playlist(orchestrator)

        keep_order_rng.shuffle.assert_called_once()
        assert len(keep_order_rng.shuffle.call_args.args[0]) == 5

    async def test_unavailable_item_is_skipped(
        self, orchestrator, track_source, control_surface, fake_sleep
    ):
        """Should announce the unavailable item and continue with the next."""

        def probe(track):
            if track.display_title == "Song 1":
                raise SourceUnavailable(track.source_url)
            return StreamDescriptor(track=track, stream_url="https://stream.example/ok")

        track_source.probe.side_effect = probe

        await _playlist(orchestrator)

        assert _probed_titles(track_source) == ["Song 1", "Song 2"]
        assert orchestrator.state.track.display_title == "Song 2"
        rendered = [c.args[0].body_text for c in control_surface.update.await_args_list]
        assert any("Skipping unavailable:** Song 1" in body for body in rendered)
        fake_sleep.assert_awaited_with(1.0)

    async def test_all_items_fail_finishes_playlist(
        self, orchestrator, track_source, control_surface
    ):
        """Should end idle with the finished panel when every item fails."""
        track_source.probe.side_effect = SourceUnavailable("x")

        outcome = await _playlist(orchestrator)

        assert outcome.is_ok
        assert track_source.probe.await_count == 5
        assert orchestrator.state.is_idle
        assert orchestrator.queue.is_exhausted
        assert _last_rendered(control_surface).body_text == DiscordUIMessages.SURFACE_FINISHED

    async def test_rate_limited_listing_reports_retries(
        self, orchestrator, playlist_source, control_surface, fake_sleep
    ):
        """Should report each retry and fail with the blocked message."""
        playlist_source.list.side_effect = SourceRateLimited(PLAYLIST_URL)
        progress = AsyncMockProgress()

        outcome = await _playlist(orchestrator, progress=progress)

        assert playlist_source.list.await_count == 3
        assert [c.args[0] for c in fake_sleep.await_args_list] == [2.0, 4.0]
        assert progress.messages == [
            DiscordUIMessages.PLAYLIST_LOADING,
            "Loading playlist... (retry 1/3)",
            "Loading playlist... (retry 2/3)",
        ]
        assert outcome == CommandOutcome.failed(
            DiscordUIMessages.PLAYLIST_ERROR_PREFIX + DiscordUIMessages.PLAYLIST_ERROR_BLOCKED
        )
        control_surface.create.assert_not_awaited()

    async def test_private_playlist(self, orchestrator, playlist_source):
        """Should explain that the playlist may be private."""
        playlist_source.list.side_effect = SourceNotFound(PLAYLIST_URL)

        outcome = await _playlist(orchestrator)

        assert outcome.message.endswith(DiscordUIMessages.PLAYLIST_ERROR_UNAVAILABLE)

    async def test_no_playable_items(
        self, orchestrator, playlist_source, track_source, control_surface, make_listing
    ):
        """Should report an empty playlist and start nothing."""
        live = {"is_live": True}
        playlist_source.list.return_value = make_listing(2, overrides={1: live, 2: live})

        outcome = await _playlist(orchestrator)

        assert outcome == CommandOutcome.failed(DiscordUIMessages.PLAYLIST_EMPTY)
        track_source.probe.assert_not_awaited()
        control_surface.create.assert_not_awaited()
        assert not orchestrator.queue.is_loaded

    async def test_natural_end_advances_queue(self, orchestrator, track_source):
        """Should start the next item when the current one ends."""
        await _playlist(orchestrator)

        await orchestrator.on_track_end(1)

        assert _probed_titles(track_source) == ["Song 1", "Song 2"]
        assert orchestrator.queue.position == 2

    async def test_last_item_end_finishes(
        self, orchestrator, control_surface, make_listing, playlist_source
    ):
        """Should show the finished panel after the last item ends."""
        playlist_source.list.return_value = make_listing(1)
        await _playlist(orchestrator)

        await orchestrator.on_track_end(1)

        assert orchestrator.state.is_idle
        assert _last_rendered(control_surface).body_text == DiscordUIMessages.SURFACE_FINISHED


class AsyncMockProgress:
    """Progress callback that records every message it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    async def __call__(self, message: str) -> None:
        self.messages.append(message)


# =============================================================================
# Button Tests
# =============================================================================


class TestSkip:
    """Tests for the skip button."""

    async def test_skip_in_playlist(self, orchestrator, track_source, transport):
        """Should stop the current item and start the next one."""
        await _playlist(orchestrator)

        outcome = await orchestrator.skip(actor="bob")

        assert outcome == CommandOutcome.ok(DiscordUIMessages.ACTION_SKIP)
        assert _probed_titles(track_source) == ["Song 1", "Song 2"]
        assert orchestrator.state.track.display_title == "Song 2"
        assert orchestrator.last_action.kind is ActionKind.SKIP
        assert orchestrator.last_action.actor_name == "bob"

    async def test_late_end_of_skipped_track_ignored(self, orchestrator, track_source):
        """Should not advance again when the skipped track's end arrives."""
        await _playlist(orchestrator)
        await orchestrator.skip(actor="bob")

        await orchestrator.on_track_end(1)

        assert _probed_titles(track_source) == ["Song 1", "Song 2"]

    async def test_skip_without_queue_or_loop_declined(self, orchestrator, control_surface):
        """Should decline and emit no render."""
        await _play(orchestrator)
        control_surface.update.reset_mock()

        outcome = await orchestrator.skip(actor="bob")

        assert outcome == CommandOutcome.declined(DiscordUIMessages.ACTION_SKIP_DECLINED)
        assert orchestrator.last_action.accepted is False
        control_surface.update.assert_not_awaited()

    async def test_skip_loop_ends_loop(self, orchestrator, transport, control_surface):
        """Should leave the loop and show the stopped panel."""
        await _loop(orchestrator)

        outcome = await orchestrator.skip(actor="bob")

        assert outcome.is_ok
        assert orchestrator.loop_target is None
        assert orchestrator.state.is_idle
        assert _last_rendered(control_surface).header_text == STOPPED_HEADER

    async def test_skip_on_last_playlist_item_declined(
        self, orchestrator, playlist_source, make_listing
    ):
        """Should decline when nothing remains after the current item."""
        playlist_source.list.return_value = make_listing(1)
        await _playlist(orchestrator)

        outcome = await orchestrator.skip(actor="bob")

        assert outcome.status is OutcomeStatus.DECLINED


class TestPauseResume:
    """Tests for the pause and resume buttons."""

    async def test_pause_while_idle_declined(self, orchestrator, transport, control_surface):
        """Should not change state, decline and emit no surface update."""
        outcome = await orchestrator.pause(actor="bob")

        assert outcome == CommandOutcome.declined(DiscordUIMessages.ACTION_PAUSE_DECLINED)
        assert orchestrator.state.is_idle
        transport.pause.assert_not_awaited()
        control_surface.update.assert_not_awaited()
        control_surface.create.assert_not_awaited()

    async def test_pause_and_resume(self, orchestrator, transport, control_surface):
        """Should pause and resume the transport and re-render each time."""
        await _play(orchestrator)

        paused = await orchestrator.pause(actor="bob")
        assert paused.is_ok
        assert orchestrator.state.status is PlaybackStatus.PAUSED
        transport.pause.assert_awaited_once()
        assert _last_rendered(control_surface).header_text.startswith(
            DiscordUIMessages.SURFACE_SINGLE_PAUSED_HEADER
        )

        resumed = await orchestrator.resume(actor="bob")
        assert resumed.is_ok
        assert orchestrator.state.status is PlaybackStatus.PLAYING
        transport.resume.assert_awaited_once()
        assert "▶️ Resumed playback by bob" in _last_rendered(control_surface).content

    async def test_resume_while_playing_declined(self, orchestrator):
        """Should decline resume unless paused."""
        await _play(orchestrator)

        outcome = await orchestrator.resume(actor="bob")

        assert outcome.message == DiscordUIMessages.ACTION_RESUME_DECLINED
        assert orchestrator.state.status is PlaybackStatus.PLAYING

    async def test_end_while_paused_advances(self, orchestrator, track_source):
        """Should treat the end of a paused track like any natural end."""
        await _playlist(orchestrator)
        await orchestrator.pause(actor="bob")

        await orchestrator.on_track_end(1)

        assert orchestrator.state.track.display_title == "Song 2"


class TestStop:
    """Tests for the stop button."""

    async def test_stop_clears_everything(self, orchestrator, transport, control_surface):
        """Should go idle with no loop and an empty queue."""
        await _playlist(orchestrator)

        outcome = await orchestrator.stop(actor="bob")

        assert outcome == CommandOutcome.ok(DiscordUIMessages.ACTION_STOP)
        assert orchestrator.state.is_idle
        assert orchestrator.loop_target is None
        assert not orchestrator.queue.is_loaded
        transport.stop.assert_awaited()
        assert _last_rendered(control_surface).header_text == STOPPED_HEADER

    async def test_late_natural_end_after_stop_starts_nothing(self, orchestrator, track_source):
        """Should ignore a track end delivered after stop."""
        await _loop(orchestrator)
        await orchestrator.stop(actor="bob")

        await orchestrator.on_track_end(1)

        assert track_source.probe.await_count == 1
        assert orchestrator.state.is_idle


class TestShuffle:
    """Tests for the shuffle button."""

    async def test_shuffle_without_queue_declined(self, orchestrator, control_surface):
        """Should decline when no playlist is loaded."""
        outcome = await orchestrator.shuffle(actor="bob")

        assert outcome == CommandOutcome.declined(DiscordUIMessages.ACTION_SHUFFLE_DECLINED)
        control_surface.update.assert_not_awaited()

    async def test_shuffle_remaining(self, orchestrator, keep_order_rng, control_surface):
        """Should shuffle what is left and re-render."""
        await _playlist(orchestrator)
        control_surface.update.reset_mock()

        outcome = await orchestrator.shuffle(actor="bob")

        assert outcome == CommandOutcome.ok(DiscordUIMessages.ACTION_SHUFFLE)
        assert keep_order_rng.shuffle.call_count == 2
        assert len(keep_order_rng.shuffle.call_args.args[0]) == 4
        control_surface.update.assert_awaited_once()


# =============================================================================
# Concurrency Tests
# =============================================================================


class TestConcurrency:
    """Tests for stale fetches and the in-flight advance guard."""

    async def test_stale_fetch_discarded_after_stop(
        self, orchestrator, track_source, transport, control_surface
    ):
        """Should not start a track whose fetch finished after stop."""
        release = _block_probe(track_source)
        task = asyncio.create_task(_play(orchestrator))
        await _yield_to_tasks()

        await orchestrator.stop(actor="bob")
        release.set()
        outcome = await task

        assert outcome == CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)
        transport.play.assert_not_awaited()
        control_surface.create.assert_not_awaited()
        assert orchestrator.state.is_idle

    async def test_stop_while_transport_starts_stops_stale_source(
        self, orchestrator, transport, control_surface
    ):
        """Should stop a source that started after stop and stay idle."""
        started = asyncio.Event()

        async def slow_play(stream):
            await started.wait()
            return 1

        transport.play.side_effect = slow_play
        task = asyncio.create_task(_play(orchestrator))
        await _yield_to_tasks()

        await orchestrator.stop(actor="bob")
        stops_before = transport.stop.await_count
        started.set()
        outcome = await task

        assert outcome == CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)
        assert transport.stop.await_count == stops_before + 1
        assert orchestrator.state.is_idle
        control_surface.create.assert_not_awaited()

    async def test_stale_source_does_not_stop_newer_play(self, orchestrator, transport):
        """Should leave a newer session's source playing when an older start completes."""
        first_started = asyncio.Event()
        playback_ids = iter([1, 2])

        async def play(stream):
            playback_id = next(playback_ids)
            if playback_id == 1:
                await first_started.wait()
            return playback_id

        transport.play.side_effect = play
        other_url = "https://www.youtube.com/watch?v=aaaaaaaaaaa"
        first = asyncio.create_task(_play(orchestrator))
        await _yield_to_tasks()

        await _play(orchestrator, url=other_url)
        stops_before = transport.stop.await_count
        first_started.set()
        outcome = await first

        assert outcome.status is OutcomeStatus.DECLINED
        assert transport.stop.await_count == stops_before
        assert orchestrator.state.status is PlaybackStatus.PLAYING
        assert orchestrator.state.track.source_url == other_url

    async def test_play_supersedes_loading_playlist(
        self, orchestrator, playlist_source, track_source, make_listing
    ):
        """Should discard a playlist listing that arrives after a newer play."""
        listing_ready = asyncio.Event()

        async def slow_list(url):
            await listing_ready.wait()
            return make_listing(3)

        playlist_source.list.side_effect = slow_list
        task = asyncio.create_task(_playlist(orchestrator))
        await _yield_to_tasks()

        await _play(orchestrator)
        listing_ready.set()
        outcome = await task

        assert outcome.message == DiscordUIMessages.PLAY_SUPERSEDED
        assert not orchestrator.queue.is_loaded
        assert orchestrator.state.track.source_url == URL

    async def test_skip_during_initial_fetch_declined(self, orchestrator, track_source):
        """Should not allow a skip while the loop target is still loading."""
        release = _block_probe(track_source)
        task = asyncio.create_task(_loop(orchestrator))
        await _yield_to_tasks()

        outcome = await orchestrator.skip(actor="bob")
        release.set()
        await task

        assert outcome.status is OutcomeStatus.DECLINED
        assert orchestrator.loop_target is not None
        assert orchestrator.state.status is PlaybackStatus.PLAYING

    async def test_skip_racing_natural_end_starts_one_track(self, orchestrator, track_source):
        """Should run the advance step once when skip arrives mid-advance."""
        await _playlist(orchestrator)
        release = _block_probe(track_source)

        advance = asyncio.create_task(orchestrator.on_track_end(1))
        await _yield_to_tasks()
        outcome = await orchestrator.skip(actor="bob")
        release.set()
        await advance

        assert outcome.status is OutcomeStatus.DECLINED
        assert _probed_titles(track_source) == ["Song 1", "Song 2"]
        assert orchestrator.state.track.display_title == "Song 2"

    async def test_render_failure_is_swallowed(self, orchestrator, control_surface):
        """Should keep playing when the control surface cannot be updated."""
        await _play(orchestrator)
        control_surface.update.side_effect = SurfaceRenderFailure("message deleted")

        outcome = await orchestrator.pause(actor="bob")

        assert outcome.is_ok
        assert orchestrator.state.status is PlaybackStatus.PAUSED

    async def test_create_failure_is_swallowed(self, orchestrator, control_surface):
        """Should still report success when the panel cannot be posted."""
        control_surface.create.side_effect = SurfaceRenderFailure("no channel")

        outcome = await _play(orchestrator)

        assert outcome.is_ok


@pytest.mark.parametrize("action", ["pause", "resume", "shuffle", "skip"])
async def test_declined_actions_record_actor(orchestrator, action):
    """Should remember who tried an action even when it was declined."""
    await getattr(orchestrator, action)(actor="dave")

    assert orchestrator.last_action.accepted is False
    assert orchestrator.last_action.actor_name == "dave"
