"""Playback orchestrator: turns user commands and transport events into playback.

One ``PlaybackOrchestrator`` owns the whole session: the state machine, the
playlist queue, the loop target, the last recorded action and the control
surface. Only the asyncio event loop thread may call into it.

Two guards keep interleaved commands from corrupting the session:

- Every play, loop, playlist and stop bumps ``generation``. A fetch that
  completes under an older generation is discarded before anything changes.
- The advance step records the generation that owns it, so a skip racing a
  natural end cannot start two tracks.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.playback.entities import PlaybackState, Track
from ...domain.playback.queue import PlaylistQueue
from ...domain.playback.retry import AttemptRecord, RetryPolicy
from ...domain.playback.state_machine import PlaybackStateMachine
from ...domain.playback.surface import ControlSurfaceModel, LastAction, build_control_surface
from ...domain.playback.value_objects import ActionKind, OutcomeStatus
from ...domain.shared.exceptions import (
    EmptyPlaylist,
    InvalidCommandState,
    RetriesExhaustedError,
    SourceError,
    SourceNotFound,
    SourceRateLimited,
    SurfaceRenderFailure,
    TransportError,
)
from ...domain.shared.messages import DiscordUIMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake
from .retry import Sleep, run_with_retry

if TYPE_CHECKING:
    from ..interfaces.audio_source import PlaylistSource, TrackSource
    from ..interfaces.control_surface import ControlSurface
    from ..interfaces.transport import Transport

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], Awaitable[None]]


class CommandOutcome(BaseModel):
    """What a command did, plus the text to show the user who issued it."""

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    message: str

    @classmethod
    def ok(cls, message: str) -> CommandOutcome:
        return cls(status=OutcomeStatus.OK, message=message)

    @classmethod
    def declined(cls, message: str) -> CommandOutcome:
        return cls(status=OutcomeStatus.DECLINED, message=message)

    @classmethod
    def failed(cls, message: str) -> CommandOutcome:
        return cls(status=OutcomeStatus.FAILED, message=message)

    @property
    def is_ok(self) -> bool:
        return self.status is OutcomeStatus.OK


class _FetchResult(Enum):
    STARTED = "started"
    FAILED = "failed"
    STALE = "stale"


class PlaybackOrchestrator:
    """Composes state machine, queue, retry policy, transport and control surface."""

    def __init__(
        self,
        *,
        track_source: TrackSource,
        playlist_source: PlaylistSource,
        transport: Transport,
        control_surface: ControlSurface,
        track_retry_policy: RetryPolicy | None = None,
        playlist_retry_policy: RetryPolicy | None = None,
        skip_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._track_source = track_source
        self._playlist_source = playlist_source
        self._transport = transport
        self._control_surface = control_surface
        self._track_policy = track_retry_policy or RetryPolicy(max_retries=2)
        self._playlist_policy = playlist_retry_policy or RetryPolicy(max_retries=2)
        self._skip_delay = skip_delay
        self._sleep = sleep
        self._rng = rng

        self._machine = PlaybackStateMachine()
        self._queue = PlaylistQueue()
        self._loop_target: Track | None = None
        self._last_action: LastAction | None = None

        self._generation = 0
        self._advance_owner: int | None = None
        self._current_playback_id: int | None = None

        self._transport.set_on_track_end_callback(self.on_track_end)

    # ── Read-only view ────────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._machine.state

    @property
    def queue(self) -> PlaylistQueue:
        return self._queue

    @property
    def loop_target(self) -> Track | None:
        return self._loop_target

    @property
    def last_action(self) -> LastAction | None:
        return self._last_action

    @property
    def generation(self) -> int:
        return self._generation

    # ── Slash commands ────────────────────────────────────────────────

    async def play(
        self,
        url: str,
        *,
        actor: str,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
    ) -> CommandOutcome:
        """Play a single track once."""
        return await self._start_single(
            url,
            actor=actor,
            voice_channel_id=voice_channel_id,
            text_channel_id=text_channel_id,
            loop=False,
        )

    async def loop(
        self,
        url: str,
        *,
        actor: str,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
    ) -> CommandOutcome:
        """Play a single track and replay it every time it ends."""
        return await self._start_single(
            url,
            actor=actor,
            voice_channel_id=voice_channel_id,
            text_channel_id=text_channel_id,
            loop=True,
        )

    async def playlist(
        self,
        url: str,
        *,
        actor: str,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
        progress: ProgressCallback | None = None,
    ) -> CommandOutcome:
        """Load a playlist, shuffle it and play through it, skipping unavailable items.

        ``progress`` receives interim status text (loading, retries, panel created).
        """
        logger.info(LogTemplates.COMMAND_RECEIVED, "playlist", actor)
        generation = await self._begin_session(ActionKind.PLAYLIST, actor)

        if not await self._join(voice_channel_id):
            return CommandOutcome.failed(DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)
        if self._is_stale(generation, url):
            return CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)

        if progress is not None:
            await progress(DiscordUIMessages.PLAYLIST_LOADING)

        async def report_retry(record: AttemptRecord, delay: float) -> None:
            if progress is not None:
                await progress(
                    DiscordUIMessages.PLAYLIST_LOADING_RETRY.format(
                        attempt=record.attempt_count,
                        max_attempts=self._playlist_policy.max_attempts,
                    )
                )

        logger.info(LogTemplates.PLAYLIST_LOADING, url)
        try:
            listing = await run_with_retry(
                lambda: self._playlist_source.list(url),
                self._playlist_policy,
                target=url,
                sleep=self._sleep,
                on_retry=report_retry,
            )
        except SourceError as exc:
            if self._is_stale(generation, url):
                return CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)
            logger.warning(LogTemplates.PLAYLIST_LOAD_FAILED, url, exc)
            return CommandOutcome.failed(playlist_error_message(exc))

        if self._is_stale(generation, url):
            return CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)

        logger.info(LogTemplates.PLAYLIST_LOADED, listing.title, len(listing.entries))
        try:
            count = self._queue.load(listing.entries, listing.title)
        except EmptyPlaylist:
            return CommandOutcome.failed(DiscordUIMessages.PLAYLIST_EMPTY)
        self._queue.shuffle_remaining(self._rng)

        await self._create_surface(text_channel_id)
        created = DiscordUIMessages.PLAYLIST_CREATED.format(title=listing.title, count=count)
        if progress is not None:
            await progress(created)

        await self._advance(generation)
        return CommandOutcome.ok(created)

    # ── Control panel buttons ─────────────────────────────────────────

    async def skip(self, *, actor: str) -> CommandOutcome:
        """End the current track and move on to the next one."""
        can_skip = (
            self._queue.has_remaining or self._loop_target is not None
        ) and self._advance_owner != self._generation
        if not can_skip:
            return self._decline(ActionKind.SKIP, actor)

        generation = self._generation
        self._record(ActionKind.SKIP, actor)
        self._loop_target = None
        self._current_playback_id = None
        if self._machine.status.is_active:
            self._machine.finish()

        await self._transport.stop()
        await self._advance(generation)
        return CommandOutcome.ok(DiscordUIMessages.ACTION_SKIP)

    async def pause(self, *, actor: str) -> CommandOutcome:
        try:
            self._machine.pause()
        except InvalidCommandState:
            return self._decline(ActionKind.PAUSE, actor)

        self._record(ActionKind.PAUSE, actor)
        await self._transport.pause()
        await self._render()
        return CommandOutcome.ok(DiscordUIMessages.ACTION_PAUSE)

    async def resume(self, *, actor: str) -> CommandOutcome:
        try:
            self._machine.resume()
        except InvalidCommandState:
            return self._decline(ActionKind.RESUME, actor)

        self._record(ActionKind.RESUME, actor)
        await self._transport.resume()
        await self._render()
        return CommandOutcome.ok(DiscordUIMessages.ACTION_RESUME)

    async def stop(self, *, actor: str) -> CommandOutcome:
        """Clear the loop and the queue, stop audio and go idle."""
        logger.info(LogTemplates.COMMAND_RECEIVED, "stop", actor)
        await self._begin_session(ActionKind.STOP, actor)
        logger.info(LogTemplates.PLAYBACK_STOPPED)
        await self._render()
        return CommandOutcome.ok(DiscordUIMessages.ACTION_STOP)

    async def shuffle(self, *, actor: str) -> CommandOutcome:
        """Shuffle the not-yet-played part of the playlist."""
        if not self._queue.shuffle_remaining(self._rng):
            return self._decline(ActionKind.SHUFFLE, actor)

        self._record(ActionKind.SHUFFLE, actor)
        await self._render()
        return CommandOutcome.ok(DiscordUIMessages.ACTION_SHUFFLE)

    # ── Transport events ──────────────────────────────────────────────

    async def on_track_end(self, playback_id: int) -> None:
        """Handle a natural end reported by the transport."""
        if playback_id != self._current_playback_id or not self._machine.status.is_active:
            logger.debug(
                LogTemplates.TRACK_END_IGNORED,
                playback_id,
                self._current_playback_id,
                self._machine.state,
            )
            return

        logger.info(LogTemplates.TRACK_ENDED, playback_id)
        self._current_playback_id = None
        self._machine.finish()

        if self._loop_target is None and not self._queue.is_loaded:
            return
        await self._advance(self._generation)

    # ── Internals ─────────────────────────────────────────────────────

    async def _start_single(
        self,
        url: str,
        *,
        actor: str,
        voice_channel_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
        loop: bool,
    ) -> CommandOutcome:
        kind = ActionKind.LOOP if loop else ActionKind.PLAY
        logger.info(LogTemplates.COMMAND_RECEIVED, kind.value, actor)
        generation = await self._begin_session(kind, actor)

        if not await self._join(voice_channel_id):
            return CommandOutcome.failed(DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)
        if self._is_stale(generation, url):
            return CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)

        track = Track.from_url(url)
        if loop:
            self._loop_target = track

        self._advance_owner = generation
        try:
            result = await self._fetch_and_start(track, generation)
        finally:
            self._release_advance(generation)

        if result is _FetchResult.STALE:
            return CommandOutcome.declined(DiscordUIMessages.PLAY_SUPERSEDED)
        if result is _FetchResult.FAILED:
            self._loop_target = None
            return CommandOutcome.failed(DiscordUIMessages.PLAY_FAILED)

        await self._create_surface(text_channel_id)
        if loop:
            return CommandOutcome.ok(DiscordUIMessages.LOOP_STARTED)
        return CommandOutcome.ok(DiscordUIMessages.PLAY_STARTED)

    async def _begin_session(self, kind: ActionKind, actor: str) -> int:
        """Invalidate everything in flight and reset to a clean idle session."""
        self._generation += 1
        generation = self._generation

        self._loop_target = None
        self._queue.clear()
        self._current_playback_id = None
        self._machine.reset()
        self._record(kind, actor)

        await self._transport.stop()
        return generation

    async def _join(self, voice_channel_id: DiscordSnowflake) -> bool:
        try:
            return await self._transport.join(voice_channel_id)
        except TransportError as exc:
            logger.warning(LogTemplates.VOICE_CLIENT_ERROR, exc)
            return False

    async def _fetch_and_start(self, track: Track, generation: int) -> _FetchResult:
        """Buffer ``track``, probe its stream and hand it to the transport."""
        self._machine.start(track)

        try:
            stream = await run_with_retry(
                lambda: self._track_source.probe(track),
                self._track_policy,
                target=track.source_url,
                sleep=self._sleep,
            )
        except SourceError as exc:
            if self._is_stale(generation, track.source_url):
                return _FetchResult.STALE
            logger.warning(LogTemplates.TRACK_FAILED, track.source_url, exc)
            self._machine.fetch_failed()
            return _FetchResult.FAILED

        if self._is_stale(generation, track.source_url):
            return _FetchResult.STALE

        try:
            playback_id = await self._transport.play(stream)
        except TransportError as exc:
            logger.warning(LogTemplates.TRACK_FAILED, track.source_url, exc)
            self._machine.fetch_failed()
            return _FetchResult.FAILED

        if self._is_stale(generation, track.source_url):
            # Playback ids only grow; a newer session's source must keep playing.
            if self._current_playback_id is None or self._current_playback_id < playback_id:
                await self._transport.stop()
            return _FetchResult.STALE

        self._current_playback_id = playback_id
        self._machine.fetch_succeeded()
        logger.info(LogTemplates.TRACK_STARTED, track.display_title)
        return _FetchResult.STARTED

    async def _advance(self, generation: int) -> None:
        """Start whatever plays next: the loop target, or the next playable queue item."""
        if generation != self._generation:
            return
        if self._advance_owner == generation:
            logger.debug(LogTemplates.ADVANCE_ALREADY_IN_FLIGHT, generation)
            return

        self._advance_owner = generation
        try:
            if self._loop_target is not None:
                await self._replay_loop(generation)
            elif self._queue.is_loaded:
                await self._advance_queue(generation)
            else:
                await self._render()
        finally:
            self._release_advance(generation)

    async def _replay_loop(self, generation: int) -> None:
        target = self._loop_target
        logger.debug(LogTemplates.LOOP_REPLAY, target.source_url)

        result = await self._fetch_and_start(target, generation)
        if result is _FetchResult.STALE:
            return
        if result is _FetchResult.FAILED:
            logger.warning(LogTemplates.LOOP_DROPPED, target.source_url)
            self._loop_target = None
        await self._render()

    async def _advance_queue(self, generation: int) -> None:
        while generation == self._generation:
            track = self._queue.advance()
            if track is None:
                logger.info(LogTemplates.QUEUE_EXHAUSTED, self._queue.title)
                await self._render()
                return

            result = await self._fetch_and_start(track, generation)
            if result is _FetchResult.STALE:
                return
            if result is _FetchResult.STARTED:
                await self._render()
                return

            logger.info(
                LogTemplates.TRACK_SKIPPED_UNAVAILABLE,
                track.display_title,
                self._queue.position,
                len(self._queue),
            )
            await self._render(skipped=track)
            await self._sleep(self._skip_delay)

    def _release_advance(self, generation: int) -> None:
        if self._advance_owner == generation:
            self._advance_owner = None

    def _is_stale(self, generation: int, target: str) -> bool:
        if generation == self._generation:
            return False
        logger.info(LogTemplates.STALE_FETCH_DISCARDED, target, generation, self._generation)
        return True

    def _record(self, kind: ActionKind, actor: str) -> None:
        self._last_action = LastAction(kind=kind, accepted=True, actor_name=actor)

    def _decline(self, kind: ActionKind, actor: str) -> CommandOutcome:
        self._last_action = LastAction(kind=kind, accepted=False, actor_name=actor)
        logger.info(
            LogTemplates.COMMAND_DECLINED, kind.value, actor, self._machine.state
        )
        return CommandOutcome.declined(self._last_action.description)

    def _surface_model(self, skipped: Track | None = None) -> ControlSurfaceModel:
        return build_control_surface(
            self._machine.state,
            self._queue,
            self._loop_target,
            self._last_action,
            skipped=skipped,
        )

    async def _create_surface(self, channel_id: DiscordSnowflake) -> None:
        try:
            await self._control_surface.create(self._surface_model(), channel_id)
        except SurfaceRenderFailure as exc:
            logger.warning(LogTemplates.SURFACE_RENDER_FAILED, exc)

    async def _render(self, skipped: Track | None = None) -> None:
        try:
            await self._control_surface.update(self._surface_model(skipped))
        except SurfaceRenderFailure as exc:
            logger.warning(LogTemplates.SURFACE_RENDER_FAILED, exc)


def playlist_error_message(error: SourceError) -> str:
    """Map a playlist listing failure to the text shown to the user."""
    if isinstance(error, RetriesExhaustedError):
        cause = error.last_error
    else:
        cause = error

    if isinstance(cause, SourceRateLimited):
        reason = DiscordUIMessages.PLAYLIST_ERROR_BLOCKED
    elif isinstance(cause, SourceNotFound):
        reason = DiscordUIMessages.PLAYLIST_ERROR_UNAVAILABLE
    else:
        reason = DiscordUIMessages.PLAYLIST_ERROR_INVALID
    return DiscordUIMessages.PLAYLIST_ERROR_PREFIX + reason
