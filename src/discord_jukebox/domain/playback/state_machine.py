"""Playback state machine: the single source of truth for what is happening now."""

from __future__ import annotations

import logging

from discord_jukebox.domain.playback.entities import PlaybackState, Track
from discord_jukebox.domain.playback.value_objects import PlaybackStatus
from discord_jukebox.domain.shared.exceptions import InvalidCommandState
from discord_jukebox.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class PlaybackStateMachine:
    """Holds the current ``PlaybackState`` and enforces its legal transitions.

    Every transition other than ``reset`` is checked against the current status
    and raises ``InvalidCommandState`` when it does not apply. The state is
    never left half-changed: a rejected transition leaves it untouched.
    """

    def __init__(self) -> None:
        self._state = PlaybackState.idle()

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def status(self) -> PlaybackStatus:
        return self._state.status

    @property
    def track(self) -> Track | None:
        return self._state.track

    def start(self, track: Track) -> PlaybackState:
        """Idle -> Buffering(track)."""
        self._require("start", PlaybackStatus.IDLE)
        return self._set(PlaybackState(status=PlaybackStatus.BUFFERING, track=track))

    def fetch_succeeded(self) -> PlaybackState:
        """Buffering(track) -> Playing(track)."""
        self._require("fetch_succeeded", PlaybackStatus.BUFFERING)
        return self._set(PlaybackState(status=PlaybackStatus.PLAYING, track=self._state.track))

    def fetch_failed(self) -> PlaybackState:
        """Buffering(track) -> Idle."""
        self._require("fetch_failed", PlaybackStatus.BUFFERING)
        return self._set(PlaybackState.idle())

    def pause(self) -> PlaybackState:
        """Playing(track) -> Paused(track)."""
        self._require("pause", PlaybackStatus.PLAYING)
        return self._set(PlaybackState(status=PlaybackStatus.PAUSED, track=self._state.track))

    def resume(self) -> PlaybackState:
        """Paused(track) -> Playing(track)."""
        self._require("resume", PlaybackStatus.PAUSED)
        return self._set(PlaybackState(status=PlaybackStatus.PLAYING, track=self._state.track))

    def finish(self) -> PlaybackState:
        """Playing | Paused -> Idle, on natural end or skip."""
        self._require("finish", PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)
        return self._set(PlaybackState.idle())

    def reset(self) -> PlaybackState:
        """Force Idle from any state."""
        return self._set(PlaybackState.idle())

    def _require(self, operation: str, *allowed: PlaybackStatus) -> None:
        if self._state.status not in allowed:
            logger.debug(LogTemplates.STATE_TRANSITION_REJECTED, operation, self._state)
            raise InvalidCommandState(operation, self._state.status.value)

    def _set(self, new_state: PlaybackState) -> PlaybackState:
        if new_state != self._state:
            logger.debug(LogTemplates.STATE_TRANSITION, self._state, new_state)
        self._state = new_state
        return new_state
