"""
Playback Bounded Context

Domain logic for the single playback session: what plays now, what plays
next, when to retry, and what the control panel shows.
"""

from discord_jukebox.domain.playback.entities import (
    PlaybackState,
    PlaylistEntry,
    PlaylistListing,
    StreamDescriptor,
    Track,
)
from discord_jukebox.domain.playback.queue import PlaylistQueue
from discord_jukebox.domain.playback.retry import AttemptRecord, RetryDecision, RetryPolicy
from discord_jukebox.domain.playback.state_machine import PlaybackStateMachine
from discord_jukebox.domain.playback.surface import (
    ControlSurfaceModel,
    LastAction,
    build_control_surface,
)
from discord_jukebox.domain.playback.value_objects import (
    ActionKind,
    FailureKind,
    OutcomeStatus,
    PlaybackStatus,
    TrackId,
)

__all__ = [
    # Entities
    "Track",
    "PlaylistEntry",
    "PlaylistListing",
    "StreamDescriptor",
    "PlaybackState",
    "PlaylistQueue",
    # Value Objects
    "TrackId",
    "PlaybackStatus",
    "FailureKind",
    "ActionKind",
    "OutcomeStatus",
    # Services
    "PlaybackStateMachine",
    "RetryPolicy",
    "RetryDecision",
    "AttemptRecord",
    # Control surface
    "ControlSurfaceModel",
    "LastAction",
    "build_control_surface",
]
